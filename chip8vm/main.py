import argparse
import logging
import random
import sys

import pygame

from chip8vm.emulator import Emulator
from chip8vm.exception import Chip8Exception
from chip8vm.window import Window

logger = logging.getLogger(__name__)

# A simple timer event used for the delay and sound timers
TIMER = pygame.USEREVENT + 1
# Delay timer decrement interval (in ms)
DELAY_INTERVAL = 17
# Key that closes the emulator
QUIT_KEY = pygame.K_q

LOG_FORMAT = "[%(levelname)s]:  %(message)s"

# Sets which keys on the keyboard map to the Chip 8 keys
KEY_MAPPINGS = {
    pygame.K_KP0: 0x0,
    pygame.K_KP1: 0x1,
    pygame.K_KP2: 0x2,
    pygame.K_KP3: 0x3,
    pygame.K_KP4: 0x4,
    pygame.K_KP5: 0x5,
    pygame.K_KP6: 0x6,
    pygame.K_KP7: 0x7,
    pygame.K_KP8: 0x8,
    pygame.K_KP9: 0x9,
    pygame.K_a: 0xA,
    pygame.K_b: 0xB,
    pygame.K_c: 0xC,
    pygame.K_d: 0xD,
    pygame.K_e: 0xE,
    pygame.K_f: 0xF,
}


def handle_events(emulator, window, events):
    """
    Pass timer ticks and key changes from a batch of pygame events on to
    the emulator.

    :param emulator: the running Emulator
    :param window: the Window to redraw on every timer tick
    :param events: the events drained from the pygame queue
    :return: False once the user has asked to quit
    """
    running = True
    for event in events:
        if event.type == TIMER:
            emulator.tick_timers()
            window.render(emulator.get_display())
        elif event.type == pygame.QUIT:
            running = False
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            pressed = event.type == pygame.KEYDOWN
            if pressed and event.key == QUIT_KEY:
                running = False
            elif event.key in KEY_MAPPINGS:
                emulator.set_key_press(KEY_MAPPINGS[event.key], pressed)
    return running


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    with open(args.rom, 'rb') as rom_file:
        rom = rom_file.read()

    rng = random.Random(args.seed) if args.seed is not None else None
    emulator = Emulator(rng=rng, shift_uses_vy=args.shift_vy)
    try:
        emulator.load_rom(rom)
    except Chip8Exception as error:
        logger.error("%s\n%s", error, emulator)
        return 1
    logger.info("Loaded %s (%d bytes)", args.rom, len(rom))

    pygame.init()
    window = Window(ratio=args.scale)
    window.init_display()
    pygame.time.set_timer(TIMER, DELAY_INTERVAL)
    running = True

    try:
        while running:
            pygame.time.wait(args.op_delay)
            emulator.cycle()
            running = handle_events(emulator, window, pygame.event.get())
    except Chip8Exception as error:
        logger.error("%s\n%s", error, emulator)
        return 1
    finally:
        window.close()
        pygame.quit()
    return 0


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator."
    )
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is 5)", type=int, default=5, dest="scale")
    parser.add_argument(
        "-d", help="sets the CPU operation to take at least "
                   "the specified number of milliseconds to execute (default is 1)",
        type=int, default=1, dest="op_delay")
    parser.add_argument(
        "--shift-vy", help="shift Vy into Vx on 8xy6 and 8xyE, as the "
                           "original COSMAC VIP interpreter did",
        action="store_true", dest="shift_vy")
    parser.add_argument(
        "--seed", help="seed for the random number generator used by Cxnn",
        type=int, default=None, dest="seed")
    parser.add_argument(
        "-v", help="log every call, return and key wait",
        action="store_true", dest="verbose")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT, stream=sys.stdout)
    return screen_cpu_connector(args)


if __name__ == "__main__":
    sys.exit(main())
