import logging

from chip8vm.cpu import CPU
from chip8vm.memory import Memory
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)


class Emulator(object):
    """
    Ties a CPU, its Memory and its Screen together, and exposes the handful
    of operations a host needs to run a Chip 8 program:

        * load_rom()      - load the program bytes
        * cycle()         - execute one instruction
        * tick_timers()   - decrement the timers, 60 times a second
        * set_key_press() - report a key going up or down
        * get_display()   - read the pixels to render

    The instruction clock and the timer clock are independent; the host
    drives both.
    """
    def __init__(self, rng=None, shift_uses_vy=False):
        """
        :param rng: the random source used by Cxnn, see CPU
        :param shift_uses_vy: selects the Vy-shifting variant of 8xy6/8xyE
        """
        self.memory = Memory()
        self.screen = Screen()
        self.cpu = CPU(self.memory, self.screen, rng=rng, shift_uses_vy=shift_uses_vy)

    def __str__(self):
        return str(self.cpu)

    @property
    def awaiting_key(self):
        return self.cpu.awaiting_key

    @property
    def sound_active(self):
        return self.cpu.sound_active

    def load_rom(self, rom):
        self.memory.load(rom)

    def cycle(self):
        return self.cpu.cpu_cycle()

    def tick_timers(self):
        self.cpu.cpu_decrement_timers()

    def set_key_press(self, key, pressed):
        self.cpu.cpu_set_key_press(key, pressed)

    def get_display(self):
        return self.screen.snapshot()

    def reset(self):
        """
        Put the whole machine back into its power-on state. Any loaded
        program is wiped along with the rest of memory.
        """
        self.memory.reset()
        self.screen.clear()
        self.cpu.cpu_reset()
        logger.debug("Emulator reset")
