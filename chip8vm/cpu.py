import logging
import random
from collections import namedtuple

from chip8vm import instructions
from chip8vm.exception import InvalidKeyException, StackOverflow, StackUnderflow
from chip8vm.memory import FONT_SPRITE_SIZE, PROGRAM_START
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# The register used for the carry, borrow and collision flags
FLAG_REGISTER = 0xF

# The number of return addresses the call stack can hold
STACK_SIZE = 16

# The number of keys on the Chip 8 key pad (0 - F)
NUM_KEYS = 0x10

# Every sprite row is one byte, so sprites are always 8 pixels wide
SPRITE_WIDTH = 8

# The CPU is either running, or waiting on Fx0A for a key to be pressed. The
# waiting state records the register the key will be stored in.
STATE_RUNNING = 'running'
AwaitingKey = namedtuple('AwaitingKey', 'register')


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    To summarize these sources, the Chip 8 has:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x 16-bit stack pointer (SP) into a 16 entry call stack
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the carry, borrow and
       collision flags, so its value does not survive those instructions.

    The CPU does not run on its own. The host calls cpu_cycle() once per
    instruction and cpu_decrement_timers() 60 times a second.
    """
    def __init__(self, memory, screen, rng=None, shift_uses_vy=False):
        """
        Initialize the Chip8 CPU.

        :param memory: the Memory to fetch instructions and data from
        :param screen: the Screen to draw sprites on
        :param rng: the random source for Cxnn, anything with a randint()
            method like random.Random. Defaults to a fresh random.Random.
        :param shift_uses_vy: when True, 8xy6 and 8xyE shift Vy into Vx as
            the original COSMAC VIP did, instead of shifting Vx in place
        """
        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. The timers are loaded with a value
        # and then decremented 60 times per second.
        self.cpu_timers = {
            'delay': 0,
            'sound': 0,
        }

        # Defines the general purpose, index, stack pointer and program
        # counter registers.
        self.cpu_registers = {
            'v': [],
            'index': 0,
            'sp': 0,
            'pc': 0,
        }
        self.cpu_stack = []
        self.cpu_keys = []
        self.cpu_state = STATE_RUNNING

        # Every decoded instruction type maps to the method that executes it
        self.cpu_operation_lookup = {
            instructions.NoOperation: self.cpu_no_operation,                   # 0000 - NOP
            instructions.ClearScreen: self.cpu_clear_screen,                   # 00E0 - CLS
            instructions.Return: self.cpu_return_from_subroutine,              # 00EE - RTS
            instructions.Jump: self.cpu_jump_to_address,                       # 1nnn - JUMP nnn
            instructions.Call: self.cpu_jump_to_subroutine,                    # 2nnn - CALL nnn
            instructions.SkipIfEqualValue: self.cpu_skip_if_reg_equal_val,     # 3snn - SKE  Vs, nn
            instructions.SkipIfNotEqualValue: self.cpu_skip_if_reg_not_equal_val,  # 4snn - SKNE Vs, nn
            instructions.SkipIfEqualRegister: self.cpu_skip_if_reg_equal_reg,  # 5st0 - SKE  Vs, Vt
            instructions.LoadValue: self.cpu_move_value_to_reg,                # 6snn - LOAD Vs, nn
            instructions.AddValue: self.cpu_add_value_to_reg,                  # 7snn - ADD  Vs, nn
            instructions.MoveRegister: self.cpu_move_reg_into_reg,             # 8st0 - LOAD Vs, Vt
            instructions.LogicalOr: self.cpu_logical_or,                       # 8st1 - OR   Vs, Vt
            instructions.LogicalAnd: self.cpu_logical_and,                     # 8st2 - AND  Vs, Vt
            instructions.ExclusiveOr: self.cpu_exclusive_or,                   # 8st3 - XOR  Vs, Vt
            instructions.AddRegister: self.cpu_add_reg_to_reg,                 # 8st4 - ADD  Vs, Vt
            instructions.SubtractRegister: self.cpu_subtract_reg_from_reg,     # 8st5 - SUB  Vs, Vt
            instructions.ShiftRight: self.cpu_right_shift_reg,                 # 8st6 - SHR  Vs
            instructions.SubtractFromRegister: self.cpu_subtract_reg_from_reg1,  # 8st7 - SUBN Vs, Vt
            instructions.ShiftLeft: self.cpu_left_shift_reg,                   # 8stE - SHL  Vs
            instructions.SkipIfNotEqualRegister: self.cpu_skip_if_reg_not_equal_reg,  # 9st0 - SKNE Vs, Vt
            instructions.LoadIndex: self.cpu_load_index_reg_with_value,        # Annn - LOAD I, nnn
            instructions.JumpWithOffset: self.cpu_jump_to_value_plus_reg,      # Bnnn - JUMP V0 + nnn
            instructions.Random: self.cpu_generate_random_number,              # Ctnn - RAND Vt, nn
            instructions.DrawSprite: self.cpu_draw_sprite,                     # Dstn - DRAW Vs, Vt, n
            instructions.SkipIfKeyPressed: self.cpu_skip_if_key_pressed,       # Es9E - SKPR Vs
            instructions.SkipIfKeyNotPressed: self.cpu_skip_if_key_not_pressed,  # EsA1 - SKUP Vs
            instructions.LoadDelayTimer: self.cpu_move_delay_timer_into_reg,   # Ft07 - LOAD Vt, DELAY
            instructions.WaitForKey: self.cpu_wait_for_keypress,               # Ft0A - KEYD Vt
            instructions.SetDelayTimer: self.cpu_move_reg_into_delay_timer,    # Fs15 - LOAD DELAY, Vs
            instructions.SetSoundTimer: self.cpu_move_reg_into_sound_timer,    # Fs18 - LOAD SOUND, Vs
            instructions.AddToIndex: self.cpu_add_reg_into_index,              # Fs1E - ADD  I, Vs
            instructions.LoadFontSprite: self.cpu_load_index_with_reg_sprite,  # Fs29 - LOAD I, Vs
            instructions.StoreBCD: self.cpu_store_bcd_in_memory,               # Fs33 - BCD
            instructions.StoreRegisters: self.cpu_store_regs_in_memory,        # Fs55 - STOR [I], Vs
            instructions.LoadRegisters: self.cpu_read_regs_from_memory,        # Fs65 - LOAD Vs, [I]
        }
        self.cpu_operand = 0
        self.cpu_memory = memory
        self.cpu_screen = screen
        self.cpu_random = rng if rng is not None else random.Random()
        self.cpu_shift_uses_vy = shift_uses_vy
        self.cpu_reset()

    def __str__(self):
        val = 'PC: {:4X}  OP: {:4X}\n'.format(
            self.cpu_registers['pc'] - 2, self.cpu_operand)
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'I: {:4X}\n'.format(self.cpu_registers['index'])
        val += 'SP: {:X}  DT: {:2X}  ST: {:2X}\n'.format(
            self.cpu_registers['sp'], self.cpu_timers['delay'], self.cpu_timers['sound'])
        return val

    @property
    def awaiting_key(self):
        return self.cpu_state != STATE_RUNNING

    @property
    def sound_active(self):
        return self.cpu_timers['sound'] > 0

    def cpu_cycle(self):
        """
        Run a single cycle. Normally this fetches and executes the next
        instruction. While the CPU is waiting for a key (Fx0A) no
        instruction is fetched; the key pad is polled instead.

        :return: the operand executed, or None if the CPU is still waiting
        """
        if self.cpu_state != STATE_RUNNING:
            self.cpu_poll_waiting_key()
            return None
        return self.cpu_execute_instruction()

    def cpu_execute_instruction(self, cpu_operator_param=None):
        """
        Execute the next instruction pointed to by the program counter.
        For testing purposes, pass the operand directly to the
        function. When the operand is not passed directly to the
        function, the program counter is increased by 2.

        :param cpu_operator_param: the operand to execute
        :return: returns the operand executed
        """
        if cpu_operator_param is not None:
            self.cpu_operand = cpu_operator_param
        else:
            self.cpu_operand = self.cpu_memory.fetch_instruction(self.cpu_registers['pc'])
            self.cpu_registers['pc'] += 2
        instruction = instructions.decode(self.cpu_operand)
        self.cpu_operation_lookup[type(instruction)](instruction)
        return self.cpu_operand

    def cpu_no_operation(self, instruction):
        pass

    def cpu_clear_screen(self, instruction):
        self.cpu_screen.clear()

    def cpu_return_from_subroutine(self, instruction):
        """
        00EE - RTS

        Return from subroutine. Pop the return address off of the stack and
        continue execution from there.
        """
        if self.cpu_registers['sp'] == 0:
            raise StackUnderflow()
        self.cpu_registers['sp'] -= 1
        self.cpu_registers['pc'] = self.cpu_stack[self.cpu_registers['sp']]
        logger.debug("Return to %03X", self.cpu_registers['pc'])

    def cpu_jump_to_address(self, instruction):
        """
        1nnn - JUMP nnn

        Jump to address.
        """
        self.cpu_registers['pc'] = instruction.address

    def cpu_jump_to_subroutine(self, instruction):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter on the stack,
        which already points past the CALL, then jump to the address.
        """
        if self.cpu_registers['sp'] == STACK_SIZE:
            raise StackOverflow(instruction.address)
        logger.debug("Call %03X from %03X", instruction.address, self.cpu_registers['pc'] - 2)
        self.cpu_stack[self.cpu_registers['sp']] = self.cpu_registers['pc']
        self.cpu_registers['sp'] += 1
        self.cpu_registers['pc'] = instruction.address

    def cpu_skip_instruction(self):
        self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_equal_val(self, instruction):
        """
        3snn - SKE Vs, nn

        Skip if register contents equal to constant value. The program counter
        is updated to skip the next instruction by advancing it by 2 bytes.
        """
        if self.cpu_registers['v'][instruction.x] == instruction.value:
            self.cpu_skip_instruction()

    def cpu_skip_if_reg_not_equal_val(self, instruction):
        """
        4snn - SKNE Vs, nn

        Skip if register contents not equal to constant value.
        """
        if self.cpu_registers['v'][instruction.x] != instruction.value:
            self.cpu_skip_instruction()

    def cpu_skip_if_reg_equal_reg(self, instruction):
        """
        5st0 - SKE Vs, Vt

        Skip if source register is equal to target register.
        """
        if self.cpu_registers['v'][instruction.x] == self.cpu_registers['v'][instruction.y]:
            self.cpu_skip_instruction()

    def cpu_move_value_to_reg(self, instruction):
        """
        6snn - LOAD Vs, nn

        Move the constant value into the specified register.
        """
        self.cpu_registers['v'][instruction.x] = instruction.value

    def cpu_add_value_to_reg(self, instruction):
        """
        7snn - ADD Vs, nn

        Add the constant value to the specified register. The result wraps
        around at 256 and the carry flag is left alone.
        """
        temp = self.cpu_registers['v'][instruction.x] + instruction.value
        self.cpu_registers['v'][instruction.x] = temp & 0xFF

    def cpu_move_reg_into_reg(self, instruction):
        """
        8st0 - LOAD Vs, Vt

        Move the value of the source register into the target register.
        """
        self.cpu_registers['v'][instruction.x] = self.cpu_registers['v'][instruction.y]

    def cpu_logical_or(self, instruction):
        self.cpu_registers['v'][instruction.x] |= self.cpu_registers['v'][instruction.y]

    def cpu_logical_and(self, instruction):
        self.cpu_registers['v'][instruction.x] &= self.cpu_registers['v'][instruction.y]

    def cpu_exclusive_or(self, instruction):
        self.cpu_registers['v'][instruction.x] ^= self.cpu_registers['v'][instruction.y]

    def cpu_add_reg_to_reg(self, instruction):
        """
        8st4 - ADD  Vs, Vt

        Add the value in the source register to the value in the target
        register, and store the result in the target register. If a carry is
        generated, set a carry flag in register VF.
        """
        temp = self.cpu_registers['v'][instruction.x] + self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][instruction.x] = temp & 0xFF
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if temp > 0xFF else 0

    def cpu_subtract_reg_from_reg(self, instruction):
        """
        8st5 - SUB  Vs, Vt

        Subtract the value in the source register from the value in the
        target register, and store the result in the target register. If a
        borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target_reg = self.cpu_registers['v'][instruction.x]
        cpu_source_reg = self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][instruction.x] = (cpu_target_reg - cpu_source_reg) & 0xFF
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_target_reg >= cpu_source_reg else 0

    def cpu_shift_source(self, instruction):
        if self.cpu_shift_uses_vy:
            return self.cpu_registers['v'][instruction.y]
        return self.cpu_registers['v'][instruction.x]

    def cpu_right_shift_reg(self, instruction):
        """
        8st6 - SHR  Vs

        Shift the bits in the specified register 1 bit to the right. Bit
        0 will be shifted into register vf. When shift_uses_vy is set, the
        target register is shifted into the source register instead.
        """
        cpu_value = self.cpu_shift_source(instruction)
        self.cpu_registers['v'][FLAG_REGISTER] = cpu_value & 0x1
        self.cpu_registers['v'][instruction.x] = cpu_value >> 1

    def cpu_subtract_reg_from_reg1(self, instruction):
        """
        8st7 - SUBN Vs, Vt

        Subtract the value in the target register from the value in the
        source register, and store the result in the target register. If a
        borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target_reg = self.cpu_registers['v'][instruction.x]
        cpu_source_reg = self.cpu_registers['v'][instruction.y]
        self.cpu_registers['v'][instruction.x] = (cpu_source_reg - cpu_target_reg) & 0xFF
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_source_reg >= cpu_target_reg else 0

    def cpu_left_shift_reg(self, instruction):
        """
        8stE - SHL  Vs

        Shift the bits in the specified register 1 bit to the left. Bit
        7 will be shifted into register vf.
        """
        cpu_value = self.cpu_shift_source(instruction)
        self.cpu_registers['v'][FLAG_REGISTER] = (cpu_value >> 7) & 0x1
        self.cpu_registers['v'][instruction.x] = (cpu_value << 1) & 0xFF

    def cpu_skip_if_reg_not_equal_reg(self, instruction):
        """
        9st0 - SKNE Vs, Vt

        Skip if source register is not equal to target register.
        """
        if self.cpu_registers['v'][instruction.x] != self.cpu_registers['v'][instruction.y]:
            self.cpu_skip_instruction()

    def cpu_load_index_reg_with_value(self, instruction):
        self.cpu_registers['index'] = instruction.address

    def cpu_jump_to_value_plus_reg(self, instruction):
        """
        Bnnn - JUMP V0 + nnn

        Load the program counter with the address plus the value of V0.
        """
        self.cpu_registers['pc'] = (instruction.address + self.cpu_registers['v'][0]) & 0xFFFF

    def cpu_generate_random_number(self, instruction):
        """
        Ctnn - RAND Vt, nn

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register.
        """
        self.cpu_registers['v'][instruction.x] = instruction.value & self.cpu_random.randint(0, 255)

    def cpu_draw_sprite(self, instruction):
        """
        Dxyn - DRAW x, y, num_bytes

        Draws the sprite pointed to in the index register at the specified
        x and y coordinates. Drawing is done via an XOR routine, meaning that
        if the target pixel is already turned on, and a pixel is set to be
        turned on at that same location via the draw, then the pixel is turned
        off. The routine will wrap the pixels if they are drawn off the edge
        of the screen. Each sprite is 8 bits (1 byte) wide. The num_bytes
        parameter sets how tall the sprite is. Consecutive bytes in the memory
        pointed to by the index register make up the bytes of the sprite. Each
        bit in the sprite byte determines whether a pixel is turned on (1) or
        left alone (0). For example, assume that the index register pointed
        to the following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'. The
        x and y operands tell which registers contain the x and y
        coordinates for the sprite. If drawing any pixel of the sprite causes
        a lit pixel to be turned off, then VF will be set to 1, otherwise 0.
        """
        cpu_x_pos = self.cpu_registers['v'][instruction.x]
        cpu_y_pos = self.cpu_registers['v'][instruction.y]
        cpu_sprite = self.cpu_memory.read_block(self.cpu_registers['index'], instruction.n)
        cpu_collision = 0

        for cpu_y_index, cpu_color_byte in enumerate(cpu_sprite):
            for cpu_x_index in range(SPRITE_WIDTH):
                if not cpu_color_byte & (0x80 >> cpu_x_index):
                    continue
                cpu_pixel = Screen.index_of(cpu_x_pos + cpu_x_index, cpu_y_pos + cpu_y_index)
                if self.cpu_screen.xor_pixel(cpu_pixel):
                    cpu_collision = 1

        self.cpu_registers['v'][FLAG_REGISTER] = cpu_collision

    def cpu_key_in_register(self, register):
        cpu_key = self.cpu_registers['v'][register]
        if cpu_key >= NUM_KEYS:
            raise InvalidKeyException(cpu_key)
        return cpu_key

    def cpu_skip_if_key_pressed(self, instruction):
        """
        Es9E - SKPR Vs

        Skip the next instruction if the key specified in the source register
        is pressed.
        """
        if self.cpu_keys[self.cpu_key_in_register(instruction.x)]:
            self.cpu_skip_instruction()

    def cpu_skip_if_key_not_pressed(self, instruction):
        """
        EsA1 - SKUP Vs

        Skip the next instruction if the key specified in the source register
        is NOT pressed.
        """
        if not self.cpu_keys[self.cpu_key_in_register(instruction.x)]:
            self.cpu_skip_instruction()

    def cpu_move_delay_timer_into_reg(self, instruction):
        self.cpu_registers['v'][instruction.x] = self.cpu_timers['delay']

    def cpu_lowest_pressed_key(self):
        for cpu_keyval, cpu_pressed in enumerate(self.cpu_keys):
            if cpu_pressed:
                return cpu_keyval
        return None

    def cpu_wait_for_keypress(self, instruction):
        """
        Ft0A - KEYD Vt

        Stop execution until a key is pressed. Move the value of the key
        pressed into the specified register. If several keys are down, the
        lowest one wins.

        When no key is down the program counter is moved back onto this
        instruction and the CPU enters the AwaitingKey state. Nothing is
        fetched in that state; each cycle polls the key pad until a key is
        pressed, which completes the instruction.
        """
        cpu_key = self.cpu_lowest_pressed_key()
        if cpu_key is not None:
            self.cpu_registers['v'][instruction.x] = cpu_key
            return
        self.cpu_registers['pc'] -= 2
        self.cpu_state = AwaitingKey(instruction.x)
        logger.debug("Waiting for a key press into V%X", instruction.x)

    def cpu_poll_waiting_key(self):
        """
        Check the key pad while in the AwaitingKey state. When a key is down,
        store it, step past the waiting instruction and resume running.
        """
        cpu_key = self.cpu_lowest_pressed_key()
        if cpu_key is None:
            return
        self.cpu_registers['v'][self.cpu_state.register] = cpu_key
        self.cpu_registers['pc'] += 2
        logger.debug("Key %X pressed, stored in V%X", cpu_key, self.cpu_state.register)
        self.cpu_state = STATE_RUNNING

    def cpu_move_reg_into_delay_timer(self, instruction):
        self.cpu_timers['delay'] = self.cpu_registers['v'][instruction.x]

    def cpu_move_reg_into_sound_timer(self, instruction):
        """
        Fs18 - LOAD SOUND, Vs

        Move the value stored in the specified source register into the sound
        timer. The host should sound its beeper while the timer is non-zero.
        """
        self.cpu_timers['sound'] = self.cpu_registers['v'][instruction.x]
        if self.cpu_timers['sound']:
            logger.debug("Sound timer started at %d", self.cpu_timers['sound'])

    def cpu_add_reg_into_index(self, instruction):
        """
        Fs1E - ADD  I, Vs

        Add the value of the register into the index register value. The
        index register is 16 bits wide and wraps around.
        """
        temp = self.cpu_registers['index'] + self.cpu_registers['v'][instruction.x]
        self.cpu_registers['index'] = temp & 0xFFFF

    def cpu_load_index_with_reg_sprite(self, instruction):
        """
        Fs29 - LOAD I, Vs

        Load the index with the sprite indicated in the source register. All
        sprites are 5 bytes long, so the location of the specified sprite
        is its index multiplied by 5.
        """
        self.cpu_registers['index'] = self.cpu_registers['v'][instruction.x] * FONT_SPRITE_SIZE

    def cpu_store_bcd_in_memory(self, instruction):
        """
        Fs33 - BCD

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> memory[index]
            tens       -> memory[index + 1]
            ones       -> memory[index + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> memory[index]
             2 -> memory[index + 1]
             3 -> memory[index + 2]
        """
        cpu_bcd_value = self.cpu_registers['v'][instruction.x]
        self.cpu_memory.write_block(
            self.cpu_registers['index'],
            (cpu_bcd_value // 100, (cpu_bcd_value // 10) % 10, cpu_bcd_value % 10))

    def cpu_store_regs_in_memory(self, instruction):
        """
        Fs55 - STOR [I], Vs

        Store the V registers V0 through Vs in the memory pointed to by the
        index register. The index register itself is left unchanged.
        """
        self.cpu_memory.write_block(
            self.cpu_registers['index'], self.cpu_registers['v'][:instruction.x + 1])

    def cpu_read_regs_from_memory(self, instruction):
        """
        Fs65 - LOAD Vs, [I]

        Read the V registers V0 through Vs from the memory pointed to by the
        index register. The index register itself is left unchanged.
        """
        cpu_values = self.cpu_memory.read_block(self.cpu_registers['index'], instruction.x + 1)
        self.cpu_registers['v'][:instruction.x + 1] = list(cpu_values)

    def cpu_set_key_press(self, key, pressed):
        """
        Record the state of one key on the key pad.

        :param key: the key, 0 - F
        :param pressed: True if the key is down
        """
        if not 0 <= key < NUM_KEYS:
            raise InvalidKeyException(key)
        self.cpu_keys[key] = bool(pressed)

    def cpu_reset(self):
        """
        Reset the CPU by blanking out all registers, timers and keys, and
        reseting the stack pointer and program counter to their starting
        values.
        """
        self.cpu_registers['v'] = [0] * NUM_REGISTERS
        self.cpu_registers['pc'] = PROGRAM_START
        self.cpu_registers['sp'] = 0
        self.cpu_registers['index'] = 0
        self.cpu_stack = [0] * STACK_SIZE
        self.cpu_keys = [False] * NUM_KEYS
        self.cpu_state = STATE_RUNNING
        self.cpu_operand = 0
        self.cpu_timers['delay'] = 0
        self.cpu_timers['sound'] = 0

    def cpu_decrement_timers(self):
        """
        Decrement both the sound and delay timer.
        """
        if self.cpu_timers['delay'] != 0:
            self.cpu_timers['delay'] -= 1

        if self.cpu_timers['sound'] != 0:
            self.cpu_timers['sound'] -= 1
            if self.cpu_timers['sound'] == 0:
                logger.debug("Sound timer stopped")
