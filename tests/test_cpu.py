"""
CPU tests. Each test assembles a short program as raw op-codes, loads it
at 0x200 and steps it through the Emulator one cycle at a time.
"""
import random

import pytest

from chip8vm import instructions
from chip8vm.cpu import FLAG_REGISTER, STACK_SIZE
from chip8vm.emulator import Emulator
from chip8vm.exception import (
    AddressOutOfRange,
    InvalidKeyException,
    StackOverflow,
    StackUnderflow,
    UnknownOpCodeException,
)
from chip8vm.screen import SCREEN_WIDTH


def assemble(*op_codes):
    return b''.join(bytes([op_code >> 8, op_code & 0xFF]) for op_code in op_codes)


def run(*op_codes, **kwargs):
    """Load the op-codes and execute each of them once."""
    emulator = Emulator(**kwargs)
    emulator.load_rom(assemble(*op_codes))
    for _ in op_codes:
        emulator.cycle()
    return emulator


def v(emulator):
    return emulator.cpu.cpu_registers['v']


def pc(emulator):
    return emulator.cpu.cpu_registers['pc']


class FixedRandom(object):
    def __init__(self, value):
        self.value = value

    def randint(self, low, high):
        return self.value


class TestDispatch:

    def test_every_instruction_has_a_handler(self):
        emulator = Emulator()
        assert set(emulator.cpu.cpu_operation_lookup) == set(instructions.INSTRUCTION_TYPES)

    def test_normal_instruction_advances_by_two(self):
        emulator = run(0x6001)
        assert pc(emulator) == 0x202

    def test_no_operation(self):
        emulator = run(0x0000)
        assert pc(emulator) == 0x202
        assert v(emulator) == [0] * 16

    def test_unknown_op_code_is_fatal(self):
        with pytest.raises(UnknownOpCodeException):
            run(0x5121)

    def test_fetch_past_end_of_memory(self):
        emulator = run(0x1FFF)
        with pytest.raises(AddressOutOfRange):
            emulator.cycle()

    def test_execute_operand_directly(self):
        emulator = Emulator()
        assert emulator.cpu.cpu_execute_instruction(0x6A42) == 0x6A42
        assert v(emulator)[0xA] == 0x42
        assert pc(emulator) == 0x200


class TestFlowControl:

    def test_jump(self):
        emulator = run(0x1234)
        assert pc(emulator) == 0x234

    def test_call_pushes_return_address(self):
        emulator = run(0x2300)
        assert pc(emulator) == 0x300
        assert emulator.cpu.cpu_registers['sp'] == 1
        assert emulator.cpu.cpu_stack[0] == 0x202

    def test_return(self):
        emulator = Emulator()
        # 0x200: CALL 206; 0x202: NOP; 0x204: NOP; 0x206: RTS
        emulator.load_rom(assemble(0x2206, 0x0000, 0x0000, 0x00EE))
        emulator.cycle()
        emulator.cycle()
        assert pc(emulator) == 0x202
        assert emulator.cpu.cpu_registers['sp'] == 0

    def test_stack_overflow(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0x2200))
        for _ in range(STACK_SIZE):
            emulator.cycle()
        with pytest.raises(StackOverflow):
            emulator.cycle()

    def test_stack_underflow(self):
        with pytest.raises(StackUnderflow):
            run(0x00EE)

    def test_jump_with_offset(self):
        emulator = run(0x6004, 0xB300)
        assert pc(emulator) == 0x304


class TestSkips:

    def test_skip_if_equal_value_taken(self):
        assert pc(run(0x6005, 0x3005)) == 0x206

    def test_skip_if_equal_value_not_taken(self):
        assert pc(run(0x6005, 0x3006)) == 0x204

    def test_skip_if_not_equal_value(self):
        assert pc(run(0x6005, 0x4006)) == 0x206
        assert pc(run(0x6005, 0x4005)) == 0x204

    def test_skip_if_equal_register(self):
        assert pc(run(0x6005, 0x6105, 0x5010)) == 0x208
        assert pc(run(0x6005, 0x6106, 0x5010)) == 0x206

    def test_skip_if_not_equal_register(self):
        assert pc(run(0x6005, 0x6106, 0x9010)) == 0x208
        assert pc(run(0x6005, 0x6105, 0x9010)) == 0x206


class TestArithmetic:

    def test_load_value(self):
        assert v(run(0x6A42))[0xA] == 0x42

    def test_add_value_wraps(self):
        emulator = run(0x60FA, 0x700A)
        assert v(emulator)[0] == 4
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_move_register(self):
        assert v(run(0x6142, 0x8010))[0] == 0x42

    def test_logical_operations(self):
        assert v(run(0x600C, 0x610A, 0x8011))[0] == 0x0E
        assert v(run(0x600C, 0x610A, 0x8012))[0] == 0x08
        assert v(run(0x600C, 0x610A, 0x8013))[0] == 0x06

    def test_add_with_carry(self):
        emulator = run(0x60C8, 0x6164, 0x8014)
        assert v(emulator)[0] == 44
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_add_without_carry(self):
        emulator = run(0x600A, 0x6114, 0x8014)
        assert v(emulator)[0] == 30
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_subtract_with_borrow(self):
        emulator = run(0x600A, 0x6114, 0x8015)
        assert v(emulator)[0] == 246
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_subtract_equal_values_has_no_borrow(self):
        emulator = run(0x6005, 0x6105, 0x8015)
        assert v(emulator)[0] == 0
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_subtract_from_register(self):
        emulator = run(0x600A, 0x6114, 0x8017)
        assert v(emulator)[0] == 10
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_subtract_from_register_with_borrow(self):
        emulator = run(0x6014, 0x610A, 0x8017)
        assert v(emulator)[0] == 246
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_shift_right(self):
        emulator = run(0x6005, 0x8006)
        assert v(emulator)[0] == 2
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_shift_left(self):
        emulator = run(0x6081, 0x800E)
        assert v(emulator)[0] == 2
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_shift_ignores_vy_by_default(self):
        emulator = run(0x6001, 0x6108, 0x8016)
        assert v(emulator)[0] == 0
        assert v(emulator)[1] == 8
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_shift_uses_vy_variant(self):
        emulator = run(0x6001, 0x6108, 0x8016, shift_uses_vy=True)
        assert v(emulator)[0] == 4
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_shift_left_uses_vy_variant(self):
        emulator = run(0x6001, 0x6180, 0x801E, shift_uses_vy=True)
        assert v(emulator)[0] == 0
        assert v(emulator)[FLAG_REGISTER] == 1


class TestRandom:

    def test_random_is_masked(self):
        emulator = run(0xC00F, rng=FixedRandom(0xAB))
        assert v(emulator)[0] == 0x0B

    def test_seeded_random_is_repeatable(self):
        first = run(0xC0FF, 0xC1FF, rng=random.Random(1234))
        second = run(0xC0FF, 0xC1FF, rng=random.Random(1234))
        assert v(first)[:2] == v(second)[:2]


class TestIndex:

    def test_load_index(self):
        assert run(0xA123).cpu.cpu_registers['index'] == 0x123

    def test_add_to_index(self):
        assert run(0x6010, 0xA0FF, 0xF01E).cpu.cpu_registers['index'] == 0x10F

    def test_add_to_index_wraps_at_16_bits(self):
        emulator = Emulator()
        emulator.cpu.cpu_registers['index'] = 0xFFFF
        emulator.cpu.cpu_registers['v'][0] = 2
        emulator.cpu.cpu_execute_instruction(0xF01E)
        assert emulator.cpu.cpu_registers['index'] == 1

    def test_font_sprite_address(self):
        assert run(0x600A, 0xF029).cpu.cpu_registers['index'] == 50


class TestMemoryTransfer:

    def test_bcd(self):
        emulator = run(0x607B, 0xA300, 0xF033)
        assert emulator.memory.read_block(0x300, 3) == bytes([1, 2, 3])

    def test_bcd_of_small_value(self):
        emulator = run(0x6007, 0xA300, 0xF033)
        assert emulator.memory.read_block(0x300, 3) == bytes([0, 0, 7])

    def test_store_and_load_registers_round_trip(self):
        emulator = run(
            0x6011, 0x6122, 0x6233, 0x6344,  # V0..V3
            0xA300, 0xF355,                  # store at 0x300
            0x6000, 0x6100, 0x6200, 0x6300,  # wipe V0..V3
            0xF365,                          # load back
        )
        assert v(emulator)[:4] == [0x11, 0x22, 0x33, 0x44]
        assert emulator.cpu.cpu_registers['index'] == 0x300

    def test_store_only_up_to_x(self):
        emulator = run(0x6011, 0x6122, 0xA300, 0xF055)
        assert emulator.memory.read_block(0x300, 2) == bytes([0x11, 0])

    def test_store_past_end_of_memory(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0xAFFE, 0xF355))
        emulator.cycle()
        with pytest.raises(AddressOutOfRange):
            emulator.cycle()


class TestDraw:

    def test_draw_font_sprite(self):
        # Draw '0' at (0, 0); its top row is 0xF0
        emulator = run(0x6000, 0xF029, 0xD005)
        pixels = emulator.get_display()
        assert pixels[0:8] == (True, True, True, True, False, False, False, False)
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_redraw_collides_and_erases(self):
        emulator = run(0x6000, 0xF029, 0xD005, 0xD005)
        assert v(emulator)[FLAG_REGISTER] == 1
        assert not any(emulator.get_display())

    def test_collision_accumulates_across_rows(self):
        # Only the first row overlaps, VF must still be 1 at the end
        emulator = run(0x6000, 0xF029, 0xD001, 0xD005)
        assert v(emulator)[FLAG_REGISTER] == 1

    def test_draw_clears_stale_flag(self):
        emulator = run(0x6F01, 0x6000, 0xF029, 0xD005)
        assert v(emulator)[FLAG_REGISTER] == 0

    def test_draw_wraps_around_edges(self):
        # '0' at (62, 31): rows 0xF0, 0x90, ...
        emulator = run(0x603E, 0x611F, 0x6200, 0xF229, 0xD015)
        pixels = emulator.get_display()
        bottom = 31 * SCREEN_WIDTH
        assert pixels[bottom + 62] and pixels[bottom + 63]
        assert pixels[bottom + 0] and pixels[bottom + 1]
        # Second row wraps to the top of the screen
        assert pixels[62] and pixels[1]
        assert not pixels[63] and not pixels[0]

    def test_clear_screen(self):
        emulator = run(0x6000, 0xF029, 0xD005, 0x00E0)
        assert not any(emulator.get_display())


class TestKeys:

    def test_skip_if_key_pressed(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0x6005, 0xE09E))
        emulator.set_key_press(5, True)
        emulator.cycle()
        emulator.cycle()
        assert pc(emulator) == 0x206

    def test_skip_if_key_not_pressed(self):
        assert pc(run(0x6005, 0xE0A1)) == 0x206
        assert pc(run(0x6005, 0xE09E)) == 0x204

    def test_key_register_out_of_range(self):
        with pytest.raises(InvalidKeyException):
            run(0x6010, 0xE09E)

    def test_set_key_out_of_range(self):
        with pytest.raises(InvalidKeyException):
            Emulator().set_key_press(16, True)


class TestWaitForKey:

    def test_key_already_down(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0xF30A))
        emulator.set_key_press(4, True)
        emulator.cycle()
        assert v(emulator)[3] == 4
        assert pc(emulator) == 0x202
        assert not emulator.awaiting_key

    def test_waits_until_key_pressed(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0xF30A, 0x6101))
        assert emulator.cycle() == 0xF30A
        for _ in range(3):
            assert pc(emulator) == 0x200
            assert emulator.cycle() is None
            assert v(emulator)[3] == 0
            assert emulator.awaiting_key

        emulator.set_key_press(9, True)
        emulator.set_key_press(7, True)
        emulator.cycle()
        assert v(emulator)[3] == 7
        assert pc(emulator) == 0x202
        assert not emulator.awaiting_key

        emulator.cycle()
        assert v(emulator)[1] == 1

    def test_timers_keep_running_while_waiting(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0x6005, 0xF015, 0xF30A))
        for _ in range(3):
            emulator.cycle()
        emulator.tick_timers()
        assert emulator.cpu.cpu_timers['delay'] == 4


class TestTimers:

    def test_delay_timer_counts_down(self):
        emulator = Emulator()
        emulator.load_rom(assemble(0x600A, 0xF015, 0xF018, 0xF107))
        for _ in range(3):
            emulator.cycle()
        for _ in range(3):
            emulator.tick_timers()
        emulator.cycle()
        assert v(emulator)[1] == 7
        assert emulator.cpu.cpu_timers['sound'] == 7

    def test_timers_floor_at_zero(self):
        emulator = run(0x6002, 0xF015, 0xF018)
        for _ in range(5):
            emulator.tick_timers()
        assert emulator.cpu.cpu_timers == {'delay': 0, 'sound': 0}

    def test_sound_active(self):
        emulator = run(0x6001, 0xF018)
        assert emulator.sound_active
        emulator.tick_timers()
        assert not emulator.sound_active
