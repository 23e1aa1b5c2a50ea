import pytest

from chip8vm.exception import AddressOutOfRange
from chip8vm.screen import SCREEN_HEIGHT, SCREEN_SIZE, SCREEN_WIDTH, Screen


class TestScreen:

    def test_starts_blank(self):
        assert Screen().snapshot() == (False,) * SCREEN_SIZE

    def test_xor_returns_previous_value(self):
        screen = Screen()
        assert screen.xor_pixel(10) is False
        assert screen.get(10) is True
        assert screen.xor_pixel(10) is True
        assert screen.get(10) is False

    def test_clear(self):
        screen = Screen()
        screen.xor_pixel(0)
        screen.xor_pixel(SCREEN_SIZE - 1)
        screen.clear()
        assert not any(screen.snapshot())

    @pytest.mark.parametrize('index', [-1, SCREEN_SIZE])
    def test_get_out_of_range(self, index):
        with pytest.raises(AddressOutOfRange):
            Screen().get(index)

    def test_snapshot_is_a_copy(self):
        screen = Screen()
        pixels = screen.snapshot()
        screen.xor_pixel(0)
        assert pixels[0] is False
        assert isinstance(pixels, tuple)

    def test_index_is_row_major(self):
        assert Screen.index_of(3, 2) == 3 + 2 * SCREEN_WIDTH

    def test_index_wraps_both_axes(self):
        assert Screen.index_of(SCREEN_WIDTH + 1, SCREEN_HEIGHT + 2) == Screen.index_of(1, 2)
