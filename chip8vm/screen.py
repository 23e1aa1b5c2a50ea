from chip8vm.exception import AddressOutOfRange

# The dimensions of the Chip 8 screen in pixels
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# The total number of pixels on the screen
SCREEN_SIZE = SCREEN_WIDTH * SCREEN_HEIGHT


class Screen(object):
    """
    A class to emulate a Chip 8 Screen. The original Chip 8 screen was 64 x 32
    with 2 colors. Here each pixel is a boolean, on (True) or off (False),
    stored row by row so that the pixel at (x, y) lives at x + y * 64.
    """
    def __init__(self):
        self.pixels = [False] * SCREEN_SIZE

    def clear(self):
        """
        Turns off all the pixels on the screen.
        """
        self.pixels = [False] * SCREEN_SIZE

    @staticmethod
    def index_of(x_pos, y_pos):
        """
        Returns the pixel index for a coordinate. Coordinates off the edge of
        the screen wrap around to the opposite edge.

        :param x_pos: the x coordinate
        :param y_pos: the y coordinate
        :return: the row-major index of the pixel
        """
        return (x_pos % SCREEN_WIDTH) + (y_pos % SCREEN_HEIGHT) * SCREEN_WIDTH

    def get(self, index):
        if not 0 <= index < SCREEN_SIZE:
            raise AddressOutOfRange(index, SCREEN_SIZE - 1)
        return self.pixels[index]

    def xor_pixel(self, index):
        """
        Flip the pixel at the index.

        :param index: the row-major index of the pixel
        :return: the value of the pixel before it was flipped
        """
        previous = self.get(index)
        self.pixels[index] = not previous
        return previous

    def snapshot(self):
        """
        Returns a read-only copy of every pixel for the host to render.
        """
        return tuple(self.pixels)
