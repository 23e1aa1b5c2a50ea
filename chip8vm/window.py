from pygame import display, HWSURFACE, DOUBLEBUF, Color, draw

from chip8vm.screen import SCREEN_HEIGHT, SCREEN_WIDTH

SCREEN_NAME = 'CHIP8 Emulator'

# The depth of the screen is the number of bits used to represent the color
# of a pixel.
SCREEN_DEPTH = 8

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}


class Window(object):
    """
    A pygame window that shows the pixels of a Chip 8 Screen. The original
    Chip 8 screen was 64 x 32, which is quite small, so every Chip 8 pixel is
    drawn as a square of scaling_ratio x scaling_ratio window pixels.
    """
    def __init__(self, ratio):
        """
        :param ratio: the scaling factor to apply to the screen
        """
        self.scaling_ratio = ratio
        self.screen_surface = None

    def init_display(self):
        """
        Attempts to initialize a window big enough for the scaled screen.
        The window will by default be of depth SCREEN_DEPTH, and will be
        double-buffered in hardware (if possible).
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((SCREEN_WIDTH * self.scaling_ratio),
             (SCREEN_HEIGHT * self.scaling_ratio)),
            HWSURFACE | DOUBLEBUF,
            SCREEN_DEPTH)
        display.set_caption(SCREEN_NAME)
        self.screen_surface.fill(PIXEL_COLORS[0])
        display.flip()

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Draw a pixel at the specified location. The coordinate system starts
        with (0, 0) being in the top left of the screen.

        :param x_axis_position: the x coordinate to place the pixel
        :param y_axis_position: the y coordinate to place the pixel
        :param pixel_color: the color of the pixel to draw
        """
        x_axis_base_position = x_axis_position * self.scaling_ratio
        y_axis_base_position = y_axis_position * self.scaling_ratio
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[pixel_color],
                  (x_axis_base_position, y_axis_base_position, self.scaling_ratio, self.scaling_ratio))

    def render(self, pixels):
        """
        Draw a full display snapshot and flip it onto the window. According
        to the pygame documentation, the flip should wait for a vertical
        retrace when both HWSURFACE and DOUBLEBUF are set on the surface.

        :param pixels: the row-major pixel values from Emulator.get_display()
        """
        self.screen_surface.fill(PIXEL_COLORS[0])
        for index, lit in enumerate(pixels):
            if lit:
                self.draw_screen_pixel(index % SCREEN_WIDTH, index // SCREEN_WIDTH, 1)
        display.flip()

    @staticmethod
    def close():
        display.quit()
