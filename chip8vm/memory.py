import logging

from chip8vm.exception import AddressOutOfRange, ProgramTooLarge

logger = logging.getLogger(__name__)

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where programs are loaded, and where the program counter originally points
PROGRAM_START = 0x200

# The number of bytes in a single font sprite
FONT_SPRITE_SIZE = 5

# The built-in hexadecimal font. Each digit 0 - F is a 4 x 5 sprite, stored
# one row per byte with the pixels in the high nibble. The sprite for a
# digit starts at digit * FONT_SPRITE_SIZE.
FONT_SET = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)

# The largest program that fits between PROGRAM_START and the end of memory
MAX_PROGRAM_SIZE = MAX_MEMORY - PROGRAM_START


class Memory(object):
    """
    A class to emulate the Chip 8 address space. Memory is a flat array of
    4096 bytes laid out as follows:

        0x000 - 0x04F   built-in font sprites
        0x050 - 0x1FF   reserved for the interpreter
        0x200 - 0xFFF   program and data

    Every access is bounds checked. Addresses are never wrapped, since a
    program reading or writing outside of memory has already gone wrong.
    """
    def __init__(self):
        self.memory = bytearray(MAX_MEMORY)
        self.reset()

    def reset(self):
        """
        Blank out all of memory and reload the font sprites.
        """
        self.memory[:] = bytes(MAX_MEMORY)
        self.memory[:len(FONT_SET)] = bytes(FONT_SET)

    def load(self, rom):
        """
        Load the ROM into the program region of memory. Any previously loaded
        program is wiped first, so each load fully replaces the last one.

        :param rom: the program bytes to load
        """
        rom = bytes(rom)
        if len(rom) > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(rom), MAX_PROGRAM_SIZE)
        self.memory[PROGRAM_START:] = bytes(MAX_PROGRAM_SIZE)
        self.memory[PROGRAM_START:PROGRAM_START + len(rom)] = rom
        logger.debug("Loaded %d byte program at %03X", len(rom), PROGRAM_START)

    @staticmethod
    def check_address(address):
        """
        Raise AddressOutOfRange unless the address lies inside memory.

        :param address: the address to check
        """
        if not 0 <= address < MAX_MEMORY:
            raise AddressOutOfRange(address, MAX_MEMORY - 1)

    def read_byte(self, address):
        self.check_address(address)
        return self.memory[address]

    def write_byte(self, address, value):
        self.check_address(address)
        self.memory[address] = value & 0xFF

    def read_block(self, address, length):
        """
        Read a run of bytes. The whole range is checked before anything is
        read.

        :param address: the first address to read
        :param length: the number of bytes to read
        :return: the bytes read
        """
        if length:
            self.check_address(address)
            self.check_address(address + length - 1)
        return bytes(self.memory[address:address + length])

    def write_block(self, address, values):
        """
        Write a run of bytes. The whole range is checked before anything is
        written, so a failed write leaves memory untouched.

        :param address: the first address to write
        :param values: the byte values to write
        """
        values = bytes(value & 0xFF for value in values)
        if values:
            self.check_address(address)
            self.check_address(address + len(values) - 1)
        self.memory[address:address + len(values)] = values

    def fetch_instruction(self, address):
        """
        Fetch the two byte instruction at the address. The Chip 8 is big
        endian, so the byte at address is the high byte of the instruction.

        :param address: the address of the instruction
        :return: the 16-bit instruction word
        """
        self.check_address(address)
        self.check_address(address + 1)
        return (self.memory[address] << 8) | self.memory[address + 1]
