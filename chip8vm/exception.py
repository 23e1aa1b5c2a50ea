class Chip8Exception(Exception):
    """
    Base class for all faults raised by the Chip 8 core. A fault is fatal to
    the current run and is propagated to the host.
    """


class UnknownOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions.
    """
    def __init__(self, op_code):
        Chip8Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))
        self.op_code = op_code


class AddressOutOfRange(Chip8Exception):
    """
    Raised when a memory, stack or pixel index falls outside of its store.
    """
    def __init__(self, address, limit):
        Chip8Exception.__init__(
            self, "Address {:X} out of range (limit {:X})".format(address, limit))
        self.address = address
        self.limit = limit


class ProgramTooLarge(Chip8Exception):
    """
    Raised when a ROM does not fit in the program region of memory.
    """
    def __init__(self, size, available):
        Chip8Exception.__init__(
            self, "Program of {} bytes exceeds the {} bytes available".format(size, available))
        self.size = size
        self.available = available


class StackOverflow(Chip8Exception):
    """
    Raised when a subroutine is called with every stack slot in use.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Stack overflow calling subroutine at {:03X}".format(address))
        self.address = address


class StackUnderflow(Chip8Exception):
    """
    Raised when returning from a subroutine with an empty stack.
    """
    def __init__(self):
        Chip8Exception.__init__(self, "Stack underflow on return from subroutine")


class InvalidKeyException(Chip8Exception):
    """
    Raised when a key index outside of the 16 key pad is used.
    """
    def __init__(self, key):
        Chip8Exception.__init__(self, "Invalid key: {}".format(key))
        self.key = key
