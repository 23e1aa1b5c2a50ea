from chip8vm.emulator import Emulator
from chip8vm.exception import (
    AddressOutOfRange,
    Chip8Exception,
    InvalidKeyException,
    ProgramTooLarge,
    StackOverflow,
    StackUnderflow,
    UnknownOpCodeException,
)
from chip8vm.memory import PROGRAM_START
from chip8vm.screen import SCREEN_HEIGHT, SCREEN_WIDTH
