"""
Decoding of Chip 8 op-codes into instruction objects.

Every op-code is 16 bits wide, made up of four nibbles:

   Bits:  15-12    11-8      7-4      3-0
          family     x        y        n

The x and y nibbles name V registers, n is a 4-bit constant, the low byte
(yn) is an 8-bit constant and the low 12 bits (xyn) are an address. The
decode() function turns an op-code into one of the instruction types below,
each a named tuple carrying just the fields that instruction uses. Decoding
never touches machine state, so it can be tested on its own.
"""
from collections import namedtuple

from chip8vm.exception import UnknownOpCodeException

# Masks used to pull the operand fields out of an op-code
FAMILY_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
BYTE_MASK = 0x00FF
ADDRESS_MASK = 0x0FFF


def _instruction(name, fields, mnemonic):
    """
    Build a named tuple type for an instruction. The mnemonic is a format
    string over the fields, used when printing the instruction.
    """
    base = namedtuple(name, fields)

    def __str__(self):
        return mnemonic.format(**self._asdict())

    return type(name, (base,), {'__slots__': (), '__str__': __str__})


NoOperation = _instruction('NoOperation', '', 'NOP')                            # 0000
ClearScreen = _instruction('ClearScreen', '', 'CLS')                            # 00E0
Return = _instruction('Return', '', 'RTS')                                      # 00EE
Jump = _instruction('Jump', 'address', 'JUMP {address:03X}')                    # 1nnn
Call = _instruction('Call', 'address', 'CALL {address:03X}')                    # 2nnn
SkipIfEqualValue = _instruction(
    'SkipIfEqualValue', 'x value', 'SKE  V{x:X}, {value:02X}')                  # 3xnn
SkipIfNotEqualValue = _instruction(
    'SkipIfNotEqualValue', 'x value', 'SKNE V{x:X}, {value:02X}')               # 4xnn
SkipIfEqualRegister = _instruction(
    'SkipIfEqualRegister', 'x y', 'SKE  V{x:X}, V{y:X}')                        # 5xy0
LoadValue = _instruction('LoadValue', 'x value', 'LOAD V{x:X}, {value:02X}')    # 6xnn
AddValue = _instruction('AddValue', 'x value', 'ADD  V{x:X}, {value:02X}')      # 7xnn
MoveRegister = _instruction('MoveRegister', 'x y', 'LOAD V{x:X}, V{y:X}')       # 8xy0
LogicalOr = _instruction('LogicalOr', 'x y', 'OR   V{x:X}, V{y:X}')             # 8xy1
LogicalAnd = _instruction('LogicalAnd', 'x y', 'AND  V{x:X}, V{y:X}')           # 8xy2
ExclusiveOr = _instruction('ExclusiveOr', 'x y', 'XOR  V{x:X}, V{y:X}')         # 8xy3
AddRegister = _instruction('AddRegister', 'x y', 'ADD  V{x:X}, V{y:X}')         # 8xy4
SubtractRegister = _instruction(
    'SubtractRegister', 'x y', 'SUB  V{x:X}, V{y:X}')                           # 8xy5
ShiftRight = _instruction('ShiftRight', 'x y', 'SHR  V{x:X}, V{y:X}')           # 8xy6
SubtractFromRegister = _instruction(
    'SubtractFromRegister', 'x y', 'SUBN V{x:X}, V{y:X}')                       # 8xy7
ShiftLeft = _instruction('ShiftLeft', 'x y', 'SHL  V{x:X}, V{y:X}')             # 8xyE
SkipIfNotEqualRegister = _instruction(
    'SkipIfNotEqualRegister', 'x y', 'SKNE V{x:X}, V{y:X}')                     # 9xy0
LoadIndex = _instruction('LoadIndex', 'address', 'LOAD I, {address:03X}')      # Annn
JumpWithOffset = _instruction(
    'JumpWithOffset', 'address', 'JUMP V0 + {address:03X}')                     # Bnnn
Random = _instruction('Random', 'x value', 'RAND V{x:X}, {value:02X}')          # Cxnn
DrawSprite = _instruction('DrawSprite', 'x y n', 'DRAW V{x:X}, V{y:X}, {n:X}')  # Dxyn
SkipIfKeyPressed = _instruction('SkipIfKeyPressed', 'x', 'SKPR V{x:X}')         # Ex9E
SkipIfKeyNotPressed = _instruction('SkipIfKeyNotPressed', 'x', 'SKUP V{x:X}')   # ExA1
LoadDelayTimer = _instruction('LoadDelayTimer', 'x', 'LOAD V{x:X}, DELAY')      # Fx07
WaitForKey = _instruction('WaitForKey', 'x', 'KEYD V{x:X}')                     # Fx0A
SetDelayTimer = _instruction('SetDelayTimer', 'x', 'LOAD DELAY, V{x:X}')        # Fx15
SetSoundTimer = _instruction('SetSoundTimer', 'x', 'LOAD SOUND, V{x:X}')        # Fx18
AddToIndex = _instruction('AddToIndex', 'x', 'ADD  I, V{x:X}')                  # Fx1E
LoadFontSprite = _instruction('LoadFontSprite', 'x', 'LOAD I, FONT V{x:X}')     # Fx29
StoreBCD = _instruction('StoreBCD', 'x', 'BCD  V{x:X}')                         # Fx33
StoreRegisters = _instruction('StoreRegisters', 'x', 'STOR [I], V{x:X}')        # Fx55
LoadRegisters = _instruction('LoadRegisters', 'x', 'LOAD V{x:X}, [I]')          # Fx65

# Every instruction type decode() can return
INSTRUCTION_TYPES = (
    NoOperation, ClearScreen, Return, Jump, Call, SkipIfEqualValue,
    SkipIfNotEqualValue, SkipIfEqualRegister, LoadValue, AddValue,
    MoveRegister, LogicalOr, LogicalAnd, ExclusiveOr, AddRegister,
    SubtractRegister, ShiftRight, SubtractFromRegister, ShiftLeft,
    SkipIfNotEqualRegister, LoadIndex, JumpWithOffset, Random, DrawSprite,
    SkipIfKeyPressed, SkipIfKeyNotPressed, LoadDelayTimer, WaitForKey,
    SetDelayTimer, SetSoundTimer, AddToIndex, LoadFontSprite, StoreBCD,
    StoreRegisters, LoadRegisters,
)

# Op-codes in the 0 family are matched in full
SYSTEM_LOOKUP = {
    0x0000: NoOperation,
    0x00E0: ClearScreen,
    0x00EE: Return,
}

# Op-codes in the 8 family are selected by the lowest nibble
LOGICAL_LOOKUP = {
    0x0: MoveRegister,
    0x1: LogicalOr,
    0x2: LogicalAnd,
    0x3: ExclusiveOr,
    0x4: AddRegister,
    0x5: SubtractRegister,
    0x6: ShiftRight,
    0x7: SubtractFromRegister,
    0xE: ShiftLeft,
}

# Op-codes in the E family are selected by the low byte
KEYBOARD_LOOKUP = {
    0x9E: SkipIfKeyPressed,
    0xA1: SkipIfKeyNotPressed,
}

# Op-codes in the F family are selected by the low byte
MISC_LOOKUP = {
    0x07: LoadDelayTimer,
    0x0A: WaitForKey,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddToIndex,
    0x29: LoadFontSprite,
    0x33: StoreBCD,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def decode(op_code):
    """
    Decode a 16-bit op-code into an instruction.

    :param op_code: the op-code to decode
    :return: the decoded instruction
    :raises UnknownOpCodeException: if the op-code is not a Chip 8 instruction
    """
    family = (op_code & FAMILY_MASK) >> 12
    x = (op_code & X_MASK) >> 8
    y = (op_code & Y_MASK) >> 4
    n = op_code & N_MASK
    value = op_code & BYTE_MASK
    address = op_code & ADDRESS_MASK

    if family == 0x0:
        if op_code in SYSTEM_LOOKUP:
            return SYSTEM_LOOKUP[op_code]()
    elif family == 0x1:
        return Jump(address)
    elif family == 0x2:
        return Call(address)
    elif family == 0x3:
        return SkipIfEqualValue(x, value)
    elif family == 0x4:
        return SkipIfNotEqualValue(x, value)
    elif family == 0x5:
        if n == 0:
            return SkipIfEqualRegister(x, y)
    elif family == 0x6:
        return LoadValue(x, value)
    elif family == 0x7:
        return AddValue(x, value)
    elif family == 0x8:
        if n in LOGICAL_LOOKUP:
            return LOGICAL_LOOKUP[n](x, y)
    elif family == 0x9:
        if n == 0:
            return SkipIfNotEqualRegister(x, y)
    elif family == 0xA:
        return LoadIndex(address)
    elif family == 0xB:
        return JumpWithOffset(address)
    elif family == 0xC:
        return Random(x, value)
    elif family == 0xD:
        return DrawSprite(x, y, n)
    elif family == 0xE:
        if value in KEYBOARD_LOOKUP:
            return KEYBOARD_LOOKUP[value](x)
    elif value in MISC_LOOKUP:
        return MISC_LOOKUP[value](x)

    raise UnknownOpCodeException(op_code)
