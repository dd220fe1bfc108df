from chip8.cpu import Chip8
from chip8.decode import Instruction, decode
from chip8.errors import (
    Chip8Error,
    OutOfBoundsFetch,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
    UnknownOpcode,
)
