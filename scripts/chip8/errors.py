# ********** ERRORS RAISED BY THE INTERPRETER
# every one of them is fatal for the current run, the host decides how to report it


class Chip8Error(Exception):
    """base class for every error the interpreter can raise"""


class OutOfBoundsFetch(Chip8Error):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Cannot fetch an instruction at 0x{pc:04x}, it lies outside the 4KB memory")


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode: int, pc: int):
        self.opcode = opcode
        self.pc = pc
        super().__init__(f"Unknown opcode 0x{opcode:04x} at 0x{pc:04x}")


class StackOverflow(Chip8Error):
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"The CHIP-8 stack can contain at most {depth} addresses. Limit exceeded")


class StackUnderflow(Chip8Error):
    def __init__(self):
        super().__init__("Tried to return from a subroutine with an empty stack")


class RomTooLarge(Chip8Error):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"The ROM is {size} bytes long but at most {limit} bytes fit in memory")
