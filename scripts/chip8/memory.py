from chip8.config import DEBUG
from chip8.errors import RomTooLarge, StackOverflow, StackUnderflow


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
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
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

MEMORY_SIZE = 4096
FONT_START_ADDRESS = 0x050
FONT_BYTES_PER_CHAR = 5
ROM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START_ADDRESS
STACK_DEPTH = 16


# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self, depth=STACK_DEPTH):
        self.addr_list = []
        self.depth = depth

    def __len__(self):
        return len(self.addr_list)

    def __repr__(self):
        return "[" + ", ".join(f"0x{a:04x}" for a in self.addr_list) + "]"

    def push(self, address):
        if len(self.addr_list) >= self.depth:
            raise StackOverflow(self.depth)
        self.addr_list.append(address & 0xFFFF)

    def pop(self):
        if not self.addr_list:
            raise StackUnderflow()
        return self.addr_list.pop()

    def clear(self):
        self.addr_list.clear()


# ********** WRAPS A LIST TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    def __init__(self):
        self.inner = [0] * MEMORY_SIZE
        self.load_fonts()

    def __setitem__(self, key, value):
        if isinstance(key, slice):
            self.inner[key] = [v & 0xFF for v in value]
        else:
            self.inner[key] = value & 0xFF

    def __getitem__(self, index):
        return self.inner[index]

    def read(self, address):
        """read a byte, wrapping the address inside the 4KB space"""
        return self.inner[address % MEMORY_SIZE]

    def write(self, address, value):
        """write a byte, wrapping the address inside the 4KB space"""
        self.inner[address % MEMORY_SIZE] = value & 0xFF

    def load_fonts(self):
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(C8_FONTS)] = C8_FONTS

    def clear(self):
        self.inner = [0] * MEMORY_SIZE
        self.load_fonts()

    def load_rom(self, rom: bytes):
        """copy the ROM image at 0x200, raise RomTooLarge if it doesn't fit"""
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLarge(len(rom), MAX_ROM_SIZE)
        self.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+len(rom)] = list(rom)
        if DEBUG: print(f"A ROM of {len(rom)} bytes has been loaded successfully")
