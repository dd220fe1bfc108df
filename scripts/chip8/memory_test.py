import unittest
from chip8.errors import RomTooLarge, StackOverflow, StackUnderflow
from chip8.memory import C8_FONTS, FONT_START_ADDRESS, MAX_ROM_SIZE, ROM_START_ADDRESS, Memory, Stack


class TestMemory(unittest.TestCase):
    def test_size(self):
        self.assertEqual(len(Memory().inner), 4096)

    def test_fonts_loaded_at_0x50(self):
        mem = Memory()
        self.assertEqual(mem[FONT_START_ADDRESS:FONT_START_ADDRESS+80], C8_FONTS)
        self.assertEqual(mem[FONT_START_ADDRESS + 5 * 0xA], 0xF0)

    def test_load_rom(self):
        mem = Memory()
        mem.load_rom(b"\x00\xe0\x12\x00")
        self.assertEqual(mem[ROM_START_ADDRESS:ROM_START_ADDRESS+4], [0x00, 0xE0, 0x12, 0x00])
        self.assertEqual(len(mem.inner), 4096)

    def test_load_largest_rom(self):
        mem = Memory()
        mem.load_rom(bytes([0xAB]) * MAX_ROM_SIZE)
        self.assertEqual(mem[0xFFF], 0xAB)
        self.assertEqual(mem[FONT_START_ADDRESS], 0xF0)

    def test_rom_too_large(self):
        mem = Memory()
        with self.assertRaises(RomTooLarge) as ctx:
            mem.load_rom(bytes(MAX_ROM_SIZE + 1))
        self.assertEqual(ctx.exception.size, 3585)
        self.assertEqual(ctx.exception.limit, 3584)

    def test_wrapping_access(self):
        mem = Memory()
        mem.write(0x1000 + 0x300, 0x1FF)
        self.assertEqual(mem[0x300], 0xFF)
        self.assertEqual(mem.read(0x1300), 0xFF)

    def test_clear_keeps_fonts(self):
        mem = Memory()
        mem.load_rom(b"\xff")
        mem.clear()
        self.assertEqual(mem[ROM_START_ADDRESS], 0)
        self.assertEqual(mem[FONT_START_ADDRESS], 0xF0)


class TestStack(unittest.TestCase):
    def test_lifo(self):
        stack = Stack()
        stack.push(0x202)
        stack.push(0x304)
        self.assertEqual(stack.pop(), 0x304)
        self.assertEqual(stack.pop(), 0x202)
        self.assertEqual(len(stack), 0)

    def test_overflow(self):
        stack = Stack()
        for i in range(16):
            stack.push(0x200 + 2 * i)
        with self.assertRaises(StackOverflow):
            stack.push(0x400)
        self.assertEqual(len(stack), 16)

    def test_underflow(self):
        with self.assertRaises(StackUnderflow):
            Stack().pop()


if __name__ == "__main__":
    unittest.main()
