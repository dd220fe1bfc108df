import unittest
from chip8.devices import Display, Keypad, Timer


def lit(display):
    return sum(sum(row) for row in display.snapshot())


class TestDisplay(unittest.TestCase):
    def test_blank(self):
        display = Display()
        self.assertEqual(lit(display), 0)
        self.assertEqual(len(display.snapshot()), 32)
        self.assertEqual(len(display.snapshot()[0]), 64)

    def test_blit_without_collision(self):
        display = Display()
        self.assertFalse(display.blit(0, 0, [0b10100000]))
        self.assertTrue(display[0, 0])
        self.assertFalse(display[1, 0])
        self.assertTrue(display[2, 0])

    def test_double_blit_restores_and_collides(self):
        display = Display()
        display.blit(3, 3, [0x0F])
        before = display.snapshot()
        sprite = [0xF0, 0x90, 0x90, 0x90, 0xF0]
        self.assertFalse(display.blit(10, 5, sprite))
        self.assertTrue(display.blit(10, 5, sprite))
        self.assertEqual(display.snapshot(), before)

    def test_empty_sprite_never_collides(self):
        display = Display()
        display.blit(0, 0, [0xFF])
        self.assertFalse(display.blit(0, 0, [0x00]))
        self.assertEqual(lit(display), 8)

    def test_wraps_around_edges(self):
        display = Display()
        display.blit(62, 31, [0xF0, 0xF0])
        self.assertTrue(display[63, 31])
        self.assertTrue(display[0, 31])
        self.assertTrue(display[1, 0])
        self.assertEqual(lit(display), 8)

    def test_clear(self):
        display = Display()
        display.blit(0, 0, [0xFF])
        display.dirty = False
        display.clear()
        self.assertEqual(lit(display), 0)
        self.assertTrue(display.dirty)

    def test_snapshot_is_a_copy(self):
        display = Display()
        snapshot = display.snapshot()
        display.blit(0, 0, [0x80])
        self.assertFalse(snapshot[0][0])
        self.assertTrue(display.snapshot()[0][0])


class TestKeypad(unittest.TestCase):
    def test_press_release(self):
        keypad = Keypad()
        self.assertEqual(keypad.keys, [False] * 16)
        keypad.press(0xA)
        self.assertTrue(keypad.is_down(0xA))
        self.assertTrue(keypad[0xA])
        keypad.release(0xA)
        self.assertFalse(keypad[0xA])

    def test_await_key_returns_lowest(self):
        keypad = Keypad()
        self.assertIsNone(keypad.await_key())
        keypad[0xE] = True
        keypad[0x3] = True
        self.assertEqual(keypad.await_key(), 0x3)
        self.assertEqual(keypad.pressed(), [0x3, 0xE])

    def test_release_all(self):
        keypad = Keypad()
        keypad.press(0)
        keypad.press(0xF)
        keypad.release_all()
        self.assertEqual(keypad.keys, [False] * 16)


class TestTimer(unittest.TestCase):
    def test_never_below_zero(self):
        timer = Timer()
        timer.set(2)
        for _ in range(3):
            timer.tick()
        self.assertEqual(timer.value, 0)
        self.assertFalse(timer)

    def test_set_is_8_bit(self):
        timer = Timer()
        timer.set(0x1FF)
        self.assertEqual(timer.value, 0xFF)


if __name__ == "__main__":
    unittest.main()
