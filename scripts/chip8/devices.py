SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64
KEY_COUNT = 16


# ******************** DISPLAY SECTION
class Display:
    """64x32 monochrome framebuffer, pixels can only be changed by XORing sprites onto it"""

    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.pixels = [[False] * w for _ in range(h)]
        self.dirty = True      # tells the host a new frame has to be rendered

    def __getitem__(self, xy):
        x, y = xy
        return self.pixels[y][x]

    def clear(self):
        self.pixels = [[False] * self.w for _ in range(self.h)]
        self.dirty = True

    def blit(self, x, y, sprite_rows):
        """
        XOR an 8 pixels wide sprite onto the buffer with its top left corner at (x, y)
        return True if any lit pixel got erased (collision), False otherwise
        both the starting point and the sprite itself wrap around the screen edges
        """
        collision = False
        for i, sprite_byte in enumerate(sprite_rows):
            row = self.pixels[(y + i) % self.h]
            for j in range(8):
                if not (sprite_byte >> (7 - j)) & 0x1:
                    continue
                x_coordinate = (x + j) % self.w
                # the only case when a pixel gets erased is when it was ON and is turned ON again
                if row[x_coordinate]:
                    collision = True
                row[x_coordinate] = not row[x_coordinate]
        self.dirty = True
        return collision

    def snapshot(self):
        """immutable copy of the buffer, safe to hand over to a renderer"""
        return tuple(tuple(row) for row in self.pixels)


# ******************** KEYPAD SECTION
class Keypad:
    """state of the 16 keys (0x0-0xF), written by the host and read by the interpreter"""

    def __init__(self):
        self.keys = [False] * KEY_COUNT

    def __getitem__(self, key):
        return self.is_down(key)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __repr__(self):
        return "Keypad(" + ",".join(f"{k:X}" for k in self.pressed()) + ")"

    def set(self, key, down):
        self.keys[key & 0xF] = bool(down)

    def press(self, key):
        self.set(key, True)

    def release(self, key):
        self.set(key, False)

    def release_all(self):
        self.keys = [False] * KEY_COUNT

    def is_down(self, key):
        return self.keys[key & 0xF]

    def pressed(self):
        return [k for k, down in enumerate(self.keys) if down]

    def await_key(self):
        """get the lowest key currently held down, None when no key is pressed"""
        for k, down in enumerate(self.keys):
            if down:
                return k
        return None


# ******************** TIMERS SECTION
class Timer:
    """8 bit countdown, the host ticks it at 60Hz regardless of how fast instructions run"""

    def __init__(self, value=0):
        self.value = value & 0xFF

    def __bool__(self):
        return self.value > 0

    def __repr__(self):
        return f"Timer({self.value})"

    def set(self, value):
        self.value = value & 0xFF

    def tick(self):
        if self.value > 0:
            self.value -= 1
