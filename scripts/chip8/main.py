import argparse
import array
import sys

import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_1, K_2, K_3, K_4,
    K_q, K_w, K_e, K_r,
    K_a, K_s, K_d, K_f,
    K_z, K_x, K_c, K_v,
)

from chip8.config import (
    BEEP_FREQUENCY,
    DEFAULT_QUIRKS,
    FRAME_RATE,
    INSTRUCTIONS_PER_FRAME,
    INSTRUCTIONS_PER_FRAME_STEP,
    MAX_INSTRUCTIONS_PER_FRAME,
    MIN_INSTRUCTIONS_PER_FRAME,
    QUIRK_PROFILES,
    SCALE,
)
from chip8.cpu import Chip8
from chip8.devices import SCREEN_HEIGHT, SCREEN_WIDTH
from chip8.errors import Chip8Error


# ******************** STATIC SECTION
# the 4x4 block on the left of a QWERTY keyboard mirrors the COSMAC VIP hex keypad
KEY_MAPPINGS = {
    K_1: 0x1, K_2: 0x2, K_3: 0x3, K_4: 0xC,
    K_q: 0x4, K_w: 0x5, K_e: 0x6, K_r: 0xD,
    K_a: 0x7, K_s: 0x8, K_d: 0x9, K_f: 0xE,
    K_z: 0xA, K_x: 0x0, K_c: 0xB, K_v: 0xF,
}
SPEED_UP_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
SLOW_DOWN_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)

BLUE = pygame.Color(80,69,155,255)
LIGHT_BLUE = pygame.Color(136,126,203,255)

CONTROLS = """Controls:
  ESC       - Exit emulator
  +/=       - Speed up
  -         - Slow down
  BACKSPACE - Reset
  1234      - Keys 1, 2, 3, C
  QWER      - Keys 4, 5, 6, D
  ASDF      - Keys 7, 8, 9, E
  ZXCV      - Keys A, 0, B, F"""


# ******************** UTILITIES SECTION
def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("--ipf", type=int, default=INSTRUCTIONS_PER_FRAME,
                        help=f"instructions executed per frame, {FRAME_RATE} frames per second")
    parser.add_argument("--scale", type=int, default=SCALE, help="size in pixels of a CHIP-8 pixel")
    parser.add_argument("--quirks", choices=sorted(QUIRK_PROFILES), default=DEFAULT_QUIRKS,
                        help="compatibility profile of the instruction set")
    parser.add_argument("--seed", type=int, default=None, help="seed of the RND instruction generator")
    return parser.parse_args(argv)

def load_rom_file(path):
    """read the whole ROM file as raw bytes"""
    with open(path, mode='rb') as f:
        return f.read()

def clamp_ipf(ipf):
    return max(MIN_INSTRUCTIONS_PER_FRAME, min(MAX_INSTRUCTIONS_PER_FRAME, ipf))


# ******************** I/O SECTION
class Screen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode(
            (w * self.scale, h * self.scale),
        )
        self.surface.fill(self.background)

    def render(self, snapshot):
        """paint a framebuffer snapshot, the change is visible after the flip"""
        self.surface.fill(self.background)
        for y, row in enumerate(snapshot):
            for x, lit in enumerate(row):
                if lit:
                    pygame.draw.rect(
                        self.surface,
                        self.foreground,
                        (x * self.scale, y * self.scale, self.scale, self.scale)
                    )
        pygame.display.flip()

class Beeper:
    """square wave tone played for as long as the sound timer is active"""

    def __init__(self, frequency=BEEP_FREQUENCY):
        self.playing = False
        self.sound = None
        # no audio device or a sample format other than signed 16 bit: stay silent
        if pygame.mixer.get_init() is None or pygame.mixer.get_init()[1] != -16:
            return
        sample_rate, size, channels = pygame.mixer.get_init()
        period = sample_rate // frequency
        amplitude = 2 ** (abs(size) - 2)
        wave = [amplitude if i < period // 2 else -amplitude for i in range(period)] * frequency
        samples = array.array('h', [s for s in wave for _ in range(channels)])
        self.sound = pygame.mixer.Sound(buffer=samples)

    def update(self, active):
        if self.sound is None or active == self.playing:
            return
        if active:
            self.sound.play(loops=-1)
        else:
            self.sound.stop()
        self.playing = active


# ******************** ENTRY POINT SECTION
def run(chip, screen, beeper, ipf):
    clock = pygame.time.Clock()
    running = True
    while running:
        clock.tick(FRAME_RATE)
        # process user input, loop throught the event queue
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in SPEED_UP_KEYS:
                    ipf = clamp_ipf(ipf + INSTRUCTIONS_PER_FRAME_STEP)
                    print(f"Speed: {ipf} instructions per frame")
                elif event.key in SLOW_DOWN_KEYS:
                    ipf = clamp_ipf(ipf - INSTRUCTIONS_PER_FRAME_STEP)
                    print(f"Speed: {ipf} instructions per frame")
                elif event.key == pygame.K_BACKSPACE:
                    chip.reset()
                elif event.key in KEY_MAPPINGS:
                    chip.keypad.press(KEY_MAPPINGS[event.key])
            elif event.type == pygame.KEYUP and event.key in KEY_MAPPINGS:
                chip.keypad.release(KEY_MAPPINGS[event.key])
        for _ in range(ipf):
            chip.step()
        chip.tick_timers()
        beeper.update(chip.sound_active)
        if chip.screen.dirty:
            screen.render(chip.screen.snapshot())
            chip.screen.dirty = False

def main(argv=None):
    args = get_args(argv)
    try:
        rom = load_rom_file(args.file)
    except OSError as e:
        sys.exit(f"Failed to load ROM: {e}")
    chip = Chip8(quirks=args.quirks, seed=args.seed)
    try:
        chip.load(rom)
    except Chip8Error as e:
        sys.exit(f"Failed to load ROM: {e}")
    # pygame initialization
    pygame.init()
    pygame.display.set_caption(os.path.basename(args.file))
    screen = Screen(s=args.scale)
    beeper = Beeper()
    print(f"Loaded ROM: {args.file}\n{CONTROLS}")
    try:
        run(chip, screen, beeper, clamp_ipf(args.ipf))
    except Chip8Error as e:
        sys.exit(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{chip}\n{e}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
