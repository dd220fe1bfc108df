# COMPATIBILITY QUIRKS TABLE
# https://games.gulrak.net/cadmium/chip8-opcode-table.html#quirk6
import os
from typing import NamedTuple


DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False


# ******************** QUIRKS SECTION
class Quirks(NamedTuple):
    shift_uses_vy: bool = False             # 8XY6/8XYE copy Vy into Vx before shifting
    logic_resets_vf: bool = False           # 8XY1/8XY2/8XY3 clear VF
    load_store_increments_i: bool = False   # FX55/FX65 leave I pointing past the last register


QUIRK_PROFILES = {
    "modern": Quirks(),
    "vip": Quirks(shift_uses_vy=True, logic_resets_vf=True, load_store_increments_i=True),
}
DEFAULT_QUIRKS = "modern"


# ******************** HOST SECTION
INSTRUCTIONS_PER_FRAME = 10
MIN_INSTRUCTIONS_PER_FRAME = 2
MAX_INSTRUCTIONS_PER_FRAME = 50
INSTRUCTIONS_PER_FRAME_STEP = 2
FRAME_RATE = 60         # timers tick once per frame
SCALE = 10
BEEP_FREQUENCY = 440
