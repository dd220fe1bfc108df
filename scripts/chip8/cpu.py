# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908
#
# TEST SUITE
# https://github.com/Timendus/chip8-test-suite


import random
from functools import wraps

from chip8.config import DEBUG, DEFAULT_QUIRKS, QUIRK_PROFILES, Quirks
from chip8.decode import decode
from chip8.devices import Display, Keypad, Timer
from chip8.errors import OutOfBoundsFetch, RomTooLarge
from chip8.memory import (
    FONT_BYTES_PER_CHAR,
    FONT_START_ADDRESS,
    MAX_ROM_SIZE,
    MEMORY_SIZE,
    ROM_START_ADDRESS,
    Memory,
    Stack,
)


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to keep (and print out in DEBUG mode) the ASM of the instruction being executed"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(self, ins):
            fn(self, ins)
            self.last_asm = msg.format(**ins._asdict())
            if DEBUG: print(f"mem_addr: 0x{self.current_addr:04x}    opcode: 0x{ins.opcode:04x}    instruction: {self.last_asm}")
        return wrapper_fn
    return decorator


# ******************** CPU SECTION
class Chip8:
    def __init__(self, quirks=DEFAULT_QUIRKS, rng=None, seed=None):
        self.mem = Memory()
        self.stack = Stack()
        self.screen = Display()
        self.keypad = Keypad()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.idx = 0    # specify where the sprites reside in memory
        self.dt = Timer()   # delay timer, active when non-zero
        self.st = Timer()   # sound timer, active when non-zero
        self.quirks = QUIRK_PROFILES[quirks] if isinstance(quirks, str) else Quirks(*quirks)
        self.rng = rng if rng is not None else random.Random(seed)
        self.rom = b""
        self.current_addr = self.pc
        self.last_asm = ""
        self.waiting_for_key = False
        self.instructions = {
            "CLS": self._clear_screen,
            "RET": self._return,
            "SYS": self._sys,
            "JP": self._jump,
            "CALL": self._call_addr,
            "SE_VX_KK": self._skip_if_eq,
            "SNE_VX_KK": self._skip_if_not_eq,
            "SE_VX_VY": self._skip_if_eq_regs,
            "LD_VX_KK": self._set_vk,
            "ADD_VX_KK": self._add_to_vk,
            "LD_VX_VY": self._set_vx_to_vy,
            "OR": self._set_vx_or_vy,
            "AND": self._set_vx_and_vy,
            "XOR": self._set_vx_xor_vy,
            "ADD_VX_VY": self._add_vx_vy,
            "SUB": self._sub_vx_vy,
            "SHR": self._shr,
            "SUBN": self._subn_vx_vy,
            "SHL": self._shl,
            "SNE_VX_VY": self._skip_if_not_eq_regs,
            "LD_I": self._set_idx,
            "JP_V0": self._jump_plus,
            "RND": self._random_byte_and,
            "DRW": self._to_screen,
            "SKP": self._skip_if_pressed,
            "SKNP": self._skip_if_not_pressed,
            "LD_VX_DT": self._set_vx_dt,
            "LD_VX_K": self._wait_keypress,
            "LD_DT_VX": self._set_dt_vx,
            "LD_ST_VX": self._set_st,
            "ADD_I_VX": self._add_to_idx,
            "LD_F_VX": self._select_char,
            "LD_B_VX": self._bcd_repr,
            "LD_I_VX": self._store_vregs,
            "LD_VX_I": self._load_vregs,
        }

    def __str__(self):
        registers = f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | VARIABLE_REGISTERS:{self.v_regs}"
        timers = f"DT:{self.dt.value} | ST:{self.st.value}"
        stack = f"STACK:{self.stack}"
        flags = f"KEYPAD:{self.keypad} | WAITING_FOR_KEY:{self.waiting_for_key}"
        last = f"LAST_INSTRUCTION:{self.last_asm or '-'}"
        return f"{registers}\n{timers}\n{stack}\n{flags}\n{last}"

    # ********** HOST INTERFACE
    def load(self, rom):
        """load a ROM image at 0x200 and start over from a clean machine"""
        rom = bytes(rom)
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLarge(len(rom), MAX_ROM_SIZE)
        self.rom = rom
        self.reset()

    def reset(self):
        """bring every component back to its power-on state and reload the current ROM"""
        self.mem.clear()
        self.mem.load_rom(self.rom)
        self.stack.clear()
        self.screen.clear()
        self.keypad.release_all()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.idx = 0
        self.dt.set(0)
        self.st.set(0)
        self.current_addr = self.pc
        self.last_asm = ""
        self.waiting_for_key = False

    def fetch(self):
        """read the two bytes at PC (big endian), raise OutOfBoundsFetch if they aren't both in memory"""
        if not 0 <= self.pc < MEMORY_SIZE - 1:
            raise OutOfBoundsFetch(self.pc)
        return self.mem[self.pc] << 8 | self.mem[self.pc + 1]

    def step(self):
        """emulate one machine cycle (fetch opcode, decode opcode, execute opcode) and return the executed instruction"""
        opcode = self.fetch()
        ins = decode(opcode, self.pc)
        self.current_addr = self.pc
        # each instruction is two bytes long
        self._goto_next_instruction()
        self.instructions[ins.name](ins)
        # PC must keep pointing at a whole instruction inside memory
        if not 0 <= self.pc < MEMORY_SIZE - 1:
            bad_pc, self.pc = self.pc, self.current_addr
            raise OutOfBoundsFetch(bad_pc)
        return ins

    def tick_timers(self):
        """delay/sound timers (dt/st), meant to be called at 60Hz"""
        self.dt.tick()
        self.st.tick()

    @property
    def sound_active(self):
        return bool(self.st)

    def _goto_next_instruction(self):
        self.pc += 0x2

    # ********** FLOW CONTROL
    @asm("CLS")
    def _clear_screen(self, ins):
        self.screen.clear()

    @asm("RET")
    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    @asm("SYS 0x{nnn:03x}")
    def _sys(self, ins):
        """jump to a machine code routine, ignored by every interpreter since the COSMAC VIP"""

    @asm("JP 0x{nnn:03x}")
    def _jump(self, ins):
        self.pc = ins.nnn

    @asm("CALL 0x{nnn:03x}")
    def _call_addr(self, ins):
        self.stack.push(self.pc)
        self.pc = ins.nnn

    @asm("JP V0, 0x{nnn:03x}")
    def _jump_plus(self, ins):
        self.pc = (ins.nnn + self.v_regs[0x0]) & 0xFFF

    @asm("SE V{x:X}, {kk}")
    def _skip_if_eq(self, ins):
        if self.v_regs[ins.x] == ins.kk:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, {kk}")
    def _skip_if_not_eq(self, ins):
        if self.v_regs[ins.x] != ins.kk:
            self._goto_next_instruction()

    @asm("SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, ins):
        if self.v_regs[ins.x] == self.v_regs[ins.y]:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, ins):
        if self.v_regs[ins.x] != self.v_regs[ins.y]:
            self._goto_next_instruction()

    # ********** KEYPAD
    @asm("SKP V{x:X}")
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        if self.keypad[self.v_regs[ins.x]]:
            self._goto_next_instruction()

    @asm("SKNP V{x:X}")
    def _skip_if_not_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        if not self.keypad[self.v_regs[ins.x]]:
            self._goto_next_instruction()

    @asm("LD V{x:X}, K")
    def _wait_keypress(self, ins):
        """wait for a key press and store its value in Vx"""
        key = self.keypad.await_key()
        if key is None:
            self.pc -= 0x2      # stay on the same instruction until a key is pressed
            self.waiting_for_key = True
        else:
            self.v_regs[ins.x] = key
            self.waiting_for_key = False

    # ********** REGISTERS
    @asm("LD V{x:X}, {kk}")
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.kk

    @asm("ADD V{x:X}, {kk}")
    def _add_to_vk(self, ins):
        """add to the value already present in one of the variable registers, VF is untouched"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.kk) & 0xFF

    @asm("LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]

    @asm("OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]
        if self.quirks.logic_resets_vf:
            self.v_regs[0xF] = 0

    @asm("AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]
        if self.quirks.logic_resets_vf:
            self.v_regs[0xF] = 0

    @asm("XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]
        if self.quirks.logic_resets_vf:
            self.v_regs[0xF] = 0

    # from here on VF is always written last, so the flag wins when VF is also Vx
    @asm("ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, ins):
        """set Vx = Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        self.v_regs[ins.x] = total & 0xFF     # keep only the lowest 8 bits
        self.v_regs[0xF] = 1 if total > 0xFF else 0

    @asm("SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, ins):
        """set Vx = Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self.v_regs[0xF] = 1 if vx >= vy else 0

    @asm("SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, ins):
        """set Vx = Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self.v_regs[0xF] = 1 if vy >= vx else 0

    @asm("SHR V{x:X}, V{y:X}")
    def _shr(self, ins):
        """set Vx = Vx SHR 1, VF = bit shifted out"""
        value = self.v_regs[ins.y] if self.quirks.shift_uses_vy else self.v_regs[ins.x]
        self.v_regs[ins.x] = value >> 1
        self.v_regs[0xF] = value & 0x1

    @asm("SHL V{x:X}, V{y:X}")
    def _shl(self, ins):
        """set Vx = Vx SHL 1, VF = bit shifted out"""
        value = self.v_regs[ins.y] if self.quirks.shift_uses_vy else self.v_regs[ins.x]
        self.v_regs[ins.x] = (value << 1) & 0xFF
        self.v_regs[0xF] = (value & 0x80) >> 7

    @asm("RND V{x:X}, 0x{kk:02x}")
    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.kk

    # ********** TIMERS
    @asm("LD V{x:X}, DT")
    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.dt.value

    @asm("LD DT, V{x:X}")
    def _set_dt_vx(self, ins):
        self.dt.set(self.v_regs[ins.x])

    @asm("LD ST, V{x:X}")
    def _set_st(self, ins):
        self.st.set(self.v_regs[ins.x])

    # ********** MEMORY
    @asm("LD I, 0x{nnn:03x}")
    def _set_idx(self, ins):
        self.idx = ins.nnn

    @asm("ADD I, V{x:X}")
    def _add_to_idx(self, ins):
        """set I = I + Vx, VF is untouched"""
        self.idx = (self.idx + self.v_regs[ins.x]) & 0xFFFF

    @asm("LD F, V{x:X}")
    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        self.idx = FONT_START_ADDRESS + (self.v_regs[ins.x] & 0xF) * FONT_BYTES_PER_CHAR

    @asm("LD B, V{x:X}")
    def _bcd_repr(self, ins):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[ins.x]
        self.mem.write(self.idx, value // 100)
        self.mem.write(self.idx + 1, (value // 10) % 10)
        self.mem.write(self.idx + 2, value % 10)

    @asm("LD [I], V{x:X}")
    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        for offset in range(ins.x + 1):
            self.mem.write(self.idx + offset, self.v_regs[offset])
        if self.quirks.load_store_increments_i:
            self.idx = (self.idx + ins.x + 1) & 0xFFFF

    @asm("LD V{x:X}, [I]")
    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        for offset in range(ins.x + 1):
            self.v_regs[offset] = self.mem.read(self.idx + offset)
        if self.quirks.load_store_increments_i:
            self.idx = (self.idx + ins.x + 1) & 0xFFFF

    # ********** DISPLAY
    @asm("DRW V{x:X}, V{y:X}, {n}")
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        sprite = [self.mem.read(self.idx + i) for i in range(ins.n)]
        x = self.v_regs[ins.x] % self.screen.w
        y = self.v_regs[ins.y] % self.screen.h
        collision = self.screen.blit(x, y, sprite)
        self.v_regs[0xF] = 1 if collision else 0
