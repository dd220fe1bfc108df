from typing import NamedTuple

from chip8.errors import UnknownOpcode


class Instruction(NamedTuple):
    """a decoded opcode: its mnemonic name plus every operand field already extracted"""
    name: str
    opcode: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int


# opcode pattern (once masked) -> instruction name
OPCODES = {
    0x00E0: "CLS",
    0x00EE: "RET",
    0x0000: "SYS",
    0x1000: "JP",
    0x2000: "CALL",
    0x3000: "SE_VX_KK",
    0x4000: "SNE_VX_KK",
    0x5000: "SE_VX_VY",
    0x6000: "LD_VX_KK",
    0x7000: "ADD_VX_KK",
    0x8000: "LD_VX_VY",
    0x8001: "OR",
    0x8002: "AND",
    0x8003: "XOR",
    0x8004: "ADD_VX_VY",
    0x8005: "SUB",
    0x8006: "SHR",
    0x8007: "SUBN",
    0x800E: "SHL",
    0x9000: "SNE_VX_VY",
    0xA000: "LD_I",
    0xB000: "JP_V0",
    0xC000: "RND",
    0xD000: "DRW",
    0xE09E: "SKP",
    0xE0A1: "SKNP",
    0xF007: "LD_VX_DT",
    0xF00A: "LD_VX_K",
    0xF015: "LD_DT_VX",
    0xF018: "LD_ST_VX",
    0xF01E: "ADD_I_VX",
    0xF029: "LD_F_VX",
    0xF033: "LD_B_VX",
    0xF055: "LD_I_VX",
    0xF065: "LD_VX_I",
}

# high nibble -> masks selecting the pattern within that group
# WATCH OUT: masks order is important!!!
# the first mask giving a known pattern wins, that's how 00E0/00EE take precedence over 0NNN
MASKS = {
    0x0: (0xFFFF, 0xF000),
    0x5: (0xF00F,),
    0x8: (0xF00F,),
    0x9: (0xF00F,),
    0xE: (0xF0FF,),
    0xF: (0xF0FF,),
}
DEFAULT_MASKS = (0xF000,)


def decode(opcode, pc=0):
    """classify a 16 bit opcode, raise UnknownOpcode if it isn't one of the 35 CHIP-8 instructions"""
    for mask in MASKS.get(opcode >> 12, DEFAULT_MASKS):
        name = OPCODES.get(opcode & mask)
        if name is None:
            continue
        return Instruction(
            name=name,
            opcode=opcode,
            x=(opcode & 0x0F00) >> 8,
            y=(opcode & 0x00F0) >> 4,
            n=opcode & 0x000F,
            kk=opcode & 0x00FF,
            nnn=opcode & 0x0FFF,
        )
    raise UnknownOpcode(opcode, pc)
