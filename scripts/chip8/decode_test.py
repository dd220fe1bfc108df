import unittest
from chip8.decode import OPCODES, decode
from chip8.errors import UnknownOpcode


class TestDecoding(unittest.TestCase):
    def test_every_instruction(self):
        samples = {
            0x00E0: "CLS", 0x00EE: "RET", 0x0123: "SYS",
            0x1ABC: "JP", 0x2ABC: "CALL",
            0x3A12: "SE_VX_KK", 0x4A12: "SNE_VX_KK", 0x5AB0: "SE_VX_VY",
            0x6A12: "LD_VX_KK", 0x7A12: "ADD_VX_KK",
            0x8AB0: "LD_VX_VY", 0x8AB1: "OR", 0x8AB2: "AND", 0x8AB3: "XOR",
            0x8AB4: "ADD_VX_VY", 0x8AB5: "SUB", 0x8AB6: "SHR", 0x8AB7: "SUBN", 0x8ABE: "SHL",
            0x9AB0: "SNE_VX_VY", 0xA123: "LD_I", 0xB123: "JP_V0", 0xCA12: "RND", 0xDAB5: "DRW",
            0xEA9E: "SKP", 0xEAA1: "SKNP",
            0xFA07: "LD_VX_DT", 0xFA0A: "LD_VX_K", 0xFA15: "LD_DT_VX", 0xFA18: "LD_ST_VX",
            0xFA1E: "ADD_I_VX", 0xFA29: "LD_F_VX", 0xFA33: "LD_B_VX", 0xFA55: "LD_I_VX", 0xFA65: "LD_VX_I",
        }
        self.assertEqual(len(set(OPCODES.values())), 35)
        self.assertEqual(set(samples.values()), set(OPCODES.values()))
        for opcode, name in samples.items():
            self.assertEqual(decode(opcode).name, name, hex(opcode))

    def test_operands(self):
        ins = decode(0xD12F)
        self.assertEqual((ins.x, ins.y, ins.n, ins.kk, ins.nnn), (0x1, 0x2, 0xF, 0x2F, 0x12F))
        self.assertEqual(ins.opcode, 0xD12F)

    def test_register_zero_forms(self):
        self.assertEqual(decode(0x8000).name, "LD_VX_VY")
        self.assertEqual(decode(0xF007).name, "LD_VX_DT")
        self.assertEqual(decode(0x0000).name, "SYS")

    def test_unknown(self):
        for opcode in (0x5AB1, 0x8AB8, 0x8ABF, 0x9AB3, 0xEA00, 0xF0FF, 0xFA66):
            with self.assertRaises(UnknownOpcode, msg=hex(opcode)):
                decode(opcode)

    def test_unknown_reports_address(self):
        with self.assertRaises(UnknownOpcode) as ctx:
            decode(0xFFFF, 0x234)
        self.assertEqual(ctx.exception.opcode, 0xFFFF)
        self.assertEqual(ctx.exception.pc, 0x234)


if __name__ == "__main__":
    unittest.main()
