from lc3sim.common.ops import TrapCode, CondFlag
from lc3sim.codec.disasm import disassemble
import lc3sim.codec.instructions as i


def test_operate():
    assert disassemble(i.AddImmediate(1, 2, 0xFFFF)) == 'ADD R1, R2, #-1'
    assert disassemble(i.AddRegister(1, 2, 3)) == 'ADD R1, R2, R3'
    assert disassemble(i.AndImmediate(0, 0, 0)) == 'AND R0, R0, #0'
    assert disassemble(i.Not(4, 5)) == 'NOT R4, R5'


def test_relative_operands():
    branch = i.Branch(CondFlag.NEGATIVE | CondFlag.ZERO, 0xFFFD)
    assert disassemble(branch) == 'BRnz #-3'
    assert disassemble(branch, 0x3005) == 'BRnz x3003'
    assert disassemble(i.JumpSubRoutineOffset(10), 0x3000) == 'JSR x300B'
    assert disassemble(i.LoadEffectiveAddress(0, 2), 0xFFFF) == 'LEA R0, x0002'


def test_special_forms():
    assert disassemble(i.Jump(7)) == 'RET'
    assert disassemble(i.Jump(3)) == 'JMP R3'
    assert disassemble(i.Branch(CondFlag(0), 5)) == 'NOP'
    assert disassemble(i.Trap(TrapCode.HALT)) == 'HALT'
    assert disassemble(i.Trap(TrapCode.PUTSP)) == 'PUTSP'


def test_memory_forms():
    assert disassemble(i.LoadBaseOffset(0, 6, 0xFFFE)) == 'LDR R0, R6, #-2'
    assert disassemble(i.StoreBaseOffset(1, 6, 3)) == 'STR R1, R6, #3'
    assert disassemble(i.StoreIndirect(2, 1)) == 'STI R2, #1'
    assert disassemble(i.Load(3, 0x1FF)) == 'LD R3, #511'
