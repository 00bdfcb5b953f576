''' Renders instructions as LC-3 assembly '''

from lc3sim.common.hwconf import WORD_MASK, LINK_REGISTER
from lc3sim.common.ops import CondFlag
from lc3sim.codec.bits import to_signed
import lc3sim.codec.instructions as i


def reg(index: int) -> str:
    return f'R{index}'


def imm(value: int) -> str:
    return f'#{to_signed(value)}'


def target(offset: int, address: int | None) -> str:
    ''' PC-relative operand: absolute when the instruction address is known '''
    if address is None:
        return imm(offset)

    return f'x{(address + 1 + offset) & WORD_MASK:04X}'


def branch_mnemonic(nzp: CondFlag) -> str:
    suffix = ''.join(
        letter for letter, flag in (
            ('n', CondFlag.NEGATIVE),
            ('z', CondFlag.ZERO),
            ('p', CondFlag.POSITIVE)
        ) if nzp & flag
    )

    return f'BR{suffix}'


def disassemble(instr: i.Instruction, address: int | None = None) -> str:
    match instr:
        case i.AddImmediate(dr, sr1, imm5):
            return f'ADD {reg(dr)}, {reg(sr1)}, {imm(imm5)}'
        case i.AddRegister(dr, sr1, sr2):
            return f'ADD {reg(dr)}, {reg(sr1)}, {reg(sr2)}'
        case i.AndImmediate(dr, sr1, imm5):
            return f'AND {reg(dr)}, {reg(sr1)}, {imm(imm5)}'
        case i.AndRegister(dr, sr1, sr2):
            return f'AND {reg(dr)}, {reg(sr1)}, {reg(sr2)}'
        case i.Branch(nzp, offset):
            if not nzp:
                return 'NOP'
            return f'{branch_mnemonic(nzp)} {target(offset, address)}'
        case i.Jump(base_r):
            return 'RET' if base_r == LINK_REGISTER else f'JMP {reg(base_r)}'
        case i.JumpSubRoutineOffset(offset):
            return f'JSR {target(offset, address)}'
        case i.JumpSubRoutineRegister(base_r):
            return f'JSRR {reg(base_r)}'
        case i.Load(dr, offset):
            return f'LD {reg(dr)}, {target(offset, address)}'
        case i.LoadBaseOffset(dr, base_r, offset):
            return f'LDR {reg(dr)}, {reg(base_r)}, {imm(offset)}'
        case i.LoadEffectiveAddress(dr, offset):
            return f'LEA {reg(dr)}, {target(offset, address)}'
        case i.LoadIndirect(dr, offset):
            return f'LDI {reg(dr)}, {target(offset, address)}'
        case i.Not(dr, sr1):
            return f'NOT {reg(dr)}, {reg(sr1)}'
        case i.Store(sr, offset):
            return f'ST {reg(sr)}, {target(offset, address)}'
        case i.StoreBaseOffset(sr, base_r, offset):
            return f'STR {reg(sr)}, {reg(base_r)}, {imm(offset)}'
        case i.StoreIndirect(sr, offset):
            return f'STI {reg(sr)}, {target(offset, address)}'
        case i.Trap(vect8):
            return vect8.name

    raise TypeError(f'Not an instruction: {instr!r}')
