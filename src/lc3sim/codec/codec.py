''' Bit-exact conversion between 16-bit words and instructions '''

from typing import Callable

import lc3sim.common.ops as ops
from lc3sim.common.ops import TrapCode, CondFlag
from lc3sim.codec.bits import get_bit_field, set_bit_field, sign_extend
import lc3sim.codec.instructions as i


class CodecError(Exception):
    word: int

    def __init__(self, word: int, message: str):
        super().__init__(message)
        self.word = word


class UnrecognizedOpcode(CodecError):
    def __init__(self, word: int):
        opcode = get_bit_field(word, 12, 16)
        super().__init__(word, f'Unrecognized opcode 0x{opcode:X} in word 0x{word:04X}')
        self.opcode = opcode


class UnrecognizedTrapCode(CodecError):
    def __init__(self, word: int):
        vect8 = get_bit_field(word, 0, 8)
        super().__init__(word, f'Unrecognized trap code 0x{vect8:02X} in word 0x{word:04X}')
        self.vect8 = vect8


IMMEDIATE_MODE_BIT = 5
OFFSET_MODE_BIT = 11
NOT_FILL = 0x1F  # NOT keeps its low five bits set


# - Field accessors - #

def get_opcode(word: int) -> int:
    return get_bit_field(word, 12, 16)


def get_dr(word: int) -> int:
    return get_bit_field(word, 9, 12)


def get_sr1(word: int) -> int:
    return get_bit_field(word, 6, 9)


def get_sr2(word: int) -> int:
    return get_bit_field(word, 0, 3)


def get_base_r(word: int) -> int:
    return get_bit_field(word, 6, 9)


def get_imm5(word: int) -> int:
    return sign_extend(get_bit_field(word, 0, 5), 5)


def get_pc_offset6(word: int) -> int:
    return sign_extend(get_bit_field(word, 0, 6), 6)


def get_pc_offset9(word: int) -> int:
    return sign_extend(get_bit_field(word, 0, 9), 9)


def get_pc_offset11(word: int) -> int:
    return sign_extend(get_bit_field(word, 0, 11), 11)


def get_nzp(word: int) -> CondFlag:
    return CondFlag(get_bit_field(word, 9, 12))


def get_trap_vect8(word: int) -> TrapCode:
    try:
        return TrapCode(get_bit_field(word, 0, 8))
    except ValueError:
        raise UnrecognizedTrapCode(word)


def immediate_mode(word: int) -> bool:
    return get_bit_field(word, IMMEDIATE_MODE_BIT, IMMEDIATE_MODE_BIT + 1) == 1


def offset_mode(word: int) -> bool:
    return get_bit_field(word, OFFSET_MODE_BIT, OFFSET_MODE_BIT + 1) == 1


def with_opcode(opcode: int) -> int:
    return set_bit_field(0, opcode, 12, 4)


def set_dr(word: int, register: int) -> int:
    return set_bit_field(word, register, 9, 3)


def set_sr1(word: int, register: int) -> int:
    return set_bit_field(word, register, 6, 3)


def set_sr2(word: int, register: int) -> int:
    return set_bit_field(word, register, 0, 3)


def set_base_r(word: int, register: int) -> int:
    return set_bit_field(word, register, 6, 3)


def set_imm5(word: int, imm5: int) -> int:
    word = set_bit_field(word, imm5, 0, 5)
    return set_bit_field(word, 1, IMMEDIATE_MODE_BIT, 1)


# - Decoders - #

def decode_add(word: int) -> i.Instruction:
    if immediate_mode(word):
        return i.AddImmediate(get_dr(word), get_sr1(word), get_imm5(word))

    return i.AddRegister(get_dr(word), get_sr1(word), get_sr2(word))


def decode_and(word: int) -> i.Instruction:
    if immediate_mode(word):
        return i.AndImmediate(get_dr(word), get_sr1(word), get_imm5(word))

    return i.AndRegister(get_dr(word), get_sr1(word), get_sr2(word))


def decode_jsr(word: int) -> i.Instruction:
    if offset_mode(word):
        return i.JumpSubRoutineOffset(get_pc_offset11(word))

    return i.JumpSubRoutineRegister(get_base_r(word))


# RTI (0x8) and the reserved opcode 0xD have no decoder
DECODERS: dict[int, Callable[[int], i.Instruction]] = {
    ops.BR: lambda w: i.Branch(get_nzp(w), get_pc_offset9(w)),
    ops.ADD: decode_add,
    ops.LD: lambda w: i.Load(get_dr(w), get_pc_offset9(w)),
    ops.ST: lambda w: i.Store(get_dr(w), get_pc_offset9(w)),
    ops.JSR: decode_jsr,
    ops.AND: decode_and,
    ops.LDR: lambda w: i.LoadBaseOffset(get_dr(w), get_base_r(w), get_pc_offset6(w)),
    ops.STR: lambda w: i.StoreBaseOffset(get_dr(w), get_base_r(w), get_pc_offset6(w)),
    ops.NOT: lambda w: i.Not(get_dr(w), get_sr1(w)),
    ops.LDI: lambda w: i.LoadIndirect(get_dr(w), get_pc_offset9(w)),
    ops.STI: lambda w: i.StoreIndirect(get_dr(w), get_pc_offset9(w)),
    ops.JMP: lambda w: i.Jump(get_base_r(w)),
    ops.LEA: lambda w: i.LoadEffectiveAddress(get_dr(w), get_pc_offset9(w)),
    ops.TRAP: lambda w: i.Trap(get_trap_vect8(w)),
}


def decode(word: int) -> i.Instruction:
    decoder = DECODERS.get(get_opcode(word))

    if decoder is None:
        raise UnrecognizedOpcode(word)

    return decoder(word)


# - Encoders - #

def encode_pc9(opcode: int, register: int, pc_offset9: int) -> int:
    word = set_dr(with_opcode(opcode), register)
    return set_bit_field(word, pc_offset9, 0, 9)


def encode_base6(opcode: int, register: int, base_r: int, pc_offset6: int) -> int:
    word = set_base_r(set_dr(with_opcode(opcode), register), base_r)
    return set_bit_field(word, pc_offset6, 0, 6)


ENCODERS: dict[type, Callable[..., int]] = {
    i.AddImmediate: lambda x: set_imm5(set_sr1(set_dr(with_opcode(ops.ADD), x.dr), x.sr1), x.imm5),
    i.AddRegister: lambda x: set_sr2(set_sr1(set_dr(with_opcode(ops.ADD), x.dr), x.sr1), x.sr2),
    i.AndImmediate: lambda x: set_imm5(set_sr1(set_dr(with_opcode(ops.AND), x.dr), x.sr1), x.imm5),
    i.AndRegister: lambda x: set_sr2(set_sr1(set_dr(with_opcode(ops.AND), x.dr), x.sr1), x.sr2),
    i.Branch: lambda x: set_bit_field(set_dr(with_opcode(ops.BR), int(x.nzp)), x.pc_offset9, 0, 9),
    i.Jump: lambda x: set_base_r(with_opcode(ops.JMP), x.base_r),
    i.JumpSubRoutineOffset: lambda x: set_bit_field(
        set_bit_field(with_opcode(ops.JSR), 1, OFFSET_MODE_BIT, 1), x.pc_offset11, 0, 11),
    i.JumpSubRoutineRegister: lambda x: set_base_r(with_opcode(ops.JSR), x.base_r),
    i.Load: lambda x: encode_pc9(ops.LD, x.dr, x.pc_offset9),
    i.LoadBaseOffset: lambda x: encode_base6(ops.LDR, x.dr, x.base_r, x.pc_offset6),
    i.LoadEffectiveAddress: lambda x: encode_pc9(ops.LEA, x.dr, x.pc_offset9),
    i.LoadIndirect: lambda x: encode_pc9(ops.LDI, x.dr, x.pc_offset9),
    i.Not: lambda x: set_sr1(set_dr(with_opcode(ops.NOT), x.dr), x.sr1) | NOT_FILL,
    i.Store: lambda x: encode_pc9(ops.ST, x.sr, x.pc_offset9),
    i.StoreBaseOffset: lambda x: encode_base6(ops.STR, x.sr, x.base_r, x.pc_offset6),
    i.StoreIndirect: lambda x: encode_pc9(ops.STI, x.sr, x.pc_offset9),
    i.Trap: lambda x: set_bit_field(with_opcode(ops.TRAP), int(x.vect8), 0, 8),
}


def encode(instruction: i.Instruction) -> int:
    return ENCODERS[type(instruction)](instruction)
