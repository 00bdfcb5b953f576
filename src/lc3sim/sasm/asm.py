import logging as lg
from typing import Callable, List, TypeAlias

import pyparsing as pp

from lc3sim.common.hwconf import WORD_MASK, LINK_REGISTER
from lc3sim.common.ops import TrapCode, CondFlag
from lc3sim.codec.bits import fits_signed
from lc3sim.codec.codec import encode
import lc3sim.codec.instructions as i
from lc3sim.runtime.loader import build_image
from lc3sim.sasm.fpp import FPP, AsmError, Reg, Ref, Operand
import lc3sim.sasm.grammar as grammar


# - Operand checks - #

def reg_of(operand: Operand) -> int:
    if not isinstance(operand, Reg):
        raise AsmError(f'Register expected, got {operand}')

    return operand.index


def signed_of(value: int, bits: int) -> int:
    if not fits_signed(value, bits):
        raise AsmError(f'Value {value} does not fit {bits} signed bits')

    return value & WORD_MASK


def imm_of(operand: Operand, bits: int) -> int:
    if not isinstance(operand, int):
        raise AsmError(f'Constant expected, got {operand}')

    return signed_of(operand, bits)


def word_of(fpp: FPP, operand: Operand) -> int:
    if isinstance(operand, Ref):
        return fpp.resolve(operand.name)

    if not -0x8000 <= operand <= WORD_MASK:
        raise AsmError(f'Value {operand} does not fit a word')

    return operand & WORD_MASK


def offset_of(fpp: FPP, address: int, operand: Operand, bits: int) -> int:
    if isinstance(operand, Ref):
        offset = fpp.resolve(operand.name) - (address + 1)
    elif isinstance(operand, int):
        offset = operand
    else:
        raise AsmError(f'Label or offset expected, got {operand}')

    return signed_of(offset, bits)


def nzp_of(mnemonic: str) -> CondFlag:
    suffix = mnemonic[2:]

    if not suffix:
        return CondFlag.NEGATIVE | CondFlag.ZERO | CondFlag.POSITIVE

    nzp = CondFlag(0)

    for letter, flag in (('N', CondFlag.NEGATIVE), ('Z', CondFlag.ZERO), ('P', CondFlag.POSITIVE)):
        if letter in suffix:
            nzp |= flag

    return nzp


def trap_of(operand: Operand) -> TrapCode:
    if not isinstance(operand, int):
        raise AsmError(f'Trap vector expected, got {operand}')

    try:
        return TrapCode(operand)
    except ValueError:
        raise AsmError(f'Unsupported trap vector 0x{operand:X}')


# - Instruction builders - #

Builder: TypeAlias = Callable[[FPP, int, List[Operand]], i.Instruction]


def build_add(fpp: FPP, address: int, ops: List[Operand]) -> i.Instruction:
    if isinstance(ops[2], Reg):
        return i.AddRegister(reg_of(ops[0]), reg_of(ops[1]), reg_of(ops[2]))

    return i.AddImmediate(reg_of(ops[0]), reg_of(ops[1]), imm_of(ops[2], 5))


def build_and(fpp: FPP, address: int, ops: List[Operand]) -> i.Instruction:
    if isinstance(ops[2], Reg):
        return i.AndRegister(reg_of(ops[0]), reg_of(ops[1]), reg_of(ops[2]))

    return i.AndImmediate(reg_of(ops[0]), reg_of(ops[1]), imm_of(ops[2], 5))


def g_trap(code: TrapCode) -> Builder:
    return lambda fpp, address, ops: i.Trap(code)


BUILDERS: dict[str, Builder] = {
    'ADD': build_add,
    'AND': build_and,
    'NOT': lambda fpp, a, ops: i.Not(reg_of(ops[0]), reg_of(ops[1])),
    'JMP': lambda fpp, a, ops: i.Jump(reg_of(ops[0])),
    'RET': lambda fpp, a, ops: i.Jump(LINK_REGISTER),
    'JSR': lambda fpp, a, ops: i.JumpSubRoutineOffset(offset_of(fpp, a, ops[0], 11)),
    'JSRR': lambda fpp, a, ops: i.JumpSubRoutineRegister(reg_of(ops[0])),
    'LD': lambda fpp, a, ops: i.Load(reg_of(ops[0]), offset_of(fpp, a, ops[1], 9)),
    'LDI': lambda fpp, a, ops: i.LoadIndirect(reg_of(ops[0]), offset_of(fpp, a, ops[1], 9)),
    'LDR': lambda fpp, a, ops: i.LoadBaseOffset(reg_of(ops[0]), reg_of(ops[1]), imm_of(ops[2], 6)),
    'LEA': lambda fpp, a, ops: i.LoadEffectiveAddress(reg_of(ops[0]), offset_of(fpp, a, ops[1], 9)),
    'ST': lambda fpp, a, ops: i.Store(reg_of(ops[0]), offset_of(fpp, a, ops[1], 9)),
    'STI': lambda fpp, a, ops: i.StoreIndirect(reg_of(ops[0]), offset_of(fpp, a, ops[1], 9)),
    'STR': lambda fpp, a, ops: i.StoreBaseOffset(reg_of(ops[0]), reg_of(ops[1]), imm_of(ops[2], 6)),
    'TRAP': lambda fpp, a, ops: i.Trap(trap_of(ops[0])),
    'GETC': g_trap(TrapCode.GETC),
    'OUT': g_trap(TrapCode.OUT),
    'PUTS': g_trap(TrapCode.PUTS),
    'IN': g_trap(TrapCode.IN),
    'PUTSP': g_trap(TrapCode.PUTSP),
    'HALT': g_trap(TrapCode.HALT),
}


def build_instruction(fpp: FPP, address: int, mnemonic: str, ops: List[Operand]) -> i.Instruction:
    if mnemonic.startswith('BR'):
        return i.Branch(nzp_of(mnemonic), offset_of(fpp, address, ops[0], 9))

    return BUILDERS[mnemonic](fpp, address, ops)


def first_pass(source: str) -> FPP:
    fpp = FPP()

    try:
        actions = grammar.program.parse_string(source, parse_all=True)
    except pp.ParseBaseException as e:
        raise AsmError(f'Syntax error at line {e.lineno}, column {e.col}: {e.line.strip()}')

    for (func, arg) in actions:  # type: ignore
        func(fpp, arg)

        if fpp.ended:
            break

    if fpp.origin is None:
        raise AsmError('Missing .ORIG')

    return fpp


def second_pass(fpp: FPP) -> List[int]:
    words = []

    for (t, d) in fpp.cmd_list:
        if t in ('word', 'ref'):
            words.append(word_of(fpp, d))

        if t == 'instr':
            (address, mnemonic, ops) = d

            try:
                instr = build_instruction(fpp, address, mnemonic, ops)
            except AsmError as e:
                raise AsmError(f'{mnemonic} @ 0x{address:04X}: {e}')

            words.append(encode(instr))
            lg.debug(f'0x{address:04X}: {words[-1]:04X} {mnemonic}')

    return words


def assemble_words(source: str) -> tuple[int, List[int]]:
    fpp = first_pass(source)
    return fpp.origin, second_pass(fpp)  # type: ignore


def assemble(source: str) -> bytes:
    origin, words = assemble_words(source)
    return build_image(origin, words)
