from enum import IntEnum, IntFlag


# Opcodes, bits 12..15
BR   = 0x0  # if COND & nzp: PC + off9 -> PC
ADD  = 0x1  # SR1 + (SR2 | imm5) -> DR
LD   = 0x2  # M[PC + off9] -> DR
ST   = 0x3  # SR -> M[PC + off9]
JSR  = 0x4  # PC -> R7; PC + off11 | BaseR -> PC
AND  = 0x5  # SR1 & (SR2 | imm5) -> DR
LDR  = 0x6  # M[BaseR + off6] -> DR
STR  = 0x7  # SR -> M[BaseR + off6]
NOT  = 0x9  # ~SR1 -> DR
LDI  = 0xA  # M[M[PC + off9]] -> DR
STI  = 0xB  # SR -> M[M[PC + off9]]
JMP  = 0xC  # BaseR -> PC
LEA  = 0xE  # PC + off9 -> DR
TRAP = 0xF  # console service routine


class TrapCode(IntEnum):
    GETC = 0x20
    OUT = 0x21
    PUTS = 0x22
    IN = 0x23
    PUTSP = 0x24
    HALT = 0x25


class CondFlag(IntFlag):
    ''' Condition codes; a branch mask is any combination of them '''
    POSITIVE = 1
    ZERO = 2
    NEGATIVE = 4
