''' LC-3 assembly grammar '''

import re

import pyparsing as pp

from lc3sim.sasm.fpp import FPP, Reg, Ref


MNEMONICS = [
    'ADD', 'AND', 'NOT', 'JMP', 'RET', 'JSR', 'JSRR',
    'LD', 'LDI', 'LDR', 'LEA', 'ST', 'STI', 'STR', 'TRAP',
    'GETC', 'OUT', 'PUTS', 'IN', 'PUTSP', 'HALT'
]

END_OF_WORD = r'(?![A-Za-z0-9_])'
BRANCH_RE = re.compile(r'BR(n?z?p?)', re.IGNORECASE)
REGISTER_RE = re.compile(r'R[0-7]', re.IGNORECASE)


def is_reserved(name: str) -> bool:
    return name.upper() in MNEMONICS \
        or BRANCH_RE.fullmatch(name) is not None \
        or REGISTER_RE.fullmatch(name) is not None


comment = pp.Regex(r';.*')
comma = pp.Optional(pp.Suppress(','))

ident = pp.Regex(r'[A-Za-z_][A-Za-z0-9_]*').add_condition(lambda t: not is_reserved(t[0]))

label = (ident.copy().add_parse_action(lambda t: (FPP.on_label, t[0])) + pp.Optional(pp.Suppress(':')))

reg = pp.Regex(r'[rR][0-7]' + END_OF_WORD).set_parse_action(lambda t: Reg(int(t[0][1])))

dec_const = pp.Regex(r'#[+-]?[0-9]+').set_parse_action(lambda t: int(t[0][1:]))
hex_const = pp.Regex(r'[xX][+-]?[0-9a-fA-F]+' + END_OF_WORD).set_parse_action(lambda t: int(t[0][1:], 16))
bin_const = pp.Regex(r'[bB][+-]?[01]+' + END_OF_WORD).set_parse_action(lambda t: int(t[0][1:], 2))
bare_const = pp.Regex(r'[+-]?[0-9]+' + END_OF_WORD).set_parse_action(lambda t: int(t[0]))
const = dec_const | hex_const | bin_const | bare_const

ref = ident.copy().add_parse_action(lambda t: Ref(t[0]))
target = const | ref


def g_instr(mnemonic: pp.ParserElement, *operands: pp.ParserElement):
    parts = [mnemonic]

    for n, operand in enumerate(operands):
        parts.extend([comma, operand] if n > 0 else [operand])

    return pp.And(parts).set_parse_action(lambda t: (FPP.on_instr, (t[0].upper(), list(t[1:]))))


def g_cmd(literal: str, *operands: pp.ParserElement):
    return g_instr(pp.CaselessKeyword(literal), *operands)


# Operate
add_cmd = g_cmd('ADD', reg, reg, reg | const)
and_cmd = g_cmd('AND', reg, reg, reg | const)
not_cmd = g_cmd('NOT', reg, reg)

# Control
br_cmd = g_instr(pp.Regex(BRANCH_RE.pattern + END_OF_WORD, flags=re.IGNORECASE), target)
jmp_cmd = g_cmd('JMP', reg)
ret_cmd = g_cmd('RET')
jsr_cmd = g_cmd('JSR', target)
jsrr_cmd = g_cmd('JSRR', reg)

# Data movement
ld_cmd = g_cmd('LD', reg, target)
ldi_cmd = g_cmd('LDI', reg, target)
ldr_cmd = g_cmd('LDR', reg, reg, const)
lea_cmd = g_cmd('LEA', reg, target)
st_cmd = g_cmd('ST', reg, target)
sti_cmd = g_cmd('STI', reg, target)
str_cmd = g_cmd('STR', reg, reg, const)

# Traps
trap_cmd = g_cmd('TRAP', const)
getc_cmd = g_cmd('GETC')
out_cmd = g_cmd('OUT')
puts_cmd = g_cmd('PUTS')
in_cmd = g_cmd('IN')
putsp_cmd = g_cmd('PUTSP')
halt_cmd = g_cmd('HALT')

asm_cmd = add_cmd \
    | and_cmd \
    | not_cmd \
    | br_cmd \
    | jmp_cmd \
    | ret_cmd \
    | jsr_cmd \
    | jsrr_cmd \
    | ld_cmd \
    | ldi_cmd \
    | ldr_cmd \
    | lea_cmd \
    | st_cmd \
    | sti_cmd \
    | str_cmd \
    | trap_cmd \
    | getc_cmd \
    | out_cmd \
    | puts_cmd \
    | in_cmd \
    | putsp_cmd \
    | halt_cmd

# Directives
orig_dir = (pp.CaselessKeyword('.ORIG') + const).set_parse_action(lambda t: (FPP.on_orig, t[1]))
fill_dir = (pp.CaselessKeyword('.FILL') + target).set_parse_action(lambda t: (FPP.on_fill, t[1]))
blkw_dir = (pp.CaselessKeyword('.BLKW') + const).set_parse_action(lambda t: (FPP.on_blkw, t[1]))
stringz_dir = (pp.CaselessKeyword('.STRINGZ') + pp.QuotedString('"', esc_char='\\')) \
    .set_parse_action(lambda t: (FPP.on_stringz, t[1]))
end_dir = pp.CaselessKeyword('.END').set_parse_action(lambda _: (FPP.on_end, None))

directive = orig_dir | fill_dir | blkw_dir | stringz_dir | end_dir

statement = (pp.Optional(label) + (asm_cmd | directive)) | label

program = pp.ZeroOrMore(statement)
program.ignore(comment)
