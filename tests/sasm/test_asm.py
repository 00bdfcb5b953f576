import pytest

from lc3sim.sasm.asm import assemble, assemble_words, first_pass
from lc3sim.sasm.fpp import AsmError


def words_of(source: str) -> list[int]:
    _, words = assemble_words(source)
    return words


def test_simple_program():
    origin, words = assemble_words('''
        .ORIG x3000
        ADD R1, R2, R3
        HALT
        .END
    ''')

    assert origin == 0x3000
    assert words == [0x1283, 0xF025]


def test_image_starts_with_origin():
    assert assemble('.ORIG x3000\nHALT\n.END') == bytes([0x30, 0x00, 0xF0, 0x25])


def test_labels_and_branches():
    words = words_of('''
        .ORIG x3000
LOOP    ADD R1, R1, #-1     ; decrement
        BRp LOOP
        HALT
        .END
    ''')

    assert words == [0x127F, 0x03FE, 0xF025]


def test_forward_references():
    words = words_of('''
        .ORIG x3000
        LEA R0, MSG
        LD R1, VALUE
        JSR SUB
        HALT
SUB:    RET
VALUE   .FILL #-1
MSG     .FILL SUB
        .END
    ''')

    assert words == [
        0xE005,  # LEA R0, +5
        0x2203,  # LD R1, +3
        0x4801,  # JSR +1
        0xF025,
        0xC1C0,  # RET
        0xFFFF,
        0x3004,
    ]


def test_directives():
    words = words_of('''
        .ORIG x4000
        .FILL x1234
        .BLKW 2
        .STRINGZ "Hi\\n"
    ''')

    assert words == [0x1234, 0, 0, ord('H'), ord('i'), ord('\n'), 0]


def test_lowercase_and_number_formats():
    words = words_of('''
        .orig x3000
        add r1, r1, 15
        and r2, r2, b0
        brnzp #0
        br x0
        trap x25
        .end
    ''')

    assert words == [0x126F, 0x54A0, 0x0E00, 0x0E00, 0xF025]


def test_register_forms():
    words = words_of('''
        .ORIG x3000
        NOT R1, R2
        JMP R3
        JSRR R3
        LDR R0, R6, #-2
        STR R1, R6, #3
        .END
    ''')

    assert words == [0x929F, 0xC0C0, 0x40C0, 0x61BE, 0x7383]


def test_trap_aliases():
    words = words_of('.ORIG x3000\nGETC\nOUT\nPUTS\nIN\nPUTSP\nHALT\n.END')
    assert words == [0xF020, 0xF021, 0xF022, 0xF023, 0xF024, 0xF025]


def test_text_after_end_is_ignored():
    assert words_of('.ORIG x3000\nHALT\n.END\nADD R0, R0, #1') == [0xF025]


def test_labels_are_recorded():
    fpp = first_pass('.ORIG x3000\nSTART AND R0, R0, #0\nDATA .BLKW 3\nEND_ .FILL 0\n.END')
    assert fpp.label_dict == {'START': 0x3000, 'DATA': 0x3001, 'END_': 0x3004}


@pytest.mark.parametrize('source', [
    'HALT',                                         # no .ORIG
    '.ORIG x3000\nBRz NOWHERE',                     # unknown label
    '.ORIG x3000\nA HALT\nA HALT',                  # duplicate label
    '.ORIG x3000\nADD R1, R1, #16',                 # imm5 out of range
    '.ORIG x3000\nLDR R1, R1, #32',                 # offset6 out of range
    '.ORIG x3000\nBR #256',                         # offset9 out of range
    '.ORIG x3000\nTRAP x30',                        # unsupported vector
    '.ORIG x3000\nFOO R1',                          # syntax
    '.ORIG x3000\nADD R1, R2',                      # missing operand
    '.ORIG x3000\n.ORIG x4000',                     # second block
    '.ORIG xFFFF\nHALT\nHALT',                      # past end of memory
    '.ORIG x3000\n.BLKW 0',
])
def test_errors(source):
    with pytest.raises(AsmError):
        assemble(source)
