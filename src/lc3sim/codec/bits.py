''' Bit-field helpers shared by the codec and the assembler '''

from lc3sim.common.hwconf import WORD_BITS, WORD_MASK, SIGN_BIT


def field_mask(width: int) -> int:
    return (1 << width) - 1


def get_bit_field(word: int, start: int, end: int) -> int:
    # start is inclusive, end is exclusive
    return (word >> start) & field_mask(end - start)


def set_bit_field(word: int, field: int, start: int, width: int) -> int:
    return word | ((field & field_mask(width)) << start)


def sign_extend(value: int, bits: int) -> int:
    value &= field_mask(bits)

    if (value >> (bits - 1)) & 1:
        return (WORD_MASK << bits | value) & WORD_MASK

    return value


def to_signed(word: int) -> int:
    word &= WORD_MASK
    return word - (1 << WORD_BITS) if word & SIGN_BIT else word


def fits_signed(value: int, bits: int) -> bool:
    bound = 1 << (bits - 1)
    return -bound <= value < bound
