from lc3sim.codec.bits import (
    get_bit_field, set_bit_field, sign_extend, to_signed, fits_signed
)


def test_get_bit_field():
    assert get_bit_field(0b1011_0000, 4, 8) == 0b1011
    assert get_bit_field(0xF025, 12, 16) == 0xF
    assert get_bit_field(0xF025, 0, 8) == 0x25


def test_set_bit_field_masks_to_width():
    assert set_bit_field(0, 0b101, 9, 3) == 0b101 << 9
    assert set_bit_field(0x1000, 0xFFFF, 0, 5) == 0x101F


def test_sign_extend():
    assert sign_extend(0b11111, 5) == 0xFFFF
    assert sign_extend(0b00001, 5) == 1
    assert sign_extend(0b10000, 5) == 0xFFF0
    assert sign_extend(0x100, 9) == 0xFF00
    assert sign_extend(0x0FF, 9) == 0x00FF
    assert sign_extend(0x400, 11) == 0xFC00


def test_to_signed():
    assert to_signed(0xFFFF) == -1
    assert to_signed(0x8000) == -32768
    assert to_signed(0x7FFF) == 32767


def test_fits():
    assert fits_signed(-16, 5)
    assert fits_signed(15, 5)
    assert not fits_signed(16, 5)
    assert not fits_signed(-17, 5)
