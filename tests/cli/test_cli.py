import pytest
from click.testing import CliRunner

import lc3sim.runtime.emulator as emulator
import lc3sim.sasm.masm as masm
import lc3sim.tools.disasm as disasm
from lc3sim.runtime.loader import build_image, ImageError
import lc3sim.sasm.asm as asm

from unit_utils import find_file, load_file, make_console


def test_assemble_and_run(tmp_path):
    runner = CliRunner()
    binary = tmp_path / 'out' / 'hello.obj'

    result = runner.invoke(masm.compile, [str(find_file('testdata/hello.asm')), str(binary)])
    assert result.exit_code == 0
    assert binary.read_bytes() == asm.assemble(load_file('testdata/hello.asm'))

    result = runner.invoke(emulator.run, [str(binary)])
    assert result.exit_code == emulator.EXIT_HALT
    assert 'Hello, World!' in result.output


def test_missing_image():
    result = CliRunner().invoke(emulator.run, ['does-not-exist.obj'])
    assert result.exit_code == 2


def test_bad_instruction_is_an_execution_error(tmp_path):
    image = tmp_path / 'bad.obj'
    image.write_bytes(build_image(0x3000, [0xD000]))

    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_malformed_image(tmp_path):
    image = tmp_path / 'odd.obj'
    image.write_bytes(b'\x30\x00\x12')

    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_execute_returns_halted_machine():
    machine = emulator.execute(build_image(0x3000, [0x1021, 0xF025]), make_console())

    assert machine.registers[0] == 1
    assert machine.running is False


def test_disassembly_listing(tmp_path):
    image = tmp_path / 'prog.obj'
    image.write_bytes(build_image(0x3000, [0x1283, 0x0DFD, 0xD000, 0xF025]))

    result = CliRunner().invoke(disasm.dump, [str(image)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        'x3000  1283  ADD R1, R2, R3',
        'x3001  0DFD  BRnz x2FFF',
        'x3002  D000  .FILL xD000',
        'x3003  F025  HALT',
    ]


def test_listing_rejects_image_past_end_of_memory():
    with pytest.raises(ImageError):
        list(disasm.listing(build_image(0xFFFF, [1, 2])))


def test_listing_up_to_end_of_memory():
    assert list(disasm.listing(build_image(0xFFFF, [0xF025]))) == ['xFFFF  F025  HALT']


def test_disassembly_of_malformed_image(tmp_path):
    image = tmp_path / 'long.obj'
    image.write_bytes(build_image(0xFFFF, [1, 2]))

    result = CliRunner().invoke(disasm.dump, [str(image)])

    assert result.exit_code == 1
    assert 'do not fit in memory' in result.output
    assert 'Traceback' not in result.output
