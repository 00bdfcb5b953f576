import pytest

from lc3sim.common.hwconf import IN_PROMPT, HALT_MESSAGE
import lc3sim.sasm.asm as asm

from unit_utils import run_source, load_file


@pytest.mark.parametrize('name', ['hello', 'countdown', 'double'])
def test_program_output(name):
    machine, output = run_source(f'testdata/{name}.asm')

    assert machine.running is False
    assert output == load_file(f'testdata/{name}.log')


def test_double_results():
    machine, _ = run_source('testdata/double.asm')
    labels = asm.first_pass(load_file('testdata/double.asm')).label_dict

    assert machine.memory[labels['RESULT']] == 42
    assert machine.memory[0x4000] == 42
    assert machine.registers[1] == 0


def test_echo():
    machine, output = run_source('testdata/echo.asm', b'ab')

    assert output == 'a' + IN_PROMPT + 'b' + HALT_MESSAGE
    assert machine.registers[0] == ord('b')
