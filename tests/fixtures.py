# type: ignore
import pytest

from lc3sim.common.hwconf import MEMORY_SIZE
import lc3sim.runtime.cpu as cpu

import unit_utils


@pytest.fixture
def console():
    yield unit_utils.make_console()


@pytest.fixture
def machine(console):
    yield cpu.CPU([0] * MEMORY_SIZE, console)
