''' Console device behind the I/O traps '''

import sys
from typing import BinaryIO

from lc3sim.common.hwconf import HALT_MESSAGE


class ConsoleError(Exception):
    pass


class Console():
    def read_byte(self) -> int:
        raise NotImplementedError()

    def write_byte(self, value: int):
        raise NotImplementedError()

    def flush(self):
        raise NotImplementedError()

    def write_text(self, text: str):
        for byte in text.encode('latin-1'):
            self.write_byte(byte)

    def halt(self):
        self.write_text(HALT_MESSAGE)
        self.flush()


class StreamConsole(Console):
    stdin: BinaryIO
    stdout: BinaryIO

    def __init__(self, stdin: BinaryIO | None = None, stdout: BinaryIO | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

    def read_byte(self) -> int:
        try:
            data = self.stdin.read(1)
        except OSError as e:
            raise ConsoleError(f'Console input failed: {e}')

        if not data:
            raise ConsoleError('Console input exhausted')

        return data[0]

    def write_byte(self, value: int):
        self.stdout.write(bytes([value & 0xFF]))

    def flush(self):
        self.stdout.flush()
