import logging as lg
from dataclasses import dataclass
from typing import List, Tuple, Dict, Any, TypeAlias

from lc3sim.common.hwconf import MEMORY_SIZE, WORD_MASK


class AsmError(Exception):
    pass


@dataclass(frozen=True)
class Reg:
    index: int


@dataclass(frozen=True)
class Ref:
    name: str


Operand: TypeAlias = Reg | Ref | int
Command: TypeAlias = Tuple[str, Any]


class FPP:
    ''' First pass processor: assigns addresses and collects labels '''
    cmd_list: List[Command]
    label_dict: Dict[str, int]
    origin: int | None
    ended: bool

    def __init__(self):
        self.cmd_list = list()
        self.label_dict = dict()
        self.origin = None
        self.offset = 0
        self.ended = False

    def check_origin(self):
        if self.origin is None:
            raise AsmError('Code before .ORIG')

    def advance(self, count: int = 1):
        self.offset += count

        if self.offset > MEMORY_SIZE:
            raise AsmError(f'Program runs past the end of memory at 0x{self.origin:04X}')

    def resolve(self, name: str) -> int:
        if name not in self.label_dict:
            raise AsmError(f'Unknown label {name}')

        return self.label_dict[name]

    # Handlers
    def on_orig(self, origin: int):
        if self.origin is not None:
            raise AsmError('Only one .ORIG block is supported')

        if not 0 <= origin <= WORD_MASK:
            raise AsmError(f'Origin {origin} is not an address')

        self.origin = origin
        self.offset = origin
        lg.debug(f'Origin @ 0x{origin:04X}')

    def on_label(self, name: str):
        self.check_origin()

        if name in self.label_dict:
            raise AsmError(f'Duplicate label {name}')

        self.label_dict[name] = self.offset
        lg.debug(f'Label {name} @ 0x{self.offset:04X}')

    def on_instr(self, args: Tuple[str, List[Operand]]):
        self.check_origin()
        mnemonic, operands = args
        self.cmd_list.append(('instr', (self.offset, mnemonic, operands)))
        self.advance()

    def on_fill(self, value: Operand):
        self.check_origin()

        if isinstance(value, Ref):
            self.cmd_list.append(('ref', value))
        else:
            self.cmd_list.append(('word', value))

        self.advance()

    def on_blkw(self, count: int):
        self.check_origin()

        if count < 1:
            raise AsmError(f'.BLKW needs a positive size, got {count}')

        for _ in range(count):
            self.cmd_list.append(('word', 0))

        self.advance(count)

    def on_stringz(self, text: str):
        self.check_origin()

        for char in text:
            self.cmd_list.append(('word', ord(char)))

        self.cmd_list.append(('word', 0))
        self.advance(len(text) + 1)

    def on_end(self, _: Any):
        self.ended = True
