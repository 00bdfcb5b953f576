from dataclasses import dataclass
from typing import TypeAlias

from lc3sim.common.ops import TrapCode, CondFlag


# Register indices are 0..7. Signed fields (imm5, pc_offset*) hold their
# sign-extended 16-bit form, e.g. -1 is 0xFFFF.


@dataclass(frozen=True)
class AddImmediate:
    dr: int
    sr1: int
    imm5: int


@dataclass(frozen=True)
class AddRegister:
    dr: int
    sr1: int
    sr2: int


@dataclass(frozen=True)
class AndImmediate:
    dr: int
    sr1: int
    imm5: int


@dataclass(frozen=True)
class AndRegister:
    dr: int
    sr1: int
    sr2: int


@dataclass(frozen=True)
class Branch:
    nzp: CondFlag
    pc_offset9: int


@dataclass(frozen=True)
class Jump:
    base_r: int


@dataclass(frozen=True)
class JumpSubRoutineOffset:
    pc_offset11: int


@dataclass(frozen=True)
class JumpSubRoutineRegister:
    base_r: int


@dataclass(frozen=True)
class Load:
    dr: int
    pc_offset9: int


@dataclass(frozen=True)
class LoadBaseOffset:
    dr: int
    base_r: int
    pc_offset6: int


@dataclass(frozen=True)
class LoadEffectiveAddress:
    dr: int
    pc_offset9: int


@dataclass(frozen=True)
class LoadIndirect:
    dr: int
    pc_offset9: int


@dataclass(frozen=True)
class Not:
    dr: int
    sr1: int


@dataclass(frozen=True)
class Store:
    sr: int
    pc_offset9: int


@dataclass(frozen=True)
class StoreBaseOffset:
    sr: int
    base_r: int
    pc_offset6: int


@dataclass(frozen=True)
class StoreIndirect:
    sr: int
    pc_offset9: int


@dataclass(frozen=True)
class Trap:
    vect8: TrapCode


Instruction: TypeAlias = (
    AddImmediate
    | AddRegister
    | AndImmediate
    | AndRegister
    | Branch
    | Jump
    | JumpSubRoutineOffset
    | JumpSubRoutineRegister
    | Load
    | LoadBaseOffset
    | LoadEffectiveAddress
    | LoadIndirect
    | Not
    | Store
    | StoreBaseOffset
    | StoreIndirect
    | Trap
)
