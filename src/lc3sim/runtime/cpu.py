import logging as lg

from lc3sim.common.hwconf import (
    MEMORY_SIZE, REGISTER_COUNT, PROGRAM_START, LINK_REGISTER,
    WORD_MASK, SIGN_BIT, IN_PROMPT
)
from lc3sim.common.ops import TrapCode, CondFlag
from lc3sim.codec.codec import decode
from lc3sim.codec.disasm import disassemble
import lc3sim.codec.instructions as i
from lc3sim.runtime.console import Console, StreamConsole
from lc3sim.runtime.loader import load_image


def flag_for(value: int) -> CondFlag:
    if value == 0:
        return CondFlag.ZERO

    if value & SIGN_BIT:
        return CondFlag.NEGATIVE

    return CondFlag.POSITIVE


class CPU():
    memory: list[int]       # 64K words
    registers: list[int]    # R0..R7
    pc: int                 # Program counter
    cond: CondFlag          # Flag of the last register write
    running: bool
    trace: bool             # Log every executed instruction

    def __init__(self, memory: list[int], console: Console | None = None):
        if len(memory) != MEMORY_SIZE:
            raise ValueError(f'Memory must hold {MEMORY_SIZE} words, got {len(memory)}')

        self.memory = memory
        self.console = console if console is not None else StreamConsole()

        self.registers = [0] * REGISTER_COUNT
        self.pc = PROGRAM_START
        self.cond = CondFlag.ZERO
        self.running = False
        self.trace = False

    @classmethod
    def from_image(cls, image: bytes, console: Console | None = None) -> 'CPU':
        return cls(load_image(image), console)

    # - Helpers - #

    def debug_dump(self):
        state = [f'PC:{self.pc:04X}', f'COND:{self.cond.name}']
        state.extend([f'R{n}:{v:04X}' for n, v in enumerate(self.registers)])
        lg.debug(' '.join(state))

    def set_register(self, register: int, value: int):
        value &= WORD_MASK
        self.registers[register] = value
        self.cond = flag_for(value)

    def read(self, address: int) -> int:
        return self.memory[address & WORD_MASK]

    def write(self, address: int, value: int):
        self.memory[address & WORD_MASK] = value & WORD_MASK

    def relative(self, offset: int) -> int:
        return (self.pc + offset) & WORD_MASK

    # - Operations - #

    def add_immediate(self, instr: i.AddImmediate):
        self.set_register(instr.dr, self.registers[instr.sr1] + instr.imm5)

    def add_register(self, instr: i.AddRegister):
        self.set_register(instr.dr, self.registers[instr.sr1] + self.registers[instr.sr2])

    def and_immediate(self, instr: i.AndImmediate):
        self.set_register(instr.dr, self.registers[instr.sr1] & instr.imm5)

    def and_register(self, instr: i.AndRegister):
        self.set_register(instr.dr, self.registers[instr.sr1] & self.registers[instr.sr2])

    def not_(self, instr: i.Not):
        self.set_register(instr.dr, ~self.registers[instr.sr1])

    def branch(self, instr: i.Branch):
        if self.cond & instr.nzp:
            self.pc = self.relative(instr.pc_offset9)

    def jump(self, instr: i.Jump):
        self.pc = self.registers[instr.base_r]

    def jsr_offset(self, instr: i.JumpSubRoutineOffset):
        self.set_register(LINK_REGISTER, self.pc)
        self.pc = self.relative(instr.pc_offset11)

    def jsr_register(self, instr: i.JumpSubRoutineRegister):
        addr = self.registers[instr.base_r]
        self.set_register(LINK_REGISTER, self.pc)
        self.pc = addr

    def load(self, instr: i.Load):
        self.set_register(instr.dr, self.read(self.relative(instr.pc_offset9)))

    def load_indirect(self, instr: i.LoadIndirect):
        pointer = self.read(self.relative(instr.pc_offset9))
        self.set_register(instr.dr, self.read(pointer))

    def load_base_offset(self, instr: i.LoadBaseOffset):
        addr = self.registers[instr.base_r] + instr.pc_offset6
        self.set_register(instr.dr, self.read(addr))

    def load_effective_address(self, instr: i.LoadEffectiveAddress):
        self.set_register(instr.dr, self.relative(instr.pc_offset9))

    def store(self, instr: i.Store):
        self.write(self.relative(instr.pc_offset9), self.registers[instr.sr])

    def store_indirect(self, instr: i.StoreIndirect):
        pointer = self.read(self.relative(instr.pc_offset9))
        self.write(pointer, self.registers[instr.sr])

    def store_base_offset(self, instr: i.StoreBaseOffset):
        addr = self.registers[instr.base_r] + instr.pc_offset6
        self.write(addr, self.registers[instr.sr])

    def trap(self, instr: i.Trap):
        self.TRAPS[instr.vect8](self)

    HANDLERS = {
        i.AddImmediate: add_immediate,
        i.AddRegister: add_register,
        i.AndImmediate: and_immediate,
        i.AndRegister: and_register,
        i.Not: not_,
        i.Branch: branch,
        i.Jump: jump,
        i.JumpSubRoutineOffset: jsr_offset,
        i.JumpSubRoutineRegister: jsr_register,
        i.Load: load,
        i.LoadIndirect: load_indirect,
        i.LoadBaseOffset: load_base_offset,
        i.LoadEffectiveAddress: load_effective_address,
        i.Store: store,
        i.StoreIndirect: store_indirect,
        i.StoreBaseOffset: store_base_offset,
        i.Trap: trap,
    }

    # - Traps - #

    def getc(self):
        self.set_register(0, self.console.read_byte())

    def out(self):
        self.console.write_byte(self.registers[0])
        self.console.flush()

    def puts(self):
        addr = self.registers[0]

        while (word := self.read(addr)) != 0:
            self.console.write_byte(word)
            addr += 1

        self.console.flush()

    def in_(self):
        self.console.write_text(IN_PROMPT)
        self.console.flush()
        char = self.console.read_byte()
        self.console.write_byte(char)
        self.console.flush()
        self.set_register(0, char)

    def putsp(self):
        addr = self.registers[0]

        while (word := self.read(addr)) != 0:
            self.console.write_byte(word & 0xFF)

            high = word >> 8
            if high == 0:
                break

            self.console.write_byte(high)
            addr += 1

        self.console.flush()

    def halt(self):
        self.console.halt()
        self.running = False

    TRAPS = {
        TrapCode.GETC: getc,
        TrapCode.OUT: out,
        TrapCode.PUTS: puts,
        TrapCode.IN: in_,
        TrapCode.PUTSP: putsp,
        TrapCode.HALT: halt,
    }

    # -- Implementation -- #

    def step(self):
        addr = self.pc
        word = self.read(addr)
        self.pc = (self.pc + 1) & WORD_MASK
        instr = decode(word)

        if self.trace:
            lg.debug(f'{addr:04X}: {word:04X}  {disassemble(instr, addr)}')

        self.HANDLERS[type(instr)](self, instr)

        if self.trace:
            self.debug_dump()

    def run(self):
        self.running = True

        try:
            while self.running:
                self.step()
        finally:
            self.running = False
