"""Bytecode chunks: instructions, their source lines and constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from loxvm.value import Value


class OpCode(IntEnum):
    """Instruction opcodes of the virtual machine."""

    CONSTANT = 0
    NIL = 1
    TRUE = 2
    FALSE = 3
    ADD = 4
    SUBTRACT = 5
    MULTIPLY = 6
    DIVIDE = 7
    NEGATE = 8
    RETURN = 9


@dataclass
class Chunk:
    """A sequence of bytecode with a line number for each byte."""

    code: bytearray = field(default_factory=bytearray)
    lines: list[int] = field(default_factory=list)
    constants: list[Value] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.code)

    def write(self, byte: int, line: int) -> None:
        """Append one byte of code, remembering the source line it came from."""
        self.code.append(int(byte))
        self.lines.append(line)

    def add_constant(self, value: Value) -> int:
        """Store a constant and return its index in the constant table."""
        self.constants.append(value)
        return len(self.constants) - 1