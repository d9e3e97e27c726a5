"""Human-readable listings of bytecode chunks."""

from __future__ import annotations

from loxvm.chunk import Chunk, OpCode
from loxvm.value import format_value

_SIMPLE = {
    OpCode.RETURN,
    OpCode.ADD,
    OpCode.SUBTRACT,
    OpCode.MULTIPLY,
    OpCode.DIVIDE,
    OpCode.NEGATE,
}


def disassemble_instruction(chunk: Chunk, offset: int) -> tuple[str, int]:
    """Describe the instruction at *offset*; return the text and the next offset."""
    prefix = "%04d " % offset
    if offset > 0 and chunk.lines[offset] == chunk.lines[offset - 1]:
        prefix += "    | "
    else:
        prefix += "%4d " % chunk.lines[offset]

    instruction = chunk.code[offset]
    if instruction == OpCode.CONSTANT:
        index = chunk.code[offset + 1]
        value = format_value(chunk.constants[index])
        return prefix + "%-16s %4d '%s'" % ("OP_CONSTANT", index, value), offset + 2
    if instruction in _SIMPLE:
        return prefix + "OP_" + OpCode(instruction).name, offset + 1
    return prefix + "Unknown opcode: %d" % instruction, offset + 1


def disassemble_chunk(chunk: Chunk, name: str) -> str:
    """Return a full listing of *chunk* under a header naming it."""
    lines = ["== %s == " % name]
    offset = 0
    while offset < len(chunk.code):
        text, offset = disassemble_instruction(chunk, offset)
        lines.append(text)
    return "\n".join(lines) + "\n"