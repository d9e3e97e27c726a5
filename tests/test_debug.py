from loxvm.chunk import Chunk, OpCode
from loxvm.debug import disassemble_chunk, disassemble_instruction


def make_chunk():
    chunk = Chunk()
    index = chunk.add_constant(1.2)
    chunk.write(OpCode.CONSTANT, 123)
    chunk.write(index, 123)
    chunk.write(OpCode.NEGATE, 123)
    chunk.write(OpCode.RETURN, 124)
    return chunk


def test_constant_instruction_text_and_width():
    text, next_offset = disassemble_instruction(make_chunk(), 0)
    assert text == "0000  123 OP_CONSTANT         0 '1.2'"
    assert next_offset == 2


def test_new_line_shows_number():
    text, next_offset = disassemble_instruction(make_chunk(), 3)
    assert text.startswith("0003  124 ")
    assert text.endswith("OP_RETURN")
    assert next_offset == 4


def test_unhandled_opcode_is_reported():
    chunk = Chunk()
    chunk.write(OpCode.NIL, 1)
    text, next_offset = disassemble_instruction(chunk, 0)
    assert text.endswith("Unknown opcode: %d" % OpCode.NIL)
    assert next_offset == 1


def test_chunk_listing_has_header_and_one_line_per_instruction():
    listing = disassemble_chunk(make_chunk(), "code")
    lines = listing.splitlines()
    assert lines[0] == "== code == "
    assert len(lines) == 4
    assert listing.endswith("\n")
    assert [line[:4] for line in lines[1:]] == ["0000", "0002", "0003"]


def test_empty_chunk_listing_is_header_only():
    assert disassemble_chunk(Chunk(), "empty") == "== empty == \n"