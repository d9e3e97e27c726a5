import pytest

from loxvm.chunk import Chunk, OpCode


def test_written_opcodes_use_declaration_order_numbering():
    chunk = Chunk()
    chunk.write(OpCode.CONSTANT, 1)
    chunk.write(OpCode.NEGATE, 1)
    chunk.write(OpCode.RETURN, 1)
    assert list(chunk.code) == [0, 8, 9]


def test_new_chunk_is_empty():
    chunk = Chunk()
    assert len(chunk) == 0
    assert chunk.lines == []
    assert chunk.constants == []


def test_write_records_byte_and_line():
    chunk = Chunk()
    chunk.write(OpCode.NEGATE, 3)
    chunk.write(OpCode.RETURN, 4)
    assert bytes(chunk.code) == bytes([OpCode.NEGATE, OpCode.RETURN])
    assert chunk.lines == [3, 4]
    assert len(chunk) == 2


def test_many_writes_keep_code_and_lines_aligned():
    chunk = Chunk()
    for index in range(100):
        chunk.write(index % 256, index)
    assert len(chunk.code) == len(chunk.lines) == 100
    assert chunk.lines[57] == 57
    assert chunk.code[57] == 57


def test_add_constant_returns_sequential_indices():
    chunk = Chunk()
    indices = [chunk.add_constant(value) for value in (1.0, 2.0, None)]
    assert indices == [0, 1, 2]
    assert chunk.constants[indices[1]] == 2.0


@pytest.mark.parametrize("byte", [-1, 256])
def test_out_of_range_byte_is_rejected(byte):
    chunk = Chunk()
    with pytest.raises(ValueError):
        chunk.write(byte, 1)
    assert len(chunk) == 0