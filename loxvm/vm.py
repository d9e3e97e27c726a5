"""Stack-based virtual machine that runs compiled chunks."""

from __future__ import annotations

import math
import operator
import sys
from enum import Enum
from typing import Callable, Optional, TextIO

from loxvm.chunk import Chunk, OpCode
from loxvm.compiler import CompileError, compile_source
from loxvm.debug import disassemble_instruction
from loxvm.value import Value, format_value, is_number

STACK_MAX = 256


class InterpretResult(Enum):
    """Outcome of interpreting a piece of source."""

    OK = "ok"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"


def _divide(a: float, b: float) -> float:
    """IEEE-754 division: dividing by zero yields an infinity or NaN."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


_BINARY: dict[int, Callable[[float, float], float]] = {
    OpCode.ADD: operator.add,
    OpCode.SUBTRACT: operator.sub,
    OpCode.MULTIPLY: operator.mul,
    OpCode.DIVIDE: _divide,
}


class VM:
    """Runs bytecode; results go to *stdout*, diagnostics to *stderr*.

    With *trace* on, the compiled listing and a per-instruction trace of the
    stack are written to *stdout* as well.
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        trace: bool = True,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self.trace = trace
        self.stack: list[Value] = []

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def push(self, value: Value) -> None:
        """Push a value onto the stack."""
        self.stack.append(value)

    def pop(self) -> Value:
        """Pop and return the top value of the stack."""
        return self.stack.pop()

    def _peek(self, distance: int) -> Value:
        return self.stack[-1 - distance]

    def interpret(self, source: str) -> InterpretResult:
        """Compile and run *source*."""
        try:
            chunk = compile_source(source, self._out if self.trace else None)
        except CompileError as exc:
            for message in exc.messages:
                self._err.write(message + "\n")
            return InterpretResult.COMPILE_ERROR
        return self.run(chunk)

    def _runtime_error(self, message: str, line: int) -> None:
        self._err.write(message + "\n")
        self._err.write(f"Line {line} in script\n")
        self.stack.clear()

    def _trace(self, chunk: Chunk, offset: int) -> None:
        slots = "".join(f"[ {format_value(value)} ]" for value in self.stack)
        self._out.write(" " * 12 + slots + "\n")
        text, _ = disassemble_instruction(chunk, offset)
        self._out.write(text + "\n")

    def run(self, chunk: Chunk) -> InterpretResult:
        """Execute *chunk* until its RETURN instruction."""
        code = chunk.code
        ip = 0
        while True:
            if self.trace:
                self._trace(chunk, ip)

            instruction = code[ip]
            ip += 1

            if instruction == OpCode.CONSTANT:
                self.push(chunk.constants[code[ip]])
                ip += 1
            elif instruction in _BINARY:
                if not (is_number(self._peek(0)) and is_number(self._peek(1))):
                    self._runtime_error("Operands must be numbers.", chunk.lines[ip - 1])
                    return InterpretResult.RUNTIME_ERROR
                b = self.pop()
                a = self.pop()
                self.push(float(_BINARY[instruction](a, b)))
            elif instruction == OpCode.NEGATE:
                if not is_number(self._peek(0)):
                    return InterpretResult.RUNTIME_ERROR
                self.push(-self.pop())
            elif instruction == OpCode.RETURN:
                self._out.write(format_value(self.pop()) + "\n")
                return InterpretResult.OK