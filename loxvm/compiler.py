"""Single-pass Pratt compiler from Lox expressions to bytecode."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Optional, TextIO

from loxvm.chunk import Chunk, OpCode
from loxvm.debug import disassemble_chunk
from loxvm.scanner import Scanner, Token, TokenKind
from loxvm.value import Value

_MAX_CONSTANT_INDEX = 255

# Stands in for "no token yet" before the first token has been scanned.
_NO_TOKEN = Token(TokenKind.ERROR, "", 0)


class CompileError(Exception):
    """Raised when the source does not compile; holds the reported messages."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class Precedence(IntEnum):
    """Binding strength of operators, from loosest to tightest."""

    NONE = 0
    ASSIGNMENT = 1
    OR = 2
    AND = 3
    EQUALITY = 4
    COMPARISON = 5
    TERM = 6
    FACTOR = 7
    UNARY = 8
    CALL = 9
    PRIMARY = 10


@dataclass(frozen=True)
class _Rule:
    prefix: Optional[Callable[["Compiler"], None]]
    infix: Optional[Callable[["Compiler"], None]]
    precedence: Precedence


_BINARY_OPS = {
    TokenKind.PLUS: OpCode.ADD,
    TokenKind.MINUS: OpCode.SUBTRACT,
    TokenKind.STAR: OpCode.MULTIPLY,
    TokenKind.SLASH: OpCode.DIVIDE,
}


class Compiler:
    """Compiles one source text into a chunk."""

    def __init__(self, source: str, listing: Optional[TextIO] = None) -> None:
        self._scanner = Scanner(source)
        self._listing = listing
        self._chunk = Chunk()
        self._current = _NO_TOKEN
        self._previous = _NO_TOKEN
        self._had_error = False
        self._panic_mode = False
        self._errors: list[str] = []

    def compile(self) -> Chunk:
        """Compile the source; raise CompileError if any error was reported."""
        self._advance()
        self._expression()
        self._consume(TokenKind.EOF, "Expected end of expression.")
        self._end()
        if self._had_error:
            raise CompileError(self._errors)
        return self._chunk

    # Token handling -------------------------------------------------------

    def _advance(self) -> None:
        self._previous = self._current
        while True:
            self._current = self._scanner.scan_token()
            if self._current.kind is not TokenKind.ERROR:
                break
            self._error_at_current(self._current.lexeme)

    def _consume(self, kind: TokenKind, message: str) -> None:
        if self._current.kind is kind:
            self._advance()
            return
        self._error_at_current(message)

    # Error reporting ------------------------------------------------------

    def _error_at_current(self, message: str) -> None:
        # Errors about the current token are reported at the previous one.
        self._error_at(self._previous, message)

    def _error(self, message: str) -> None:
        self._error_at(self._previous, message)

    def _error_at(self, token: Token, message: str) -> None:
        if self._panic_mode:
            return
        self._panic_mode = True
        text = f"[line: {token.line}] Error"
        if token.kind is TokenKind.EOF:
            text += " at end"
        elif token.kind is not TokenKind.ERROR:
            text += f" at '{token.lexeme}'"
        self._errors.append(f"{text}: {message}")
        self._had_error = True

    # Emission -------------------------------------------------------------

    def _emit(self, *codes: int) -> None:
        for code in codes:
            self._chunk.write(code, self._previous.line)

    def _emit_constant(self, value: Value) -> None:
        self._emit(OpCode.CONSTANT, self._make_constant(value))

    def _make_constant(self, value: Value) -> int:
        index = self._chunk.add_constant(value)
        if index > _MAX_CONSTANT_INDEX:
            self._error("Too many constants in one chunk")
            return 0
        return index

    def _end(self) -> None:
        self._emit(OpCode.RETURN)
        if not self._had_error and self._listing is not None:
            self._listing.write(disassemble_chunk(self._chunk, "code"))

    # Grammar --------------------------------------------------------------

    def _expression(self) -> None:
        self._parse_precedence(Precedence.ASSIGNMENT)

    def _number(self) -> None:
        self._emit_constant(float(self._previous.lexeme))

    def _grouping(self) -> None:
        self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")

    def _unary(self) -> None:
        operator_kind = self._previous.kind
        self._parse_precedence(Precedence.UNARY)
        if operator_kind is TokenKind.MINUS:
            self._emit(OpCode.NEGATE)

    def _binary(self) -> None:
        operator_kind = self._previous.kind
        rule = _RULES[operator_kind]
        self._parse_precedence(Precedence(rule.precedence + 1))
        opcode = _BINARY_OPS.get(operator_kind)
        if opcode is not None:
            self._emit(opcode)

    def _parse_precedence(self, precedence: Precedence) -> None:
        self._advance()
        prefix = _RULES[self._previous.kind].prefix
        if prefix is None:
            self._error("Expected expression.")
            return
        prefix(self)

        while precedence <= _RULES[self._current.kind].precedence:
            self._advance()
            infix = _RULES[self._previous.kind].infix
            if infix is not None:
                infix(self)


_RULES: dict[TokenKind, _Rule] = {
    kind: _Rule(None, None, Precedence.NONE) for kind in TokenKind
}
_RULES.update(
    {
        TokenKind.LEFT_PAREN: _Rule(Compiler._grouping, None, Precedence.NONE),
        TokenKind.MINUS: _Rule(Compiler._unary, Compiler._binary, Precedence.TERM),
        TokenKind.PLUS: _Rule(None, Compiler._binary, Precedence.TERM),
        TokenKind.SLASH: _Rule(None, Compiler._binary, Precedence.FACTOR),
        TokenKind.STAR: _Rule(None, Compiler._binary, Precedence.FACTOR),
        TokenKind.NUMBER: _Rule(Compiler._number, None, Precedence.NONE),
    }
)


def compile_source(source: str, listing: Optional[TextIO] = None) -> Chunk:
    """Compile *source* to a chunk, writing a disassembly to *listing* if given."""
    return Compiler(source, listing).compile()