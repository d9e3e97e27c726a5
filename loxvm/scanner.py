"""Lexical scanner producing tokens on demand."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenKind(Enum):
    """Kinds of tokens the scanner produces."""

    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()
    ERROR = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A scanned token; for ERROR tokens the lexeme is the error message."""

    kind: TokenKind
    lexeme: str
    line: int


_SINGLE = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
}

# First character -> (kind when followed by '=', kind otherwise).
_WITH_EQUAL = {
    "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}

_KEYWORDS = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "for": TokenKind.FOR,
    "fun": TokenKind.FUN,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_alpha(c: str) -> bool:
    # Identifier characters are the ASCII range from 'Z' upwards, which
    # takes in the lower-case letters and '_' but no other capitals.
    return "Z" <= c <= "\x7f"


class Scanner:
    """Scans Lox source text one token at a time."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._start = 0
        self._current = 0
        self._line = 1

    def scan_token(self) -> Token:
        """Return the next token; EOF is returned repeatedly at the end."""
        self._skip_whitespace()
        self._start = self._current

        if self._at_end():
            return self._make(TokenKind.EOF)

        c = self._advance()
        if _is_digit(c):
            return self._number()
        if _is_alpha(c):
            return self._identifier()
        if c in _SINGLE:
            return self._make(_SINGLE[c])
        if c in _WITH_EQUAL:
            with_equal, alone = _WITH_EQUAL[c]
            return self._make(with_equal if self._match("=") else alone)
        if c == '"':
            return self._string()
        return self._error("Unexpected character.")

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _advance(self) -> str:
        self._current += 1
        return self._source[self._current - 1]

    def _peek(self) -> str:
        return "\0" if self._at_end() else self._source[self._current]

    def _peek_next(self) -> str:
        nxt = self._current + 1
        return self._source[nxt] if nxt < len(self._source) else "\0"

    def _match(self, expected: str) -> bool:
        if self._at_end() or self._source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _make(self, kind: TokenKind) -> Token:
        return Token(kind, self._source[self._start:self._current], self._line)

    def _error(self, message: str) -> Token:
        return Token(TokenKind.ERROR, message, self._line)

    def _skip_whitespace(self) -> None:
        while True:
            c = self._peek()
            if c in " \r\t" and not self._at_end():
                self._advance()
            elif c == "\n":
                self._line += 1
                self._advance()
            elif c == "/" and self._peek_next() == "/":
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            else:
                return

    def _string(self) -> Token:
        while self._peek() != '"' and not self._at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()
        if self._at_end():
            return self._error("Unterminated string.")
        self._advance()
        return self._make(TokenKind.STRING)

    def _number(self) -> Token:
        while _is_digit(self._peek()):
            self._advance()
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()
        return self._make(TokenKind.NUMBER)

    def _identifier(self) -> Token:
        while _is_alpha(self._peek()) or _is_digit(self._peek()):
            self._advance()
        text = self._source[self._start:self._current]
        return self._make(_KEYWORDS.get(text, TokenKind.IDENTIFIER))


def scan_tokens(source: str) -> Iterator[Token]:
    """Yield every token of *source*, ending with the EOF token."""
    scanner = Scanner(source)
    while True:
        token = scanner.scan_token()
        yield token
        if token.kind is TokenKind.EOF:
            return