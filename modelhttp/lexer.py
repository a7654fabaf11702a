"""Tokenizer for the scripting language."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator


class TokenType(enum.Enum):
    """Kinds of tokens the lexer produces."""

    PROGRAM = enum.auto()
    INT = enum.auto()
    STRING = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    DO = enum.auto()
    FOR = enum.auto()
    READ = enum.auto()
    WRITE = enum.auto()
    CASE = enum.auto()
    OF = enum.auto()
    END = enum.auto()
    STEP = enum.auto()
    UNTIL = enum.auto()
    CONTINUE = enum.auto()
    BREAK = enum.auto()
    GOTO = enum.auto()
    BOOLEAN = enum.auto()
    REAL = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    NOT = enum.auto()

    PLUS = enum.auto()
    MINUS = enum.auto()
    MULTIPLY = enum.auto()
    DIVIDE = enum.auto()
    MODULO = enum.auto()
    LESS = enum.auto()
    GREATER = enum.auto()
    LESSEQUAL = enum.auto()
    GREATEREQUAL = enum.auto()
    EQUAL = enum.auto()
    NOTEQUAL = enum.auto()
    ASSIGN = enum.auto()
    SEMICOLON = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()

    IDENTIFIER = enum.auto()
    INTEGER = enum.auto()
    REALNUM = enum.auto()
    STRINGLIT = enum.auto()
    ENV_VAR = enum.auto()

    END_OF_FILE = enum.auto()
    ERROR = enum.auto()


KEYWORDS = {
    "program": TokenType.PROGRAM,
    "int": TokenType.INT,
    "string": TokenType.STRING,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "for": TokenType.FOR,
    "read": TokenType.READ,
    "write": TokenType.WRITE,
    "case": TokenType.CASE,
    "of": TokenType.OF,
    "end": TokenType.END,
    "step": TokenType.STEP,
    "until": TokenType.UNTIL,
    "continue": TokenType.CONTINUE,
    "break": TokenType.BREAK,
    "goto": TokenType.GOTO,
    "boolean": TokenType.BOOLEAN,
    "real": TokenType.REAL,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}

_SINGLE = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# character -> (type without '=', type with '=' following)
_WITH_EQUALS = {
    "=": (TokenType.ASSIGN, TokenType.EQUAL),
    "<": (TokenType.LESS, TokenType.LESSEQUAL),
    ">": (TokenType.GREATER, TokenType.GREATEREQUAL),
    "!": (TokenType.ERROR, TokenType.NOTEQUAL),
}

_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_WORD = _LETTERS | _DIGITS | {"_"}

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


@dataclass(frozen=True)
class Token:
    """A lexical token with its text and position."""

    type: TokenType
    value: str = ""
    line: int = 0
    column: int = 0

    def is_one_of(self, *args: TokenType) -> bool:
        return self.type in args


class Lexer:
    """Splits script source into tokens on demand."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.reset()

    def reset(self) -> None:
        """Rewind to the start of the source."""
        self._position = 0
        self._line = 1
        self._column = 0
        self._current = self.source[0] if self.source else ""

    def _advance(self) -> None:
        if self._current == "\n":
            self._line += 1
            self._column = 0
        else:
            self._column += 1
        self._position += 1
        self._current = (
            self.source[self._position] if self._position < len(self.source) else ""
        )

    def _peek(self) -> str:
        following = self._position + 1
        return self.source[following] if following < len(self.source) else ""

    def _skip_whitespace(self) -> None:
        while self._current in _WHITESPACE and self._current:
            self._advance()

    def _skip_comment(self) -> None:
        if self._current == "/" and self._peek() == "*":
            self._advance()
            self._advance()
            while self._current and not (self._current == "*" and self._peek() == "/"):
                self._advance()
            if self._current:
                self._advance()
                self._advance()

    def _take_digits(self, parts: list) -> None:
        while self._current and self._current in _DIGITS:
            parts.append(self._current)
            self._advance()

    def _read_number(self) -> Token:
        parts: list = []
        is_real = False
        if self._current in ("+", "-") and self._current:
            parts.append(self._current)
            self._advance()
        self._take_digits(parts)
        if self._current == ".":
            is_real = True
            parts.append(self._current)
            self._advance()
            self._take_digits(parts)
        if self._current in ("e", "E") and self._current:
            is_real = True
            parts.append(self._current)
            self._advance()
            if self._current in ("+", "-") and self._current:
                parts.append(self._current)
                self._advance()
            self._take_digits(parts)
        kind = TokenType.REALNUM if is_real else TokenType.INTEGER
        return Token(kind, "".join(parts), self._line, self._column)

    def _read_string(self) -> Token:
        start_line, start_column = self._line, self._column
        parts: list = []
        self._advance()
        while self._current and self._current != '"':
            if self._current == "\\":
                self._advance()
                parts.append(_ESCAPES.get(self._current, "\\" + self._current))
            else:
                parts.append(self._current)
            self._advance()
        if self._current != '"':
            return Token(TokenType.ERROR, "Unterminated string", start_line, start_column)
        self._advance()
        return Token(TokenType.STRINGLIT, "".join(parts), self._line, self._column)

    def _read_word(self) -> str:
        parts: list = []
        while self._current and self._current in _WORD:
            parts.append(self._current)
            self._advance()
        return "".join(parts)

    def _read_identifier_or_keyword(self) -> Token:
        start_line, start_column = self._line, self._column
        word = self._read_word()
        return Token(KEYWORDS.get(word, TokenType.IDENTIFIER), word, start_line, start_column)

    def _read_environment_variable(self) -> Token:
        start_line, start_column = self._line, self._column
        self._advance()
        name = self._read_word()
        if not name:
            return Token(
                TokenType.ERROR,
                "Invalid environment variable name",
                start_line,
                start_column,
            )
        return Token(TokenType.ENV_VAR, name, start_line, start_column)

    def next_token(self) -> Token:
        """Consume and return the next token."""
        self._skip_whitespace()
        self._skip_comment()
        self._skip_whitespace()

        char = self._current
        if not char:
            return Token(TokenType.END_OF_FILE, "", self._line, self._column)
        if char in _DIGITS or (char in ("+", "-") and self._peek() in _DIGITS and self._peek()):
            return self._read_number()
        if char == '"':
            return self._read_string()
        if char == "$":
            return self._read_environment_variable()
        if char in _LETTERS or char == "_":
            return self._read_identifier_or_keyword()

        line, column = self._line, self._column
        self._advance()
        if char in _SINGLE:
            return Token(_SINGLE[char], char, line, column)
        if char in _WITH_EQUALS:
            plain, combined = _WITH_EQUALS[char]
            if self._current == "=":
                self._advance()
                return Token(combined, char + "=", line, column)
            if plain is TokenType.ERROR:
                return Token(plain, f"Unexpected character '{char}'", line, column)
            return Token(plain, char, line, column)
        return Token(TokenType.ERROR, f"Unexpected character '{char}'", line, column)

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        saved = (self._position, self._line, self._column, self._current)
        token = self.next_token()
        self._position, self._line, self._column, self._current = saved
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, stopping before end of file."""
        while True:
            token = self.next_token()
            if token.type is TokenType.END_OF_FILE:
                return
            yield token