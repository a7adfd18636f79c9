"""Token types and Token dataclass for the Lox scanner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    """Every distinct token the Lox scanner can produce."""

    # Sentinels
    EOF = auto()
    ILLEGAL = auto()

    # Punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()

    # Operators, plain and compound (=) forms
    BANG = auto()
    BANG_EQUAL = auto()         # !=
    EQUAL = auto()
    EQUAL_EQUAL = auto()        # ==
    LESS = auto()
    LESS_EQUAL = auto()         # <=
    GREATER = auto()
    GREATER_EQUAL = auto()      # >=
    MINUS = auto()
    MINUS_EQUAL = auto()        # -=
    PLUS = auto()
    PLUS_EQUAL = auto()         # +=
    SLASH = auto()
    SLASH_EQUAL = auto()        # /=
    STAR = auto()
    STAR_EQUAL = auto()         # *=

    # Literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # Keywords
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


# Map keyword strings to token types (case-sensitive)
KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType({
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
})

# Operators that take an optional trailing '=' to form the compound variant
COMPOUND_OPERATORS: MappingProxyType[str, tuple[TokenType, TokenType]] = MappingProxyType({
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    "-": (TokenType.MINUS, TokenType.MINUS_EQUAL),
    "+": (TokenType.PLUS, TokenType.PLUS_EQUAL),
    "*": (TokenType.STAR, TokenType.STAR_EQUAL),
})

PUNCTUATION: MappingProxyType[str, TokenType] = MappingProxyType({
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
})

_LITERALS = frozenset({TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING})


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the scanner.

    ``value`` holds the payload of literal tokens: the name of an
    identifier, the parsed float of a number, or the text between the
    quotes of a string. It is ``None`` for every other type.

    Every token, ``ILLEGAL`` included, records the 1-based line and
    column of its first character.
    """

    type: TokenType
    value: str | float | None
    lexeme: str
    line: int
    column: int
    file: str = "<unknown>"

    @property
    def is_keyword(self) -> bool:
        return self.type in _KEYWORD_TYPES

    def __repr__(self) -> str:
        if self.type in _LITERALS:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        if self.type is TokenType.ILLEGAL:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"


_KEYWORD_TYPES = frozenset(KEYWORDS.values())
