"""Lox scanner — hand-written, pull-based tokenizer.

Design decisions:
- Tokens are pulled one at a time with `next_token()`; nothing is buffered.
- Lexical errors never raise. They produce an ILLEGAL token plus a
  `Diagnostic`, and scanning carries on after the offending text.
- Whitespace and comments are skipped inside a loop, so arbitrarily long
  runs of them cannot exhaust the stack.
- Block comments do not nest; the first `*/` closes them.
- `_` separates digits in number literals (`1_000`), and is stripped
  before the literal is parsed as a float.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from lox.scanner.tokens import COMPOUND_OPERATORS, KEYWORDS, PUNCTUATION, Token, TokenType

logger = logging.getLogger(__name__)

NUL = "\0"
DIGIT_SEPARATOR = "_"
LINE_TERMINATORS = "\r\n"
WHITESPACE = " \t\r\n"

_STRING_STOP = '"' + LINE_TERMINATORS
_NUMBER_TAIL = DIGIT_SEPARATOR + "."


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found while scanning, with the source location it refers to."""

    message: str
    line: int
    column: int
    severity: Severity = Severity.ERROR
    file: str = "<unknown>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.severity.value}: {self.message}"


def _is_digit(ch: str) -> bool:
    return ch.isdecimal()


def _is_letter(ch: str) -> bool:
    return ch.isalpha()


class Scanner:
    """Turns Lox source text into a stream of `Token` objects.

    Usage::

        scanner = Scanner(source_text, filename="example.lox")
        for token in scanner:
            ...

    Once EOF has been returned, further calls to `next_token()` keep
    returning EOF. A scanner is not safe to share between threads.
    """

    def __init__(self, source: str, filename: str = "<unknown>") -> None:
        self.source = source
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []
        # Cursor sits before the first character until the first advance.
        self._pos = -1
        self.line = 1
        self.column = 0
        self._start = 0
        self._start_line = 1
        self._start_column = 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def has_next(self) -> bool:
        """Return True while at least one character remains unconsumed."""
        return self._pos + 1 < len(self.source)

    def next_token(self) -> Token:
        """Consume and return the next token."""
        while True:
            if not self.has_next():
                return self._eof_token()

            ch = self._advance()
            self._begin_token()

            if ch in WHITESPACE:
                continue

            if ch in PUNCTUATION:
                return self._make_token(PUNCTUATION[ch])

            if ch in COMPOUND_OPERATORS:
                plain, compound = COMPOUND_OPERATORS[ch]
                if self.peek() == "=":
                    self._advance()
                    return self._make_token(compound)
                return self._make_token(plain)

            if ch == "/":
                following = self.peek()
                if following == "/":
                    self._skip_line_comment()
                    continue
                if following == "*":
                    self._skip_block_comment()
                    continue
                if following == "=":
                    self._advance()
                    return self._make_token(TokenType.SLASH_EQUAL)
                return self._make_token(TokenType.SLASH)

            if ch == '"':
                return self._scan_string()

            if _is_digit(ch):
                return self._scan_number()

            if _is_letter(ch):
                return self._scan_identifier()

            return self._illegal(f"Unexpected character: {ch!r}")

    def scan_tokens(self) -> list[Token]:
        """Drain the scanner and return every token, ending with EOF."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    @property
    def had_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def peek(self, offset: int = 1) -> str:
        """Return the character `offset` places past the cursor, or NUL past the end."""
        idx = self._pos + offset
        if idx >= len(self.source):
            return NUL
        return self.source[idx]

    # ------------------------------------------------------------------
    # Literal assembly
    # ------------------------------------------------------------------

    def _scan_number(self) -> Token:
        """Scan a number literal, with optional `_` separators and fraction."""
        self._advance_while(
            lambda: _is_digit(self.peek())
            or (self.peek() == DIGIT_SEPARATOR and _is_digit(self.peek(2)))
        )

        following = self.peek()
        if following in _NUMBER_TAIL and not _is_digit(self.peek(2)):
            # Resynchronize past the rest of the malformed literal.
            self._advance_while(lambda: _is_digit(self.peek()) or self.peek() in _NUMBER_TAIL)
            return self._illegal(f"Malformed number literal: {self._lexeme()!r}")

        if following == ".":
            self._advance()  # consume '.'
            self._advance_while(lambda: _is_digit(self.peek()))

        value = float(self._lexeme().replace(DIGIT_SEPARATOR, ""))
        return self._make_token(TokenType.NUMBER, value)

    def _scan_string(self) -> Token:
        """Scan a double-quoted string; strings may not span lines."""
        self._advance_while(lambda: self.peek() not in _STRING_STOP)

        if self.peek() != '"':
            return self._illegal("Unterminated string")

        self._advance()  # consume closing quote
        return self._make_token(TokenType.STRING, self.source[self._start + 1 : self._pos])

    def _scan_identifier(self) -> Token:
        """Scan an identifier or keyword."""
        self._advance_while(lambda: _is_letter(self.peek()) or _is_digit(self.peek()))

        word = self._lexeme()
        keyword = KEYWORDS.get(word)
        if keyword is not None:
            return self._make_token(keyword)
        return self._make_token(TokenType.IDENTIFIER, word)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _skip_line_comment(self) -> None:
        """Skip from // up to, not including, the line terminator."""
        self._advance_while(lambda: self.peek() not in LINE_TERMINATORS)

    def _skip_block_comment(self) -> None:
        """Skip from /* through the first */."""
        self._advance()  # consume '*'
        while self.has_next():
            if self.peek() == "*" and self.peek(2) == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        self._report("Unterminated block comment", Severity.WARNING)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _advance(self) -> str:
        """Move the cursor forward one character and return it."""
        self.line, self.column = self._next_position()
        self._pos += 1
        return self.source[self._pos]

    def _advance_while(self, condition: Callable[[], bool]) -> None:
        while self.has_next() and condition():
            self._advance()

    def _next_position(self) -> tuple[int, int]:
        """Line and column of the character after the cursor.

        CRLF counts as a single line break.
        """
        if self._pos < 0:
            return 1, 1
        ch = self.source[self._pos]
        if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
            return self.line + 1, 1
        return self.line, self.column + 1

    def _begin_token(self) -> None:
        self._start = self._pos
        self._start_line = self.line
        self._start_column = self.column

    def _lexeme(self) -> str:
        return self.source[self._start : self._pos + 1]

    def _make_token(self, token_type: TokenType, value: str | float | None = None) -> Token:
        return Token(
            token_type, value, self._lexeme(), self._start_line, self._start_column, self.filename,
        )

    def _eof_token(self) -> Token:
        line, column = self._next_position()
        return Token(TokenType.EOF, None, "", line, column, self.filename)

    def _illegal(self, message: str) -> Token:
        self._report(message, Severity.ERROR)
        return self._make_token(TokenType.ILLEGAL)

    def _report(self, message: str, severity: Severity) -> None:
        diagnostic = Diagnostic(
            message, self._start_line, self._start_column, severity, self.filename,
        )
        self.diagnostics.append(diagnostic)
        logger.debug("%s", diagnostic)
