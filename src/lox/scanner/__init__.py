"""Lox scanner — pull-based tokenizer with error-tolerant recovery."""

from lox.scanner.tokens import KEYWORDS, Token, TokenType
from lox.scanner.scanner import Diagnostic, Scanner, Severity

__all__ = ["KEYWORDS", "Token", "TokenType", "Scanner", "Diagnostic", "Severity"]
