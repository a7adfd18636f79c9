"""Lox scanner CLI entry point.

Usage:
    lox                     Start an interactive prompt (one line at a time)
    lox <file.lox>          Scan a file and print its token stream
    lox --version           Show the version

Options:
    -v, --verbose           Log scanner diagnostics as they are found
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from lox.scanner import Scanner, Token, TokenType

# Exit statuses from BSD sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

PROMPT = "lox> "


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]

    verbose = any(a in ("-v", "--verbose") for a in args)
    args = [a for a in args if a not in ("-v", "--verbose")]
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not args:
        return _cmd_prompt()

    command = args[0]

    if command in ("--help", "-h"):
        print(__doc__.strip())
        return EX_OK

    if command == "--version":
        from lox import __version__
        print(f"lox {__version__}")
        return EX_OK

    if len(args) > 1:
        print("Usage: lox [script]", file=sys.stderr)
        return EX_USAGE

    return _cmd_run_file(Path(command))


def _cmd_run_file(filepath: Path) -> int:
    """Scan a whole file; any ILLEGAL token makes the run fail."""
    try:
        source = filepath.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        return EX_NOINPUT
    except UnicodeDecodeError as e:
        print(f"Error: {filepath} is not valid UTF-8: {e.reason}", file=sys.stderr)
        return EX_DATAERR
    except OSError as e:
        print(f"Error: cannot read {filepath}: {e.strerror}", file=sys.stderr)
        return EX_NOINPUT

    tokens = _scan(source, str(filepath))
    if any(tok.type is TokenType.ILLEGAL for tok in tokens):
        return EX_DATAERR
    return EX_OK


def _cmd_prompt() -> int:
    """Scan stdin line by line until it is closed."""
    print("Interactive mode")
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return EX_OK
        _scan(line, "<stdin>")


def _scan(source: str, filename: str) -> list[Token]:
    """Scan `source`, print its tokens to stdout and diagnostics to stderr."""
    scanner = Scanner(source, filename)
    tokens = scanner.scan_tokens()

    for tok in tokens:
        print(tok)
    for diagnostic in scanner.diagnostics:
        print(diagnostic, file=sys.stderr)
    return tokens


if __name__ == "__main__":
    sys.exit(main())
