"""Command line entry point: convert a markdown file to HTML."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .lexer import lex
from .parser import parse
from .renderer import render


def convert(data: bytes) -> str:
    """Convert markdown bytes to an HTML string."""
    return render(data, parse(data, lex(data)))


def _printable(text: str) -> str:
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def main(argv: list[str] | None = None) -> int:
    """Read a markdown file, print debug output and write the HTML file."""
    parser = argparse.ArgumentParser(description="Render markdown to HTML.")
    parser.add_argument("input", nargs="?", default="README.md")
    parser.add_argument("-o", "--output", default="rendered.html")
    args = parser.parse_args(argv)

    try:
        data = Path(args.input).read_bytes()
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1

    for token in lex(data):
        print(token.describe(data))

    result = convert(data)
    Path(args.output).write_bytes(result.encode("utf-8", "surrogateescape"))

    print("Render result:")
    print(_printable(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())