"""Token kinds and the token record produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Kinds of lexical tokens, numbered in a fixed order."""

    NIL = 0
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6
    NEWLINE = 7
    SPACE = 8
    ASTERISK = 9
    BACKTICK = 10
    DASH = 11
    PLUS = 12
    QUOTE = 13
    UNDERSCORE = 14
    TILDE = 15
    PLAIN_TEXT = 16
    LINK = 17
    IMG = 18
    UNORDERED_LIST = 19
    UNORDERED_LIST_ITEM1 = 20
    UNORDERED_LIST_ITEM2 = 21
    UNORDERED_LIST_ITEM3 = 22
    ORDERED_LIST = 23
    ORDERED_LIST_ITEM1 = 24
    ORDERED_LIST_ITEM2 = 25
    TABLE_START = 26
    TABLE_HEADER_START = 27
    TABLE_HEADER_END = 28
    TABLE_BODY_START = 29
    TABLE_BODY_END = 30
    TABLE_LEFT_ALIGN = 31
    TABLE_CENTER_ALIGN = 32
    TABLE_RIGHT_ALIGN = 33
    TABLE_ROW = 34
    TABLE_COL = 35
    TABLE_END = 36
    CODE_LINE = 37
    CODE_BLOCK = 38
    BOLD_START = 39
    BOLD_END = 40
    ITALIC_START = 41
    ITALIC_END = 42
    STRIKE_THROUGH = 43


@dataclass(frozen=True)
class Token:
    """A token: its kind and the byte span it covers in the source."""

    type: TokenType = TokenType.NIL
    start: int = 0
    end: int = 0

    def describe(self, data: bytes) -> str:
        """Return a one-line debug description of the token within ``data``."""
        text = data[self.start:self.end].decode("utf-8", errors="replace")
        return f"Type: {int(self.type)} Val: {text}({self.start}, {self.end})"