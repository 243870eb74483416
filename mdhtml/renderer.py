"""Renders a document tree as HTML."""

from __future__ import annotations

from .parser import Node
from .tokens import Token, TokenType

TAG_NAMES: dict[TokenType, str] = {
    TokenType.H1: "h1",
    TokenType.H2: "h2",
    TokenType.H3: "h3",
    TokenType.H4: "h4",
    TokenType.H5: "h5",
    TokenType.H6: "h6",
    TokenType.UNORDERED_LIST: "ul",
    TokenType.UNORDERED_LIST_ITEM1: "li",
    TokenType.UNORDERED_LIST_ITEM2: "li",
    TokenType.UNORDERED_LIST_ITEM3: "li",
    TokenType.ORDERED_LIST: "ol",
    TokenType.ORDERED_LIST_ITEM1: "li",
    TokenType.ORDERED_LIST_ITEM2: "li",
    TokenType.CODE_BLOCK: "pre",
    TokenType.BOLD_START: "strong",
    TokenType.ITALIC_START: "em",
    TokenType.TABLE_START: "table",
    TokenType.TABLE_HEADER_START: "thead",
    TokenType.TABLE_CENTER_ALIGN: "th",
    TokenType.TABLE_ROW: "tr",
    TokenType.TABLE_COL: "td",
}

_SINGLE_CHARS = frozenset(
    {TokenType.UNDERSCORE, TokenType.ASTERISK, TokenType.BACKTICK}
)


def _text(data: bytes, start: int, end: int) -> str:
    return data[start:end].decode("utf-8", errors="surrogateescape")


def opening_tag(data: bytes, token: Token) -> str:
    """Return the text emitted when entering a node holding ``token``."""
    kind = token.type
    if kind == TokenType.PLAIN_TEXT:
        return _text(data, token.start, token.end)
    if kind in _SINGLE_CHARS:
        return _text(data, token.start, token.start + 1)
    if kind == TokenType.SPACE:
        return " "
    name = TAG_NAMES.get(kind)
    if not name:
        return ""
    tag = f"<{name}>"
    if kind == TokenType.CODE_BLOCK:
        tag += _text(data, token.start, token.end)
    return tag


def closing_tag(token: Token) -> str:
    """Return the text emitted when leaving a node holding ``token``."""
    name = TAG_NAMES.get(token.type)
    return f"</{name}>" if name else ""


def render(data: bytes, root: Node | None) -> str:
    """Render the tree below ``root`` to an HTML string."""
    parts: list[str] = []

    def emit(node: Node) -> None:
        for child in node.children():
            parts.append(opening_tag(data, child.token))
            emit(child)
            parts.append(closing_tag(child.token))

    if root is not None:
        emit(root)
    return "".join(parts)