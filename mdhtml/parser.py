"""Builds a document tree from the analysed token stream."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator, Sequence

from .tokens import Token, TokenType

_log = logging.getLogger(__name__)

_HEADINGS = frozenset(
    {
        TokenType.H1,
        TokenType.H2,
        TokenType.H3,
        TokenType.H4,
        TokenType.H5,
        TokenType.H6,
    }
)

_LIST_CONTAINERS = {
    TokenType.UNORDERED_LIST_ITEM1: TokenType.UNORDERED_LIST,
    TokenType.UNORDERED_LIST_ITEM2: TokenType.UNORDERED_LIST,
    TokenType.UNORDERED_LIST_ITEM3: TokenType.UNORDERED_LIST,
    TokenType.ORDERED_LIST_ITEM1: TokenType.ORDERED_LIST,
    TokenType.ORDERED_LIST_ITEM2: TokenType.ORDERED_LIST,
}

_TOP_LEVEL = _HEADINGS | frozenset(_LIST_CONTAINERS)

_LEAVES = frozenset(
    {
        TokenType.PLAIN_TEXT,
        TokenType.SPACE,
        TokenType.UNDERSCORE,
        TokenType.BACKTICK,
        TokenType.CODE_BLOCK,
    }
)

_OPENERS = frozenset(
    {
        TokenType.BOLD_START,
        TokenType.ITALIC_START,
        TokenType.TABLE_START,
        TokenType.TABLE_HEADER_START,
        TokenType.TABLE_BODY_START,
    }
)

_CLOSERS = frozenset({TokenType.BOLD_END, TokenType.ITALIC_END})

_ALIGNS = frozenset(
    {
        TokenType.TABLE_LEFT_ALIGN,
        TokenType.TABLE_CENTER_ALIGN,
        TokenType.TABLE_RIGHT_ALIGN,
    }
)


class Node:
    """A tree node holding one token and an ordered list of children."""

    def __init__(self, token: Token | None = None, parent: Node | None = None) -> None:
        self.token = token if token is not None else Token()
        self.parent = parent
        self._children: list[Node] = []

    def add_child(self, child: Node) -> Node:
        """Append ``child`` as the last child of this node and return it."""
        child.parent = self
        self._children.append(child)
        return child

    def children(self) -> tuple[Node, ...]:
        """Return the children of this node in order."""
        return tuple(self._children)

    def __repr__(self) -> str:
        return f"Node({self.token!r}, children={len(self._children)})"


def _ancestry(node: Node | None) -> Iterator[Node]:
    while node is not None:
        yield node
        node = node.parent


def _up(node: Node, token: Token) -> Node:
    if node.parent is None:
        raise ValueError(f"unbalanced {token.type.name} token in token stream")
    return node.parent


def _climb_to(node: Node, kind: TokenType, token: Token) -> Node:
    while node.token.type != kind:
        node = _up(node, token)
    return node


def parse(data: bytes, tokens: Sequence[Token]) -> Node:
    """Build the document tree for ``tokens`` and group list items."""
    root = Node()
    cur = root
    for i, tok in enumerate(tokens):
        kind = tok.type
        if kind in _TOP_LEVEL:
            cur = root.add_child(Node(tok))
        elif kind == TokenType.NEWLINE:
            if any(node.token.type in _HEADINGS for node in _ancestry(cur)):
                cur = root
            if i + 1 >= len(tokens):
                raise ValueError("token stream ends with a newline")
            if tokens[i + 1].type == TokenType.NEWLINE:
                cur = root
            else:
                cur.add_child(Node(Token(TokenType.SPACE)))
        elif kind in _LEAVES:
            cur.add_child(Node(tok))
        elif kind in _OPENERS:
            cur = cur.add_child(Node(tok))
        elif kind in _CLOSERS:
            cur = _up(cur, tok)
        elif kind == TokenType.TABLE_HEADER_END:
            cur = _up(_climb_to(cur, TokenType.TABLE_HEADER_START, tok), tok)
        elif kind == TokenType.TABLE_BODY_END:
            cur = _up(_climb_to(cur, TokenType.TABLE_BODY_START, tok), tok)
        elif kind in _ALIGNS:
            if cur.token.type in _ALIGNS:
                cur = _up(cur, tok)
            cur = cur.add_child(Node(tok))
        elif kind == TokenType.TABLE_ROW:
            if cur.token.type == TokenType.TABLE_ROW:
                cur = _up(cur, tok)
            elif cur.token.type == TokenType.TABLE_COL:
                cur = _up(_up(cur, tok), tok)
            cur = cur.add_child(Node(tok))
        elif kind == TokenType.TABLE_COL:
            if cur.token.type == TokenType.TABLE_COL:
                cur = _up(cur, tok)
            cur = cur.add_child(Node(tok))
        elif kind == TokenType.TABLE_END:
            cur = root

    if _log.isEnabledFor(logging.DEBUG):
        _log.debug("Parse tree before processing:\n%s", format_tree(root, 2))
    root = group_lists(root)
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug("Parse tree after processing:\n%s", format_tree(root, 2))
    return root


def group_lists(root: Node) -> Node:
    """Wrap each run of equal top-level list items into a list node."""
    grouped: list[Node] = []
    for kind, run in itertools.groupby(root.children(), key=lambda n: n.token.type):
        container = _LIST_CONTAINERS.get(kind)
        if container is None:
            grouped.extend(run)
            continue
        wrapper = Node(Token(container), parent=root)
        for item in run:
            wrapper.add_child(item)
        grouped.append(wrapper)
    root._children = grouped
    return root


def format_tree(root: Node | None, indent: int) -> str:
    """Return the token kinds of the tree below ``root``, one per line."""
    if root is None:
        return ""
    pad = " " * indent
    return "".join(
        f"{pad}{int(child.token.type)}\n" + format_tree(child, indent + 2)
        for child in root.children()
    )