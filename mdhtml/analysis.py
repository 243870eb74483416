"""Second pass over the token stream: code spans, lists and emphasis."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from .tokens import Token, TokenType

_LIST_MARKERS = {
    TokenType.ASTERISK: TokenType.UNORDERED_LIST_ITEM1,
    TokenType.DASH: TokenType.UNORDERED_LIST_ITEM2,
    TokenType.PLUS: TokenType.UNORDERED_LIST_ITEM3,
}

_EMPHASIS_MARKS = (TokenType.ASTERISK, TokenType.UNDERSCORE)


def collapse_newline_runs(tokens: Sequence[Token], current: Token) -> bool:
    """Tell whether ``current`` would make a third newline in a row."""
    if len(tokens) < 2:
        return False
    return (
        tokens[-1].type == tokens[-2].type == current.type == TokenType.NEWLINE
    )


def is_trailing_space(tokens: Sequence[Token], current: Token) -> bool:
    """Tell whether the last token is a space that ``current`` newline ends."""
    if not tokens:
        return False
    return tokens[-1].type == TokenType.SPACE and current.type == TokenType.NEWLINE


def drop_trailing_newlines(tokens: Sequence[Token]) -> list[Token]:
    """Return the tokens without newlines at the end, keeping the first token."""
    end = len(tokens) - 1
    while end > 0 and tokens[end].type == TokenType.NEWLINE:
        end -= 1
    return list(tokens[: end + 1])


def analyze(data: bytes, tokens: Sequence[Token]) -> list[Token]:
    """Refine a raw token stream into code spans, list items and emphasis."""
    result = drop_trailing_newlines(tokens)
    pos = 0
    while pos < len(result):
        kind = result[pos].type
        if kind == TokenType.SPACE:
            _indented_code(result, pos)
        elif kind in _LIST_MARKERS:
            _list_marker(result, pos)
        elif kind == TokenType.UNDERSCORE:
            _emphasis(result, pos)
        elif kind == TokenType.BACKTICK:
            _backtick(data, result, pos)
        pos += 1
    return result


def _previous(tokens: list[Token], pos: int) -> Token:
    return tokens[pos - 1] if pos > 0 else Token()


def _indented_code(tokens: list[Token], pos: int) -> None:
    cur = tokens[pos]
    if cur.end - cur.start < 4:
        return
    if pos != 0 and tokens[pos - 1].type != TokenType.NEWLINE:
        return
    stop = next(
        (
            idx
            for idx in range(pos + 1, len(tokens))
            if tokens[idx].type == TokenType.NEWLINE
        ),
        None,
    )
    if stop is None:
        # The block runs to the end of the input.
        tokens[pos] = Token(TokenType.CODE_BLOCK, cur.start, tokens[-1].end)
        del tokens[pos + 1:]
        return
    tokens[pos] = Token(TokenType.CODE_BLOCK, cur.start, tokens[stop].end)
    del tokens[pos + 1: stop + 1]


def _list_marker(tokens: list[Token], pos: int) -> None:
    prev = _previous(tokens, pos).type
    before = _previous(tokens, pos - 1).type
    if (
        prev == TokenType.NEWLINE
        or (prev == TokenType.SPACE and before == TokenType.NEWLINE)
        or prev == TokenType.NIL
    ):
        tokens[pos] = replace(tokens[pos], type=_LIST_MARKERS[tokens[pos].type])


def _opening_run(tokens: list[Token], pos: int, mark: TokenType) -> tuple[int, int]:
    idx = pos
    count = 1
    while idx < len(tokens):
        kind = tokens[idx].type
        if kind == mark:
            count += 1
            idx += 1
            continue
        if kind in (TokenType.SPACE, TokenType.NEWLINE) and kind not in _EMPHASIS_MARKS:
            return 0, 0
        break
    return idx, min(count, 2)


def _closing_run(tokens: list[Token], pos: int, mark: TokenType) -> tuple[int, int]:
    idx = pos
    count = 0
    while idx < len(tokens):
        kind = tokens[idx].type
        if kind == mark:
            count += 1
            if count >= 2:
                return idx + 1, 2
        elif count == 1:
            return idx, count
        elif kind in _EMPHASIS_MARKS:
            break
        elif kind == TokenType.NEWLINE:
            if idx + 1 >= len(tokens) or tokens[idx + 1].type == TokenType.NEWLINE:
                return 0, 0
        idx += 1
    return idx, count


def _emphasis(tokens: list[Token], pos: int) -> None:
    mark = tokens[pos].type
    if pos + 1 >= len(tokens):
        return
    idx, opening = _opening_run(tokens, pos + 1, mark)
    if opening == 0:
        return
    while idx < len(tokens):
        kind = tokens[idx].type
        if kind == mark:
            break
        if kind == TokenType.TABLE_COL:
            return
        idx += 1
    idx, closing = _closing_run(tokens, idx, mark)
    if closing == 0:
        return
    _replace_with_emphasis(tokens, pos, idx - closing, min(opening, closing))


def _replace_with_emphasis(tokens: list[Token], beg: int, end: int, length: int) -> None:
    if end >= len(tokens):
        return
    if length == 2:
        opener, closer = TokenType.BOLD_START, TokenType.BOLD_END
    else:
        opener, closer = TokenType.ITALIC_START, TokenType.ITALIC_END
    first = tokens[beg].start
    last = tokens[end].start
    tokens[beg] = Token(opener, first, first + length)
    tokens[end] = Token(closer, last, last + length)
    if length == 1:
        return
    del tokens[end + 1: end + 2]
    del tokens[beg + 1: beg + 2]


def _backtick(data: bytes, tokens: list[Token], pos: int) -> None:
    if pos + 1 == len(tokens):
        return
    following = tokens[pos + 1].type
    if following not in (TokenType.BACKTICK, TokenType.NEWLINE):
        _code_line(tokens, pos)
    elif (
        pos + 2 < len(tokens)
        and following == TokenType.BACKTICK
        and tokens[pos + 2].type == TokenType.BACKTICK
    ):
        _fenced_code(data, tokens, pos)


def _code_line(tokens: list[Token], pos: int) -> None:
    for idx in range(pos + 1, len(tokens)):
        kind = tokens[idx].type
        if kind == TokenType.BACKTICK:
            tokens[pos] = Token(
                TokenType.CODE_LINE, tokens[pos].start + 1, tokens[idx].start
            )
            del tokens[pos + 1: idx + 1]
            return
        if kind == TokenType.NEWLINE:
            return


def _next_char(data: bytes, char: bytes, start: int) -> int:
    found = data.find(char, start)
    return found if found >= 0 else max(start, len(data))


def _fenced_code(data: bytes, tokens: list[Token], pos: int) -> None:
    anchor = next(
        (tok for tok in tokens if tok.type == TokenType.NEWLINE),
        replace(tokens[pos], start=tokens[pos].start + 1),
    )
    for idx in range(pos + 3, len(tokens) - 2):
        if (
            tokens[idx].type
            == tokens[idx + 1].type
            == tokens[idx + 2].type
            == TokenType.BACKTICK
        ):
            start = _next_char(data, b"`", anchor.start + 2) + 3
            tokens[pos] = Token(TokenType.CODE_BLOCK, start, tokens[idx].start)
            del tokens[pos + 1: idx + 3]
            return