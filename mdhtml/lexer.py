"""Byte-level lexer that turns CRLF-terminated markdown into tokens."""

from __future__ import annotations

from .analysis import analyze, collapse_newline_runs, is_trailing_space
from .tokens import Token, TokenType

_CR = 0x0D
_LF = 0x0A
_SPACE = 0x20
_TAB = 0x09
_PIPE = ord("|")
_DASH = ord("-")
_COLON = ord(":")
_BACKSLASH = ord("\\")

_PLAIN_STOPS = frozenset(b"\r *`_~")

_CHAR_TOKENS = {
    ord("*"): TokenType.ASTERISK,
    ord("`"): TokenType.BACKTICK,
    ord(">"): TokenType.QUOTE,
    ord("_"): TokenType.UNDERSCORE,
    ord("~"): TokenType.TILDE,
    ord("-"): TokenType.DASH,
    ord("+"): TokenType.PLUS,
}


class Lexer:
    """Scans a byte string and produces the token stream for it."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    def tokenize(self) -> list[Token]:
        """Scan the whole input and return the analysed token list."""
        tokens: list[Token] = []
        self.pos = 0
        while self.pos < len(self.data):
            in_table = self._table(tokens)
            if not (in_table and self._table_starts_with_pipe()):
                tok = self._next_token()
                if collapse_newline_runs(tokens, tok):
                    pass
                elif is_trailing_space(tokens, tok):
                    tokens.pop()
                else:
                    tokens.append(tok)
            self.pos += 1
        return analyze(self.data, tokens)

    # -- low-level helpers -------------------------------------------------

    def _at(self, pos: int) -> int:
        if pos < 0 or pos >= len(self.data):
            raise IndexError(f"position {pos} is outside the input")
        return self.data[pos]

    def _eof(self, pos: int) -> bool:
        return pos >= len(self.data)

    def _eol(self, pos: int) -> bool:
        return self._eof(pos) or self._at(pos) in (_CR, _LF, 0)

    def _is_blank(self, pos: int) -> bool:
        return self._at(pos) in (_SPACE, _TAB)

    def _line_beginning(self) -> int:
        i = self.pos
        while i != 0:
            if self._at(i) == _LF:
                return i + 1
            i -= 1
        return i

    def _skip_line(self, pos: int) -> int:
        found = self.data.find(b"\r", pos) if pos < len(self.data) else -1
        if found >= 0:
            return found + 2
        return max(pos, len(self.data))

    def _l_trim(self, beg: int) -> int:
        i = beg
        while i < len(self.data) and self._is_blank(i):
            i += 1
        return i

    def _r_trim(self, end: int) -> int:
        i = end
        while i > 0:
            if not self._is_blank(i):
                return i + 1
            i -= 1
        return i

    def _char_token(self, kind: TokenType) -> Token:
        return Token(kind, self.pos, self.pos + 1)

    def _next_token(self) -> Token:
        tok = self._single()
        if tok.type == TokenType.NIL:
            tok = self._plain_text()
        return tok

    # -- tables ------------------------------------------------------------

    def _table(self, tokens: list[Token]) -> bool:
        start = self._line_beginning()
        if not self._is_table(start):
            return False
        tokens.append(Token(TokenType.TABLE_START))
        header_pipes, _ = self._pipe_count(start)
        tokens.append(Token(TokenType.TABLE_HEADER_START))
        self._append_headers(tokens, header_pipes, start)
        tokens.append(Token(TokenType.TABLE_HEADER_END))
        tokens.append(Token(TokenType.TABLE_BODY_START))
        i = self._skip_line(self._skip_line(start))
        while self._pipe_count(i)[0] == header_pipes:
            self._append_row(tokens, header_pipes, i)
            i = self._skip_line(i)
        self.pos = i - 1
        tokens.append(Token(TokenType.TABLE_BODY_END))
        tokens.append(Token(TokenType.TABLE_END))
        return True

    def _is_table(self, start: int) -> bool:
        header_pipes, i = self._pipe_count(start)
        if header_pipes == 0:
            return False
        i += 2
        align_pipes, _ = self._pipe_count(i)
        if align_pipes == 0 or header_pipes != align_pipes:
            return False
        return self._aligns_correct(i)

    def _table_starts_with_pipe(self) -> bool:
        return self._at(self.pos) == _PIPE and not self._ignore_pipe(self.pos)

    def _pipe_count(self, start: int) -> tuple[int, int]:
        pipes = 0
        i = start
        while not self._eol(i):
            if self._at(i) == _PIPE and not self._ignore_pipe(i):
                pipes += 1
            i += 1
        return pipes, i

    def _ignore_pipe(self, pos: int) -> bool:
        size = len(self.data)
        if pos - 1 < 0:
            return True
        if (
            (pos == 0 or self._at(pos - 1) == _LF)
            and pos + 1 < size
            and self._at(pos + 1) == _SPACE
        ):
            return True
        if pos + 1 < size and self._at(pos + 1) == _CR and self._is_blank(pos - 1):
            return True
        return self._at(pos - 1) == _BACKSLASH

    def _aligns_correct(self, start: int) -> bool:
        size = len(self.data)
        i = start
        while i < size and self._at(i) != _CR:
            if self._ignore_pipe(i) or self._is_blank(i) or self._at(i) == _DASH:
                i += 1
                continue
            if self._at(i) == _COLON and not (
                i - 1 < 0
                or self._at(i - 1) == _LF
                or self._is_blank(i - 1)
                or i + 1 == size
                or self._at(i + 1) == _CR
                or self._is_blank(i + 1)
            ):
                return False
            if i + 1 != size and self._is_blank(i + 1) and self._at(i) != _PIPE:
                i += 1
                while i < size and self._at(i) not in (_DASH, _PIPE, _CR):
                    i += 1
                if self._at(i) == _DASH:
                    return False
            i += 1
        return True

    def _next_pipe(self, pos: int) -> int:
        i = pos
        while (self._at(i) != _PIPE and not self._eol(i)) or self._ignore_pipe(i):
            i += 1
        return i

    def _cell_l_trim(self, beg: int) -> int:
        if self._at(beg) == _PIPE and self._ignore_pipe(beg):
            beg += 1
        return self._l_trim(beg)

    def _cell_r_trim(self, end: int) -> int:
        if self._at(end) == _CR:
            end -= 1
        if self._ignore_pipe(end):
            end -= 1
        return self._r_trim(end)

    def _align_type(self, beg: int, end: int) -> TokenType:
        left = self._at(beg) == _COLON
        right = self._at(end - 1) == _COLON
        if left and right:
            return TokenType.TABLE_CENTER_ALIGN
        if left:
            return TokenType.TABLE_LEFT_ALIGN
        if right:
            return TokenType.TABLE_RIGHT_ALIGN
        return TokenType.TABLE_CENTER_ALIGN

    def _lex_span(self, tokens: list[Token], start: int, stop: int) -> None:
        self.pos = start
        while self.pos < stop:
            tokens.append(self._next_token())
            self.pos += 1

    def _append_headers(self, tokens: list[Token], pipes: int, pos: int) -> None:
        header = pos
        align = self._skip_line(pos)
        tokens.append(Token(TokenType.TABLE_ROW))
        for _ in range(pipes + 1):
            header_start = header
            align_start = align
            header = self._next_pipe(header) - 1
            align = self._next_pipe(align) - 1
            header_start = self._cell_l_trim(header_start)
            header = self._cell_r_trim(header)
            kind = self._align_type(
                self._cell_l_trim(align_start), self._cell_r_trim(align)
            )
            tokens.append(Token(kind, header_start, header_start))
            self._lex_span(tokens, header_start, header)
            header = self._next_pipe(header) + 1
            align = self._next_pipe(align) + 1

    def _append_row(self, tokens: list[Token], pipes: int, pos: int) -> None:
        i = pos
        tokens.append(Token(TokenType.TABLE_ROW, i, i))
        for _ in range(pipes + 1):
            start = i
            i = self._next_pipe(i)
            start = self._cell_l_trim(start)
            i = self._cell_r_trim(i - 1)
            tokens.append(Token(TokenType.TABLE_COL, start, start))
            self._lex_span(tokens, start, i)
            i = self._next_pipe(i) + 1

    # -- single tokens -----------------------------------------------------

    def _single(self) -> Token:
        char = self._at(self.pos)
        if char == _CR:
            return self._newline()
        if char == _SPACE:
            return self._space()
        if char == ord("#"):
            return self._header()
        if char == ord("!"):
            return self._image()
        if char == ord("["):
            return self._link()
        if ord("1") <= char <= ord("9"):
            return self._digit()
        kind = _CHAR_TOKENS.get(char)
        return self._char_token(kind) if kind is not None else Token()

    def _newline(self) -> Token:
        if self.pos < len(self.data) - 1 and self._at(self.pos + 1) == _LF:
            tok = Token(TokenType.NEWLINE, self.pos, self.pos + 2)
            self.pos += 1
            return tok
        return Token()

    def _space(self) -> Token:
        i = self.pos
        while i < len(self.data) and self._at(i) == _SPACE:
            i += 1
        tok = Token(TokenType.SPACE, self.pos, i)
        self.pos = i - 1
        return tok

    def _header(self) -> Token:
        size = len(self.data)
        i = self.pos
        while i < size:
            char = self._at(i)
            if char == ord("#"):
                if i - self.pos == 6:
                    return Token()
                i += 1
                continue
            if char == _CR:
                return Token()
            if char == _SPACE:
                break
            return self._plain_text()
        for j in range(i, size):
            if self._is_blank(j):
                continue
            if self._at(j) == _CR:
                return Token()
            break
        tok = Token(TokenType(int(TokenType.H1) + i - self.pos - 1), self.pos, i)
        self.pos = i
        return tok

    def _bracket_end(self, i: int) -> tuple[int, int]:
        depth = 1
        size = len(self.data)
        while i < size and depth != 0 and self._at(i) != _CR:
            char = self._at(i)
            if char == ord("["):
                depth += 1
            elif char == ord("]"):
                depth -= 1
            i += 1
        return i, depth

    def _image(self) -> Token:
        size = len(self.data)
        if self.pos + 1 < size and self._at(self.pos + 1) != ord("["):
            return self._char_token(TokenType.PLAIN_TEXT)
        i, depth = self._bracket_end(self.pos + 2)
        if depth != 0 or i >= size or self._at(i) != ord("("):
            return self._char_token(TokenType.PLAIN_TEXT)
        i += 1
        depth = 0
        while i < size and self._at(i) != _CR:
            char = self._at(i)
            if char == ord("("):
                depth += 1
            elif char == ord(")"):
                if depth:
                    depth -= 1
                else:
                    tok = Token(TokenType.IMG, self.pos, i + 1)
                    self.pos = i
                    return tok
            i += 1
        return self._char_token(TokenType.PLAIN_TEXT)

    def _link(self) -> Token:
        size = len(self.data)
        i, depth = self._bracket_end(self.pos + 1)
        if depth != 0 or self._at(i) != ord("("):
            return self._char_token(TokenType.PLAIN_TEXT)
        i += 1
        while i < size and self._at(i) != _CR:
            char = self._at(i)
            if char == ord("("):
                return self._char_token(TokenType.PLAIN_TEXT)
            if char == ord(")"):
                tok = Token(TokenType.LINK, self.pos, i + 1)
                self.pos = i
                return tok
            i += 1
        return self._char_token(TokenType.PLAIN_TEXT)

    def _digit(self) -> Token:
        i = self.pos
        while i > 0 and self._at(i) == _SPACE:
            i -= 1
        if not ((i == self.pos and i == 0) or self._at(i) != _CR):
            return Token(TokenType.PLAIN_TEXT, self.pos, self.pos + 1)
        for i in range(self.pos, len(self.data)):
            char = self._at(i)
            if ord("0") <= char <= ord("9"):
                continue
            if char in (ord("."), ord(")")):
                kind = (
                    TokenType.ORDERED_LIST_ITEM1
                    if char == ord(".")
                    else TokenType.ORDERED_LIST_ITEM2
                )
                tok = Token(kind, self.pos, i + 1)
                self.pos = i
                return tok
            tok = Token(TokenType.PLAIN_TEXT, self.pos, i)
            self.pos = i - 1
            return tok
        return Token(TokenType.PLAIN_TEXT, self.pos, self.pos + 1)

    def _plain_text(self) -> Token:
        i = self.pos
        size = len(self.data)
        while i < size and self.data[i] not in _PLAIN_STOPS:
            i += 1
        if i == self.pos:
            raise ValueError(f"bare carriage return at offset {self.pos}")
        tok = Token(TokenType.PLAIN_TEXT, self.pos, i)
        self.pos = i - 1
        return tok


def lex(data: bytes) -> list[Token]:
    """Tokenize ``data`` and return the analysed token list."""
    return Lexer(data).tokenize()