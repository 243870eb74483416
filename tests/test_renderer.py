import pytest

from mdhtml.lexer import lex
from mdhtml.parser import Node, parse
from mdhtml.renderer import TAG_NAMES, closing_tag, opening_tag, render
from mdhtml.tokens import Token, TokenType

T = TokenType


def to_html(data):
    return render(data, parse(data, lex(data)))


def test_plain_text_is_copied_from_data():
    data = b"hello world"
    assert opening_tag(data, Token(T.PLAIN_TEXT, 6, 11)) == "world"
    assert closing_tag(Token(T.PLAIN_TEXT, 6, 11)) == ""


def test_single_char_tokens_take_one_byte():
    data = b"_*`"
    assert opening_tag(data, Token(T.UNDERSCORE, 0, 1)) == "_"
    assert opening_tag(data, Token(T.ASTERISK, 1, 2)) == "*"
    assert opening_tag(data, Token(T.BACKTICK, 2, 3)) == "`"


def test_space_is_single_blank():
    assert opening_tag(b"      ", Token(T.SPACE, 0, 6)) == " "


@pytest.mark.parametrize("kind", sorted(TAG_NAMES))
def test_tagged_kinds_open_and_close_symmetrically(kind):
    if kind == T.CODE_BLOCK:
        opened = opening_tag(b"", Token(kind, 0, 0))
    else:
        opened = opening_tag(b"", Token(kind))
    closed = closing_tag(Token(kind))
    assert opened.startswith("<") and opened.endswith(">")
    assert closed == "</" + opened[1:]


@pytest.mark.parametrize(
    "kind",
    [T.TABLE_LEFT_ALIGN, T.TABLE_RIGHT_ALIGN, T.TABLE_BODY_START, T.LINK, T.NIL],
)
def test_untagged_kinds_emit_nothing(kind):
    assert opening_tag(b"", Token(kind)) == ""
    assert closing_tag(Token(kind)) == ""


def test_code_block_carries_its_text():
    data = b"    code"
    opened = opening_tag(data, Token(T.CODE_BLOCK, 0, 8))
    assert opened == "<pre>" + data.decode()


def test_render_empty_tree():
    assert render(b"", Node()) == ""
    assert render(b"", None) == ""


def test_untagged_node_renders_only_children():
    data = b"abc"
    root = Node()
    cell = root.add_child(Node(Token(T.TABLE_LEFT_ALIGN)))
    cell.add_child(Node(Token(T.PLAIN_TEXT, 0, 3)))
    assert render(data, root) == "abc"


def test_heading():
    assert to_html(b"# Hi") == "<h1>Hi</h1>"


def test_italic_and_bold():
    assert to_html(b"_a_") == "<em>a</em>"
    assert to_html(b"__a__") == "<strong>a</strong>"


def test_unordered_list():
    assert to_html(b"* a\r\n* b") == "<ul><li> a </li><li> b</li></ul>"


def test_indented_code_block_keeps_source_text():
    data = b"    code"
    assert to_html(data) == "<pre>" + data.decode() + "</pre>"


def test_invalid_utf8_round_trips():
    data = b"\xff"
    html = render(data, parse(data, lex(data)))
    assert html.encode("utf-8", "surrogateescape") == data