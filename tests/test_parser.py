import pytest

from mdhtml.parser import Node, format_tree, group_lists, parse
from mdhtml.tokens import Token, TokenType

T = TokenType


def kinds(node):
    return [child.token.type for child in node.children()]


def toks(*types):
    return [Token(t) for t in types]


def test_add_child_sets_parent_and_order():
    root = Node()
    first = root.add_child(Node(Token(T.PLAIN_TEXT)))
    second = root.add_child(Node(Token(T.SPACE)))
    assert root.children() == (first, second)
    assert first.parent is root and second.parent is root


def test_children_is_a_copy():
    root = Node()
    root.add_child(Node(Token(T.PLAIN_TEXT)))
    snapshot = root.children()
    root.add_child(Node(Token(T.SPACE)))
    assert len(snapshot) == 1
    assert len(root.children()) == 2


def test_heading_ends_at_newline():
    root = parse(b"", toks(T.H1, T.PLAIN_TEXT, T.NEWLINE, T.PLAIN_TEXT))
    assert kinds(root) == [T.H1, T.SPACE, T.PLAIN_TEXT]
    assert kinds(root.children()[0]) == [T.PLAIN_TEXT]


def test_single_newline_inside_list_item_adds_space():
    root = parse(
        b"",
        toks(
            T.UNORDERED_LIST_ITEM1,
            T.PLAIN_TEXT,
            T.NEWLINE,
            T.UNORDERED_LIST_ITEM1,
            T.PLAIN_TEXT,
        ),
    )
    assert kinds(root) == [T.UNORDERED_LIST]
    items = root.children()[0].children()
    assert [i.token.type for i in items] == [T.UNORDERED_LIST_ITEM1] * 2
    assert kinds(items[0]) == [T.PLAIN_TEXT, T.SPACE]
    assert kinds(items[1]) == [T.PLAIN_TEXT]


def test_emphasis_nests_text():
    root = parse(
        b"",
        toks(T.BOLD_START, T.PLAIN_TEXT, T.BOLD_END, T.PLAIN_TEXT),
    )
    assert kinds(root) == [T.BOLD_START, T.PLAIN_TEXT]
    assert kinds(root.children()[0]) == [T.PLAIN_TEXT]


def test_ignored_tokens_are_dropped():
    root = parse(b"", toks(T.LINK, T.IMG, T.CODE_LINE, T.TILDE, T.PLAIN_TEXT))
    assert kinds(root) == [T.PLAIN_TEXT]


def test_table_structure():
    stream = toks(
        T.TABLE_START,
        T.TABLE_HEADER_START,
        T.TABLE_ROW,
        T.TABLE_CENTER_ALIGN,
        T.PLAIN_TEXT,
        T.TABLE_LEFT_ALIGN,
        T.PLAIN_TEXT,
        T.TABLE_HEADER_END,
        T.TABLE_BODY_START,
        T.TABLE_ROW,
        T.TABLE_COL,
        T.PLAIN_TEXT,
        T.TABLE_COL,
        T.PLAIN_TEXT,
        T.TABLE_ROW,
        T.TABLE_COL,
        T.PLAIN_TEXT,
        T.TABLE_BODY_END,
        T.TABLE_END,
        T.PLAIN_TEXT,
    )
    root = parse(b"", stream)
    assert kinds(root) == [T.TABLE_START, T.PLAIN_TEXT]
    table = root.children()[0]
    assert kinds(table) == [T.TABLE_HEADER_START, T.TABLE_BODY_START]
    header, body = table.children()
    (head_row,) = header.children()
    assert kinds(head_row) == [T.TABLE_CENTER_ALIGN, T.TABLE_LEFT_ALIGN]
    assert all(kinds(cell) == [T.PLAIN_TEXT] for cell in head_row.children())
    assert kinds(body) == [T.TABLE_ROW, T.TABLE_ROW]
    first, second = body.children()
    assert kinds(first) == [T.TABLE_COL, T.TABLE_COL]
    assert kinds(second) == [T.TABLE_COL]


def test_trailing_newline_is_an_error():
    with pytest.raises(ValueError):
        parse(b"\r\n", toks(T.NEWLINE))


def test_unbalanced_emphasis_end_is_an_error():
    with pytest.raises(ValueError):
        parse(b"", toks(T.BOLD_END, T.PLAIN_TEXT))


def test_header_end_without_start_is_an_error():
    with pytest.raises(ValueError):
        parse(b"", toks(T.TABLE_HEADER_END))


def test_group_lists_separates_kinds():
    root = Node()
    for kind in (
        T.ORDERED_LIST_ITEM1,
        T.ORDERED_LIST_ITEM1,
        T.ORDERED_LIST_ITEM2,
        T.PLAIN_TEXT,
        T.UNORDERED_LIST_ITEM2,
    ):
        root.add_child(Node(Token(kind)))
    result = group_lists(root)
    assert result is root
    assert kinds(root) == [
        T.ORDERED_LIST,
        T.ORDERED_LIST,
        T.PLAIN_TEXT,
        T.UNORDERED_LIST,
    ]
    assert kinds(root.children()[0]) == [T.ORDERED_LIST_ITEM1] * 2
    assert kinds(root.children()[1]) == [T.ORDERED_LIST_ITEM2]
    for wrapper in root.children():
        for child in wrapper.children():
            assert child.parent is wrapper


def test_group_lists_empty_root():
    root = Node()
    assert group_lists(root).children() == ()


def test_format_tree_indents_by_depth():
    root = Node()
    heading = root.add_child(Node(Token(T.H1)))
    heading.add_child(Node(Token(T.PLAIN_TEXT)))
    expected = (
        "  " + str(int(T.H1)) + "\n" + "    " + str(int(T.PLAIN_TEXT)) + "\n"
    )
    assert format_tree(root, 2) == expected


def test_format_tree_of_nothing():
    assert format_tree(None, 2) == ""
    assert format_tree(Node(), 4) == ""