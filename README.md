# mdhtml

A compact Markdown to HTML converter. Conversion runs in three stages:

1. **Lexing** (`mdhtml.lexer`) – the raw bytes of a document become a flat
   list of `Token` values, which `mdhtml.analysis` then refines into code
   blocks, list items and emphasis.
2. **Parsing** (`mdhtml.parser`) – the tokens are arranged into a tree of
   `Node` objects, and runs of equal top-level list items are grouped under
   a list node.
3. **Rendering** (`mdhtml.renderer`) – the tree is walked and written out as
   HTML.

Input is bytes, and lines are expected to end in `\r\n`. A lone `\r` that
is not followed by `\n` makes the lexer raise `ValueError`.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

```
mdhtml
```

With no arguments the command reads `README.md` from the current directory
and writes the HTML to `rendered.html`. Both can be given:

```
mdhtml notes.md -o notes.html
```

The command prints one line per token (as given by `Token.describe`), then
`Render result:` followed by the HTML. If the input file cannot be read, the
error goes to standard error and the exit status is 1.

## Library use

The whole pipeline in one call:

```python
from mdhtml.cli import convert

html = convert(b"# Title\r\n\r\nSome __bold__ text.\r\n")
```

Or stage by stage:

```python
from mdhtml.lexer import lex
from mdhtml.parser import parse, format_tree
from mdhtml.renderer import render

data = b"- first\r\n- second\r\n"
tokens = lex(data)
tree = parse(data, tokens)
print(format_tree(tree, 2))
print(render(data, tree))
```

Each `Token` carries a `TokenType` and the byte range it covers in the
source. `Node.children()` gives a node's children in order; `format_tree`
lists the token kinds of a tree by number, one per line, indented by depth.
`opening_tag` and `closing_tag` in `mdhtml.renderer` give the text written
for a single token. `parse` logs the tree before and after list grouping
through the `mdhtml.parser` logger at DEBUG level.

## What is rendered

- ATX headers `#` to `######` become `<h1>` to `<h6>`
- List items at the start of a line with `*`, `-` or `+` become `<li>` in a
  `<ul>`; items such as `1.` or `1)` become `<li>` in an `<ol>`
- `__text__` becomes `<strong>` and `_text_` becomes `<em>`
- Fenced code between triple backticks, and lines indented by four or more
  spaces, become `<pre>`
- Pipe tables with an alignment row become `<table>`, with the header row in
  `<thead>`; header cells become `<th>` and body cells `<td>`
- A line break inside a paragraph or list item becomes a space; a blank
  line ends the current block

## Limitations

- Links, images, inline code spans, block quotes and strikethrough are
  recognised by the lexer but left out of the HTML.
- `*`, `-` and `+` in the middle of a line are dropped from the output;
  emphasis is only recognised with underscores.
- Table cells aligned left or right are not given a `<th>` tag, and the table
  body has no `<tbody>`.
- Text is copied into the HTML as it is, without escaping `<`, `>` or `&`.