"""Convert Markdown documents to HTML: lexer, tree parser, renderer and command."""

__version__ = "0.1.0"

__all__ = ["analysis", "cli", "lexer", "parser", "renderer", "tokens"]