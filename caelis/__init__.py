"""Lexer, parser and syntax tree for the Caelis language."""

__version__ = "0.1.0"