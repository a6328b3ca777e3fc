"""Lexer, parser, tree-walking evaluator and interactive shell for the Monkey language."""

__version__ = "0.1.0"