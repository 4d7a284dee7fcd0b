"""Source spans, a file database and a lexer for the MLTT language."""

__version__ = "0.1.0"
__all__ = ["files", "lexer", "span", "token"]