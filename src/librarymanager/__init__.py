"""Library manager: a line-oriented command interpreter for a book catalog."""

__version__ = "0.1.0"
