"""Command parsing, dispatch and reply formatting."""

from .commands import COMMANDS, CommandContext
from .parsing import parse_int, tokenize
from .processor import CommandInterpreter

__all__ = [
    "COMMANDS",
    "CommandContext",
    "CommandInterpreter",
    "parse_int",
    "tokenize",
]
