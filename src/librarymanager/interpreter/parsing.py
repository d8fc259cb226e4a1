"""Tokenizing command lines and parsing numeric arguments."""

import re
from typing import Optional

from ..errors import ArgumentError

COMMENT_PREFIX = "#"

# Only ASCII whitespace separates tokens; other spaces such as U+00A0 stay inside a token
TOKEN_SEPARATOR = re.compile(r"[ \t\n\x0b\f\r]+")
# Trimming drops control characters and spaces at both ends of a line
TRIM_CHARS = "".join(chr(c) for c in range(0x21))

# Optional sign followed by ASCII decimal digits
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def tokenize(line: Optional[str]) -> list[str]:
    """Split a command line into tokens.

    Tokens are separated by runs of ASCII whitespace. Blank lines and lines
    starting with ``#`` yield no tokens.

    Example:
        >>> tokenize("  borrow   3 ")
        ['borrow', '3']
        >>> tokenize("# comment")
        []
    """
    if line is None:
        return []
    line = line.strip(TRIM_CHARS)
    if not line or line.startswith(COMMENT_PREFIX):
        return []
    return TOKEN_SEPARATOR.split(line)


def is_int(token: str) -> bool:
    """Check if a token is a 32-bit signed decimal integer."""
    if INT_PATTERN.fullmatch(token) is None:
        return False
    return INT_MIN <= int(token) <= INT_MAX


def parse_int(token: str, message: str) -> int:
    """Parse a 32-bit signed decimal integer.

    Args:
        token: Text to parse
        message: Reply text used when the token is not an integer

    Raises:
        ArgumentError: If the token is not an integer
    """
    if not is_int(token):
        raise ArgumentError(message)
    return int(token)
