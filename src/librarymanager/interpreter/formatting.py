"""Reply text formatting."""

from datetime import datetime
from typing import Optional

from ..catalog.models import Book

SEARCH_USAGE = (
    "Usage: search [FILTERS]",
    "Filters:",
    "  -t [TITLE]   or -title [TITLE]",
    "  -a [AUTHOR]  or -author [AUTHOR]",
    "  -d [YEAR]    or -date [YEAR]",
)


def format_date(value: Optional[datetime], date_format: str) -> str:
    """Render a date, or an empty string when there is none.

    Aware instants are converted to the local timezone first.
    """
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(date_format)


def format_row(*fields: object) -> str:
    """Join fields with tabs."""
    return "\t".join(str(f) for f in fields)


def format_ids(ids: list[int]) -> str:
    """Space-separated list of ids."""
    return " ".join(str(i) for i in ids)


def list_row(book: Book, admin: bool, date_format: str) -> str:
    """Row for ``list``; admins also see borrower and limit date of loans."""
    fields: list[object] = [book.id, book.title, book.author, book.year_published]
    if admin and not book.is_available:
        fields += [book.borrower, format_date(book.due_date, date_format)]
    return format_row(*fields)


def check_row(book: Book, admin: bool, date_format: str) -> str:
    """Row for ``check``; admins also see the borrower."""
    fields: list[object] = [book.id, book.isbn, book.title]
    if admin:
        fields.append(book.borrower)
    fields.append(format_date(book.due_date, date_format))
    return format_row(*fields)


def search_row(book: Book) -> str:
    """Row for ``search``."""
    return format_row(book.id, book.isbn, book.title, book.author, book.year_published)
