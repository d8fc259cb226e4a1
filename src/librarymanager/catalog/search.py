"""Catalog search filters.

Filters combine with AND semantics and compare by exact equality, so
``title="Java"`` never matches ``"java"`` or ``"Java 2"``.
"""

from dataclasses import dataclass
from typing import Optional

from .models import Book


@dataclass
class SearchFilters:
    """Search filter criteria."""

    title: Optional[str] = None
    author: Optional[str] = None
    year: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """Check if no filter is set."""
        return self.title is None and self.author is None and self.year is None

    def matches(self, book: Book) -> bool:
        """Check if a book satisfies every filter that is set."""
        if self.title is not None and book.title != self.title:
            return False
        if self.author is not None and book.author != self.author:
            return False
        if self.year is not None and book.year_published != self.year:
            return False
        return True
