"""In-memory catalog of books."""

import logging
from typing import Iterator, Optional

from .models import Book
from .schemas import BookCreate
from .search import SearchFilters

logger = logging.getLogger(__name__)


class Catalog:
    """Owns every book record and hands out identifiers.

    Identifiers start at 1 and are never reused, even after a removal.
    Books are kept in insertion order.
    """

    def __init__(self):
        self._books: list[Book] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(tuple(self._books))

    @property
    def next_id(self) -> int:
        """Identifier the next added book will receive."""
        return self._next_id

    def add_book(self, isbn: int, title: str, author: str, year_published: int) -> Book:
        """Register a single copy.

        Args:
            isbn: ISBN (not required to be unique)
            title: Book title
            author: Book author
            year_published: Publication year

        Returns:
            Created book
        """
        book = Book(
            id=self._next_id,
            isbn=isbn,
            title=title,
            author=author,
            year_published=year_published,
        )
        self._next_id += 1
        self._books.append(book)
        logger.info("Registered book %d (isbn=%d)", book.id, isbn)
        return book

    def add_copies(self, data: BookCreate) -> list[Book]:
        """Register ``data.copies`` independent books sharing the same details.

        Args:
            data: Book creation data

        Returns:
            Created books, in id order
        """
        return [
            self.add_book(data.isbn, data.title, data.author, data.year_published)
            for _ in range(data.copies)
        ]

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by ID.

        Args:
            book_id: Book ID

        Returns:
            Book or None
        """
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def remove_by_id(self, book_id: int) -> bool:
        """Remove a book.

        Args:
            book_id: Book ID

        Returns:
            True if removed
        """
        for index, book in enumerate(self._books):
            if book.id == book_id:
                del self._books[index]
                logger.info("Removed book %d", book_id)
                return True
        return False

    def all_books(self) -> tuple[Book, ...]:
        """Read-only view of all books in insertion order."""
        return tuple(self._books)

    def search(self, filters: SearchFilters) -> list[Book]:
        """Books matching every filter, in insertion order."""
        return [book for book in self._books if filters.matches(book)]
