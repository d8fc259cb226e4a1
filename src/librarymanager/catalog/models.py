"""Book and loan records held by the catalog.

A book is either available (``loan is None``) or on loan. The loan moves
through Borrowed -> Borrowed & extended and is cleared again on return.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..errors import StateError


@dataclass
class Loan:
    """Loan attached to a book while it is borrowed."""

    borrower: str
    due_date: datetime
    extended: bool = False

    def is_overdue(self, now: datetime) -> bool:
        """Check if the due date is strictly before ``now``."""
        return self.due_date < now


@dataclass
class Book:
    """A single physical copy in the catalog."""

    id: int
    isbn: int
    title: str
    author: str
    year_published: int
    loan: Optional[Loan] = None

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, isbn={self.isbn}, title='{self.title}')>"

    @property
    def is_available(self) -> bool:
        """Check if the book can be borrowed."""
        return self.loan is None

    @property
    def borrower(self) -> Optional[str]:
        """Username of the current borrower, if any."""
        return self.loan.borrower if self.loan else None

    @property
    def due_date(self) -> Optional[datetime]:
        """Limit date of the current loan, if any."""
        return self.loan.due_date if self.loan else None

    def borrow(self, borrower: str, now: datetime, days: int) -> Loan:
        """Start a loan due ``days`` after ``now``.

        Raises:
            StateError: If the book is already on loan
        """
        if self.loan is not None:
            raise StateError(f"Book {self.id} is already borrowed.")
        self.loan = Loan(borrower=borrower, due_date=now + timedelta(days=days))
        return self.loan

    def extend_loan(self, days: int) -> None:
        """Push the due date back by ``days``; a loan is extended at most once.

        Does nothing when the book is not on loan.

        Raises:
            StateError: If the loan was already extended
        """
        if self.loan is None:
            return
        if self.loan.extended:
            raise StateError("Extension limit reached")
        self.loan.due_date = self.loan.due_date + timedelta(days=days)
        self.loan.extended = True

    def return_book(self) -> None:
        """Clear the loan.

        Raises:
            StateError: If the book is not on loan
        """
        if self.loan is None:
            raise StateError(f"Book {self.id} is not currently borrowed.")
        self.loan = None
