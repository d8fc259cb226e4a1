"""Book catalog and loan state."""

from .manager import Catalog
from .models import Book, Loan
from .schemas import BookCreate
from .search import SearchFilters

__all__ = [
    "Catalog",
    "Book",
    "Loan",
    "BookCreate",
    "SearchFilters",
]
