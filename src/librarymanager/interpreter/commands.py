"""Command handlers.

Each handler receives the per-line :class:`CommandContext` and the full
token list (``parts[0]`` is the command name). Handlers write reply lines
with ``ctx.emit`` and abort by raising a :class:`CommandError`, whose
message becomes the last reply line.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from ..auth.session import Session, User
from ..catalog.manager import Catalog
from ..catalog.models import Book
from ..catalog.schemas import BookCreate
from ..catalog.search import SearchFilters
from ..config import Config
from ..errors import ArgumentError, SessionError, StateError
from .formatting import (
    SEARCH_USAGE,
    check_row,
    format_date,
    format_ids,
    list_row,
    search_row,
)
from .parsing import is_int, parse_int

logger = logging.getLogger(__name__)


LOGIN_REQUIRED = "You must log in with: log [USERNAME]"


@dataclass
class CommandContext:
    """State available to a handler while it processes one line."""

    catalog: Catalog
    session: Session
    config: Config
    now: datetime
    lines: list[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        """Append a reply line."""
        self.lines.append(text)

    @property
    def user(self) -> User:
        """The logged-in user; handlers only run behind the login gate."""
        user = self.session.current_user
        if user is None:
            raise SessionError(LOGIN_REQUIRED)
        return user

    def require_admin(self) -> None:
        """Reject non-admin users."""
        if not self.session.is_admin:
            raise SessionError("User not authorized")

    def format_date(self, value: Optional[datetime]) -> str:
        """Render a date with the configured format."""
        return format_date(value, self.config.date_format)


Handler = Callable[[CommandContext, list[str]], None]

COMMANDS: dict[str, Handler] = {}


def command(name: str) -> Callable[[Handler], Handler]:
    """Register a handler under a command name."""

    def decorator(func: Handler) -> Handler:
        COMMANDS[name] = func
        return func

    return decorator


def _require_book_id(parts: list[str], name: str) -> int:
    """Parse the single ``[ID]`` argument of a loan command."""
    if len(parts) < 2:
        raise ArgumentError(f"Usage: {name} [ID]")
    return parse_int(parts[1], f"Invalid ID format in {name} command.")


def _find_book(ctx: CommandContext, book_id: int) -> Book:
    book = ctx.catalog.get_by_id(book_id)
    if book is None:
        raise StateError(f"No book found with ID {book_id}.")
    return book


# ============================================================================
# Session Commands
# ============================================================================


@command("log")
def handle_log(ctx: CommandContext, parts: list[str]) -> None:
    if len(parts) < 2:
        raise ArgumentError("Invalid username format")
    user = ctx.session.login(parts[1])
    ctx.emit(f"You are log as {user.username}")


@command("logout")
def handle_logout(ctx: CommandContext, parts: list[str]) -> None:
    ctx.session.logout()
    ctx.emit("You are logged out.")


# ============================================================================
# Catalog Commands
# ============================================================================

ADD_OPTIONS = {
    "-t": "title",
    "-a": "author",
    "-d": "year",
    "-i": "isbn",
    "-n": "copies",
}


@command("add")
def handle_add(ctx: CommandContext, parts: list[str]) -> None:
    """Register copies of a book: ``add -t T -a A -d Y -i I [-n N]``.

    Options come in pairs and may appear in any order. An unknown option is
    reported and skipped on its own, so its value is read as the next option.
    """
    ctx.require_admin()

    values: dict[str, str] = {}
    i = 1
    while i < len(parts) - 1:
        option = parts[i]
        if option in ADD_OPTIONS:
            values[ADD_OPTIONS[option]] = parts[i + 1]
            i += 2
        else:
            ctx.emit(f"Unknown option: {option}")
            i += 1

    if not all(key in values for key in ("title", "author", "year", "isbn")):
        raise ArgumentError("Missing required option: -t, -a, -d, or -i")

    year = parse_int(values["year"], "Invalid year format")
    isbn = parse_int(values["isbn"], "Invalid ISBN format")
    copies = 1
    if "copies" in values:
        copies = parse_int(values["copies"], "Invalid copies number")

    try:
        data = BookCreate(
            isbn=isbn,
            title=values["title"],
            author=values["author"],
            year_published=year,
            copies=copies,
        )
    except ValidationError as e:
        logger.debug("Rejected add: %s", e)
        raise ArgumentError("Invalid copies number") from e

    ids = [book.id for book in ctx.catalog.add_copies(data)]
    if len(ids) == 1:
        ctx.emit(f"The book is registered as {ids[0]}.")
    else:
        ctx.emit(f"The books are registered as {format_ids(ids)}.")


@command("remove")
def handle_remove(ctx: CommandContext, parts: list[str]) -> None:
    ctx.require_admin()

    removed: list[int] = []
    missing: list[int] = []
    for token in parts[1:]:
        if not is_int(token):
            ctx.emit(f"Invalid ID format in remove command: {token}")
            continue
        book_id = int(token)
        if ctx.catalog.remove_by_id(book_id):
            removed.append(book_id)
        else:
            missing.append(book_id)

    if removed:
        ctx.emit(f"The following books were removed: {format_ids(removed)}.")
    if missing:
        ctx.emit(f"The following IDs do not exist: {format_ids(missing)}.")


LIST_FILTERS: dict[str, Callable[[Book], bool]] = {
    "-av": lambda book: book.is_available,
    "-available": lambda book: book.is_available,
    "-br": lambda book: not book.is_available,
    "-borrowed": lambda book: not book.is_available,
}


@command("list")
def handle_list(ctx: CommandContext, parts: list[str]) -> None:
    """List books; ``-all`` and unknown options show everything."""
    option = parts[1] if len(parts) >= 2 else "-all"

    books = ctx.catalog.all_books()
    if not books:
        ctx.emit("No books in library.")
        return

    keep = LIST_FILTERS.get(option, lambda book: True)
    admin = ctx.session.is_admin
    for book in books:
        if keep(book):
            ctx.emit(list_row(book, admin, ctx.config.date_format))


SEARCH_OPTIONS = {
    "-t": "title",
    "-title": "title",
    "-a": "author",
    "-author": "author",
    "-d": "year",
    "-date": "year",
}


@command("search")
def handle_search(ctx: CommandContext, parts: list[str]) -> None:
    """Search by exact title, author and year.

    Options are read strictly in pairs starting right after the command; a
    trailing token without a value is ignored.
    """
    if len(parts) == 1:
        for line in SEARCH_USAGE:
            ctx.emit(line)
        return

    filters = SearchFilters()
    for i in range(1, len(parts) - 1, 2):
        option, value = parts[i], parts[i + 1]
        target = SEARCH_OPTIONS.get(option)
        if target is None:
            raise ArgumentError(f"Unknown search option: {option}")
        if target == "year":
            filters.year = parse_int(value, f"Invalid year in search filter: {value}")
        else:
            setattr(filters, target, value)

    matches = ctx.catalog.search(filters)
    if not matches:
        ctx.emit("No books match the given search filters.")
        return
    for book in matches:
        ctx.emit(search_row(book))


# ============================================================================
# Loan Commands
# ============================================================================


@command("borrow")
def handle_borrow(ctx: CommandContext, parts: list[str]) -> None:
    book_id = _require_book_id(parts, "borrow")
    book = _find_book(ctx, book_id)

    loan = book.borrow(ctx.user.username, ctx.now, ctx.config.loan_days)
    logger.info("Book %d borrowed by %s", book_id, loan.borrower)
    ctx.emit(
        f"Book {book_id} borrowed by {loan.borrower} "
        f"until {ctx.format_date(loan.due_date)}."
    )


@command("return")
def handle_return(ctx: CommandContext, parts: list[str]) -> None:
    book_id = _require_book_id(parts, "return")
    book = _find_book(ctx, book_id)

    if book.is_available:
        raise StateError(f"Book {book_id} is not currently borrowed.")
    if book.borrower != ctx.user.username:
        raise SessionError(f"Book {book_id} is borrowed by another user.")

    book.return_book()
    logger.info("Book %d returned by %s", book_id, ctx.user.username)
    ctx.emit(f"Book {book_id} returned.")


@command("extend")
def handle_extend(ctx: CommandContext, parts: list[str]) -> None:
    """Extend a loan once; unknown and available books read the same."""
    book_id = _require_book_id(parts, "extend")
    book = ctx.catalog.get_by_id(book_id)

    if book is None or book.is_available:
        raise StateError("Book not found")
    if book.borrower != ctx.user.username:
        raise SessionError("Unauthorized: You are not the borrower")

    book.extend_loan(ctx.config.loan_days)
    logger.info("Loan of book %d extended to %s", book_id, book.due_date)
    ctx.emit(f"Loan extended. New limit date: {ctx.format_date(book.due_date)}")


@command("check")
def handle_check(ctx: CommandContext, parts: list[str]) -> None:
    """Show borrowed books; ``-b`` keeps only overdue loans.

    Regular users only see their own loans.
    """
    overdue_only = len(parts) >= 2 and parts[1] == "-b"

    books = ctx.catalog.all_books()
    if not books:
        ctx.emit("No books in library.")
        return

    user = ctx.user
    found = False
    for book in books:
        if book.loan is None:
            continue
        if not user.is_admin and book.borrower != user.username:
            continue
        if overdue_only and not book.loan.is_overdue(ctx.now):
            continue

        found = True
        ctx.emit(check_row(book, user.is_admin, ctx.config.date_format))

    if not found:
        ctx.emit("No borrowed books found for this filter.")
