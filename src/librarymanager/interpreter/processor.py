"""Line-oriented command interpreter.

Processes one command line at a time against a catalog and a login
session, and returns the reply text. Nothing raised by a command escapes:
every failure becomes a reply line and the next line is processed normally.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from ..auth.session import Session
from ..catalog.manager import Catalog
from ..config import Config, get_config
from ..errors import ArgumentError, CommandError, SessionError
from .commands import COMMANDS, LOGIN_REQUIRED, CommandContext
from .parsing import tokenize

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sink = Callable[[str], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommandInterpreter:
    """Parses, authorizes and executes library commands."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        session: Optional[Session] = None,
        config: Optional[Config] = None,
        clock: Optional[Clock] = None,
        output: Optional[Sink] = None,
    ):
        """Initialize the interpreter.

        Args:
            catalog: Catalog to operate on (default: a new empty catalog)
            session: Login session (default: nobody logged in)
            config: Configuration (default: global config)
            clock: Returns the current instant (default: aware UTC now)
            output: Called with every non-empty reply

        Raises:
            ValueError: If the configuration does not validate
        """
        self.catalog = catalog if catalog is not None else Catalog()
        self.session = session if session is not None else Session()
        self.config = config or get_config()
        errors = self.config.validate()
        if errors:
            raise ValueError("; ".join(errors))
        self.clock = clock or _utc_now
        self.output = output

    def process_line(self, line: Optional[str]) -> Optional[str]:
        """Execute one command line.

        Args:
            line: Raw input line

        Returns:
            Reply lines joined with newlines, or None when there is no reply
        """
        parts = tokenize(line)
        if not parts:
            return None

        name = parts[0]
        ctx = CommandContext(
            catalog=self.catalog,
            session=self.session,
            config=self.config,
            now=self.clock(),
        )

        try:
            if name != "log" and not self.session.is_logged_in:
                raise SessionError(LOGIN_REQUIRED)
            handler = COMMANDS.get(name)
            if handler is None:
                raise ArgumentError(f"Unknown command: {name}")
            logger.debug("Dispatching %s %s", name, parts[1:])
            handler(ctx, parts)
        except CommandError as e:
            logger.debug("Command %s rejected (%s): %s", name, type(e).__name__, e.message)
            ctx.emit(e.message)

        if not ctx.lines:
            return None

        reply = "\n".join(ctx.lines)
        if self.output is not None:
            self.output(reply)
        return reply

    def run(self, lines: Iterable[str]) -> list[str]:
        """Execute lines in order.

        Returns:
            The non-empty replies, one per line that produced output
        """
        replies = []
        for line in lines:
            reply = self.process_line(line)
            if reply is not None:
                replies.append(reply)
        return replies

    def execute_script(self, path: Union[str, Path]) -> str:
        """Execute a UTF-8 command script.

        Args:
            path: Script file, one command per line

        Returns:
            Transcript with every reply line terminated by a newline
        """
        with open(path, "r", encoding="utf-8") as f:
            replies = self.run(line.rstrip("\r\n") for line in f)
        return "".join(f"{reply}\n" for reply in replies)
