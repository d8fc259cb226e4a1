"""Exceptions raised while executing library commands.

Every exception carries the exact reply text shown to the user. The
interpreter catches :class:`CommandError` and reports its message, so none
of these ever reach the caller of ``process_line``.
"""


class CommandError(Exception):
    """Base error for a command that could not be carried out."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionError(CommandError):
    """Login state or authorization prevents the command."""

    pass


class ArgumentError(CommandError):
    """Missing arguments or a value that does not parse."""

    pass


class StateError(CommandError):
    """The catalog or loan state does not allow the command."""

    pass
