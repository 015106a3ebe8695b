from __future__ import annotations

from typing import Iterable

# --- Bus ---


class BusError(Exception):
    "Error in connection with the bus"


class InvalidArgumentError(BusError, ValueError):
    """Raised when a required argument (type, mailbox, message, sink) is missing."""

    def __init__(self, argument: str) -> None:
        super().__init__(argument)
        self.argument = argument

    def __str__(self) -> str:
        return f"'{self.argument}' must not be None"


class NotSubscribedError(BusError, LookupError):
    """Raised on unsubscribe of an unknown type, or a mailbox not registered under it."""

    def __init__(self, message_type: object, mailbox: object = None) -> None:
        super().__init__(message_type, mailbox)
        self.message_type = message_type
        self.mailbox = mailbox

    def __str__(self) -> str:
        name = getattr(self.message_type, "__qualname__", repr(self.message_type))
        if self.mailbox is None:
            return f"No subscriptions for type {name}"
        return f"Mailbox {self.mailbox!r} is not subscribed to {name}"


# --- Mailbox ---


class MailboxError(Exception):
    """Recoverable mailbox error (bus reports it as a FailedMessage and continues)."""


class MailboxPanic(Exception):
    """Non-recoverable; propagates out of post() and aborts remaining deliveries."""


DEFAULT_FATAL_ERRORS: tuple[type[BaseException], ...] = (
    AssertionError,
    AttributeError,
    NameError,
    NotImplementedError,
    TypeError,
)


def is_recoverable(
    exc: BaseException, fatal: Iterable[type[BaseException]] = DEFAULT_FATAL_ERRORS
) -> bool:
    """
    Classify a mailbox failure.

    Anything outside ``Exception`` (KeyboardInterrupt, SystemExit, ...), a
    MailboxPanic, or an instance of one of ``fatal`` is a programming defect
    and must reach the caller. Everything else is reported and delivery goes on.
    """
    if not isinstance(exc, Exception):
        return False
    if isinstance(exc, MailboxPanic):
        return False
    return not isinstance(exc, tuple(fatal))
