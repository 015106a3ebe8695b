from __future__ import annotations

from typing import Any, Callable

from magicbus.core.records import Mailbox

# --- Observation hooks ---


def ignored() -> Callable[[Mailbox, Any], None]:
    """Observation hook that does nothing; the default for a new bus."""

    def observed(mailbox: Mailbox, message: Any) -> None:
        return None

    return observed


# --- Mailboxes ---


class NamedMailbox:
    """Wraps a callable so it prints as ``name`` in logs and failure records."""

    __slots__ = ("name", "_receive")

    def __init__(self, name: str, receive: Mailbox) -> None:
        self.name = name
        self._receive = receive

    def __call__(self, message: Any) -> None:
        self._receive(message)

    def __repr__(self) -> str:
        return self.name


def named_mailbox(name: str, receive: Mailbox) -> NamedMailbox:
    return NamedMailbox(name, receive)


def discard(message_type: type) -> NamedMailbox:
    """
    A mailbox which throws messages away.
    Subscribe it to keep messages of ``message_type`` out of the dead letters.
    """
    return NamedMailbox(f"DISCARD-MAILBOX<{message_type.__qualname__}>", lambda _: None)


def fail_with(exception_factory: Callable[[], BaseException]) -> Mailbox:
    """A mailbox which always raises a fresh exception from ``exception_factory``."""

    def mailbox(message: Any) -> None:
        raise exception_factory()

    return mailbox
