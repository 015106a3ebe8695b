"""MessageBus Port Interface.

Contract: Publish/subscribe by message type. Mailboxes subscribed to a type
receive messages of that type and of every subtype, most general first.
"""
from __future__ import annotations
from typing import Protocol, Callable, Any

class MessageBus(Protocol):
    def subscribe(self, message_type: Any, mailbox: Callable[[Any], None]) -> None:
        """Register mailbox for all messages of given type (and subtypes)."""
        ...

    def unsubscribe(self, message_type: Any, mailbox: Callable[[Any], None]) -> None:
        """Remove a previous registration; fails if there is none."""
        ...

    def post(self, message: Any) -> None:
        """Deliver a message to all interested mailboxes."""
        ...
