from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from magicbus.core.bus import MagicBus

Mailbox = Callable[[Any], None]


@dataclass(frozen=True)
class ReturnedMessage:
    """A posted message no mailbox was subscribed to (dead letter)."""

    bus: "MagicBus"
    message: Any


@dataclass(frozen=True)
class FailedMessage:
    """
    A mailbox raised a recoverable error while receiving a message.

    The bus hands over one record per failing mailbox, in failure order,
    interleaved with deliveries to later mailboxes. Non-recoverable errors
    never show up here; they propagate out of post().
    """

    bus: "MagicBus"
    mailbox: Mailbox
    message: Any
    failure: BaseException
