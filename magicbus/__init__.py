"""
In-process publish/subscribe bus with type-based routing.

Components:
- MagicBus: post/subscribe/unsubscribe, failure and dead-letter routing
- Subscribers: thread-safe registry, ancestor types first
- ReturnedMessage / FailedMessage: records handed to the bus sinks
- LoggingSinks / JsonlTelemetry: ready-made sinks

Usage:
    from magicbus import MagicBus, LoggingSinks

    sinks = LoggingSinks()
    bus = MagicBus(sinks.on_returned, sinks.on_failed)
    bus.subscribe(object, print)
    bus.post("hello")
"""

from magicbus.adapters.logging_sinks import LoggingSinks
from magicbus.adapters.telemetry.jsonl import JsonlTelemetry
from magicbus.config.config_loader import ConfigLoader
from magicbus.config.configs import BusConfig
from magicbus.core.bus import MagicBus
from magicbus.core.mailboxes import discard, fail_with, ignored, named_mailbox
from magicbus.core.records import FailedMessage, Mailbox, ReturnedMessage
from magicbus.core.registry import Subscribers
from magicbus.errors.errors import (
    BusError,
    InvalidArgumentError,
    MailboxError,
    MailboxPanic,
    NotSubscribedError,
    is_recoverable,
)

__all__ = [
    # Main entry point
    "MagicBus",
    "BusConfig",
    "ConfigLoader",
    "Subscribers",
    # Records
    "Mailbox",
    "ReturnedMessage",
    "FailedMessage",
    # Helpers
    "discard",
    "fail_with",
    "ignored",
    "named_mailbox",
    # Sinks
    "LoggingSinks",
    "JsonlTelemetry",
    # Errors
    "BusError",
    "InvalidArgumentError",
    "NotSubscribedError",
    "MailboxError",
    "MailboxPanic",
    "is_recoverable",
]
