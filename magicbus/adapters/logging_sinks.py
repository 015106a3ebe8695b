from __future__ import annotations

import logging
from typing import Any

from magicbus.core.records import FailedMessage, Mailbox, ReturnedMessage

_LOGGER = logging.getLogger(__name__)


class LoggingSinks:
    """
    Bus sinks that report through the ``logging`` module.

        sinks = LoggingSinks()
        bus = MagicBus(sinks.on_returned, sinks.on_failed, sinks.on_observed)
    """

    def __init__(self, logger: logging.Logger = _LOGGER) -> None:
        self._logger = logger

    def on_returned(self, returned: ReturnedMessage) -> None:
        self._logger.warning(
            "bus_dead_letter",
            extra={
                "event": "bus_dead_letter",
                "bus": returned.bus.name,
                "message_type": type(returned.message).__qualname__,
            },
        )

    def on_failed(self, failed: FailedMessage) -> None:
        self._logger.warning(
            "bus_mailbox_failed",
            exc_info=failed.failure,
            extra={
                "event": "bus_mailbox_failed",
                "bus": failed.bus.name,
                "mailbox": repr(failed.mailbox),
                "message_type": type(failed.message).__qualname__,
                "error": repr(failed.failure),
            },
        )

    def on_observed(self, mailbox: Mailbox, message: Any) -> None:
        self._logger.debug(
            "bus_delivery",
            extra={
                "event": "bus_delivery",
                "mailbox": repr(mailbox),
                "message_type": type(message).__qualname__,
            },
        )
