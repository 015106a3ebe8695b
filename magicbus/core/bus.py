from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from magicbus.config.configs import BusConfig
from magicbus.core.mailboxes import ignored
from magicbus.core.ordering import SubtypeFn, is_subtype
from magicbus.core.records import FailedMessage, Mailbox, ReturnedMessage
from magicbus.core.registry import Subscribers
from magicbus.errors.errors import InvalidArgumentError, is_recoverable

logger = logging.getLogger(__name__)

ReturnedSink = Callable[[ReturnedMessage], None]
FailedSink = Callable[[FailedMessage], None]
ObservedHook = Callable[[Mailbox, Any], None]


class MagicBus:
    """
    Synchronous in-process bus, routing by message type.

    - 1. A mailbox subscribes to an interest type; it receives messages of that
      type and of every subtype.
    - 2. post() delivers in the calling thread: supertype mailboxes before
      subtype mailboxes, subscription order thereafter.
    - 3. Before each delivery the observation hook sees (mailbox, message).
    - 4. A recoverable mailbox error becomes a FailedMessage for the `failed`
      sink, and delivery continues. A non-recoverable one (see
      BusConfig.fatal_errors) propagates out of post().
    - 5. A message with no interested mailbox becomes a ReturnedMessage for the
      `returned` sink.

    The three sinks are fixed for the bus lifetime. They are expected not to
    raise.

    Routing uses the class hierarchy by default. For tagged messages pass
    `type_of` (message -> tag) and `subtype` (tag, ancestor_tag -> bool).

    Example:
        returned, failed = [], []
        bus = MagicBus(returned.append, failed.append)
        bus.subscribe(Exception, print)
        bus.post(ValueError("hi"))
    """

    def __init__(
        self,
        returned: ReturnedSink,
        failed: FailedSink,
        observed: ObservedHook = ignored(),
        *,
        cfg: Optional[BusConfig] = None,
        subtype: SubtypeFn = is_subtype,
        type_of: Callable[[Any], Any] = type,
    ) -> None:
        if returned is None:
            raise InvalidArgumentError("returned")
        if failed is None:
            raise InvalidArgumentError("failed")
        if observed is None:
            raise InvalidArgumentError("observed")

        self._cfg = cfg if cfg is not None else BusConfig()
        self._returned = returned
        self._failed = failed
        self._observed = observed
        self._type_of = type_of
        self._subscribers = Subscribers(subtype)

    def __repr__(self) -> str:
        return f"MagicBus(name={self._cfg.name!r})"

    @property
    def name(self) -> str:
        return self._cfg.name

    @property
    def config(self) -> BusConfig:
        return self._cfg

    # --- subscriptions ---

    def subscribe(self, message_type: Any, mailbox: Mailbox) -> None:
        """Deliver messages of ``message_type`` (and its subtypes) to ``mailbox``."""
        if message_type is None:
            raise InvalidArgumentError("message_type")
        if mailbox is None:
            raise InvalidArgumentError("mailbox")
        self._subscribers.subscribe(message_type, mailbox)

    def unsubscribe(self, message_type: Any, mailbox: Mailbox) -> None:
        """
        Stop delivering ``message_type`` to ``mailbox``.
        Raises NotSubscribedError if the pair was never subscribed.
        """
        if message_type is None:
            raise InvalidArgumentError("message_type")
        if mailbox is None:
            raise InvalidArgumentError("mailbox")
        self._subscribers.unsubscribe(message_type, mailbox)

    def subscriber(self, message_type: Any) -> Callable[[Mailbox], Mailbox]:
        """
        Decorator form of subscribe():

            @bus.subscriber(OrderFilled)
            def on_fill(msg): ...
        """

        def decorate(mailbox: Mailbox) -> Mailbox:
            self.subscribe(message_type, mailbox)
            return mailbox

        return decorate

    # --- publish ---

    def post(self, message: Any) -> None:
        """Deliver ``message`` to every interested mailbox, see class docstring."""
        if message is None:
            raise InvalidArgumentError("message")

        fatal = self._cfg.fatal_errors
        deliveries = 0
        for mailbox in self._subscribers.matching(self._type_of(message)):
            deliveries += 1
            self._observed(mailbox, message)
            if self._cfg.log_deliveries:
                logger.debug(
                    f"[{self._cfg.name}] Delivering {type(message).__name__} to {mailbox!r}"
                )
            try:
                mailbox(message)
            except Exception as e:
                if not is_recoverable(e, fatal):
                    raise
                self._failed(FailedMessage(self, mailbox, message, e))

        if deliveries == 0:
            self._returned(ReturnedMessage(self, message))

    # --- diagnostics ---

    def subscribers(self, message_type: Any) -> list[Mailbox]:
        """Mailboxes a post of ``message_type`` would reach, in delivery order."""
        if message_type is None:
            raise InvalidArgumentError("message_type")
        return list(self._subscribers.matching(message_type))

    @property
    def subscriptions(self) -> dict[Any, tuple[Mailbox, ...]]:
        return self._subscribers.subscriptions()
