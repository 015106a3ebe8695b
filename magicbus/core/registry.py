from __future__ import annotations

import inspect
import logging
import threading
import types
from typing import Any, Iterator, Optional

from magicbus.core.ordering import SubtypeFn, is_subtype, order_types
from magicbus.core.records import Mailbox
from magicbus.errors.errors import InvalidArgumentError, NotSubscribedError

logger = logging.getLogger(__name__)

# (interest type, mailboxes in subscribe order), types in ancestor-first order
_Snapshot = tuple[tuple[Any, tuple[Mailbox, ...]], ...]

# bound methods implemented in C: list.append, dict.__setitem__, ...
_BUILTIN_BOUND = (types.BuiltinMethodType, types.MethodWrapperType)


def same_mailbox(a: Mailbox, b: Mailbox) -> bool:
    """
    Mailbox identity.

    Reference identity, except that bound methods of the same function on the
    same instance are one mailbox: ``obj.handle`` and ``items.append`` build a
    new object on every attribute access.
    """
    if a is b:
        return True
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__func__ is b.__func__ and a.__self__ is b.__self__
    if isinstance(a, _BUILTIN_BOUND) and isinstance(b, _BUILTIN_BOUND):
        return type(a) is type(b) and a.__self__ is b.__self__ and a.__name__ == b.__name__
    return False


def _index_of(bucket: tuple[Mailbox, ...], mailbox: Mailbox) -> Optional[int]:
    for i, existing in enumerate(bucket):
        if same_mailbox(existing, mailbox):
            return i
    return None


class Subscribers:
    """
    Interest type -> ordered set of mailboxes.

    - Buckets are keyed by type identity (a plain dict); the ordering rule is
      only used to compute traversal order, never for key equality.
    - Writes are serialized by a lock and publish a fresh immutable snapshot.
    - Reads grab the current snapshot without locking (copy-on-write), so an
      iteration in progress is never affected by later writes.
    - Empty buckets stay after the last unsubscribe.
    """

    def __init__(self, subtype: SubtypeFn = is_subtype) -> None:
        self._subtype = subtype
        self._lock = threading.Lock()
        self._buckets: dict[Any, tuple[Mailbox, ...]] = {}
        # Cache: traversal order of interest types, recomputed when a type is added
        self._type_order: list[Any] = []
        self._snapshot: _Snapshot = ()

    # --- helpers ---

    def _publish(self) -> None:
        # caller holds the lock
        self._snapshot = tuple((t, self._buckets[t]) for t in self._type_order)

    # --- writes ---

    def subscribe(self, message_type: Any, mailbox: Mailbox) -> None:
        """Add ``mailbox`` under ``message_type``. Re-subscribing the same pair is a no-op."""
        if message_type is None:
            raise InvalidArgumentError("message_type")
        if mailbox is None:
            raise InvalidArgumentError("mailbox")
        if self._subtype is is_subtype and not isinstance(message_type, type):
            raise TypeError(f"message_type must be a class, got {message_type!r}")

        with self._lock:
            bucket = self._buckets.get(message_type)
            if bucket is None:
                # order first: a bad type raises before any state changes
                self._type_order = order_types(
                    [*self._type_order, message_type], self._subtype
                )
                self._buckets[message_type] = (mailbox,)
            elif _index_of(bucket, mailbox) is None:
                self._buckets[message_type] = bucket + (mailbox,)
            else:
                return
            self._publish()
        logger.debug(f"Subscribed {mailbox!r} to {_type_name(message_type)}")

    def unsubscribe(self, message_type: Any, mailbox: Mailbox) -> None:
        if message_type is None:
            raise InvalidArgumentError("message_type")
        if mailbox is None:
            raise InvalidArgumentError("mailbox")

        with self._lock:
            bucket = self._buckets.get(message_type)
            if bucket is None:
                raise NotSubscribedError(message_type)
            i = _index_of(bucket, mailbox)
            if i is None:
                raise NotSubscribedError(message_type, mailbox)
            self._buckets[message_type] = bucket[:i] + bucket[i + 1 :]
            self._publish()
        logger.debug(f"Unsubscribed {mailbox!r} from {_type_name(message_type)}")

    # --- reads ---

    def matching(self, message_type: Any) -> Iterator[Mailbox]:
        """
        Mailboxes interested in ``message_type``: buckets of the type itself and
        of all its ancestors, most general first, subscribe order within a bucket.

        The snapshot is taken now; the returned iterator is lazy over it.
        """
        snapshot = self._snapshot
        subtype = self._subtype

        def _iter() -> Iterator[Mailbox]:
            for interest, bucket in snapshot:
                if subtype(message_type, interest):
                    yield from bucket

        return _iter()

    def subscriptions(self) -> dict[Any, tuple[Mailbox, ...]]:
        """Snapshot of every bucket (empty ones included) in traversal order."""
        return dict(self._snapshot)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._buckets

    def __len__(self) -> int:
        return len(self._snapshot)


def _type_name(message_type: Any) -> str:
    return getattr(message_type, "__qualname__", repr(message_type))
