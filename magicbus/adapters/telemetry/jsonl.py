"""JSON Lines Telemetry adapter.

Implements the Telemetry port by appending structured JSON objects (one per
line) to disk, and offers the three bus sinks on top of it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import orjson

from magicbus.core.records import FailedMessage, Mailbox, ReturnedMessage


class JsonlTelemetry:
    _REDACTION_TOKEN = "***REDACTED***"
    _DEFAULT_SECRET_KEYS = frozenset(
        {
            "api_key",
            "api_secret",
            "secret",
            "password",
            "token",
            "auth_token",
        }
    )

    def __init__(
        self,
        sink_path: Path,
        component: str = "bus",
        secret_keys: Iterable[str] = _DEFAULT_SECRET_KEYS,
    ) -> None:
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)
        self._component = component
        self._secret_keys = frozenset(secret_keys)

    def log(self, event: str, **fields: Any) -> None:
        if not event:
            raise ValueError("event must be a non-empty string")
        extras = dict(fields)

        # Tagging telemetry events with their subsystem (origin)
        component = extras.pop("component", self._component)

        sanitized_fields, redacted = self._sanitize_fields(extras)

        record: dict[str, Any] = {
            "event": event,
            "component": component,
            **sanitized_fields,
        }
        if redacted:
            record["redacted_fields"] = sorted(redacted)

        self._write_record(record)

    # --- bus sinks ---

    def on_returned(self, returned: ReturnedMessage) -> None:
        self.log(
            "bus_dead_letter",
            bus=returned.bus.name,
            message_type=type(returned.message).__qualname__,
            message=returned.message,
        )

    def on_failed(self, failed: FailedMessage) -> None:
        self.log(
            "bus_mailbox_failed",
            bus=failed.bus.name,
            mailbox=repr(failed.mailbox),
            message_type=type(failed.message).__qualname__,
            message=failed.message,
            error=repr(failed.failure),
        )

    def on_observed(self, mailbox: Mailbox, message: Any) -> None:
        self.log(
            "bus_delivery",
            mailbox=repr(mailbox),
            message_type=type(message).__qualname__,
        )

    def _sanitize_fields(self, fields: Mapping[str, Any]) -> tuple[dict[str, Any], set[str]]:
        sanitized: dict[str, Any] = {}
        redacted: set[str] = set()
        for key, value in fields.items():
            if key in self._secret_keys:
                sanitized[key] = self._REDACTION_TOKEN
                redacted.add(key)
            else:
                sanitized[key] = value

        return sanitized, redacted

    def _write_record(self, record: Mapping[str, Any]) -> None:
        try:
            payload = _dumps(record)
        except orjson.JSONEncodeError:
            # e.g. an int beyond 64 bits somewhere inside a message
            payload = _dumps({key: _encodable(value) for key, value in record.items()})
        with self._sink_path.open("ab") as handle:
            handle.write(payload + b"\n")


def _dumps(value: Any) -> bytes:
    # default=str: messages are arbitrary objects
    return orjson.dumps(
        value, default=str, option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS
    )


def _encodable(value: Any) -> Any:
    """``value`` itself if orjson can write it, its repr otherwise."""
    try:
        _dumps(value)
    except orjson.JSONEncodeError:
        return repr(value)
    return value
