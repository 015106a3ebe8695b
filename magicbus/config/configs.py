from __future__ import annotations

import builtins
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from magicbus.errors.errors import DEFAULT_FATAL_ERRORS

"""
Here, we collect the bus configs
"""


class BusConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # shows up in log lines, handy when a process runs several buses
    name: str = "magicbus"
    # mailbox errors of these types propagate out of post() instead of
    # becoming FailedMessage records
    fatal_errors: tuple[type[BaseException], ...] = DEFAULT_FATAL_ERRORS
    # debug-log every single delivery (chatty)
    log_deliveries: bool = False

    @field_validator("fatal_errors", mode="before")
    @classmethod
    def _resolve_error_names(cls, value: Any) -> Any:
        """Allow builtin exception names, e.g. from a TOML file."""
        if isinstance(value, (str, type)):
            value = [value]
        if not isinstance(value, (list, tuple)):
            # left for the field type check to reject
            return value
        resolved = []
        for item in value:
            if isinstance(item, str):
                exc_type = getattr(builtins, item, None)
                if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                    raise ValueError(f"Unknown builtin exception: {item!r}")
                item = exc_type
            resolved.append(item)
        return tuple(resolved)
