"""Telemetry Port Interface.

Contract: Log structured events. Bus adapters turn dead letters, failures and
observed deliveries into log(event, **fields) calls.
"""
from __future__ import annotations
from typing import Protocol, Any

class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...
