from dataclasses import dataclass, field
from typing import Any

import pytest

from magicbus.core.bus import MagicBus
from magicbus.core.records import FailedMessage, ReturnedMessage


@dataclass
class Recorder:
    """Collects whatever the bus hands to its three sinks."""

    returned: list[ReturnedMessage] = field(default_factory=list)
    failed: list[FailedMessage] = field(default_factory=list)
    observed: list[tuple[Any, Any]] = field(default_factory=list)

    def on_observed(self, mailbox: Any, message: Any) -> None:
        self.observed.append((mailbox, message))


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def bus(recorder: Recorder) -> MagicBus:
    """Fresh bus wired to the recorder for each test."""
    return MagicBus(recorder.returned.append, recorder.failed.append, recorder.on_observed)
