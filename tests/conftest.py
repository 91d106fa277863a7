"""
Shared pytest fixtures for all tests.
"""
import tempfile
from pathlib import Path
from typing import Iterator

import pytest

from core.events import Event
from core.permissions import AuditLog, DecisionGate, PromptBroker


class RecordingEventBus:
    """EventBus that keeps every published event."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    async def publish(self, event: Event) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [event.type for event in self.events]


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def gate() -> DecisionGate:
    """A fresh decision gate with a default-capacity audit log."""
    return DecisionGate(audit_log=AuditLog())


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def broker(gate: DecisionGate, event_bus: RecordingEventBus) -> PromptBroker:
    """A prompt broker with a short timeout."""
    return PromptBroker(gate, event_bus, timeout_seconds=1.0)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Point the home directory at an empty temp dir so no global config leaks in."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home
