"""
Shared fixtures: in-memory storage, a controllable clock and a recording journal.
"""

from datetime import datetime, timedelta

import pytest
import pytz

from core.storage import MemoryBlobStore
from core.journal import JournalSink
from core.program_store import ProgramStore
from core.session_progress import SessionLifecycle


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0):
        self.now = self.now + timedelta(days=days, hours=hours)


class RecordingJournal(JournalSink):
    """Journal sink that keeps every emitted record."""

    def __init__(self):
        self.entries = []

    def add_session_entry(self, entry):
        self.entries.append(entry)

    @property
    def entry_count(self):
        return len(self.entries)


@pytest.fixture
def clock():
    """Clock fixed at 2026-10-17 09:00 UTC."""
    return FakeClock(pytz.utc.localize(datetime(2026, 10, 17, 9, 0)))


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def journal():
    return RecordingJournal()


@pytest.fixture
def program_store(blob_store, clock):
    return ProgramStore(blob_store, clock=clock)


@pytest.fixture
def lifecycle(program_store, journal, clock):
    return SessionLifecycle(program_store, journal, clock)
