"""
Tests for the journal collaborator.
"""

import pytest

from core.journal import JournalManager, format_session_content, mood_label
from core.models import ExerciseResponse, ReflectionResponse, SessionJournalEntry


@pytest.fixture
def entry():
    return SessionJournalEntry(
        entry_id="entry-1",
        session_id="30-day-fresh-start-day-1",
        program_title="30-Day Fresh Start",
        session_title="Building Self-Compassion",
        date="2026-10-17T09:00:00+00:00",
        exercises=[ExerciseResponse("e1", "Inner critic", "It said I failed")],
        reflections=[ReflectionResponse("r1", "How do you feel?", "Lighter")],
        mood=4
    )


class TestFormatting:
    """Journal text built from a session record."""

    def test_full_entry(self, entry):
        assert format_session_content(entry) == (
            "📚 30-Day Fresh Start: Building Self-Compassion\n\n"
            "✍️ Practice Exercises:\n\n"
            "• Inner critic\nIt said I failed\n\n"
            "🤔 Reflections:\n\n"
            "• How do you feel?\nLighter\n\n"
            "😊 Mood: 🙂 Happy\n"
        )

    def test_empty_sections_omitted(self, entry):
        entry.exercises = []
        entry.reflections = []
        entry.mood = None

        assert format_session_content(entry) == "📚 30-Day Fresh Start: Building Self-Compassion\n\n"

    @pytest.mark.parametrize("mood,label", [(1, "😢 Very Sad"), (3, "😐 Neutral"), (5, "😊 Very Happy"),
                                            (0, "😐 Neutral"), (9, "😐 Neutral")])
    def test_mood_labels(self, mood, label):
        assert mood_label(mood) == label


class TestJournalManager:
    """Appending entries and notifying listeners."""

    def test_add_session_entry(self, entry):
        journal = JournalManager()
        journal.add_session_entry(entry)

        assert journal.entry_count == 1
        stored = journal.entries[0]
        assert stored.session_id == entry.session_id
        assert stored.date_created == entry.date
        assert stored.content_text.startswith("📚 ")

    def test_callbacks(self, entry):
        journal = JournalManager()
        received = []

        def broken(_):
            raise ValueError("listener bug")

        journal.add_entry_callback(broken)
        journal.add_entry_callback(received.append)
        journal.add_session_entry(entry)
        journal.add_entry("Free writing")

        assert [e.content_text for e in received][1] == "Free writing"
        assert journal.entry_count == 2
