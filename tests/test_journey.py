"""
End-to-end tests through the composition root.
"""

import pytest

from core.catalog import DAILY_PROMPTS
from core.entitlements import SubscriptionEntitlements
from core.journal import JournalManager
from core.journey import create_journey_app
from core.models import DayState
from core.storage import MemoryBlobStore, USER_PROFILE_KEY


@pytest.fixture
def app(blob_store, clock):
    return create_journey_app(store=blob_store, journal=JournalManager(), clock=clock)


class TestJourneyApp:
    """One wired application session."""

    def test_services_share_one_store(self, app, blob_store):
        assert app.programs.blob_store is blob_store
        assert app.sessions.store is app.programs
        assert app.achievements.blob_store is blob_store

    def test_complete_day_one(self, app):
        session = app.programs.get_todays_session()
        app.sessions.start_session(session)
        app.sessions.update_exercise_response("inner-critic-identification-1", "My inner critic said...")
        app.sessions.set_mood(4)

        entry = app.complete_session()

        assert entry is not None
        assert app.journal.entry_count == 1
        assert "😊 Mood: 🙂 Happy" in app.journal.entries[0].content_text
        assert app.profile.journal_entries_count == app.journal.entry_count
        assert app.programs.get_state(1) == DayState.COMPLETED
        assert app.programs.get_state(2) == DayState.TODAY

    def test_first_journal_achievement(self, app):
        app.sessions.start_session(app.programs.get_todays_session())
        app.complete_session()

        fresh = app.check_for_new_achievements()

        assert "journal_1_entries" in [c.achievement_id for c in fresh]
        assert app.achievements.next_achievement().title == "First Words"

    def test_time_badges_after_days_pass(self, app, clock):
        clock.advance(days=8)

        for _ in range(3):
            app.celebrations()

        assert [i for i in app.achievements.unlocked_ids if i.startswith("time_")] == [
            "time_1_days", "time_3_days", "time_7_days"
        ]

    def test_activity_and_chat_persist_profile(self, app, blob_store):
        app.record_activity()
        app.record_chat_session()

        stored = blob_store.get_json(USER_PROFILE_KEY)
        assert stored['total_chat_sessions'] == 1
        assert len(stored['daily_activity_dates']) == 1

    def test_premium_program_requires_subscription(self, clock):
        free_app = create_journey_app(store=MemoryBlobStore(), clock=clock)
        paid_app = create_journey_app(store=MemoryBlobStore(), clock=clock,
                                      entitlements=SubscriptionEntitlements(is_in_free_trial=True))

        assert free_app.programs.start_program("90-day-transform") is False
        assert paid_app.programs.start_program("90-day-transform") is True

    def test_todays_prompt(self, app):
        assert app.todays_prompt() in DAILY_PROMPTS

    def test_free_form_entry_counts_toward_journal_badges(self, app):
        app.journal.add_entry("today I wrote something")

        app.celebrations()

        assert "journal_1_entries" in app.achievements.unlocked_ids
        assert app.profile.journal_entries_count == 1

    def test_malformed_stored_profile_does_not_break_evaluation(self, blob_store, clock):
        blob_store.set_json(USER_PROFILE_KEY, {'no_contact_start_date': 'not-a-date'})
        app = create_journey_app(store=blob_store, journal=JournalManager(), clock=clock)

        assert app.refresh_snapshot().days_since_start == 0
        assert isinstance(app.celebrations(), list)
        assert app.profile.no_contact_start_date == clock().isoformat()
