"""
Tests for the user profile: activity tracking, streaks, growth scores and snapshots.
"""

from datetime import timedelta

import pytest

from core.profile import ProfileSnapshot, UserProfile, load_profile, save_profile
from core.storage import MemoryBlobStore, USER_PROFILE_KEY


@pytest.fixture
def profile(clock):
    return UserProfile.create(clock() - timedelta(days=100))


def _active(profile, clock, *days_ago):
    profile.daily_activity_dates = sorted((clock() - timedelta(days=d)).date().isoformat() for d in days_ago)


class TestActivity:
    """Daily activity records."""

    def test_record_once_per_day(self, profile, clock):
        profile.record_daily_activity(clock())
        clock.advance(hours=5)
        profile.record_daily_activity(clock())

        assert profile.daily_activity_dates == [clock().date().isoformat()]

    def test_keeps_last_ninety_days(self, profile, clock):
        _active(profile, clock, 120, 91, 90, 3)
        profile.record_daily_activity(clock())

        assert profile.daily_activity_dates == sorted(
            (clock() - timedelta(days=d)).date().isoformat() for d in (90, 3, 0)
        )

    def test_active_days_within_journey(self, clock):
        profile = UserProfile.create(clock() - timedelta(days=5))
        _active(profile, clock, 10, 5, 2, 0)

        assert profile.get_active_days_count(clock()) == 3

    def test_malformed_dates_ignored(self, profile, clock):
        profile.daily_activity_dates = ["yesterday", clock().date().isoformat()]
        assert profile.get_active_days_count(clock()) == 1


class TestStreak:
    """Consecutive active days."""

    def test_no_activity(self, profile, clock):
        assert profile.get_current_streak(clock()) == 0

    def test_gap_before_yesterday(self, profile, clock):
        _active(profile, clock, 2, 3, 4)
        assert profile.get_current_streak(clock()) == 0

    def test_three_days_ending_today(self, profile, clock):
        _active(profile, clock, 0, 1, 2)
        assert profile.get_current_streak(clock()) == 2

    def test_anchored_on_yesterday(self, profile, clock):
        _active(profile, clock, 1, 2, 3, 4)
        assert profile.get_current_streak(clock()) == 3

    def test_only_yesterday(self, profile, clock):
        _active(profile, clock, 1)
        assert profile.get_current_streak(clock()) == 0


class TestScores:
    """Growth score derivations."""

    def test_consistency(self, profile, clock):
        profile.journal_entries_count = 10

        profile.update_consistency_score(clock())

        # journal 0.3 + activity 0 + time bonus 0.1
        assert profile.consistency_score == pytest.approx(0.4)

    def test_consistency_capped(self, clock):
        profile = UserProfile.create(clock())
        profile.journal_entries_count = 50
        _active(profile, clock, 0)

        profile.update_consistency_score(clock())

        assert profile.consistency_score == pytest.approx(0.4 + 0.3 + 0.01)

    def test_self_care(self, profile, clock):
        profile.journal_entries_count = 10

        profile.update_self_care_score(clock(), unlocked_count=10)

        assert profile.self_care_score == pytest.approx(0.5)

    def test_emotional_stability(self, profile, clock):
        profile.consistency_score = 0.4
        profile.self_care_score = 0.5

        profile.update_emotional_stability_score(clock())

        assert profile.emotional_stability_score == pytest.approx(0.725)

    def test_language_patterns(self, profile, clock):
        profile.journal_entries_count = 10
        profile.consistency_score = 0.6
        profile.self_care_score = 0.7
        profile.emotional_stability_score = 0.7

        assert profile.has_positive_language_pattern()
        assert profile.has_gratitude_pattern()
        assert profile.has_strength_language(clock())
        assert profile.has_self_compassion_language()
        assert not profile.has_growth_mindset_language(clock())


class TestSnapshot:
    """Snapshot building and coercion."""

    def test_snapshot_values(self, profile, clock):
        profile.total_chat_sessions = 2
        _active(profile, clock, 0, 1)

        snapshot = profile.snapshot(clock())

        assert snapshot.days_since_start == 100
        assert snapshot.current_streak == 1
        assert snapshot.total_chat_sessions == 2
        assert snapshot.active_days_count == 2

    def test_coercion(self):
        snapshot = ProfileSnapshot.from_mapping({
            "days_since_start": "12",
            "current_streak": None,
            "consistency_score": float("nan"),
            "self_care_score": "0.5",
            "positive_language": "true",
            "gratitude_language": 7,
            "unknown_field": 1
        })

        assert snapshot.days_since_start == 12
        assert snapshot.current_streak == 0
        assert snapshot.consistency_score == 0.0
        assert snapshot.self_care_score == 0.5
        assert snapshot.positive_language is True
        assert snapshot.gratitude_language is False

    def test_non_mapping(self):
        assert ProfileSnapshot.from_mapping("garbage") == ProfileSnapshot()


class TestPersistence:
    """Profile blob round trip."""

    def test_round_trip(self, profile, clock):
        store = MemoryBlobStore()
        profile.journal_entries_count = 4
        save_profile(store, profile)

        assert load_profile(store, clock()) == profile

    def test_corrupted_profile_starts_fresh(self, clock):
        store = MemoryBlobStore({USER_PROFILE_KEY: "{broken"})

        profile = load_profile(store, clock())

        assert profile.no_contact_start_date == clock().isoformat()
        assert profile.journal_entries_count == 0

    def test_malformed_start_date_starts_fresh(self, clock):
        store = MemoryBlobStore()
        store.set_json(USER_PROFILE_KEY, {'no_contact_start_date': 'not-a-date', 'journal_entries_count': 3})

        profile = load_profile(store, clock())

        assert profile.no_contact_start_date == clock().isoformat()
        assert profile.journal_entries_count == 0

    def test_malformed_start_date_in_memory_counts_zero_days(self, clock):
        profile = UserProfile(no_contact_start_date='not-a-date')

        assert profile.days_since_no_contact(clock()) == 0
        assert profile.snapshot(clock()).days_since_start == 0
