"""
Tests for the content catalog and the daily prompt.
"""

from datetime import date, datetime

import pytest
import pytz

from core.catalog import ContentCatalog, DAILY_PROMPTS, FRESH_START_ID, get_todays_prompt
from core.models import ProgramStatus, ProgramCategory


class TestDefaultPrograms:
    """Generated default catalog."""

    @pytest.fixture
    def programs(self):
        return ContentCatalog().build_default_programs()

    def test_program_ids(self, programs):
        assert [p.program_id for p in programs] == [
            "30-day-fresh-start", "60-day-rebuild", "90-day-transform",
            "breakup-recovery", "family-healing", "divorce-support", "friendship-closure"
        ]

    def test_only_fresh_start_in_progress(self, programs):
        in_progress = [p.program_id for p in programs if p.status == ProgramStatus.IN_PROGRESS.value]
        assert in_progress == [FRESH_START_ID]

    def test_premium_program(self, programs):
        transform = next(p for p in programs if p.program_id == "90-day-transform")
        assert transform.status == ProgramStatus.PREMIUM.value
        assert transform.button_text == "Learn More"

    def test_sessions_cover_every_day(self, programs):
        for program in programs:
            assert len(program.sessions) == program.total_days
            assert [s.day_number for s in program.sessions] == list(range(1, program.total_days + 1))
            assert program.sessions[0].session_id == f"{program.program_id}-day-1"
            assert program.sessions[0].title == "Building Self-Compassion"

    def test_specialized_flag_matches_category(self, programs):
        for program in programs:
            assert program.is_specialized == (program.category == ProgramCategory.SPECIALIZED.value)

    def test_nothing_completed(self, programs):
        assert all(p.progress == 0.0 for p in programs)


class TestSessionContent:
    """Per-day learning and practice content."""

    @pytest.fixture
    def catalog(self):
        return ContentCatalog()

    def test_fresh_start_day_one_practice(self, catalog):
        practice = catalog.practice_content(FRESH_START_ID, 1)

        assert [e.exercise_id for e in practice.exercises] == [
            "inner-critic-identification-1", "inner-friend-reframe-1"
        ]
        assert [r.reflection_id for r in practice.reflections] == [
            "self-compassion-reflection-1", "daily-compassion-1"
        ]

    def test_fresh_start_graduation_day(self, catalog):
        learning = catalog.learning_content(FRESH_START_ID, 30)
        practice = catalog.practice_content(FRESH_START_ID, 30)

        assert learning.sections[0].title == "Your Graduation Day"
        assert practice.reflections[1].placeholder == "Dear Future Me..."

    def test_generic_day_uses_program_theme(self, catalog):
        learning = catalog.learning_content("60-day-rebuild", 12)
        assert learning.sections[0].title == "Day 12: Rebuilding Foundations"

    def test_unknown_program_gets_default_content(self, catalog):
        learning = catalog.learning_content("no-such-program", 4)
        practice = catalog.practice_content("no-such-program", 4)

        assert learning.sections[0].title == "Day 4 Learning"
        assert practice.exercises[0].exercise_id == "daily-exercise-4"
        assert practice.reflections[0].question == "How are you feeling today?"


class TestDailyPrompt:
    """Prompt picked by day of year."""

    def test_fifteen_prompts(self):
        assert len(DAILY_PROMPTS) == 15

    def test_first_of_january(self):
        assert get_todays_prompt(date(2026, 1, 1)) == DAILY_PROMPTS[1]

    def test_wraps_around(self):
        assert get_todays_prompt(date(2026, 1, 15)) == DAILY_PROMPTS[0]

    def test_stable_within_a_day(self):
        morning = pytz.utc.localize(datetime(2026, 10, 17, 1, 0))
        evening = pytz.utc.localize(datetime(2026, 10, 17, 22, 0))
        assert get_todays_prompt(morning) == get_todays_prompt(evening)
