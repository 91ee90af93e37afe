"""
Tests for the day state engine.
"""

import pytest

from core.catalog import ContentCatalog, DEFAULT_PROGRAMS
from core.day_state import current_day, state_of, day_states
from core.models import DayState


def _program(program_id="friendship-closure"):
    definition = next(d for d in DEFAULT_PROGRAMS if d['program_id'] == program_id)
    return ContentCatalog().build_program(definition)


def _complete_days(program, count, completed_at):
    for session in program.sessions[:count]:
        program = program.with_session(session.mark_completed(completed_at))
    return program


class TestNoActiveProgram:
    """Without a program in progress only day 1 is open."""

    def test_day_one_unlocked(self):
        assert state_of(1, None) == DayState.UNLOCKED

    @pytest.mark.parametrize("day", [2, 3, 10, 30])
    def test_other_days_locked(self, day):
        assert state_of(day, None) == DayState.LOCKED


class TestActiveProgram:
    """With a program in progress every day is today, completed or locked."""

    @pytest.mark.parametrize("completed", [0, 1, 4, 9])
    def test_exactly_one_today(self, completed, clock):
        program = _complete_days(_program(), completed, clock())
        states = day_states(program, program.total_days)

        today_days = [day for day, state in states.items() if state == DayState.TODAY]
        assert today_days == [completed + 1]
        assert all(states[day] == DayState.COMPLETED for day in range(1, completed + 1))
        assert all(states[day] == DayState.LOCKED for day in range(completed + 2, program.total_days + 1))
        assert DayState.UNLOCKED not in states.values()

    def test_all_completed_reports_last_day_as_today(self, clock):
        program = _complete_days(_program(), 10, clock())

        assert current_day(program) == program.total_days
        assert state_of(program.total_days, program) == DayState.TODAY
        assert state_of(program.total_days - 1, program) == DayState.COMPLETED

    def test_current_day_follows_first_incomplete_session(self, clock):
        program = _program()
        # Completing day 2 out of order leaves day 1 as the cursor
        program = program.with_session(program.sessions[1].mark_completed(clock()))

        assert current_day(program) == 1
        assert state_of(2, program) == DayState.LOCKED
