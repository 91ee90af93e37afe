#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Day State
Maps a program's sessions to the accessibility of each day

Version: 1.0.0
Date: 2026-10-17
"""

from typing import Dict, Optional

from core.models import Program, DayState

def current_day(program: Program) -> int:
    """First incomplete day, or the last day once everything is completed"""
    session = program.first_incomplete_session()
    if session is None:
        return program.total_days
    return session.day_number

def state_of(day: int, program: Optional[Program]) -> DayState:
    """State of a day; program is None when no program is in progress"""
    if program is None:
        return DayState.UNLOCKED if day == 1 else DayState.LOCKED

    today = current_day(program)
    if day == today:
        return DayState.TODAY
    if day < today:
        return DayState.COMPLETED
    return DayState.LOCKED

def day_states(program: Optional[Program], total_days: int) -> Dict[int, DayState]:
    return {day: state_of(day, program) for day in range(1, total_days + 1)}

__all__ = ['current_day', 'state_of', 'day_states']
