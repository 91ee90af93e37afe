#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Session Lifecycle
Tracks answers for the session being worked on and archives it on completion

Version: 1.0.0
Date: 2026-10-17
"""

from datetime import datetime
from typing import Callable, Optional
import logging

from core.models import Session, SessionProgress, SessionJournalEntry
from core.program_store import ProgramStore
from core.journal import JournalSink

logger = logging.getLogger(__name__)

class SessionLifecycle:
    """idle -> in progress -> completed -> idle, one session at a time"""

    def __init__(self, store: ProgramStore, journal: Optional[JournalSink] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.journal = journal
        self.clock = clock or store.clock
        self.current_session: Optional[Session] = None
        self.progress: Optional[SessionProgress] = self.store.load_progress()

        if self.progress is not None:
            program = self.store.get_program(self.progress.program_id)
            self.current_session = program.find_session(self.progress.session_id) if program else None
            logger.info(f"Restored in-flight progress for session {self.progress.session_id}")

    # ===== STATE =====

    @property
    def is_session_in_progress(self) -> bool:
        return self.progress is not None and not self.progress.is_completed

    @property
    def is_session_complete(self) -> bool:
        """Every prompt answered and a mood picked; completion itself does not require it"""
        if self.progress is None or self.current_session is None:
            return False

        practice = self.current_session.practice_content
        exercises_complete = all(self.get_exercise_response(e.exercise_id) for e in practice.exercises)
        reflections_complete = all(self.get_reflection_response(r.reflection_id) for r in practice.reflections)
        return exercises_complete and reflections_complete and self.progress.selected_mood is not None

    def get_exercise_response(self, exercise_id: str) -> str:
        if self.progress is None:
            return ""
        return self.progress.exercises.get(exercise_id, "")

    def get_reflection_response(self, reflection_id: str) -> str:
        if self.progress is None:
            return ""
        return self.progress.reflections.get(reflection_id, "")

    @property
    def selected_mood(self) -> Optional[int]:
        return self.progress.selected_mood if self.progress else None

    # ===== TRANSITIONS =====

    def start_session(self, session: Session) -> SessionProgress:
        """Begin a session; any unfinished progress is replaced"""
        if self.is_session_in_progress and self.progress.session_id != session.session_id:
            logger.info(f"Discarding unfinished progress for session {self.progress.session_id}")

        self.current_session = session
        self.progress = SessionProgress.create(session, self.clock())
        self.store.save_progress(self.progress)
        logger.debug(f"Session {session.session_id} started")
        return self.progress

    def update_exercise_response(self, exercise_id: str, response: str) -> None:
        if self.progress is None:
            return
        self.progress.update_exercise(exercise_id, response)
        self.store.save_progress(self.progress)

    def update_reflection_response(self, reflection_id: str, response: str) -> None:
        if self.progress is None:
            return
        self.progress.update_reflection(reflection_id, response)
        self.store.save_progress(self.progress)

    def set_mood(self, mood: int) -> None:
        if self.progress is None:
            return
        self.progress.set_mood(mood)
        self.store.save_progress(self.progress)

    def complete_session(self) -> Optional[SessionJournalEntry]:
        """Fold progress into the store, emit the journal record and return to idle"""
        if self.progress is None:
            return None

        progress = self.progress
        completed_at = self.clock()
        progress.complete(completed_at)

        entry = None
        completed = self.store.complete_session(progress)
        if completed is not None:
            program = self.store.get_program(progress.program_id)
            entry = SessionJournalEntry.create(program, completed, progress, completed_at)
            self._emit(entry)

        self.progress = None
        self.current_session = None
        self.store.clear_progress()
        return entry

    def _emit(self, entry: SessionJournalEntry) -> None:
        if self.journal is None:
            return
        try:
            self.journal.add_session_entry(entry)
        except Exception as e:
            logger.error(f"Journal rejected entry for session {entry.session_id}: {e}")

__all__ = ['SessionLifecycle']
