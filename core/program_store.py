#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Program Store
Durable program collection and the in-flight session progress slot

Version: 1.0.0
Date: 2026-10-17
"""

from datetime import datetime
from typing import Any, Callable, List, Optional
import logging

from config import config
from core.models import (
    Program, Session, SessionProgress, ProgramStatus, ProgramCategory, DayState, ValidationError
)
from core.storage import (
    BlobStore, StorageError, PROGRAMS_KEY, PROGRESS_KEY, PROGRAM_START_DATE_KEY, CURRENT_PROGRAM_ID_KEY
)
from core.catalog import ContentCatalog
from core.entitlements import EntitlementChecker
from core.day_state import current_day, state_of
from utils.datetime_utils import now_local, from_iso, days_between

logger = logging.getLogger(__name__)

# Everything that can go wrong while turning a stored blob back into models
DECODE_ERRORS = (StorageError, ValidationError, KeyError, TypeError, ValueError, AttributeError)

class ProgramStore:
    """Owns the program list and the single in-flight SessionProgress record"""

    def __init__(self, blob_store: BlobStore, catalog: Optional[ContentCatalog] = None,
                 entitlements: Optional[EntitlementChecker] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.blob_store = blob_store
        self.catalog = catalog or ContentCatalog()
        self.entitlements = entitlements
        self.clock = clock or now_local
        self.programs: List[Program] = []
        self.load_programs()

    # ===== PERSISTENCE =====

    def _write(self, key: str, value: Any) -> bool:
        """Best-effort write; failures are logged and in-memory state is kept"""
        try:
            self.blob_store.set_json(key, value)
            return True
        except StorageError as e:
            logger.error(f"Failed to persist '{key}': {e}")
            return False

    def _remove(self, key: str) -> None:
        try:
            self.blob_store.remove(key)
        except StorageError as e:
            logger.error(f"Failed to remove '{key}': {e}")

    def load_programs(self) -> List[Program]:
        """Decode the stored catalog, regenerating defaults when absent or corrupted"""
        try:
            data = self.blob_store.get_json(PROGRAMS_KEY)
            if data is not None:
                if not isinstance(data, list):
                    raise ValidationError("Stored programs are not a list")
                self.programs = [Program.from_dict(item) for item in data]
                logger.info(f"Loaded {len(self.programs)} programs from store")
                return self.programs
            logger.info("No stored programs, generating default catalog")
        except DECODE_ERRORS as e:
            logger.warning(f"Stored programs could not be decoded, regenerating defaults: {e}")

        self.programs = self.catalog.build_default_programs()
        self.save_programs()
        return self.programs

    def save_programs(self) -> bool:
        return self._write(PROGRAMS_KEY, [program.to_dict() for program in self.programs])

    def reset(self) -> None:
        """Drop all journey state and regenerate the default catalog"""
        for key in (PROGRAMS_KEY, PROGRESS_KEY, PROGRAM_START_DATE_KEY, CURRENT_PROGRAM_ID_KEY):
            self._remove(key)
        self.programs = self.catalog.build_default_programs()
        self.save_programs()
        logger.info("Program store reset to defaults")

    # ===== QUERIES =====

    def get_program(self, program_id: str) -> Optional[Program]:
        return next((p for p in self.programs if p.program_id == program_id), None)

    def get_guided_programs(self) -> List[Program]:
        return [p for p in self.programs if p.category == ProgramCategory.GUIDED.value]

    def get_specialized_programs(self) -> List[Program]:
        return [p for p in self.programs if p.category == ProgramCategory.SPECIALIZED.value]

    def get_current_program(self) -> Optional[Program]:
        """First program in catalog order that is in progress"""
        return next((p for p in self.programs if p.is_in_progress), None)

    def get_todays_session(self, program: Optional[Program] = None) -> Optional[Session]:
        program = program or self.get_current_program()
        if program is None:
            return None
        return program.first_incomplete_session()

    def get_session(self, day: int) -> Optional[Session]:
        """Session for a day of the current program, or of the default program when none is active"""
        program = self.get_current_program() or self.get_program(config.programs.default_program_id)
        if program is None:
            return None
        return program.session_for_day(day)

    def get_next_session(self, program_id: str) -> Optional[Session]:
        program = self.get_program(program_id)
        if program is None:
            return None
        return program.first_incomplete_session()

    @property
    def current_day(self) -> int:
        program = self.get_current_program()
        if program is None:
            return 1
        return current_day(program)

    def get_state(self, day: int) -> DayState:
        return state_of(day, self.get_current_program())

    def get_program_start_date(self) -> Optional[datetime]:
        try:
            return from_iso(self.blob_store.get_json(PROGRAM_START_DATE_KEY))
        except DECODE_ERRORS as e:
            logger.warning(f"Program start date could not be decoded: {e}")
            return None

    def get_days_since_start(self, now: Optional[datetime] = None) -> int:
        start_date = self.get_program_start_date()
        if start_date is None:
            return 0
        return days_between(start_date, now or self.clock())

    # ===== MUTATIONS =====

    def start_program(self, program_id: str) -> bool:
        """Mark a program in progress and record its start; other programs are left as they are"""
        program = self.get_program(program_id)
        if program is None:
            logger.warning(f"Cannot start unknown program {program_id}")
            return False

        if (self.entitlements is not None
                and program_id not in config.programs.starter_program_ids
                and not self.entitlements.can_access_program(program_id)):
            logger.info(f"Access to program {program_id} denied by entitlements")
            return False

        self._write(CURRENT_PROGRAM_ID_KEY, program_id)
        self._write(PROGRAM_START_DATE_KEY, self.clock().isoformat())

        self._replace_program(program.with_status(ProgramStatus.IN_PROGRESS))
        self.save_programs()
        logger.info(f"Program {program_id} started")
        return True

    def complete_session(self, progress: SessionProgress) -> Optional[Session]:
        """Fold a progress record into its program; returns the completed session"""
        program = self.get_program(progress.program_id)
        session = program.find_session(progress.session_id) if program else None
        if session is None:
            logger.warning(
                f"No session {progress.session_id} in program {progress.program_id}, nothing to complete"
            )
            return None

        completed_at = from_iso(progress.completed_at) if progress.completed_at else self.clock()
        completed = session.mark_completed(completed_at)
        self._replace_program(program.with_session(completed))
        self.save_programs()
        logger.info(f"Session {completed.session_id} completed")
        return completed

    def _replace_program(self, program: Program) -> None:
        self.programs = [program if p.program_id == program.program_id else p for p in self.programs]

    # ===== SESSION PROGRESS SLOT =====

    def save_progress(self, progress: Optional[SessionProgress]) -> None:
        if progress is None:
            self._remove(PROGRESS_KEY)
        else:
            self._write(PROGRESS_KEY, progress.to_dict())

    def load_progress(self) -> Optional[SessionProgress]:
        try:
            data = self.blob_store.get_json(PROGRESS_KEY)
            if data is None:
                return None
            return SessionProgress.from_dict(data)
        except DECODE_ERRORS as e:
            logger.warning(f"Stored session progress could not be decoded, discarding: {e}")
            self._remove(PROGRESS_KEY)
            return None

    def clear_progress(self) -> None:
        self._remove(PROGRESS_KEY)

__all__ = ['ProgramStore']
