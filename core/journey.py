#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Journey App
Wires the catalog, stores, lifecycle, profile and achievements into one instance

Version: 1.0.0
Date: 2026-10-17
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging

from config import config
from core.storage import BlobStore, JsonFileBlobStore
from core.catalog import ContentCatalog, get_todays_prompt
from core.entitlements import EntitlementChecker, SubscriptionEntitlements
from core.journal import JournalSink, JournalManager
from core.program_store import ProgramStore
from core.session_progress import SessionLifecycle
from core.profile import UserProfile, ProfileSnapshot, load_profile, save_profile
from core.achievements import AchievementEngine, Celebration
from core.models import SessionJournalEntry
from utils.datetime_utils import now_local

logger = logging.getLogger(__name__)

class JourneyApp:
    """One application session: every service exists exactly once and is shared by reference"""

    def __init__(self, store: BlobStore, entitlements: EntitlementChecker, journal: JournalSink,
                 clock: Callable[[], datetime]):
        self.blob_store = store
        self.entitlements = entitlements
        self.journal = journal
        self.clock = clock

        self.catalog = ContentCatalog()
        self.programs = ProgramStore(store, self.catalog, entitlements, clock)
        self.sessions = SessionLifecycle(self.programs, journal, clock)
        self.achievements = AchievementEngine(store)
        self.profile: UserProfile = load_profile(store, clock())

    def todays_prompt(self) -> str:
        return get_todays_prompt(self.clock())

    def record_activity(self) -> None:
        """Mark today as an active day"""
        self.profile.record_daily_activity(self.clock())
        save_profile(self.blob_store, self.profile)

    def record_chat_session(self) -> None:
        self.profile.record_chat_session()
        save_profile(self.blob_store, self.profile)

    def complete_session(self) -> Optional[SessionJournalEntry]:
        """Complete the active session and mark today as active"""
        entry = self.sessions.complete_session()
        if entry is not None:
            self._sync_journal_count()
            self.profile.record_daily_activity(self.clock())
            save_profile(self.blob_store, self.profile)
        return entry

    def _sync_journal_count(self) -> None:
        self.profile.journal_entries_count = self.journal.entry_count

    def refresh_snapshot(self) -> ProfileSnapshot:
        now = self.clock()
        self._sync_journal_count()
        self.profile.refresh_scores(now, len(self.achievements.unlocked_ids))
        save_profile(self.blob_store, self.profile)
        return self.profile.snapshot(now)

    def celebrations(self) -> List[Celebration]:
        return self.achievements.evaluate(self.refresh_snapshot())

    def check_for_new_achievements(self) -> List[Celebration]:
        return self.achievements.check_for_new_achievements(self.refresh_snapshot())

def create_journey_app(store: Optional[BlobStore] = None, entitlements: Optional[EntitlementChecker] = None,
                       journal: Optional[JournalSink] = None,
                       clock: Optional[Callable[[], datetime]] = None) -> JourneyApp:
    """Create a journey app, using file storage and a free-tier user by default"""
    if store is None:
        config.ensure_directories()
        store = JsonFileBlobStore(config.storage.path, config.storage.json_indent)

    app = JourneyApp(
        store=store,
        entitlements=entitlements or SubscriptionEntitlements(),
        journal=journal or JournalManager(),
        clock=clock or now_local
    )
    logger.info("Journey app created")
    return app

__all__ = ['JourneyApp', 'create_journey_app']
