#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Journal
Receives completed session records and turns them into journal entries

Version: 1.0.0
Date: 2026-10-17
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Any
import logging

from core.models import SessionJournalEntry

logger = logging.getLogger(__name__)

MOOD_LABELS = {
    1: "😢 Very Sad",
    2: "😔 Sad",
    3: "😐 Neutral",
    4: "🙂 Happy",
    5: "😊 Very Happy"
}

def mood_label(mood: int) -> str:
    return MOOD_LABELS.get(mood, "😐 Neutral")

# ===== CONTRACT =====

class JournalSink(ABC):
    """Append target for completed sessions"""

    @abstractmethod
    def add_session_entry(self, entry: SessionJournalEntry) -> None:
        pass

    @property
    @abstractmethod
    def entry_count(self) -> int:
        pass

# ===== JOURNAL =====

@dataclass
class JournalEntry:
    """Free-text journal entry"""
    entry_id: str
    date_created: str
    content_text: str
    session_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

def format_session_content(entry: SessionJournalEntry) -> str:
    content = f"📚 {entry.title}\n\n"

    if entry.exercises:
        content += "✍️ Practice Exercises:\n\n"
        for exercise in entry.exercises:
            content += f"• {exercise.title}\n{exercise.response}\n\n"

    if entry.reflections:
        content += "🤔 Reflections:\n\n"
        for reflection in entry.reflections:
            content += f"• {reflection.question}\n{reflection.response}\n\n"

    if entry.mood is not None:
        content += f"😊 Mood: {mood_label(entry.mood)}\n"

    return content

class JournalManager(JournalSink):
    """In-process journal that formats session records as text entries"""

    def __init__(self):
        self.entries: List[JournalEntry] = []
        self.entry_callbacks: List[Callable[[JournalEntry], None]] = []

    def add_entry_callback(self, callback: Callable[[JournalEntry], None]) -> None:
        """Register a listener called for every new entry"""
        self.entry_callbacks.append(callback)

    def add_entry(self, content_text: str, date_created: Optional[datetime] = None) -> JournalEntry:
        """Add a free-form entry written by the user"""
        entry = JournalEntry(
            entry_id=str(uuid.uuid4()),
            date_created=(date_created or datetime.now()).isoformat(),
            content_text=content_text
        )
        self._append(entry)
        return entry

    def add_session_entry(self, entry: SessionJournalEntry) -> None:
        journal_entry = JournalEntry(
            entry_id=entry.entry_id,
            date_created=entry.date,
            content_text=format_session_content(entry),
            session_id=entry.session_id
        )
        self._append(journal_entry)
        logger.info(f"Journal entry added for session {entry.session_id}: {entry.summary}")

    def _append(self, entry: JournalEntry) -> None:
        self.entries.append(entry)

        for callback in self.entry_callbacks:
            try:
                callback(entry)
            except Exception as e:
                logger.error(f"Journal entry callback failed: {e}")

    @property
    def entry_count(self) -> int:
        return len(self.entries)

__all__ = [
    'MOOD_LABELS',
    'mood_label',
    'JournalSink',
    'JournalEntry',
    'format_session_content',
    'JournalManager'
]
