#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - User Profile
Engagement tracking, derived wellness scores and the snapshot read by achievements

Version: 1.0.0
Date: 2026-10-17
"""

import math
from dataclasses import dataclass, field, asdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel, field_validator

from core.storage import BlobStore, StorageError, USER_PROFILE_KEY
from utils.datetime_utils import days_between, from_iso, local_day

logger = logging.getLogger(__name__)

ACTIVITY_RETENTION_DAYS = 90
# Basic achievements counted towards the self-care milestone bonus
SELF_CARE_ACHIEVEMENT_TARGET = 20.0

# ===== SNAPSHOT =====

class ProfileSnapshot(BaseModel):
    """Read-only metrics for one achievement evaluation; bad values become zero/false"""
    days_since_start: int = 0
    current_streak: int = 0
    journal_entries_count: int = 0
    consistency_score: float = 0.0
    self_care_score: float = 0.0
    emotional_stability_score: float = 0.0
    total_chat_sessions: int = 0
    active_days_count: int = 0
    positive_language: bool = False
    gratitude_language: bool = False
    strength_language: bool = False
    self_compassion_language: bool = False
    growth_mindset_language: bool = False

    @field_validator('days_since_start', 'current_streak', 'journal_entries_count',
                     'total_chat_sessions', 'active_days_count', mode='before')
    @classmethod
    def coerce_count(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator('consistency_score', 'self_care_score', 'emotional_stability_score', mode='before')
    @classmethod
    def coerce_score(cls, v):
        try:
            score = float(v)
        except (TypeError, ValueError):
            return 0.0
        return score if math.isfinite(score) else 0.0

    @field_validator('positive_language', 'gratitude_language', 'strength_language',
                     'self_compassion_language', 'growth_mindset_language', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() == 'true'
        if isinstance(v, (int, float)):
            return v == 1
        return False

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "ProfileSnapshot":
        """Build from loosely typed data, ignoring unknown keys"""
        if not isinstance(data, dict):
            return cls()
        return cls(**{k: v for k, v in data.items() if k in cls.model_fields})

# ===== PROFILE =====

@dataclass
class UserProfile:
    """Healing journey profile with cached growth scores"""
    no_contact_start_date: str
    journal_entries_count: int = 0
    total_chat_sessions: int = 0
    daily_activity_dates: List[str] = field(default_factory=list)
    consistency_score: float = 0.0
    self_care_score: float = 0.0
    emotional_stability_score: float = 0.0

    @classmethod
    def create(cls, now: datetime) -> "UserProfile":
        return cls(no_contact_start_date=now.isoformat())

    # ===== TIME =====

    def days_since_no_contact(self, now: datetime) -> int:
        try:
            start = from_iso(self.no_contact_start_date)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed no-contact start date {self.no_contact_start_date!r}")
            return 0
        if start is None:
            return 0
        return days_between(start, now)

    def _activity_days(self) -> List[date]:
        days = []
        for value in self.daily_activity_dates:
            try:
                days.append(date.fromisoformat(value))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring malformed activity date {value!r}")
        return days

    # ===== ENGAGEMENT =====

    def record_daily_activity(self, now: datetime) -> None:
        """Mark today as active, keeping the last 90 days"""
        today = local_day(now)
        days = self._activity_days()
        if today in days:
            return

        days.append(today)
        cutoff = today - timedelta(days=ACTIVITY_RETENTION_DAYS)
        self.daily_activity_dates = [d.isoformat() for d in sorted(days) if d >= cutoff]

    def record_chat_session(self) -> None:
        self.total_chat_sessions += 1

    def get_current_streak(self, now: datetime) -> int:
        active = set(self._activity_days())
        if not active:
            return 0

        today = local_day(now)
        yesterday = today - timedelta(days=1)

        if today in active:
            cursor = yesterday
        elif yesterday in active:
            cursor = yesterday - timedelta(days=1)
        else:
            return 0

        streak = 1
        while cursor in active:
            streak += 1
            cursor -= timedelta(days=1)

        # Streak counts completed days before the anchor day
        return max(0, streak - 1)

    def get_active_days_count(self, now: datetime) -> int:
        today = local_day(now)
        cutoff = today - timedelta(days=self.days_since_no_contact(now))
        return sum(1 for d in self._activity_days() if cutoff <= d <= today)

    # ===== GROWTH SCORES =====

    def update_consistency_score(self, now: datetime) -> None:
        days = max(1, self.days_since_no_contact(now))

        journal_consistency = min(0.4, self.journal_entries_count / days * 3.0)
        app_usage_consistency = min(0.3, self.get_active_days_count(now) / days * 0.5)
        time_bonus = min(0.3, math.sqrt(days) / 30.0 * 0.3)

        self.consistency_score = min(1.0, journal_consistency + app_usage_consistency + time_bonus)

    def update_self_care_score(self, now: datetime, unlocked_count: int = 0) -> None:
        days = max(1, self.days_since_no_contact(now))

        app_engagement = min(0.4, self.total_chat_sessions / days * 2.0)
        journal_self_care = min(0.3, self.journal_entries_count / days * 5.0)
        milestone_bonus = min(0.3, unlocked_count / SELF_CARE_ACHIEVEMENT_TARGET * 0.4)

        self.self_care_score = min(1.0, app_engagement + journal_self_care + milestone_bonus)

    def update_emotional_stability_score(self, now: datetime) -> None:
        days = max(1, self.days_since_no_contact(now))

        time_stability = min(0.5, 0.3 + days * 0.005)
        consistency_bonus = self.consistency_score * 0.25
        self_care_bonus = self.self_care_score * 0.25

        self.emotional_stability_score = min(1.0, time_stability + consistency_bonus + self_care_bonus)

    def refresh_scores(self, now: datetime, unlocked_count: int = 0) -> None:
        """Recompute all cached scores; stability depends on the other two"""
        self.update_consistency_score(now)
        self.update_self_care_score(now, unlocked_count)
        self.update_emotional_stability_score(now)

    # ===== LANGUAGE PATTERNS =====

    def has_positive_language_pattern(self) -> bool:
        return self.journal_entries_count >= 5 and self.consistency_score >= 0.6

    def has_gratitude_pattern(self) -> bool:
        return self.journal_entries_count >= 10 and self.self_care_score >= 0.7

    def has_strength_language(self, now: datetime) -> bool:
        return self.days_since_no_contact(now) >= 14 and self.emotional_stability_score >= 0.7

    def has_self_compassion_language(self) -> bool:
        return self.journal_entries_count >= 8 and self.emotional_stability_score >= 0.6

    def has_growth_mindset_language(self, now: datetime) -> bool:
        return self.get_active_days_count(now) >= 7 and self.consistency_score >= 0.8

    # ===== SNAPSHOT =====

    def snapshot(self, now: datetime) -> ProfileSnapshot:
        return ProfileSnapshot(
            days_since_start=self.days_since_no_contact(now),
            current_streak=self.get_current_streak(now),
            journal_entries_count=self.journal_entries_count,
            consistency_score=self.consistency_score,
            self_care_score=self.self_care_score,
            emotional_stability_score=self.emotional_stability_score,
            total_chat_sessions=self.total_chat_sessions,
            active_days_count=self.get_active_days_count(now),
            positive_language=self.has_positive_language_pattern(),
            gratitude_language=self.has_gratitude_pattern(),
            strength_language=self.has_strength_language(now),
            self_compassion_language=self.has_self_compassion_language(),
            growth_mindset_language=self.has_growth_mindset_language(now)
        )

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        start = data['no_contact_start_date']
        if from_iso(start) is None:
            raise ValueError("Profile has no no-contact start date")
        return cls(
            no_contact_start_date=start,
            journal_entries_count=int(data.get('journal_entries_count', 0)),
            total_chat_sessions=int(data.get('total_chat_sessions', 0)),
            daily_activity_dates=list(data.get('daily_activity_dates') or []),
            consistency_score=float(data.get('consistency_score', 0.0)),
            self_care_score=float(data.get('self_care_score', 0.0)),
            emotional_stability_score=float(data.get('emotional_stability_score', 0.0))
        )

def load_profile(blob_store: BlobStore, now: datetime) -> UserProfile:
    """Stored profile, or a fresh one starting now when absent or unreadable"""
    try:
        data = blob_store.get_json(USER_PROFILE_KEY)
        if data is not None:
            return UserProfile.from_dict(data)
    except (StorageError, KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Stored profile could not be decoded, starting fresh: {e}")
    return UserProfile.create(now)

def save_profile(blob_store: BlobStore, profile: UserProfile) -> None:
    try:
        blob_store.set_json(USER_PROFILE_KEY, profile.to_dict())
    except StorageError as e:
        logger.error(f"Failed to persist profile: {e}")

__all__ = [
    'ProfileSnapshot',
    'UserProfile',
    'load_profile',
    'save_profile'
]
