#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Achievement System
Celebrations unlocked from profile metrics, with sequential gating and a display queue

Version: 1.0.0
Date: 2026-10-17
"""

from dataclasses import dataclass, asdict
from enum import Enum
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Union
import logging

from config import config
from core.profile import ProfileSnapshot
from core.storage import BlobStore, StorageError, UNLOCKED_ACHIEVEMENTS_KEY, SHOWN_ACHIEVEMENTS_KEY

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class AchievementCategory(Enum):
    """Achievement categories"""
    TIME_BASED_DAYS = "time_based_days"
    STREAK = "streak"
    JOURNALING = "journaling"
    CONSISTENCY = "consistency"
    SELF_CARE = "self_care"
    EMERGENCY_SOS = "emergency_sos"
    EMOTIONAL_LANGUAGE = "emotional_language"
    APP_ENGAGEMENT = "app_engagement"
    SPECIAL = "special"

TIME_SEQUENCE = (1, 3, 7, 14, 21, 30, 60, 90, 180, 365)
STREAK_SEQUENCE = (3, 7, 14, 30)

# ===== DATA CLASSES =====

@dataclass(frozen=True)
class AchievementDefinition:
    """A badge: its category and integer requirement identify it"""
    achievement_id: str
    title: str
    subtitle: str
    icon: str
    category: AchievementCategory
    requirement: int = 0

@dataclass(frozen=True)
class Celebration:
    """An achievement as presented after an evaluation"""
    achievement_id: str
    title: str
    subtitle: str
    icon: str
    category: AchievementCategory
    requirement: int
    is_unlocked: bool

    @classmethod
    def from_definition(cls, definition: AchievementDefinition, is_unlocked: bool) -> "Celebration":
        return cls(
            achievement_id=definition.achievement_id,
            title=definition.title,
            subtitle=definition.subtitle,
            icon=definition.icon,
            category=definition.category,
            requirement=definition.requirement,
            is_unlocked=is_unlocked
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['category'] = self.category.value
        return data

def slugify_title(title: str) -> str:
    return title.lower().replace(" ", "_")

def previous_threshold(requirement: int, sequence: Sequence[int]) -> Optional[int]:
    """Threshold just before requirement in sequence; None for the first or an unlisted one"""
    if requirement not in sequence:
        return None
    index = list(sequence).index(requirement)
    if index == 0:
        return None
    return sequence[index - 1]

# ===== ACHIEVEMENT CHECKERS =====

class AchievementChecker(ABC):
    """Decides whether a locked achievement unlocks"""

    @abstractmethod
    def check(self, snapshot: ProfileSnapshot, unlocked: FrozenSet[str]) -> bool:
        pass

class ThresholdChecker(AchievementChecker):
    """Metric reaches a threshold"""

    def __init__(self, threshold: float, value_getter: Callable[[ProfileSnapshot], float]):
        self.threshold = threshold
        self.value_getter = value_getter

    def check(self, snapshot: ProfileSnapshot, unlocked: FrozenSet[str]) -> bool:
        return self.value_getter(snapshot) >= self.threshold

class ConditionalChecker(AchievementChecker):
    """Arbitrary condition over the snapshot"""

    def __init__(self, condition_func: Callable[[ProfileSnapshot], bool]):
        self.condition_func = condition_func

    def check(self, snapshot: ProfileSnapshot, unlocked: FrozenSet[str]) -> bool:
        return bool(self.condition_func(snapshot))

class SequentialChecker(AchievementChecker):
    """Unlocks only after its predecessor in an ordered chain"""

    def __init__(self, inner: AchievementChecker, predecessor_id: Optional[str]):
        self.inner = inner
        self.predecessor_id = predecessor_id

    def check(self, snapshot: ProfileSnapshot, unlocked: FrozenSet[str]) -> bool:
        if not self.inner.check(snapshot, unlocked):
            return False
        return self.predecessor_id is None or self.predecessor_id in unlocked

# ===== ACHIEVEMENT REGISTRY =====

TIME_ACHIEVEMENTS = [
    (1, "First Step", "Your journey begins", "figure.walk"),
    (3, "Three Day Hero", "Building momentum", "3.circle.fill"),
    (7, "Week Warrior", "Seven days strong", "calendar"),
    (14, "Fortnight Fighter", "Two weeks of courage", "14.circle.fill"),
    (21, "Three Week Wonder", "21 days of growth", "star.circle"),
    (30, "Monthly Master", "One month milestone", "crown.fill"),
    (60, "Two Month Titan", "60 days of strength", "diamond.fill"),
    (90, "Quarter Year Queen", "90 days of transformation", "sparkles"),
    (180, "Half Year Hero", "Six months of healing", "trophy.fill"),
    (365, "Year of Triumph", "365 days of victory", "star.circle.fill"),
]

STREAK_ACHIEVEMENTS = [
    (3, "Streak Starter", "3 days in a row", "flame.fill"),
    (7, "Streak Warrior", "7 day streak", "flame.circle.fill"),
    (14, "Streak Master", "14 day streak", "flame.circle"),
    (30, "Streak Legend", "30 day streak", "flame"),
]

JOURNAL_ACHIEVEMENTS = [
    (1, "First Words", "Your first journal entry", "pencil.circle"),
    (5, "Storyteller", "5 journal entries", "book.closed"),
    (10, "Chronicle Keeper", "10 entries of wisdom", "books.vertical"),
    (25, "Memory Weaver", "25 entries of growth", "text.book.closed"),
    (50, "Journal Master", "50 entries of insight", "book.fill"),
    (100, "Word Wizard", "100 entries of healing", "text.magnifyingglass"),
]

# Score thresholds are expressed in percent
CONSISTENCY_ACHIEVEMENTS = [
    (50, "Getting Started", "50% consistency", "heart.circle"),
    (70, "Steady Heart", "70% consistency", "heart.circle.fill"),
    (85, "Consistency Champion", "85% consistency", "heart.fill"),
    (95, "Perfect Balance", "95% consistency", "heart.text.square.fill"),
]

SELF_CARE_ACHIEVEMENTS = [
    (60, "Self-Care Starter", "60% self-care score", "leaf.circle"),
    (80, "Self-Love Guardian", "80% self-care mastery", "leaf.circle.fill"),
    (90, "Wellness Warrior", "90% self-care excellence", "leaf.fill"),
]

SOS_ACHIEVEMENTS = [
    (1, "Crisis Survivor", "Used SOS instead of breaking no contact", "shield.fill"),
    (3, "Strength Finder", "3 times you chose healing over hurt", "heart.circle.fill"),
    (5, "Resilience Builder", "5 moments of choosing yourself", "mountain.2.fill"),
    (10, "Crisis Master", "10 times you stayed strong", "crown.fill"),
    (15, "Unbreakable", "15 SOS sessions - incredible strength", "diamond.fill"),
]

EMOTIONAL_ACHIEVEMENTS = [
    ("Hope Finder", "Using hopeful language", "sun.max.fill", lambda s: s.positive_language),
    ("Gratitude Master", "Expressing gratitude regularly", "heart.fill", lambda s: s.gratitude_language),
    ("Strength Speaker", "Recognizing your power", "bolt.fill", lambda s: s.strength_language),
    ("Self-Compassion Sage", "Being kind to yourself", "hands.sparkles.fill",
     lambda s: s.self_compassion_language),
    ("Growth Mindset", "Embracing learning", "arrow.up.right.circle.fill", lambda s: s.growth_mindset_language),
]

ENGAGEMENT_ACHIEVEMENTS = [
    (3, "Explorer", "3 days of app usage", "map.circle"),
    (7, "Regular User", "7 days of engagement", "calendar.circle"),
    (14, "Committed User", "14 days of growth", "star.circle"),
    (30, "Dedicated User", "30 days of healing", "crown.circle"),
    (60, "Power User", "60 days of transformation", "diamond.circle"),
]

SPECIAL_ACHIEVEMENTS = [
    ("Emotional Master", "80% emotional stability", "brain.head.profile.fill",
     lambda s: s.emotional_stability_score >= 0.8),
    ("Balanced Growth", "30 days + 15 journal entries", "scale.3d",
     lambda s: s.days_since_start >= 30 and s.journal_entries_count >= 15),
    ("Harmony Achiever", "80% consistency + self-care", "infinity.circle.fill",
     lambda s: s.consistency_score >= 0.8 and s.self_care_score >= 0.8),
    ("Dedicated Healer", "14-day streak + 10 entries", "cross.case.fill",
     lambda s: s.current_streak >= 14 and s.journal_entries_count >= 10),
]

class AchievementRegistry:
    """All achievements with their checkers, in registration order"""

    def __init__(self, streak_own_sequence: Optional[bool] = None):
        if streak_own_sequence is None:
            streak_own_sequence = config.achievements.streak_own_sequence
        self.streak_sequence = STREAK_SEQUENCE if streak_own_sequence else TIME_SEQUENCE
        self.achievements: Dict[str, AchievementDefinition] = {}
        self.checkers: Dict[str, AchievementChecker] = {}
        self._load_default_achievements()

    def register_achievement(self, definition: AchievementDefinition, checker: AchievementChecker) -> None:
        """Register an achievement"""
        self.achievements[definition.achievement_id] = definition
        self.checkers[definition.achievement_id] = checker
        logger.debug(f"Registered achievement: {definition.achievement_id}")

    def register_sequence(self, category: AchievementCategory, id_format: str, entries: List[tuple],
                          value_getter: Callable[[ProfileSnapshot], float],
                          sequence: Sequence[int]) -> None:
        """Register a chain where each badge waits for the previous threshold's badge"""
        for requirement, title, subtitle, icon in entries:
            previous = previous_threshold(requirement, sequence)
            predecessor_id = id_format.format(previous) if previous is not None else None
            self.register_achievement(
                AchievementDefinition(id_format.format(requirement), title, subtitle, icon, category, requirement),
                SequentialChecker(ThresholdChecker(requirement, value_getter), predecessor_id)
            )

        for definition in self.get_achievements_by_category(category):
            predecessor_id = self.checkers[definition.achievement_id].predecessor_id
            if predecessor_id is not None and predecessor_id not in self.achievements:
                logger.debug(
                    f"Achievement {definition.achievement_id} waits for unregistered {predecessor_id}"
                )

    def register_thresholds(self, category: AchievementCategory, id_format: str, entries: List[tuple],
                            value_getter: Callable[[ProfileSnapshot], float], scale: float = 1.0) -> None:
        for requirement, title, subtitle, icon in entries:
            self.register_achievement(
                AchievementDefinition(id_format.format(requirement), title, subtitle, icon, category, requirement),
                ThresholdChecker(requirement / scale, value_getter)
            )

    def register_conditions(self, category: AchievementCategory, prefix: str, entries: List[tuple]) -> None:
        for title, subtitle, icon, condition in entries:
            self.register_achievement(
                AchievementDefinition(f"{prefix}_{slugify_title(title)}", title, subtitle, icon, category),
                ConditionalChecker(condition)
            )

    def get_achievement(self, achievement_id: str) -> Optional[AchievementDefinition]:
        return self.achievements.get(achievement_id)

    def get_checker(self, achievement_id: str) -> Optional[AchievementChecker]:
        return self.checkers.get(achievement_id)

    def get_all_achievements(self) -> List[AchievementDefinition]:
        return list(self.achievements.values())

    def get_achievements_by_category(self, category: AchievementCategory) -> List[AchievementDefinition]:
        return [ach for ach in self.achievements.values() if ach.category == category]

    def _load_default_achievements(self):
        """Load the standard achievement set"""
        self.register_sequence(AchievementCategory.TIME_BASED_DAYS, "time_{}_days", TIME_ACHIEVEMENTS,
                               lambda s: s.days_since_start, TIME_SEQUENCE)
        # Streak ids are built from their own thresholds; only the chain they walk is configurable
        self.register_sequence(AchievementCategory.STREAK, "streak_{}_days", STREAK_ACHIEVEMENTS,
                               lambda s: s.current_streak, self.streak_sequence)
        self.register_thresholds(AchievementCategory.JOURNALING, "journal_{}_entries", JOURNAL_ACHIEVEMENTS,
                                 lambda s: s.journal_entries_count)
        self.register_thresholds(AchievementCategory.CONSISTENCY, "consistency_{}_percent",
                                 CONSISTENCY_ACHIEVEMENTS, lambda s: s.consistency_score, scale=100.0)
        self.register_thresholds(AchievementCategory.SELF_CARE, "selfcare_{}_percent", SELF_CARE_ACHIEVEMENTS,
                                 lambda s: s.self_care_score, scale=100.0)
        self.register_thresholds(AchievementCategory.EMERGENCY_SOS, "sos_{}_sessions", SOS_ACHIEVEMENTS,
                                 lambda s: s.total_chat_sessions)
        self.register_conditions(AchievementCategory.EMOTIONAL_LANGUAGE, "emotional", EMOTIONAL_ACHIEVEMENTS)
        self.register_thresholds(AchievementCategory.APP_ENGAGEMENT, "engagement_{}_days",
                                 ENGAGEMENT_ACHIEVEMENTS, lambda s: s.active_days_count)
        self.register_conditions(AchievementCategory.SPECIAL, "special", SPECIAL_ACHIEVEMENTS)

        logger.info(f"Loaded {len(self.achievements)} achievements")

# ===== ACHIEVEMENT ENGINE =====

ProfileInput = Union[ProfileSnapshot, Dict[str, Any], None]

class AchievementEngine:
    """Unlocks achievements, persists the unlocked set and queues celebrations for display"""

    def __init__(self, blob_store: BlobStore, registry: Optional[AchievementRegistry] = None,
                 queue_enabled: Optional[bool] = None):
        self.blob_store = blob_store
        self.registry = registry or AchievementRegistry()
        if queue_enabled is None:
            queue_enabled = config.achievements.celebration_queue_enabled
        self.queue_enabled = queue_enabled

        self.unlocked_ids: List[str] = self._load_ids(UNLOCKED_ACHIEVEMENTS_KEY)
        self.shown_ids: List[str] = self._load_ids(SHOWN_ACHIEVEMENTS_KEY)
        self.achievement_queue: List[Celebration] = []
        self.current_achievement: Optional[Celebration] = None

        logger.info(f"Achievement engine initialized with {len(self.unlocked_ids)} unlocked achievements")

    # ===== PERSISTENCE =====

    def _load_ids(self, key: str) -> List[str]:
        try:
            data = self.blob_store.get_json(key)
        except StorageError as e:
            logger.warning(f"Stored '{key}' could not be decoded, starting empty: {e}")
            return []
        if not isinstance(data, list):
            if data is not None:
                logger.warning(f"Stored '{key}' is not a list, starting empty")
            return []
        return list(dict.fromkeys(item for item in data if isinstance(item, str)))

    def _save_ids(self, key: str, ids: List[str]) -> None:
        try:
            self.blob_store.set_json(key, ids)
        except StorageError as e:
            logger.error(f"Failed to persist '{key}': {e}")

    # ===== EVALUATION =====

    @staticmethod
    def _as_snapshot(profile: ProfileInput) -> ProfileSnapshot:
        if isinstance(profile, ProfileSnapshot):
            return profile
        return ProfileSnapshot.from_mapping(profile)

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self.unlocked_ids

    def _unlock_new(self, snapshot: ProfileSnapshot) -> List[AchievementDefinition]:
        """Unlock everything that passes, gating against the set as it was on entry"""
        unlocked_before = frozenset(self.unlocked_ids)
        newly_unlocked = []

        for definition in self.registry.get_all_achievements():
            if definition.achievement_id in unlocked_before:
                continue

            checker = self.registry.get_checker(definition.achievement_id)
            if checker is None:
                continue

            if checker.check(snapshot, unlocked_before):
                newly_unlocked.append(definition)

        if newly_unlocked:
            self.unlocked_ids.extend(d.achievement_id for d in newly_unlocked)
            self._save_ids(UNLOCKED_ACHIEVEMENTS_KEY, self.unlocked_ids)
            for definition in newly_unlocked:
                logger.info(f"🏆 Achievement unlocked: {definition.achievement_id}")

        return newly_unlocked

    def evaluate(self, profile: ProfileInput) -> List[Celebration]:
        """All celebrations, unlocked first, each group by ascending requirement"""
        self._unlock_new(self._as_snapshot(profile))
        celebrations = [
            Celebration.from_definition(definition, self.is_unlocked(definition.achievement_id))
            for definition in self.registry.get_all_achievements()
        ]
        return sorted(celebrations, key=lambda c: (not c.is_unlocked, c.requirement))

    # ===== CELEBRATION QUEUE =====

    def check_for_new_achievements(self, profile: ProfileInput) -> List[Celebration]:
        """Unlock and queue celebrations that have never been shown"""
        fresh = [
            Celebration.from_definition(definition, True)
            for definition in self._unlock_new(self._as_snapshot(profile))
            if definition.achievement_id not in self.shown_ids
        ]
        if fresh and self.queue_enabled:
            self.achievement_queue.extend(fresh)
        return fresh

    def next_achievement(self) -> Optional[Celebration]:
        """Celebration currently on display, taking the next queued one if none is"""
        if self.current_achievement is None and self.achievement_queue:
            self.current_achievement = self.achievement_queue.pop(0)
        return self.current_achievement

    def dismiss_achievement(self, celebration: Optional[Celebration] = None) -> bool:
        """Mark a celebration as shown; defaults to the one on display"""
        celebration = celebration or self.current_achievement
        if celebration is None:
            return False

        if celebration.achievement_id not in self.shown_ids:
            self.shown_ids.append(celebration.achievement_id)
            self._save_ids(SHOWN_ACHIEVEMENTS_KEY, self.shown_ids)

        if self.current_achievement is not None and \
                self.current_achievement.achievement_id == celebration.achievement_id:
            self.current_achievement = None
        return True

    def get_summary(self) -> Dict[str, Any]:
        total = len(self.registry.achievements)
        by_category = {}
        for category in AchievementCategory:
            definitions = self.registry.get_achievements_by_category(category)
            by_category[category.value] = {
                'total': len(definitions),
                'unlocked': sum(1 for d in definitions if self.is_unlocked(d.achievement_id))
            }
        return {
            'total': total,
            'unlocked': len(self.unlocked_ids),
            'queued': len(self.achievement_queue),
            'by_category': by_category
        }

__all__ = [
    'AchievementCategory',
    'TIME_SEQUENCE',
    'STREAK_SEQUENCE',
    'AchievementDefinition',
    'Celebration',
    'slugify_title',
    'previous_threshold',
    'AchievementChecker',
    'ThresholdChecker',
    'ConditionalChecker',
    'SequentialChecker',
    'AchievementRegistry',
    'AchievementEngine'
]
