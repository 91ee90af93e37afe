#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Core Data Models
Programs, sessions, session progress and journal records with validation

Version: 1.0.0
Date: 2026-10-17
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
import logging

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class ProgramStatus(Enum):
    """Program statuses"""
    NOT_STARTED = "not_started"
    AVAILABLE = "available"
    IN_PROGRESS = "in_progress"
    PREMIUM = "premium"
    LOCKED = "locked"
    COMPLETED = "completed"

class ProgramCategory(Enum):
    """Program categories"""
    GUIDED = "guided"
    SPECIALIZED = "specialized"

class DayState(Enum):
    """Accessibility of a single program day"""
    TODAY = "today"
    COMPLETED = "completed"
    UNLOCKED = "unlocked"
    LOCKED = "locked"

class ExerciseType(Enum):
    """Practice exercise types"""
    WRITING = "writing"
    COMPARISON = "comparison"
    REFLECTION = "reflection"

class ExampleType(Enum):
    """Learning example types"""
    INNER_CRITIC = "inner_critic"
    INNER_FRIEND = "inner_friend"
    POSITIVE = "positive"
    NEGATIVE = "negative"

class ExampleColor(Enum):
    """Learning example accent colors"""
    ORANGE = "orange"
    GREEN = "green"
    PURPLE = "purple"
    BLUE = "blue"

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Invalid model data"""
    pass

def validate_enum_value(value: str, enum_class: type, field_name: str = "value") -> str:
    """Validate an enum value stored as its string form"""
    if isinstance(value, enum_class):
        return value.value
    try:
        enum_class(value)
        return value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

def _require(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValidationError(f"Missing field '{key}'")
    return data[key]

# ===== CONTENT MODELS =====

@dataclass
class LearningSection:
    """A titled block of learning paragraphs"""
    section_id: str
    title: str
    content: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningSection":
        return cls(**data)

@dataclass
class Example:
    """Inner critic / inner friend style example"""
    example_id: str
    type: str
    title: str
    content: str
    icon: str
    color: str

    def __post_init__(self):
        self.type = validate_enum_value(self.type, ExampleType, "type")
        self.color = validate_enum_value(self.color, ExampleColor, "color")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Example":
        return cls(**data)

@dataclass
class LearningContent:
    """Read-only learning part of a session"""
    focus_title: str
    focus_description: str
    sections: List[LearningSection] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'focus_title': self.focus_title,
            'focus_description': self.focus_description,
            'sections': [s.to_dict() for s in self.sections],
            'examples': [e.to_dict() for e in self.examples]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningContent":
        return cls(
            focus_title=_require(data, 'focus_title'),
            focus_description=_require(data, 'focus_description'),
            sections=[LearningSection.from_dict(s) for s in data.get('sections', [])],
            examples=[Example.from_dict(e) for e in data.get('examples', [])]
        )

@dataclass
class Exercise:
    """Practice exercise prompt"""
    exercise_id: str
    title: str
    placeholder: str = ""
    type: str = ExerciseType.WRITING.value

    def __post_init__(self):
        self.type = validate_enum_value(self.type, ExerciseType, "type")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Exercise":
        return cls(**data)

@dataclass
class Reflection:
    """Reflection question prompt"""
    reflection_id: str
    question: str
    placeholder: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reflection":
        return cls(**data)

@dataclass
class PracticeContent:
    """Ordered exercises and reflections of a session"""
    exercises: List[Exercise] = field(default_factory=list)
    reflections: List[Reflection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exercises': [e.to_dict() for e in self.exercises],
            'reflections': [r.to_dict() for r in self.reflections]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PracticeContent":
        return cls(
            exercises=[Exercise.from_dict(e) for e in data.get('exercises', [])],
            reflections=[Reflection.from_dict(r) for r in data.get('reflections', [])]
        )

# ===== PROGRAM MODELS =====

@dataclass
class Session:
    """One day of a program"""
    session_id: str
    program_id: str
    day_number: int
    title: str
    subtitle: str
    learning_content: LearningContent
    practice_content: PracticeContent
    is_completed: bool = False
    completed_at: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.day_number, int) or self.day_number < 1:
            raise ValidationError(f"day_number must be a positive integer, got {self.day_number!r}")

    @property
    def progress_text(self) -> str:
        return f"Day {self.day_number}"

    def mark_completed(self, completed_at: datetime) -> "Session":
        """Return a completed copy; an already completed session keeps its timestamp"""
        if self.is_completed:
            return self
        return replace(self, is_completed=True, completed_at=completed_at.isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'session_id': self.session_id,
            'program_id': self.program_id,
            'day_number': self.day_number,
            'title': self.title,
            'subtitle': self.subtitle,
            'learning_content': self.learning_content.to_dict(),
            'practice_content': self.practice_content.to_dict(),
            'is_completed': self.is_completed,
            'completed_at': self.completed_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(
            session_id=_require(data, 'session_id'),
            program_id=_require(data, 'program_id'),
            day_number=_require(data, 'day_number'),
            title=_require(data, 'title'),
            subtitle=data.get('subtitle', ""),
            learning_content=LearningContent.from_dict(_require(data, 'learning_content')),
            practice_content=PracticeContent.from_dict(_require(data, 'practice_content')),
            is_completed=bool(data.get('is_completed', False)),
            completed_at=data.get('completed_at')
        )

@dataclass
class Program:
    """Multi-day curriculum made of ordered sessions"""
    program_id: str
    title: str
    subtitle: str
    description: str
    duration: str
    total_days: int
    status: str
    icon: str
    category: str
    sessions: List[Session] = field(default_factory=list)
    is_specialized: bool = False

    def __post_init__(self):
        """Validate after construction"""
        self.status = validate_enum_value(self.status, ProgramStatus, "status")
        self.category = validate_enum_value(self.category, ProgramCategory, "category")

        if len(self.sessions) != self.total_days:
            raise ValidationError(
                f"Program {self.program_id} has {len(self.sessions)} sessions for {self.total_days} days"
            )

        self.sessions = sorted(self.sessions, key=lambda s: s.day_number)
        expected_days = list(range(1, self.total_days + 1))
        if [s.day_number for s in self.sessions] != expected_days:
            raise ValidationError(f"Program {self.program_id} day numbers must be contiguous from 1")

    # ===== PROPERTIES =====

    @property
    def completed_sessions_count(self) -> int:
        return sum(1 for s in self.sessions if s.is_completed)

    @property
    def progress(self) -> float:
        """Completed share of total days"""
        return self.completed_sessions_count / self.total_days if self.total_days > 0 else 0.0

    @property
    def is_in_progress(self) -> bool:
        return self.status == ProgramStatus.IN_PROGRESS.value

    @property
    def status_text(self) -> str:
        return {
            ProgramStatus.NOT_STARTED.value: "Not Started",
            ProgramStatus.IN_PROGRESS.value: "In Progress",
            ProgramStatus.AVAILABLE.value: "Available",
            ProgramStatus.PREMIUM.value: "Premium",
            ProgramStatus.LOCKED.value: "Locked",
            ProgramStatus.COMPLETED.value: "Completed"
        }[self.status]

    @property
    def button_text(self) -> str:
        return {
            ProgramStatus.NOT_STARTED.value: "Start Program",
            ProgramStatus.IN_PROGRESS.value: "Continue Program",
            ProgramStatus.AVAILABLE.value: "Start Program",
            ProgramStatus.PREMIUM.value: "Learn More",
            ProgramStatus.LOCKED.value: "Unlock",
            ProgramStatus.COMPLETED.value: "Review"
        }[self.status]

    # ===== METHODS =====

    def find_session(self, session_id: str) -> Optional[Session]:
        return next((s for s in self.sessions if s.session_id == session_id), None)

    def session_for_day(self, day: int) -> Optional[Session]:
        return next((s for s in self.sessions if s.day_number == day), None)

    def first_incomplete_session(self) -> Optional[Session]:
        return next((s for s in self.sessions if not s.is_completed), None)

    def with_status(self, status: ProgramStatus) -> "Program":
        return replace(self, status=status.value)

    def with_session(self, session: Session) -> "Program":
        """Return a copy with the session of the same id swapped in"""
        sessions = [session if s.session_id == session.session_id else s for s in self.sessions]
        return replace(self, sessions=sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'program_id': self.program_id,
            'title': self.title,
            'subtitle': self.subtitle,
            'description': self.description,
            'duration': self.duration,
            'total_days': self.total_days,
            'status': self.status,
            'icon': self.icon,
            'category': self.category,
            'sessions': [s.to_dict() for s in self.sessions],
            'is_specialized': self.is_specialized
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Program":
        return cls(
            program_id=_require(data, 'program_id'),
            title=_require(data, 'title'),
            subtitle=data.get('subtitle', ""),
            description=data.get('description', ""),
            duration=data.get('duration', ""),
            total_days=_require(data, 'total_days'),
            status=_require(data, 'status'),
            icon=data.get('icon', ""),
            category=_require(data, 'category'),
            sessions=[Session.from_dict(s) for s in _require(data, 'sessions')],
            is_specialized=bool(data.get('is_specialized', False))
        )

# ===== SESSION PROGRESS =====

@dataclass
class SessionProgress:
    """The single in-flight attempt at a session"""
    session_id: str
    program_id: str
    started_at: str
    completed_at: Optional[str] = None
    exercises: Dict[str, str] = field(default_factory=dict)
    reflections: Dict[str, str] = field(default_factory=dict)
    selected_mood: Optional[int] = None
    is_completed: bool = False

    def update_exercise(self, exercise_id: str, response: str) -> None:
        self.exercises[exercise_id] = response

    def update_reflection(self, reflection_id: str, response: str) -> None:
        self.reflections[reflection_id] = response

    def set_mood(self, mood: int) -> None:
        self.selected_mood = mood

    def complete(self, completed_at: datetime) -> None:
        self.is_completed = True
        self.completed_at = completed_at.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionProgress":
        return cls(
            session_id=_require(data, 'session_id'),
            program_id=_require(data, 'program_id'),
            started_at=_require(data, 'started_at'),
            completed_at=data.get('completed_at'),
            exercises=dict(data.get('exercises') or {}),
            reflections=dict(data.get('reflections') or {}),
            selected_mood=data.get('selected_mood'),
            is_completed=bool(data.get('is_completed', False))
        )

    @classmethod
    def create(cls, session: Session, started_at: datetime) -> "SessionProgress":
        """Fresh progress for a session"""
        return cls(
            session_id=session.session_id,
            program_id=session.program_id,
            started_at=started_at.isoformat()
        )

# ===== JOURNAL RECORDS =====

@dataclass
class ExerciseResponse:
    exercise_id: str
    title: str
    response: str

@dataclass
class ReflectionResponse:
    reflection_id: str
    question: str
    response: str

@dataclass
class SessionJournalEntry:
    """Structured record emitted when a session is completed"""
    entry_id: str
    session_id: str
    program_title: str
    session_title: str
    date: str
    exercises: List[ExerciseResponse] = field(default_factory=list)
    reflections: List[ReflectionResponse] = field(default_factory=list)
    mood: Optional[int] = None

    @property
    def title(self) -> str:
        return f"{self.program_title}: {self.session_title}"

    @property
    def summary(self) -> str:
        return f"{len(self.exercises)} exercises, {len(self.reflections)} reflections"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def create(cls, program: Program, session: Session, progress: SessionProgress,
               fallback_date: datetime) -> "SessionJournalEntry":
        """Build the entry from non-empty responses, in prompt order"""
        exercises = [
            ExerciseResponse(exercise.exercise_id, exercise.title, progress.exercises[exercise.exercise_id])
            for exercise in session.practice_content.exercises
            if progress.exercises.get(exercise.exercise_id)
        ]
        reflections = [
            ReflectionResponse(reflection.reflection_id, reflection.question,
                               progress.reflections[reflection.reflection_id])
            for reflection in session.practice_content.reflections
            if progress.reflections.get(reflection.reflection_id)
        ]
        return cls(
            entry_id=str(uuid.uuid4()),
            session_id=session.session_id,
            program_title=program.title,
            session_title=session.title,
            date=progress.completed_at or fallback_date.isoformat(),
            exercises=exercises,
            reflections=reflections,
            mood=progress.selected_mood
        )

__all__ = [
    'ProgramStatus',
    'ProgramCategory',
    'DayState',
    'ExerciseType',
    'ExampleType',
    'ExampleColor',
    'ValidationError',
    'validate_enum_value',
    'LearningSection',
    'Example',
    'LearningContent',
    'Exercise',
    'Reflection',
    'PracticeContent',
    'Session',
    'Program',
    'SessionProgress',
    'ExerciseResponse',
    'ReflectionResponse',
    'SessionJournalEntry'
]
