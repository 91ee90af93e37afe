#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Content Catalog
Static per-day learning and practice content, default program set, daily prompt

Version: 1.0.0
Date: 2026-10-17
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Any, Callable, Union
import logging

from core.models import (
    Program, Session, ProgramStatus, ProgramCategory, LearningContent, LearningSection,
    Example, ExampleType, ExampleColor, PracticeContent, Exercise, Reflection, ExerciseType
)
from utils.datetime_utils import day_of_year

logger = logging.getLogger(__name__)

FRESH_START_ID = "30-day-fresh-start"

# ===== PROGRAM DEFINITIONS =====

DEFAULT_PROGRAMS: List[Dict[str, Any]] = [
    {
        'program_id': FRESH_START_ID,
        'title': "30-Day Fresh Start",
        'subtitle': "Improve mindset",
        'description': "Gentle daily practices to establish healthy routines and immediate coping strategies",
        'duration': "2x of 30 days",
        'total_days': 30,
        'status': ProgramStatus.IN_PROGRESS,
        'icon': "leaf.fill",
        'category': ProgramCategory.GUIDED,
    },
    {
        'program_id': "60-day-rebuild",
        'title': "60-Day Rebuild",
        'subtitle': "",
        'description': "Explore deeper healing patterns and rebuild your sense of self with compassion",
        'duration': "Unlocks after 30-Day completion",
        'total_days': 60,
        'status': ProgramStatus.AVAILABLE,
        'icon': "arrow.up.right.circle.fill",
        'category': ProgramCategory.GUIDED,
    },
    {
        'program_id': "90-day-transform",
        'title': "90-Day Transform",
        'subtitle': "Premium Complete",
        'description': "Comprehensive personal transformation journey with advanced healing techniques",
        'duration': "Includes 1-on-1 coaching sessions",
        'total_days': 90,
        'status': ProgramStatus.PREMIUM,
        'icon': "crown.fill",
        'category': ProgramCategory.GUIDED,
    },
    {
        'program_id': "breakup-recovery",
        'title': "Breakup Recovery",
        'subtitle': "",
        'description': "Healing from romantic relationships",
        'duration': "14 days",
        'total_days': 14,
        'status': ProgramStatus.AVAILABLE,
        'icon': "heart.fill",
        'category': ProgramCategory.SPECIALIZED,
    },
    {
        'program_id': "family-healing",
        'title': "Family Healing",
        'subtitle': "",
        'description': "Navigating family relationship changes",
        'duration': "21 days",
        'total_days': 21,
        'status': ProgramStatus.AVAILABLE,
        'icon': "house.fill",
        'category': ProgramCategory.SPECIALIZED,
    },
    {
        'program_id': "divorce-support",
        'title': "Divorce Support",
        'subtitle': "",
        'description': "Support through divorce healing",
        'duration': "28 days",
        'total_days': 28,
        'status': ProgramStatus.AVAILABLE,
        'icon': "scale.3d",
        'category': ProgramCategory.SPECIALIZED,
    },
    {
        'program_id': "friendship-closure",
        'title': "Friendship Closure",
        'subtitle': "",
        'description': "Processing friendship endings",
        'duration': "10 days",
        'total_days': 10,
        'status': ProgramStatus.AVAILABLE,
        'icon': "person.2.fill",
        'category': ProgramCategory.SPECIALIZED,
    },
]

# Themed filler for days without hand-written content: (focus, section title, paragraph)
PROGRAM_THEMES: Dict[str, tuple] = {
    FRESH_START_ID: (
        "Continue building your foundation for healing and growth in your fresh start journey.",
        "Fresh Start Foundations",
        "Today we focus on establishing healthy routines and immediate coping strategies for your healing journey.",
    ),
    "60-day-rebuild": (
        "Exploring deeper healing patterns and rebuilding your sense of self with compassion.",
        "Rebuilding Foundations",
        "Today we dive deeper into understanding your patterns and building lasting change.",
    ),
    "90-day-transform": (
        "Comprehensive personal transformation with advanced healing techniques.",
        "Transformation Journey",
        "Today we work on advanced techniques for lasting personal transformation.",
    ),
    "breakup-recovery": (
        "Continuing your breakup recovery journey with compassion and patience.",
        "Breakup Recovery",
        "Today we explore healthy ways to process your emotions and rebuild your sense of self.",
    ),
    "family-healing": (
        "Navigating family relationship changes with wisdom and boundaries.",
        "Family Healing",
        "Today we explore healthy boundaries and communication in family relationships.",
    ),
    "divorce-support": (
        "Support through the divorce process with practical and emotional guidance.",
        "Divorce Support",
        "Today we focus on managing the emotional and practical aspects of divorce.",
    ),
    "friendship-closure": (
        "Processing friendship endings with grace and understanding.",
        "Friendship Closure",
        "Today we explore how to process the end of friendships with compassion.",
    ),
}

DAILY_PROMPTS = [
    "What is one small thing that brought you comfort today? It could be as simple as a warm cup of tea, a kind word, or a moment of quiet.",
    "Describe a moment today when you felt truly present. What were you doing, and what did you notice around you?",
    "What would you like to tell yourself about the progress you've made recently, no matter how small?",
    "If your past self could see you now, what would surprise them most about your journey?",
    "What is one thing you're grateful for today that you might have overlooked?",
    "How did you show kindness to yourself or others today?",
    "What feeling are you ready to let go of, and what would you like to invite in instead?",
    "Write about a challenge you faced today and how you handled it with grace.",
    "What does peace look like for you in this moment?",
    "Describe something beautiful you noticed today, whether big or small.",
    "What small victory can you celebrate from this week?",
    "What moment today reminded you of your own strength?",
    "What would you tell someone else going through your situation?",
    "What are three things your past self would be proud of?",
    "How are you different now than when you started this journey?",
]

# ===== HAND-WRITTEN CONTENT =====

def _critic_and_friend(day: int, prefix: str, critic_title: str, critic: str,
                       friend_title: str, friend: str) -> List[Example]:
    return [
        Example(f"{prefix}-critic-{day}", ExampleType.INNER_CRITIC.value, critic_title, critic,
                "exclamationmark.triangle.fill", ExampleColor.ORANGE.value),
        Example(f"{prefix}-friend-{day}", ExampleType.INNER_FRIEND.value, friend_title, friend,
                "heart.fill", ExampleColor.GREEN.value),
    ]

def _fresh_start_learning(day: int) -> Optional[LearningContent]:
    if day == 1:
        return LearningContent(
            focus_title="Today's Focus",
            focus_description="Learning to speak to yourself with the same kindness you would a good friend. "
                              "Self-compassion isn't about being perfect, it's about being gentle when you are not.",
            sections=[LearningSection(f"understanding-{day}", "Understanding Self-Compassion", [
                "Self-compassion has three vital components: being kind to yourself with understanding, "
                "remembering that you're part of the human experience, and observing your thoughts without judgment.",
                "You cannot get angry at yourself or the situation. Sometimes we criticize ourselves for not "
                "having the \"perfect\" response.",
            ])],
            examples=_critic_and_friend(
                day, "inner",
                "Inner Critic Says", "\"You can't do anything right. You should have known better.\"",
                "Inner Friend Says", "\"It's ok, everyone makes mistakes. You're human and you're doing your best.\""
            )
        )
    if day == 2:
        return LearningContent(
            focus_title="Today's Focus",
            focus_description="Understanding why no contact is essential for your healing and how to handle "
                              "the urge to reach out.",
            sections=[LearningSection(f"no-contact-basics-{day}", "The Science Behind No Contact", [
                "No contact isn't about punishment. It's about creating space for your nervous system to "
                "regulate and your mind to gain clarity.",
                "Every time you reach out or check their social media, you're essentially 'feeding' the neural "
                "pathways that keep you attached.",
                "Think of it like healing a physical wound. You wouldn't keep picking at it, and your heart "
                "needs the same protection.",
            ])],
            examples=_critic_and_friend(
                day, "urge",
                "The Urge Says", "\"Just one text won't hurt. You need closure. They might be missing you too.\"",
                "Your Wisdom Says", "\"I'm protecting my peace right now. Healing requires space, and I'm giving "
                                    "myself that gift.\""
            )
        )
    if day == 30:
        return LearningContent(
            focus_title="Today's Focus",
            focus_description="Celebrating your graduation and stepping into your new life with confidence, "
                              "wisdom, and hope.",
            sections=[LearningSection(f"graduation-celebration-{day}", "Your Graduation Day", [
                "Thirty days. One month. A complete cycle of transformation. You started this journey in pain, "
                "and you're ending it with wisdom, strength, and hope.",
                "This isn't the end of your growth; it's your graduation into a new way of living.",
            ])],
            examples=_critic_and_friend(
                day, "graduation",
                "Fear Says", "\"What if you can't maintain this growth? What if you need this program forever?\"",
                "Confidence Says", "\"I have everything I need within me. I'm ready for whatever comes next.\""
            )
        )
    return None

def _breakup_learning(day: int) -> Optional[LearningContent]:
    if day != 1:
        return None
    return LearningContent(
        focus_title="Today's Focus",
        focus_description="Beginning your journey of healing from a romantic relationship. Today we focus on "
                          "acknowledging your feelings and starting the process of self-compassion.",
        sections=[LearningSection(f"breakup-understanding-{day}", "Understanding Breakup Grief", [
            "Breakups involve a genuine loss that requires time to process and heal from.",
            "It's normal to feel a range of emotions: sadness, anger, confusion, and even relief.",
            "Healing isn't linear, and it's okay to have good days and difficult days.",
        ])],
        examples=_critic_and_friend(
            day, "breakup",
            "Inner Critic Says", "\"You should be over this by now. Everyone else moves on faster.\"",
            "Inner Friend Says", "\"Healing takes time, and you're allowed to feel whatever you're feeling right now.\""
        )
    )

def _fresh_start_practice(day: int) -> Optional[PracticeContent]:
    if day == 1:
        return PracticeContent(
            exercises=[
                Exercise(f"inner-critic-identification-{day}",
                         "Think of a recent situation where you were hard on yourself. "
                         "Write down what your inner critic said to you.",
                         "My inner critic said things like..."),
                Exercise(f"inner-friend-reframe-{day}",
                         "Now, rewrite that same situation from the perspective of a caring friend. "
                         "What would they say to you?",
                         "A caring friend would say..."),
            ],
            reflections=[
                Reflection(f"self-compassion-reflection-{day}",
                           "How does it feel to try to treat yourself with kindness you'd give a friend?",
                           "Treating myself with kindness feels..."),
                Reflection(f"daily-compassion-{day}",
                           "How are you today? What would you like to tell yourself with more compassion?",
                           "Today I want to tell myself..."),
            ]
        )
    if day == 2:
        return PracticeContent(
            exercises=[
                Exercise(f"no-contact-commitment-{day}",
                         "Write down your personal reasons for choosing no contact. "
                         "What are you protecting by maintaining this boundary?",
                         "I'm choosing no contact because..."),
                Exercise(f"urge-plan-{day}",
                         "Create your 'urge action plan.' What will you do the next time you feel like reaching out?",
                         "When I feel the urge to contact them, I will..."),
            ],
            reflections=[
                Reflection(f"no-contact-strength-{day}",
                           "What strength did it take to start no contact? Acknowledge the courage you've already shown.",
                           "It took strength to..."),
                Reflection(f"healing-space-{day}",
                           "How does it feel to give yourself this space to heal?",
                           "This space feels..."),
            ]
        )
    if day == 30:
        return PracticeContent(
            exercises=[
                Exercise(f"graduation-celebration-{day}",
                         "Plan a meaningful way to celebrate your graduation from this program. "
                         "How will you honor this achievement?",
                         "I will celebrate by..."),
                Exercise(f"graduation-manifesto-{day}",
                         "Write your personal manifesto for moving forward. What do you stand for now?",
                         "My manifesto:\nI believe...\nI stand for...\nI commit to...\nI am..."),
            ],
            reflections=[
                Reflection(f"graduation-gratitude-{day}",
                           "What are you most grateful for about this entire journey?",
                           "I'm most grateful for..."),
                Reflection(f"graduation-future-{day}",
                           "As you graduate from this program, what message do you want to send to your future self?",
                           "Dear Future Me..."),
            ]
        )
    return None

# ===== CATALOG =====

class ContentCatalog:
    """Read-only content addressed by (program_id, day_number)"""

    def __init__(self):
        self.learning_builders: Dict[str, Callable[[int], Optional[LearningContent]]] = {}
        self.practice_builders: Dict[str, Callable[[int], Optional[PracticeContent]]] = {}
        self._load_default_content()

    def register_content(self, program_id: str,
                         learning: Optional[Callable[[int], Optional[LearningContent]]] = None,
                         practice: Optional[Callable[[int], Optional[PracticeContent]]] = None) -> None:
        """Register hand-written content for a program"""
        if learning:
            self.learning_builders[program_id] = learning
        if practice:
            self.practice_builders[program_id] = practice
        logger.debug(f"Registered content for program: {program_id}")

    def _load_default_content(self) -> None:
        self.register_content(FRESH_START_ID, _fresh_start_learning, _fresh_start_practice)
        self.register_content("breakup-recovery", learning=_breakup_learning)

    def learning_content(self, program_id: str, day: int) -> LearningContent:
        builder = self.learning_builders.get(program_id)
        content = builder(day) if builder else None
        return content or self._themed_learning(program_id, day)

    def practice_content(self, program_id: str, day: int) -> PracticeContent:
        builder = self.practice_builders.get(program_id)
        content = builder(day) if builder else None
        return content or self._default_practice(day)

    def _themed_learning(self, program_id: str, day: int) -> LearningContent:
        theme = PROGRAM_THEMES.get(program_id)
        if theme is None:
            return LearningContent(
                focus_title="Today's Focus",
                focus_description="Continue building your foundation for healing and growth.",
                sections=[LearningSection(f"section-{day}", f"Day {day} Learning",
                                          [f"Today's learning content for day {day}."])]
            )

        focus, section_title, paragraph = theme
        return LearningContent(
            focus_title="Today's Focus",
            focus_description=focus,
            sections=[LearningSection(f"{program_id}-section-{day}", f"Day {day}: {section_title}", [paragraph])]
        )

    def _default_practice(self, day: int) -> PracticeContent:
        return PracticeContent(
            exercises=[Exercise(f"daily-exercise-{day}", f"Daily reflection exercise for day {day}",
                                "Write your thoughts here...", ExerciseType.WRITING.value)],
            reflections=[Reflection(f"daily-reflection-{day}", "How are you feeling today?",
                                    "Share your thoughts...")]
        )

    # ===== PROGRAM GENERATION =====

    def build_session(self, program_id: str, day: int) -> Session:
        return Session(
            session_id=f"{program_id}-day-{day}",
            program_id=program_id,
            day_number=day,
            title="Building Self-Compassion" if day == 1 else f"Day {day} Session",
            subtitle="Today's journey toward treating yourself with kindness" if day == 1
                     else "Continue your healing journey",
            learning_content=self.learning_content(program_id, day),
            practice_content=self.practice_content(program_id, day)
        )

    def build_program(self, definition: Dict[str, Any]) -> Program:
        program_id = definition['program_id']
        total_days = definition['total_days']
        category = definition['category']
        return Program(
            program_id=program_id,
            title=definition['title'],
            subtitle=definition['subtitle'],
            description=definition['description'],
            duration=definition['duration'],
            total_days=total_days,
            status=definition['status'].value,
            icon=definition['icon'],
            category=category.value,
            sessions=[self.build_session(program_id, day) for day in range(1, total_days + 1)],
            is_specialized=category == ProgramCategory.SPECIALIZED
        )

    def build_default_programs(self) -> List[Program]:
        """Full default catalog, with the 30-day program already in progress"""
        programs = [self.build_program(definition) for definition in DEFAULT_PROGRAMS]
        logger.info(f"Generated default catalog with {len(programs)} programs")
        return programs

# ===== DAILY PROMPT =====

def get_todays_prompt(today: Union[date, datetime]) -> str:
    """Same prompt for the whole calendar day"""
    return DAILY_PROMPTS[day_of_year(today) % len(DAILY_PROMPTS)]

__all__ = [
    'FRESH_START_ID',
    'DEFAULT_PROGRAMS',
    'PROGRAM_THEMES',
    'DAILY_PROMPTS',
    'ContentCatalog',
    'get_todays_prompt'
]
