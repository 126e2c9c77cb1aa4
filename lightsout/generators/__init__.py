"""
Level generators and tutorial lessons for Lights Out.
"""

from .level_generator import LevelGenerator, LevelGeneratorConfig, GeneratedLevel, generate_random
from .tutorial import (
    TutorialLesson, TutorialCategory, TutorialSession, HintMode,
    TUTORIAL_CATEGORIES, LESSONS, get_lesson, list_lessons
)

__all__ = [
    # Random levels
    'LevelGenerator', 'LevelGeneratorConfig', 'GeneratedLevel',
    'generate_random',

    # Tutorial
    'TutorialLesson', 'TutorialCategory', 'TutorialSession', 'HintMode',
    'TUTORIAL_CATEGORIES', 'LESSONS', 'get_lesson', 'list_lessons',
]
