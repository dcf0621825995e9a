"""
BhashaPath Schemas - Pydantic models for the language-learning core.

This module exports all schema classes for:
- Progress: learner progress record and lesson attempt results
- Lesson: lesson content and question variants
- Speech: speech recognition results
"""

# Progress schemas
from .progress import (
    LanguageProgress,
    ProgressRecord,
    LessonResult,
    xp_for_score,
)

# Lesson schemas
from .lesson import (
    VocabularyQuestion,
    TranslationQuestion,
    ListeningQuestion,
    PronunciationQuestion,
    Question,
    LessonContent,
)

# Speech schemas
from .speech import RecognitionResult

__all__ = [
    # Progress
    'LanguageProgress',
    'ProgressRecord',
    'LessonResult',
    'xp_for_score',
    # Lesson
    'VocabularyQuestion',
    'TranslationQuestion',
    'ListeningQuestion',
    'PronunciationQuestion',
    'Question',
    'LessonContent',
    # Speech
    'RecognitionResult',
]
