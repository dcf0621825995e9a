"""
BhashaPath Classroom - Runtime components for progress and lessons.

This module provides:
- LocalStorage: key/value device storage
- ProgressStore: progress record and lesson result log
- ProgressAccessor: cached progress for presentation code
- LessonSession: question flow of a lesson
- Stats: level and language completion figures
- LessonLoader: lesson content files
- Classroom: everything above wired for one learner
"""

from .storage import (
    LocalStorage,
    StorageError,
    DEFAULT_STORAGE_PATH,
)

from .progress import (
    ProgressStore,
    USER_PROGRESS_KEY,
    LESSON_RESULTS_KEY,
    next_streak,
    local_now,
)

from .accessor import (
    ProgressAccessor,
    AccessorState,
)

from .session import (
    LessonSession,
    LessonSummary,
)

from .loader import (
    LessonLoader,
    DEFAULT_LESSONS_DIR,
)

from .factory import Classroom

from .stats import (
    LevelProgress,
    level_progress,
    language_completion,
)

__all__ = [
    # Storage
    "LocalStorage",
    "StorageError",
    "DEFAULT_STORAGE_PATH",
    # Progress
    "ProgressStore",
    "USER_PROGRESS_KEY",
    "LESSON_RESULTS_KEY",
    "next_streak",
    "local_now",
    # Accessor
    "ProgressAccessor",
    "AccessorState",
    # Session
    "LessonSession",
    "LessonSummary",
    # Loader
    "LessonLoader",
    "DEFAULT_LESSONS_DIR",
    # Factory
    "Classroom",
    # Stats
    "LevelProgress",
    "level_progress",
    "language_completion",
]
