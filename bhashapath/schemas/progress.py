"""
Progress tracking schemas for BhashaPath.

Defines Pydantic models for learner progress including:
- Per-language lesson counters
- The learner's cumulative progress record
- Individual lesson attempt results

Python attributes are snake_case; persisted JSON uses the camelCase aliases
so stored records stay readable by every client of the same storage.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def xp_for_score(score: float) -> int:
    """XP awarded for a lesson score, rounded half-up (0.5 goes up)."""
    return int(math.floor(score * 10 + 0.5))


class LanguageProgress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed_lessons: int = Field(default=0, ge=0, alias="completedLessons")
    total_lessons: int = Field(default=0, ge=0, alias="totalLessons")
    current_level: int = Field(default=1, ge=0, alias="currentLevel")


class ProgressRecord(BaseModel):
    """
    Summary of a learner's cumulative state.

    completed_lessons has set semantics: it is kept as a list for stable
    JSON output, but duplicate ids are dropped on validation.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    user_id: str = Field(default="default_user", alias="userId")
    completed_lessons: list[str] = Field(default_factory=list, alias="completedLessons")
    current_level: int = Field(default=1, ge=0, alias="currentLevel")
    total_xp: int = Field(default=0, ge=0, alias="totalXP")
    streak_days: int = Field(default=0, ge=0, alias="streakDays")
    last_study_date: Optional[datetime] = Field(default=None, alias="lastStudyDate")
    language_progress: dict[str, LanguageProgress] = Field(
        default_factory=dict, alias="languageProgress"
    )

    @field_validator('completed_lessons')
    @classmethod
    def unique_lessons(cls, v):
        return list(dict.fromkeys(v))

    def has_completed(self, lesson_id: str) -> bool:
        return lesson_id in self.completed_lessons

    def to_storage(self) -> dict:
        """JSON-ready dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class LessonResult(BaseModel):
    """One immutable record of a single lesson-completion attempt."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    lesson_id: str = Field(..., alias="lessonId")
    score: float = Field(..., ge=0, le=100)
    completed_at: datetime = Field(..., alias="completedAt")
    time_spent: int = Field(..., ge=0, alias="timeSpent")  # seconds
    attempts: int = Field(default=1, ge=1)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
