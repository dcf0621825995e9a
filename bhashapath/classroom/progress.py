"""
ProgressStore - Durable owner of the learner's progress record.

Stores two independent keys in LocalStorage:
- "user_progress": the ProgressRecord summary (XP, streak, completed lessons)
- "lesson_results": append-only list of LessonResult attempts

Every read/write fails silently: errors are logged and the caller carries on
with a default record, an empty result list, or a no-op.
"""

import asyncio
import json
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from bhashapath.schemas import (
    LanguageProgress,
    LessonResult,
    ProgressRecord,
    xp_for_score,
)
from bhashapath.utils.config import load_config

from .storage import LocalStorage, StorageError


logger = logging.getLogger(__name__)

USER_PROGRESS_KEY = "user_progress"
LESSON_RESULTS_KEY = "lesson_results"


def local_now() -> datetime:
    """Current time as an aware datetime in the device's local timezone."""
    return datetime.now().astimezone()


def _calendar_date(value: datetime, tz):
    # Naive timestamps are taken to be local already.
    if value.tzinfo is None or tz is None:
        return value.date()
    return value.astimezone(tz).date()


def next_streak(streak_days: int, last_study: Optional[datetime], now: datetime) -> int:
    """
    Streak after a new lesson is completed at `now`.

    Studied yesterday -> streak + 1; already studied today -> unchanged;
    any longer gap (or never studied) -> 1.
    """
    if last_study is None:
        return 1

    today = now.date()
    previous = _calendar_date(last_study, now.tzinfo)

    if previous == today - timedelta(days=1):
        return streak_days + 1
    if previous == today:
        return streak_days
    return 1


class ProgressStore:
    """
    Read, save and update one learner's progress in local storage.

    The store is an explicit handle: tests and multiple learners each get
    their own instance over their own LocalStorage.
    """

    def __init__(
        self,
        storage: LocalStorage,
        clock: Optional[Callable[[], datetime]] = None,
        config: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize progress store.

        Args:
            storage: LocalStorage holding the two progress keys
            clock: Returns the current aware local time (default: system clock)
            config: Loaded configuration (default: packaged defaults.yaml)
        """
        self.storage = storage
        self.clock = clock or local_now
        self.config = config if config is not None else load_config()
        self._lock = asyncio.Lock()

    def default_progress(self) -> ProgressRecord:
        """Zero-valued record for a learner with no saved progress."""
        languages = self.config.get("languages", {})
        return ProgressRecord(
            user_id=self.config.get("default_user_id", "default_user"),
            language_progress={
                name: LanguageProgress(
                    completed_lessons=0,
                    total_lessons=entry.get("total_lessons", 0),
                    current_level=entry.get("current_level", 1),
                )
                for name, entry in languages.items()
            },
        )

    # -------------------------------------------------------------------------
    # Summary record
    # -------------------------------------------------------------------------

    async def get_progress(self) -> Optional[ProgressRecord]:
        """Get the saved progress record, or None if absent or unreadable."""
        try:
            data = await self.storage.get_item(USER_PROGRESS_KEY)
            if data is None:
                return None
            return ProgressRecord.model_validate(json.loads(data))
        except (StorageError, ValueError) as e:
            logger.error(f"Failed to get user progress: {e}")
            return None

    async def save_progress(self, record: ProgressRecord):
        """Overwrite the saved progress record."""
        try:
            await self.storage.set_item(
                USER_PROGRESS_KEY,
                json.dumps(record.to_storage(), ensure_ascii=False),
            )
        except StorageError as e:
            logger.error(f"Failed to save user progress: {e}")

    async def complete_lesson(self, lesson_id: str, score: float, time_spent: int) -> ProgressRecord:
        """
        Record a lesson completion.

        The first completion of a lesson awards round(score * 10) XP and
        updates the streak. Repeats leave the summary untouched. Every call
        appends a LessonResult.

        Args:
            lesson_id: Lesson identifier
            score: Lesson score, 0-100
            time_spent: Seconds spent on the lesson

        Returns:
            The progress record as saved

        Raises:
            pydantic.ValidationError: If score or time_spent is out of range;
                nothing is saved in that case
        """
        async with self._lock:
            now = self.clock()
            # attempts stays 1 even on repeats; the log keeps one entry per attempt.
            result = LessonResult(
                lesson_id=lesson_id,
                score=score,
                completed_at=now,
                time_spent=time_spent,
                attempts=1,
            )
            record = await self.get_progress() or self.default_progress()

            if not record.has_completed(lesson_id):
                record.completed_lessons.append(lesson_id)
                record.total_xp += xp_for_score(score)
                record.streak_days = next_streak(record.streak_days, record.last_study_date, now)
                record.last_study_date = now
                logger.info(
                    f"Completed {lesson_id}: +{xp_for_score(score)} XP, "
                    f"streak {record.streak_days}"
                )
            else:
                logger.info(f"Repeated {lesson_id}: progress unchanged")

            await self.save_progress(record)
            await self._append_result(result)

            return record

    async def reset_progress(self):
        """Remove the saved record and the result log."""
        try:
            await self.storage.remove_item(USER_PROGRESS_KEY)
            await self.storage.remove_item(LESSON_RESULTS_KEY)
        except StorageError as e:
            logger.error(f"Failed to reset progress: {e}")

    # -------------------------------------------------------------------------
    # Lesson result log
    # -------------------------------------------------------------------------

    async def get_lesson_results(self) -> list[LessonResult]:
        """Get all lesson results in the order they were recorded."""
        try:
            return await self._read_results()
        except (StorageError, ValueError, TypeError) as e:
            logger.error(f"Failed to get lesson results: {e}")
            return []

    async def _read_results(self) -> list[LessonResult]:
        data = await self.storage.get_item(LESSON_RESULTS_KEY)
        if data is None:
            return []
        return [LessonResult.model_validate(item) for item in json.loads(data)]

    async def _append_result(self, result: LessonResult):
        # An unreadable log is left as is rather than replaced by one entry.
        try:
            results = await self._read_results()
        except (StorageError, ValueError, TypeError) as e:
            logger.error(f"Lesson result log unreadable, not recording {result.lesson_id}: {e}")
            return

        results.append(result)
        try:
            await self.storage.set_item(
                LESSON_RESULTS_KEY,
                json.dumps([r.to_storage() for r in results], ensure_ascii=False),
            )
        except StorageError as e:
            logger.error(f"Failed to save lesson result for {result.lesson_id}: {e}")
