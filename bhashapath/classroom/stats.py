"""
Progress statistics derived from a ProgressRecord.

Provides:
- Level progress (XP into the current level, XP left to the next)
- Per-language completion percentages
"""

from dataclasses import dataclass

from bhashapath.schemas import ProgressRecord


DEFAULT_XP_PER_LEVEL = 300


@dataclass
class LevelProgress:
    level: int
    current_level_xp: int
    next_level_xp: int
    xp_into_level: int
    xp_needed: int
    percent: float


def level_progress(record: ProgressRecord, xp_per_level: int = DEFAULT_XP_PER_LEVEL) -> LevelProgress:
    """
    Progress through the learner's current level.

    Level N spans N * xp_per_level to (N + 1) * xp_per_level XP. The
    percentage is clamped to 0-100 since XP and level are tracked apart.
    """
    level = record.current_level
    current_level_xp = level * xp_per_level
    next_level_xp = (level + 1) * xp_per_level
    span = next_level_xp - current_level_xp

    xp_into_level = record.total_xp - current_level_xp
    percent = xp_into_level / span * 100 if span > 0 else 0.0

    return LevelProgress(
        level=level,
        current_level_xp=current_level_xp,
        next_level_xp=next_level_xp,
        xp_into_level=xp_into_level,
        xp_needed=max(next_level_xp - record.total_xp, 0),
        percent=round(min(max(percent, 0.0), 100.0), 1),
    )


def language_completion(record: ProgressRecord) -> dict[str, float]:
    """Percent of each language course completed (0 for empty courses)."""
    return {
        name: round(lang.completed_lessons / lang.total_lessons * 100, 1) if lang.total_lessons > 0 else 0.0
        for name, lang in record.language_progress.items()
    }
