"""
LessonLoader - Load lesson content from JSON files.

Each lesson lives in <lessons_dir>/<lesson_id>.json and is validated
against LessonContent on load.
"""

import json
from pathlib import Path
from typing import Optional

from bhashapath.schemas import LessonContent


DEFAULT_LESSONS_DIR = Path(__file__).parent.parent / "lessons"


class LessonLoader:
    """Read-only access to lesson files."""

    def __init__(self, lessons_dir: Optional[Path] = None):
        """
        Args:
            lessons_dir: Directory of lesson JSON files (default: packaged lessons)
        """
        self.lessons_dir = Path(lessons_dir) if lessons_dir else DEFAULT_LESSONS_DIR
        if not self.lessons_dir.exists():
            raise FileNotFoundError(f"Lessons directory not found: {self.lessons_dir}")

    def get_lesson_ids(self) -> list[str]:
        return sorted(p.stem for p in self.lessons_dir.glob("*.json"))

    def get_lesson(self, lesson_id: str) -> Optional[LessonContent]:
        """
        Load one lesson.

        Returns:
            LessonContent, or None if no file exists for the id

        Raises:
            pydantic.ValidationError: If the file doesn't match the schema
        """
        safe_id = lesson_id.replace("/", "_").replace("\\", "_")
        path = self.lessons_dir / f"{safe_id}.json"
        if not path.exists():
            return None

        with open(path, "r", encoding="utf-8") as f:
            return LessonContent.model_validate(json.load(f))
