"""
Classroom - Wire storage, progress, lessons and speech for one learner.

Presentation code builds one Classroom per session instead of reaching for
module-level singletons.
"""

from dataclasses import dataclass
from typing import Optional

from bhashapath.speech import AudioService, GoogleCloudSpeaker, Speaker, SpeechRecognizer
from bhashapath.utils.config import Settings

from .accessor import ProgressAccessor
from .loader import LessonLoader
from .progress import ProgressStore
from .session import LessonSession
from .stats import DEFAULT_XP_PER_LEVEL, LevelProgress, level_progress
from .storage import LocalStorage


@dataclass
class Classroom:
    settings: Settings
    storage: LocalStorage
    store: ProgressStore
    accessor: ProgressAccessor
    audio: AudioService
    recognizer: SpeechRecognizer
    lessons: LessonLoader

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        speaker: Optional[Speaker] = None,
        lessons: Optional[LessonLoader] = None,
    ) -> "Classroom":
        """
        Build a classroom.

        Args:
            settings: Runtime settings (default: Settings.from_env())
            speaker: TTS backend (default: GoogleCloudSpeaker over settings.audio_dir)
            lessons: Lesson source (default: packaged lessons)
        """
        settings = settings or Settings.from_env()
        speaker = speaker or GoogleCloudSpeaker(settings.audio_dir, voice_name=settings.tts_voice)

        storage = LocalStorage(settings.storage_path)
        store = ProgressStore(storage, config=settings.config)

        return cls(
            settings=settings,
            storage=storage,
            store=store,
            accessor=ProgressAccessor(store),
            audio=AudioService(speaker),
            recognizer=SpeechRecognizer(speaker, config=settings.config),
            lessons=lessons or LessonLoader(),
        )

    def start_lesson(self, lesson_id: str) -> LessonSession:
        """
        Begin a lesson session.

        Raises:
            KeyError: If no lesson exists with this id
        """
        lesson = self.lessons.get_lesson(lesson_id)
        if lesson is None:
            raise KeyError(f"Lesson not found: {lesson_id}")

        return LessonSession(lesson, self.accessor, self.audio, self.recognizer)

    def level_progress(self) -> LevelProgress:
        """Level progress of the loaded record (default record before the first load)."""
        record = self.accessor.progress or self.store.default_progress()
        xp_per_level = self.settings.config.get("xp_per_level", DEFAULT_XP_PER_LEVEL)
        return level_progress(record, xp_per_level)
