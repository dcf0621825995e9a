"""
LessonSession - Question-by-question flow of a single lesson.

Provides:
- Answer selection and checking with audio feedback
- Pronunciation questions graded by the speech recognizer
- Final score and time spent, recorded through the ProgressAccessor
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from bhashapath.schemas import LessonContent, PronunciationQuestion, RecognitionResult
from bhashapath.speech import AudioService, SpeechRecognizer

from .accessor import ProgressAccessor


logger = logging.getLogger(__name__)


@dataclass
class LessonSummary:
    """Outcome of a finished lesson."""
    lesson_id: str
    correct: int
    total: int
    final_score: float  # 0-100
    time_spent: int     # seconds

    @property
    def percent(self) -> int:
        return round(self.final_score)


class LessonSession:
    """
    Walk a learner through a lesson's questions.

    Each question is answered with select_answer() + submit_answer(), then
    next_question() moves on. Moving past the last question completes the
    lesson with score = correct / total * 100.
    """

    def __init__(
        self,
        lesson: LessonContent,
        accessor: ProgressAccessor,
        audio: AudioService,
        recognizer: Optional[SpeechRecognizer] = None,
        timer: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize a lesson session.

        Args:
            lesson: Lesson to run
            accessor: Progress accessor used to record completion
            audio: Plays question audio and feedback cues
            recognizer: Needed for pronunciation questions
            timer: Monotonic seconds source (default: time.monotonic)
        """
        self.lesson = lesson
        self.accessor = accessor
        self.audio = audio
        self.recognizer = recognizer
        self.timer = timer or time.monotonic

        self.index = 0
        self.correct = 0
        self.selected_answer: Optional[str] = None
        self.show_result = False
        self.is_recording = False
        self.last_recognition: Optional[RecognitionResult] = None
        self.recognition_error: Optional[str] = None
        self.summary: Optional[LessonSummary] = None

        self._started_at = self.timer()
        self._cue_tasks: set[asyncio.Task] = set()

    @property
    def current_question(self):
        return self.lesson.questions[self.index]

    @property
    def total(self) -> int:
        return len(self.lesson.questions)

    @property
    def is_last_question(self) -> bool:
        return self.index == self.total - 1

    @property
    def progress_percent(self) -> float:
        return (self.index + 1) / self.total * 100

    @property
    def finished(self) -> bool:
        return self.summary is not None

    # -------------------------------------------------------------------------
    # Answering
    # -------------------------------------------------------------------------

    def select_answer(self, answer: str):
        """Pick an answer. Ignored once the current answer has been submitted."""
        if self.show_result:
            return
        self.selected_answer = answer

    def _is_correct(self) -> bool:
        question = self.current_question
        recognized = self.last_recognition
        if (isinstance(question, PronunciationQuestion)
                and recognized is not None
                and recognized.text == self.selected_answer):
            return recognized.is_correct
        return self.selected_answer == question.correct_answer

    async def submit_answer(self) -> Optional[bool]:
        """
        Check the selected answer and play the matching cue.

        Returns:
            True/False for a correct/incorrect answer, None if nothing selected
            or the answer was already submitted
        """
        if self.selected_answer is None or self.show_result:
            return None

        self.show_result = True
        correct = self._is_correct()
        if correct:
            self.correct += 1
            await self.audio.play_success_sound()
        else:
            await self.audio.play_error_sound()
        return correct

    async def next_question(self) -> Optional[LessonSummary]:
        """
        Advance to the next question, or finish the lesson after the last one.

        Returns:
            LessonSummary when the lesson was just completed, else None

        Raises:
            RuntimeError: If the lesson is already finished
        """
        if self.finished:
            raise RuntimeError(f"Lesson {self.lesson.lesson_id} is already finished")

        if self.is_last_question:
            return await self._finish()

        self.index += 1
        self.selected_answer = None
        self.show_result = False
        self.last_recognition = None
        self.recognition_error = None
        return None

    async def _finish(self) -> LessonSummary:
        if self.is_recording:
            self.stop_pronunciation()

        final_score = self.correct / self.total * 100
        time_spent = round(self.timer() - self._started_at)

        self.summary = LessonSummary(
            lesson_id=self.lesson.lesson_id,
            correct=self.correct,
            total=self.total,
            final_score=final_score,
            time_spent=time_spent,
        )
        logger.info(
            f"Lesson {self.lesson.lesson_id} finished: "
            f"{self.correct}/{self.total} ({self.summary.percent}%) in {time_spent}s"
        )
        await self.accessor.complete_lesson(self.lesson.lesson_id, final_score, time_spent)
        return self.summary

    # -------------------------------------------------------------------------
    # Audio
    # -------------------------------------------------------------------------

    async def play_audio(self):
        """Speak the current question's audio text in the lesson language."""
        text = self.current_question.spoken_text
        if self.recognizer is not None:
            await self.recognizer.speak_text(text, self.lesson.language)
        else:
            await self.audio.play_text(text)

    async def start_pronunciation(self):
        """Listen for the current pronunciation question's answer."""
        question = self.current_question
        if not isinstance(question, PronunciationQuestion) or self.show_result:
            return
        if self.recognizer is None:
            raise RuntimeError("Pronunciation questions need a SpeechRecognizer")

        self.is_recording = True
        self.recognition_error = None
        await self.recognizer.start_listening(
            question.correct_answer,
            self._on_recognition,
            self._on_recognition_error,
        )

    def stop_pronunciation(self):
        if self.recognizer is not None:
            self.recognizer.stop_listening()
        self.is_recording = False

    async def toggle_pronunciation(self):
        """Mic button: start listening, or stop if already recording."""
        if self.is_recording:
            self.stop_pronunciation()
        else:
            await self.start_pronunciation()

    def _on_recognition(self, result: RecognitionResult):
        self.is_recording = False
        if self.show_result:
            return
        self.last_recognition = result
        self.selected_answer = result.text

        cue = self.audio.play_success_sound() if result.is_correct else self.audio.play_error_sound()
        task = asyncio.get_running_loop().create_task(cue)
        self._cue_tasks.add(task)
        task.add_done_callback(self._cue_tasks.discard)

    def _on_recognition_error(self, error: str):
        self.is_recording = False
        self.recognition_error = error
        logger.warning(f"Speech recognition error: {error}")

    async def wait_for_cues(self):
        """Wait for any feedback cues triggered by recognition callbacks."""
        if self._cue_tasks:
            await asyncio.gather(*self._cue_tasks)
