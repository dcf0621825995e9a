"""
SpeechRecognizer - Simulated speech recognition for pronunciation practice.

There is no recognizer behind this: after a fixed delay it answers with one
of a few canned results picked at random. It exists so pronunciation
questions can be exercised end to end.
"""

import asyncio
import logging
import random
from typing import Any, Callable, Optional

from bhashapath.schemas import RecognitionResult
from bhashapath.utils.config import load_config

from .tts import Speaker


logger = logging.getLogger(__name__)

ResultCallback = Callable[[RecognitionResult], None]
ErrorCallback = Callable[[str], None]


def candidate_results(expected_text: str) -> list[RecognitionResult]:
    """Canned recognition results for an expected phrase."""
    return [
        RecognitionResult(text=expected_text, confidence=0.95, is_correct=True),
        RecognitionResult(text=expected_text.lower(), confidence=0.85, is_correct=True),
        RecognitionResult(
            text="namaste",
            confidence=0.70,
            is_correct="namaste" in expected_text.lower(),
        ),
        RecognitionResult(text="hello", confidence=0.60, is_correct=False),
    ]


class SpeechRecognizer:
    """
    Listen for an expected phrase and report a (simulated) result.

    Only one listening session runs at a time; stop_listening() cancels the
    pending result.
    """

    def __init__(
        self,
        speaker: Speaker,
        delay: Optional[float] = None,
        rng: Optional[random.Random] = None,
        config: Optional[dict[str, Any]] = None,
    ):
        """
        Args:
            speaker: Used for the "Listening..." prompt and speak_text()
            delay: Seconds before a result is delivered (default from config)
            rng: Random source for picking a result
            config: Loaded configuration (default: packaged defaults.yaml)
        """
        self.speaker = speaker
        self.config = config if config is not None else load_config()
        self.delay = delay if delay is not None else self.config.get("recognition_delay", 3.0)
        self.rng = rng or random.Random()
        self._listening = False
        self._session = 0
        self._pending: Optional[asyncio.Task] = None

    @property
    def is_listening(self) -> bool:
        return self._listening

    async def start_listening(
        self,
        expected_text: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ):
        """Start a listening session. Ignored while one is already running."""
        if self._listening:
            return

        self._listening = True
        self._session += 1
        session = self._session

        try:
            await self.speaker.speak("Listening...", "en-US", 1.0, 1.2)
        except Exception as e:
            logger.error(f"Speech recognition failed to start: {e}")
            if session == self._session:
                self._listening = False
                on_error("Speech recognition failed")
            return

        # The session may have been stopped or replaced while the prompt was playing
        if not self._listening or session != self._session:
            return

        self._pending = asyncio.create_task(self._recognize(expected_text, on_result))

    async def _recognize(self, expected_text: str, on_result: ResultCallback):
        await asyncio.sleep(self.delay)
        self._listening = False
        self._pending = None

        result = self.rng.choice(candidate_results(expected_text))
        logger.debug(f"Recognized {result.text!r} ({result.confidence:.2f})")
        on_result(result)

    def stop_listening(self):
        """Cancel the current session and discard its result."""
        self._listening = False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        try:
            self.speaker.stop()
        except Exception as e:
            logger.error(f"Failed to stop speech: {e}")

    def language_tag(self, language: str) -> str:
        """TTS language tag for a course language (or a tag passed through)."""
        voice_map = self.config.get("voice_map", {})
        return voice_map.get(language, self.config.get("default_language_tag", "hi-IN"))

    async def speak_text(self, text: str, language: str = "hi-IN"):
        """Speak text in a course language, e.g. "marathi"."""
        try:
            await self.speaker.speak(text, self.language_tag(language), 1.0, 0.8)
        except Exception as e:
            logger.error(f"Failed to speak text: {e}")
