"""
AudioService - Spoken playback of lesson text and answer feedback cues.

Playback failures never reach the caller: they are logged and ignored.
"""

import logging

from .tts import Speaker


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE_TAG = "hi-IN"


class AudioService:
    def __init__(self, speaker: Speaker):
        self.speaker = speaker

    async def _say(self, text: str, language_tag: str, pitch: float, rate: float, what: str):
        try:
            await self.speaker.speak(text, language_tag, pitch, rate)
        except Exception as e:
            logger.error(f"Failed to play {what}: {e}")

    async def play_text(self, text: str, language: str = DEFAULT_LANGUAGE_TAG):
        """Speak lesson text slowly in the given language tag."""
        await self._say(text, language, 1.0, 0.8, "text")

    async def play_success_sound(self):
        await self._say("Correct!", "en-US", 1.2, 1.0, "success sound")

    async def play_error_sound(self):
        await self._say("Try again", "en-US", 0.8, 1.0, "error sound")

    def stop(self):
        try:
            self.speaker.stop()
        except Exception as e:
            logger.error(f"Failed to stop speech: {e}")
