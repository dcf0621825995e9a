"""
Text-to-speech backends.

Speaker is the interface the audio and recognition services talk to.
GoogleCloudSpeaker synthesizes MP3 audio with Google Cloud TTS, caches it
under the audio directory, and hands each file to an AudioPlayer.

Prerequisites for GoogleCloudSpeaker:
  Set GOOGLE_APPLICATION_CREDENTIALS to a service account JSON file path
  OR run `gcloud auth application-default login`
"""

import asyncio
import hashlib
import logging
import math
from pathlib import Path
from typing import Optional, Protocol


logger = logging.getLogger(__name__)


class Speaker(Protocol):
    async def speak(self, text: str, language_tag: str, pitch: float = 1.0, rate: float = 1.0) -> None:
        ...

    def stop(self) -> None:
        ...


class AudioPlayer(Protocol):
    def play(self, path: Path) -> None:
        ...

    def stop(self) -> None:
        ...


class LoggingPlayer:
    """Player used when no device output is attached; records what would play."""

    def __init__(self):
        self.played: list[Path] = []

    def play(self, path: Path):
        self.played.append(path)
        logger.info(f"Playing {path.name}")

    def stop(self):
        logger.debug("Playback stopped")


def pitch_to_semitones(pitch: float) -> float:
    """Convert a pitch multiplier (1.0 = normal) to Google TTS semitones."""
    if pitch <= 0:
        raise ValueError(f"pitch must be positive, got {pitch}")
    return max(-20.0, min(20.0, 12 * math.log2(pitch)))


def get_audio_path(text: str, language_tag: str, audio_dir: Path,
                   voice_name: Optional[str] = None, pitch: float = 1.0, rate: float = 1.0) -> Path:
    """
    Get the cache path for a synthesized utterance.

    The filename is a hash of everything that changes the audio, so the
    same phrase with the same voice settings is synthesized once.
    """
    key = "|".join([text, language_tag, voice_name or "", f"{pitch:.2f}", f"{rate:.2f}"])
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]
    return audio_dir / f"{language_tag}_{digest}.mp3"


def get_tts_client():
    """Get Google Cloud TTS client."""
    try:
        from google.cloud import texttospeech
        return texttospeech.TextToSpeechClient()
    except Exception as e:
        logger.error(f"Failed to initialize Google Cloud TTS client: {e}")
        logger.error("Make sure GOOGLE_APPLICATION_CREDENTIALS is set or you're authenticated via gcloud")
        raise


class GoogleCloudSpeaker:
    """Speaker that synthesizes through Google Cloud Text-to-Speech."""

    def __init__(
        self,
        audio_dir: Path,
        player: Optional[AudioPlayer] = None,
        client=None,
        voice_name: Optional[str] = None,
    ):
        """
        Args:
            audio_dir: Directory for cached MP3 files
            player: Plays synthesized files (default: LoggingPlayer)
            client: TextToSpeechClient (created on first use if omitted)
            voice_name: Voice override, e.g. "hi-IN-Neural2-A"
        """
        self.audio_dir = audio_dir
        self.player = player or LoggingPlayer()
        self.voice_name = voice_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_tts_client()
        return self._client

    def synthesize(self, text: str, language_tag: str, pitch: float = 1.0, rate: float = 1.0) -> Path:
        """Synthesize text to a cached MP3 file and return its path."""
        output_path = get_audio_path(text, language_tag, self.audio_dir, self.voice_name, pitch, rate)
        if output_path.exists():
            return output_path

        from google.cloud import texttospeech

        synthesis_input = texttospeech.SynthesisInput(text=text)

        voice_params = {"language_code": language_tag}
        if self.voice_name:
            voice_params["name"] = self.voice_name
        voice = texttospeech.VoiceSelectionParams(**voice_params)

        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.MP3,
            speaking_rate=rate,
            pitch=pitch_to_semitones(pitch),
        )

        response = self.client.synthesize_speech(
            input=synthesis_input,
            voice=voice,
            audio_config=audio_config,
        )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as out:
            out.write(response.audio_content)

        logger.debug(f"Synthesized {len(text)} chars to {output_path.name}")
        return output_path

    async def speak(self, text: str, language_tag: str, pitch: float = 1.0, rate: float = 1.0):
        path = await asyncio.to_thread(self.synthesize, text, language_tag, pitch, rate)
        self.player.play(path)

    def stop(self):
        self.player.stop()
