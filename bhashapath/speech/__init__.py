"""
BhashaPath Speech - Text-to-speech playback and simulated recognition.

This module provides:
- Speaker backends (Google Cloud TTS)
- AudioService: lesson text playback and feedback cues
- SpeechRecognizer: simulated pronunciation checking
"""

from .tts import (
    Speaker,
    AudioPlayer,
    LoggingPlayer,
    GoogleCloudSpeaker,
    get_audio_path,
    pitch_to_semitones,
)

from .audio import AudioService

from .recognition import (
    SpeechRecognizer,
    candidate_results,
)

__all__ = [
    # TTS
    "Speaker",
    "AudioPlayer",
    "LoggingPlayer",
    "GoogleCloudSpeaker",
    "get_audio_path",
    "pitch_to_semitones",
    # Audio
    "AudioService",
    # Recognition
    "SpeechRecognizer",
    "candidate_results",
]
