"""
Configuration loader for BhashaPath.

Loads the YAML defaults shipped with the package (or a custom file) and
resolves runtime paths from environment variables / .env.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"
DEFAULT_HOME = Path.home() / ".bhashapath"


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load a configuration file.

    Args:
        path: YAML file to read (default: the packaged defaults.yaml)

    Returns:
        Dict with keys default_user_id, languages, xp_per_level, voice_map,
        default_language_tag, recognition_delay

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    file_path = path or DEFAULTS_PATH

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@dataclass
class Settings:
    """Runtime settings resolved from the environment."""
    home: Path
    config: dict[str, Any]
    tts_voice: Optional[str] = None

    @property
    def storage_path(self) -> Path:
        return self.home / "storage.db"

    @property
    def audio_dir(self) -> Path:
        return self.home / "audio"

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """
        Build settings from environment variables (after loading .env).

        BHASHAPATH_HOME: data directory (default ~/.bhashapath)
        BHASHAPATH_CONFIG: custom YAML config file
        BHASHAPATH_TTS_VOICE: Google Cloud TTS voice name override
        """
        load_dotenv(env_file)

        home = Path(os.environ.get("BHASHAPATH_HOME", DEFAULT_HOME)).expanduser()
        config_path = os.environ.get("BHASHAPATH_CONFIG")
        config = load_config(Path(config_path) if config_path else None)

        return cls(
            home=home,
            config=config,
            tts_voice=os.environ.get("BHASHAPATH_TTS_VOICE") or None,
        )
