"""BhashaPath utilities."""

from .config import load_config, Settings, DEFAULTS_PATH, DEFAULT_HOME

__all__ = ["load_config", "Settings", "DEFAULTS_PATH", "DEFAULT_HOME"]
