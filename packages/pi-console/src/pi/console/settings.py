"""Console settings. Stored as JSON at ~/.pi/console.json."""

from __future__ import annotations

import json
import logging
import os
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pi.console.errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "console.json"

DEFAULT_PROMPT = "pi-console -> "
DEFAULT_ALPHABET = string.ascii_lowercase + string.digits + "-_"


def _default_commands() -> dict[str, str]:
    return {
        "hello": "Hello to you too!",
        "help": "Type a command and press Enter. Press Tab to complete, twice to list.",
        "status": "All systems nominal.",
        "version": "pi-console 0.1.0",
    }


@dataclass
class ConsoleSettings:
    """What the console shows and which commands it completes."""

    prompt: str = DEFAULT_PROMPT
    alphabet: str = DEFAULT_ALPHABET
    # command name -> message printed when the command is entered
    commands: dict[str, str] = field(default_factory=_default_commands)


def settings_from_dict(data: dict[str, Any]) -> ConsoleSettings:
    """Deserialize settings from a JSON-compatible dict.

    Missing keys fall back to their defaults.
    """
    if not isinstance(data, dict):
        msg = f"Console settings must be a JSON object, got {type(data).__name__}"
        raise ConfigurationError(msg)

    defaults = ConsoleSettings()
    prompt = data.get("prompt", defaults.prompt)
    alphabet = data.get("alphabet", defaults.alphabet)
    commands = data.get("commands", defaults.commands)

    if not isinstance(prompt, str):
        msg = "Setting 'prompt' must be a string"
        raise ConfigurationError(msg)
    if not isinstance(alphabet, str):
        msg = "Setting 'alphabet' must be a string"
        raise ConfigurationError(msg)
    if not isinstance(commands, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in commands.items()
    ):
        msg = "Setting 'commands' must map command names to messages"
        raise ConfigurationError(msg)

    return ConsoleSettings(prompt=prompt, alphabet=alphabet, commands=dict(commands))


def settings_to_dict(settings: ConsoleSettings) -> dict[str, Any]:
    """Serialize settings to a JSON-compatible dict."""
    return {
        "prompt": settings.prompt,
        "alphabet": settings.alphabet,
        "commands": dict(settings.commands),
    }


def default_settings_path() -> Path:
    config_dir = Path(os.environ.get("PI_CONFIG_DIR", Path.home() / ".pi"))
    return config_dir / SETTINGS_FILE_NAME


def load_settings(path: str | Path | None = None) -> ConsoleSettings:
    """Load settings from *path* (default ``$PI_CONFIG_DIR/console.json``).

    A missing file yields the defaults.

    Raises:
        ConfigurationError: The file cannot be read or is not valid settings.
    """
    settings_path = Path(path) if path is not None else default_settings_path()
    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return ConsoleSettings()

    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Error reading settings from {settings_path}: {e}"
        raise ConfigurationError(msg) from e

    logger.debug("Loaded settings from %s", settings_path)
    return settings_from_dict(data)


def save_settings(settings: ConsoleSettings, path: str | Path | None = None) -> Path:
    """Write *settings* as JSON and return the path written."""
    settings_path = Path(path) if path is not None else default_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps(settings_to_dict(settings), indent=2), encoding="utf-8"
    )
    return settings_path
