"""
Settings loading and the immutable session configuration objects.

Settings live in a JSON file (``config/settings.json`` by default) and are
deep-merged over the built-in defaults, so a settings file only needs to
carry the values it changes. Command line options are applied on top by
``main`` before the frozen ``TimingConfig`` and ``GameConfig`` are built.
"""

import copy
import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_SETTINGS, DEFAULT_TIMER_SECONDS, TIMING_DEFAULTS
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file merged over the defaults.

    Args:
        config_path: Path to the JSON settings file. ``None`` returns the defaults.

    Returns:
        Complete settings dictionary

    Raises:
        ConfigurationError: If the file is missing, is not valid JSON or holds invalid values
    """
    if config_path is None:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file {config_path} not found")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_settings = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Error parsing configuration file {config_path}: {e}") from e
        if not isinstance(file_settings, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")
        settings = _deep_merge(DEFAULT_SETTINGS, file_settings)
        logger.debug(f"Loaded settings from {config_path}")

    validate_settings(settings)
    return settings


def validate_settings(settings: Dict[str, Any]) -> None:
    """Reject settings the session cannot run with."""
    for name in TIMING_DEFAULTS:
        value = settings['timing'].get(name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ConfigurationError(f"timing.{name} must be a number of milliseconds (got {value!r})")
        if value < 0:
            raise ConfigurationError(f"timing.{name} cannot be negative ({value}ms)")

    session = settings['session']
    for name in ('max_questions', 'timer_seconds'):
        value = session.get(name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ConfigurationError(f"session.{name} must be a whole number of at least 1 (got {value!r})")

    for name in ('automatic_mode', 'enable_timer'):
        if not isinstance(session.get(name), bool):
            raise ConfigurationError(f"session.{name} must be true or false (got {session.get(name)!r})")

    specific_game = session.get('specific_game')
    if specific_game is not None and not isinstance(specific_game, str):
        raise ConfigurationError(f"session.specific_game must be a game name or null (got {specific_game!r})")

    source = settings['answer_bank'].get('source')
    if source not in ('remote', 'static'):
        raise ConfigurationError(f"answer_bank.source must be 'remote' or 'static' (got {source!r})")

    if not settings['app'].get('base_url'):
        raise ConfigurationError("app.base_url must be set")


@dataclass(frozen=True)
class TimingConfig:
    """Pacing and timeout durations for one session, in milliseconds."""

    answer_delay: int = TIMING_DEFAULTS['answer_delay']
    question_timeout: int = TIMING_DEFAULTS['question_timeout']
    stabilization_delay: int = TIMING_DEFAULTS['stabilization_delay']
    close_delay: int = TIMING_DEFAULTS['close_delay']
    # Independent of question_timeout; a short wait for the next question to render.
    transition_timeout: int = TIMING_DEFAULTS['transition_timeout']

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if value < 0:
                raise ConfigurationError(f"{field.name} cannot be negative ({value}ms)")

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'TimingConfig':
        timing = settings.get('timing', {})
        return cls(**{name: int(timing.get(name, default)) for name, default in TIMING_DEFAULTS.items()})

    def with_overrides(self, **overrides: Optional[int]) -> 'TimingConfig':
        """Return a copy with every non-None override applied."""
        changes = {name: int(value) for name, value in overrides.items() if value is not None}
        return replace(self, **changes)


@dataclass(frozen=True)
class GameConfig:
    """How Session Setup brings the page to the "quiz started" state."""

    automatic_mode: bool = True
    specific_game: Optional[str] = None
    enable_timer: bool = False
    timer_seconds: int = DEFAULT_TIMER_SECONDS

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'GameConfig':
        session = settings.get('session', {})
        return cls(
            automatic_mode=bool(session.get('automatic_mode', True)),
            specific_game=session.get('specific_game') or None,
            enable_timer=bool(session.get('enable_timer', False)),
            timer_seconds=int(session.get('timer_seconds', DEFAULT_TIMER_SECONDS)),
        )
