"""
Environment-driven application settings.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .pipeline import SessionConfig
from .tokenizer import DEFAULT_STOPWORDS
from .validation import ParameterValidator, ParameterValidationError

ENV_PREFIX = "PLAGCHECK_"

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def parse_bool(value: str, field: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ParameterValidationError(f"{field} must be a boolean, got {value!r}", field=field, value=value)


@dataclass(frozen=True)
class AppSettings:
    threshold: float = 0.70
    use_stopwords: bool = True
    output_dir: str = "."
    log_level: str = "INFO"
    log_dir: str = "logs"
    structured_logs: bool = True

    def session_config(self) -> SessionConfig:
        """Initial engine configuration for a new session."""
        return SessionConfig(
            use_stopwords=self.use_stopwords,
            stopwords=DEFAULT_STOPWORDS,
            threshold=self.threshold,
        )


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv: bool = True,
                  dotenv_path: Optional[str] = None) -> AppSettings:
    """
    Read settings from the environment.

    Args:
        environ: Mapping to read instead of ``os.environ``
        dotenv: Whether to load a ``.env`` file into ``os.environ`` first
        dotenv_path: Explicit ``.env`` location; searched for when omitted

    Raises:
        ParameterValidationError: If a variable holds an invalid value
    """
    if environ is None:
        if dotenv:
            load_dotenv(dotenv_path)
        environ = os.environ

    def get(name: str) -> Optional[str]:
        return environ.get(ENV_PREFIX + name)

    values = {}

    threshold = get("THRESHOLD")
    if threshold is not None:
        values['threshold'] = ParameterValidator.validate_threshold(
            threshold, field=ENV_PREFIX + "THRESHOLD", scale="percent")

    use_stopwords = get("USE_STOPWORDS")
    if use_stopwords is not None:
        values['use_stopwords'] = parse_bool(use_stopwords, ENV_PREFIX + "USE_STOPWORDS")

    structured = get("STRUCTURED_LOGS")
    if structured is not None:
        values['structured_logs'] = parse_bool(structured, ENV_PREFIX + "STRUCTURED_LOGS")

    log_level = get("LOG_LEVEL")
    if log_level is not None:
        log_level = log_level.strip().upper()
        if log_level not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ParameterValidationError(f"Unknown log level: {log_level}",
                                           field=ENV_PREFIX + "LOG_LEVEL", value=log_level)
        values['log_level'] = log_level

    for name, attr in (("OUTPUT_DIR", 'output_dir'), ("LOG_DIR", 'log_dir')):
        value = get(name)
        if value:
            values[attr] = value.strip()

    return AppSettings(**values)
