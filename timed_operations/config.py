"""
Configuration for timed operations.

An ``OperationOptions`` value replaces the level/threshold overloads of the
factory functions. Options can also be read from the environment (or from
docker-style secret files) via ``OperationOptions.from_env``.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from timed_operations import utils
from timed_operations.exceptions import UnknownLevelError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ENV_PREFIX = "TIMED_OPERATIONS_"

# Accepted spellings in addition to the names known to the logging module
LEVEL_ALIASES = {
    "trace": TRACE,
    "verbose": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "information": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


def resolve_level(level: int | str) -> int:
    """
    Resolve a log level given as an integer or a level name.

    Args:
    - level (int | str): A logging level such as ``logging.DEBUG``, or a name
      such as ``"Information"`` or ``"trace"`` (case-insensitive).

    Returns:
    - int: The numeric logging level.

    Raises:
    - UnknownLevelError: If the name is not a known level.
    """
    if isinstance(level, bool):
        raise UnknownLevelError(level)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip()
        if name.lower() in LEVEL_ALIASES:
            return LEVEL_ALIASES[name.lower()]
        if name.isdigit():
            return int(name)
        value = logging.getLevelName(name.upper())
        if isinstance(value, int):
            return value
    raise UnknownLevelError(level)


@dataclass(frozen=True)
class OperationOptions:
    """Levels and threshold used when an operation writes its event."""

    completion_level: int | str = logging.INFO
    abandonment_level: int | str = logging.WARNING
    warning_threshold: timedelta | None = None

    def __post_init__(self):
        object.__setattr__(self, "completion_level", resolve_level(self.completion_level))
        object.__setattr__(self, "abandonment_level", resolve_level(self.abandonment_level))

        if self.warning_threshold is not None:
            if not isinstance(self.warning_threshold, timedelta):
                raise TypeError("warning_threshold must be a datetime.timedelta")
            if self.warning_threshold < timedelta(0):
                raise ValueError("warning_threshold must not be negative")

    @classmethod
    def from_env(cls, path: Path | None = None, **overrides) -> "OperationOptions":
        """
        Build options from ``TIMED_OPERATIONS_*`` settings.

        Recognised settings are ``TIMED_OPERATIONS_COMPLETION_LEVEL``,
        ``TIMED_OPERATIONS_ABANDONMENT_LEVEL`` and
        ``TIMED_OPERATIONS_WARNING_THRESHOLD_MS``. Each is looked up in the
        environment first and then in the secrets directory. Keyword overrides
        that are not None take precedence over both.

        Args:
            path (Path): Secrets directory passed to ``utils.get_env_setting``.
            **overrides: Field values that win over the environment.

        Returns:
            OperationOptions: The resolved options.
        """
        values = {}

        completion_level = utils.get_env_setting(f"{ENV_PREFIX}COMPLETION_LEVEL", path)
        if completion_level:
            values["completion_level"] = completion_level

        abandonment_level = utils.get_env_setting(f"{ENV_PREFIX}ABANDONMENT_LEVEL", path)
        if abandonment_level:
            values["abandonment_level"] = abandonment_level

        threshold_ms = utils.get_env_setting(f"{ENV_PREFIX}WARNING_THRESHOLD_MS", path)
        if threshold_ms:
            try:
                values["warning_threshold"] = timedelta(milliseconds=float(threshold_ms))
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}WARNING_THRESHOLD_MS must be a number of milliseconds, "
                    f"got {threshold_ms!r}"
                ) from None

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
