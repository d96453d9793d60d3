import logging
import os
from datetime import timedelta
from pathlib import Path

logger = logging.getLogger(__name__)


def total_milliseconds(duration: timedelta) -> float:
    """
    Convert a duration to a floating point number of milliseconds.

    Args:
    - duration (timedelta): Duration to convert.

    Returns:
    - float: Milliseconds, including the fractional part.
    """
    return duration / timedelta(milliseconds=1)


def get_env_setting(name: str, path: Path | None = None) -> str | None:
    """
    Get a setting from either an environment variable or a file in the secrets directory.

    Args:
        name (str): Environment variable name.
        path (Path): Path to the secrets directory (default: "secrets/" under the working directory).

    Returns:
        str | None: The setting value, or None if neither source defines it.
    """
    value = os.environ.get(name)
    if value:
        return value

    if path is None:
        path = Path.cwd() / "secrets"

    if (path / name).exists():
        value = (path / name).read_text().rstrip("\n")
        logger.debug(f"Loaded setting from file: {path}/{name}")
        return value or None
    return None
