# puzzle_config.py: defaults shared by the app and the CLI demo
import logging
import os
from typing import Optional

#  shuffle / playback defaults
DEFAULT_SHUFFLE_STEPS = 40
SHUFFLE_STEPS_MIN = 10
SHUFFLE_STEPS_MAX = 100
SHUFFLE_STEPS_STEP = 5

AUTOPLAY_SPEED_MS = 300
AUTOPLAY_SPEED_MIN_MS = 100
AUTOPLAY_SPEED_MAX_MS = 1500

IMAGE_SIDE = 600

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_log_level(name: str, default: str) -> str:
    level = os.environ.get(name, default).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


# Search step budget; None searches until the goal or exhaustion
MAX_EXPANSIONS: Optional[int] = _env_int("EIGHT_PUZZLE_MAX_EXPANSIONS")

LOG_LEVEL: str = _env_log_level("EIGHT_PUZZLE_LOG_LEVEL", "WARNING")


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
