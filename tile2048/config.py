import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

SEED_ENV = "TILE2048_SEED"
LOG_LEVEL_ENV = "TILE2048_LOG_LEVEL"
CLEAR_ENV = "TILE2048_CLEAR"

DEFAULT_LOG_LEVEL = "WARNING"
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    seed: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL
    clear_screen: bool = True
    as_json: bool = False


def resolve_seed() -> Optional[int]:
    raw = os.environ.get(SEED_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{SEED_ENV} must be an integer, received {raw!r}") from None


def resolve_log_level() -> str:
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    # getLevelName maps unknown names to "Level <name>"
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{LOG_LEVEL_ENV} is not a logging level: {level!r}")
    return level


def resolve_clear_screen() -> bool:
    return os.environ.get(CLEAR_ENV, "1").strip().lower() not in _FALSE_VALUES


def load_settings(**overrides) -> Settings:
    """Read settings from the environment; non-None keyword overrides win."""
    settings = Settings(
        seed=resolve_seed(),
        log_level=resolve_log_level(),
        clear_screen=resolve_clear_screen(),
    )
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **overrides)
