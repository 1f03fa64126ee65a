"""Settings read from the environment, overridable from the command line."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .unit_mode import UnitMode

UNIT_ENV = "CARLEDGER_UNIT"
LOG_LEVEL_ENV = "CARLEDGER_LOG_LEVEL"

DEFAULT_UNIT = "mpg"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    unit: UnitMode = UnitMode.DISTANCE_PER_VOLUME
    log_level: int = logging.WARNING


def _parse_log_level(name: str, source: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{source}: unknown log level '{name}'")
    return level


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    unit: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Settings:
    """
    Build settings from environment variables.

    Explicit unit/log_level arguments (from CLI flags) win over the
    environment. Raises ValueError naming the flag or variable the bad
    value came from.
    """
    if environ is None:
        environ = os.environ
    if unit:
        unit_name, unit_source = unit, "--unit"
    else:
        unit_name, unit_source = environ.get(UNIT_ENV, DEFAULT_UNIT), UNIT_ENV
    if log_level:
        level_name, level_source = log_level, "--log-level"
    else:
        level_name = environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
        level_source = LOG_LEVEL_ENV
    try:
        unit_mode = UnitMode.from_name(unit_name)
    except ValueError as e:
        raise ValueError(f"{unit_source}: {e}") from e
    return Settings(
        unit=unit_mode, log_level=_parse_log_level(level_name, level_source)
    )
