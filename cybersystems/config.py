"""Runtime configuration read from the environment (and .env)."""

import logging
import os
from dataclasses import fields, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

from cybersystems.engine.rules import DEFAULT_RULES, RuleConfig

ENV_PREFIX = "CYBERSYSTEMS_"


def load_environment() -> None:
    """Load variables from a .env file without overriding the real environment."""
    load_dotenv(override=False)


def _parse(value: str, kind: type) -> object:
    if kind is bool:
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"Not a boolean: {value!r}")
    return kind(value)


def rules_from_env(
    environ: Optional[Mapping[str, str]] = None,
    base: RuleConfig = DEFAULT_RULES,
) -> RuleConfig:
    """Apply CYBERSYSTEMS_<FIELD> overrides to a RuleConfig.

    e.g. CYBERSYSTEMS_MAX_HAND_SIZE=7, CYBERSYSTEMS_MALWARE_DESTROYS_INFECTED=false
    """
    env = os.environ if environ is None else environ
    overrides = {}
    for f in fields(RuleConfig):
        raw = env.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is None:
            continue
        kind = type(getattr(base, f.name))
        try:
            overrides[f.name] = _parse(raw, kind)
        except ValueError as e:
            raise ValueError(f"Invalid {ENV_PREFIX}{f.name.upper()}: {e}") from e
    return replace(base, **overrides) if overrides else base


def log_level_from_env(environ: Optional[Mapping[str, str]] = None, default: str = "WARNING") -> str:
    env = os.environ if environ is None else environ
    return env.get(f"{ENV_PREFIX}LOG_LEVEL", default).upper()


def configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
