from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .core.model import SensitivityLevel
from .errors import InvalidInputError

DEFAULT_NARRATOR_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_NARRATOR_MODEL = "gemini-2.5-flash"


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidInputError(f"{key} must be an integer, got {raw!r}", field=key) from exc


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for the decision pipeline."""

    work_start_hour: int = 8
    work_end_hour: int = 20
    restricted_from: SensitivityLevel = SensitivityLevel.CONFIDENTIAL
    default_action: str = "READ"
    signing_key: Optional[str] = None  # HMAC key; None keeps the plain checksum

    @classmethod
    def from_env(
        cls, prefix: str = "VAULTGUARD_", env: Mapping[str, str] | None = None
    ) -> "EngineConfig":
        env = os.environ if env is None else env
        level_name = env.get(prefix + "RESTRICTED_FROM") or SensitivityLevel.CONFIDENTIAL.name
        try:
            restricted = SensitivityLevel[level_name.upper()]
        except KeyError as exc:
            raise InvalidInputError(
                f"{prefix}RESTRICTED_FROM must be one of "
                f"{', '.join(s.name for s in SensitivityLevel)}",
                field=prefix + "RESTRICTED_FROM",
            ) from exc
        return cls(
            work_start_hour=_env_int(env, prefix + "WORK_START_HOUR", 8),
            work_end_hour=_env_int(env, prefix + "WORK_END_HOUR", 20),
            restricted_from=restricted,
            default_action=env.get(prefix + "DEFAULT_ACTION") or "READ",
            signing_key=env.get(prefix + "SIGNING_KEY") or None,
        )


@dataclass(frozen=True)
class NarratorConfig:
    """Minimal configuration for the HTTP explanation narrator."""

    api_key: Optional[str] = None
    api_url: str = DEFAULT_NARRATOR_URL  # e.g. "https://generativelanguage.googleapis.com/v1beta"
    model: str = DEFAULT_NARRATOR_MODEL
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(
        cls, prefix: str = "VAULTGUARD_NARRATOR_", env: Mapping[str, str] | None = None
    ) -> "NarratorConfig":
        env = os.environ if env is None else env
        return cls(
            api_key=env.get(prefix + "API_KEY") or env.get("API_KEY") or None,
            api_url=env.get(prefix + "URL") or DEFAULT_NARRATOR_URL,
            model=env.get(prefix + "MODEL") or DEFAULT_NARRATOR_MODEL,
        )


__all__ = ["EngineConfig", "NarratorConfig"]
