"""Runtime settings read from ``MESHFORGE_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def parse_flag(value: str | None, default: bool = False) -> bool:
    """Interpret a boolean-like environment value.

    ``None`` yields *default*. Unrecognised text counts as false.
    """
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _read_number(env: Mapping[str, str], key: str, default: float, cast: type) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Session settings."""
    mock: bool = False
    poll_interval_ms: int = 500
    request_timeout_s: float = 5.0
    history_capacity: int = 10
    work_from_backend: bool = True
    storage_secret: str | None = None

    @property
    def poll_interval_s(self) -> float:
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *env* (defaults to ``os.environ``).

        Raises:
            ValueError: If a numeric variable is not a positive number.
        """
        env = os.environ if env is None else env
        return cls(
            mock=parse_flag(env.get("MESHFORGE_MOCK")),
            poll_interval_ms=int(_read_number(env, "MESHFORGE_POLL_INTERVAL_MS", 500, int)),
            request_timeout_s=float(_read_number(env, "MESHFORGE_REQUEST_TIMEOUT_S", 5.0, float)),
            history_capacity=int(_read_number(env, "MESHFORGE_HISTORY_SIZE", 10, int)),
            work_from_backend=parse_flag(env.get("MESHFORGE_WORK_FROM_BACKEND"), default=True),
            storage_secret=env.get("MESHFORGE_STORAGE_SECRET") or None,
        )
