"""Traversal configuration resolved from the environment and CLI flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from dirstat.core.models import TerminationPolicy
from dirstat.core.pool import DEFAULT_IDLE_TIMEOUT

_WORKER_ENV_KEYS = ("DIRSTAT_WORKERS", "WORKERS")


class ConfigurationError(ValueError):
    """Invalid configuration value supplied by the user."""


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    """Resolved parameters passed to the traversal engine."""

    workers: int
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT
    termination: TerminationPolicy = TerminationPolicy.QUIESCENCE

    @classmethod
    def default(cls) -> "TraversalConfig":
        return cls(workers=default_worker_count())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TraversalConfig":
        """Builds the config from process environment.

        The worker count is read from `DIRSTAT_WORKERS`, then `WORKERS`;
        when neither is set it falls back to the number of logical CPUs.
        """

        env = os.environ if environ is None else environ
        for key in _WORKER_ENV_KEYS:
            raw = (env.get(key) or "").strip()
            if raw:
                return cls(workers=parse_worker_count(raw, source=key))
        return cls.default()

    def with_overrides(
        self,
        *,
        workers: int | None = None,
        idle_timeout: float | None = None,
        termination: TerminationPolicy | str | None = None,
    ) -> "TraversalConfig":
        """Returns a copy with the given non-None values replaced and validated."""

        changes: dict[str, object] = {}
        if workers is not None:
            changes["workers"] = parse_worker_count(str(workers), source="--workers")
        if idle_timeout is not None:
            if idle_timeout <= 0:
                raise ConfigurationError(f"Idle timeout must be positive, got {idle_timeout}")
            changes["idle_timeout"] = idle_timeout
        if termination is not None:
            changes["termination"] = TerminationPolicy(termination)
        return replace(self, **changes)


def default_worker_count() -> int:
    return os.cpu_count() or 1


def parse_worker_count(raw: str, *, source: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{source} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{source} must be a positive integer, got {value}")
    return value
