"""CLI settings, resolved from flags with environment fallbacks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace


DEFAULT_PROMPT = "> "
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class CliConfig:
    prompt: str = DEFAULT_PROMPT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "CliConfig":
        return cls(
            prompt=environ.get("CALCPY_PROMPT", DEFAULT_PROMPT),
            log_level=_check_level(environ.get("CALCPY_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )

    def with_overrides(self, *, prompt: str | None = None, log_level: str | None = None) -> "CliConfig":
        out = self
        if prompt is not None:
            out = replace(out, prompt=prompt)
        if log_level is not None:
            out = replace(out, log_level=_check_level(log_level))
        return out


def _check_level(name: str) -> str:
    level = name.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level: {name!r}")
    return level
