"""
shapecheck — settings and explicit check context.

File: src/shapecheck/config.py
Last updated: 2026-10-19

Purpose
- Load validation settings from defaults, a TOML file and ``SHAPECHECK_``
  environment variables.
- Provide ``CheckContext``: the immutable value passed explicitly to
  checkers and instrumented functions instead of a global on/off flag.

What should be included in this file
- ``Settings`` defaults and the ``load_settings`` precedence chain.
- TOML loading via ``tomllib`` and ``SHAPECHECK_`` environment mapping.
- ``CheckContext`` passed explicitly to compile-time entry points.

Functional requirements
- Precedence: env > file > defaults.
- ``shapecheck.toml`` uses its root table; ``pyproject.toml`` uses
  ``[tool.shapecheck]``.
- Reject unknown keys and non-boolean values with ``SettingsLoadError``.

Non-functional requirements
- Loading is deterministic and has no side effects beyond reading the file.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Final

import structlog

DEFAULT_SETTINGS_FILE: Final[str] = "shapecheck.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
ENV_PREFIX: Final[str] = "SHAPECHECK_"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


class SettingsLoadError(ValueError):
    """Raised when settings cannot be read or contain invalid values."""


@dataclass(frozen=True, slots=True)
class Settings:
    """User-tunable validation behaviour."""

    validate_calls: bool = True
    detect_ambiguity: bool = False


@dataclass(frozen=True, slots=True)
class CheckContext:
    """Explicit per-call-site validation context.

    ``validate_calls`` gates instrumented functions; ``detect_ambiguity``
    enables the debug check that logs overlapping ``cond_pre`` guards.
    """

    validate_calls: bool = True
    detect_ambiguity: bool = False
    logger: Any | None = field(default=None, compare=False)

    @classmethod
    def from_settings(cls, settings: Settings, *, logger: Any | None = None) -> CheckContext:
        return cls(
            validate_calls=settings.validate_calls,
            detect_ambiguity=settings.detect_ambiguity,
            logger=logger,
        )

    def with_validation(self, enabled: bool) -> CheckContext:
        return replace(self, validate_calls=enabled)

    def get_logger(self) -> Any:
        if self.logger is not None:
            return self.logger
        return structlog.get_logger("shapecheck")


DEFAULT_CONTEXT: Final[CheckContext] = CheckContext()


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings with deterministic precedence: env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)
    resolved = _resolve_settings_path(path)
    file_payload = _load_file_payload(resolved, required=path is not None)

    values: dict[str, bool] = {}
    known = {item.name for item in fields(Settings)}
    for key in sorted(file_payload):
        if key not in known:
            raise SettingsLoadError(f"{_describe(resolved)}: unknown setting {key!r}")
        raw = file_payload[key]
        if not isinstance(raw, bool):
            raise SettingsLoadError(f"{_describe(resolved)}: {key} must be a boolean")
        values[key] = raw

    for key in sorted(known):
        env_name = f"{ENV_PREFIX}{key.upper()}"
        if env_name in env_map:
            values[key] = _parse_bool(env_map[env_name], env_name)

    settings = Settings(**values)
    structlog.get_logger(__name__).debug(
        "shapecheck_settings_loaded",
        source=_describe(resolved),
        validate_calls=settings.validate_calls,
        detect_ambiguity=settings.detect_ambiguity,
    )
    return settings


def _resolve_settings_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)
    for candidate in (Path(DEFAULT_SETTINGS_FILE), Path(PYPROJECT_FILE)):
        if candidate.is_file():
            return candidate
    return None


def _load_file_payload(path: Path | None, *, required: bool) -> dict[str, object]:
    if path is None:
        return {}
    if not path.is_file():
        if required:
            raise SettingsLoadError(f"settings file not found: {path}")
        return {}
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsLoadError(f"invalid TOML in {path}: {exc}") from exc

    if path.name == PYPROJECT_FILE:
        tool = document.get("tool", {})
        section = tool.get("shapecheck", {}) if isinstance(tool, Mapping) else {}
    else:
        section = document
    if not isinstance(section, Mapping):
        raise SettingsLoadError(f"{path}: shapecheck settings must be a table")
    return dict(section)


def _parse_bool(raw: str, name: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsLoadError(f"{name} must be a boolean, got {raw!r}")


def _describe(path: Path | None) -> str:
    return str(path) if path is not None else "<defaults>"


__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "CheckContext",
    "Settings",
    "SettingsLoadError",
    "load_settings",
]
