from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

from shouldspec.errors import SelectionPatternError

CONFIG_ENV = "SHOULDSPEC_CONFIG"
PATTERN_ENV = "SHOULDSPEC_PATTERN"
DEBUG_ENV = "SHOULDSPEC_DEBUG"
DEBUG_FILE_ENV = "SHOULDSPEC_DEBUG_FILE"
JUNIT_ENV = "SHOULDSPEC_JUNIT"


def _expand(value: str) -> str:
    try:
        return expandvars(value, nounset=True)
    except Exception as e:
        # Variable is missing and has no default
        raise ValueError(f"unresolved environment variable in {value!r}: {e}")


class SpecConfig(BaseModel):
    """Engine settings, computed once before any scope is entered."""

    model_config = ConfigDict(extra="forbid")

    pattern: str | None = None
    patterns: list[str] = []
    debug: bool = False
    debug_file: str | None = None
    junit_file: str | None = None

    @field_validator("pattern", "debug_file", "junit_file", mode="before")
    @classmethod
    def expand_optional_string(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = _expand(v)
            return v or None
        return v

    @field_validator("patterns", mode="before")
    @classmethod
    def expand_patterns(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, list):
            expanded = [_expand(p) if isinstance(p, str) else p for p in v]
            return [p for p in expanded if p != ""]
        return v

    def selection_pattern(self) -> str | None:
        """Return the effective selection regexp, or None to select everything.

        Several ``patterns`` are joined into one alternation and take
        precedence over ``pattern``.
        """
        if self.patterns:
            return "|".join(f"({p})" for p in self.patterns)
        return self.pattern

    def compile_selection(self) -> re.Pattern[str] | None:
        source = self.selection_pattern()
        if source is None:
            return None
        try:
            return re.compile(source)
        except re.error as e:
            raise SelectionPatternError(
                f"can't compile selection pattern {source!r}: {e}"
            ) from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SpecConfig:
        """Build a config from SHOULDSPEC_* environment variables.

        SHOULDSPEC_CONFIG names a YAML file that is loaded first; the other
        variables override individual fields of it.
        """
        env = os.environ if environ is None else environ

        raw: dict[str, Any] = {}
        config_path = env.get(CONFIG_ENV)
        if config_path:
            raw = load_config(Path(config_path)).model_dump()

        if env.get(PATTERN_ENV):
            raw["pattern"] = env[PATTERN_ENV]
            raw.pop("patterns", None)
        if env.get(DEBUG_ENV):
            raw["debug"] = env[DEBUG_ENV]
        if env.get(DEBUG_FILE_ENV):
            raw["debug_file"] = env[DEBUG_FILE_ENV]
        if env.get(JUNIT_ENV):
            raw["junit_file"] = env[JUNIT_ENV]

        return cls(**raw)


def load_config(path: Path) -> SpecConfig:
    """Load and validate a spec config from a YAML file."""
    path = Path(path)
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = SpecConfig(**raw)

    # Resolve relative output paths relative to config file location
    for key in ("debug_file", "junit_file"):
        value = getattr(config, key)
        if value is not None and not Path(value).is_absolute():
            setattr(config, key, str((config_dir / value).resolve()))

    return config
