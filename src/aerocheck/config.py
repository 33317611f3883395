"""Run configuration for compliance checks.

CheckOptions is built once (from CLI flags and/or a JSON config file) and
handed to the rule set and the CLI. It is frozen; nothing mutates it
during a run.

Config files use the same keys as the model, or the kebab-case input names
of the original GitHub Action::

    {
      "files": "logs/**/*.md, records/*.txt",
      "check-maintenance-logs": true,
      "check-pilot-logs": false,
      "fail-on-violation": true
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aerocheck.errors import AerocheckError
from aerocheck.validation.rules.base import RuleCategory

DEFAULT_FILE_PATTERNS: tuple[str, ...] = ("**/*.md", "**/*.txt")
DEFAULT_REPORT_NAME = "aviation-compliance-report.md"


class ConfigError(AerocheckError):
    """A config file could not be read or did not validate."""


class CheckOptions(BaseModel):
    """Which rule categories run, and how the run is judged."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    check_maintenance_logs: bool = Field(default=True, alias="check-maintenance-logs")
    check_pilot_logs: bool = Field(default=True, alias="check-pilot-logs")
    check_airworthiness: bool = Field(default=True, alias="check-airworthiness")
    check_weight_balance: bool = Field(default=True, alias="check-weight-balance")
    fail_on_violation: bool = Field(default=True, alias="fail-on-violation")
    files: tuple[str, ...] = Field(default=DEFAULT_FILE_PATTERNS)

    @field_validator("files", mode="before")
    @classmethod
    def _split_patterns(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_patterns([value])
        if isinstance(value, list | tuple):
            return split_patterns(list(value))
        return value

    @property
    def enabled_categories(self) -> list[RuleCategory]:
        """Enabled categories in catalog order."""
        flags = [
            (RuleCategory.MAINTENANCE, self.check_maintenance_logs),
            (RuleCategory.PILOT_LOG, self.check_pilot_logs),
            (RuleCategory.AIRWORTHINESS, self.check_airworthiness),
            (RuleCategory.WEIGHT_BALANCE, self.check_weight_balance),
        ]
        return [category for category, enabled in flags if enabled]


def split_patterns(values: list[str]) -> tuple[str, ...]:
    """Split comma-separated glob patterns, dropping blanks."""
    patterns: list[str] = []
    for value in values:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return tuple(patterns)


def load_options(path: Path, **overrides: Any) -> CheckOptions:
    """Load CheckOptions from a JSON file.

    Args:
        path: JSON config file.
        **overrides: Field values that replace those read from the file.
            ``None`` values are ignored.

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    return build_options(data, **overrides)


def build_options(data: dict[str, Any] | None = None, **overrides: Any) -> CheckOptions:
    """Validate raw config data plus overrides into CheckOptions."""
    merged: dict[str, Any] = {}
    for key, value in (data or {}).items():
        merged[key.replace("-", "_")] = value
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        options = CheckOptions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    logger.debug(
        "Check options: categories={}, fail_on_violation={}",
        [c.value for c in options.enabled_categories],
        options.fail_on_violation,
    )
    return options
