"""Configuration loading for Timekeeper.

Static settings live in ``timekeeper.yaml``; API tokens come from the
environment so the file can be committed alongside deployment scripts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "timekeeper.yaml"

DEFAULT_RELEVANT_STATUSES = ["in progress", "code review", "testing", "ready to prod"]
DEFAULT_REVIEW_STATUSES = ["code review", "testing"]

ACTIVITY_SOURCES = ("comments", "status_field")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class TimekeeperConfig:
    """Timekeeper run configuration.

    Attributes:
        team_id: ClickUp workspace (team) ID to audit.
        tracked_spaces: Space names to audit. Exact, case-sensitive match.
        relevant_statuses: Status substrings subject to compliance checks.
        review_statuses: Status substrings treated as code review / QA.
        activity_source: Where the "status update" signal comes from.
        identities: ClickUp person name -> Slack user/channel ID.
        managers: Space name -> manager person names (ClickUp names).
        max_concurrency: Ceiling on simultaneous ClickUp requests.
        request_delay: Pause in seconds after each comment fetch.
        interval_seconds: Delay between runs in watch mode.
        clickup_token: ClickUp API token (from CLICKUP_TOKEN).
        slack_token: Slack bot token (from SLACK_TOKEN).
    """

    team_id: str
    tracked_spaces: list[str]
    relevant_statuses: list[str] = field(default_factory=lambda: list(DEFAULT_RELEVANT_STATUSES))
    review_statuses: list[str] = field(default_factory=lambda: list(DEFAULT_REVIEW_STATUSES))
    activity_source: str = "comments"
    identities: dict[str, str] = field(default_factory=dict)
    managers: dict[str, list[str]] = field(default_factory=dict)
    max_concurrency: int = 5
    request_delay: float = 0.1
    interval_seconds: int = 300
    clickup_token: str = ""
    slack_token: str = ""

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], env: dict[str, str] | None = None
    ) -> TimekeeperConfig:
        """Create config from a YAML mapping plus environment overrides.

        Args:
            data: Configuration dictionary from YAML.
            env: Environment mapping. Defaults to ``os.environ``.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If required fields are missing or have the wrong type.
        """
        env = dict(os.environ) if env is None else env

        team_id = env.get("TEAM_ID") or data.get("team_id")
        if not team_id:
            raise ConfigError("Missing required field: team_id (or TEAM_ID env var)")
        if "tracked_spaces" not in data:
            raise ConfigError("Missing required field: tracked_spaces")

        config = cls(
            team_id=str(team_id),
            tracked_spaces=_string_list(data, "tracked_spaces"),
            relevant_statuses=[
                s.lower()
                for s in _string_list(data, "relevant_statuses", DEFAULT_RELEVANT_STATUSES)
            ],
            review_statuses=[
                s.lower() for s in _string_list(data, "review_statuses", DEFAULT_REVIEW_STATUSES)
            ],
            activity_source=str(data.get("activity_source", "comments")),
            identities=_string_map(data, "identities"),
            managers=_managers(data),
            max_concurrency=_number(data, "max_concurrency", 5, int),
            request_delay=_number(data, "request_delay", 0.1, float),
            interval_seconds=_number(data, "interval_seconds", 300, int),
            clickup_token=env.get("CLICKUP_TOKEN", ""),
            slack_token=env.get("SLACK_TOKEN", ""),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges that the YAML types alone don't cover.

        Raises:
            ConfigError: If a value is out of range.
        """
        if self.activity_source not in ACTIVITY_SOURCES:
            raise ConfigError(
                f"activity_source must be one of {', '.join(ACTIVITY_SOURCES)}, "
                f"got '{self.activity_source}'"
            )
        if self.max_concurrency < 1:
            raise ConfigError("max_concurrency must be at least 1")
        if self.request_delay < 0:
            raise ConfigError("request_delay must not be negative")
        if self.interval_seconds < 1:
            raise ConfigError("interval_seconds must be at least 1")

    def require_tokens(self, slack: bool = True) -> None:
        """Raise ConfigError unless the API tokens needed for a run are present.

        Args:
            slack: Whether the Slack token is needed (not for dry runs).
        """
        missing = []
        if not self.clickup_token:
            missing.append("CLICKUP_TOKEN")
        if slack and not self.slack_token:
            missing.append("SLACK_TOKEN")
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")


def _string_list(data: dict[str, Any], key: str, default: list[str] | None = None) -> list[str]:
    value = data.get(key, default if default is not None else [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


def _managers(data: dict[str, Any]) -> dict[str, list[str]]:
    value = data.get("managers") or {}
    if not isinstance(value, dict):
        raise ConfigError("managers must be a mapping of space name to a list of names")
    managers: dict[str, list[str]] = {}
    for space, names in value.items():
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list):
            raise ConfigError(f"managers for space '{space}' must be a list of names")
        managers[str(space)] = [str(n) for n in names]
    return managers


def _number(data: dict[str, Any], key: str, default: Any, kind: type) -> Any:
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e


def load_config(config_path: Path | str, env: dict[str, str] | None = None) -> TimekeeperConfig:
    """Load Timekeeper configuration from a YAML file.

    Args:
        config_path: Path to timekeeper.yaml file.
        env: Environment mapping for token/team overrides.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TimekeeperConfig.from_dict(data, env=env)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find timekeeper.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to timekeeper.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    start = Path.cwd() if start_path is None else Path(start_path)
    current = start.resolve()

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate

    raise ConfigError(f"No {CONFIG_FILENAME} found in {start} or any parent directory")
