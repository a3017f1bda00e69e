"""Run configuration resolved once at startup.

Values come from command-line arguments first and the environment second. Nothing
below the CLI reads the environment or ``sys.argv`` directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import environ

from sfops_migration.github import DEFAULT_API_URL

env = environ.Env(
    GITHUB_TOKEN=(str, ""),
    GITHUB_API_URL=(str, DEFAULT_API_URL),
    SFOPS_PERFORM_CLEANUP=(bool, True),
    SFOPS_HTTP_TIMEOUT=(float, 30.0),
    LOG_LEVEL=(str, "INFO"),
)


class MissingSettingError(ValueError):
    """A required setting (owner, repo or token) was not supplied."""


@dataclass(frozen=True, slots=True)
class MigrationConfig:
    owner: str
    repo: str
    token: str
    perform_cleanup: bool = True
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for field_name in ("owner", "repo", "token"):
            if not getattr(self, field_name):
                raise MissingSettingError(f"{field_name} is required")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def resolve(
        cls,
        *,
        owner: Optional[str],
        repo: Optional[str],
        token: Optional[str] = None,
        perform_cleanup: Optional[bool] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
        environment: Optional[Mapping[str, str]] = None,
    ) -> "MigrationConfig":
        """Merge explicit arguments over environment values."""
        reader = env
        if environment is not None:
            reader = environ.Env(**env.scheme)
            reader.ENVIRON = dict(environment)
        return cls(
            owner=owner or "",
            repo=repo or "",
            token=token or reader("GITHUB_TOKEN"),
            perform_cleanup=(
                reader.bool("SFOPS_PERFORM_CLEANUP") if perform_cleanup is None else perform_cleanup
            ),
            api_url=api_url or reader("GITHUB_API_URL"),
            timeout=reader.float("SFOPS_HTTP_TIMEOUT") if timeout is None else timeout,
            log_level=log_level or reader("LOG_LEVEL"),
        )
