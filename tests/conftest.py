from __future__ import annotations

import pytest

from sfops_migration.config import MigrationConfig

from .factories import CREATED_AT, DAY_MS, OWNER, REPO


@pytest.fixture
def config() -> MigrationConfig:
    return MigrationConfig(owner=OWNER, repo=REPO, token="ghp_test")


@pytest.fixture
def fixed_clock():
    return lambda: CREATED_AT + 5 * DAY_MS
