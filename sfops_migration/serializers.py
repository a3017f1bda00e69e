"""Validation of stored variable payloads before they enter the migration."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sfops_migration.models import LegacyRecord, Variable

_LEADING_INT = re.compile(r"[+-]?\d+")


class MalformedRecordError(ValueError):
    """Raised when a legacy variable value cannot be decoded into a record."""


class LegacyRecordSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    issue_number: int = Field(alias="issueNumber")
    created_at: int = Field(alias="createdAt")
    expiry: int
    requester: str = ""
    status: str = ""
    name: str = ""

    @field_validator("expiry", mode="before")
    @classmethod
    def _parse_days(cls, value: Any) -> Any:
        # Only the leading integer counts: "15 days" and 15.7 both mean 15.
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            match = _LEADING_INT.match(value.strip())
            if not match:
                raise ValueError(f"expiry must start with an integer number of days, got {value!r}")
            return int(match.group(0))
        return value

    def to_domain(self) -> LegacyRecord:
        return LegacyRecord(
            issue_number=self.issue_number,
            created_at=self.created_at,
            expiry=self.expiry,
            requester=self.requester,
            status=self.status,
            name=self.name,
        )


def parse_legacy_record(variable: Variable) -> LegacyRecord:
    """Decode and validate the JSON value of a ``*_DEVSBX`` variable."""
    try:
        schema = LegacyRecordSchema.model_validate_json(variable.value)
    except ValidationError as exc:
        raise MalformedRecordError(
            f"Variable {variable.name} does not hold a valid legacy record: {exc}"
        ) from exc
    return schema.to_domain()
