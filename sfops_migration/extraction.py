"""Pull the sandbox request fields out of an issue form body.

Issue forms render each answer as a ``### <label>`` heading followed by the answer on
the next non-empty line. Only the first occurrence of a heading is considered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from sfops_migration.models import ExtractedFields


class RequestField(str, Enum):
    SOURCE_SANDBOX = "source_sandbox"
    DAYS_TO_KEEP = "days_to_keep"
    USER_EMAIL = "user_email"


@dataclass(slots=True, frozen=True)
class SectionPattern:
    heading: str
    default: str

    @property
    def regex(self) -> re.Pattern[str]:
        return re.compile(rf"### {re.escape(self.heading)}\n+(.*)$", re.MULTILINE)


SECTION_PATTERNS: dict[RequestField, SectionPattern] = {
    RequestField.SOURCE_SANDBOX: SectionPattern(
        heading="Pick a source sandbox to refresh from",
        default="",
    ),
    RequestField.DAYS_TO_KEEP: SectionPattern(
        heading="How long should the sandbox be kept?",
        default="15",
    ),
    RequestField.USER_EMAIL: SectionPattern(
        heading="Email of the user to which this sandbox should be assigned",
        default="",
    ),
}


def extract_field(body: str, field: RequestField) -> str:
    pattern = SECTION_PATTERNS[field]
    match = pattern.regex.search(body or "")
    if not match:
        return pattern.default
    value = match.group(1).strip()
    # A heading on the last line captures nothing.
    return value or pattern.default


def extract_fields(body: str) -> ExtractedFields:
    return ExtractedFields(
        source_sandbox=extract_field(body, RequestField.SOURCE_SANDBOX),
        days_to_keep=extract_field(body, RequestField.DAYS_TO_KEEP),
        user_email=extract_field(body, RequestField.USER_EMAIL),
    )
