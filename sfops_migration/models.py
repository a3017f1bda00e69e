"""Domain objects describing repository variables, request issues and sandbox records."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

LEGACY_SUFFIX = "_DEVSBX"
CONTEXT_PREFIX = "CONTEXT_"
REQUEST_ID = "request-dev-sandbox"
EXPIRY_JOB_ID = "dev-sandbox-expiry"
AWAITING = "Awaiting"


def context_variable_name(issue_number: int) -> str:
    return f"{CONTEXT_PREFIX}{issue_number}"


@dataclass(slots=True)
class Variable:
    """A repository variable as returned by the store."""

    name: str
    value: str

    @property
    def is_legacy(self) -> bool:
        return self.name.endswith(LEGACY_SUFFIX)


@dataclass(slots=True)
class Ticket:
    """Request issue the sandbox was provisioned from."""

    number: int
    title: str
    body: str


@dataclass(slots=True, frozen=True)
class LegacyRecord:
    """Decoded value of a ``*_DEVSBX`` variable."""

    issue_number: int
    created_at: int
    expiry: int
    requester: str
    status: str
    name: str


@dataclass(slots=True, frozen=True)
class ExtractedFields:
    source_sandbox: str = ""
    days_to_keep: str = "15"
    user_email: str = ""


@dataclass(slots=True)
class ContextPayload:
    """Job payload consumed by the sandbox expiry scheduler."""

    source_sb: str
    days_to_keep: str
    email: str
    issue_number: int
    repo_owner: str
    repo_name: str
    issue_creator: str
    status: str
    sandbox_name: str
    job_to_be_executed_after: int
    id: str = REQUEST_ID
    valid_issue: str = "true"
    env: str = "devhub"
    dev_hub_auth_required: bool = True
    job_id: str = EXPIRY_JOB_ID

    @property
    def username(self) -> str:
        return f"{self.email}.{self.sandbox_name}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceSB": self.source_sb,
            "daysToKeep": self.days_to_keep,
            "email": self.email,
            "issueNumber": self.issue_number,
            "repoOwner": self.repo_owner,
            "repoName": self.repo_name,
            "issueCreator": self.issue_creator,
            "valid_issue": self.valid_issue,
            "env": self.env,
            "status": self.status,
            "sandboxName": self.sandbox_name,
            "devHubAuthRequired": self.dev_hub_auth_required,
            "jobId": self.job_id,
            "username": self.username,
            "jobToBeExecutedAfter": self.job_to_be_executed_after,
        }


@dataclass(slots=True)
class ContextRecord:
    """Value stored under ``CONTEXT_<issueNumber>``.

    ``status`` is always ``"Awaiting"`` while ``payload.status`` carries the legacy
    record's own status. The two disagree and are probably an accident of the old
    record layout; both are reproduced unchanged until their meaning is clarified.
    """

    payload: ContextPayload
    status: str = AWAITING

    @property
    def variable_name(self) -> str:
        return context_variable_name(self.payload.issue_number)

    def as_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "payload": self.payload.as_dict()}

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), separators=(",", ":"), ensure_ascii=False)
