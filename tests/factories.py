from __future__ import annotations

import json

from sfops_migration.models import Ticket, Variable

OWNER = "acme"
REPO = "sandboxes"
CREATED_AT = 1_700_000_000_000
DAY_MS = 86_400_000

ISSUE_BODY = (
    "### Pick a source sandbox to refresh from\n\n"
    "prod\n\n"
    "### How long should the sandbox be kept?\n\n"
    "30\n\n"
    "### Email of the user to which this sandbox should be assigned\n\n"
    "bob@example.com"
)


def legacy_value(issue_number: int, **overrides) -> str:
    value = {
        "issueNumber": issue_number,
        "createdAt": CREATED_AT,
        "expiry": "15",
        "requester": "alice",
        "status": "Pending",
        "name": f"sbx{issue_number}",
    }
    value.update(overrides)
    return json.dumps(value)


def legacy_variable(issue_number: int, *, name: str | None = None, **overrides) -> Variable:
    return Variable(name=name or f"SBX{issue_number}_DEVSBX", value=legacy_value(issue_number, **overrides))


def request_ticket(number: int, body: str = ISSUE_BODY) -> Ticket:
    return Ticket(number=number, title=f"Dev sandbox request {number}", body=body)
