"""Mapping of legacy ``*_DEVSBX`` records onto ``CONTEXT_*`` records."""

from __future__ import annotations

from sfops_migration.models import ContextPayload, ContextRecord, ExtractedFields, LegacyRecord
from sfops_migration.scheduling import minutes_until_expiry


def build_context_record(
    owner: str,
    repo: str,
    legacy: LegacyRecord,
    fields: ExtractedFields,
    *,
    now_ms: int,
) -> ContextRecord:
    payload = ContextPayload(
        source_sb=fields.source_sandbox,
        days_to_keep=fields.days_to_keep,
        email=fields.user_email,
        issue_number=legacy.issue_number,
        repo_owner=owner,
        repo_name=repo,
        issue_creator=legacy.requester,
        status=legacy.status,
        sandbox_name=legacy.name,
        job_to_be_executed_after=minutes_until_expiry(legacy.created_at, legacy.expiry, now_ms),
    )
    return ContextRecord(payload=payload)
