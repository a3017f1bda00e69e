"""Machine-readable marker appended to migrated request issues."""

from __future__ import annotations

from sfops_migration.models import REQUEST_ID, ExtractedFields


def render_marker(fields: ExtractedFields) -> str:
    # Values are interpolated verbatim; downstream readers match this exact layout.
    return (
        f'<!-- {{"id":"{REQUEST_ID}","sourceSB":"{fields.source_sandbox}",'
        f'"daysToKeep":"{fields.days_to_keep}","email":"{fields.user_email}"}} -->'
    )


def annotate_body(body: str, fields: ExtractedFields) -> str:
    return f"{body}\n\n{render_marker(fields)}"
