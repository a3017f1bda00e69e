from sfops_migration.config import MigrationConfig
from sfops_migration.extraction import RequestField, extract_field, extract_fields
from sfops_migration.github import GitHubClient, GitHubError, GitHubVariableNotFoundError
from sfops_migration.interfaces import StoreError, TicketStore, VariableNotFoundError, VariableStore
from sfops_migration.memory import InMemoryGateway
from sfops_migration.migration import MigrationReport, VariableMigrator, migrate
from sfops_migration.models import ContextPayload, ContextRecord, ExtractedFields, LegacyRecord, Ticket, Variable
from sfops_migration.scheduling import minutes_until_expiry
from sfops_migration.serializers import MalformedRecordError, parse_legacy_record
from sfops_migration.transform import build_context_record

__all__ = [
    "MigrationConfig",
    "RequestField",
    "extract_field",
    "extract_fields",
    "GitHubClient",
    "GitHubError",
    "GitHubVariableNotFoundError",
    "StoreError",
    "TicketStore",
    "VariableNotFoundError",
    "VariableStore",
    "InMemoryGateway",
    "MigrationReport",
    "VariableMigrator",
    "migrate",
    "ContextPayload",
    "ContextRecord",
    "ExtractedFields",
    "LegacyRecord",
    "Ticket",
    "Variable",
    "minutes_until_expiry",
    "MalformedRecordError",
    "parse_legacy_record",
    "build_context_record",
]
