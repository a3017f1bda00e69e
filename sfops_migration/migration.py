"""Upgrade ``*_DEVSBX`` sandbox variables into ``CONTEXT_<issue>`` scheduler records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from sfops_migration.annotation import annotate_body
from sfops_migration.config import MigrationConfig
from sfops_migration.extraction import extract_fields
from sfops_migration.interfaces import TicketStore, VariableNotFoundError, VariableStore
from sfops_migration.models import ContextRecord, Variable
from sfops_migration.scheduling import Clock, now_ms
from sfops_migration.serializers import parse_legacy_record
from sfops_migration.transform import build_context_record

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    checked: int = 0
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "checked": self.checked,
            "created": list(self.created),
            "skipped": list(self.skipped),
            "deleted": list(self.deleted),
        }


class VariableMigrator:
    """Walks legacy sandbox variables and writes their upgraded counterparts.

    Candidates are processed one at a time and any unexpected error aborts the run.
    A rerun is safe: records whose ``CONTEXT_*`` variable already exists are skipped,
    so only the unfinished tail of an aborted run is retried.
    """

    def __init__(
        self,
        config: MigrationConfig,
        variables: VariableStore,
        tickets: TicketStore,
        *,
        clock: Clock = now_ms,
    ) -> None:
        self.config = config
        self.variables = variables
        self.tickets = tickets
        self.clock = clock

    def run(self) -> MigrationReport:
        owner, repo = self.config.owner, self.config.repo
        logger.info("Starting SFOPS migration for %s/%s", owner, repo)
        report = MigrationReport()
        for variable in self.variables.list_variables(owner, repo):
            if not variable.is_legacy:
                continue
            report.checked += 1
            self._migrate(variable, report)
        logger.info(
            "SFOPS migration completed: %d checked, %d created, %d skipped, %d deleted",
            report.checked,
            len(report.created),
            len(report.skipped),
            len(report.deleted),
        )
        return report

    def _migrate(self, variable: Variable, report: MigrationReport) -> None:
        owner, repo = self.config.owner, self.config.repo
        logger.info("Upgrading variable %s", variable.name)
        legacy = parse_legacy_record(variable)

        ticket = self.tickets.get_ticket(owner, repo, legacy.issue_number)
        logger.info("Fetched issue #%d: %s", ticket.number, ticket.title)
        fields = extract_fields(ticket.body)

        if self.config.perform_cleanup:
            self.tickets.update_ticket(
                owner, repo, legacy.issue_number, body=annotate_body(ticket.body, fields)
            )
            logger.info("Annotated issue #%d with request marker", legacy.issue_number)

        record = build_context_record(owner, repo, legacy, fields, now_ms=self.clock())
        if not self._create_if_absent(record):
            report.skipped.append(record.variable_name)
            return
        report.created.append(record.variable_name)

        if self.config.perform_cleanup:
            self.variables.delete_variable(owner, repo, variable.name)
            logger.info("Deleted legacy variable %s", variable.name)
            report.deleted.append(variable.name)

    def _create_if_absent(self, record: ContextRecord) -> bool:
        owner, repo = self.config.owner, self.config.repo
        name = record.variable_name
        try:
            self.variables.get_variable(owner, repo, name)
        except VariableNotFoundError:
            self.variables.create_variable(owner, repo, name, record.to_json())
            logger.info("Created variable %s", name)
            return True
        logger.info("Variable %s already exists, skipping", name)
        return False


def migrate(config: MigrationConfig, variables: VariableStore, tickets: TicketStore) -> MigrationReport:
    return VariableMigrator(config, variables, tickets).run()
