from __future__ import annotations

import json
from dataclasses import replace

import pytest

from sfops_migration.interfaces import StoreError
from sfops_migration.memory import InMemoryGateway
from sfops_migration.migration import VariableMigrator
from sfops_migration.models import Variable
from sfops_migration.serializers import MalformedRecordError

from .factories import OWNER, REPO, legacy_variable, request_ticket


class _GatewaySpy(InMemoryGateway):
    """Records every mutating call and optionally fails variable lookups."""

    def __init__(self, *args, failing_lookups: dict[str, Exception] | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, object]] = []
        self._failing_lookups = failing_lookups or {}

    def get_variable(self, owner, repo, name):
        if name in self._failing_lookups:
            raise self._failing_lookups[name]
        return super().get_variable(owner, repo, name)

    def create_variable(self, owner, repo, name, value):
        self.calls.append(("create", name))
        super().create_variable(owner, repo, name, value)

    def delete_variable(self, owner, repo, name):
        self.calls.append(("delete", name))
        super().delete_variable(owner, repo, name)

    def update_ticket(self, owner, repo, number, *, body):
        self.calls.append(("update_ticket", number))
        super().update_ticket(owner, repo, number, body=body)


def _gateway(*issue_numbers: int, **kwargs) -> _GatewaySpy:
    variables = [legacy_variable(number) for number in issue_numbers]
    variables.append(Variable(name="UNRELATED", value="keep me"))
    tickets = [request_ticket(number) for number in issue_numbers]
    return _GatewaySpy(OWNER, REPO, variables=variables, tickets=tickets, **kwargs)


def test_migration_creates_context_records_and_removes_legacy(config, fixed_clock):
    gateway = _gateway(42)

    report = VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert report.as_dict() == {
        "checked": 1,
        "created": ["CONTEXT_42"],
        "skipped": [],
        "deleted": ["SBX42_DEVSBX"],
    }
    assert gateway.calls == [
        ("update_ticket", 42),
        ("create", "CONTEXT_42"),
        ("delete", "SBX42_DEVSBX"),
    ]
    state = gateway.snapshot(OWNER, REPO)
    assert set(state) == {"UNRELATED", "CONTEXT_42"}
    payload = json.loads(state["CONTEXT_42"])["payload"]
    assert payload["username"] == "bob@example.com.sbx42"
    assert payload["sourceSB"] == "prod"
    assert payload["daysToKeep"] == "30"
    assert payload["jobToBeExecutedAfter"] == 14400


def test_migration_annotates_request_issue(config, fixed_clock):
    gateway = _gateway(42)

    VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    body = gateway.get_ticket(OWNER, REPO, 42).body
    assert body.endswith(
        '\n\n<!-- {"id":"request-dev-sandbox","sourceSB":"prod","daysToKeep":"30",'
        '"email":"bob@example.com"} -->'
    )


def test_migration_without_cleanup_leaves_issue_and_legacy_variable(config, fixed_clock):
    gateway = _gateway(42)
    config = replace(config, perform_cleanup=False)

    report = VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert report.created == ["CONTEXT_42"]
    assert report.deleted == []
    assert gateway.calls == [("create", "CONTEXT_42")]
    assert "SBX42_DEVSBX" in gateway.snapshot(OWNER, REPO)
    assert "<!--" not in gateway.get_ticket(OWNER, REPO, 42).body


def test_existing_context_record_is_skipped_and_legacy_kept(config, fixed_clock):
    gateway = _gateway(42)
    gateway.create_variable(OWNER, REPO, "CONTEXT_42", '{"status":"Awaiting"}')
    gateway.calls.clear()

    report = VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert report.skipped == ["CONTEXT_42"]
    assert report.created == []
    assert ("create", "CONTEXT_42") not in gateway.calls
    assert not any(call[0] == "delete" for call in gateway.calls)
    state = gateway.snapshot(OWNER, REPO)
    assert state["CONTEXT_42"] == '{"status":"Awaiting"}'
    assert "SBX42_DEVSBX" in state


def test_rerun_without_cleanup_skips_everything(config, fixed_clock):
    gateway = _gateway(1, 2)
    config = replace(config, perform_cleanup=False)
    migrator = VariableMigrator(config, gateway, gateway, clock=fixed_clock)

    migrator.run()
    after_first = gateway.snapshot(OWNER, REPO)
    second = migrator.run()

    assert second.skipped == ["CONTEXT_1", "CONTEXT_2"]
    assert second.created == []
    assert gateway.snapshot(OWNER, REPO) == after_first


def test_rerun_with_cleanup_finds_nothing_left(config, fixed_clock):
    gateway = _gateway(1, 2)
    migrator = VariableMigrator(config, gateway, gateway, clock=fixed_clock)

    migrator.run()
    after_first = gateway.snapshot(OWNER, REPO)
    second = migrator.run()

    assert second.checked == 0
    assert gateway.snapshot(OWNER, REPO) == after_first


def test_lookup_failure_aborts_remaining_candidates(config, fixed_clock):
    gateway = _gateway(
        1,
        2,
        3,
        failing_lookups={"CONTEXT_2": StoreError("boom", status_code=500)},
    )

    with pytest.raises(StoreError, match="boom"):
        VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    mutations = [call for call in gateway.calls if call[0] != "update_ticket"]
    assert mutations == [("create", "CONTEXT_1"), ("delete", "SBX1_DEVSBX")]
    state = gateway.snapshot(OWNER, REPO)
    assert "SBX2_DEVSBX" in state and "SBX3_DEVSBX" in state
    assert "CONTEXT_2" not in state and "CONTEXT_3" not in state


def test_malformed_legacy_value_aborts_run(config, fixed_clock):
    gateway = _GatewaySpy(
        OWNER,
        REPO,
        variables=[Variable(name="BROKEN_DEVSBX", value="{not json"), legacy_variable(5)],
        tickets=[request_ticket(5)],
    )

    with pytest.raises(MalformedRecordError):
        VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert gateway.calls == []


def test_ticket_update_failure_aborts_before_create(config, fixed_clock):
    class _ReadOnlyTickets(_GatewaySpy):
        def update_ticket(self, owner, repo, number, *, body):
            raise StoreError("issue locked", status_code=403)

    gateway = _ReadOnlyTickets(OWNER, REPO, variables=[legacy_variable(9)], tickets=[request_ticket(9)])

    with pytest.raises(StoreError, match="issue locked"):
        VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert gateway.calls == []
    assert set(gateway.snapshot(OWNER, REPO)) == {"SBX9_DEVSBX"}


def test_non_legacy_variables_are_ignored(config, fixed_clock):
    gateway = _GatewaySpy(
        OWNER,
        REPO,
        variables=[Variable(name="DEVSBX_SETTINGS", value="x"), Variable(name="CONTEXT_3", value="{}")],
    )

    report = VariableMigrator(config, gateway, gateway, clock=fixed_clock).run()

    assert report.checked == 0
    assert gateway.calls == []
