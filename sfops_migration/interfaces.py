"""Store boundaries the migration talks to."""

from __future__ import annotations

from typing import Protocol

from sfops_migration.models import Ticket, Variable


class StoreError(RuntimeError):
    """Base error for store failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VariableNotFoundError(StoreError):
    """The requested variable does not exist."""


class VariableStore(Protocol):
    """Repository-scoped configuration variables."""

    def list_variables(self, owner: str, repo: str) -> list[Variable]:  # pragma: no cover
        ...

    def get_variable(self, owner: str, repo: str, name: str) -> Variable:  # pragma: no cover
        """Return the variable or raise ``VariableNotFoundError``."""
        ...

    def create_variable(self, owner: str, repo: str, name: str, value: str) -> None:  # pragma: no cover
        ...

    def delete_variable(self, owner: str, repo: str, name: str) -> None:  # pragma: no cover
        ...


class TicketStore(Protocol):
    """Request issues linked to sandbox records."""

    def get_ticket(self, owner: str, repo: str, number: int) -> Ticket:  # pragma: no cover
        ...

    def update_ticket(self, owner: str, repo: str, number: int, *, body: str) -> None:  # pragma: no cover
        ...
