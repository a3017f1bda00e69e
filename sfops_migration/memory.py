"""In-memory stores useful for rehearsing migrations and for unit tests."""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

from sfops_migration.interfaces import StoreError, TicketStore, VariableNotFoundError, VariableStore
from sfops_migration.models import Ticket, Variable

_RepoKey = Tuple[str, str]


class InMemoryGateway(VariableStore, TicketStore):
    def __init__(
        self,
        owner: str,
        repo: str,
        *,
        variables: Iterable[Variable] = (),
        tickets: Iterable[Ticket] = (),
    ) -> None:
        key = (owner, repo)
        self._variables: Dict[_RepoKey, Dict[str, Variable]] = {
            key: {variable.name: variable for variable in variables}
        }
        self._tickets: Dict[_RepoKey, Dict[int, Ticket]] = {
            key: {ticket.number: ticket for ticket in tickets}
        }

    def list_variables(self, owner: str, repo: str) -> list[Variable]:
        return list(self._variables.get((owner, repo), {}).values())

    def get_variable(self, owner: str, repo: str, name: str) -> Variable:
        try:
            return self._variables[(owner, repo)][name]
        except KeyError as exc:
            raise VariableNotFoundError(f"Variable {name} not found", status_code=404) from exc

    def create_variable(self, owner: str, repo: str, name: str, value: str) -> None:
        bucket = self._variables.setdefault((owner, repo), {})
        if name in bucket:
            raise StoreError(f"Variable {name} already exists", status_code=409)
        bucket[name] = Variable(name=name, value=value)

    def delete_variable(self, owner: str, repo: str, name: str) -> None:
        try:
            del self._variables[(owner, repo)][name]
        except KeyError as exc:
            raise VariableNotFoundError(f"Variable {name} not found", status_code=404) from exc

    def get_ticket(self, owner: str, repo: str, number: int) -> Ticket:
        try:
            ticket = self._tickets[(owner, repo)][number]
        except KeyError as exc:
            raise StoreError(f"Issue #{number} not found", status_code=404) from exc
        return Ticket(number=ticket.number, title=ticket.title, body=ticket.body)

    def update_ticket(self, owner: str, repo: str, number: int, *, body: str) -> None:
        ticket = self.get_ticket(owner, repo, number)
        self._tickets[(owner, repo)][number] = Ticket(number=number, title=ticket.title, body=body)

    def snapshot(self, owner: str, repo: str) -> dict[str, str]:
        return {name: variable.value for name, variable in self._variables.get((owner, repo), {}).items()}
