"""Structured Find selectors over exact field equality.

A selector renders to the ledger's expression language and can also be
evaluated against plain row dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


def _escape(text: str) -> str:
    return text.replace('"', '\\"')


def _normalize(value: Any) -> str:
    return "" if value is None else str(value).strip()


@dataclass(frozen=True)
class Eq:
    field: str
    value: Union[str, int]

    def render(self) -> str:
        if isinstance(self.value, int) and not isinstance(self.value, bool):
            return f"[{self.field}]={self.value}"
        return f'[{self.field}]="{_escape(str(self.value))}"'

    def matches(self, row: dict[str, Any]) -> bool:
        return _normalize(row.get(self.field)) == _normalize(self.value)


@dataclass(frozen=True)
class And:
    clauses: tuple["Selector", ...]

    def __init__(self, *clauses: "Selector") -> None:
        object.__setattr__(self, "clauses", tuple(clauses))

    def render(self) -> str:
        return f"AND({','.join(c.render() for c in self.clauses)})"

    def matches(self, row: dict[str, Any]) -> bool:
        return all(c.matches(row) for c in self.clauses)


@dataclass(frozen=True)
class Or:
    clauses: tuple["Selector", ...]

    def __init__(self, *clauses: "Selector") -> None:
        object.__setattr__(self, "clauses", tuple(clauses))

    def render(self) -> str:
        return f"OR({','.join(c.render() for c in self.clauses)})"

    def matches(self, row: dict[str, Any]) -> bool:
        return any(c.matches(row) for c in self.clauses)


Selector = Union[Eq, And, Or]


def any_of(clauses: list[Selector]) -> Selector:
    """OR the clauses together; a single clause is returned bare."""
    if not clauses:
        raise ValueError("any_of() needs at least one clause")
    if len(clauses) == 1:
        return clauses[0]
    return Or(*clauses)
