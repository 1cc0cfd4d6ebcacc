"""Data models for function-level change detection.

All models are frozen dataclasses built fresh per comparison. The ``to_dict``
methods produce the camelCase wire shape returned by ``/api/analyze``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FunctionRecord:
    """One declared function in a snapshot of source code.

    ``kind`` records the declaration style and never takes part in
    comparisons between snapshots.
    """

    name: str
    parameters: tuple[str, ...] = ()
    kind: str = "FunctionDeclaration"

    @property
    def rendered_parameters(self) -> str:
        """Canonical comparable form of the parameter list."""
        return render_parameters(self.parameters)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "params": list(self.parameters), "type": self.kind}


@dataclass(frozen=True, slots=True)
class ModifiedFunction:
    """A function present in both snapshots whose parameter list changed."""

    name: str
    old_parameters: tuple[str, ...]
    new_parameters: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "oldParams": list(self.old_parameters),
            "newParams": list(self.new_parameters),
        }


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Three-way classification of functions between two snapshots.

    A name appears in at most one bucket. Unchanged functions appear in none.
    """

    added: tuple[FunctionRecord, ...] = ()
    removed: tuple[FunctionRecord, ...] = ()
    modified: tuple[ModifiedFunction, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def counts(self) -> dict[str, int]:
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "modified": len(self.modified),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "added": [r.to_dict() for r in self.added],
            "removed": [r.to_dict() for r in self.removed],
            "modified": [m.to_dict() for m in self.modified],
        }


def render_parameters(parameters: Iterable[str]) -> str:
    """Join parameter renderings in order: ``("a", "b=1") -> "a, b=1"``."""
    return ", ".join(parameters)
