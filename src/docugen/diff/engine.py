"""Pure change detection between two function inventories.

Compares a "before" and an "after" list of FunctionRecords by name and
classifies each name:

- added: name only in after
- removed: name only in before
- modified: name in both, rendered parameter lists differ
- (unchanged): name in both, identical rendered parameters; reported nowhere

No parsing, rename detection, or body comparison happens here.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import structlog

from docugen.diff.models import ChangeSet, FunctionRecord, ModifiedFunction

log = structlog.get_logger(__name__)


def detect_changes(
    before: Iterable[FunctionRecord],
    after: Iterable[FunctionRecord],
) -> ChangeSet:
    """Classify functions as added, removed, or modified.

    When a snapshot declares the same name more than once, the last
    declaration wins. A ``duplicate_function_names`` warning is logged.

    Bucket order follows first appearance of each name: the after
    snapshot for added/modified, the before snapshot for removed.

    Args:
        before: Function records of the old snapshot.
        after: Function records of the new snapshot.

    Returns:
        ChangeSet with the three buckets.
    """
    before_map = _index_by_name(before, side="before")
    after_map = _index_by_name(after, side="after")

    added: list[FunctionRecord] = []
    modified: list[ModifiedFunction] = []

    for name, new in after_map.items():
        old = before_map.get(name)
        if old is None:
            added.append(new)
        elif old.rendered_parameters != new.rendered_parameters:
            modified.append(
                ModifiedFunction(
                    name=name,
                    old_parameters=old.parameters,
                    new_parameters=new.parameters,
                )
            )

    removed = [old for name, old in before_map.items() if name not in after_map]

    return ChangeSet(added=tuple(added), removed=tuple(removed), modified=tuple(modified))


def find_duplicate_names(records: Iterable[FunctionRecord]) -> list[str]:
    """Names declared more than once, in order of first appearance."""
    counts = Counter(r.name for r in records)
    return [name for name, count in counts.items() if count > 1]


def _index_by_name(records: Iterable[FunctionRecord], side: str) -> dict[str, FunctionRecord]:
    """Name -> record; later records overwrite earlier ones but keep the first slot."""
    records = list(records)
    mapping = {r.name: r for r in records}
    if len(mapping) != len(records):
        log.warning(
            "duplicate_function_names",
            side=side,
            names=find_duplicate_names(records),
        )
    return mapping
