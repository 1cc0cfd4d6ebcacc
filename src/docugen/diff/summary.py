"""Human-readable change summary.

The summary is the only input the documentation generator receives, so it
spells out full signatures rather than counts.
"""

from __future__ import annotations

from collections.abc import Iterable

from docugen.diff.models import ChangeSet, render_parameters

ADDED_MARKER = "✅ Added:"
REMOVED_MARKER = "❌ Removed:"
MODIFIED_MARKER = "✏️ Modified:"
NO_CHANGES = "No functional changes detected."


def render_signature(name: str, parameters: Iterable[str]) -> str:
    """``render_signature("f", ["a", "b"]) -> "f(a, b)"``."""
    return f"{name}({render_parameters(parameters)})"


def format_summary(changes: ChangeSet) -> str:
    """Render a ChangeSet as newline-separated text.

    One line per non-empty bucket, always in the order added, removed,
    modified. An empty ChangeSet renders as ``NO_CHANGES``.
    """
    lines: list[str] = []

    if changes.added:
        names = ", ".join(render_signature(r.name, r.parameters) for r in changes.added)
        lines.append(f"{ADDED_MARKER} {names}")

    if changes.removed:
        names = ", ".join(render_signature(r.name, r.parameters) for r in changes.removed)
        lines.append(f"{REMOVED_MARKER} {names}")

    if changes.modified:
        descs = ", ".join(
            f"{render_signature(m.name, m.old_parameters)} → "
            f"{render_signature(m.name, m.new_parameters)}"
            for m in changes.modified
        )
        lines.append(f"{MODIFIED_MARKER} {descs}")

    if not lines:
        lines.append(NO_CHANGES)

    return "\n".join(lines)
