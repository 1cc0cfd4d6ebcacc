"""Function-level change detection.

Public API re-exports for the diff subpackage.
"""

from docugen.diff.engine import detect_changes, find_duplicate_names
from docugen.diff.models import ChangeSet, FunctionRecord, ModifiedFunction, render_parameters
from docugen.diff.summary import NO_CHANGES, format_summary, render_signature

__all__ = [
    "ChangeSet",
    "FunctionRecord",
    "ModifiedFunction",
    "NO_CHANGES",
    "detect_changes",
    "find_duplicate_names",
    "format_summary",
    "render_parameters",
    "render_signature",
]
