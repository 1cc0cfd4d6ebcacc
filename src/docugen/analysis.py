"""Analysis pipeline: extract -> detect -> summarize -> document.

Shared by the HTTP route and the ``docugen diff`` command.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import structlog

from docugen.core.errors import ParseError
from docugen.diff import (
    ChangeSet,
    FunctionRecord,
    detect_changes,
    find_duplicate_names,
    format_summary,
)
from docugen.extraction import JavaScriptExtractor

if TYPE_CHECKING:
    from docugen.generation import DocsGenerator

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one comparison produces."""

    old_functions: list[FunctionRecord]
    new_functions: list[FunctionRecord]
    changes: ChangeSet
    summary: str
    docs: str | None = None
    warnings: list[str] = field(default_factory=list)

    def stats(self) -> dict[str, int]:
        return {
            "oldFunctions": len(self.old_functions),
            "newFunctions": len(self.new_functions),
            **self.changes.counts(),
        }

    def to_dict(self) -> dict[str, Any]:
        """Response body for ``POST /api/analyze``."""
        return {
            "success": True,
            "stats": self.stats(),
            "changes": self.changes.to_dict(),
            "summary": self.summary,
            "docs": self.docs,
            "warnings": self.warnings,
        }


def compare_sources(old_code: str, new_code: str) -> AnalysisResult:
    """Extract both snapshots and diff them. No documentation is generated.

    Raises:
        ParseError: If either source fails to parse.
    """
    extractor = JavaScriptExtractor()
    old_functions = _extract(extractor, old_code, side="old")
    new_functions = _extract(extractor, new_code, side="new")
    log.info("functions_extracted", old=len(old_functions), new=len(new_functions))

    changes = detect_changes(old_functions, new_functions)
    log.info("changes_detected", **changes.counts())

    return AnalysisResult(
        old_functions=old_functions,
        new_functions=new_functions,
        changes=changes,
        summary=format_summary(changes),
        warnings=_duplicate_warnings(old_functions, new_functions),
    )


async def analyze(old_code: str, new_code: str, generator: DocsGenerator) -> AnalysisResult:
    """Full pipeline including generated documentation."""
    result = compare_sources(old_code, new_code)
    docs = await generator.generate(result.summary)
    log.info("docs_generated", chars=len(docs))
    return replace(result, docs=docs)


def _extract(extractor: JavaScriptExtractor, source: str, side: str) -> list[FunctionRecord]:
    """Extract one snapshot, tagging parse errors with which side failed."""
    try:
        return extractor.extract(source)
    except ParseError as e:
        raise ParseError(
            code=e.code,
            message=f"{side} code: {e.message}",
            details={**e.details, "side": side},
        ) from e


def _duplicate_warnings(
    old_functions: list[FunctionRecord],
    new_functions: list[FunctionRecord],
) -> list[str]:
    warnings = []
    for label, records in (("old", old_functions), ("new", new_functions)):
        for name in find_duplicate_names(records):
            warnings.append(
                f"Function '{name}' is declared more than once in the {label} code; "
                "the last declaration was compared."
            )
    return warnings
