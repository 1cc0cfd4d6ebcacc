"""Prompt text and the deterministic fallback document."""

from __future__ import annotations

from textwrap import dedent

DOCS_PROMPT = dedent(
    """\
    You are a technical documentation assistant. Based on the following code changes,
    generate two sections:

    1. **Changelog Entry** - A concise bullet-point list of what changed.
    2. **README Update** - A short paragraph that could be added to a project README
       describing the new/updated functionality.

    Code Changes:
    {summary}

    Please keep it concise and professional."""
)

FALLBACK_NOTE = "> *This is a mock response. Set a valid GROQ_API_KEY for AI-generated docs.*"


def build_prompt(summary: str) -> str:
    return DOCS_PROMPT.format(summary=summary)


def fallback_docs(summary: str) -> str:
    """Documentation built from the summary alone, without a model.

    Every summary line appears verbatim as a changelog bullet.
    """
    bullets = "\n".join(f"- {line}" for line in summary.split("\n"))
    return (
        "## 📋 Changelog\n"
        "\n"
        f"{bullets}\n"
        "\n"
        "## 📖 README Update\n"
        "\n"
        "This update includes changes to the project's function signatures.\n"
        "New functions have been added to extend functionality, and deprecated\n"
        "functions have been removed to keep the codebase clean. Please refer\n"
        "to the changelog above for specific details.\n"
        "\n"
        f"{FALLBACK_NOTE}"
    )
