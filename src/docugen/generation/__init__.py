"""Documentation generation from change summaries."""

from docugen.generation.client import DocsGenerator
from docugen.generation.prompts import build_prompt, fallback_docs

__all__ = ["DocsGenerator", "build_prompt", "fallback_docs"]
