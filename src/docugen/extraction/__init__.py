"""Source -> FunctionRecord extraction."""

from docugen.extraction.javascript import JavaScriptExtractor, extract_functions

__all__ = ["JavaScriptExtractor", "extract_functions"]
