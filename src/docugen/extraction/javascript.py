"""JavaScript function extraction with Tree-sitter.

Walks the syntax tree in document order and records every named function:

- ``function f(a) {}`` and ``function* f(a) {}`` -> FunctionDeclaration
- ``const f = (a) => {}`` -> ArrowFunctionExpression
- ``const f = function (a) {}`` -> FunctionExpression

Nested functions are included. Anonymous functions, methods and
destructured declarators are not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
import tree_sitter
import tree_sitter_javascript

from docugen.core.errors import ParseError
from docugen.diff.models import FunctionRecord

if TYPE_CHECKING:
    from tree_sitter import Node

log = structlog.get_logger(__name__)

FUNCTION_DECLARATION = "FunctionDeclaration"
ARROW_FUNCTION = "ArrowFunctionExpression"
FUNCTION_EXPRESSION = "FunctionExpression"

_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

# Value node type -> record kind, for ``const name = <value>``
_BOUND_FUNCTION_TYPES: dict[str, str] = {
    "arrow_function": ARROW_FUNCTION,
    "function_expression": FUNCTION_EXPRESSION,
    "function": FUNCTION_EXPRESSION,  # grammar < 0.23
    "generator_function": FUNCTION_EXPRESSION,
}

# Default values rendered verbatim; anything else renders as "..."
_LITERAL_TYPES = frozenset({"number", "string", "true", "false", "null", "undefined", "regex"})

_language: tree_sitter.Language | None = None


def _get_language() -> tree_sitter.Language:
    global _language
    if _language is None:
        _language = tree_sitter.Language(tree_sitter_javascript.language())
    return _language


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


class JavaScriptExtractor:
    """Extracts FunctionRecords from JavaScript (and JSX) source.

    A fresh parser is created per extractor; share the extractor only
    within one thread.
    """

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._parser.language = _get_language()

    def extract(self, source: str) -> list[FunctionRecord]:
        """Parse ``source`` and return its functions in document order.

        Raises:
            ParseError: If the source contains a syntax error or a character
                UTF-8 cannot encode (e.g. a lone surrogate).
        """
        try:
            encoded = source.encode("utf-8")
        except UnicodeEncodeError as e:
            raise _encoding_error(source, e) from e

        tree = self._parser.parse(encoded)
        root = tree.root_node
        if root.has_error:
            raise _syntax_error(root)

        functions: list[FunctionRecord] = []
        stack: list[Node] = [root]
        while stack:
            node = stack.pop()
            record = _record_for(node)
            if record is not None:
                functions.append(record)
            stack.extend(reversed(node.named_children))

        log.debug("javascript_parsed", functions=len(functions))
        return functions


def extract_functions(source: str) -> list[FunctionRecord]:
    """Convenience wrapper: ``JavaScriptExtractor().extract(source)``."""
    return JavaScriptExtractor().extract(source)


def _record_for(node: Node) -> FunctionRecord | None:
    if node.type in _DECLARATION_TYPES:
        name = node.child_by_field_name("name")
        if name is None:
            return None
        return FunctionRecord(
            name=_text(name),
            parameters=_render_parameters(node),
            kind=FUNCTION_DECLARATION,
        )

    if node.type == "variable_declarator":
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is None or value is None or name.type != "identifier":
            return None
        kind = _BOUND_FUNCTION_TYPES.get(value.type)
        if kind is None:
            return None
        return FunctionRecord(name=_text(name), parameters=_render_parameters(value), kind=kind)

    return None


def _render_parameters(function_node: Node) -> tuple[str, ...]:
    params = function_node.child_by_field_name("parameters")
    if params is None:
        # Bare arrow parameter: x => x
        single = function_node.child_by_field_name("parameter")
        return (render_parameter(single),) if single is not None else ()
    return tuple(render_parameter(p) for p in params.named_children if p.type != "comment")


def render_parameter(node: Node) -> str:
    """Render one formal parameter node as display text."""
    if node.type == "identifier":
        return _text(node)
    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        left_text = render_parameter(left) if left is not None else "unknown"
        right_text = _text(right) if right is not None and right.type in _LITERAL_TYPES else "..."
        return f"{left_text}={right_text}"
    if node.type == "rest_pattern":
        inner = node.named_children[0] if node.named_children else None
        return "..." + (render_parameter(inner) if inner is not None else "unknown")
    if node.type == "object_pattern":
        return "{ destructured }"
    if node.type == "array_pattern":
        return "[ destructured ]"
    return "unknown"


def _syntax_error(root: Node) -> ParseError:
    """Locate the first ERROR or missing node for the error message."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            line, column = node.start_point
            return ParseError.syntax_error(line + 1, column + 1, _text(node)[:80])
        if node.has_error:
            stack.extend(reversed(node.children))
    line, column = root.start_point
    return ParseError.syntax_error(line + 1, column + 1)


def _encoding_error(source: str, error: UnicodeEncodeError) -> ParseError:
    """1-based line/column of the first unencodable character."""
    offset = error.start
    line = source.count("\n", 0, offset) + 1
    column = offset - source.rfind("\n", 0, offset)
    return ParseError.invalid_encoding(line, column, error.reason)
