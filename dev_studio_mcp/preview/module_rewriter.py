"""
Strips ES module syntax so several files can share one script scope.

Import statements are removed. `export` and `export default` qualifiers are
removed while the declaration they qualify is kept. Re-export clauses
(`export { a }`, `export * from '...'`) are dropped.

The rewrite walks a tree-sitter JavaScript parse tree. When the source does not
parse cleanly, a line-oriented regex rewrite is used instead; it is best-effort
and can be fooled by unusual formatting or by module syntax inside strings.
"""

import logging
import re
from functools import lru_cache

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

logger = logging.getLogger(__name__)

# Anonymous default exports get a binding so the remaining expression is still a statement.
DEFAULT_EXPORT_BINDING = "var __defaultExport = "
NAMED_DEFAULT_EXPORT_TYPES = {"function", "function_expression", "generator_function", "class"}

IMPORT_RE = re.compile(
    r"""^[ \t]*import\s+(?:[\w*{}\s,$]+?\s+from\s+)?['"][^'"]+['"][ \t]*;?[ \t]*\r?\n?""",
    re.MULTILINE,
)
EXPORT_CLAUSE_RE = re.compile(
    r"""^[ \t]*export\s*(?:\*(?:\s+as\s+\w+)?|\{[^}]*\})(?:\s*from\s*['"][^'"]+['"])?[ \t]*;?[ \t]*\r?\n?""",
    re.MULTILINE,
)
EXPORT_DEFAULT_RE = re.compile(r"^([ \t]*)export\s+default\s+", re.MULTILINE)
EXPORT_NAMED_RE = re.compile(
    r"^([ \t]*)export\s+(?=(?:async\s+)?(?:function|class|const|let|var)\b)",
    re.MULTILINE,
)


@lru_cache(maxsize=1)
def _get_parser() -> Parser:
    """Lazy-loads the tree-sitter JavaScript parser (JSX included)."""
    return Parser(Language(tree_sitter_javascript.language()))


def strip_module_syntax(source: str) -> str:
    """Rewrite `source` so it no longer uses import/export syntax."""
    source_bytes = source.encode("utf-8")
    tree = _get_parser().parse(source_bytes)
    if tree.root_node.has_error:
        logger.debug("Source has parse errors, using regex module rewrite")
        return strip_module_syntax_regex(source)

    edits: list[tuple[int, int, bytes]] = []
    for node in tree.root_node.children:
        if node.type == "import_statement":
            edits.append((node.start_byte, _end_with_newline(node, source_bytes), b""))
        elif node.type == "export_statement":
            edits.append(_export_edit(node, source_bytes))

    rewritten = source_bytes
    for start, end, replacement in sorted(edits, reverse=True):
        rewritten = rewritten[:start] + replacement + rewritten[end:]
    return rewritten.decode("utf-8")


def strip_module_syntax_regex(source: str) -> str:
    """Best-effort fallback used when the source cannot be parsed."""
    result = IMPORT_RE.sub("", source)
    result = EXPORT_CLAUSE_RE.sub("", result)
    result = EXPORT_DEFAULT_RE.sub(r"\1", result)
    return EXPORT_NAMED_RE.sub(r"\1", result)


def _export_edit(node: Node, source_bytes: bytes) -> tuple[int, int, bytes]:
    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        return node.start_byte, declaration.start_byte, b""

    value = node.child_by_field_name("value")
    if value is not None:
        # `export default App;` and named `export default function App() {}` keep their names.
        if value.type == "identifier" or (
            value.type in NAMED_DEFAULT_EXPORT_TYPES and value.child_by_field_name("name") is not None
        ):
            return node.start_byte, value.start_byte, b""
        return node.start_byte, value.start_byte, DEFAULT_EXPORT_BINDING.encode("utf-8")

    # export { a, b } / export * from '...'
    return node.start_byte, _end_with_newline(node, source_bytes), b""


def _end_with_newline(node: Node, source_bytes: bytes) -> int:
    end = node.end_byte
    if source_bytes[end:end + 2] == b"\r\n":
        return end + 2
    if source_bytes[end:end + 1] == b"\n":
        return end + 1
    return end
