"""Syntax visitors: function spans and import references per language.

Every visitor walks a tree-sitter tree and sorts nodes into a closed set of
categories:

    function-like  -> FunctionSpan (only when the node has a body)
    import-like    -> ImportRef (only for string-literal specifiers)

Name resolution for function-like nodes follows one order everywhere:
declared name, method/accessor name, constructor, enclosing variable or
property binding, then "<anonymous>".

Python relative ``from`` imports are rewritten into path-style specifiers
("./pkg/mod", "../mod") so one resolver serves every language.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from ..exceptions import ParsingError
from .models import FunctionSpan, ImportRef
from .treesitter_parser import TreeSitterParser

logger = logging.getLogger(__name__)

ANONYMOUS = "<anonymous>"


@dataclass
class FileSyntax:
    """Structural facts extracted from one file."""

    path: str
    functions: list[FunctionSpan] = field(default_factory=list)
    imports: list[ImportRef] = field(default_factory=list)


class SyntaxVisitor(Protocol):
    def visit(self, content: str, path: str) -> FileSyntax: ...


# ── JavaScript / TypeScript / TSX ────────────────────────────────────

_TS_FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

_TS_STATEMENT_SUFFIXES = ("statement", "declaration")


class TreeSitterSyntaxVisitor:
    """Walks a tree-sitter tree for the JavaScript/TypeScript family.

    Subclasses change ``function_types`` and override ``_function_name`` and
    ``_collect_imports`` for other grammars; the walk itself is shared.
    """

    function_types: frozenset[str] = _TS_FUNCTION_TYPES

    def __init__(self, parser: TreeSitterParser, language: str) -> None:
        self._parser = parser
        self._language = language

    def visit(self, content: str, path: str) -> FileSyntax:
        """Collect function spans and imports.

        Raises:
            ParsingError: If no grammar is installed for this language
        """
        code = content.encode("utf-8", errors="replace")
        syntax = FileSyntax(path=path)

        tree = self._parser.parse(code, self._language)
        if tree is None:
            raise ParsingError(path, self._language, "no grammar available")

        # explicit stack: deeply nested expressions must not hit the recursion limit
        stack = [tree.root_node]
        while stack:
            node = stack.pop()

            if node.type in self.function_types:
                if node.child_by_field_name("body") is not None:
                    syntax.functions.append(
                        FunctionSpan(
                            file=path,
                            name=self._function_name(node, code),
                            start_line=node.start_point[0] + 1,
                            end_line=node.end_point[0] + 1,
                        )
                    )
            else:
                self._collect_imports(node, code, syntax)

            stack.extend(reversed(node.children))

        return syntax

    def _collect_imports(self, node: Any, code: bytes, syntax: FileSyntax) -> None:
        if node.type in ("import_statement", "export_statement"):
            specifier = self._statement_source(node, code)
            if specifier is not None:
                syntax.imports.append(
                    ImportRef(specifier, node.start_point[0] + 1, node.end_point[0] + 1)
                )
        elif node.type == "call_expression":
            specifier = self._call_source(node, code)
            if specifier is not None:
                start, end = _enclosing_statement_lines(node)
                syntax.imports.append(ImportRef(specifier, start, end))

    def _function_name(self, node: Any, code: bytes) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return _node_text(name_node, code)

        parent = node.parent
        if parent is None:
            return ANONYMOUS

        if parent.type == "variable_declarator":
            target = parent.child_by_field_name("name")
            if target is not None and target.type == "identifier":
                return _node_text(target, code)
        elif parent.type == "pair":
            key = parent.child_by_field_name("key")
            if key is not None:
                return _node_text(key, code)
        elif parent.type in ("public_field_definition", "field_definition"):
            key = parent.child_by_field_name("name") or parent.child_by_field_name("property")
            if key is not None:
                return _node_text(key, code)

        return ANONYMOUS

    def _statement_source(self, node: Any, code: bytes) -> Optional[str]:
        source = node.child_by_field_name("source")
        if source is None:
            for child in node.named_children:
                if child.type == "import_require_clause":
                    source = child.child_by_field_name("source")
                    break
        if source is None or source.type != "string":
            return None
        return _string_value(source, code)

    def _call_source(self, node: Any, code: bytes) -> Optional[str]:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or arguments is None:
            return None

        is_require = function.type == "identifier" and _node_text(function, code) == "require"
        is_dynamic_import = function.type == "import"
        if not (is_require or is_dynamic_import):
            return None

        args = arguments.named_children
        if len(args) != 1 or args[0].type != "string":
            return None
        return _string_value(args[0], code)


# ── Python ───────────────────────────────────────────────────────────


class PythonSyntaxVisitor(TreeSitterSyntaxVisitor):
    """Python functions, lambdas and relative ``from`` imports.

    Absolute imports name installed packages, not files under the root, so
    only relative imports are collected.
    """

    function_types = frozenset({"function_definition", "lambda"})

    def __init__(self, parser: TreeSitterParser) -> None:
        super().__init__(parser, "python")

    def _function_name(self, node: Any, code: bytes) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return _node_text(name_node, code)

        parent = node.parent
        if parent is None:
            return ANONYMOUS

        if parent.type == "assignment":
            target = parent.child_by_field_name("left")
            if target is not None and target.type == "identifier":
                return _node_text(target, code)
            if target is not None and target.type == "attribute":
                attr = target.child_by_field_name("attribute")
                if attr is not None:
                    return _node_text(attr, code)
        elif parent.type == "keyword_argument":
            key = parent.child_by_field_name("name")
            if key is not None:
                return _node_text(key, code)
        elif parent.type == "pair":
            key = parent.child_by_field_name("key")
            if key is not None:
                return _string_value(key, code)

        return ANONYMOUS

    def _collect_imports(self, node: Any, code: bytes, syntax: FileSyntax) -> None:
        if node.type != "import_from_statement":
            return

        module = node.child_by_field_name("module_name")
        if module is None or module.type != "relative_import":
            return

        level = 0
        module_path = None
        for child in module.named_children:
            if child.type == "import_prefix":
                level = _node_text(child, code).count(".")
            elif child.type == "dotted_name":
                module_path = _node_text(child, code).replace(".", "/")
        if level == 0:
            return

        prefix = "./" if level == 1 else "../" * (level - 1)
        if module_path:
            specifiers = [prefix + module_path]
        else:
            specifiers = [prefix + name for name in _imported_names(node, code)]

        start, end = node.start_point[0] + 1, node.end_point[0] + 1
        for specifier in specifiers:
            syntax.imports.append(ImportRef(specifier, start, end))


def _imported_names(node: Any, code: bytes) -> list[str]:
    names = []
    for name_node in node.children_by_field_name("name"):
        if name_node.type == "aliased_import":
            name_node = name_node.child_by_field_name("name")
            if name_node is None:
                continue
        names.append(_node_text(name_node, code).replace(".", "/"))
    return names


def _node_text(node: Any, code: bytes) -> str:
    return code[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _string_value(node: Any, code: bytes) -> str:
    text = _node_text(node, code)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def _enclosing_statement_lines(node: Any) -> tuple[int, int]:
    current = node
    while current.parent is not None and current.parent.type != "program":
        if current.type.endswith(_TS_STATEMENT_SUFFIXES):
            break
        current = current.parent
    return current.start_point[0] + 1, current.end_point[0] + 1


def build_visitors() -> dict[str, SyntaxVisitor]:
    """Create one visitor per supported language name."""
    parser = TreeSitterParser()
    visitors: dict[str, SyntaxVisitor] = {
        name: TreeSitterSyntaxVisitor(parser, name) for name in ("javascript", "typescript", "tsx")
    }
    visitors["python"] = PythonSyntaxVisitor(parser)
    return visitors
