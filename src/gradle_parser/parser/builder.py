# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model builder: turns a statement tree into a Project.

Walks the top-level statements of a parsed script, dispatches the well-known
blocks (``plugins``, ``dependencies``, ``repositories``, ``buildscript``,
``ext``, ``tasks``, ``java``) to their sub-parsers and keeps every other named
block as an opaque snippet in ``Project.extensions``.

Alongside the project the builder returns the raw offsets of every element it
recognised, which the source-position tracker turns into locations.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from gradle_parser.model.entities import Project, Task
from gradle_parser.parser.blocks import Block, Diagnostics, Script, Statement, StatementError
from gradle_parser.parser.dependencies import DependencyDeclaration, parse_dependency_statement
from gradle_parser.parser.expressions import (
    block_text,
    literal_text,
    split_arguments,
    split_call,
    string_token,
    unwrap_parens,
)
from gradle_parser.parser.lexer import Token, TokenType
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.plugins import PluginDeclaration, parse_apply_statement, parse_plugin_statement
from gradle_parser.parser.repositories import RepositoryDeclaration, parse_repository_statement
from gradle_parser.parser.tasks import is_task_statement, parse_task_statement

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

PROJECT_FIELDS: dict[str, str] = {
    "group": "group",
    "version": "version",
    "description": "description",
    "sourceCompatibility": "source_compatibility",
    "targetCompatibility": "target_compatibility",
}


@dataclass
class PropertyDeclaration:
    """A property or project-field assignment with its raw offsets.

    Attributes:
        key: Property name with ``project.``/``ext.`` prefixes removed.
        value: The string value, or the expression text for non-literals.
        start: Offset of the statement start.
        end: Offset of the statement end, excluding trailing comments.
        value_span: ``(start, end)`` of the value; excludes quotes when
            ``quoted`` is True.
        quoted: Whether the value is a string literal.
    """

    key: str
    value: str
    start: int
    end: int
    value_span: tuple[int, int]
    quoted: bool


@dataclass
class BuildOutput:
    """The assembled project plus the declarations it was built from."""

    project: Project
    dependencies: list[DependencyDeclaration] = field(default_factory=list)
    plugins: list[PluginDeclaration] = field(default_factory=list)
    repositories: list[RepositoryDeclaration] = field(default_factory=list)
    properties: list[PropertyDeclaration] = field(default_factory=list)
    dependency_blocks: list[Statement] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def build_project(script: Script, options: ParserOptions | None = None) -> BuildOutput:
    """Build a Project from a parsed script.

    Args:
        script: The statement tree produced by ``parse_script``.
        options: Feature flags. Disabled extractions leave the matching
            collection empty without running the sub-parser.

    Returns:
        A BuildOutput whose ``warnings`` include the script's structural
        warnings followed by every statement-level warning.
    """
    return _Builder(script, options or ParserOptions()).build()


# ################
# Implementation
# ################

_CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {"if", "else", "for", "while", "do", "try", "catch", "finally", "switch", "when", "import", "package", "return"}
)

_LOCAL_DECLARATIONS: frozenset[str] = frozenset({"def", "val", "var"})

_EXTRA_NAMES: frozenset[str] = frozenset({"ext", "extra", "project.ext", "project.extra"})

_COMPATIBILITY_KEYS: frozenset[str] = frozenset({"sourceCompatibility", "targetCompatibility"})


class _Builder:
    """Single-use walker collecting the model of one script."""

    def __init__(self, script: Script, options: ParserOptions) -> None:
        self._source = script.source
        self._root = script.root
        self._options = options
        self._comments: list[Token] | None = script.comments if options.skip_comments else None
        self._diagnostics = Diagnostics(list(script.warnings))
        self._fields: dict[str, str] = {}
        self._properties: dict[str, str] = {}
        self._extensions: dict[str, Any] = {}
        self._tasks: list[Task] = []
        self._dependencies: list[DependencyDeclaration] = []
        self._plugins: list[PluginDeclaration] = []
        self._repositories: list[RepositoryDeclaration] = []
        self._property_decls: list[PropertyDeclaration] = []
        self._dependency_blocks: list[Statement] = []

    def build(self) -> BuildOutput:
        for stmt in self._root.statements:
            self._visit_top_level(stmt)

        project = Project(
            **self._fields,
            properties=self._properties,
            plugins=[decl.plugin for decl in self._plugins],
            dependencies=[decl.dependency for decl in self._dependencies],
            repositories=[decl.repository for decl in self._repositories],
            tasks=self._tasks,
            extensions=self._extensions,
        )
        logger.debug(
            "Built project: %d plugins, %d dependencies, %d repositories, %d tasks",
            len(project.plugins),
            len(project.dependencies),
            len(project.repositories),
            len(project.tasks),
        )
        return BuildOutput(
            project=project,
            dependencies=self._dependencies,
            plugins=self._plugins,
            repositories=self._repositories,
            properties=self._property_decls,
            dependency_blocks=self._dependency_blocks,
            warnings=self._diagnostics.warnings,
        )

    # ------------------------------------------------------------------
    # Top-level dispatch
    # ------------------------------------------------------------------

    def _visit_top_level(self, stmt: Statement) -> None:
        name = stmt.name
        body = stmt.body
        if not name or name in _CONTROL_KEYWORDS:
            return
        if body is not None and not stmt.arguments:
            if name == "plugins":
                self._visit_plugins(body)
                return
            if name == "dependencies":
                self._dependency_blocks.append(stmt)
                self._visit_dependencies(body)
                return
            if name == "repositories":
                self._visit_repositories(body)
                return
            if name == "buildscript":
                self._visit_buildscript(body)
                return
            if name == "tasks":
                self._visit_task_container(body)
                return
        if name == "apply":
            self._visit_apply(stmt)
            return
        if self._visit_property(stmt):
            return
        if is_task_statement(stmt):
            self._visit_task(stmt, in_container=False)
            return
        if body is not None:
            if name == "java":
                self._visit_java(body)
            self._add_extension(name, body)

    # ------------------------------------------------------------------
    # Well-known blocks
    # ------------------------------------------------------------------

    def _visit_plugins(self, body: Block) -> None:
        if not self._options.parse_plugins:
            return
        for stmt in body.statements:
            try:
                self._plugins.append(parse_plugin_statement(stmt, self._source))
            except StatementError as exc:
                self._diagnostics.warn(exc.message, exc.token)

    def _visit_apply(self, stmt: Statement) -> None:
        if not self._options.parse_plugins:
            return
        decl = parse_apply_statement(stmt, self._source)
        if decl is not None:
            self._plugins.append(decl)

    def _visit_dependencies(self, body: Block) -> None:
        if not self._options.parse_dependencies:
            return
        for stmt in body.statements:
            self._dependencies.extend(parse_dependency_statement(stmt, self._source, self._diagnostics))

    def _visit_repositories(self, body: Block) -> None:
        if not self._options.parse_repositories:
            return
        for stmt in body.statements:
            decl = parse_repository_statement(stmt, self._source, self._diagnostics)
            if decl is not None:
                self._repositories.append(decl)

    def _visit_buildscript(self, body: Block) -> None:
        """Read ``buildscript`` dependencies (scope ``classpath``) and ``ext`` properties."""
        for stmt in body.statements:
            if stmt.name == "dependencies" and stmt.body is not None:
                self._visit_dependencies(stmt.body)
            elif stmt.name != "repositories":
                self._visit_property(stmt)

    def _visit_task_container(self, body: Block) -> None:
        for stmt in body.statements:
            if is_task_statement(stmt, in_container=True):
                self._visit_task(stmt, in_container=True)

    def _visit_task(self, stmt: Statement, in_container: bool) -> None:
        if not self._options.parse_tasks:
            return
        try:
            decl = parse_task_statement(stmt, self._source, self._comments, in_container=in_container)
        except StatementError as exc:
            self._diagnostics.warn(exc.message, exc.token)
            return
        if decl is not None:
            self._tasks.append(decl.task)

    def _visit_java(self, body: Block) -> None:
        for stmt in body.statements:
            if stmt.name in _COMPATIBILITY_KEYS:
                self._record(stmt.name, stmt.value_tokens if stmt.is_assignment else stmt.arguments, stmt)

    def _add_extension(self, name: str, body: Block) -> None:
        text = block_text(self._source, body, self._comments)
        existing = self._extensions.get(name)
        if existing is None:
            self._extensions[name] = text
        elif isinstance(existing, list):
            existing.append(text)
        else:
            self._extensions[name] = [existing, text]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def _visit_property(self, stmt: Statement) -> bool:
        """Record ``ext``/``extra`` entries, local declarations and assignments.

        Returns:
            True if the statement was consumed as a property.
        """
        name = stmt.name
        if name in _EXTRA_NAMES and stmt.body is not None and not stmt.arguments:
            for inner in stmt.body.statements:
                self._visit_extra_entry(inner)
            return True
        if name in _LOCAL_DECLARATIONS:
            self._visit_local(stmt)
            return True
        if self._visit_extra_entry(stmt, prefixed=True):
            return True
        if stmt.is_assignment:
            key = _strip_prefixes(name)
            self._record(key, stmt.value_tokens, stmt)
            return True
        key = _strip_prefixes(name)
        args = stmt.arguments
        if (
            key in PROJECT_FIELDS
            and stmt.body is None
            and args
            and args[0].type in (TokenType.STRING, TokenType.LPAREN)
            and len(split_arguments(unwrap_parens(args))) == 1
        ):
            self._record(key, args, stmt)
            return True
        return False

    def _visit_extra_entry(self, stmt: Statement, prefixed: bool = False) -> bool:
        """Handle ``set("k", v)``, ``["k"] = v`` and ``k = v`` forms of extra properties.

        With *prefixed* the statement must name the extra container itself
        (``ext.set(...)``, ``extra["k"] = v``); otherwise it is a statement
        inside an ``ext { }`` block.
        """
        name = stmt.name
        tokens = stmt.tokens
        container = name.rsplit(".", 1)[0] if name.endswith(".set") else ""
        if (prefixed and container in _EXTRA_NAMES) or (not prefixed and name == "set"):
            parts = split_arguments(unwrap_parens(stmt.arguments))
            if len(parts) == 2:
                self._record(literal_text(self._source, parts[0]), parts[1], stmt)
                return True
            return False
        if (prefixed and name in _EXTRA_NAMES) or (not prefixed and not name):
            index = stmt.name_length
            if (
                len(tokens) > index + 4
                and tokens[index].type == TokenType.LBRACKET
                and tokens[index + 1].type == TokenType.STRING
                and tokens[index + 2].type == TokenType.RBRACKET
                and tokens[index + 3].type == TokenType.EQUALS
            ):
                self._record(tokens[index + 1].value, tokens[index + 4 :], stmt)
                return True
            return False
        if not prefixed and stmt.is_assignment:
            self._record(name, stmt.value_tokens, stmt)
            return True
        return False

    def _visit_local(self, stmt: Statement) -> None:
        """Record ``def x = v``, ``val x = v``, ``val x: T = v`` and ``val x by extra(v)``."""
        tokens = stmt.tokens
        if len(tokens) < 3 or tokens[1].type != TokenType.IDENTIFIER:
            return
        key = tokens[1].value
        if tokens[2].type == TokenType.IDENTIFIER and tokens[2].value == "by":
            call = split_call(tokens[3:])
            if call is not None and call[0] == "extra" and call[1]:
                self._record(key, call[1], stmt)
            return
        equals = next((i for i, tok in enumerate(tokens) if tok.type == TokenType.EQUALS), None)
        if equals is not None and equals + 1 < len(tokens):
            self._record(key, tokens[equals + 1 :], stmt)

    def _record(self, key: str, value_tokens: list[Token], stmt: Statement) -> None:
        """Store a property or project field and remember where its value sits."""
        if not key or not value_tokens:
            return
        tok = string_token(value_tokens)
        if tok is not None:
            value = tok.value
            span = (tok.content_offset, tok.content_end)
            quoted = True
        else:
            inner = unwrap_parens(value_tokens)
            if not inner:
                return
            end = inner[-1].end
            if inner is value_tokens and stmt.tokens and inner[-1] is stmt.tokens[-1]:
                end = stmt.end
            span = (inner[0].offset, end)
            value = self._source[span[0] : span[1]]
            quoted = False

        attr = PROJECT_FIELDS.get(key)
        if attr is not None:
            self._fields[attr] = value
        else:
            self._properties[key] = value
        self._property_decls.append(
            PropertyDeclaration(key=key, value=value, start=stmt.start, end=stmt.end, value_span=span, quoted=quoted)
        )


def _strip_prefixes(name: str) -> str:
    """Map ``project.x``, ``ext.x``, ``extra.x`` and ``java.sourceCompatibility`` to the bare key."""
    for prefix in ("project.", "ext.", "extra."):
        if name.startswith(prefix):
            name = name[len(prefix) :]
    if name.startswith("java.") and name[len("java.") :] in _COMPATIBILITY_KEYS:
        name = name[len("java.") :]
    return name
