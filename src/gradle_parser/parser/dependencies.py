# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency notation parser.

Interprets one statement of a ``dependencies { }`` block. The statement name
is the scope (configuration); its arguments hold one or more notations:

- shorthand strings: ``'group:name'``, ``'group:name:version'``,
  ``'group:name:version:classifier'``, each with an optional ``@ext`` suffix;
- named arguments: ``group: 'g', name: 'n', version: 'v'`` (Groovy) or
  ``group = "g", name = "n"`` (Kotlin);
- project references: ``project(':core')`` or ``project(path: ':core')``;
- the wrappers ``platform(...)``, ``enforcedPlatform(...)`` and
  ``testFixtures(...)``, and the Kotlin ``kotlin("stdlib")`` shorthand.

Shorthand policy: one colon yields ``group:name`` with no version. A string
without colons is taken as a file name (``name`` only) when it looks like a
path, otherwise it is rejected. Rejected notations produce a warning and a
record with only ``raw`` and ``scope`` populated.
"""

import logging
from dataclasses import dataclass

from gradle_parser.model.entities import Dependency
from gradle_parser.parser.blocks import Diagnostics, Statement
from gradle_parser.parser.expressions import (
    boolean_value,
    literal_text,
    named_argument,
    named_arguments,
    source_text,
    split_arguments,
    split_call,
    string_token,
    unwrap_parens,
)
from gradle_parser.parser.lexer import Token, TokenType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

KOTLIN_GROUP = "org.jetbrains.kotlin"


@dataclass
class DependencyDeclaration:
    """A parsed dependency with the raw offsets the source tracker needs.

    Attributes:
        dependency: The model element.
        start: Offset of the first character of the declaration.
        end: Offset one past the declaration, excluding trailing comments.
        version_span: ``(start, end)`` of the version text without quotes.
        version_insert_offset: Insertion point for ``:<version>`` in a
            shorthand string that has none.
    """

    dependency: Dependency
    start: int
    end: int
    version_span: tuple[int, int] | None = None
    version_insert_offset: int | None = None


def parse_dependency_statement(stmt: Statement, source: str, diagnostics: Diagnostics) -> list[DependencyDeclaration]:
    """Parse one statement of a ``dependencies`` block.

    Args:
        stmt: The statement to interpret.
        source: The full script text.
        diagnostics: Receives warnings for anything that is not understood.

    Returns:
        One declaration per notation. Statements that are not dependency
        declarations yield an empty list (and a warning, except for nested
        ``constraints`` blocks).
    """
    scope, args = _scope_and_arguments(stmt)
    if scope == "constraints":
        return []
    if not scope or "." in scope or stmt.is_assignment:
        diagnostics.warn(f"Unsupported statement in dependencies block: {_head_text(stmt, source)}", stmt.first_token)
        return []
    args = unwrap_parens(args)
    if not args:
        diagnostics.warn(f"Dependency declaration without notation: {scope}", stmt.first_token)
        return []

    transitive = _transitive_flag(stmt)
    parts = split_arguments(args)
    builder = _NotationParser(source, scope, transitive, diagnostics)

    if any(named_argument(part) is not None for part in parts):
        decls = [builder.from_named(parts, args)]
    else:
        decls = [builder.from_expression(part) for part in parts]

    if len(decls) == 1:
        decls[0].start = stmt.start
        decls[0].end = stmt.end
    logger.debug("Parsed %d dependency notation(s) for scope %s", len(decls), scope)
    return decls


def is_path_notation(text: str) -> bool:
    """True when a colon-free notation looks like a file path."""
    return "/" in text or "\\" in text or text.endswith((".jar", ".aar", ".zip"))


# ################
# Implementation
# ################

_PASS_THROUGH_WRAPPERS: frozenset[str] = frozenset({"platform", "enforcedPlatform", "testFixtures"})


def _scope_and_arguments(stmt: Statement) -> tuple[str, list[Token]]:
    """Return the scope name and its argument tokens.

    Besides ``implementation ...`` this accepts the Kotlin string-invoke form
    ``"implementation"("g:n:v")`` used for configurations with unusual names.
    """
    tokens = stmt.tokens
    if len(tokens) >= 2 and tokens[0].type == TokenType.STRING and tokens[1].type == TokenType.LPAREN:
        return tokens[0].value, tokens[1:]
    return stmt.name, stmt.arguments


def _head_text(stmt: Statement, source: str) -> str:
    if stmt.tokens:
        return source_text(source, stmt.tokens)
    return "{ ... }"


def _transitive_flag(stmt: Statement) -> bool:
    """Read ``transitive = false`` / ``isTransitive = false`` from the configuration closure."""
    body = stmt.body
    if body is None:
        return True
    transitive = True
    for inner in body.statements:
        if inner.name in ("transitive", "isTransitive"):
            value = boolean_value(inner.value_tokens if inner.is_assignment else inner.arguments)
            if value is not None:
                transitive = value
    return transitive


class _NotationParser:
    """Builds DependencyDeclarations for one statement."""

    def __init__(self, source: str, scope: str, transitive: bool, diagnostics: Diagnostics) -> None:
        self._source = source
        self._scope = scope
        self._transitive = transitive
        self._diagnostics = diagnostics

    def from_expression(self, tokens: list[Token]) -> DependencyDeclaration:
        """Interpret a single positional notation."""
        start, end = tokens[0].offset, tokens[-1].end
        expr = unwrap_parens(tokens)
        raw = literal_text(self._source, expr)

        tok = string_token(expr)
        if tok is not None:
            return self._from_shorthand(tok, start, end)

        call = split_call(expr)
        if call is not None:
            callee, inner = call
            inner_parts = split_arguments(inner)
            if callee in _PASS_THROUGH_WRAPPERS and inner_parts:
                if any(named_argument(part) is not None for part in inner_parts):
                    decl = self.from_named(inner_parts, inner)
                else:
                    decl = self.from_expression(inner_parts[0])
                decl.start, decl.end = start, end
                return decl
            if callee == "project" and inner_parts:
                return self._from_project(inner_parts, raw, start, end)
            if callee == "kotlin" and inner_parts:
                kotlin = self._from_kotlin(inner_parts, raw, start, end)
                if kotlin is not None:
                    return kotlin

        return self._unrecognized(raw, tokens[0], start, end)

    def from_named(self, parts: list[list[Token]], tokens: list[Token]) -> DependencyDeclaration:
        """Interpret ``group: 'g', name: 'n', version: 'v'`` style notations."""
        start, end = tokens[0].offset, tokens[-1].end
        raw = source_text(self._source, tokens)
        named = named_arguments(parts)
        if named is None:
            return self._unrecognized(raw, tokens[0], start, end)

        fields: dict[str, str] = {}
        for key in ("group", "name", "version", "classifier", "ext"):
            if key in named:
                fields[key] = literal_text(self._source, named[key])
        transitive = self._transitive
        if "transitive" in named:
            flag = boolean_value(named["transitive"])
            if flag is not None:
                transitive = flag

        version_span = None
        version_tok = string_token(named["version"]) if "version" in named else None
        if version_tok is not None:
            version_span = (version_tok.content_offset, version_tok.content_end)

        dependency = Dependency(
            group=fields.get("group", ""),
            name=fields.get("name", ""),
            version=fields.get("version", ""),
            classifier=fields.get("classifier", ""),
            extension=fields.get("ext", ""),
            scope=self._scope,
            transitive=transitive,
            raw=raw,
        )
        if not dependency.is_valid:
            self._diagnostics.warn(f"Dependency without group or name: {raw}", tokens[0])
        return DependencyDeclaration(dependency, start, end, version_span=version_span)

    # ------------------------------------------------------------------
    # Notation forms
    # ------------------------------------------------------------------

    def _from_shorthand(self, tok: Token, start: int, end: int) -> DependencyDeclaration:
        text = tok.value
        base = tok.content_offset
        body, _, extension = text.partition("@")
        segments = body.split(":")

        if len(segments) == 1:
            if is_path_notation(text):
                return DependencyDeclaration(self._dependency(name=text, raw=text), start, end)
            return self._unrecognized(text, tok, start, end)
        if len(segments) > 4 or not segments[0] or not segments[1]:
            return self._unrecognized(text, tok, start, end)

        group, name = segments[0], segments[1]
        version = segments[2] if len(segments) > 2 else ""
        classifier = segments[3] if len(segments) > 3 else ""
        name_end = base + len(group) + 1 + len(name)

        version_span = None
        insert_offset = None
        if len(segments) > 2:
            version_span = (name_end + 1, name_end + 1 + len(version))
        else:
            insert_offset = name_end

        dependency = self._dependency(
            group=group,
            name=name,
            version=version,
            classifier=classifier,
            extension=extension,
            raw=text,
        )
        return DependencyDeclaration(
            dependency,
            start,
            end,
            version_span=version_span,
            version_insert_offset=insert_offset,
        )

    def _from_project(self, parts: list[list[Token]], raw: str, start: int, end: int) -> DependencyDeclaration:
        named = named_arguments(parts)
        path_tokens = named.get("path") if named is not None else parts[0]
        if not path_tokens:
            return self._unrecognized(raw, parts[0][0], start, end)
        path = literal_text(self._source, path_tokens)
        dependency = self._dependency(name=path.lstrip(":"), raw=raw, is_project=True)
        return DependencyDeclaration(dependency, start, end)

    def _from_kotlin(self, parts: list[list[Token]], raw: str, start: int, end: int) -> DependencyDeclaration | None:
        module_tok = string_token(parts[0])
        if module_tok is None:
            return None
        version = ""
        version_span = None
        if len(parts) > 1:
            version_tok = string_token(parts[1])
            if version_tok is not None:
                version = version_tok.value
                version_span = (version_tok.content_offset, version_tok.content_end)
            else:
                version = literal_text(self._source, parts[1])
        dependency = self._dependency(
            group=KOTLIN_GROUP,
            name=f"kotlin-{module_tok.value}",
            version=version,
            raw=raw,
        )
        return DependencyDeclaration(dependency, start, end, version_span=version_span)

    def _unrecognized(self, raw: str, tok: Token, start: int, end: int) -> DependencyDeclaration:
        self._diagnostics.warn(f"Unrecognized dependency notation: {raw}", tok)
        return DependencyDeclaration(self._dependency(raw=raw), start, end)

    def _dependency(self, **fields: object) -> Dependency:
        return Dependency(scope=self._scope, transitive=self._transitive, **fields)
