# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structured, minimal-diff editing of Gradle build scripts.

The editor never re-serializes a project. It re-parses the text with source
positions, locates the targeted declaration and splices new text into the
recorded span only, leaving every other character of the document as it was.
"""

import enum
import logging

from gradle_parser.editor.errors import (
    AmbiguousMatchError,
    DependencyExistsError,
    EditorError,
    ElementNotFoundError,
    UnsupportedEditError,
)
from gradle_parser.editor.serializer import Modification, ModificationKind, apply_modifications
from gradle_parser.model.entities import Dependency
from gradle_parser.model.source import SourceLocation, SourceMappedBlock, SourceMappedDependency, SourceMappedProject
from gradle_parser.parser.blocks import Block, Statement, parse_script
from gradle_parser.parser.lexer import TokenType
from gradle_parser.parser.source_aware import LineIndex, SourceAwareParser

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_SCOPE = "implementation"


class Dialect(enum.Enum):
    """Build-script syntax used for inserted declarations."""

    GROOVY = "groovy"
    KOTLIN = "kotlin"


class GradleEditor:
    """Queues modifications against one source-mapped project.

    Each ``update_*``/``add_*`` call validates the request, appends the
    resulting modifications and returns them. :meth:`apply` produces the new
    text; the project and its original text are never changed.

    Args:
        project: The source-mapped project to edit.
    """

    def __init__(self, project: SourceMappedProject) -> None:
        self._project = project
        self._text = project.original_text
        self._index = LineIndex(self._text)
        self._modifications: list[Modification] = []

    @classmethod
    def from_text(cls, text: str, parser: SourceAwareParser | None = None) -> "GradleEditor":
        """Parse *text* with source positions and return an editor over it.

        Raises:
            LexerError: On unterminated literals or comments.
            ParseError: On unmatched braces.
        """
        mapped = (parser or SourceAwareParser()).parse_with_source_mapping(text)
        return cls(mapped.source_mapped_project)

    @property
    def project(self) -> SourceMappedProject:
        return self._project

    @property
    def modifications(self) -> list[Modification]:
        return list(self._modifications)

    def clear_modifications(self) -> None:
        self._modifications.clear()

    def apply(self) -> str:
        """Return the original text with all queued modifications applied.

        Raises:
            ModificationError: If queued modifications overlap.
        """
        return apply_modifications(self._text, self._modifications)

    # ------------------------------------------------------------------
    # Version updates
    # ------------------------------------------------------------------

    def update_dependency_version(
        self,
        group: str,
        name: str,
        new_version: str,
        *,
        scope: str | None = None,
        all_matches: bool = False,
    ) -> list[Modification]:
        """Set the version of the dependency ``group:name``.

        Args:
            group: Dependency group.
            name: Dependency name.
            new_version: The version to write.
            scope: Only consider declarations in this configuration.
            all_matches: Update every matching declaration instead of
                failing when there is more than one.

        Returns:
            The queued modifications. Declarations that already carry
            *new_version* produce none.

        Raises:
            ElementNotFoundError: If nothing matches.
            AmbiguousMatchError: If several declarations match and neither
                *scope* nor *all_matches* narrows them down.
            UnsupportedEditError: If a match has no version and no place to
                insert one (named arguments, project references).
        """
        matches = self._project.find_dependencies(group, name, scope)
        label = f"{group}:{name}" + (f" in scope {scope!r}" if scope else "")
        if not matches:
            raise ElementNotFoundError(f"Dependency {label} not found")
        if len(matches) > 1 and not all_matches:
            raise AmbiguousMatchError(f"Dependency {label} is declared {len(matches)} times", len(matches))

        added: list[Modification] = []
        for mapped in matches:
            mod = self._version_modification(mapped, new_version, label)
            if mod is not None:
                added.append(mod)
        self._modifications.extend(added)
        return added

    def update_plugin_version(self, plugin_id: str, new_version: str) -> list[Modification]:
        """Set the version of plugin *plugin_id*.

        Raises:
            ElementNotFoundError: If the plugin is not declared.
            AmbiguousMatchError: If it is declared more than once.
            UnsupportedEditError: If it has no version and its id is not a
                quoted literal that a ``version`` clause could follow.
        """
        matches = self._project.find_plugins(plugin_id)
        if not matches:
            raise ElementNotFoundError(f"Plugin {plugin_id} not found")
        if len(matches) > 1:
            raise AmbiguousMatchError(f"Plugin {plugin_id} is declared {len(matches)} times", len(matches))
        mapped = matches[0]
        description = f"Update plugin {plugin_id} to {new_version}"
        if mapped.version_location is not None:
            mod = self._replace(mapped.version_location, new_version, description)
        elif mapped.version_insert_offset is not None:
            quote = mapped.quote if mapped.quote in ("'", '"') else '"'
            mod = self._insert(mapped.version_insert_offset, f" version {quote}{new_version}{quote}", description)
        else:
            raise UnsupportedEditError(f"Plugin {plugin_id} has no version that can be updated")
        return self._queue(mod)

    def update_property(self, key: str, value: str) -> list[Modification]:
        """Set the value of property (or project field) *key*.

        The last assignment of *key* is edited. A string literal keeps its
        quotes; a non-literal expression is replaced by a quoted string.

        Raises:
            ElementNotFoundError: If *key* is never assigned.
        """
        mapped = self._project.find_property_by_key(key)
        if mapped is None:
            raise ElementNotFoundError(f"Property {key} not found")
        description = f"Update property {key} to {value}"
        if mapped.quoted:
            return self._queue(self._replace(mapped.value_location, value, description))
        _, quote = self._style(None)
        return self._queue(self._replace(mapped.value_location, f"{quote}{value}{quote}", description))

    # ------------------------------------------------------------------
    # Adding dependencies
    # ------------------------------------------------------------------

    def add_dependency(
        self,
        scope: str,
        dependency: Dependency | str,
        *,
        dialect: Dialect | None = None,
    ) -> list[Modification]:
        """Declare a new dependency in *scope*.

        The declaration goes after the last entry of the same scope in the
        first top-level ``dependencies`` block, else before that block's
        closing brace, else into a new block appended to the document.

        Args:
            scope: Configuration name, e.g. ``implementation``.
            dependency: A Dependency or a ``group:name[:version]`` string.
            dialect: Syntax to use. By default it follows the existing
                declarations of the document.

        Raises:
            EditorError: If the dependency lacks a group or a name.
            DependencyExistsError: If ``group:name`` is already declared in *scope*.
        """
        dep = _coerce_dependency(dependency)
        scope = scope or DEFAULT_SCOPE
        if not dep.group or not dep.name:
            raise EditorError(f"Dependency {dep.coordinates!r} needs both a group and a name")
        if self._project.find_dependencies(dep.group, dep.name, scope):
            raise DependencyExistsError(f"Dependency {dep.group}:{dep.name} already declared in scope {scope!r}")

        call_syntax, quote = self._style(dialect)
        notation = f"{quote}{_notation(dep)}{quote}"
        declaration = f"{scope}({notation})" if call_syntax else f"{scope} {notation}"
        description = f"Add {scope} dependency {_notation(dep)}"

        blocks = self._project.dependency_blocks
        if not blocks:
            mod = self._append_block(declaration, description)
        else:
            mod = self._insert_into_block(blocks[0], scope, declaration, description)
        return self._queue(mod)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _version_modification(
        self, mapped: SourceMappedDependency, new_version: str, label: str
    ) -> Modification | None:
        description = f"Update {label} to {new_version}"
        if mapped.version_location is not None:
            if self._project.get_text_range(mapped.version_location) == new_version:
                return None
            return self._replace(mapped.version_location, new_version, description)
        if mapped.version_insert_offset is not None:
            return self._insert(mapped.version_insert_offset, f":{new_version}", description)
        raise UnsupportedEditError(f"Dependency {label} has no version that can be updated")

    def _replace(self, location: SourceLocation, new_text: str, description: str) -> Modification | None:
        start, end = location.start.offset, location.end.offset
        old_text = self._text[start:end]
        if old_text == new_text:
            return None
        return Modification(
            kind=ModificationKind.REPLACE,
            start=start,
            end=end,
            old_text=old_text,
            new_text=new_text,
            description=description,
            line=location.start.line,
        )

    def _insert(self, offset: int, new_text: str, description: str) -> Modification:
        return Modification(
            kind=ModificationKind.INSERT,
            start=offset,
            end=offset,
            old_text="",
            new_text=new_text,
            description=description,
            line=self._index.position(offset).line,
        )

    def _queue(self, mod: Modification | None) -> list[Modification]:
        if mod is None:
            return []
        logger.debug("Queued modification: %s", mod.description)
        self._modifications.append(mod)
        return [mod]

    def _style(self, dialect: Dialect | None) -> tuple[bool, str]:
        """Return ``(call_syntax, quote)`` for new declarations.

        An explicit dialect wins; otherwise the first existing dependency
        decides, then the plugin declarations, then the file extension.
        """
        if dialect == Dialect.KOTLIN:
            return True, '"'
        existing = self._project.dependencies
        if existing:
            mapped = existing[0]
            quote = _first_quote(mapped.raw_text) or "'"
            if dialect == Dialect.GROOVY:
                return False, quote
            return self._uses_call_syntax(mapped), quote
        if dialect == Dialect.GROOVY:
            return False, "'"
        for plugin in self._project.plugins:
            if "(" in plugin.raw_text:
                return True, _first_quote(plugin.raw_text) or '"'
        if self._project.plugins:
            return False, _first_quote(self._project.plugins[0].raw_text) or "'"
        if self._project.project.file_path.endswith(".kts"):
            return True, '"'
        return False, "'"

    def _uses_call_syntax(self, mapped: SourceMappedDependency) -> bool:
        """Return True if the statement declaring *mapped* puts a ``(`` right after its scope.

        Covers ``implementation(...)`` as well as ``"implementation"(...)``,
        and statements that declare several notations at once.
        """
        stmt = _statement_at(parse_script(self._text).root, mapped.location.start.offset)
        if stmt is None:
            return False
        scope_length = stmt.name_length
        if scope_length == 0 and stmt.tokens and stmt.tokens[0].type == TokenType.STRING:
            scope_length = 1
        return len(stmt.tokens) > scope_length > 0 and stmt.tokens[scope_length].type == TokenType.LPAREN

    def _newline(self) -> str:
        return "\r\n" if "\r\n" in self._text else "\n"

    def _line_indent(self, offset: int) -> str:
        line_start = self._text.rfind("\n", 0, offset) + 1
        line = self._text[line_start:offset]
        return line[: len(line) - len(line.lstrip())]

    def _insert_into_block(
        self, block: SourceMappedBlock, scope: str, declaration: str, description: str
    ) -> Modification | None:
        nl = self._newline()
        entries = [
            mapped
            for mapped in self._project.dependencies
            if block.body_start <= mapped.location.start.offset < block.body_end
        ]
        same_scope = [mapped for mapped in entries if mapped.dependency.scope == scope]
        brace_indent = self._line_indent(block.location.start.offset)
        if same_scope:
            anchor = max(same_scope, key=lambda m: m.location.end.offset)
            anchor_end = anchor.location.end.offset
            if "\n" in self._text[block.location.start.offset : anchor.location.start.offset]:
                indent = self._line_indent(anchor.location.start.offset)
            else:
                indent = brace_indent + "    "
            eol = self._text.find("\n", anchor_end, block.body_end)
            if eol != -1:
                if self._text[eol - 1] == "\r":
                    eol -= 1
                return self._insert(eol, f"{nl}{indent}{declaration}", description)
            # The closing brace shares the anchor's line; move it to a line of its own.
            rest = self._text[anchor_end : block.body_end]
            start = anchor_end + len(rest.rstrip())
            location = SourceLocation(
                start=self._index.position(start),
                end=self._index.position(block.body_end),
            )
            return self._replace(location, f"{nl}{indent}{declaration}{nl}{brace_indent}", description)

        indent = self._line_indent(entries[0].location.start.offset) if entries else brace_indent + "    "
        body = self._text[block.body_start : block.body_end]
        if not body.strip():
            location = SourceLocation(
                start=self._index.position(block.body_start),
                end=self._index.position(block.body_end),
            )
            return self._replace(location, f"{nl}{indent}{declaration}{nl}{brace_indent}", description)

        line_start = self._text.rfind("\n", 0, block.body_end) + 1
        if not self._text[line_start : block.body_end].strip():
            return self._insert(line_start, f"{indent}{declaration}{nl}", description)
        return self._insert(block.body_end, f"{nl}{indent}{declaration}{nl}{brace_indent}", description)

    def _append_block(self, declaration: str, description: str) -> Modification:
        nl = self._newline()
        text = self._text
        prefix = ""
        if text:
            prefix = nl if text.endswith("\n") else nl + nl
        block = f"{prefix}dependencies {{{nl}    {declaration}{nl}}}{nl}"
        return self._insert(len(text), block, description)


def update_dependency_version(
    text: str,
    group: str,
    name: str,
    new_version: str,
    *,
    scope: str | None = None,
    all_matches: bool = False,
) -> str:
    """Return *text* with the version of ``group:name`` set to *new_version*.

    See :meth:`GradleEditor.update_dependency_version` for the errors raised.
    """
    editor = GradleEditor.from_text(text)
    editor.update_dependency_version(group, name, new_version, scope=scope, all_matches=all_matches)
    return editor.apply()


def update_plugin_version(text: str, plugin_id: str, new_version: str) -> str:
    """Return *text* with the version of plugin *plugin_id* set to *new_version*."""
    editor = GradleEditor.from_text(text)
    editor.update_plugin_version(plugin_id, new_version)
    return editor.apply()


def update_property(text: str, key: str, value: str) -> str:
    """Return *text* with property *key* set to *value*."""
    editor = GradleEditor.from_text(text)
    editor.update_property(key, value)
    return editor.apply()


def add_dependency(text: str, scope: str, dependency: Dependency | str, *, dialect: Dialect | None = None) -> str:
    """Return *text* with a new dependency declared in *scope*."""
    editor = GradleEditor.from_text(text)
    editor.add_dependency(scope, dependency, dialect=dialect)
    return editor.apply()


# ################
# Implementation
# ################


def _coerce_dependency(dependency: Dependency | str) -> Dependency:
    if isinstance(dependency, Dependency):
        return dependency
    body, _, extension = dependency.partition("@")
    segments = body.split(":")
    fields = dict(zip(("group", "name", "version", "classifier"), segments[:4]))
    return Dependency(**fields, extension=extension, raw=dependency)


def _notation(dep: Dependency) -> str:
    parts = [dep.group, dep.name]
    if dep.version or dep.classifier:
        parts.append(dep.version)
    if dep.classifier:
        parts.append(dep.classifier)
    notation = ":".join(parts)
    return f"{notation}@{dep.extension}" if dep.extension else notation


def _statement_at(block: Block, offset: int) -> Statement | None:
    """Return the innermost statement whose span contains *offset*."""
    for stmt in block.statements:
        if stmt.start <= offset < stmt.end:
            for body in stmt.blocks:
                inner = _statement_at(body, offset)
                if inner is not None:
                    return inner
            return stmt
    return None


def _first_quote(text: str) -> str:
    for ch in text:
        if ch in ("'", '"'):
            return ch
    return ""
