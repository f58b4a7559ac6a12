# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-position overlay for the Gradle project model.

A source-mapped project pairs every recognised element with the exact span
it occupies in the original text, plus the sub-spans the editor splices
into (version strings, plugin ids, property values). Offsets are code-point
offsets into the decoded text; lines and columns are 1-based.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field
from pydantic.alias_generators import to_camel

from gradle_parser.model.entities import Dependency, ParseResult, Plugin, Project, Repository

# ###############
# Public Interface
# ###############


class _Mapped(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class SourcePosition(_Mapped):
    """A single point in the source text."""

    offset: int
    line: int
    column: int


class SourceLocation(_Mapped):
    """A half-open span ``[start, end)`` of the source text."""

    start: SourcePosition
    end: SourcePosition

    @property
    def length(self) -> int:
        return self.end.offset - self.start.offset

    def contains(self, offset: int) -> bool:
        """True when *offset* lies inside the span."""
        return self.start.offset <= offset < self.end.offset


class SourceMappedDependency(_Mapped):
    """A dependency together with its declaration span.

    Attributes:
        dependency: The model element (shared with ``project.dependencies``).
        location: The whole declaration, or only the notation when several
            notations share one statement.
        raw_text: The source text covered by ``location``.
        version_location: The version text without quotes, when present.
        version_insert_offset: Where ``:<version>`` can be inserted into a
            shorthand string that has no version yet.
    """

    dependency: Dependency
    location: SourceLocation
    raw_text: str
    version_location: SourceLocation | None = None
    version_insert_offset: int | None = None


class SourceMappedPlugin(_Mapped):
    """A plugin together with its declaration span.

    Attributes:
        plugin: The model element.
        location: The whole plugin statement.
        raw_text: The source text covered by ``location``.
        id_location: The plugin id literal (or accessor) without quotes.
        version_location: The version text without quotes, when present.
        version_insert_offset: Offset right after the id expression, where
            `` version "x"`` can be inserted.
        quote: Quote character used by the id literal, for version insertion.
    """

    plugin: Plugin
    location: SourceLocation
    raw_text: str
    id_location: SourceLocation | None = None
    version_location: SourceLocation | None = None
    version_insert_offset: int | None = None
    quote: str = ""


class SourceMappedRepository(_Mapped):
    repository: Repository
    location: SourceLocation
    raw_text: str


class SourceMappedProperty(_Mapped):
    """A property or project-field assignment.

    ``value_location`` covers the inner text of a string literal, or the
    whole expression when ``quoted`` is False.
    """

    key: str
    value: str
    location: SourceLocation
    raw_text: str
    value_location: SourceLocation
    quoted: bool = True


class SourceMappedBlock(_Mapped):
    """A top-level ``dependencies { }`` block.

    Attributes:
        location: The whole block statement including the keyword.
        body_start: Offset just after the opening brace.
        body_end: Offset of the closing brace.
    """

    location: SourceLocation
    body_start: int
    body_end: int


class SourceMappedProject(_Mapped):
    """A parsed project with the source spans of its editable elements."""

    project: Project
    dependencies: list[SourceMappedDependency] = _Field(default_factory=list)
    plugins: list[SourceMappedPlugin] = _Field(default_factory=list)
    repositories: list[SourceMappedRepository] = _Field(default_factory=list)
    properties: list[SourceMappedProperty] = _Field(default_factory=list)
    dependency_blocks: list[SourceMappedBlock] = _Field(default_factory=list)
    original_text: str = ""

    # ------------------------------------------------------------------
    # Text access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> list[str]:
        """The original text split into lines, without line terminators."""
        return self.original_text.split("\n")

    def get_line_text(self, line: int) -> str:
        """Return the text of 1-based *line*, or ``""`` when out of range."""
        lines = self.lines
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return ""

    def get_text_range(self, location: SourceLocation) -> str:
        """Return the original text covered by *location*."""
        return self.original_text[location.start.offset : location.end.offset]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_dependency_by_position(self, offset: int) -> SourceMappedDependency | None:
        for mapped in self.dependencies:
            if mapped.location.contains(offset):
                return mapped
        return None

    def find_plugin_by_position(self, offset: int) -> SourceMappedPlugin | None:
        for mapped in self.plugins:
            if mapped.location.contains(offset):
                return mapped
        return None

    def find_property_by_key(self, key: str) -> SourceMappedProperty | None:
        """Return the last assignment of *key*, which is the one in effect."""
        found = None
        for mapped in self.properties:
            if mapped.key == key:
                found = mapped
        return found

    def find_dependencies(self, group: str, name: str, scope: str | None = None) -> list[SourceMappedDependency]:
        """Return all dependencies matching ``group:name``, optionally restricted to *scope*."""
        return [
            mapped
            for mapped in self.dependencies
            if mapped.dependency.group == group
            and mapped.dependency.name == name
            and (scope is None or mapped.dependency.scope == scope)
        ]

    def find_plugins(self, plugin_id: str) -> list[SourceMappedPlugin]:
        return [mapped for mapped in self.plugins if mapped.plugin.id == plugin_id]


class SourceMappedParseResult(_Mapped):
    """A parse result together with its source-mapped project."""

    result: ParseResult
    source_mapped_project: SourceMappedProject
