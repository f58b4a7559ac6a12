# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-position tracker.

Wraps a :class:`GradleParser` and maps every recognised dependency, plugin,
repository and property back onto the original text. Locations cover the
whole statement, including keywords, quotes, parentheses and configuration
closures, but never trailing comments. Value sub-spans exclude the quotes.
"""

from bisect import bisect_right
from pathlib import Path

from gradle_parser.model.entities import ParseResult
from gradle_parser.model.source import (
    SourceLocation,
    SourceMappedBlock,
    SourceMappedDependency,
    SourceMappedParseResult,
    SourceMappedPlugin,
    SourceMappedProject,
    SourceMappedProperty,
    SourceMappedRepository,
    SourcePosition,
)
from gradle_parser.parser.builder import BuildOutput
from gradle_parser.parser.parser import GradleParser, read_build_file, with_file_path

# ###############
# Public Interface
# ###############


class LineIndex:
    """Converts offsets into line/column positions of a fixed text."""

    def __init__(self, text: str) -> None:
        self._starts = [0]
        self._starts.extend(i + 1 for i, ch in enumerate(text) if ch == "\n")

    def position(self, offset: int) -> SourcePosition:
        line = bisect_right(self._starts, offset) - 1
        return SourcePosition(offset=offset, line=line + 1, column=offset - self._starts[line] + 1)

    def location(self, start: int, end: int) -> SourceLocation:
        return SourceLocation(start=self.position(start), end=self.position(end))


class SourceAwareParser:
    """Parser variant that also records source locations.

    Structural errors are never swallowed here: a document whose braces do
    not balance has no trustworthy element boundaries.

    Args:
        parser: The parser whose options to use. Defaults to a parser with
            all features enabled.
    """

    def __init__(self, parser: GradleParser | None = None) -> None:
        self.parser = parser or GradleParser()

    def parse_with_source_mapping(self, content: str) -> SourceMappedParseResult:
        """Parse *content* and map every recognised element onto it.

        Raises:
            LexerError: On unterminated literals or comments.
            ParseError: On unmatched braces.
        """
        output, result = self.parser.build(content)
        return _map(content, output, result)

    def parse_file_with_source_mapping(self, path: str | Path) -> SourceMappedParseResult:
        """Read and parse a build file with source mapping.

        Raises:
            GradleFileError: If the file cannot be read.
            LexerError: On unterminated literals or comments.
            ParseError: On unmatched braces.
        """
        path = Path(path)
        content = read_build_file(path)
        output, result = self.parser.build(content)
        return _map(content, output, with_file_path(result, path))


# ################
# Implementation
# ################


def _map(content: str, output: BuildOutput, result: ParseResult) -> SourceMappedParseResult:
    index = LineIndex(content)

    def span(bounds: tuple[int, int] | None) -> SourceLocation | None:
        return index.location(*bounds) if bounds is not None else None

    dependencies = [
        SourceMappedDependency(
            dependency=decl.dependency,
            location=index.location(decl.start, decl.end),
            raw_text=content[decl.start : decl.end],
            version_location=span(decl.version_span),
            version_insert_offset=decl.version_insert_offset,
        )
        for decl in output.dependencies
    ]
    plugins = [
        SourceMappedPlugin(
            plugin=decl.plugin,
            location=index.location(decl.start, decl.end),
            raw_text=content[decl.start : decl.end],
            id_location=span(decl.id_span),
            version_location=span(decl.version_span),
            version_insert_offset=decl.version_insert_offset,
            quote=decl.quote,
        )
        for decl in output.plugins
    ]
    repositories = [
        SourceMappedRepository(
            repository=decl.repository,
            location=index.location(decl.start, decl.end),
            raw_text=content[decl.start : decl.end],
        )
        for decl in output.repositories
    ]
    properties = [
        SourceMappedProperty(
            key=decl.key,
            value=decl.value,
            location=index.location(decl.start, decl.end),
            raw_text=content[decl.start : decl.end],
            value_location=index.location(*decl.value_span),
            quoted=decl.quoted,
        )
        for decl in output.properties
    ]
    blocks = []
    for stmt in output.dependency_blocks:
        body = stmt.body
        assert body is not None
        blocks.append(
            SourceMappedBlock(
                location=index.location(stmt.start, stmt.end),
                body_start=body.inner_start,
                body_end=body.inner_end,
            )
        )

    project = SourceMappedProject(
        project=result.project,
        dependencies=dependencies,
        plugins=plugins,
        repositories=repositories,
        properties=properties,
        dependency_blocks=blocks,
        original_text=content,
    )
    return SourceMappedParseResult(result=result, source_mapped_project=project)
