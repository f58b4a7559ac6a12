# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse and edit Gradle build files written in the Groovy or Kotlin DSL.

Typical use::

    from gradle_parser import parse_file, update_dependency_version

    result = parse_file("build.gradle")
    for dep in result.project.dependencies:
        print(dep.scope, dep.coordinates)

    text = update_dependency_version(text, "com.google.guava", "guava", "33.0.0-jre")
"""

from pathlib import Path
from typing import IO

from gradle_parser.analysis.queries import dependencies_by_scope
from gradle_parser.editor.editor import (
    Dialect,
    GradleEditor,
    add_dependency,
    update_dependency_version,
    update_plugin_version,
    update_property,
)
from gradle_parser.model.entities import Dependency, ParseResult, Plugin, Project, Repository
from gradle_parser.model.source import SourceMappedParseResult
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleParser
from gradle_parser.parser.source_aware import SourceAwareParser

__version__ = "0.1.0"

# ###############
# Public Interface
# ###############


def parse_file(path: str | Path, options: ParserOptions | None = None) -> ParseResult:
    """Parse the build file at *path*."""
    return GradleParser(options).parse_file(path)


def parse_string(content: str, options: ParserOptions | None = None) -> ParseResult:
    """Parse build-file text."""
    return GradleParser(options).parse(content)


def parse_reader(reader: IO[str] | IO[bytes], options: ParserOptions | None = None) -> ParseResult:
    """Parse build-file text read from a text or binary stream."""
    return GradleParser(options).parse_reader(reader)


def parse_file_with_source_mapping(path: str | Path) -> SourceMappedParseResult:
    """Parse the build file at *path*, recording the source span of every element."""
    return SourceAwareParser().parse_file_with_source_mapping(path)


def get_dependencies(path: str | Path) -> list[Dependency]:
    return parse_file(path).project.dependencies


def get_plugins(path: str | Path) -> list[Plugin]:
    return parse_file(path).project.plugins


def get_repositories(path: str | Path) -> list[Repository]:
    return parse_file(path).project.repositories


__all__ = [
    "Dependency",
    "Dialect",
    "GradleEditor",
    "GradleParser",
    "ParseResult",
    "ParserOptions",
    "Plugin",
    "Project",
    "Repository",
    "SourceAwareParser",
    "SourceMappedParseResult",
    "__version__",
    "add_dependency",
    "dependencies_by_scope",
    "get_dependencies",
    "get_plugins",
    "get_repositories",
    "parse_file",
    "parse_file_with_source_mapping",
    "parse_reader",
    "parse_string",
    "update_dependency_version",
    "update_plugin_version",
    "update_property",
]
