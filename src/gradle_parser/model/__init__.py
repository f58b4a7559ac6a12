# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project model produced by the parser, with optional source positions."""

from gradle_parser.model.entities import (
    Dependency,
    DependencySet,
    ParseResult,
    Plugin,
    Project,
    Repository,
    Task,
)
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

__all__ = [
    # Entities
    "Dependency",
    "DependencySet",
    "ParseResult",
    "Plugin",
    "Project",
    "Repository",
    "Task",
    # Source positions
    "SourceLocation",
    "SourceMappedBlock",
    "SourceMappedDependency",
    "SourceMappedParseResult",
    "SourceMappedPlugin",
    "SourceMappedProject",
    "SourceMappedProperty",
    "SourceMappedRepository",
    "SourcePosition",
]
