# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core entities of the Gradle project model.

All entities are immutable once built. They serialize with camelCase keys
(``model_dump(by_alias=True)``) and accept either field names or the camelCase
aliases on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field
from pydantic.alias_generators import to_camel

# ###############
# Public Interface
# ###############


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Dependency(_Entity):
    """A declared dependency of one configuration (scope).

    ``raw`` keeps the original notation so that nothing is lost when the
    notation cannot be interpreted. ``classifier`` and ``extension`` hold the
    fourth shorthand segment and the ``@ext`` suffix respectively.
    """

    group: str = ""
    name: str = ""
    version: str = ""
    scope: str = ""
    transitive: bool = True
    raw: str = ""
    classifier: str = ""
    extension: str = ""
    is_project: bool = False

    @property
    def is_valid(self) -> bool:
        """True when at least one of group and name is known."""
        return bool(self.group or self.name)

    @property
    def coordinates(self) -> str:
        """The ``group:name[:version]`` coordinate string."""
        parts = [self.group, self.name]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)


class Plugin(_Entity):
    """An applied or declared plugin."""

    id: str
    version: str = ""
    apply: bool = True
    config: dict[str, Any] = _Field(default_factory=dict)


class Repository(_Entity):
    """A repository declaration such as ``mavenCentral()`` or ``maven { url ... }``."""

    name: str = ""
    type: str = ""
    url: str = ""
    username: str = ""
    password: str = ""
    config: dict[str, Any] = _Field(default_factory=dict)


class Task(_Entity):
    """A task registration. ``configuration`` is the opaque body text."""

    name: str
    type: str = ""
    description: str = ""
    group: str = ""
    depends_on: list[str] = _Field(default_factory=list)
    configuration: str = ""


class Project(_Entity):
    """A Gradle project: the aggregate root of one parsed build file."""

    group: str = ""
    name: str = ""
    version: str = ""
    description: str = ""
    source_compatibility: str = ""
    target_compatibility: str = ""
    properties: dict[str, str] = _Field(default_factory=dict)
    plugins: list[Plugin] = _Field(default_factory=list)
    dependencies: list[Dependency] = _Field(default_factory=list)
    repositories: list[Repository] = _Field(default_factory=list)
    sub_projects: list[Project] = _Field(default_factory=list)
    tasks: list[Task] = _Field(default_factory=list)
    extensions: dict[str, Any] = _Field(default_factory=dict)
    file_path: str = ""


class DependencySet(_Entity):
    """Dependencies of a single scope, in declaration order."""

    scope: str
    dependencies: list[Dependency] = _Field(default_factory=list)


class ParseResult(_Entity):
    """The outcome of parsing one build file.

    Attributes:
        project: The parsed project. Empty when a fatal error occurred.
        raw_text: The input text, when raw content collection is enabled.
        errors: Fatal errors. At most one is recorded per parse.
        warnings: Non-fatal, statement-level problems.
        parse_time: Elapsed parse duration, e.g. ``"1.234ms"``.
    """

    project: Project = _Field(default_factory=Project)
    raw_text: str | None = None
    errors: list[str] = _Field(default_factory=list)
    warnings: list[str] = _Field(default_factory=list)
    parse_time: str = ""

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the JSON document ``{project, rawText, errors, warnings, parseTime}``."""
        return self.model_dump_json(by_alias=True, indent=indent)


Project.model_rebuild()
