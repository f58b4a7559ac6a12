# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Multi-project builds: settings files, project trees and batch parsing."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from gradle_parser.model.entities import ParseResult, Project
from gradle_parser.parser.blocks import parse_script
from gradle_parser.parser.expressions import literal_text, location_text, split_arguments, split_call, unwrap_parens
from gradle_parser.parser.lexer import Token, TokenType
from gradle_parser.parser.parser import GradleParser, read_build_file
from gradle_parser.workspace.discovery import find_build_file, find_settings_file

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass
class SettingsInfo:
    """What a ``settings.gradle(.kts)`` file says about the project layout.

    Attributes:
        root_project_name: Value of ``rootProject.name``, or empty.
        includes: Included project paths in declaration order, each with a
            leading colon (``:app``, ``:libs:core``).
        project_dirs: Custom directories assigned with
            ``project(':x').projectDir = file('...')``.
    """

    root_project_name: str = ""
    includes: list[str] = field(default_factory=list)
    project_dirs: dict[str, str] = field(default_factory=dict)


def parse_settings(text: str) -> SettingsInfo:
    """Read the root project name and included projects from settings text.

    Raises:
        LexerError: On unterminated literals or comments.
        ParseError: On unmatched braces.
    """
    script = parse_script(text)
    info = SettingsInfo()
    for stmt in script.root.statements:
        if stmt.name == "rootProject.name" and stmt.is_assignment:
            info.root_project_name = literal_text(text, stmt.value_tokens)
        elif stmt.name == "include":
            for part in split_arguments(unwrap_parens(stmt.arguments)):
                path = literal_text(text, part)
                path = path if path.startswith(":") else f":{path}"
                if path not in info.includes:
                    info.includes.append(path)
        elif stmt.name == "project":
            _read_project_dir(stmt.tokens, text, info)
    return info


def parse_files(
    paths: list[Path],
    parser: GradleParser | None = None,
    max_workers: int | None = None,
) -> list[ParseResult]:
    """Parse several build files concurrently.

    Each file gets its own tokens and model; only the parser's immutable
    options are shared.

    Returns:
        One result per path, in the order of *paths*.

    Raises:
        GradleFileError: If any file cannot be read.
    """
    parser = parser or GradleParser()
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(parser.parse_file, paths))


def parse_project_tree(
    root_dir: Path,
    parser: GradleParser | None = None,
    max_workers: int | None = None,
) -> ParseResult:
    """Parse a multi-project build into a single Project tree.

    The root build file becomes the root project; every project included by
    the settings file is parsed from its own directory and attached as a sub
    project. ``:a:b`` nests under ``:a`` when ``:a`` is included as well,
    otherwise directly under the root. Errors and warnings of sub projects
    are reported on the returned result, prefixed with the project path.

    Raises:
        GradleFileError: If a settings or build file cannot be read.
    """
    parser = parser or GradleParser()
    root_dir = root_dir.resolve()
    settings_file = find_settings_file(root_dir)
    settings = parse_settings(read_build_file(settings_file)) if settings_file else SettingsInfo()

    root_build = find_build_file(root_dir)
    root_result = parser.parse_file(root_build) if root_build else ParseResult()

    dirs = {
        path: root_dir / settings.project_dirs.get(path, path.strip(":").replace(":", "/"))
        for path in settings.includes
    }
    build_files = {path: find_build_file(directory) for path, directory in dirs.items()}
    for path, build_file in build_files.items():
        if build_file is None:
            logger.warning("No build file for project %s in %s", path, dirs[path])
    present = [path for path in settings.includes if build_files[path] is not None]
    parsed = dict(zip(present, parse_files([build_files[p] for p in present], parser, max_workers)))

    errors = list(root_result.errors)
    warnings = list(root_result.warnings)
    projects: dict[str, Project] = {}
    for path in settings.includes:
        name = path.rsplit(":", 1)[-1]
        result = parsed.get(path)
        if result is None:
            projects[path] = Project(name=name)
            continue
        errors.extend(f"{path}: {message}" for message in result.errors)
        warnings.extend(f"{path}: {message}" for message in result.warnings)
        projects[path] = result.project.model_copy(update={"name": name})

    root_name = settings.root_project_name or root_result.project.name or root_dir.name
    root_project = root_result.project.model_copy(
        update={"name": root_name, "sub_projects": _nest(settings.includes, projects, "")}
    )
    return root_result.model_copy(update={"project": root_project, "errors": errors, "warnings": warnings})


# ################
# Implementation
# ################


def _read_project_dir(tokens: list[Token], text: str, info: SettingsInfo) -> None:
    """Handle ``project(':x').projectDir = file('dir')``."""
    equals = next((i for i, tok in enumerate(tokens) if tok.type == TokenType.EQUALS), None)
    if equals is None or equals < 4:
        return
    target = tokens[:equals]
    if target[-1].value != "projectDir" or target[-2].type != TokenType.DOT:
        return
    call = split_call(target[:-2])
    if call is None or call[0] != "project":
        return
    path = literal_text(text, call[1])
    path = path if path.startswith(":") else f":{path}"
    info.project_dirs[path] = location_text(text, tokens[equals + 1 :])


def _parent_path(path: str, included: set[str]) -> str:
    """Return the nearest included ancestor of *path*, or ``""`` for the root."""
    segments = path.strip(":").split(":")
    for length in range(len(segments) - 1, 0, -1):
        candidate = ":" + ":".join(segments[:length])
        if candidate in included:
            return candidate
    return ""


def _nest(includes: list[str], projects: dict[str, Project], parent: str) -> list[Project]:
    """Build the sub-project list of *parent* (``""`` for the root), recursively."""
    included = set(includes)
    children: list[Project] = []
    for path in includes:
        if _parent_path(path, included) != parent:
            continue
        subs = _nest(includes, projects, path)
        children.append(projects[path].model_copy(update={"sub_projects": subs}) if subs else projects[path])
    return children
