# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Repository declaration parser for ``repositories { }`` blocks."""

from dataclasses import dataclass
from typing import Any

from gradle_parser.model.entities import Repository
from gradle_parser.parser.blocks import Block, Diagnostics, Statement
from gradle_parser.parser.expressions import (
    literal_text,
    location_text,
    named_arguments,
    source_text,
    split_arguments,
    unwrap_parens,
)
from gradle_parser.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############

MAVEN_CENTRAL_URL = "https://repo.maven.apache.org/maven2/"
GOOGLE_URL = "https://dl.google.com/android/maven2/"
JCENTER_URL = "https://jcenter.bintray.com/"
GRADLE_PLUGIN_PORTAL_URL = "https://plugins.gradle.org/m2/"

WELL_KNOWN_REPOSITORIES: dict[str, str] = {
    "mavenCentral": MAVEN_CENTRAL_URL,
    "google": GOOGLE_URL,
    "jcenter": JCENTER_URL,
    "gradlePluginPortal": GRADLE_PLUGIN_PORTAL_URL,
    "mavenLocal": "",
}


@dataclass
class RepositoryDeclaration:
    repository: Repository
    start: int
    end: int


def parse_repository_statement(stmt: Statement, source: str, diagnostics: Diagnostics) -> RepositoryDeclaration | None:
    """Parse one statement of a ``repositories`` block.

    Args:
        stmt: The statement to interpret.
        source: The full script text.
        diagnostics: Receives warnings for unknown statements and for
            ``maven`` declarations without a URL.

    Returns:
        The repository declaration, or ``None`` if the statement does not
        declare a repository.
    """
    name = stmt.name
    if name in WELL_KNOWN_REPOSITORIES:
        repository = Repository(name=name, type="maven", url=WELL_KNOWN_REPOSITORIES[name])
    elif name == "maven":
        repository = _parse_maven(stmt, source, diagnostics)
    elif name == "ivy":
        repository = _parse_ivy(stmt, source)
    elif name == "flatDir":
        repository = _parse_flat_dir(stmt, source)
    else:
        text = source_text(source, stmt.tokens) or "{ ... }"
        diagnostics.warn(f"Unknown repository declaration: {text}", stmt.first_token)
        return None
    return RepositoryDeclaration(repository=repository, start=stmt.start, end=stmt.end)


def is_jitpack_url(url: str) -> bool:
    return "jitpack.io" in url


# ################
# Implementation
# ################

_URL_SETTERS: frozenset[str] = frozenset({"url", "setUrl"})


class _RepositoryFields:
    """Mutable accumulator for the settings found in a repository closure."""

    def __init__(self) -> None:
        self.name = ""
        self.url = ""
        self.username = ""
        self.password = ""
        self.config: dict[str, Any] = {}


def _statement_value(stmt: Statement, source: str, location: bool = False) -> str:
    """Return the value of ``key = value``, ``key value`` or ``key(value)``."""
    tokens = stmt.value_tokens if stmt.is_assignment else unwrap_parens(stmt.arguments)
    return location_text(source, tokens) if location else literal_text(source, tokens)


def _collect(stmt: Statement, source: str) -> _RepositoryFields:
    """Read call arguments and closure settings of a repository statement."""
    fields = _RepositoryFields()
    parts = split_arguments(unwrap_parens(stmt.arguments))
    named = named_arguments(parts)
    if named is not None:
        for key, value in named.items():
            if key == "url":
                fields.url = location_text(source, value)
            elif key == "name":
                fields.name = literal_text(source, value)
            else:
                fields.config[key] = literal_text(source, value)
    elif parts:
        fields.url = location_text(source, parts[0])

    if stmt.body is not None:
        _collect_body(stmt.body, source, fields)
    return fields


def _collect_body(body: Block, source: str, fields: _RepositoryFields) -> None:
    for inner in body.statements:
        key = inner.name
        if key in _URL_SETTERS:
            fields.url = _statement_value(inner, source, location=True)
        elif key in ("name", "setName"):
            fields.name = _statement_value(inner, source)
        elif key == "credentials":
            if inner.body is not None:
                for cred in inner.body.statements:
                    if cred.name == "username":
                        fields.username = _statement_value(cred, source)
                    elif cred.name == "password":
                        fields.password = _statement_value(cred, source)
            else:
                fields.config["credentials"] = literal_text(source, inner.arguments)
        elif key and inner.body is not None:
            fields.config[key] = source[inner.body.inner_start : inner.body.inner_end].strip()
        elif key:
            fields.config[key] = _statement_value(inner, source)


def _parse_maven(stmt: Statement, source: str, diagnostics: Diagnostics) -> Repository:
    fields = _collect(stmt, source)
    if not fields.url:
        diagnostics.warn("Maven repository without url", stmt.first_token)
    name = fields.name
    if not name:
        name = "jitpack" if is_jitpack_url(fields.url) else "custom"
    return Repository(
        name=name,
        type="maven",
        url=fields.url,
        username=fields.username,
        password=fields.password,
        config=fields.config,
    )


def _parse_ivy(stmt: Statement, source: str) -> Repository:
    fields = _collect(stmt, source)
    return Repository(
        name=fields.name or "ivy",
        type="ivy",
        url=fields.url,
        username=fields.username,
        password=fields.password,
        config=fields.config,
    )


def _parse_flat_dir(stmt: Statement, source: str) -> Repository:
    dirs: list[str] = []
    name = ""
    named = named_arguments(split_arguments(unwrap_parens(stmt.arguments)))
    if named is not None:
        if "dirs" in named:
            dirs.extend(_dir_list(named["dirs"], source))
        if "name" in named:
            name = literal_text(source, named["name"])
    if stmt.body is not None:
        for inner in stmt.body.statements:
            if inner.name in ("dirs", "dir"):
                tokens = inner.value_tokens if inner.is_assignment else inner.arguments
                dirs.extend(_dir_list(tokens, source))
            elif inner.name == "name":
                name = _statement_value(inner, source)
    return Repository(name=name or "flatDir", type="flatDir", config={"dirs": dirs})


def _dir_list(tokens: list[Token], source: str) -> list[str]:
    """Read ``'a', 'b'``, ``['a', 'b']`` or ``("a", "b")`` into a list of strings."""
    tokens = unwrap_parens(tokens)
    if tokens and tokens[0].type == TokenType.LBRACKET and tokens[-1].type == TokenType.RBRACKET:
        tokens = tokens[1:-1]
    return [literal_text(source, part) for part in split_arguments(tokens)]
