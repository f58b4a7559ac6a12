# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Task declaration parser.

Recognises task registrations in both dialects::

    task copyDocs(type: Copy) { ... }
    task('hello')
    tasks.register<Copy>("copyDocs") { ... }
    tasks.register("copyDocs", Copy::class) { ... }
    tasks.create("x"), tasks.named("test") { ... }
    tasks.test { ... }

and the same forms without the ``tasks.`` prefix inside a ``tasks { }``
container. Container methods such as ``withType`` or ``configureEach`` do
not declare a task and are left to the caller.
"""

from dataclasses import dataclass

from gradle_parser.model.entities import Task
from gradle_parser.parser.blocks import Block, Statement, StatementError
from gradle_parser.parser.expressions import (
    block_text,
    literal_text,
    named_argument,
    source_text,
    split_arguments,
    split_call,
    string_token,
    unwrap_parens,
)
from gradle_parser.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############


@dataclass
class TaskDeclaration:
    task: Task
    start: int
    end: int


def parse_task_statement(
    stmt: Statement,
    source: str,
    comments: list[Token] | None = None,
    *,
    in_container: bool = False,
) -> TaskDeclaration | None:
    """Parse a statement that may register or configure a task.

    Args:
        stmt: A top-level statement, or a statement inside ``tasks { }`` when
            *in_container* is True.
        source: The full script text.
        comments: Comment tokens to strip from the task body, if any.
        in_container: Whether *stmt* sits directly inside a ``tasks`` block.

    Returns:
        The task declaration, or ``None`` if the statement is not a task.

    Raises:
        StatementError: If the statement is a task registration whose name
            cannot be read.
    """
    kind = _task_form(stmt, in_container)
    if kind is None:
        return None
    if kind == "task":
        header = _parse_task_keyword(stmt, source)
    elif kind in _REGISTRATION_METHODS:
        header = _parse_registration(stmt, source)
    else:
        header = _TaskHeader(name=kind)
    return _finish(stmt, source, comments, header)


def is_task_statement(stmt: Statement, *, in_container: bool = False) -> bool:
    """True when :func:`parse_task_statement` would treat *stmt* as a task."""
    return _task_form(stmt, in_container) is not None


# ################
# Implementation
# ################

_REGISTRATION_METHODS: frozenset[str] = frozenset({"register", "create", "named", "getByName", "maybeCreate"})

_CONTAINER_METHODS: frozenset[str] = frozenset(
    {
        "withType",
        "all",
        "matching",
        "configureEach",
        "whenTaskAdded",
        "findByName",
        "findByPath",
        "getByPath",
        "getAt",
        "configure",
        "forEach",
        "each",
        "filter",
    }
)

_TYPE_SUFFIXES: tuple[str, ...] = ("::class.java", "::class")


@dataclass
class _TaskHeader:
    name: str
    type: str = ""
    description: str = ""
    group: str = ""
    depends_on: list[str] | None = None


def _task_form(stmt: Statement, in_container: bool) -> str | None:
    """Classify *stmt*: ``"task"``, a registration method, a task name, or ``None``."""
    name = stmt.name
    if not in_container:
        if name == "task":
            return "task"
        if not name.startswith("tasks."):
            return None
        name = name[len("tasks.") :]
    if not name or "." in name or name in _CONTAINER_METHODS:
        return None
    if name in _REGISTRATION_METHODS:
        return name
    if stmt.body is not None and not stmt.arguments:
        return name
    return None


def _finish(stmt: Statement, source: str, comments: list[Token] | None, header: _TaskHeader) -> TaskDeclaration:
    description, group = header.description, header.group
    depends_on = list(header.depends_on or [])
    configuration = ""
    body = stmt.body
    if body is not None:
        configuration = block_text(source, body, comments)
        body_description, body_group, body_depends = _read_body(body, source)
        description = body_description or description
        group = body_group or group
        depends_on.extend(body_depends)
    task = Task(
        name=header.name,
        type=header.type,
        description=description,
        group=group,
        depends_on=depends_on,
        configuration=configuration,
    )
    return TaskDeclaration(task=task, start=stmt.start, end=stmt.end)


def _parse_task_keyword(stmt: Statement, source: str) -> _TaskHeader:
    """Parse Groovy ``task name(args)``, ``task 'name'`` and ``task('name', args)``."""
    args = stmt.arguments
    if not args:
        raise StatementError("Task declaration without a name", stmt.first_token)

    first = args[0]
    if first.type == TokenType.IDENTIFIER:
        header = _TaskHeader(name=first.value)
        rest = args[1:]
        if rest and rest[0].type == TokenType.LPAREN:
            _apply_named(header, split_arguments(unwrap_parens(rest)), source)
        return header

    parts = split_arguments(unwrap_parens(args))
    tok = string_token(parts[0]) if parts else None
    if tok is None:
        raise StatementError(f"Cannot read task name from {source_text(source, args)!r}", first)
    header = _TaskHeader(name=tok.value)
    _apply_named(header, parts[1:], source)
    return header


def _parse_registration(stmt: Statement, source: str) -> _TaskHeader:
    """Parse ``register<T>("name", T::class)`` and the other container registration methods."""
    name_tokens = stmt.tokens[: stmt.name_length]
    call = split_call(stmt.tokens)
    if call is None:
        raise StatementError("Expected task registration call", stmt.first_token)
    type_name = _type_argument(stmt.tokens[stmt.name_length :])
    parts = split_arguments(call[1])
    if not parts:
        raise StatementError("Task registration without a name", name_tokens[-1])

    header = _TaskHeader(name=literal_text(source, parts[0]), type=type_name)
    rest = parts[1:]
    if rest and named_argument(rest[0]) is None:
        header.type = _clean_type(source_text(source, rest[0]))
        rest = rest[1:]
    _apply_named(header, rest, source)
    return header


def _type_argument(tokens: list[Token]) -> str:
    """Return ``T`` from a leading ``<T>`` type argument, or ``""``."""
    if len(tokens) >= 3 and tokens[0].type == TokenType.OPERATOR and tokens[0].value == "<":
        names = []
        for tok in tokens[1:]:
            if tok.type == TokenType.OPERATOR and tok.value == ">":
                return "".join(names)
            names.append(tok.value)
    return ""


def _clean_type(text: str) -> str:
    for suffix in _TYPE_SUFFIXES:
        if text.endswith(suffix):
            return text[: -len(suffix)]
    return text


def _apply_named(header: _TaskHeader, parts: list[list[Token]], source: str) -> None:
    """Apply ``type:``, ``description:``, ``group:`` and ``dependsOn:`` arguments."""
    for part in parts:
        named = named_argument(part)
        if named is None:
            continue
        key, value = named
        if key == "type":
            header.type = _clean_type(source_text(source, value))
        elif key == "description":
            header.description = literal_text(source, value)
        elif key == "group":
            header.group = literal_text(source, value)
        elif key == "dependsOn":
            header.depends_on = _list_values(value, source)


def _read_body(body: Block, source: str) -> tuple[str, str, list[str]]:
    description = ""
    group = ""
    depends_on: list[str] = []
    for inner in body.statements:
        tokens = inner.value_tokens if inner.is_assignment else inner.arguments
        if inner.name in ("description", "setDescription"):
            description = literal_text(source, tokens)
        elif inner.name in ("group", "setGroup"):
            group = literal_text(source, tokens)
        elif inner.name in ("dependsOn", "setDependsOn"):
            depends_on.extend(_list_values(tokens, source))
    return description, group, depends_on


def _list_values(tokens: list[Token], source: str) -> list[str]:
    """Read ``'a', 'b'``, ``['a', 'b']`` or ``listOf("a", "b")`` into strings."""
    tokens = unwrap_parens(tokens)
    call = split_call(tokens)
    if call is not None and call[0] in ("listOf", "setOf", "arrayOf"):
        tokens = call[1]
    elif tokens and tokens[0].type == TokenType.LBRACKET and tokens[-1].type == TokenType.RBRACKET:
        tokens = tokens[1:-1]
    return [literal_text(source, part) for part in split_arguments(tokens)]
