# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Helpers for reading simple expressions out of statement token runs.

The sub-parsers never evaluate build-script expressions. They only need to
recognise a handful of shapes: string literals, parenthesised calls, named
arguments and comma-separated argument lists.
"""

import textwrap

from gradle_parser.parser.blocks import Block
from gradle_parser.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############


def source_text(source: str, tokens: list[Token]) -> str:
    """Return the original text covered by *tokens* (empty for no tokens)."""
    if not tokens:
        return ""
    return source[tokens[0].offset : tokens[-1].end]


def matching_close(tokens: list[Token], index: int) -> int:
    """Return the index of the bracket closing ``tokens[index]``, or -1."""
    depth = 0
    for i in range(index, len(tokens)):
        kind = tokens[i].type
        if kind in _OPENERS:
            depth += 1
        elif kind in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
    return -1


def unwrap_parens(tokens: list[Token]) -> list[Token]:
    """Strip any number of parenthesis pairs that enclose the whole run."""
    while tokens and tokens[0].type == TokenType.LPAREN and matching_close(tokens, 0) == len(tokens) - 1:
        tokens = tokens[1:-1]
    return tokens


def split_arguments(tokens: list[Token]) -> list[list[Token]]:
    """Split a token run on commas at bracket depth zero.

    Empty segments (for instance from a trailing comma) are dropped.
    """
    parts: list[list[Token]] = []
    current: list[Token] = []
    depth = 0
    for tok in tokens:
        if tok.type in _OPENERS:
            depth += 1
        elif tok.type in _CLOSERS:
            depth -= 1
        if tok.type == TokenType.COMMA and depth == 0:
            if current:
                parts.append(current)
            current = []
        else:
            current.append(tok)
    if current:
        parts.append(current)
    return parts


def named_argument(tokens: list[Token]) -> tuple[str, list[Token]] | None:
    """Split ``name: value`` (Groovy map entry) or ``name = value`` (Kotlin).

    Returns:
        The argument name and the value tokens, or ``None`` when *tokens* is
        not a named argument.
    """
    if (
        len(tokens) >= 3
        and tokens[0].type in (TokenType.IDENTIFIER, TokenType.STRING)
        and tokens[1].type in (TokenType.COLON, TokenType.EQUALS)
    ):
        return tokens[0].value, tokens[2:]
    return None


def named_arguments(parts: list[list[Token]]) -> dict[str, list[Token]] | None:
    """Return all named arguments of *parts*, or ``None`` if any part is positional."""
    result: dict[str, list[Token]] = {}
    for part in parts:
        named = named_argument(part)
        if named is None:
            return None
        result[named[0]] = named[1]
    return result


def split_call(tokens: list[Token]) -> tuple[str, list[Token]] | None:
    """Recognise ``a.b.c(args)`` covering the whole token run.

    A Kotlin type argument (``register<Copy>(...)``) between the name and the
    parenthesis is tolerated and ignored.

    Returns:
        The dotted callee name and the tokens between the parentheses, or
        ``None`` if *tokens* is not a single call.
    """
    name_parts: list[str] = []
    i = 0
    while i < len(tokens) and tokens[i].type == TokenType.IDENTIFIER:
        name_parts.append(tokens[i].value)
        i += 1
        if i < len(tokens) and tokens[i].type == TokenType.DOT:
            i += 1
        else:
            break
    if not name_parts:
        return None
    i = skip_type_arguments(tokens, i)
    if i >= len(tokens) or tokens[i].type != TokenType.LPAREN:
        return None
    close = matching_close(tokens, i)
    if close != len(tokens) - 1:
        return None
    return ".".join(name_parts), tokens[i + 1 : close]


def skip_type_arguments(tokens: list[Token], index: int) -> int:
    """Skip a ``<...>`` type argument list starting at *index*, if present."""
    if index >= len(tokens) or tokens[index].type != TokenType.OPERATOR or tokens[index].value != "<":
        return index
    depth = 0
    for i in range(index, len(tokens)):
        tok = tokens[i]
        if tok.type == TokenType.OPERATOR and tok.value == "<":
            depth += 1
        elif tok.type == TokenType.OPERATOR and tok.value == ">":
            depth -= 1
            if depth == 0:
                return i + 1
    return index


def string_token(tokens: list[Token]) -> Token | None:
    """Return the STRING token if *tokens* is a (possibly parenthesised) string literal."""
    tokens = unwrap_parens(tokens)
    if len(tokens) == 1 and tokens[0].type == TokenType.STRING:
        return tokens[0]
    return None


def literal_text(source: str, tokens: list[Token]) -> str:
    """Return the inner text of a string literal, or the expression text otherwise."""
    tok = string_token(tokens)
    if tok is not None:
        return tok.value
    return source_text(source, unwrap_parens(tokens))


def boolean_value(tokens: list[Token]) -> bool | None:
    """Return the value of a literal ``true``/``false``, optionally parenthesised."""
    tokens = unwrap_parens(tokens)
    if len(tokens) == 1 and tokens[0].type == TokenType.IDENTIFIER and tokens[0].value in ("true", "false"):
        return tokens[0].value == "true"
    return None


def block_text(source: str, block: Block, comments: list[Token] | None = None) -> str:
    """Return the dedented body of *block* without its braces.

    Args:
        source: The full script text.
        block: The block whose body is wanted.
        comments: When given, these comment tokens are removed from the body,
            along with lines left empty by the removal.
    """
    start, end = block.inner_start, block.inner_end
    if not comments:
        return textwrap.dedent(source[start:end].strip("\n")).strip()

    pieces: list[str] = []
    pos = start
    for tok in comments:
        if tok.offset < start or tok.end > end:
            continue
        pieces.append(source[pos : tok.offset])
        pieces.append(_COMMENT_MARK)
        pos = tok.end
    pieces.append(source[pos:end])

    lines: list[str] = []
    for line in "".join(pieces).split("\n"):
        if _COMMENT_MARK in line and not line.replace(_COMMENT_MARK, "").strip():
            continue
        lines.append(line.replace(_COMMENT_MARK, "").rstrip())
    return textwrap.dedent("\n".join(lines).strip("\n")).strip()


def location_text(source: str, tokens: list[Token]) -> str:
    """Return a URL or path value, unwrapping ``uri(...)``, ``file(...)`` and ``URI(...)``."""
    tokens = unwrap_parens(tokens)
    call = split_call(tokens)
    if call is not None and call[0] in _LOCATION_WRAPPERS:
        return literal_text(source, call[1])
    return literal_text(source, tokens)


# ################
# Implementation
# ################

_OPENERS: frozenset[TokenType] = frozenset({TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE})

_CLOSERS: frozenset[TokenType] = frozenset({TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE})

_COMMENT_MARK = "\x00"

_LOCATION_WRAPPERS: frozenset[str] = frozenset({"uri", "file", "URI", "java.net.URI", "url"})
