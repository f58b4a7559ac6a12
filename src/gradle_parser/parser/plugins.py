# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Plugin declaration parser.

Handles statements of a ``plugins { }`` block in both dialects::

    id 'org.springframework.boot' version '2.7.0' apply false
    id("com.android.application") version "8.1.0"
    id("x").version("1.0").apply(false)
    kotlin("jvm") version "1.9.0"
    alias(libs.plugins.kotlin.jvm)
    java
    `java-library`

and the legacy top-level ``apply plugin: 'x'`` / ``apply(plugin = "x")``.
"""

from dataclasses import dataclass

from gradle_parser.model.entities import Plugin
from gradle_parser.parser.blocks import Statement, StatementError
from gradle_parser.parser.expressions import (
    boolean_value,
    literal_text,
    matching_close,
    named_arguments,
    source_text,
    split_arguments,
    string_token,
    unwrap_parens,
)
from gradle_parser.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############

KOTLIN_PLUGIN_PREFIX = "org.jetbrains.kotlin."


@dataclass
class PluginDeclaration:
    """A parsed plugin with the raw offsets the source tracker needs.

    Attributes:
        plugin: The model element.
        start: Offset of the statement start.
        end: Offset of the statement end, excluding trailing comments.
        id_span: ``(start, end)`` of the id text without quotes.
        version_span: ``(start, end)`` of the version text without quotes.
        version_insert_offset: Offset right after a quoted id expression,
            where `` version "x"`` can be inserted.
        quote: The quote character of the id literal (empty if unquoted).
    """

    plugin: Plugin
    start: int
    end: int
    id_span: tuple[int, int] | None = None
    version_span: tuple[int, int] | None = None
    version_insert_offset: int | None = None
    quote: str = ""


def parse_plugin_statement(stmt: Statement, source: str) -> PluginDeclaration:
    """Parse one statement of a ``plugins`` block.

    Raises:
        StatementError: If the statement is not a plugin declaration.
    """
    return _PluginStatementParser(stmt, source).parse()


def parse_apply_statement(stmt: Statement, source: str) -> PluginDeclaration | None:
    """Parse ``apply plugin: 'x'`` or ``apply(plugin = "x")``.

    Returns:
        The plugin declaration, or ``None`` for other ``apply`` forms such as
        ``apply from: 'other.gradle'``.
    """
    named = named_arguments(split_arguments(unwrap_parens(stmt.arguments)))
    if not named or "plugin" not in named:
        return None
    value_tokens = unwrap_parens(named["plugin"])
    tok = string_token(value_tokens)
    plugin = Plugin(id=literal_text(source, value_tokens))
    decl = PluginDeclaration(plugin=plugin, start=stmt.start, end=stmt.end)
    if tok is not None:
        decl.id_span = (tok.content_offset, tok.content_end)
        decl.quote = tok.quote
    elif value_tokens:
        decl.id_span = (value_tokens[0].offset, value_tokens[-1].end)
    return decl


# ################
# Implementation
# ################


class _PluginStatementParser:
    """Walks the tokens of a single plugin statement."""

    def __init__(self, stmt: Statement, source: str) -> None:
        self._stmt = stmt
        self._source = source
        self._tokens = stmt.tokens
        self._pos = 0

    def parse(self) -> PluginDeclaration:
        if self._stmt.blocks or not self._tokens or self._tokens[0].type != TokenType.IDENTIFIER:
            raise StatementError("Expected plugin declaration", self._stmt.first_token)

        decl = self._parse_id()
        if decl.quote:
            decl.version_insert_offset = self._tokens[self._pos - 1].end
        version = ""
        apply = True
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            if tok.type == TokenType.DOT:
                self._pos += 1
            elif tok.type == TokenType.IDENTIFIER and tok.value == "version":
                self._pos += 1
                version, decl.version_span = self._parse_version()
            elif tok.type == TokenType.IDENTIFIER and tok.value == "apply":
                self._pos += 1
                apply = self._parse_apply_flag(tok)
            else:
                raise StatementError(f"Unexpected token {tok.value!r} in plugin declaration", tok)

        decl.plugin = decl.plugin.model_copy(update={"version": version, "apply": apply})
        return decl

    # ------------------------------------------------------------------
    # Plugin id forms
    # ------------------------------------------------------------------

    def _parse_id(self) -> PluginDeclaration:
        head = self._tokens[0]
        if head.value == "id":
            self._pos = 1
            tok = self._expect_string_argument(head)
            return self._declaration(Plugin(id=tok.value), (tok.content_offset, tok.content_end), tok.quote)
        if head.value == "kotlin" and self._at(1, TokenType.LPAREN):
            self._pos = 1
            tok = self._expect_string_argument(head)
            plugin = Plugin(id=KOTLIN_PLUGIN_PREFIX + tok.value)
            return self._declaration(plugin, (tok.content_offset, tok.content_end), tok.quote)
        if head.value == "alias" and self._at(1, TokenType.LPAREN):
            close = matching_close(self._tokens, 1)
            if close < 0:
                raise StatementError("Unclosed alias(...)", head)
            inner = self._tokens[2:close]
            self._pos = close + 1
            accessor = source_text(self._source, inner)
            span = (inner[0].offset, inner[-1].end) if inner else None
            return self._declaration(Plugin(id=accessor, config={"alias": True}), span, "")
        return self._parse_bare_id()

    def _parse_bare_id(self) -> PluginDeclaration:
        """Parse a core plugin referenced by identifier, e.g. ``java`` or `` `java-library` ``."""
        name, count = self._stmt.name, self._stmt.name_length
        self._pos = count
        first, last = self._tokens[0], self._tokens[count - 1]
        if count == 1 and self._source[first.offset] == "`":
            span = (first.offset + 1, first.end - 1)
        else:
            span = (first.offset, last.end)
        return self._declaration(Plugin(id=name), span, "")

    def _declaration(self, plugin: Plugin, id_span: tuple[int, int] | None, quote: str) -> PluginDeclaration:
        return PluginDeclaration(
            plugin=plugin,
            start=self._stmt.start,
            end=self._stmt.end,
            id_span=id_span,
            quote=quote,
        )

    def _expect_string_argument(self, head: Token) -> Token:
        """Consume ``'x'`` or ``("x")`` and return the string token."""
        if self._at(self._pos, TokenType.STRING):
            self._pos += 1
            return self._tokens[self._pos - 1]
        if self._at(self._pos, TokenType.LPAREN):
            close = matching_close(self._tokens, self._pos)
            tok = string_token(self._tokens[self._pos : close + 1]) if close > 0 else None
            if tok is not None:
                self._pos = close + 1
                return tok
        raise StatementError(f"Expected plugin id string after {head.value!r}", head)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def _parse_version(self) -> tuple[str, tuple[int, int] | None]:
        """Parse the value following ``version``: a literal, ``("x")`` or an expression path."""
        start = self._pos
        if self._at(start, TokenType.STRING):
            tok = self._tokens[start]
            self._pos += 1
            return tok.value, (tok.content_offset, tok.content_end)
        if self._at(start, TokenType.LPAREN):
            close = matching_close(self._tokens, start)
            if close < 0:
                raise StatementError("Unclosed version(...)", self._tokens[start])
            inner = self._tokens[start + 1 : close]
            self._pos = close + 1
            tok = string_token(inner)
            if tok is not None:
                return tok.value, (tok.content_offset, tok.content_end)
            return literal_text(self._source, inner), None
        if self._at(start, TokenType.IDENTIFIER):
            end = self._skip_expression_path(start)
            self._pos = end
            return source_text(self._source, self._tokens[start:end]), None
        tok = self._tokens[start] if start < len(self._tokens) else self._tokens[-1]
        raise StatementError("Expected version after 'version'", tok)

    def _skip_expression_path(self, pos: int) -> int:
        """Skip ``a.b.c()`` style accessor chains and return the index after them."""
        pos += 1
        while pos < len(self._tokens):
            if self._at(pos, TokenType.DOT) and self._at(pos + 1, TokenType.IDENTIFIER):
                if self._tokens[pos + 1].value in ("version", "apply"):
                    break
                pos += 2
            elif self._at(pos, TokenType.LPAREN):
                close = matching_close(self._tokens, pos)
                if close < 0:
                    break
                pos = close + 1
            else:
                break
        return pos

    def _parse_apply_flag(self, keyword: Token) -> bool:
        end = self._pos
        if self._at(end, TokenType.LPAREN):
            end = matching_close(self._tokens, end)
        value = boolean_value(self._tokens[self._pos : end + 1]) if end >= 0 else None
        if value is None:
            raise StatementError("Expected true or false after 'apply'", keyword)
        self._pos = end + 1
        return value

    def _at(self, pos: int, token_type: TokenType) -> bool:
        return pos < len(self._tokens) and self._tokens[pos].type == token_type
