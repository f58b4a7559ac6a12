# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic block parser for Gradle build scripts.

Turns the token stream into a tree of statements and ``{ ... }`` blocks
without interpreting any identifier. Semantic sub-parsers (dependencies,
plugins, repositories, tasks) walk this tree afterwards.

A statement is the run of tokens up to a line break or ``;`` at bracket
depth zero. A statement continues on the next line when the current line
ends in an operator, comma, dot, ``=`` or ``:``, when the next line starts
with ``.`` or ``?.``, or when the next line opens the statement's body with
a lone ``{``.

On one line, an identifier after a closing ``}`` (other than ``else`` and
similar keywords) starts a new statement, as does ``name =`` after a
complete assignment. Any other token after a body block is kept in the
statement's tail with a warning.
"""

from dataclasses import dataclass, field

from gradle_parser.parser.lexer import SourceError, Token, TokenType, tokenize

# ###############
# Public Interface
# ###############


class ParseError(SourceError):
    """Raised on unmatched braces, which make element boundaries unknowable."""


class StatementError(Exception):
    """Raised by sub-parsers for a single statement they cannot interpret.

    The builder turns these into warnings and continues with the next
    statement.

    Attributes:
        token: The token the problem is reported at.
    """

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(message)
        self.message = message
        self.token = token


@dataclass
class Block:
    """A ``{ ... }`` block, or the implicit root block of a script.

    Attributes:
        statements: Statements in source order.
        open_brace: The opening brace token, ``None`` for the root block.
        close_brace: The closing brace token, ``None`` for the root block.
    """

    statements: list["Statement"] = field(default_factory=list)
    open_brace: Token | None = None
    close_brace: Token | None = None

    @property
    def start(self) -> int:
        return self.open_brace.offset if self.open_brace else 0

    @property
    def end(self) -> int:
        return self.close_brace.end if self.close_brace else 0

    @property
    def inner_start(self) -> int:
        """Offset just after the opening brace."""
        return self.open_brace.end if self.open_brace else 0

    @property
    def inner_end(self) -> int:
        """Offset of the closing brace."""
        return self.close_brace.offset if self.close_brace else 0


@dataclass
class Statement:
    """One statement of a build script.

    Attributes:
        tokens: Significant tokens before the first body block. Tokens of
            closures nested inside parentheses are included verbatim.
        blocks: Body blocks at bracket depth zero, usually zero or one
            (``if (...) { } else { }`` yields two).
        tail: Significant tokens after the first body block on the same
            logical line (``} else``, ``}.configure()``).
        name: The leading dotted identifier path, e.g. ``tasks.register``.
        name_length: Number of tokens that make up ``name``.
    """

    tokens: list[Token] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    tail: list[Token] = field(default_factory=list)
    name: str = ""
    name_length: int = 0

    @property
    def body(self) -> Block | None:
        """The first body block, if any."""
        return self.blocks[0] if self.blocks else None

    @property
    def first_token(self) -> Token:
        if self.tokens:
            return self.tokens[0]
        block = self.blocks[0]
        assert block.open_brace is not None
        return block.open_brace

    @property
    def start(self) -> int:
        return self.first_token.offset

    @property
    def end(self) -> int:
        ends = [self.tokens[-1].end] if self.tokens else []
        ends.extend(block.end for block in self.blocks)
        if self.tail:
            ends.append(self.tail[-1].end)
        return max(ends)

    @property
    def arguments(self) -> list[Token]:
        """Tokens following the statement name, up to the body block."""
        return self.tokens[self.name_length :]

    @property
    def is_assignment(self) -> bool:
        """True for ``name = expression``."""
        return len(self.tokens) > self.name_length > 0 and self.tokens[self.name_length].type == TokenType.EQUALS

    @property
    def value_tokens(self) -> list[Token]:
        """The right-hand side of an assignment; empty for other statements."""
        if not self.is_assignment:
            return []
        return self.tokens[self.name_length + 1 :]


@dataclass
class Script:
    """A parsed build script.

    Attributes:
        source: The original text.
        root: The implicit top-level block.
        comments: All comment tokens in source order.
        warnings: Recoverable structural problems found while parsing.
    """

    source: str
    root: Block
    comments: list[Token] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class Diagnostics:
    """Collects non-fatal warnings formatted with their source location."""

    def __init__(self, warnings: list[str] | None = None) -> None:
        self.warnings: list[str] = warnings if warnings is not None else []

    def warn(self, message: str, token: Token) -> None:
        self.warnings.append(f"Line {token.line}, column {token.column}: {message}")


def parse_script(source: str) -> Script:
    """Parse Gradle script text into a statement tree.

    Args:
        source: The full text of a build script, in either dialect.

    Returns:
        A Script whose root block holds the top-level statements.

    Raises:
        LexerError: On unterminated strings, comments or back-ticked identifiers.
        ParseError: On an unmatched ``{`` or ``}``. The error carries the
            offset of the offending brace.
    """
    tokens = tokenize(source)
    return _BlockParser(source, tokens).parse()


def statement_name(tokens: list[Token]) -> tuple[str, int]:
    """Return the leading ``IDENT(.IDENT)*`` path of *tokens* and its token count."""
    if not tokens or tokens[0].type != TokenType.IDENTIFIER:
        return "", 0
    parts = [tokens[0].value]
    count = 1
    while (
        count + 1 < len(tokens)
        and tokens[count].type == TokenType.DOT
        and tokens[count + 1].type == TokenType.IDENTIFIER
    ):
        parts.append(tokens[count + 1].value)
        count += 2
    return ".".join(parts), count


# ################
# Implementation
# ################

_OPENERS: frozenset[TokenType] = frozenset({TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE})

_CLOSER_TO_OPENER: dict[TokenType, TokenType] = {
    TokenType.RPAREN: TokenType.LPAREN,
    TokenType.RBRACKET: TokenType.LBRACKET,
    TokenType.RBRACE: TokenType.LBRACE,
}

_CONTINUATION_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.COMMA, TokenType.DOT, TokenType.EQUALS, TokenType.COLON}
)

_NON_CONTINUING_OPERATORS: frozenset[str] = frozenset({"++", "--"})

_LEADING_CONTINUATION_OPERATORS: frozenset[str] = frozenset({"?.", "?:"})

# Identifiers that continue a statement after its body block (``} else {``).
_BLOCK_TAIL_KEYWORDS: frozenset[str] = frozenset({"else", "catch", "finally", "while", "as"})


class _BlockParser:
    """Statement/block tree builder over a comment-free token list."""

    def __init__(self, source: str, tokens: list[Token]) -> None:
        self._source = source
        self._comments = [t for t in tokens if t.type in (TokenType.LINE_COMMENT, TokenType.BLOCK_COMMENT)]
        self._tokens = [t for t in tokens if t.type not in (TokenType.LINE_COMMENT, TokenType.BLOCK_COMMENT)]
        self._pos = 0
        self._diagnostics = Diagnostics()

    def parse(self) -> Script:
        root = Block(statements=self._parse_statements(None))
        return Script(
            source=self._source,
            root=root,
            comments=self._comments,
            warnings=self._diagnostics.warnings,
        )

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek_type(self) -> TokenType:
        return self._tokens[self._pos].type

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _next_significant(self) -> Token:
        """Return the first token after the current one that is not a line break."""
        pos = self._pos + 1
        while self._tokens[pos].type == TokenType.NEWLINE:
            pos += 1
        return self._tokens[pos]

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_statements(self, open_brace: Token | None) -> list[Statement]:
        """Parse statements until the closing brace of *open_brace* (or EOF for the root)."""
        statements: list[Statement] = []
        while True:
            while self._peek_type() in (TokenType.NEWLINE, TokenType.SEMICOLON):
                self._advance()
            tok = self._current()
            if tok.type == TokenType.EOF:
                if open_brace is not None:
                    raise ParseError("Unmatched '{'", open_brace.offset, open_brace.line, open_brace.column)
                return statements
            if tok.type == TokenType.RBRACE:
                if open_brace is None:
                    raise ParseError("Unmatched '}'", tok.offset, tok.line, tok.column)
                return statements
            statements.append(self._parse_statement())

    def _parse_block(self) -> Block:
        """Parse ``{ statements }`` starting at the current LBRACE token."""
        open_brace = self._advance()
        statements = self._parse_statements(open_brace)
        close_brace = self._advance()
        return Block(statements=statements, open_brace=open_brace, close_brace=close_brace)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> Statement:
        stmt = Statement()
        open_stack: list[Token] = []
        after_block = False
        while True:
            tok = self._current()
            if tok.type == TokenType.EOF:
                if open_stack:
                    self._close_at_eof(open_stack)
                break
            if open_stack:
                if not self._consume_nested(stmt, open_stack):
                    break
                continue
            if tok.type == TokenType.NEWLINE:
                if not self._continues(stmt):
                    break
                self._advance()
            elif tok.type in (TokenType.SEMICOLON, TokenType.RBRACE):
                break
            elif tok.type == TokenType.LBRACE:
                stmt.blocks.append(self._parse_block())
                after_block = True
            elif self._starts_new_statement(stmt, after_block):
                break
            else:
                if after_block and tok.type not in (TokenType.DOT, TokenType.OPERATOR, TokenType.IDENTIFIER):
                    self._diagnostics.warn(f"Unexpected '{tok.value}' after block", tok)
                if tok.type in (TokenType.LPAREN, TokenType.LBRACKET):
                    open_stack.append(tok)
                (stmt.tail if stmt.blocks else stmt.tokens).append(self._advance())
                after_block = False
        stmt.name, stmt.name_length = statement_name(stmt.tokens)
        return stmt

    def _starts_new_statement(self, stmt: Statement, after_block: bool) -> bool:
        """Return True when the current token begins another statement on the same line.

        ``plugins { } group = 'x'`` and ``group = 'x' version = '1'`` both
        hold two statements.
        """
        tok = self._current()
        if tok.type != TokenType.IDENTIFIER:
            return False
        if after_block:
            return tok.value not in _BLOCK_TAIL_KEYWORDS
        if stmt.blocks or self._tokens[self._pos + 1].type != TokenType.EQUALS:
            return False
        _, length = statement_name(stmt.tokens)
        if length == 0 or len(stmt.tokens) <= length + 1 or stmt.tokens[length].type != TokenType.EQUALS:
            return False
        last = stmt.tokens[-1]
        return last.type not in _CONTINUATION_TYPES and last.type != TokenType.OPERATOR

    def _consume_nested(self, stmt: Statement, open_stack: list[Token]) -> bool:
        """Consume one token inside parentheses or brackets.

        Returns False when the statement must end because a ``}`` closes the
        enclosing block while a parenthesis is still open.

        Raises:
            ParseError: If a bracket closes over a ``{`` that is still open.
        """
        tok = self._current()
        target = stmt.tail if stmt.blocks else stmt.tokens
        if tok.type == TokenType.NEWLINE:
            self._advance()
            return True
        if tok.type in _OPENERS:
            open_stack.append(tok)
        elif tok.type in _CLOSER_TO_OPENER:
            opener = _CLOSER_TO_OPENER[tok.type]
            index = next((i for i in range(len(open_stack) - 1, -1, -1) if open_stack[i].type == opener), None)
            if index is None:
                if tok.type == TokenType.RBRACE:
                    self._diagnostics.warn(f"Unclosed '{open_stack[-1].value}'", open_stack[-1])
                    open_stack.clear()
                    return False
            else:
                unclosed = open_stack[index + 1 :]
                braces = [t for t in unclosed if t.type == TokenType.LBRACE]
                if braces:
                    raise ParseError("Unmatched '{'", braces[0].offset, braces[0].line, braces[0].column)
                if unclosed:
                    self._diagnostics.warn(f"Unclosed '{unclosed[-1].value}'", unclosed[-1])
                del open_stack[index:]
        target.append(self._advance())
        return True

    def _close_at_eof(self, open_stack: list[Token]) -> None:
        braces = [t for t in open_stack if t.type == TokenType.LBRACE]
        if braces:
            brace = braces[0]
            raise ParseError("Unmatched '{'", brace.offset, brace.line, brace.column)
        self._diagnostics.warn(f"Unclosed '{open_stack[-1].value}'", open_stack[-1])
        open_stack.clear()

    def _continues(self, stmt: Statement) -> bool:
        """Decide whether the statement continues past the line break at the current token."""
        last: Token | None = None
        if stmt.tail:
            last = stmt.tail[-1]
        elif stmt.tokens and not stmt.blocks:
            last = stmt.tokens[-1]
        if last is not None:
            if last.type in _CONTINUATION_TYPES:
                return True
            if last.type == TokenType.OPERATOR and last.value not in _NON_CONTINUING_OPERATORS:
                return True
        nxt = self._next_significant()
        if nxt.type == TokenType.DOT:
            return True
        if nxt.type == TokenType.OPERATOR and nxt.value in _LEADING_CONTINUATION_OPERATORS:
            return True
        return nxt.type == TokenType.LBRACE and bool(stmt.tokens) and not stmt.blocks
