# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Gradle build scripts.

Converts raw Groovy DSL or Kotlin DSL text into a flat sequence of tokens.
The scanner is dialect-agnostic: it knows about both quoting styles, Kotlin
back-ticked identifiers and string interpolation, but nothing about the
meaning of identifiers.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Gradle lexer."""

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    DOT = "."
    COLON = ":"
    SEMICOLON = ";"
    EQUALS = "="
    OPERATOR = "OPERATOR"

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Trivia
    LINE_COMMENT = "LINE_COMMENT"
    BLOCK_COMMENT = "BLOCK_COMMENT"
    NEWLINE = "NEWLINE"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The token text. For STRING tokens this is the inner text
            between the delimiters, without escape processing, so that
            offsets inside the value map directly onto the source.
        offset: 0-based offset of the first character of the token.
        end: 0-based offset one past the last character of the token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        quote: The string delimiter (``'``, ``"``, ``'''`` or ``\"\"\"``) for
            STRING tokens, otherwise empty.
    """

    type: TokenType
    value: str
    offset: int
    end: int
    line: int
    column: int
    quote: str = ""

    @property
    def content_offset(self) -> int:
        """Offset of the first character after the opening delimiter."""
        return self.offset + len(self.quote)

    @property
    def content_end(self) -> int:
        """Offset of the closing delimiter (end of the inner text)."""
        return self.end - len(self.quote)


class SourceError(Exception):
    """Base class for fatal errors tied to a position in the source text.

    Attributes:
        offset: 0-based offset of the offending character.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, offset: int, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column


class LexerError(SourceError):
    """Raised when the scanner encounters an unterminated literal or comment."""


def tokenize(source: str) -> list[Token]:
    """Tokenize Gradle script text into a sequence of tokens.

    Comments and line breaks are kept as tokens; other whitespace is dropped.
    The final token is always an EOF token.

    Args:
        source: The full text of a ``build.gradle`` or ``build.gradle.kts`` file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unterminated string literals, block comments or
            back-ticked identifiers. The error points at the opening delimiter.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "=": TokenType.EQUALS,
}

_TWO_CHAR_OPERATORS: frozenset[str] = frozenset(
    {"==", "!=", "<=", ">=", "+=", "-=", "*=", "/=", "->", "&&", "||", "?:", "?.", "::", "..", "++", "--", "<<", "=~"}
)


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_blanks()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", self._pos, self._pos, self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, ahead: int = 1) -> str:
        """Return the character *ahead* positions further, or '' past the end."""
        if self._pos + ahead < len(self._source):
            return self._source[self._pos + ahead]
        return ""

    def _startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, start: int, line: int, col: int, quote: str = "") -> None:
        self._tokens.append(Token(token_type, value, start, self._pos, line, col, quote))

    # ------------------------------------------------------------------
    # Whitespace
    # ------------------------------------------------------------------

    def _skip_blanks(self) -> None:
        """Skip whitespace other than line breaks, and escaped line breaks."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "\\" and self._peek() == "\n":
                self._advance()
                self._advance()
            elif (ch != "\n" and ch.isspace()) or ch == "\ufeff":
                self._advance()
            else:
                break

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        start = self._pos
        line = self._line
        col = self._column

        if ch == "\n":
            self._advance()
            self._emit(TokenType.NEWLINE, "\n", start, line, col)
        elif ch == "/" and self._peek() == "/":
            self._scan_line_comment(start, line, col)
        elif ch == "/" and self._peek() == "*":
            self._scan_block_comment(start, line, col)
        elif ch == "#" and self._peek() == "!" and start == 0:
            self._scan_line_comment(start, line, col)
        elif ch in ("'", '"'):
            self._scan_string(start, line, col)
        elif ch == "`":
            self._scan_backtick_identifier(start, line, col)
        elif ch.isdigit():
            self._scan_number(start, line, col)
        elif ch.isalpha() or ch in "_$":
            self._scan_identifier(start, line, col)
        elif self._source[self._pos : self._pos + 2] in _TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            self._emit(TokenType.OPERATOR, self._source[start : self._pos], start, line, col)
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(_SINGLE_CHAR_TOKENS[ch], ch, start, line, col)
        else:
            self._advance()
            self._emit(TokenType.OPERATOR, ch, start, line, col)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _scan_line_comment(self, start: int, line: int, col: int) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        self._emit(TokenType.LINE_COMMENT, self._source[start : self._pos], start, line, col)

    def _scan_block_comment(self, start: int, line: int, col: int) -> None:
        """Consume from '/*' through the matching '*/'."""
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                self._emit(TokenType.BLOCK_COMMENT, self._source[start : self._pos], start, line, col)
                return
            self._advance()
        raise LexerError("Unterminated block comment", start, line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, start: int, line: int, col: int) -> None:
        """Scan a quoted string literal and emit it as a STRING token."""
        quote = self._current() * 3 if self._startswith(self._current() * 3) else self._current()
        self._skip_string(quote, start, line, col)
        value = self._source[start + len(quote) : self._pos - len(quote)]
        self._emit(TokenType.STRING, value, start, line, col, quote)

    def _skip_string(self, quote: str, start: int, line: int, col: int) -> None:
        """Consume a string literal delimited by *quote*, including both delimiters.

        Double-quoted strings may contain ``${...}`` interpolations, which are
        skipped as balanced, opaque substrings.
        """
        for _ in quote:
            self._advance()
        multiline = len(quote) == 3
        interpolating = quote[0] == '"'
        while self._pos < len(self._source):
            ch = self._current()
            if self._startswith(quote):
                for _ in quote:
                    self._advance()
                return
            if ch == "\n" and not multiline:
                break
            if ch == "\\":
                self._advance()
                if self._pos < len(self._source) and (multiline or self._current() != "\n"):
                    self._advance()
            elif interpolating and ch == "$" and self._peek() == "{":
                self._skip_interpolation(start, line, col)
            else:
                self._advance()
        raise LexerError("Unterminated string literal", start, line, col)

    def _skip_interpolation(self, start: int, line: int, col: int) -> None:
        """Consume a ``${...}`` expression, honouring nested braces and strings."""
        self._advance()  # $
        self._advance()  # {
        depth = 1
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "{":
                depth += 1
                self._advance()
            elif ch == "}":
                depth -= 1
                self._advance()
                if depth == 0:
                    return
            elif ch in ("'", '"'):
                quote = ch * 3 if self._startswith(ch * 3) else ch
                self._skip_string(quote, self._pos, self._line, self._column)
            else:
                self._advance()
        raise LexerError("Unterminated string literal", start, line, col)

    def _scan_backtick_identifier(self, start: int, line: int, col: int) -> None:
        """Scan a Kotlin back-ticked identifier such as `java-library`."""
        self._advance()  # opening `
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "`":
                self._advance()
                self._emit(TokenType.IDENTIFIER, self._source[start + 1 : self._pos - 1], start, line, col)
                return
            if ch == "\n":
                break
            self._advance()
        raise LexerError("Unterminated back-ticked identifier", start, line, col)

    def _scan_number(self, start: int, line: int, col: int) -> None:
        """Scan a numeric literal, including type suffixes such as ``L`` or ``f``.

        A fraction requires a digit right after the decimal point so that
        ranges (``1..5``) and member access stay separate tokens.
        """
        self._consume_word()
        if self._current() == "." and self._peek().isdigit():
            self._advance()  # consume the '.'
            self._consume_word()
        self._emit(TokenType.NUMBER, self._source[start : self._pos], start, line, col)

    def _scan_identifier(self, start: int, line: int, col: int) -> None:
        """Scan an identifier. Gradle has no reserved words at this level."""
        self._consume_word()
        self._emit(TokenType.IDENTIFIER, self._source[start : self._pos], start, line, col)

    def _consume_word(self) -> None:
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() in "_$"):
            self._advance()
