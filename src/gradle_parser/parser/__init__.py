# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner, block parser and model builder for Gradle build scripts."""

from gradle_parser.parser.blocks import ParseError, StatementError
from gradle_parser.parser.lexer import LexerError, SourceError
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleFileError, GradleParser
from gradle_parser.parser.source_aware import SourceAwareParser

__all__ = [
    "GradleFileError",
    "GradleParser",
    "LexerError",
    "ParseError",
    "ParserOptions",
    "SourceAwareParser",
    "SourceError",
    "StatementError",
]
