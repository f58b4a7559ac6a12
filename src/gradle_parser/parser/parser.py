# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry points for parsing Gradle build files from strings, files and streams."""

import logging
import time
from pathlib import Path
from typing import IO

from gradle_parser.model.entities import ParseResult
from gradle_parser.parser.blocks import parse_script
from gradle_parser.parser.builder import BuildOutput, build_project
from gradle_parser.parser.lexer import SourceError
from gradle_parser.parser.options import ParserOptions

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class GradleFileError(Exception):
    """Raised when a build file cannot be read or decoded.

    Attributes:
        path: The offending path, or ``None`` for streams.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class GradleParser:
    """Parses Groovy and Kotlin DSL build scripts into a ParseResult.

    A parser holds nothing but its immutable options, so one instance can be
    shared between threads.

    Args:
        options: Feature flags. Defaults to everything enabled.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        self.options = options or ParserOptions()

    def parse(self, content: str, strict: bool = False) -> ParseResult:
        """Parse build-script text.

        Args:
            content: The script text.
            strict: Raise on structural errors instead of recording them.

        Returns:
            The parse result. On a structural error (and ``strict`` False) the
            project is empty and the error is the single entry of ``errors``.

        Raises:
            LexerError: With ``strict``, on unterminated literals or comments.
            ParseError: With ``strict``, on unmatched braces.
        """
        started = time.perf_counter()
        try:
            _, result = self.build(content, started)
        except SourceError as exc:
            if strict:
                raise
            logger.debug("Structural error while parsing: %s", exc)
            return ParseResult(
                raw_text=self._raw(content),
                errors=[str(exc)],
                parse_time=_elapsed(started),
            )
        return result

    def parse_file(self, path: str | Path, strict: bool = False) -> ParseResult:
        """Parse a build file from disk.

        The project's ``file_path`` is set to *path*, and its ``name``
        defaults to the name of the directory containing the file.

        Raises:
            GradleFileError: If the file cannot be read or is not valid UTF-8.
        """
        path = Path(path)
        result = self.parse(read_build_file(path), strict=strict)
        return with_file_path(result, path)

    def parse_reader(self, reader: IO[str] | IO[bytes], strict: bool = False) -> ParseResult:
        """Parse a script from a text or binary stream. Bytes are decoded as UTF-8.

        Raises:
            GradleFileError: If the stream cannot be read or decoded.
        """
        try:
            data = reader.read()
            content = data.decode("utf-8") if isinstance(data, bytes) else data
        except (OSError, UnicodeDecodeError) as exc:
            raise GradleFileError(f"Cannot read build script stream: {exc}") from exc
        return self.parse(content, strict=strict)

    def build(self, content: str, started: float | None = None) -> tuple[BuildOutput, ParseResult]:
        """Run the pipeline and return the builder output together with the result.

        Structural errors always propagate. The source-position tracker uses
        the builder output to map every element back onto *content*.
        """
        if started is None:
            started = time.perf_counter()
        script = parse_script(content)
        output = build_project(script, self.options)
        result = ParseResult(
            project=output.project,
            raw_text=self._raw(content),
            warnings=output.warnings,
            parse_time=_elapsed(started),
        )
        logger.debug("Parsed build script in %s with %d warning(s)", result.parse_time, len(result.warnings))
        return output, result

    def _raw(self, content: str) -> str | None:
        return content if self.options.collect_raw_content else None


def read_build_file(path: str | Path) -> str:
    """Read a build file as UTF-8, keeping its line endings untouched.

    Raises:
        GradleFileError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise GradleFileError(f"Cannot read {path}: {exc}", path) from exc


def with_file_path(result: ParseResult, path: Path) -> ParseResult:
    """Return *result* with ``file_path`` set and ``name`` defaulted from the parent directory."""
    project = result.project
    name = project.name or path.resolve().parent.name
    project = project.model_copy(update={"file_path": str(path), "name": name})
    return result.model_copy(update={"project": project})


# ################
# Implementation
# ################


def _elapsed(started: float) -> str:
    return f"{(time.perf_counter() - started) * 1000:.3f}ms"
