# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy of the structured editor.

Editor errors are fatal to a single edit call only and are kept apart from
the parser's ``SourceError`` hierarchy.
"""


class EditorError(Exception):
    """Base class for all structured-editing failures."""


class ElementNotFoundError(EditorError):
    """Raised when no dependency, plugin or property matches the request."""


class AmbiguousMatchError(EditorError):
    """Raised when several declarations match and nothing disambiguates them.

    Attributes:
        count: Number of matching declarations.
    """

    def __init__(self, message: str, count: int) -> None:
        super().__init__(message)
        self.count = count


class UnsupportedEditError(EditorError):
    """Raised when the matched declaration offers no place to splice the edit."""


class DependencyExistsError(EditorError):
    """Raised when adding a dependency that is already declared in that scope."""


class ModificationError(EditorError):
    """Raised when queued modifications are stale, out of bounds or overlapping."""
