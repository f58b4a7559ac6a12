# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Minimal-diff editing of Gradle build files."""

from gradle_parser.editor.editor import (
    DEFAULT_SCOPE,
    Dialect,
    GradleEditor,
    add_dependency,
    update_dependency_version,
    update_plugin_version,
    update_property,
)
from gradle_parser.editor.errors import (
    AmbiguousMatchError,
    DependencyExistsError,
    EditorError,
    ElementNotFoundError,
    ModificationError,
    UnsupportedEditError,
)
from gradle_parser.editor.serializer import (
    DiffLine,
    Modification,
    ModificationKind,
    apply_modifications,
    generate_diff,
    summarize_modifications,
)

__all__ = [
    "DEFAULT_SCOPE",
    "AmbiguousMatchError",
    "DependencyExistsError",
    "Dialect",
    "DiffLine",
    "EditorError",
    "ElementNotFoundError",
    "GradleEditor",
    "Modification",
    "ModificationError",
    "ModificationKind",
    "UnsupportedEditError",
    "add_dependency",
    "apply_modifications",
    "generate_diff",
    "summarize_modifications",
    "update_dependency_version",
    "update_plugin_version",
    "update_property",
]
