# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Locating Gradle build and settings files on disk."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

BUILD_FILE_NAMES: tuple[str, ...] = ("build.gradle", "build.gradle.kts")
SETTINGS_FILE_NAMES: tuple[str, ...] = ("settings.gradle", "settings.gradle.kts")

# Output directories never descended into. Hidden directories are skipped too.
SKIPPED_DIRECTORIES: frozenset[str] = frozenset({"build", "node_modules", "out"})


def is_build_gradle_file(path: str | Path) -> bool:
    return Path(path).name in BUILD_FILE_NAMES


def is_settings_gradle_file(path: str | Path) -> bool:
    return Path(path).name in SETTINGS_FILE_NAMES


def is_kotlin_dsl(path: str | Path) -> bool:
    """True for Kotlin DSL scripts (``*.gradle.kts``)."""
    return str(path).endswith(".kts")


def find_build_file(directory: Path) -> Path | None:
    """Return the build file of *directory*, preferring ``build.gradle``."""
    for name in BUILD_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def find_settings_file(directory: Path) -> Path | None:
    for name in SETTINGS_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def find_gradle_files(root: Path) -> list[Path]:
    """Return all build and settings files below *root*, sorted by path.

    Hidden directories (``.gradle``, ``.git``, ...) and build output
    directories are skipped.

    Raises:
        FileNotFoundError: If *root* is not a directory.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Not a directory: {root}")
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in SKIPPED_DIRECTORIES)
        for filename in filenames:
            if filename in BUILD_FILE_NAMES or filename in SETTINGS_FILE_NAMES:
                found.append(Path(dirpath) / filename)
    logger.debug("Found %d Gradle file(s) below %s", len(found), root)
    return sorted(found)


def find_project_root(start: Path) -> Path | None:
    """Find the root directory of the Gradle build containing *start*.

    The nearest ancestor (including *start* itself) with a settings file
    wins. Without any settings file, the nearest ancestor with a build file
    is returned.

    Returns:
        The root directory, or ``None`` if no ancestor holds a Gradle file.
    """
    directory = (start if start.is_dir() else start.parent).resolve()
    candidates = (directory, *directory.parents)
    for candidate in candidates:
        if find_settings_file(candidate) is not None:
            return candidate
    for candidate in candidates:
        if find_build_file(candidate) is not None:
            return candidate
    return None
