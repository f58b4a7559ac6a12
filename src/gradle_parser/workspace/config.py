# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML loader for the ``.gradle-parser.yaml`` parser configuration file.

The file is a flat mapping of kebab-case feature flags to booleans::

    skip-comments: false
    parse-tasks: false

Keys that are left out keep their default (enabled). An empty file yields
the defaults.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import yaml

from gradle_parser.parser.options import ParserOptions

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".gradle-parser.yaml"


class ParserConfigError(Exception):
    """Raised when a parser configuration file is invalid or cannot be loaded."""


def load_parser_options(path: Path) -> ParserOptions:
    """Load parser feature flags from a YAML configuration file.

    Args:
        path: Path to the ``.gradle-parser.yaml`` file.

    Returns:
        The ParserOptions described by the file.

    Raises:
        ParserConfigError: If the file cannot be read, is not a mapping,
            contains unknown keys or has non-boolean values.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserConfigError(f"Parser config file not found: {path}") from None
    except OSError as exc:
        raise ParserConfigError(f"Cannot read parser config file: {exc}") from exc

    return parse_parser_options(text, source_label=str(path))


def parse_parser_options(text: str, source_label: str = "<string>") -> ParserOptions:
    """Parse configuration YAML text into ParserOptions.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages.

    Raises:
        ParserConfigError: If the YAML is invalid or a key or value is not accepted.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParserOptions()
    if not isinstance(data, dict):
        raise ParserConfigError(f"{source_label}: parser config must be a YAML mapping")

    flags: dict[str, bool] = {}
    for key, value in data.items():
        if key not in _KEY_TO_FIELD:
            known = ", ".join(sorted(_KEY_TO_FIELD))
            raise ParserConfigError(f"{source_label}: unknown key '{key}' (expected one of: {known})")
        flags[_KEY_TO_FIELD[key]] = _require_bool(value, key, source_label)
    return ParserOptions(**flags)


def find_parser_config(start: Path) -> Path | None:
    """Return the nearest ``.gradle-parser.yaml`` in *start* or its parents."""
    directory = (start if start.is_dir() else start.parent).resolve()
    for candidate in (directory, *directory.parents):
        config_file = candidate / CONFIG_FILE_NAME
        if config_file.is_file():
            return config_file
    return None


# ################
# Implementation
# ################

_KEY_TO_FIELD: dict[str, str] = {
    field.name.replace("_", "-"): field.name for field in dataclasses.fields(ParserOptions)
}


def _require_bool(value: object, key: str, source_label: str) -> bool:
    if not isinstance(value, bool):
        raise ParserConfigError(f"{source_label}: '{key}' must be true or false")
    return value
