# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the parser configuration file."""

from pathlib import Path

import pytest

from gradle_parser.parser.options import ParserOptions
from gradle_parser.workspace import (
    CONFIG_FILE_NAME,
    ParserConfigError,
    find_parser_config,
    load_parser_options,
)
from gradle_parser.workspace.config import parse_parser_options

# ###############
# Helpers
# ###############


def _write_config(directory: Path, content: str) -> Path:
    """Write a parser config file and return its path."""
    config_file = directory / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_flags_are_read(tmp_path: Path) -> None:
    """Listed flags override their defaults; the rest stay enabled."""
    options = load_parser_options(_write_config(tmp_path, "skip-comments: false\nparse-tasks: false\n"))
    assert options == ParserOptions(skip_comments=False, parse_tasks=False)


def test_every_flag_is_accepted() -> None:
    """All feature flags can be set through their kebab-case keys."""
    content = """\
skip-comments: false
collect-raw-content: false
parse-plugins: false
parse-dependencies: false
parse-repositories: false
parse-tasks: false
"""
    options = parse_parser_options(content)
    assert not any(
        [
            options.skip_comments,
            options.collect_raw_content,
            options.parse_plugins,
            options.parse_dependencies,
            options.parse_repositories,
            options.parse_tasks,
        ]
    )


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty config file is the same as no config file."""
    assert load_parser_options(_write_config(tmp_path, "")) == ParserOptions()


def test_find_config_in_parent(tmp_path: Path) -> None:
    """The nearest config file at or above the start path is found."""
    config_file = _write_config(tmp_path, "parse-tasks: false\n")
    nested = tmp_path / "app" / "src"
    nested.mkdir(parents=True)
    assert find_parser_config(nested) == config_file.resolve()
    assert find_parser_config(tmp_path / "app" / "build.gradle") == config_file.resolve()


def test_nearest_config_wins(tmp_path: Path) -> None:
    """A config file in a sub directory shadows the one above it."""
    _write_config(tmp_path, "parse-tasks: false\n")
    (tmp_path / "app").mkdir()
    inner = _write_config(tmp_path / "app", "skip-comments: false\n")
    assert find_parser_config(tmp_path / "app") == inner.resolve()


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """Loading a file that does not exist raises ParserConfigError."""
    with pytest.raises(ParserConfigError, match="not found"):
        load_parser_options(tmp_path / CONFIG_FILE_NAME)


def test_unknown_key() -> None:
    """Unknown keys are rejected with the list of accepted keys."""
    with pytest.raises(ParserConfigError, match="unknown key 'parse-everything'"):
        parse_parser_options("parse-everything: true\n")


def test_non_boolean_value() -> None:
    """Flag values must be booleans."""
    with pytest.raises(ParserConfigError, match="must be true or false"):
        parse_parser_options("skip-comments: 'no'\n")


def test_not_a_mapping() -> None:
    """The top level must be a mapping."""
    with pytest.raises(ParserConfigError, match="must be a YAML mapping"):
        parse_parser_options("- skip-comments\n")


def test_invalid_yaml() -> None:
    """Malformed YAML is reported with the source label."""
    with pytest.raises(ParserConfigError, match="Invalid YAML in custom.yaml"):
        parse_parser_options("skip-comments: [\n", source_label="custom.yaml")
