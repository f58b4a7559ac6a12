# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build-file discovery, parser configuration and multi-project builds."""

from gradle_parser.workspace.config import (
    CONFIG_FILE_NAME,
    ParserConfigError,
    find_parser_config,
    load_parser_options,
)
from gradle_parser.workspace.discovery import (
    find_gradle_files,
    find_project_root,
    is_build_gradle_file,
    is_kotlin_dsl,
    is_settings_gradle_file,
)
from gradle_parser.workspace.projects import SettingsInfo, parse_files, parse_project_tree, parse_settings

__all__ = [
    "CONFIG_FILE_NAME",
    "ParserConfigError",
    "SettingsInfo",
    "find_gradle_files",
    "find_parser_config",
    "find_project_root",
    "is_build_gradle_file",
    "is_kotlin_dsl",
    "is_settings_gradle_file",
    "load_parser_options",
    "parse_files",
    "parse_project_tree",
    "parse_settings",
]
