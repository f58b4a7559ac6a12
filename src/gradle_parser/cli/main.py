# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the gradle-parser command-line interface."""

import argparse
import difflib
import logging
import sys
from pathlib import Path

from gradle_parser.analysis.queries import group_dependencies_by_scope
from gradle_parser.editor.editor import DEFAULT_SCOPE, Dialect, GradleEditor
from gradle_parser.editor.errors import EditorError
from gradle_parser.model.entities import ParseResult
from gradle_parser.parser.lexer import SourceError
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleFileError, GradleParser, read_build_file
from gradle_parser.parser.source_aware import SourceAwareParser
from gradle_parser.workspace.config import ParserConfigError, find_parser_config, load_parser_options
from gradle_parser.workspace.discovery import find_gradle_files, find_project_root
from gradle_parser.workspace.projects import parse_project_tree

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the gradle-parser CLI."""
    parser = argparse.ArgumentParser(
        prog="gradle-parser",
        description="Parse and edit Gradle build files (Groovy and Kotlin DSL)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log parser activity to stderr")
    parser.add_argument(
        "--config",
        help="Parser configuration file (default: nearest .gradle-parser.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a build file and print the result as JSON",
        description="Parse a build file, or a multi-project build directory, and print the result as JSON.",
    )
    parse_parser.add_argument("path", help="Build file, or directory of a multi-project build")

    # listing subcommands
    deps_parser = subparsers.add_parser("dependencies", help="List dependencies grouped by scope")
    deps_parser.add_argument("path", help="Build file")
    deps_parser.add_argument("--scope", help="Only list this scope")
    plugins_parser = subparsers.add_parser("plugins", help="List plugins")
    plugins_parser.add_argument("path", help="Build file")
    repos_parser = subparsers.add_parser("repositories", help="List repositories")
    repos_parser.add_argument("path", help="Build file")

    # editing subcommands
    update_dep_parser = subparsers.add_parser(
        "update-dependency",
        help="Change the version of a dependency",
        description="Change the version of GROUP:NAME, leaving the rest of the file untouched.",
    )
    update_dep_parser.add_argument("path", help="Build file")
    update_dep_parser.add_argument("coordinates", help="Dependency as GROUP:NAME")
    update_dep_parser.add_argument("version", help="New version")
    update_dep_parser.add_argument("--scope", help="Only update declarations in this scope")
    update_dep_parser.add_argument("--all", action="store_true", help="Update every matching declaration")
    _add_output_arguments(update_dep_parser)

    update_plugin_parser = subparsers.add_parser("update-plugin", help="Change the version of a plugin")
    update_plugin_parser.add_argument("path", help="Build file")
    update_plugin_parser.add_argument("plugin_id", help="Plugin id")
    update_plugin_parser.add_argument("version", help="New version")
    _add_output_arguments(update_plugin_parser)

    update_property_parser = subparsers.add_parser("update-property", help="Change a property value")
    update_property_parser.add_argument("path", help="Build file")
    update_property_parser.add_argument("key", help="Property name, e.g. version")
    update_property_parser.add_argument("value", help="New value")
    _add_output_arguments(update_property_parser)

    add_dep_parser = subparsers.add_parser("add-dependency", help="Declare a new dependency")
    add_dep_parser.add_argument("path", help="Build file")
    add_dep_parser.add_argument("notation", help="Dependency as GROUP:NAME[:VERSION]")
    add_dep_parser.add_argument("--scope", default=DEFAULT_SCOPE, help=f"Configuration (default: {DEFAULT_SCOPE})")
    add_dep_parser.add_argument(
        "--dialect",
        choices=[d.value for d in Dialect],
        help="Syntax for the new declaration (default: follow the file)",
    )
    _add_output_arguments(add_dep_parser)

    # find subcommand
    find_parser = subparsers.add_parser(
        "find",
        help="List Gradle build and settings files",
        description="List Gradle build and settings files below a directory.",
    )
    find_parser.add_argument("directory", nargs="?", default=".", help="Directory to search (default: current)")
    find_parser.add_argument("--root", action="store_true", help="Print the project root instead")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_output_arguments(subparser: argparse.ArgumentParser) -> None:
    group = subparser.add_mutually_exclusive_group()
    group.add_argument("--write", action="store_true", help="Write the edited text back to the file")
    group.add_argument("--diff", action="store_true", help="Print a unified diff instead of the edited text")


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "parse":
        return _cmd_parse(args)
    if args.command == "dependencies":
        return _cmd_dependencies(args)
    if args.command == "plugins":
        return _cmd_plugins(args)
    if args.command == "repositories":
        return _cmd_repositories(args)
    if args.command in ("update-dependency", "update-plugin", "update-property", "add-dependency"):
        return _cmd_edit(args)
    if args.command == "find":
        return _cmd_find(args)
    return 0


def _load_options(args: argparse.Namespace, path: Path) -> ParserOptions:
    """Read options from --config, else from the nearest config file, else defaults."""
    config_file = Path(args.config) if args.config else find_parser_config(path)
    if config_file is None:
        return ParserOptions()
    return load_parser_options(config_file)


def _parse(args: argparse.Namespace) -> ParseResult | None:
    """Parse ``args.path`` for the listing commands, reporting failures on stderr."""
    path = Path(args.path)
    try:
        result = GradleParser(_load_options(args, path)).parse_file(path)
    except (GradleFileError, ParserConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    for error in result.errors:
        print(f"Error: {error}", file=sys.stderr)
    if result.errors:
        return None
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return result


def _cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse subcommand."""
    path = Path(args.path)
    if not path.exists():
        print(f"Error: '{path}' does not exist.", file=sys.stderr)
        return 1
    try:
        parser = GradleParser(_load_options(args, path))
        result = parse_project_tree(path, parser) if path.is_dir() else parser.parse_file(path)
    except (GradleFileError, ParserConfigError, SourceError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(result.to_json())
    return 1 if result.errors else 0


def _cmd_dependencies(args: argparse.Namespace) -> int:
    """Handle the dependencies subcommand."""
    result = _parse(args)
    if result is None:
        return 1
    for dep_set in group_dependencies_by_scope(result.project.dependencies):
        if args.scope and dep_set.scope != args.scope:
            continue
        print(f"{dep_set.scope or '(no scope)'}:")
        for dep in dep_set.dependencies:
            if dep.is_project:
                print(f"  project :{dep.name}")
            elif dep.is_valid:
                print(f"  {dep.coordinates}")
            else:
                print(f"  {dep.raw} (unresolved)")
    return 0


def _cmd_plugins(args: argparse.Namespace) -> int:
    """Handle the plugins subcommand."""
    result = _parse(args)
    if result is None:
        return 1
    for plugin in result.project.plugins:
        line = plugin.id
        if plugin.version:
            line += f" {plugin.version}"
        if not plugin.apply:
            line += " (not applied)"
        print(line)
    return 0


def _cmd_repositories(args: argparse.Namespace) -> int:
    """Handle the repositories subcommand."""
    result = _parse(args)
    if result is None:
        return 1
    for repo in result.project.repositories:
        print(f"{repo.name} ({repo.type}) {repo.url}".rstrip())
    return 0


def _cmd_edit(args: argparse.Namespace) -> int:
    """Handle the update-dependency, update-plugin, update-property and add-dependency subcommands."""
    path = Path(args.path)
    try:
        original = read_build_file(path)
        mapping_parser = SourceAwareParser(GradleParser(_load_options(args, path)))
        editor = GradleEditor(mapping_parser.parse_with_source_mapping(original).source_mapped_project)
        if args.command == "update-dependency":
            group, _, name = args.coordinates.partition(":")
            editor.update_dependency_version(group, name, args.version, scope=args.scope, all_matches=args.all)
        elif args.command == "update-plugin":
            editor.update_plugin_version(args.plugin_id, args.version)
        elif args.command == "update-property":
            editor.update_property(args.key, args.value)
        else:
            dialect = Dialect(args.dialect) if args.dialect else None
            if dialect is None and path.name.endswith(".kts") and not editor.project.dependencies:
                dialect = Dialect.KOTLIN
            editor.add_dependency(args.scope, args.notation, dialect=dialect)
        updated = editor.apply()
    except (GradleFileError, ParserConfigError, SourceError, EditorError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.write:
        if updated != original:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(updated)
        print(f"Updated '{path}' ({len(editor.modifications)} change(s)).")
    elif args.diff:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=str(path),
            tofile=str(path),
        )
        sys.stdout.writelines(diff)
    else:
        sys.stdout.write(updated)
    return 0


def _cmd_find(args: argparse.Namespace) -> int:
    """Handle the find subcommand."""
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1
    if args.root:
        root = find_project_root(directory)
        if root is None:
            print(f"Error: no Gradle project found at or above '{directory}'.", file=sys.stderr)
            return 1
        print(root)
        return 0
    for gradle_file in find_gradle_files(directory):
        print(gradle_file)
    return 0
