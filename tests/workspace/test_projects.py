# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for settings files and multi-project builds."""

from pathlib import Path

from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleParser
from gradle_parser.workspace.projects import parse_files, parse_project_tree, parse_settings

# ###############
# Helpers
# ###############


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# Settings Files
# ###############


class TestParseSettings:
    def test_groovy_settings(self) -> None:
        info = parse_settings(
            "rootProject.name = 'demo'\n"
            "include ':app', ':libs:core'\n"
            "include('libs')\n"
            "project(':app').projectDir = file('applications/app')\n"
        )
        assert info.root_project_name == "demo"
        assert info.includes == [":app", ":libs:core", ":libs"]
        assert info.project_dirs == {":app": "applications/app"}

    def test_kotlin_settings(self) -> None:
        info = parse_settings('rootProject.name = "demo"\ninclude(":app", ":lib")\ninclude(":app")\n')
        assert info.root_project_name == "demo"
        assert info.includes == [":app", ":lib"]

    def test_empty_settings(self) -> None:
        info = parse_settings("")
        assert info.root_project_name == ""
        assert info.includes == []


# ###############
# Project Trees
# ###############


class TestParseProjectTree:
    def _build(self, root: Path) -> None:
        _write(
            root / "settings.gradle",
            "rootProject.name = 'demo'\ninclude ':app', ':libs', ':libs:core', ':missing'\n",
        )
        _write(root / "build.gradle", "plugins {\n    id 'base'\n}\n")
        _write(root / "app" / "build.gradle.kts", 'plugins {\n    id("application") banana\n}\n')
        _write(root / "libs" / "build.gradle", "group = 'com.example.libs'\n")
        _write(root / "libs" / "core" / "build.gradle", "dependencies {\n    api 'g:n:1'\n}\n")

    def test_tree_structure(self, tmp_path: Path) -> None:
        self._build(tmp_path)
        project = parse_project_tree(tmp_path).project
        assert project.name == "demo"
        assert [p.id for p in project.plugins] == ["base"]
        assert [p.name for p in project.sub_projects] == ["app", "libs", "missing"]
        libs = project.sub_projects[1]
        assert libs.group == "com.example.libs"
        assert [p.name for p in libs.sub_projects] == ["core"]
        assert libs.sub_projects[0].dependencies[0].coordinates == "g:n:1"

    def test_sub_project_file_paths(self, tmp_path: Path) -> None:
        self._build(tmp_path)
        app = parse_project_tree(tmp_path).project.sub_projects[0]
        assert app.file_path.endswith("build.gradle.kts")

    def test_missing_build_file_gives_empty_project(self, tmp_path: Path) -> None:
        self._build(tmp_path)
        missing = parse_project_tree(tmp_path).project.sub_projects[2]
        assert missing.file_path == ""
        assert missing.dependencies == []

    def test_sub_project_warnings_are_prefixed(self, tmp_path: Path) -> None:
        self._build(tmp_path)
        result = parse_project_tree(tmp_path)
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith(":app: ")

    def test_custom_project_dir(self, tmp_path: Path) -> None:
        _write(tmp_path / "settings.gradle", "include ':app'\nproject(':app').projectDir = file('apps/main')\n")
        _write(tmp_path / "apps" / "main" / "build.gradle", "version = '2.0'\n")
        project = parse_project_tree(tmp_path).project
        assert project.sub_projects[0].version == "2.0"

    def test_without_settings(self, tmp_path: Path) -> None:
        root = tmp_path / "single"
        _write(root / "build.gradle", "version = '1.0'\n")
        project = parse_project_tree(root).project
        assert project.name == "single"
        assert project.sub_projects == []

    def test_parser_options_apply_to_sub_projects(self, tmp_path: Path) -> None:
        self._build(tmp_path)
        parser = GradleParser(ParserOptions(parse_dependencies=False))
        core = parse_project_tree(tmp_path, parser).project.sub_projects[1].sub_projects[0]
        assert core.dependencies == []


class TestParseFiles:
    def test_results_in_input_order(self, tmp_path: Path) -> None:
        paths = [_write(tmp_path / f"p{i}" / "build.gradle", f"version = '{i}'\n") for i in range(5)]
        results = parse_files(paths, max_workers=2)
        assert [r.project.version for r in results] == ["0", "1", "2", "3", "4"]
        assert [r.project.name for r in results] == ["p0", "p1", "p2", "p3", "p4"]

    def test_no_files(self) -> None:
        assert parse_files([]) == []
