# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the GradleParser entry points."""

import io
import json
from pathlib import Path

import pytest

from gradle_parser.model.entities import Project
from gradle_parser.parser.blocks import ParseError
from gradle_parser.parser.lexer import LexerError
from gradle_parser.parser.parser import GradleFileError, GradleParser, read_build_file

# ###############
# Test Helpers
# ###############

_BUILD = """\
plugins {
    id 'java'
}

group = 'com.example'

dependencies {
    implementation 'com.google.guava:guava:32.1.0-jre'
}
"""


def _write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


# ###############
# Parsing Strings
# ###############


class TestParse:
    def test_successful_parse(self) -> None:
        result = GradleParser().parse(_BUILD)
        assert result.errors == []
        assert result.warnings == []
        assert result.raw_text == _BUILD
        assert result.project.group == "com.example"
        assert result.parse_time.endswith("ms")

    def test_empty_input(self) -> None:
        result = GradleParser().parse("")
        assert result.errors == []
        assert result.project == Project()

    def test_unmatched_brace_is_recorded(self) -> None:
        result = GradleParser().parse("dependencies {\n")
        assert result.errors == ["Line 1, column 14: Unmatched '{'"]
        assert result.project == Project()
        assert result.raw_text == "dependencies {\n"

    def test_unmatched_brace_strict(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            GradleParser().parse("dependencies {\n", strict=True)
        assert exc_info.value.offset == 13

    def test_unterminated_string(self) -> None:
        result = GradleParser().parse("version = '1.0\n")
        assert len(result.errors) == 1
        with pytest.raises(LexerError):
            GradleParser().parse("version = '1.0\n", strict=True)

    def test_statement_problems_are_warnings(self) -> None:
        result = GradleParser().parse("plugins {\n    id 'kotlin' banana\n    id 'java'\n}\n")
        assert result.errors == []
        assert len(result.warnings) == 1
        assert [p.id for p in result.project.plugins] == ["java"]

    def test_statements_after_block_on_one_line(self) -> None:
        result = GradleParser().parse("plugins { id 'java' } group = 'com.example' version = '1.0.0'")
        assert result.warnings == []
        assert [p.id for p in result.project.plugins] == ["java"]
        assert (result.project.group, result.project.version) == ("com.example", "1.0.0")

    def test_shorthand_dependency_coordinates(self) -> None:
        source = "dependencies {\n    implementation 'org.springframework.boot:spring-boot-starter-web:2.7.0'\n}\n"
        dep = GradleParser().parse(source).project.dependencies[0]
        assert (dep.group, dep.name, dep.version, dep.scope) == (
            "org.springframework.boot",
            "spring-boot-starter-web",
            "2.7.0",
            "implementation",
        )

    def test_parsing_twice_gives_equal_results(self) -> None:
        parser = GradleParser()
        first = parser.parse(_BUILD).model_dump(exclude={"parse_time"})
        second = parser.parse(_BUILD).model_dump(exclude={"parse_time"})
        assert first == second


# ###############
# Groovy and Kotlin DSL
# ###############

_GROOVY_TWIN = """\
plugins {
    id 'java'
    id 'org.springframework.boot' version '2.7.0'
}

group = 'com.example'
version = '1.0.0'

dependencies {
    implementation 'org.springframework.boot:spring-boot-starter-web:2.7.0'
    runtimeOnly group: 'mysql', name: 'mysql-connector-java', version: '8.0.28'
}
"""

_KOTLIN_TWIN = """\
plugins {
    java
    id("org.springframework.boot") version "2.7.0"
}

group = "com.example"
version = "1.0.0"

dependencies {
    implementation("org.springframework.boot:spring-boot-starter-web:2.7.0")
    runtimeOnly(group = "mysql", name = "mysql-connector-java", version = "8.0.28")
}
"""


class TestDialects:
    def test_groovy_and_kotlin_twins_extract_the_same_model(self) -> None:
        groovy = GradleParser().parse(_GROOVY_TWIN)
        kotlin = GradleParser().parse(_KOTLIN_TWIN)
        assert groovy.warnings == kotlin.warnings == []
        assert (groovy.project.group, groovy.project.version) == (kotlin.project.group, kotlin.project.version)
        assert {(p.id, p.version, p.apply) for p in groovy.project.plugins} == {
            (p.id, p.version, p.apply) for p in kotlin.project.plugins
        }
        assert {d.coordinates for d in groovy.project.dependencies} == {
            d.coordinates for d in kotlin.project.dependencies
        }
        assert {(d.scope, d.group, d.name, d.version) for d in groovy.project.dependencies} == {
            ("implementation", "org.springframework.boot", "spring-boot-starter-web", "2.7.0"),
            ("runtimeOnly", "mysql", "mysql-connector-java", "8.0.28"),
        }


class TestJson:
    def test_document_keys(self) -> None:
        document = json.loads(GradleParser().parse(_BUILD).to_json())
        assert set(document) == {"project", "rawText", "errors", "warnings", "parseTime"}
        assert {"sourceCompatibility", "subProjects", "filePath"} <= set(document["project"])
        dependency = document["project"]["dependencies"][0]
        assert dependency["isProject"] is False
        assert dependency["version"] == "32.1.0-jre"

    def test_compact(self) -> None:
        assert "\n" not in GradleParser().parse("group = 'x'").to_json(indent=None)


# ###############
# Files and Streams
# ###############


class TestParseFile:
    def test_file_path_and_default_name(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "app" / "build.gradle", _BUILD)
        project = GradleParser().parse_file(path).project
        assert project.file_path == str(path)
        assert project.name == "app"

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "build.gradle.kts", 'version = "2.0"\n')
        assert GradleParser().parse_file(str(path)).project.version == "2.0"

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "build.gradle"
        with pytest.raises(GradleFileError) as exc_info:
            GradleParser().parse_file(missing)
        assert exc_info.value.path == missing

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "build.gradle", b"group = '\xff\xfe'\n")
        with pytest.raises(GradleFileError):
            GradleParser().parse_file(path)

    def test_line_endings_preserved(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "build.gradle", b"group = 'a'\r\nversion = '1'\r\n")
        assert read_build_file(path) == "group = 'a'\r\nversion = '1'\r\n"
        result = GradleParser().parse_file(path)
        assert (result.project.group, result.project.version) == ("a", "1")


class TestParseReader:
    def test_text_stream(self) -> None:
        result = GradleParser().parse_reader(io.StringIO(_BUILD))
        assert len(result.project.dependencies) == 1

    def test_binary_stream(self) -> None:
        result = GradleParser().parse_reader(io.BytesIO(_BUILD.encode("utf-8")))
        assert result.raw_text == _BUILD

    def test_undecodable_stream(self) -> None:
        with pytest.raises(GradleFileError):
            GradleParser().parse_reader(io.BytesIO(b"\xff\xfe\xfd"))
