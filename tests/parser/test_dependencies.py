# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the dependency notation parser."""

import pytest

from gradle_parser.model.entities import Dependency
from gradle_parser.parser.blocks import Diagnostics, parse_script
from gradle_parser.parser.dependencies import (
    KOTLIN_GROUP,
    DependencyDeclaration,
    is_path_notation,
    parse_dependency_statement,
)
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleParser

# ###############
# Test Helpers
# ###############


def _wrap(body: str) -> str:
    return f"dependencies {{\n{body}\n}}\n"


def _deps(body: str) -> tuple[list[Dependency], list[str]]:
    result = GradleParser().parse(_wrap(body))
    assert result.errors == []
    return result.project.dependencies, result.warnings


def _single(body: str) -> Dependency:
    deps, warnings = _deps(body)
    assert warnings == []
    assert len(deps) == 1
    return deps[0]


def _declarations(body: str) -> tuple[str, list[DependencyDeclaration]]:
    source = _wrap(body)
    block = parse_script(source).root.statements[0].body
    decls: list[DependencyDeclaration] = []
    for stmt in block.statements:
        decls.extend(parse_dependency_statement(stmt, source, Diagnostics()))
    return source, decls


# ###############
# Shorthand Notation
# ###############


class TestShorthand:
    def test_group_name_version(self) -> None:
        dep = _single("    implementation 'com.google.guava:guava:31.0-jre'")
        assert (dep.group, dep.name, dep.version) == ("com.google.guava", "guava", "31.0-jre")
        assert dep.scope == "implementation"
        assert dep.raw == "com.google.guava:guava:31.0-jre"
        assert dep.transitive is True
        assert dep.is_project is False

    def test_kotlin_call_syntax(self) -> None:
        dep = _single('    testImplementation("org.junit.jupiter:junit-jupiter:5.10.0")')
        assert dep.scope == "testImplementation"
        assert dep.name == "junit-jupiter"
        assert dep.version == "5.10.0"

    def test_one_colon_has_no_version(self) -> None:
        dep = _single("    implementation 'org.slf4j:slf4j-api'")
        assert (dep.group, dep.name, dep.version) == ("org.slf4j", "slf4j-api", "")

    def test_classifier_and_extension(self) -> None:
        dep = _single("    runtimeOnly 'io.netty:netty-transport-native-epoll:4.1.100:linux-x86_64@jar'")
        assert dep.version == "4.1.100"
        assert dep.classifier == "linux-x86_64"
        assert dep.extension == "jar"

    def test_extension_without_version(self) -> None:
        dep = _single("    implementation 'com.example:widget@aar'")
        assert (dep.name, dep.version, dep.extension) == ("widget", "", "aar")

    def test_interpolated_version_is_kept_verbatim(self) -> None:
        dep = _single('    implementation "org.jetbrains.kotlin:kotlin-stdlib:$kotlin_version"')
        assert dep.version == "$kotlin_version"

    def test_string_invoke_scope(self) -> None:
        dep = _single('    "kapt"("com.google.dagger:dagger-compiler:2.48")')
        assert dep.scope == "kapt"
        assert dep.group == "com.google.dagger"

    def test_several_notations_in_one_statement(self) -> None:
        deps, warnings = _deps("    implementation 'a:b:1', 'c:d:2'")
        assert warnings == []
        assert [d.coordinates for d in deps] == ["a:b:1", "c:d:2"]

    def test_file_path_becomes_name(self) -> None:
        dep = _single("    implementation 'libs/vendor.jar'")
        assert (dep.group, dep.name, dep.version) == ("", "libs/vendor.jar", "")
        assert dep.is_valid


class TestRejectedShorthand:
    @pytest.mark.parametrize("notation", ["guava", "a:b:c:d:e", ":guava:1.0", "com.google::1.0"])
    def test_warning_and_raw_only_record(self, notation: str) -> None:
        deps, warnings = _deps(f"    implementation '{notation}'")
        assert len(deps) == 1
        dep = deps[0]
        assert dep.raw == notation
        assert dep.scope == "implementation"
        assert (dep.group, dep.name, dep.version) == ("", "", "")
        assert not dep.is_valid
        assert len(warnings) == 1
        assert f"Unrecognized dependency notation: {notation}" in warnings[0]

    def test_warning_carries_location(self) -> None:
        _, warnings = _deps("    implementation 'guava'")
        assert warnings[0].startswith("Line 2, column 20: ")


# ###############
# Other Notations
# ###############


class TestNamedArguments:
    def test_groovy_map_notation(self) -> None:
        dep = _single("    implementation group: 'org.apache.commons', name: 'commons-lang3', version: '3.13.0'")
        assert (dep.group, dep.name, dep.version) == ("org.apache.commons", "commons-lang3", "3.13.0")
        assert dep.raw == "group: 'org.apache.commons', name: 'commons-lang3', version: '3.13.0'"

    def test_kotlin_named_notation_without_version(self) -> None:
        dep = _single('    implementation(group = "com.example", name = "lib")')
        assert (dep.group, dep.name, dep.version) == ("com.example", "lib", "")

    def test_named_classifier_and_ext(self) -> None:
        dep = _single("    implementation group: 'g', name: 'n', version: '1', classifier: 'sources', ext: 'zip'")
        assert dep.classifier == "sources"
        assert dep.extension == "zip"


class TestProjectReferences:
    def test_project_path(self) -> None:
        dep = _single("    implementation project(':core')")
        assert dep.name == "core"
        assert dep.group == ""
        assert dep.is_project
        assert dep.raw == "project(':core')"

    def test_named_project_path(self) -> None:
        dep = _single("    api project(path: ':libs:util')")
        assert dep.name == "libs:util"
        assert dep.is_project

    def test_kotlin_project_path(self) -> None:
        dep = _single('    implementation(project(":app"))')
        assert dep.name == "app"


class TestWrappers:
    @pytest.mark.parametrize("wrapper", ["platform", "enforcedPlatform", "testFixtures"])
    def test_wrapper_is_unwrapped(self, wrapper: str) -> None:
        dep = _single(f"    implementation {wrapper}('org.springframework.boot:spring-boot-dependencies:3.1.0')")
        assert dep.group == "org.springframework.boot"
        assert dep.name == "spring-boot-dependencies"
        assert dep.version == "3.1.0"

    def test_kotlin_module(self) -> None:
        dep = _single('    implementation(kotlin("stdlib"))')
        assert dep.group == KOTLIN_GROUP
        assert dep.name == "kotlin-stdlib"
        assert dep.version == ""

    def test_kotlin_module_with_version(self) -> None:
        dep = _single('    implementation(kotlin("reflect", "1.9.0"))')
        assert dep.coordinates == "org.jetbrains.kotlin:kotlin-reflect:1.9.0"


class TestUnrecognizedExpressions:
    @pytest.mark.parametrize("expression", ["libs.guava", "files('libs/a.jar')", "someVariable"])
    def test_raw_only_record(self, expression: str) -> None:
        deps, warnings = _deps(f"    implementation {expression}")
        assert len(deps) == 1
        assert deps[0].raw == expression
        assert not deps[0].is_valid
        assert len(warnings) == 1


# ###############
# Closures and Non-declarations
# ###############


class TestConfigurationClosure:
    def test_transitive_false(self) -> None:
        dep = _single("    implementation('a:b:1') {\n        transitive = false\n    }")
        assert dep.transitive is False

    def test_kotlin_is_transitive(self) -> None:
        dep = _single('    implementation("a:b:1") {\n        isTransitive = false\n    }')
        assert dep.transitive is False

    def test_other_closure_content_keeps_transitive(self) -> None:
        dep = _single("    implementation('a:b:1') {\n        exclude group: 'x'\n    }")
        assert dep.transitive is True


class TestNonDeclarations:
    def test_constraints_block_is_skipped_silently(self) -> None:
        deps, warnings = _deps("    constraints {\n        implementation 'a:b:1'\n    }")
        assert deps == []
        assert warnings == []

    def test_assignment_warns(self) -> None:
        deps, warnings = _deps("    foo = 'bar'")
        assert deps == []
        assert len(warnings) == 1
        assert "Unsupported statement in dependencies block: foo = 'bar'" in warnings[0]

    def test_scope_without_notation_warns(self) -> None:
        deps, warnings = _deps("    implementation")
        assert deps == []
        assert "Dependency declaration without notation: implementation" in warnings[0]


# ###############
# Spans
# ###############


class TestSpans:
    def test_single_notation_spans_whole_statement(self) -> None:
        source, decls = _declarations("    implementation('a:b:1') { transitive = false } // note")
        decl = decls[0]
        assert source[decl.start : decl.end] == "implementation('a:b:1') { transitive = false }"

    def test_each_notation_gets_its_own_span(self) -> None:
        source, decls = _declarations("    implementation 'a:b:1', 'c:d:2'")
        assert [source[d.start : d.end] for d in decls] == ["'a:b:1'", "'c:d:2'"]

    def test_version_span_excludes_quotes(self) -> None:
        source, decls = _declarations("    implementation 'com.google.guava:guava:31.0-jre'")
        start, end = decls[0].version_span
        assert source[start:end] == "31.0-jre"
        assert decls[0].version_insert_offset is None

    def test_insert_offset_without_version(self) -> None:
        source, decls = _declarations("    implementation 'org.slf4j:slf4j-api'")
        decl = decls[0]
        assert decl.version_span is None
        assert source[: decl.version_insert_offset].endswith("org.slf4j:slf4j-api")

    def test_named_version_span(self) -> None:
        source, decls = _declarations("    implementation group: 'g', name: 'n', version: '1.2'")
        start, end = decls[0].version_span
        assert source[start:end] == "1.2"


# ###############
# Scopes and Options
# ###############


class TestScopes:
    def test_buildscript_classpath(self) -> None:
        source = (
            "buildscript {\n"
            "    dependencies {\n"
            "        classpath 'com.android.tools.build:gradle:8.1.0'\n"
            "    }\n"
            "}\n"
        )
        deps = GradleParser().parse(source).project.dependencies
        assert [(d.scope, d.name) for d in deps] == [("classpath", "gradle")]

    def test_disabled_dependency_parsing(self) -> None:
        parser = GradleParser(ParserOptions(parse_dependencies=False))
        result = parser.parse(_wrap("    implementation 'guava'"))
        assert result.project.dependencies == []
        assert result.warnings == []


class TestPathNotation:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("libs/a.jar", True),
            ("libs\\a", True),
            ("vendor.aar", True),
            ("dist.zip", True),
            ("guava", False),
        ],
    )
    def test_is_path_notation(self, text: str, expected: bool) -> None:
        assert is_path_notation(text) is expected
