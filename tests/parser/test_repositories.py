# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for repository declarations."""

import pytest

from gradle_parser.model.entities import Repository
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleParser
from gradle_parser.parser.repositories import (
    GOOGLE_URL,
    MAVEN_CENTRAL_URL,
    WELL_KNOWN_REPOSITORIES,
    is_jitpack_url,
)

# ###############
# Test Helpers
# ###############


def _repos(body: str) -> tuple[list[Repository], list[str]]:
    result = GradleParser().parse(f"repositories {{\n{body}\n}}\n")
    return result.project.repositories, result.warnings


def _single(body: str) -> Repository:
    repos, warnings = _repos(body)
    assert warnings == []
    assert len(repos) == 1
    return repos[0]


# ###############
# Well-known Repositories
# ###############


class TestWellKnown:
    @pytest.mark.parametrize("name", sorted(WELL_KNOWN_REPOSITORIES))
    def test_canonical_url(self, name: str) -> None:
        repo = _single(f"    {name}()")
        assert repo.name == name
        assert repo.type == "maven"
        assert repo.url == WELL_KNOWN_REPOSITORIES[name]

    def test_urls(self) -> None:
        assert _single("    mavenCentral()").url == MAVEN_CENTRAL_URL
        assert _single("    google()").url == GOOGLE_URL
        assert _single("    mavenLocal()").url == ""

    def test_declaration_order(self) -> None:
        repos, _ = _repos("    google()\n    mavenCentral()\n    gradlePluginPortal()")
        assert [r.name for r in repos] == ["google", "mavenCentral", "gradlePluginPortal"]


# ###############
# Maven Repositories
# ###############


class TestMaven:
    def test_groovy_url(self) -> None:
        repo = _single("    maven { url 'https://repo.example.com/releases' }")
        assert repo.url == "https://repo.example.com/releases"
        assert repo.name == "custom"
        assert repo.type == "maven"

    def test_kotlin_uri_assignment(self) -> None:
        repo = _single('    maven {\n        url = uri("https://repo.example.com")\n    }')
        assert repo.url == "https://repo.example.com"

    def test_set_url(self) -> None:
        assert _single('    maven { setUrl("https://x.example") }').url == "https://x.example"

    def test_call_argument(self) -> None:
        assert _single('    maven("https://x.example/m2")').url == "https://x.example/m2"

    def test_named_call_argument(self) -> None:
        assert _single('    maven(url = "https://x.example/m2")').url == "https://x.example/m2"

    def test_jitpack_name(self) -> None:
        assert _single("    maven { url 'https://jitpack.io' }").name == "jitpack"

    def test_explicit_name_wins(self) -> None:
        repo = _single("    maven {\n        name = 'internal'\n        url 'https://jitpack.io'\n    }")
        assert repo.name == "internal"

    def test_credentials(self) -> None:
        repo = _single(
            "    maven {\n"
            "        url 'https://nexus.example.com'\n"
            "        credentials {\n"
            "            username = 'deploy'\n"
            "            password = findProperty('nexusPassword')\n"
            "        }\n"
            "    }"
        )
        assert repo.username == "deploy"
        assert repo.password == "findProperty('nexusPassword')"

    def test_other_settings_go_to_config(self) -> None:
        repo = _single("    maven {\n        url 'https://x'\n        allowInsecureProtocol = true\n    }")
        assert repo.config == {"allowInsecureProtocol": "true"}

    def test_missing_url_warns_but_keeps_record(self) -> None:
        repos, warnings = _repos("    maven {\n        name = 'nowhere'\n    }")
        assert [r.name for r in repos] == ["nowhere"]
        assert len(warnings) == 1
        assert "Maven repository without url" in warnings[0]


# ###############
# Other Repository Types
# ###############


class TestOtherTypes:
    def test_ivy(self) -> None:
        repo = _single("    ivy { url 'https://ivy.example.com' }")
        assert (repo.name, repo.type, repo.url) == ("ivy", "ivy", "https://ivy.example.com")

    def test_flat_dir_named_argument(self) -> None:
        repo = _single("    flatDir dirs: ['libs', 'vendor']")
        assert repo.type == "flatDir"
        assert repo.config == {"dirs": ["libs", "vendor"]}

    def test_flat_dir_block(self) -> None:
        repo = _single('    flatDir {\n        dirs("libs")\n    }')
        assert repo.config == {"dirs": ["libs"]}

    def test_unknown_statement_warns(self) -> None:
        repos, warnings = _repos("    exoticRepo()")
        assert repos == []
        assert "Unknown repository declaration: exoticRepo()" in warnings[0]

    def test_disabled_repository_parsing(self) -> None:
        result = GradleParser(ParserOptions(parse_repositories=False)).parse("repositories {\n    mavenCentral()\n}\n")
        assert result.project.repositories == []


class TestJitpack:
    def test_is_jitpack_url(self) -> None:
        assert is_jitpack_url("https://jitpack.io")
        assert not is_jitpack_url("https://repo.example.com")
