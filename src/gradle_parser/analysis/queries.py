# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification and grouping queries over a parsed Project."""

from gradle_parser.model.entities import Dependency, DependencySet, Project, Repository
from gradle_parser.parser.repositories import WELL_KNOWN_REPOSITORIES, is_jitpack_url

# ###############
# Public Interface
# ###############

ANDROID_PLUGINS: frozenset[str] = frozenset({"com.android.application", "com.android.library"})

KOTLIN_PLUGINS: frozenset[str] = frozenset({"kotlin", "org.jetbrains.kotlin.jvm", "org.jetbrains.kotlin.android"})

SPRING_BOOT_PLUGIN = "org.springframework.boot"

PLUGIN_CONFIGURATION_BLOCKS: dict[str, list[str]] = {
    "com.android.application": ["android"],
    "com.android.library": ["android"],
    "java": ["java", "sourceCompatibility", "targetCompatibility"],
    "kotlin": ["kotlin", "kotlinOptions"],
    "org.jetbrains.kotlin.jvm": ["kotlin", "kotlinOptions"],
    "org.jetbrains.kotlin.android": ["kotlin", "kotlinOptions"],
    SPRING_BOOT_PLUGIN: ["springBoot"],
}


def has_plugin(project: Project, plugin_ids: frozenset[str] | set[str] | str) -> bool:
    """True if any plugin of *project* has one of the given ids."""
    ids = {plugin_ids} if isinstance(plugin_ids, str) else plugin_ids
    return any(plugin.id in ids for plugin in project.plugins)


def is_android_project(project: Project) -> bool:
    return has_plugin(project, ANDROID_PLUGINS)


def is_kotlin_project(project: Project) -> bool:
    return has_plugin(project, KOTLIN_PLUGINS)


def is_spring_boot_project(project: Project) -> bool:
    return has_plugin(project, SPRING_BOOT_PLUGIN)


def has_jitpack_repository(project: Project) -> bool:
    return any(repo.name == "jitpack" or is_jitpack_url(repo.url) for repo in project.repositories)


def has_custom_repository(project: Project) -> bool:
    """True if any repository is not one of the well-known ones."""
    return any(repo.name not in WELL_KNOWN_REPOSITORIES for repo in project.repositories)


def default_repositories(project: Project) -> list[Repository]:
    """Return the well-known repositories (``mavenCentral()``, ``google()``, ...) of *project*."""
    return [repo for repo in project.repositories if repo.name in WELL_KNOWN_REPOSITORIES]


def group_dependencies_by_scope(dependencies: list[Dependency]) -> list[DependencySet]:
    """Split *dependencies* into one DependencySet per scope.

    Scopes appear in order of first occurrence and each set keeps the
    declaration order of its dependencies. An empty scope forms its own set.
    """
    by_scope: dict[str, list[Dependency]] = {}
    for dep in dependencies:
        by_scope.setdefault(dep.scope, []).append(dep)
    return [DependencySet(scope=scope, dependencies=deps) for scope, deps in by_scope.items()]


def dependencies_by_scope(project: Project) -> dict[str, list[Dependency]]:
    """Map each scope of *project* to its dependencies, in first-seen order."""
    return {dep_set.scope: dep_set.dependencies for dep_set in group_dependencies_by_scope(project.dependencies)}


def plugin_configurations(project: Project) -> dict[str, list[str]]:
    """Map each applied plugin with known configuration blocks to those block names."""
    return {
        plugin.id: list(PLUGIN_CONFIGURATION_BLOCKS[plugin.id])
        for plugin in project.plugins
        if plugin.id in PLUGIN_CONFIGURATION_BLOCKS
    }
