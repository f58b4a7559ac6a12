# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for task declarations."""

import pytest

from gradle_parser.model.entities import Task
from gradle_parser.parser.blocks import StatementError, parse_script
from gradle_parser.parser.options import ParserOptions
from gradle_parser.parser.parser import GradleParser
from gradle_parser.parser.tasks import is_task_statement, parse_task_statement

# ###############
# Test Helpers
# ###############


def _tasks(source: str, options: ParserOptions | None = None) -> list[Task]:
    return GradleParser(options).parse(source).project.tasks


def _single(source: str) -> Task:
    tasks = _tasks(source)
    assert len(tasks) == 1
    return tasks[0]


# ###############
# Groovy Forms
# ###############


class TestGroovyTasks:
    def test_task_with_type_and_body(self) -> None:
        task = _single("task copyDocs(type: Copy) {\n    from 'src/docs'\n    into 'build/docs'\n}\n")
        assert task.name == "copyDocs"
        assert task.type == "Copy"
        assert task.configuration == "from 'src/docs'\ninto 'build/docs'"

    def test_task_with_string_name(self) -> None:
        task = _single("task('hello') {\n    doLast { println 'hi' }\n}\n")
        assert task.name == "hello"
        assert task.type == ""

    def test_task_without_body(self) -> None:
        task = _single("task cleanAll\n")
        assert task.name == "cleanAll"
        assert task.configuration == ""

    def test_named_arguments(self) -> None:
        task = _single(
            "task dist(type: Zip, group: 'distribution', description: 'Builds the zip', dependsOn: ['jar'])\n"
        )
        assert task.group == "distribution"
        assert task.description == "Builds the zip"
        assert task.depends_on == ["jar"]

    def test_missing_name_warns(self) -> None:
        result = GradleParser().parse("task\n")
        assert result.project.tasks == []
        assert "Task declaration without a name" in result.warnings[0]


# ###############
# Container Registrations
# ###############


class TestRegistrations:
    def test_kotlin_register_with_type_argument(self) -> None:
        task = _single('tasks.register<Copy>("copyDocs") {\n    from("src/docs")\n}\n')
        assert (task.name, task.type) == ("copyDocs", "Copy")

    def test_register_with_class_argument(self) -> None:
        task = _single('tasks.register("copyDocs", Copy::class) {\n}\n')
        assert task.type == "Copy"

    def test_register_with_java_class(self) -> None:
        task = _single('tasks.register("x", Copy::class.java)\n')
        assert task.type == "Copy"

    @pytest.mark.parametrize("method", ["create", "named", "getByName", "maybeCreate"])
    def test_other_registration_methods(self, method: str) -> None:
        task = _single(f"tasks.{method}('test') {{\n    useJUnitPlatform()\n}}\n")
        assert task.name == "test"
        assert task.configuration == "useJUnitPlatform()"

    def test_task_name_accessor(self) -> None:
        task = _single("tasks.test {\n    maxParallelForks = 2\n}\n")
        assert task.name == "test"

    def test_container_block(self) -> None:
        source = 'tasks {\n    register<Zip>("dist")\n    test {\n        useJUnitPlatform()\n    }\n}\n'
        tasks = _tasks(source)
        assert [(t.name, t.type) for t in tasks] == [("dist", "Zip"), ("test", "")]

    def test_container_methods_are_not_tasks(self) -> None:
        source = "tasks.withType(JavaCompile) {\n    options.encoding = 'UTF-8'\n}\n"
        result = GradleParser().parse(source)
        assert result.project.tasks == []
        assert "tasks.withType" in result.project.extensions


class TestTaskBody:
    def test_description_group_depends_on(self) -> None:
        source = (
            'tasks.register("integrationTest") {\n'
            '    description = "Runs integration tests."\n'
            '    group = "verification"\n'
            '    dependsOn("compileJava", "processResources")\n'
            "}\n"
        )
        task = _single(source)
        assert task.description == "Runs integration tests."
        assert task.group == "verification"
        assert task.depends_on == ["compileJava", "processResources"]

    def test_depends_on_list_of(self) -> None:
        task = _single('tasks.register("a") {\n    dependsOn(listOf("b", "c"))\n}\n')
        assert task.depends_on == ["b", "c"]

    def test_comments_stripped_from_configuration(self) -> None:
        source = "task hello {\n    // say hello\n    doLast { println 'hi' } // inline\n}\n"
        assert _single(source).configuration == "doLast { println 'hi' }"

    def test_comments_kept_when_not_skipping(self) -> None:
        source = "task hello {\n    // say hello\n    doLast { }\n}\n"
        tasks = _tasks(source, ParserOptions(skip_comments=False))
        assert tasks[0].configuration == "// say hello\ndoLast { }"


class TestTaskOptions:
    def test_disabled_task_parsing(self) -> None:
        assert _tasks("task a\ntasks.register('b')\n", ParserOptions(parse_tasks=False)) == []


class TestDirectCalls:
    def test_is_task_statement(self) -> None:
        stmts = parse_script("task a\ntasks.withType(Test) { }\nfoo { }\n").root.statements
        assert [is_task_statement(s) for s in stmts] == [True, False, False]

    def test_in_container_form(self) -> None:
        stmt = parse_script("test { }\n").root.statements[0]
        assert not is_task_statement(stmt)
        assert is_task_statement(stmt, in_container=True)

    def test_unreadable_name_raises(self) -> None:
        source = "task 42\n"
        stmt = parse_script(source).root.statements[0]
        with pytest.raises(StatementError):
            parse_task_statement(stmt, source)

    def test_span_covers_statement(self) -> None:
        source = "tasks.register('a') { }  // trailing\n"
        stmt = parse_script(source).root.statements[0]
        decl = parse_task_statement(stmt, source)
        assert source[decl.start : decl.end] == "tasks.register('a') { }"
