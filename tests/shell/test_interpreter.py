#!/usr/bin/env python3
"""
Unit тесты для shell/interpreter.py
"""

import pytest

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind
from dev_studio_mcp.shell.interpreter import ShellInterpreter


class ExplodingCommand(Command):
    """Команда, которая падает с непредвиденной ошибкой"""

    def get_name(self):
        return "boom"

    async def execute(self, args, session, context):
        raise RuntimeError("kaboom")


class EchoArgsCommand(Command):
    def get_name(self):
        return "args"

    def get_aliases(self):
        return ["a"]

    async def execute(self, args, session, context):
        return CommandResult(output="|".join(args))


class TestShellInterpreter:
    """Тесты для ShellInterpreter"""

    def test_default_command_table(self, interpreter):
        """Тест полного набора встроенных команд"""
        assert interpreter.command_names == sorted(
            [
                "ai", "cat", "cd", "clear", "deploy", "echo", "export", "git",
                "help", "ls", "mkdir", "node", "npm", "pwd", "rm", "touch",
            ]
        )

    @pytest.mark.asyncio
    async def test_blank_line_is_ignored(self, interpreter, session):
        """Тест: пустая строка не попадает в историю"""
        result = await interpreter.execute_command("   ", session)

        assert result.output == ""
        assert result.kind == OutputKind.NORMAL
        assert session.history == []

    @pytest.mark.asyncio
    async def test_unknown_command(self, interpreter, session):
        result = await interpreter.execute_command("FooBar --x", session)

        assert result.kind == OutputKind.ERROR
        assert result.output == "Command not found: foobar. Type 'help' for available commands."
        assert session.history == ["FooBar --x"]

    @pytest.mark.asyncio
    async def test_verb_is_case_insensitive(self, interpreter, session):
        result = await interpreter.execute_command("PWD", session)
        assert result.output == "/"

    @pytest.mark.asyncio
    async def test_history_records_raw_lines(self, interpreter, session):
        """Тест: история хранит строки как введены"""
        await interpreter.execute_command("echo  a   b", session)
        await interpreter.execute_command("pwd", session)

        assert session.history == ["echo  a   b", "pwd"]

    @pytest.mark.asyncio
    async def test_tokens_are_split_on_whitespace(self, session):
        interpreter = ShellInterpreter(commands=[EchoArgsCommand()])

        result = await interpreter.execute_command("a  one \t two", session)

        assert result.output == "one|two"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_result(self, session):
        """Тест: исключение команды не выходит за пределы интерпретатора"""
        interpreter = ShellInterpreter(commands=[ExplodingCommand()])

        result = await interpreter.execute_command("boom", session)

        assert result.kind == OutputKind.ERROR
        assert result.output == "Error: kaboom"

    @pytest.mark.asyncio
    async def test_no_project_error(self, interpreter, session):
        """Тест: команды проекта без открытого проекта"""
        for line in ["ls", "cat a.js", "node a.js", "deploy"]:
            result = await interpreter.execute_command(line, session)
            assert result.kind == OutputKind.ERROR
            assert result.output == "No project open"

    @pytest.mark.asyncio
    async def test_sessions_are_independent(self, interpreter):
        first, second = ShellSession(), ShellSession()

        await interpreter.execute_command("cd src", first)
        await interpreter.execute_command("export FOO=1", first)

        assert first.current_directory == "/src"
        assert second.current_directory == "/"
        assert "FOO" not in second.environment
        assert second.history == []

    def test_result_to_dict(self):
        assert CommandResult(output="x", kind=OutputKind.INFO).to_dict() == {"output": "x", "kind": "info"}
