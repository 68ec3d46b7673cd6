#!/usr/bin/env python3
"""
Unit тесты для навигации по истории ShellSession
"""

import pytest

from dev_studio_mcp.models.session import DEFAULT_ENVIRONMENT, ShellSession


class TestSessionHistory:
    """Тесты для previous_command / next_command"""

    def test_defaults(self):
        session = ShellSession()

        assert session.current_directory == "/"
        assert session.environment == DEFAULT_ENVIRONMENT
        assert session.installed_packages == {"react", "react-dom"}
        assert session.history_index == -1

    def test_empty_history(self):
        session = ShellSession()
        assert session.previous_command() == ""
        assert session.next_command() == ""

    def test_up_and_down(self):
        """Тест: стрелки вверх/вниз"""
        session = ShellSession()
        for line in ["ls", "pwd", "help"]:
            session.record(line)

        assert session.previous_command() == "help"
        assert session.previous_command() == "pwd"
        assert session.previous_command() == "ls"
        assert session.previous_command() == "ls"
        assert session.next_command() == "pwd"
        assert session.next_command() == "help"
        assert session.next_command() == ""
        assert session.history_index == -1

    def test_record_resets_cursor(self):
        session = ShellSession()
        session.record("ls")
        session.previous_command()

        session.record("pwd")

        assert session.history_index == -1
        assert session.previous_command() == "pwd"

    @pytest.mark.asyncio
    async def test_interpreter_records_history(self, interpreter):
        session = ShellSession()
        session.previous_command()

        await interpreter.execute_command("echo hi", session)

        assert session.previous_command() == "echo hi"

    def test_environment_is_not_shared(self):
        first = ShellSession()
        first.environment["FOO"] = "1"
        first.installed_packages.add("axios")

        second = ShellSession()

        assert "FOO" not in second.environment
        assert "axios" not in second.installed_packages
