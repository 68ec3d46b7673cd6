#!/usr/bin/env python3
"""
Unit тесты для npm, git, node и встроенных команд терминала
"""

import hashlib

import pytest

from dev_studio_mcp.shell.base import OutputKind
from dev_studio_mcp.shell.builtin_commands import DEPLOY_BASE_URL
from dev_studio_mcp.shell.git_command import commit_hash, commit_message
from dev_studio_mcp.shell.npm_command import split_package_spec


class TestNpmCommand:
    """Тесты для npm"""

    @pytest.mark.asyncio
    async def test_install_updates_session_and_manifest(self, interpreter, session, shell_context, vfs, react_project):
        """Тест: пакет попадает в сессию и в package.json"""
        result = await interpreter.execute_command("npm install left-pad lodash@4.17.21", session, shell_context)

        assert result.kind == OutputKind.SUCCESS
        assert result.output == "✓ Installed left-pad\n✓ Installed lodash"
        assert {"left-pad", "lodash"} <= session.installed_packages
        packages = dict(await vfs.get_installed_packages(react_project.id))
        assert packages["left-pad"] == "latest"
        assert packages["lodash"] == "4.17.21"

    @pytest.mark.asyncio
    async def test_install_without_project_only_updates_session(self, interpreter, session):
        result = await interpreter.execute_command("npm i axios", session)

        assert result.output == "✓ Installed axios"
        assert "axios" in session.installed_packages

    @pytest.mark.asyncio
    async def test_install_without_packages(self, interpreter, session):
        result = await interpreter.execute_command("npm install", session)

        assert result.kind == OutputKind.INFO
        assert result.output == "Installing dependencies..."

    @pytest.mark.asyncio
    async def test_list_is_sorted(self, interpreter, session):
        await interpreter.execute_command("npm install left-pad", session)

        result = await interpreter.execute_command("npm list", session)

        assert result.output == "left-pad\nreact\nreact-dom"

    @pytest.mark.asyncio
    async def test_run(self, interpreter, session):
        start = await interpreter.execute_command("npm run start", session)
        build = await interpreter.execute_command("npm run build", session)

        assert "Server running at http://localhost:3000" in start.output
        assert build.output == "Running script: build"

    @pytest.mark.asyncio
    async def test_unknown_subcommand(self, interpreter, session):
        for line in ["npm", "npm publish"]:
            result = await interpreter.execute_command(line, session)
            assert result.kind == OutputKind.ERROR
            assert result.output == "Usage: npm [install|list|run] <args>"

    def test_split_package_spec(self):
        assert split_package_spec("react") == ("react", "latest")
        assert split_package_spec("react@18.2.0") == ("react", "18.2.0")
        assert split_package_spec("@scope/pkg") == ("@scope/pkg", "latest")
        assert split_package_spec("@scope/pkg@1.0.0") == ("@scope/pkg", "1.0.0")
        assert split_package_spec("left-pad@") == ("left-pad", "latest")


class TestGitCommand:
    """Тесты для git"""

    @pytest.mark.asyncio
    async def test_canned_subcommands(self, interpreter, session):
        init = await interpreter.execute_command("git init", session)
        status = await interpreter.execute_command("git status", session)
        add_all = await interpreter.execute_command("git add", session)
        add_one = await interpreter.execute_command("git add src/App.js", session)

        assert init.output == "Initialized empty Git repository"
        assert status.output.startswith("On branch main")
        assert add_all.output == "Added all files to staging"
        assert add_one.output == "Added src/App.js to staging"

    @pytest.mark.asyncio
    async def test_commit_hash_is_deterministic(self, interpreter, session):
        """Тест: хеш коммита зависит только от сообщения"""
        first = await interpreter.execute_command('git commit -m "Initial commit"', session)
        second = await interpreter.execute_command('git commit -m "Initial commit"', session)

        expected = hashlib.sha1(b"Initial commit").hexdigest()[:7]
        assert first.output == second.output == f"[main {expected}] Initial commit\n 1 file changed"

    @pytest.mark.asyncio
    async def test_commit_without_message(self, interpreter, session):
        for line in ["git commit", "git commit -m", "git commit --amend"]:
            result = await interpreter.execute_command(line, session)
            assert result.kind == OutputKind.ERROR
            assert result.output == 'Usage: git commit -m "message"'

    @pytest.mark.asyncio
    async def test_log_uses_user_variable(self, interpreter, session):
        await interpreter.execute_command("export USER=alice", session)

        result = await interpreter.execute_command("git log", session)

        assert "Author: alice" in result.output
        assert "Initial commit" in result.output

    @pytest.mark.asyncio
    async def test_unknown_subcommand(self, interpreter, session):
        result = await interpreter.execute_command("git push", session)
        assert result.output == "Usage: git [init|status|add|commit|log]"

    def test_commit_message(self):
        assert commit_message(["-m", "fix"]) == "fix"
        assert commit_message(["-m", "'one", "two'"]) == "one two"
        assert commit_message(["-m", '""']) is None
        assert commit_message(["fix"]) is None
        assert commit_hash("fix") == hashlib.sha1(b"fix").hexdigest()[:7]


class TestNodeCommand:
    """Тесты для node"""

    @pytest.mark.asyncio
    async def test_runs_project_file(self, interpreter, session, shell_context, vfs, react_project):
        await vfs.save_file(react_project.id, "scripts/hello.js", "console.log('hi', 2)")

        result = await interpreter.execute_command("node scripts/hello.js", session, shell_context)

        assert result.kind == OutputKind.SUCCESS
        assert result.output == "hi 2"

    @pytest.mark.asyncio
    async def test_runs_javascript_syntax(self, interpreter, session, shell_context, vfs, react_project):
        """Тест: файл выполняется как JavaScript"""
        await vfs.save_file(
            react_project.id, "hello.js", "const name = 'world';\nconsole.log(`hello ${name}`);\n"
        )

        result = await interpreter.execute_command("node hello.js", session, shell_context)

        assert result.kind == OutputKind.SUCCESS
        assert result.output == "hello world"

    @pytest.mark.asyncio
    async def test_silent_script(self, interpreter, session, shell_context, vfs, react_project):
        await vfs.save_file(react_project.id, "noop.js", "const x = 1;")

        result = await interpreter.execute_command("node noop.js", session, shell_context)

        assert result.output == "Script executed successfully"

    @pytest.mark.asyncio
    async def test_fault_is_reported_with_prior_output(self, interpreter, session, shell_context, vfs, react_project):
        """Тест: ошибка скрипта -> вывод типа error"""
        await vfs.save_file(react_project.id, "bad.js", "console.log('start');\nconst fs = require('fs');")

        result = await interpreter.execute_command("node bad.js", session, shell_context)

        assert result.kind == OutputKind.ERROR
        assert result.output == "start\nError: Module not found: fs"

    @pytest.mark.asyncio
    async def test_missing_file(self, interpreter, session, shell_context):
        result = await interpreter.execute_command("node missing.js", session, shell_context)

        assert result.kind == OutputKind.ERROR
        assert result.output == "File not found: missing.js"


class TestBuiltinCommands:
    """Тесты для help, clear, echo, export, deploy и ai"""

    @pytest.mark.asyncio
    async def test_help_and_clear(self, interpreter, session):
        help_result = await interpreter.execute_command("help", session)
        clear_result = await interpreter.execute_command("clear", session)

        assert help_result.kind == OutputKind.INFO
        assert "Available Commands" in help_result.output
        assert clear_result.kind == OutputKind.CLEAR
        assert clear_result.output == ""

    @pytest.mark.asyncio
    async def test_echo_expands_variables(self, interpreter, session):
        plain = await interpreter.execute_command("echo hello   world", session)
        expanded = await interpreter.execute_command("echo $USER $MISSING", session)

        assert plain.output == "hello world"
        assert expanded.output == "developer $MISSING"

    @pytest.mark.asyncio
    async def test_export_sets_variables(self, interpreter, session):
        result = await interpreter.execute_command("export FOO=bar EMPTY=", session)

        assert result.output == "FOO=bar\nEMPTY="
        assert session.environment["FOO"] == "bar"
        assert session.environment["EMPTY"] == ""

    @pytest.mark.asyncio
    async def test_export_rejects_malformed_assignment(self, interpreter, session):
        result = await interpreter.execute_command("export FOO", session)

        assert result.kind == OutputKind.ERROR
        assert result.output == "Usage: export [NAME=VALUE ...]"
        assert "FOO" not in session.environment

    @pytest.mark.asyncio
    async def test_bare_export_packages_project(self, interpreter, session, shell_context):
        result = await interpreter.execute_command("export", session, shell_context)

        assert result.kind == OutputKind.INFO
        assert "Packaged 5 file(s)" in result.output
        assert result.output.endswith("Demo.zip")

    @pytest.mark.asyncio
    async def test_deploy(self, interpreter, session, shell_context, react_project):
        result = await interpreter.execute_command("deploy", session, shell_context)

        assert result.kind == OutputKind.SUCCESS
        assert result.output.endswith(f"{DEPLOY_BASE_URL}/{react_project.id}")

    @pytest.mark.asyncio
    async def test_ai(self, interpreter, session):
        empty = await interpreter.execute_command("ai", session)
        prompt = await interpreter.execute_command("ai make a button", session)

        assert empty.output == "Usage: ai <prompt>"
        assert prompt.kind == OutputKind.INFO
        assert prompt.output.startswith('AI: Processing "make a button"...')
