#!/usr/bin/env python3
"""
Unit тесты для file_system_commands.py
"""

import pytest

from dev_studio_mcp.shell.base import OutputKind, ShellContext
from dev_studio_mcp.vfs.templates import REACT_APP_JS


class TestNavigation:
    """Тесты для pwd и cd"""

    @pytest.mark.asyncio
    async def test_cd_variants(self, interpreter, session):
        cases = [
            ("cd src", "/src"),
            ("cd components", "/src/components"),
            ("cd ..", "/src"),
            ("cd /a/./b//c/..", "/a/b"),
            ("cd ~", "/"),
            ("cd ..", "/"),
            ("cd x/../y", "/y"),
            ("cd", "/"),
        ]
        for line, expected in cases:
            result = await interpreter.execute_command(line, session)
            assert result.kind == OutputKind.SUCCESS
            assert session.current_directory == expected, line

    @pytest.mark.asyncio
    async def test_pwd(self, interpreter, session):
        await interpreter.execute_command("cd src", session)
        result = await interpreter.execute_command("pwd", session)
        assert result.output == "/src"


class TestListing:
    """Тесты для ls и cat"""

    @pytest.mark.asyncio
    async def test_ls_root_shows_directories(self, interpreter, session, shell_context):
        """Тест: каталоги строятся из путей файлов"""
        result = await interpreter.execute_command("ls", session, shell_context)

        assert result.output == "package.json\nsrc/"

    @pytest.mark.asyncio
    async def test_ls_subdirectory(self, interpreter, session, shell_context):
        await interpreter.execute_command("cd src", session, shell_context)

        result = await interpreter.execute_command("ls", session, shell_context)

        assert result.output == "App.css\nApp.js\nindex.css\nindex.js"

    @pytest.mark.asyncio
    async def test_ls_empty_directory(self, interpreter, session, shell_context):
        await interpreter.execute_command("cd nowhere", session, shell_context)

        result = await interpreter.execute_command("ls", session, shell_context)

        assert result.kind == OutputKind.INFO
        assert result.output == "No files found"

    @pytest.mark.asyncio
    async def test_cat_relative_and_absolute(self, interpreter, session, shell_context):
        """Тест чтения файла по относительному и абсолютному пути"""
        relative = await interpreter.execute_command("cat src/App.js", session, shell_context)
        await interpreter.execute_command("cd src", session, shell_context)
        from_subdir = await interpreter.execute_command("cat App.js", session, shell_context)
        absolute = await interpreter.execute_command("cat /src/App.js", session, shell_context)

        assert relative.output == from_subdir.output == absolute.output == REACT_APP_JS

    @pytest.mark.asyncio
    async def test_cat_missing_file(self, interpreter, session, shell_context):
        result = await interpreter.execute_command("cat nope.js", session, shell_context)

        assert result.kind == OutputKind.ERROR
        assert result.output == "File not found: nope.js"

    @pytest.mark.asyncio
    async def test_cat_without_argument(self, interpreter, session, shell_context):
        result = await interpreter.execute_command("cat", session, shell_context)
        assert result.output == "Usage: cat <filename>"


class TestFileChanges:
    """Тесты для touch, rm и mkdir"""

    @pytest.mark.asyncio
    async def test_touch_creates_placeholder(self, interpreter, session, shell_context, vfs, react_project):
        await interpreter.execute_command("cd src", session, shell_context)

        result = await interpreter.execute_command("touch components/New.js", session, shell_context)

        assert result.output == "Created: /src/components/New.js"
        assert await vfs.read_file(react_project.id, "src/components/New.js") == "// New file\n"

    @pytest.mark.asyncio
    async def test_rm_removes_file(self, interpreter, session, shell_context, vfs, react_project):
        result = await interpreter.execute_command("rm src/App.css", session, shell_context)

        assert result.output == "Removed: /src/App.css"
        assert "src/App.css" not in (await vfs.get_project(react_project.id)).files

    @pytest.mark.asyncio
    async def test_mkdir_makes_directory_visible(self, interpreter, session, shell_context, react_project):
        """Тест: mkdir создает скрытый файл-заполнитель"""
        result = await interpreter.execute_command("mkdir src/hooks", session, shell_context)
        await interpreter.execute_command("cd src", session, shell_context)
        listing = await interpreter.execute_command("ls", session, shell_context)
        await interpreter.execute_command("cd hooks", session, shell_context)
        inside = await interpreter.execute_command("ls", session, shell_context)

        assert result.output == "Created directory: /src/hooks"
        assert "src/hooks/.gitkeep" in react_project.files
        assert listing.output.splitlines() == ["App.css", "App.js", "hooks/", "index.css", "index.js"]
        assert inside.output == "No files found"

    @pytest.mark.asyncio
    async def test_mkdir_without_project(self, interpreter, session):
        result = await interpreter.execute_command("mkdir lib", session, ShellContext())

        assert result.kind == OutputKind.SUCCESS
        assert result.output == "Created directory: /lib"

    @pytest.mark.asyncio
    async def test_usage_errors(self, interpreter, session, shell_context):
        for line, usage in [
            ("touch", "Usage: touch <filename>"),
            ("rm", "Usage: rm <filename>"),
            ("mkdir", "Usage: mkdir <directory>"),
        ]:
            result = await interpreter.execute_command(line, session, shell_context)
            assert result.kind == OutputKind.ERROR
            assert result.output == usage
