#!/usr/bin/env python3
"""
Unit тесты для path_utils.py
"""

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.path_utils import normalize_path, resolve_path, resolve_project_path, to_project_path


class TestPathUtils:
    """Тесты для разрешения путей"""

    def test_resolve_path(self):
        root = ShellSession()
        nested = ShellSession(current_directory="/src")

        assert resolve_path(root, "App.js") == "/App.js"
        assert resolve_path(nested, "App.js") == "/src/App.js"
        assert resolve_path(nested, "/package.json") == "/package.json"
        assert resolve_path(nested, "../x") == "/src/../x"

    def test_normalize_path(self):
        assert normalize_path("/src/../x") == "/x"
        assert normalize_path("//a/./b//") == "/a/b"
        assert normalize_path("/..") == "/"
        assert normalize_path("") == "/"

    def test_project_paths_have_no_leading_slash(self):
        """Тест: ключи файлов проекта без ведущего слеша"""
        assert to_project_path("/src/App.js") == "src/App.js"
        assert to_project_path("/") == ""
        assert resolve_project_path(ShellSession(current_directory="/src"), "../index.js") == "index.js"

    def test_session_directory_is_absolute(self):
        assert ShellSession(current_directory="src").current_directory == "/src"
