"""
Общие фикстуры для тестов dev_studio_mcp
"""

import pytest
import pytest_asyncio

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import ShellContext
from dev_studio_mcp.shell.interpreter import ShellInterpreter
from dev_studio_mcp.storage.file_store import InMemoryFileStore
from dev_studio_mcp.vfs.virtual_file_system import VirtualFileSystem


@pytest.fixture
def store():
    """Создает пустое хранилище в памяти"""
    return InMemoryFileStore()


@pytest_asyncio.fixture
async def vfs(store):
    """Создает инициализированную VirtualFileSystem"""
    file_system = VirtualFileSystem(store, owner="user-1")
    await file_system.initialize()
    return file_system


@pytest_asyncio.fixture
async def react_project(vfs):
    """Создает проект из шаблона react"""
    return await vfs.create_project("Demo", "react")


@pytest.fixture
def session():
    """Создает новую сессию терминала"""
    return ShellSession()


@pytest.fixture
def interpreter():
    """Создает экземпляр ShellInterpreter"""
    return ShellInterpreter()


@pytest.fixture
def shell_context(vfs, react_project):
    """Создает контекст терминала, привязанный к проекту"""
    return ShellContext.for_project(vfs, react_project)
