"""
Configuration and dependency management for the Dev Studio MCP server.
"""

import asyncio
import logging
from functools import lru_cache

from dev_studio_mcp.preview.synthesizer import PreviewSynthesizer
from dev_studio_mcp.sandbox.executor import SandboxExecutor
from dev_studio_mcp.shell.interpreter import ShellInterpreter
from dev_studio_mcp.storage.file_store import FileStore, InMemoryFileStore, JsonFileStore
from dev_studio_mcp.utils.config import ServiceConfig
from dev_studio_mcp.utils.session_manager import SessionManager
from dev_studio_mcp.vfs.autosave import AutoSaver
from dev_studio_mcp.vfs.virtual_file_system import VirtualFileSystem

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    Cached so environment variables and .env files are read once.
    """
    return ServiceConfig()


# --- Service Providers ---
# Each service is an explicit object built from configuration; tests build their own.


@lru_cache
def get_file_store() -> FileStore:
    config = get_base_config()
    if not config.STORAGE_PATH:
        logger.warning("STORAGE_PATH is empty. Projects will only be kept in memory.")
        return InMemoryFileStore()
    logger.info(f"Initializing JsonFileStore at {config.STORAGE_PATH}")
    return JsonFileStore(config.STORAGE_PATH)


@lru_cache
def get_vfs_provider() -> VirtualFileSystem:
    """Returns a cached, not yet initialized VirtualFileSystem."""
    logger.info("Initializing VirtualFileSystem singleton.")
    return VirtualFileSystem(get_file_store(), owner=get_base_config().PROJECT_OWNER)


@lru_cache
def _get_vfs_lock() -> asyncio.Lock:
    return asyncio.Lock()


async def get_initialized_vfs() -> VirtualFileSystem:
    """Returns the VirtualFileSystem, loading the project table on first use."""
    vfs = get_vfs_provider()
    if not vfs.initialized:
        async with _get_vfs_lock():
            if not vfs.initialized:
                await vfs.initialize()
    return vfs


@lru_cache
def get_autosaver_provider() -> AutoSaver:
    return AutoSaver(get_vfs_provider(), delay=get_base_config().AUTOSAVE_DELAY_SECONDS)


@lru_cache
def get_shell_interpreter_provider() -> ShellInterpreter:
    """Returns a cached instance of the ShellInterpreter."""
    logger.info("Initializing ShellInterpreter singleton.")
    sandbox = SandboxExecutor(time_limit=get_base_config().SANDBOX_TIME_LIMIT_SECONDS)
    return ShellInterpreter(sandbox=sandbox)


@lru_cache
def get_session_manager() -> SessionManager:
    return SessionManager()


@lru_cache
def get_preview_synthesizer_provider() -> PreviewSynthesizer:
    config = get_base_config()
    return PreviewSynthesizer(entry_file=config.PREVIEW_ENTRY_FILE, entry_symbol=config.PREVIEW_ENTRY_SYMBOL)
