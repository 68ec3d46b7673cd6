"""
MCP server definition for the Dev Studio MCP.
"""

import logging
from typing import Any

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from dev_studio_mcp.errors import DevStudioError
from dev_studio_mcp.prompts import get_all_prompts
from dev_studio_mcp.shell.base import ShellContext
from dev_studio_mcp.utils.config import ServiceConfig
from dev_studio_mcp.vfs.manifest import MANIFEST_PATH
from dev_studio_mcp.utils.dependencies import (
    get_autosaver_provider,
    get_base_config,
    get_initialized_vfs,
    get_preview_synthesizer_provider,
    get_session_manager,
    get_shell_interpreter_provider,
)


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "dev-studio-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )

# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


def _success(result: Any) -> dict[str, Any]:
    return {"status": "success", "result": result}


def _error(message: str) -> dict[str, Any]:
    return {"status": "error", "error": message}


# --- Prompt Handlers ---
@mcp_app.prompt(title="Agent System Prompt for Dev Studio")
def get_system_prompt() -> str:
    """Provides the main system prompt for the agent."""
    prompts = get_all_prompts()
    return prompts["agent-system-prompt"]


@mcp_app.prompt(title="Dev Studio Terminal Guide")
def get_terminal_guide() -> str:
    """Describes the emulated terminal and its commands."""
    return get_all_prompts()["terminal-guide"]

# --- Project Tools ---

@mcp_app.tool()
async def create_project(context: Context, name: str, template: str | None = None) -> dict[str, Any]:
    """
    Creates a new coding project from a starter template.

    Args:
        name: Display name of the project.
        template: Starter file set, e.g. 'react' or 'empty'. Defaults to the configured template.

    Returns:
        A dictionary containing the new project.
    """
    logger.info(f"Creating project '{name}'")
    try:
        vfs = await get_initialized_vfs()
        project = await vfs.create_project(name, template or server_config.DEFAULT_TEMPLATE)
        return _success(project.to_storage())
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error creating project: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def list_projects(context: Context) -> dict[str, Any]:
    """
    Lists all projects with their ids, names and file paths.

    Returns:
        A dictionary containing a summary of every project.
    """
    try:
        vfs = await get_initialized_vfs()
        projects = await vfs.get_all_projects()
        return _success(
            [
                {
                    "id": project.id,
                    "name": project.name,
                    "template": project.template,
                    "files": sorted(project.files),
                    "lastModified": project.last_modified,
                }
                for project in projects
            ]
        )
    except Exception as e:
        logger.error(f"Error listing projects: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def get_project(context: Context, project_id: str) -> dict[str, Any]:
    """
    Returns a project with the full content of all its files.

    Args:
        project_id: The id returned by create_project.
    """
    try:
        vfs = await get_initialized_vfs()
        project = await vfs.get_project(project_id)
        return _success(project.to_storage())
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error reading project: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def rename_project(context: Context, project_id: str, name: str) -> dict[str, Any]:
    """
    Changes a project's display name.

    Args:
        project_id: The project to rename.
        name: The new display name.
    """
    try:
        vfs = await get_initialized_vfs()
        project = await vfs.rename_project(project_id, name)
        return _success({"id": project.id, "name": project.name})
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error renaming project: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def fork_project(context: Context, project_id: str, name: str | None = None) -> dict[str, Any]:
    """
    Copies a project and all its files into a new project named '<name> (Fork)'.

    Args:
        project_id: The project to copy.
        name: Base name of the fork. Defaults to the source project's name.
    """
    logger.info(f"Forking project {project_id}")
    try:
        vfs = await get_initialized_vfs()
        fork = await vfs.fork_project(project_id, name)
        return _success(fork.to_storage())
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error forking project: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def delete_project(context: Context, project_id: str) -> dict[str, Any]:
    """
    Deletes a project and all its files. Deleting an unknown project is not an error.

    Args:
        project_id: The project to delete.
    """
    logger.info(f"Deleting project {project_id}")
    try:
        vfs = await get_initialized_vfs()
        get_autosaver_provider().discard_project(project_id)
        await vfs.delete_project(project_id)
        return _success(f"Deleted project {project_id}")
    except Exception as e:
        logger.error(f"Error deleting project: {e}", exc_info=True)
        return _error(str(e))

# --- File Tools ---

@mcp_app.tool()
async def save_file(
    context: Context,
    project_id: str,
    path: str,
    content: str,
    debounce: bool = False,
) -> dict[str, Any]:
    """
    Creates or overwrites a file in a project.

    Args:
        project_id: The project to write to.
        path: File path such as 'src/App.js' (no leading slash).
        content: The full new content of the file.
        debounce: Coalesce rapid edits and write after a quiet period instead of immediately.

    Returns:
        A dictionary describing the saved file, or the pending-save status when debounced.
    """
    logger.info(f"Saving '{path}' in project {project_id}")
    try:
        vfs = await get_initialized_vfs()
        if debounce:
            await vfs.get_project(project_id)
            autosaver = get_autosaver_provider()
            autosaver.schedule(project_id, path, content)
            return _success({"path": path, "pending": True})
        get_autosaver_provider().discard(project_id, path)
        record = await vfs.save_file(project_id, path, content)
        return _success(
            {
                "path": path,
                "language": record.language,
                "lastModified": record.last_modified,
                "persisted": not vfs.degraded,
            }
        )
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error saving file: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def flush_pending_saves(context: Context) -> dict[str, Any]:
    """
    Writes every debounced edit immediately.

    Returns:
        A dictionary with the number of files written.
    """
    try:
        await get_initialized_vfs()
        written = await get_autosaver_provider().flush()
        return _success({"written": written})
    except Exception as e:
        logger.error(f"Error flushing pending saves: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def read_file(context: Context, project_id: str, path: str) -> dict[str, Any]:
    """
    Returns the content of one file.

    Args:
        project_id: The project to read from.
        path: File path such as 'src/App.js'.
    """
    try:
        vfs = await get_initialized_vfs()
        return _success(await vfs.read_file(project_id, path))
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error reading file: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def delete_file(context: Context, project_id: str, path: str) -> dict[str, Any]:
    """
    Removes a file from a project. Removing a missing file is not an error.

    Args:
        project_id: The project to modify.
        path: File path such as 'src/App.js'.
    """
    logger.info(f"Deleting '{path}' from project {project_id}")
    try:
        vfs = await get_initialized_vfs()
        get_autosaver_provider().discard(project_id, path)
        await vfs.delete_file(project_id, path)
        return _success(f"Removed {path}")
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error deleting file: {e}", exc_info=True)
        return _error(str(e))

# --- Package Tools ---

@mcp_app.tool()
async def install_package(
    context: Context,
    project_id: str,
    name: str,
    version: str = "latest",
) -> dict[str, Any]:
    """
    Declares a dependency in the project's package.json. Nothing is downloaded.

    Args:
        project_id: The project to modify.
        name: Package name, e.g. 'left-pad' or '@types/node'.
        version: Version string written to the manifest.
    """
    try:
        vfs = await get_initialized_vfs()
        get_autosaver_provider().discard(project_id, MANIFEST_PATH)
        await vfs.install_package(project_id, name, version)
        return _success(f"Added {name}@{version} to package.json")
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error installing package: {e}", exc_info=True)
        return _error(str(e))


@mcp_app.tool()
async def list_packages(context: Context, project_id: str) -> dict[str, Any]:
    """
    Lists the dependencies declared in the project's package.json.

    Args:
        project_id: The project to inspect.
    """
    try:
        vfs = await get_initialized_vfs()
        packages = await vfs.get_installed_packages(project_id)
        return _success([{"name": name, "version": version} for name, version in packages])
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error listing packages: {e}", exc_info=True)
        return _error(str(e))

# --- Terminal & Preview Tools ---

@mcp_app.tool()
async def terminal(
    context: Context,
    command: str,
    project_id: str | None = None,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    Runs one command line in an emulated developer shell.
    Type 'help' for the list of commands. Each session_id keeps its own
    working directory, environment and history.

    Args:
        command: The command line, e.g. 'ls', 'cat src/App.js', 'npm install left-pad'.
        project_id: The project the shell operates on. Without it, file commands report 'No project open'.
        session_id: Identifies the terminal whose state is used.

    Returns:
        A dictionary with the command output, its kind (normal, error, info, success, clear)
        and the session's current directory.
    """
    logger.info(f"Executing terminal command: {command}")
    try:
        session = get_session_manager().get_session(session_id)
        shell_context = ShellContext()
        if project_id:
            vfs = await get_initialized_vfs()
            project = await vfs.get_project(project_id)
            shell_context = ShellContext.for_project(vfs, project, get_autosaver_provider())

        result = await get_shell_interpreter_provider().execute_command(command, session, shell_context)
        return {**result.to_dict(), "cwd": session.current_directory}
    except DevStudioError as e:
        return {"output": str(e), "kind": "error"}
    except Exception as e:
        logger.error(f"Error executing terminal command: {e}", exc_info=True)
        return {"output": f"Error: {e}", "kind": "error"}


@mcp_app.tool()
async def close_terminal(context: Context, session_id: str = "default") -> dict[str, Any]:
    """
    Discards a terminal session's working directory, environment and history.

    Args:
        session_id: The terminal to close.
    """
    closed = get_session_manager().close_session(session_id)
    return _success({"closed": closed})


@mcp_app.tool()
async def preview(context: Context, project_id: str) -> dict[str, Any]:
    """
    Builds a single self-contained HTML document that runs the project.

    Args:
        project_id: The project to render.

    Returns:
        A dictionary containing the HTML document.
    """
    logger.info(f"Synthesizing preview for project {project_id}")
    try:
        vfs = await get_initialized_vfs()
        project = await vfs.get_project(project_id)
        html = get_preview_synthesizer_provider().synthesize(project)
        return _success(html)
    except DevStudioError as e:
        return _error(str(e))
    except Exception as e:
        logger.error(f"Error synthesizing preview: {e}", exc_info=True)
        return _error(str(e))
