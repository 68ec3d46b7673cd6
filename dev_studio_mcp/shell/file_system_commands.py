"""
Commands that navigate the virtual directory tree and read or change project files.

The VFS has no directory entries: directories are synthesized from the
`/`-separated file keys.
"""

import logging
from typing_extensions import override

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind, ShellContext, ShellError, UsageError
from dev_studio_mcp.shell.path_utils import normalize_path, resolve_path, to_project_path

logger = logging.getLogger(__name__)

DIRECTORY_PLACEHOLDER = ".gitkeep"


class PwdCommand(Command):
    @override
    def get_name(self) -> str:
        return "pwd"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        return CommandResult(output=session.current_directory)


class CdCommand(Command):
    @override
    def get_name(self) -> str:
        return "cd"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args or args[0] == "~":
            session.current_directory = "/"
            return CommandResult()

        path = args[0]
        match path:
            case "..":
                segments = [s for s in session.current_directory.split("/") if s]
                session.current_directory = "/" + "/".join(segments[:-1])
            case _ if path.startswith("/"):
                session.current_directory = normalize_path(path)
            case _:
                session.current_directory = normalize_path(resolve_path(session, path))
        return CommandResult()


class LsCommand(Command):
    @override
    def get_name(self) -> str:
        return "ls"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        project = context.require_project()
        prefix = to_project_path(session.current_directory)

        entries: set[str] = set()
        for file_path in project.files:
            if prefix:
                if not file_path.startswith(prefix + "/"):
                    continue
                rest = file_path[len(prefix) + 1:]
            else:
                rest = file_path
            name, sep, _ = rest.partition("/")
            # Hidden entries are skipped like a plain `ls`.
            if not name or name.startswith("."):
                continue
            entries.add(f"{name}/" if sep else name)

        if not entries:
            return CommandResult(output="No files found", kind=OutputKind.INFO)
        return CommandResult(output="\n".join(sorted(entries)))


class CatCommand(Command):
    @override
    def get_name(self) -> str:
        return "cat"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("cat <filename>")
        project = context.require_project()

        record = project.files.get(to_project_path(resolve_path(session, args[0])))
        if record is None:
            raise ShellError(f"File not found: {args[0]}")
        return CommandResult(output=record.content)


class TouchCommand(Command):
    @override
    def get_name(self) -> str:
        return "touch"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("touch <filename>")
        if context.create_file is None:
            context.require_project()
            raise ShellError("File creation is not available for this project")

        full_path = normalize_path(resolve_path(session, args[0]))
        await context.create_file(to_project_path(full_path))
        return CommandResult(output=f"Created: {full_path}")


class RmCommand(Command):
    @override
    def get_name(self) -> str:
        return "rm"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("rm <filename>")
        if context.delete_file is None:
            context.require_project()
            raise ShellError("File removal is not available for this project")

        full_path = normalize_path(resolve_path(session, args[0]))
        await context.delete_file(to_project_path(full_path))
        return CommandResult(output=f"Removed: {full_path}")


class MkdirCommand(Command):
    """Directories only exist through their files, so a placeholder file makes one visible."""

    @override
    def get_name(self) -> str:
        return "mkdir"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("mkdir <directory>")

        full_path = normalize_path(resolve_path(session, args[0]))
        if context.project is not None and context.create_file is not None and full_path != "/":
            await context.create_file(f"{to_project_path(full_path)}/{DIRECTORY_PLACEHOLDER}")
        else:
            logger.debug(f"mkdir {full_path}: no project bound, nothing to create")
        return CommandResult(output=f"Created directory: {full_path}")
