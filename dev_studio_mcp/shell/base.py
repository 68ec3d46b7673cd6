"""Base types shared by the shell interpreter and its builtin commands."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from dev_studio_mcp.models.project import Project
from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.vfs.autosave import AutoSaver
from dev_studio_mcp.vfs.manifest import MANIFEST_PATH

FileCallback = Callable[[str], Awaitable[Any]]
PackageCallback = Callable[[str, str], Awaitable[Any]]


class OutputKind(StrEnum):
    NORMAL = "normal"
    ERROR = "error"
    INFO = "info"
    SUCCESS = "success"
    CLEAR = "clear"


@dataclass
class CommandResult:
    """Result of one command line, rendered by the terminal according to `kind`."""

    output: str = ""
    kind: OutputKind = OutputKind.SUCCESS

    def to_dict(self) -> dict[str, str]:
        return {"output": self.output, "kind": self.kind.value}


class ShellError(Exception):
    """A command failed in a way the user should see in the transcript."""


class UsageError(ShellError):
    def __init__(self, usage: str) -> None:
        super().__init__(f"Usage: {usage}")
        self.usage = usage


class NoProjectError(ShellError):
    def __init__(self) -> None:
        super().__init__("No project open")


class ShellContext(BaseModel):
    """
    What a command may touch outside the session: the active project and
    callbacks bound to the virtual filesystem.

    Callbacks take project-relative paths (no leading slash).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    project: Project | None = None
    create_file: FileCallback | None = None
    delete_file: FileCallback | None = None
    install_package: PackageCallback | None = None

    def require_project(self) -> Project:
        if self.project is None:
            raise NoProjectError()
        return self.project

    @classmethod
    def for_project(cls, vfs, project: Project, autosaver: AutoSaver | None = None) -> "ShellContext":
        """
        Bind the VFS operations for `project`. With an `autosaver`, pending
        editor drafts of every file a command writes or removes are dropped.
        """

        def discard_draft(path: str) -> None:
            if autosaver is not None:
                autosaver.discard(project.id, path)

        async def create_file(path: str) -> Any:
            discard_draft(path)
            return await vfs.create_file(project.id, path)

        async def delete_file(path: str) -> Any:
            discard_draft(path)
            return await vfs.delete_file(project.id, path)

        async def install_package(name: str, version: str) -> Any:
            discard_draft(MANIFEST_PATH)
            return await vfs.install_package(project.id, name, version)

        return cls(
            project=project,
            create_file=create_file,
            delete_file=delete_file,
            install_package=install_package,
        )


class Command(ABC):
    """A builtin shell command."""

    @abstractmethod
    def get_name(self) -> str:
        pass

    def get_aliases(self) -> list[str]:
        return []

    @abstractmethod
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        """
        Run the command.

        Args:
            args: Whitespace-separated tokens after the verb.
            session: The terminal's session state; commands may mutate it.
            context: The active project and its VFS callbacks.

        Returns:
            The text to show and how to show it.

        Raises:
            ShellError: For failures that should be rendered as an error line.
        """
        pass
