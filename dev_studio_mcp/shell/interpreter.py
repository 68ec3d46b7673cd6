"""
Command-line shell emulator for the in-app development environment.

One call to `execute_command` handles one command line to completion. All
terminal state lives in the ShellSession passed in by the caller, so several
terminals can share one interpreter.
"""

import logging

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.sandbox.executor import SandboxExecutor
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind, ShellContext, ShellError
from dev_studio_mcp.shell.builtin_commands import (
    AiCommand,
    ClearCommand,
    DeployCommand,
    EchoCommand,
    ExportCommand,
    HelpCommand,
)
from dev_studio_mcp.shell.file_system_commands import (
    CatCommand,
    CdCommand,
    LsCommand,
    MkdirCommand,
    PwdCommand,
    RmCommand,
    TouchCommand,
)
from dev_studio_mcp.shell.git_command import GitCommand
from dev_studio_mcp.shell.node_command import NodeCommand
from dev_studio_mcp.shell.npm_command import NpmCommand

logger = logging.getLogger(__name__)


def default_commands(sandbox: SandboxExecutor) -> list[Command]:
    return [
        HelpCommand(),
        ClearCommand(),
        LsCommand(),
        CatCommand(),
        MkdirCommand(),
        TouchCommand(),
        RmCommand(),
        PwdCommand(),
        CdCommand(),
        NpmCommand(),
        GitCommand(),
        NodeCommand(sandbox),
        EchoCommand(),
        ExportCommand(),
        DeployCommand(),
        AiCommand(),
    ]


class ShellInterpreter:
    """Dispatches command lines to a fixed table of builtin commands."""

    def __init__(self, sandbox: SandboxExecutor | None = None, commands: list[Command] | None = None) -> None:
        self._commands: dict[str, Command] = {}
        for command in commands if commands is not None else default_commands(sandbox or SandboxExecutor()):
            self._register(command)

    @property
    def command_names(self) -> list[str]:
        return sorted(self._commands)

    def _register(self, command: Command) -> None:
        for name in [command.get_name(), *command.get_aliases()]:
            self._commands[name.lower()] = command

    async def execute_command(
        self,
        line: str,
        session: ShellSession,
        context: ShellContext | None = None,
    ) -> CommandResult:
        """
        Execute one command line.

        Args:
            line: The raw line typed by the user.
            session: The terminal's session; its history is appended to.
            context: The active project and VFS callbacks. Defaults to no project.

        Returns:
            The command's output and its kind. Failures come back as `error`
            results; this method does not raise for command errors.
        """
        if not line.strip():
            return CommandResult(kind=OutputKind.NORMAL)

        session.record(line)
        context = context or ShellContext()

        tokens = line.split()
        verb, args = tokens[0].lower(), tokens[1:]

        command = self._commands.get(verb)
        if command is None:
            return CommandResult(
                output=f"Command not found: {verb}. Type 'help' for available commands.",
                kind=OutputKind.ERROR,
            )

        logger.debug(f"Executing shell command '{verb}' with {len(args)} argument(s)")
        try:
            return await command.execute(args, session, context)
        except ShellError as e:
            return CommandResult(output=str(e), kind=OutputKind.ERROR)
        except Exception as e:
            logger.error(f"Error executing shell command '{verb}': {e}", exc_info=True)
            return CommandResult(output=f"Error: {e}", kind=OutputKind.ERROR)
