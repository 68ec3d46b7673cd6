import logging
from typing_extensions import override

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.sandbox.executor import SandboxExecutor
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind, ShellContext, ShellError, UsageError
from dev_studio_mcp.shell.path_utils import resolve_project_path

logger = logging.getLogger(__name__)


class NodeCommand(Command):
    """
    Runs a project file in the sandbox and shows what it logged.
    Faults inside the script are reported as error output, never raised.
    """

    def __init__(self, sandbox: SandboxExecutor) -> None:
        self._sandbox = sandbox

    @override
    def get_name(self) -> str:
        return "node"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("node <filename>")
        project = context.require_project()

        file_path = resolve_project_path(session, args[0])
        record = project.files.get(file_path)
        if record is None:
            raise ShellError(f"File not found: {args[0]}")

        logger.info(f"Running {file_path} in sandbox")
        result = self._sandbox.run(record.content, filename=file_path)
        if not result.ok:
            output = f"{result.output}\n{result.error}" if result.output else result.error
            return CommandResult(output=output, kind=OutputKind.ERROR)
        return CommandResult(output=result.output or "Script executed successfully")
