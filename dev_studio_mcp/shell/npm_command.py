import logging
from typing_extensions import override

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind, ShellContext, UsageError

logger = logging.getLogger(__name__)

NPM_USAGE = "npm [install|list|run] <args>"


def split_package_spec(spec: str) -> tuple[str, str]:
    """Splits `name@version` into its parts. Scoped names keep their leading `@`."""
    at = spec.rfind("@")
    if at > 0:
        return spec[:at], spec[at + 1:] or "latest"
    return spec, "latest"


class NpmCommand(Command):
    """
    Simulated package manager. Packages are only recorded: in the session, and
    in the project's manifest when the context can write to it.
    """

    @override
    def get_name(self) -> str:
        return "npm"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        sub_command = args[0].lower() if args else ""
        match sub_command:
            case "install" | "i":
                return await self._install(args[1:], session, context)
            case "list" | "ls":
                return CommandResult(output="\n".join(sorted(session.installed_packages)))
            case "run":
                return self._run_script(args[1:])
            case _:
                raise UsageError(NPM_USAGE)

    async def _install(self, specs: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not specs:
            return CommandResult(output="Installing dependencies...", kind=OutputKind.INFO)

        lines = []
        for spec in specs:
            name, version = split_package_spec(spec)
            session.installed_packages.add(name)
            if context.project is not None and context.install_package is not None:
                await context.install_package(name, version)
            logger.debug(f"npm install {name}@{version}")
            lines.append(f"✓ Installed {name}")
        return CommandResult(output="\n".join(lines))

    def _run_script(self, args: list[str]) -> CommandResult:
        if not args:
            raise UsageError("npm run <script>")
        script = args[0]
        if script == "start":
            return CommandResult(
                output="Starting development server...\nServer running at http://localhost:3000"
            )
        return CommandResult(output=f"Running script: {script}")
