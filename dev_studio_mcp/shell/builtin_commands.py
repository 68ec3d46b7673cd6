"""Terminal housekeeping and the simulated project-level commands."""

from typing_extensions import override

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import Command, CommandResult, OutputKind, ShellContext, UsageError

HELP_TEXT = """DevChat Terminal - Available Commands:

File System:
  ls              - List files and directories
  cat <file>      - Display file contents
  mkdir <dir>     - Create directory
  touch <file>    - Create empty file
  rm <file>       - Remove file
  pwd             - Print working directory
  cd <dir>        - Change directory

Development:
  npm <command>   - NPM package manager
    install <pkg> - Install package
    list          - List installed packages
    run <script>  - Run npm script

  git <command>   - Git version control
    init          - Initialize repository
    status        - Show status
    add <file>    - Stage files
    commit -m     - Commit changes
    log           - Show commit history

  node <file>     - Execute a script file in the sandbox

Project:
  export          - Export project as ZIP
  export K=V      - Set an environment variable
  deploy          - Deploy project to cloud
  ai <prompt>     - AI assistance

Other:
  clear           - Clear terminal
  echo <text>     - Print text
  help            - Show this help message"""

DEPLOY_BASE_URL = "https://devchat.app/demo"


class HelpCommand(Command):
    @override
    def get_name(self) -> str:
        return "help"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        return CommandResult(output=HELP_TEXT, kind=OutputKind.INFO)


class ClearCommand(Command):
    @override
    def get_name(self) -> str:
        return "clear"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        return CommandResult(output="", kind=OutputKind.CLEAR)


class EchoCommand(Command):
    """Prints its arguments. `$NAME` tokens naming a session variable are expanded."""

    @override
    def get_name(self) -> str:
        return "echo"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        words = [
            session.environment[arg[1:]] if arg.startswith("$") and arg[1:] in session.environment else arg
            for arg in args
        ]
        return CommandResult(output=" ".join(words))


class ExportCommand(Command):
    """`export NAME=VALUE` sets session variables; a bare `export` packages the project."""

    @override
    def get_name(self) -> str:
        return "export"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if args:
            assignments = []
            for arg in args:
                name, sep, value = arg.partition("=")
                if not sep or not name:
                    raise UsageError("export [NAME=VALUE ...]")
                assignments.append((name, value))
            session.environment.update(assignments)
            return CommandResult(output="\n".join(f"{name}={value}" for name, value in assignments))

        project = context.require_project()
        archive = f"{project.name.replace(' ', '-')}.zip"
        return CommandResult(
            output=f"Exporting project as ZIP...\n✓ Packaged {len(project.files)} file(s)\n✓ Export ready: {archive}",
            kind=OutputKind.INFO,
        )


class DeployCommand(Command):
    @override
    def get_name(self) -> str:
        return "deploy"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        project = context.require_project()
        return CommandResult(
            output=(
                "Deploying project...\n"
                "✓ Building application\n"
                "✓ Optimizing assets\n"
                "✓ Uploading to cloud\n"
                "✓ Deployment complete!\n\n"
                f"Your app is live at: {DEPLOY_BASE_URL}/{project.id}"
            )
        )


class AiCommand(Command):
    @override
    def get_name(self) -> str:
        return "ai"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        if not args:
            raise UsageError("ai <prompt>")
        prompt = " ".join(args)
        return CommandResult(
            output=(
                f'AI: Processing "{prompt}"...\n\n'
                "Suggestion: Try creating a new component with 'touch src/components/NewComponent.js'"
            ),
            kind=OutputKind.INFO,
        )
