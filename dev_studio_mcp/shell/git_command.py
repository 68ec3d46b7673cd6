import hashlib
from datetime import datetime
from typing_extensions import override

from dev_studio_mcp.models.session import ShellSession
from dev_studio_mcp.shell.base import Command, CommandResult, ShellContext, UsageError

GIT_USAGE = "git [init|status|add|commit|log]"
COMMIT_USAGE = 'git commit -m "message"'

GIT_STATUS_OUTPUT = """On branch main
Your branch is up to date with 'origin/main'.

nothing to commit, working tree clean"""


def commit_message(args: list[str]) -> str | None:
    """
    Extracts the message of `commit -m <msg>`.

    Command lines are split on whitespace only, so a quoted message arrives as
    several tokens. They are joined back and one pair of surrounding quotes is
    removed.
    """
    if len(args) < 2 or args[0] != "-m":
        return None
    message = " ".join(args[1:])
    if len(message) >= 2 and message[0] == message[-1] and message[0] in "\"'":
        message = message[1:-1]
    return message or None


def commit_hash(message: str) -> str:
    return hashlib.sha1(message.encode("utf-8")).hexdigest()[:7]


class GitCommand(Command):
    """Simulated version control. Every sub-command returns a canned response."""

    @override
    def get_name(self) -> str:
        return "git"

    @override
    async def execute(self, args: list[str], session: ShellSession, context: ShellContext) -> CommandResult:
        sub_command = args[0].lower() if args else ""
        match sub_command:
            case "init":
                return CommandResult(output="Initialized empty Git repository")
            case "status":
                return CommandResult(output=GIT_STATUS_OUTPUT)
            case "add":
                target = args[1] if len(args) > 1 else "all files"
                return CommandResult(output=f"Added {target} to staging")
            case "commit":
                message = commit_message(args[1:])
                if message is None:
                    raise UsageError(COMMIT_USAGE)
                return CommandResult(output=f"[main {commit_hash(message)}] {message}\n 1 file changed")
            case "log":
                author = session.environment.get("USER", "developer")
                date = datetime.now().strftime("%a %b %d %H:%M:%S %Y")
                return CommandResult(
                    output=f"commit abc1234 (HEAD -> main)\nAuthor: {author}\nDate:   {date}\n\n    Initial commit"
                )
            case _:
                raise UsageError(GIT_USAGE)
