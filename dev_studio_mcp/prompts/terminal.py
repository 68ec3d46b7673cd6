"""Prompt describing the emulated terminal, built from the shell's own help text."""

from dev_studio_mcp.shell.builtin_commands import HELP_TEXT

TERMINAL_GUIDE = f"""
# Terminal

The `terminal` tool emulates a small developer shell. It is not a real shell:
there are no pipes, redirections, globbing or quoting, and arguments are split on whitespace.
Each `session_id` keeps its own working directory, environment variables and history.

{HELP_TEXT}
"""


def get_prompts() -> dict[str, str]:
    return {"terminal-guide": TERMINAL_GUIDE}
