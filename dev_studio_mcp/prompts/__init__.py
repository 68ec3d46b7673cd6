"""Collects the prompt texts exposed by the MCP server."""

from .system import get_prompts as get_system_prompts
from .terminal import get_prompts as get_terminal_prompts

PROMPT_SOURCES = (get_system_prompts, get_terminal_prompts)


def get_all_prompts() -> dict[str, str]:
    """
    Returns every prompt keyed by name. The agent system prompt also
    carries the terminal guide.
    """
    prompts: dict[str, str] = {}
    for source in PROMPT_SOURCES:
        prompts.update(source())
    prompts["agent-system-prompt"] += prompts["terminal-guide"]
    return prompts
