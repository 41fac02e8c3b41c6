"""Command groups for pmx CLI."""

from pmx.commands.agents import agent_commands
from pmx.commands.mcp import mcp_group
from pmx.commands.profile import profile_group

__all__ = ["agent_commands", "mcp_group", "profile_group"]
