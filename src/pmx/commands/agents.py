"""Agent profile commands for pmx.

For every supported agent this module provides:
- set-<agent>-profile: Replace the agent's system prompt with a profile
- append-<agent>-profile: Append a profile to the agent's system prompt
- reset-<agent>-profile: Remove the agent's system prompt file
"""

import logging

import click

from pmx.agents import AGENT_TARGETS, AgentProfiles
from pmx.commands.cli_helpers import get_storage, handle_errors

logger = logging.getLogger(__name__)


def _agent_profiles(ctx: click.Context) -> AgentProfiles:
    return AgentProfiles(get_storage(ctx))


def make_set_command(agent: str) -> click.Command:
    target = AGENT_TARGETS[agent]

    @click.command(
        name=f"set-{agent}-profile",
        help=f"Set {agent} profile (writes ~/{target.directory}/{target.filename}).",
    )
    @click.argument("profile", type=str)
    @click.pass_context
    @handle_errors(f"set-{agent}-profile")
    def set_profile(ctx: click.Context, profile: str):
        path = _agent_profiles(ctx).apply(agent, profile)
        click.echo(f"Successfully applied profile '{profile}' to {path}")

    return set_profile


def make_append_command(agent: str) -> click.Command:
    @click.command(
        name=f"append-{agent}-profile",
        help=f"Append a profile to the current {agent} profile.",
    )
    @click.argument("profile", type=str)
    @click.pass_context
    @handle_errors(f"append-{agent}-profile")
    def append_profile(ctx: click.Context, profile: str):
        agent_profiles = _agent_profiles(ctx)
        existed = agent_profiles.target_path(agent).exists()
        path = agent_profiles.append(agent, profile)
        if existed:
            click.echo(f"Successfully appended profile '{profile}' to {path}")
        else:
            click.echo(
                f"Successfully created profile '{profile}' at {path} (no existing profile found)"
            )

    return append_profile


def make_reset_command(agent: str) -> click.Command:
    @click.command(name=f"reset-{agent}-profile", help=f"Reset the current {agent} profile.")
    @click.pass_context
    @handle_errors(f"reset-{agent}-profile")
    def reset_profile(ctx: click.Context):
        agent_profiles = _agent_profiles(ctx)
        path = agent_profiles.target_path(agent)
        if agent_profiles.reset(agent):
            click.echo(f"Successfully reset {agent} profile (removed {path})")
        else:
            click.echo(f"No {agent} profile found at {path} (already reset)")

    return reset_profile


def agent_commands() -> list[click.Command]:
    commands = []
    for agent in AGENT_TARGETS:
        commands.extend(
            [make_set_command(agent), make_append_command(agent), make_reset_command(agent)]
        )
    return commands


__all__ = ["agent_commands", "make_append_command", "make_reset_command", "make_set_command"]
