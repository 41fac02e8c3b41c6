"""CLI entry point for pmx.

Commands:
    pmx list                         # List profiles
    pmx profile <subcommand>         # Manage profiles
    pmx set-claude-profile <name>    # Apply a profile to Claude
    pmx set-codex-profile <name>     # Apply a profile to Codex
    pmx mcp                          # Serve profiles over MCP (stdio)
"""

import logging
from pathlib import Path

import click

from pmx import __version__
from pmx.commands import agent_commands, mcp_group, profile_group
from pmx.commands.cli_helpers import get_storage, handle_errors
from pmx.commands.profile import echo_profile_names

logger = logging.getLogger(__name__)


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Path to the storage directory (default: $PMX_CONFIG_FILE or ~/.config/pmx)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """pmx - a prompt management suite.

    Stores reusable system prompts ("profiles") as Markdown files, applies
    them to coding agents and serves them to MCP clients.

    \b
    PROFILE COMMANDS:
        list                     List all profiles
        profile list|show|create|edit|delete

    \b
    AGENT COMMANDS:
        set-claude-profile       Write a profile to ~/.claude/CLAUDE.md
        append-claude-profile    Append a profile to ~/.claude/CLAUDE.md
        reset-claude-profile     Remove ~/.claude/CLAUDE.md
        set-codex-profile        Write a profile to ~/.codex/AGENTS.md
        append-codex-profile     Append a profile to ~/.codex/AGENTS.md
        reset-codex-profile      Remove ~/.codex/AGENTS.md

    \b
    MCP COMMANDS:
        mcp                      Serve profiles as MCP prompts over stdio
        mcp status               Show what MCP clients will see

    \b
    CONFIGURATION:
        Storage root: <root>/config.toml and <root>/repo/**/*.md
        Root: --config, else $PMX_CONFIG_FILE, else ~/.config/pmx

    For help on any command: pmx <command> --help
    """
    # Logs go to stderr so stdout stays free for the MCP stdio channel
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@main.command(name="list")
@click.pass_context
@handle_errors("list")
def list_command(ctx: click.Context) -> None:
    """List all available profiles."""
    echo_profile_names(get_storage(ctx).repository.list())


main.add_command(profile_group)
main.add_command(mcp_group)
for command in agent_commands():
    main.add_command(command)


if __name__ == "__main__":
    main()
