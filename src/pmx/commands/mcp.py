"""MCP command group for pmx.

- serve: Run the MCP prompt server on stdio (default when no subcommand)
- status: Show the enablement policy and the prompts clients will see
"""

import logging

import click
from rich.console import Console
from rich.table import Table

from pmx.commands.cli_helpers import get_storage, handle_errors
from pmx.config_manager import DisableKind, DisableOption
from pmx.prompt_server import PromptServer, run_mcp_server

logger = logging.getLogger(__name__)


def describe_policy(option: DisableOption) -> str:
    if option.kind is DisableKind.ALL_DISABLED:
        return "disabled"
    if option.kind is DisableKind.ENABLED_EXCEPT:
        return f"enabled except: {', '.join(sorted(option.names))}"
    return "enabled"


@click.group(name="mcp", invoke_without_command=True)
@click.pass_context
def mcp_group(ctx: click.Context):
    """Serve profiles as MCP prompts over stdio.

    Prompt visibility is controlled by [mcp] disable_prompts in config.toml:
    true hides everything, false shows everything, a list hides the named
    profiles. Placeholders written as <{{NAME}}> become prompt arguments.

    \b
    EXAMPLES:
        pmx mcp            # run the server
        pmx mcp status     # show what clients will see
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(mcp_serve)


@mcp_group.command(name="serve")
@click.pass_context
@handle_errors("mcp serve")
def mcp_serve(ctx: click.Context):
    """Run the MCP server on stdin/stdout."""
    run_mcp_server(get_storage(ctx))


@mcp_group.command(name="status")
@click.pass_context
@handle_errors("mcp status")
def mcp_status(ctx: click.Context):
    """Show MCP enablement and visible prompts."""
    storage = get_storage(ctx)
    console = Console()

    mcp_config = storage.config.mcp
    state = "on" if storage.config.is_protocol_enabled else "off"
    console.print(f"MCP surface: [bold]{state}[/bold]")
    console.print(f"  prompts: {describe_policy(mcp_config.disable_prompts)}")
    console.print(f"  tools:   {describe_policy(mcp_config.disable_tools)}")

    entries = PromptServer(storage).list_prompts()
    if not entries:
        console.print("\n[yellow]No prompts visible to MCP clients.[/yellow]")
        return

    table = Table(title=f"Visible Prompts ({len(entries)})")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")

    for entry in entries:
        if entry.arguments is None:
            arguments = "[dim]unreadable[/dim]"
        else:
            arguments = ", ".join(arg.name for arg in entry.arguments) or "-"
        table.add_row(entry.name, arguments)

    console.print(table)


__all__ = ["describe_policy", "mcp_group", "mcp_serve", "mcp_status"]
