"""Profile command group for pmx.

This module provides CLI commands for profile management:
- list: List all profiles
- show: Print a profile
- create: Create a new profile in $EDITOR (or from a file)
- edit: Edit a profile in $EDITOR
- delete: Delete a profile
"""

import logging
from pathlib import Path

import click

from pmx.commands.cli_helpers import get_storage, handle_errors
from pmx.exceptions import ProfileExistsError
from pmx.name_validator import validate_profile_name

logger = logging.getLogger(__name__)

TEMPLATE_HINT = "<!-- Add your profile content here -->"


def new_profile_template(name: str) -> str:
    return f"# {name}\n\n{TEMPLATE_HINT}\n"


def is_effectively_empty(content: str | None) -> bool:
    """True if an edited document holds no real content.

    Blank lines, Markdown headings and HTML comments do not count.
    """
    if content is None:
        return True
    return all(
        not line.strip() or line.strip().startswith(("#", "<!--"))
        for line in content.splitlines()
    )


def echo_profile_names(names: list[str]) -> None:
    if not names:
        click.echo("No profiles found.")
        return
    for name in names:
        click.echo(name)


@click.group(name="profile")
def profile_group():
    """Manage stored profiles.

    Profiles are Markdown files stored in <root>/repo/. Names may contain
    "/" to group profiles into folders (e.g. design/plan).

    \b
    SUBCOMMANDS:
        list     List all profiles
        show     Print a profile
        create   Create a new profile
        edit     Edit a profile
        delete   Delete a profile

    \b
    EXAMPLES:
        pmx profile create design/plan
        pmx profile show design/plan
        pmx profile delete design/plan --force
    """
    pass


@profile_group.command(name="list")
@click.pass_context
@handle_errors("profile list")
def profile_list(ctx: click.Context):
    """List all available profiles."""
    echo_profile_names(get_storage(ctx).repository.list())


@profile_group.command(name="show")
@click.argument("name", type=str)
@click.pass_context
@handle_errors("profile show")
def profile_show(ctx: click.Context, name: str):
    """Print the content of a profile."""
    content = get_storage(ctx).repository.read(name)
    click.echo(content, nl=not content.endswith("\n"))


@profile_group.command(name="create")
@click.argument("name", type=str)
@click.option(
    "--file",
    "source_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read content from a file instead of opening an editor",
)
@click.pass_context
@handle_errors("profile create")
def profile_create(ctx: click.Context, name: str, source_file: Path | None):
    """Create a new profile.

    Opens $EDITOR (or $VISUAL) with a template. The profile is only saved
    when real content was added.

    \b
    Examples:
        pmx profile create review
        pmx profile create design/plan --file plan.md
    """
    repository = get_storage(ctx).repository

    validate_profile_name(name)
    if repository.exists(name):
        raise ProfileExistsError(name)

    if source_file is not None:
        content = source_file.read_text(encoding="utf-8")
    else:
        content = click.edit(new_profile_template(name), extension=".md")

    if is_effectively_empty(content):
        click.echo("Profile creation cancelled - no content added")
        return

    repository.create(name, content)
    click.echo(f"Profile '{name}' created successfully")


@profile_group.command(name="edit")
@click.argument("name", type=str)
@click.pass_context
@handle_errors("profile edit")
def profile_edit(ctx: click.Context, name: str):
    """Edit an existing profile in $EDITOR.

    The profile is left untouched when the editor is closed without saving.
    """
    repository = get_storage(ctx).repository
    content = repository.read(name)

    edited = click.edit(content, extension=".md")
    if edited is None:
        click.echo("Profile edit cancelled - no changes made")
        return

    repository.update(name, edited)
    click.echo(f"Profile '{name}' edited successfully")


@profile_group.command(name="delete")
@click.argument("name", type=str)
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
@handle_errors("profile delete")
def profile_delete(ctx: click.Context, name: str, force: bool):
    """Delete a profile.

    Shows the profile content and asks for confirmation unless --force.
    """
    repository = get_storage(ctx).repository
    content = repository.read(name)

    if not force:
        click.echo(f"Profile '{name}' contents:")
        click.echo(content)
        if not click.confirm(f"Delete profile '{name}'?", default=False):
            click.echo("Deletion cancelled")
            return

    repository.delete(name)
    click.echo(f"Profile '{name}' deleted successfully")


__all__ = [
    "echo_profile_names",
    "is_effectively_empty",
    "new_profile_template",
    "profile_create",
    "profile_delete",
    "profile_edit",
    "profile_group",
    "profile_list",
    "profile_show",
]
