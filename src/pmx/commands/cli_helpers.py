"""Shared helper functions for CLI commands.

Functions in this module should be:
- Pure or side-effect minimal
- Reusable across multiple commands
"""

import logging
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from pmx.exceptions import PmxError
from pmx.storage import Storage

logger = logging.getLogger(__name__)


def get_storage(ctx: click.Context) -> Storage:
    """Open the storage root for this invocation.

    Uses the --config path stored on the root context, then PMX_CONFIG_FILE,
    then the default root.
    """
    obj = ctx.find_root().ensure_object(dict)
    if "storage" not in obj:
        obj["storage"] = Storage.discover(obj.get("config_path"))
    return obj["storage"]


def handle_errors(command: str) -> Callable:
    """Report pmx errors as "Error: ..." on stderr and exit 1."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except PmxError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)
            except (click.ClickException, click.Abort, click.exceptions.Exit):
                raise
            except Exception as e:
                click.echo(f"Unexpected error: {e}", err=True)
                logger.exception(f"Unexpected error in {command}")
                sys.exit(1)

        return wrapper

    return decorator


__all__ = ["get_storage", "handle_errors"]
