"""MCP prompt server.

Serves stored profiles as MCP prompts over stdio:
- prompts/list: every visible profile, with its <{{PLACEHOLDER}}> names as
  required arguments
- prompts/get: the profile content with bound placeholders substituted

Visibility follows the [mcp] disable_prompts policy of config.toml. A hidden
prompt is reported as disabled (INVALID_PARAMS), never as missing, so
clients can tell "exists but hidden" from "does not exist".
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from pmx import __version__
from pmx.exceptions import (
    InvalidNameError,
    PmxError,
    ProfileNotFoundError,
    PromptDisabledError,
)
from pmx.storage import Storage
from pmx.template_engine import extract_placeholders, substitute

logger = logging.getLogger(__name__)

SERVER_NAME = "pmx-mcp-server"
SERVER_INSTRUCTIONS = "This server provides system prompts managed by pmx."

# JSON-RPC code for a prompt that does not exist
PROMPT_NOT_FOUND = -32002


@dataclass
class PromptArgumentSpec:
    name: str
    required: bool = True


@dataclass
class PromptEntry:
    """One prompt as advertised by prompts/list."""

    name: str
    description: str
    arguments: list[PromptArgumentSpec] | None = None


class PromptServer:
    """Answer prompt list/get requests from the storage context."""

    def __init__(self, storage: Storage):
        self.storage = storage
        self.repository = storage.repository
        self.policy = storage.config.mcp.disable_prompts

    def is_prompt_enabled(self, name: str) -> bool:
        return self.policy.is_enabled(name)

    def list_prompts(self) -> list[PromptEntry]:
        """List visible prompts.

        Listing is best-effort: when a profile's content cannot be read, the
        failure is logged and the prompt is still listed, without an argument
        spec. Errors walking the repository itself propagate.
        """
        entries = []
        for name in self.repository.list():
            if not self.is_prompt_enabled(name):
                continue

            arguments = None
            try:
                content = self.repository.read(name)
            except PmxError as e:
                logger.warning(f"Listing prompt '{name}' without arguments: {e}")
            else:
                arguments = [PromptArgumentSpec(p) for p in extract_placeholders(content)]

            entries.append(
                PromptEntry(name=name, description=f"System prompt: {name}", arguments=arguments)
            )
        return entries

    def get_prompt(self, name: str, bindings: dict[str, Any] | None = None) -> str:
        """Return prompt content with bindings substituted.

        Raises:
            PromptDisabledError: If the policy hides the prompt (checked before reading)
            ProfileNotFoundError: If the profile does not exist
            InvalidNameError: If name is not a valid profile name
            StorageIOError: If reading fails
        """
        if not self.is_prompt_enabled(name):
            raise PromptDisabledError(name)

        content = self.repository.read(name)
        return substitute(content, bindings)


def to_mcp_error(error: PmxError) -> McpError:
    """Map a pmx error onto a JSON-RPC error."""
    if isinstance(error, PromptDisabledError):
        code = types.INVALID_PARAMS
        message = "Prompt is disabled"
    elif isinstance(error, (ProfileNotFoundError, InvalidNameError)):
        code = PROMPT_NOT_FOUND
        message = f"Prompt not found: {error}"
    else:
        code = types.INTERNAL_ERROR
        message = str(error)
    return McpError(types.ErrorData(code=code, message=message))


class McpPromptHandlers:
    """Translate PromptServer results into MCP protocol types."""

    def __init__(self, prompt_server: PromptServer):
        self.prompt_server = prompt_server

    async def list_prompts(self) -> list[types.Prompt]:
        try:
            entries = self.prompt_server.list_prompts()
        except PmxError as e:
            logger.error(f"Failed to list prompts: {e}")
            raise to_mcp_error(e) from e

        prompts = []
        for entry in entries:
            arguments = None
            if entry.arguments is not None:
                arguments = [
                    types.PromptArgument(name=arg.name, required=arg.required)
                    for arg in entry.arguments
                ]
            prompts.append(
                types.Prompt(name=entry.name, description=entry.description, arguments=arguments)
            )
        return prompts

    async def get_prompt(
        self, name: str, arguments: dict[str, str] | None
    ) -> types.GetPromptResult:
        try:
            content = self.prompt_server.get_prompt(name, arguments)
        except PmxError as e:
            logger.info(f"prompts/get '{name}' failed: {e}")
            raise to_mcp_error(e) from e

        return types.GetPromptResult(
            messages=[
                types.PromptMessage(
                    role="user",
                    content=types.TextContent(type="text", text=content),
                )
            ]
        )


def build_mcp_server(storage: Storage) -> Server:
    """Create the low-level MCP server with prompt handlers registered."""
    handlers = McpPromptHandlers(PromptServer(storage))
    server = Server(SERVER_NAME, version=__version__, instructions=SERVER_INSTRUCTIONS)
    server.list_prompts()(handlers.list_prompts)
    server.get_prompt()(handlers.get_prompt)
    return server


async def serve_stdio(storage: Storage) -> None:
    server = build_mcp_server(storage)
    async with stdio_server() as (read_stream, write_stream):
        logger.debug("MCP server listening on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_mcp_server(storage: Storage) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    if not storage.config.is_protocol_enabled:
        logger.warning("MCP prompts and tools are both disabled in config.toml")
    asyncio.run(serve_stdio(storage))


__all__ = [
    "PROMPT_NOT_FOUND",
    "McpPromptHandlers",
    "PromptArgumentSpec",
    "PromptEntry",
    "PromptServer",
    "build_mcp_server",
    "run_mcp_server",
    "to_mcp_error",
]
