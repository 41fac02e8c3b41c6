"""Agent system prompt integration.

Copies stored profiles into the files coding agents read on startup:
- claude: ~/.claude/CLAUDE.md
- codex:  ~/.codex/AGENTS.md

Each agent can be switched off with agents.disable_<agent> in config.toml.
Append is a read-then-write sequence and is not atomic.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from pmx.exceptions import AgentDisabledError, PmxError, StorageIOError
from pmx.storage import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentTarget:
    """Location of an agent's system prompt file, relative to home."""

    name: str
    directory: str
    filename: str

    def path(self, home: Path) -> Path:
        return home / self.directory / self.filename


AGENT_TARGETS = {
    "claude": AgentTarget("claude", ".claude", "CLAUDE.md"),
    "codex": AgentTarget("codex", ".codex", "AGENTS.md"),
}


class AgentProfiles:
    """Apply, append and reset agent system prompts."""

    def __init__(self, storage: Storage, home: Path | None = None):
        self.storage = storage
        self.home = home or Path.home()

    def _target(self, agent: str) -> Path:
        if agent not in AGENT_TARGETS:
            raise PmxError(f"Unknown agent: {agent}")
        if self.storage.config.agents.is_disabled(agent):
            raise AgentDisabledError(agent)
        return AGENT_TARGETS[agent].path(self.home)

    def _prepare(self, agent: str, profile: str) -> tuple[Path, str]:
        target = self._target(agent)
        content = self.storage.repository.read(profile)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("create directory", target.parent, e) from e
        return target, content

    def apply(self, agent: str, profile: str) -> Path:
        """Replace the agent's system prompt with a profile.

        Raises:
            AgentDisabledError: If the agent is disabled in config
            ProfileNotFoundError: If the profile does not exist
            StorageIOError: If writing fails
        """
        target, content = self._prepare(agent, profile)
        _write(target, content)
        logger.info(f"Applied profile '{profile}' to {target}")
        return target

    def append(self, agent: str, profile: str) -> Path:
        """Append a profile to the agent's system prompt.

        The existing prompt and the profile are separated by a blank line.
        Without an existing prompt this behaves like apply.
        """
        target, content = self._prepare(agent, profile)

        if target.exists():
            try:
                with open(target, encoding="utf-8", newline="") as f:
                    existing = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise StorageIOError("read", target, e) from e
            content = f"{existing}\n\n{content}"

        _write(target, content)
        logger.info(f"Appended profile '{profile}' to {target}")
        return target

    def reset(self, agent: str) -> bool:
        """Remove the agent's system prompt file.

        Returns:
            True if a file was removed, False if it was already absent
        """
        target = self._target(agent)
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as e:
            raise StorageIOError("remove", target, e) from e
        logger.info(f"Reset {agent} profile (removed {target})")
        return True

    def target_path(self, agent: str) -> Path:
        return AGENT_TARGETS[agent].path(self.home)


def _write(path: Path, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise StorageIOError("write", path, e) from e


__all__ = ["AGENT_TARGETS", "AgentProfiles", "AgentTarget"]
