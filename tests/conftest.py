"""
Shared test fixtures and configuration for pmx tests.

This module provides common fixtures used across all test types:
- Isolated home/config directories (never touch ~/.config/pmx or ~/.claude)
- Initialized storage roots with sample profiles
- Config writers
"""

from pathlib import Path

import pytest

from pmx.config_manager import ConfigManager, DisableOption, PmxConfig
from pmx.storage import Storage

# ============================================================================
# ENVIRONMENT ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def temp_home_dir(tmp_path, monkeypatch):
    """Temporary home directory for every test.

    Sets HOME to a temporary directory and clears the pmx environment
    overrides so tests never read or modify the real user configuration.
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("PMX_CONFIG_FILE", raising=False)
    return home_dir


# ============================================================================
# STORAGE FIXTURES
# ============================================================================


@pytest.fixture
def storage_root(tmp_path) -> Path:
    """Empty, initialized storage root (repo/ + default config.toml)."""
    root = tmp_path / "pmx"
    Storage.initialize(root)
    return root


@pytest.fixture
def storage(storage_root) -> Storage:
    return Storage.open(storage_root)


@pytest.fixture
def populated_root(storage_root) -> Path:
    """Storage root with a few profiles, one nested, one non-Markdown file."""
    repo = storage_root / "repo"
    (repo / "review.md").write_text("Review the code at <{{PATH}}> for <{{FOCUS}}>.\n")
    (repo / "design").mkdir()
    (repo / "design" / "plan.md").write_text("# Plan\nWrite a plan.\n")
    (repo / "notes.txt").write_text("not a profile")
    return storage_root


@pytest.fixture
def write_config():
    """Persist a config with the given mcp/agents settings and return the root."""

    def _write(
        root: Path,
        disable_prompts: DisableOption | None = None,
        disable_tools: DisableOption | None = None,
        disable_claude: bool = False,
        disable_codex: bool = False,
    ) -> Path:
        config = PmxConfig()
        config.agents.disable_claude = disable_claude
        config.agents.disable_codex = disable_codex
        if disable_prompts is not None:
            config.mcp.disable_prompts = disable_prompts
        if disable_tools is not None:
            config.mcp.disable_tools = disable_tools
        ConfigManager.persist(root, config)
        return root

    return _write
