"""Unit tests for agent system prompt integration."""

import pytest

from pmx.agents import AGENT_TARGETS, AgentProfiles
from pmx.exceptions import AgentDisabledError, PmxError, ProfileNotFoundError
from pmx.storage import Storage


@pytest.fixture
def agent_profiles(populated_root, temp_home_dir) -> AgentProfiles:
    return AgentProfiles(Storage.open(populated_root), home=temp_home_dir)


class TestAgentTargets:
    def test_known_targets(self, temp_home_dir):
        assert AGENT_TARGETS["claude"].path(temp_home_dir) == temp_home_dir / ".claude" / "CLAUDE.md"
        assert AGENT_TARGETS["codex"].path(temp_home_dir) == temp_home_dir / ".codex" / "AGENTS.md"

    def test_default_home(self, populated_root, temp_home_dir):
        agent_profiles = AgentProfiles(Storage.open(populated_root))

        assert agent_profiles.target_path("claude") == temp_home_dir / ".claude" / "CLAUDE.md"

    def test_unknown_agent(self, agent_profiles):
        with pytest.raises(PmxError, match="Unknown agent"):
            agent_profiles.apply("cline", "review")


class TestApply:
    @pytest.mark.parametrize("agent", ["claude", "codex"])
    def test_apply_copies_profile(self, agent_profiles, agent):
        path = agent_profiles.apply(agent, "design/plan")

        assert path == agent_profiles.target_path(agent)
        assert path.read_text() == "# Plan\nWrite a plan.\n"

    def test_apply_overwrites_existing(self, agent_profiles):
        agent_profiles.apply("claude", "review")

        path = agent_profiles.apply("claude", "design/plan")

        assert path.read_text() == "# Plan\nWrite a plan.\n"

    def test_apply_missing_profile(self, agent_profiles):
        with pytest.raises(ProfileNotFoundError):
            agent_profiles.apply("claude", "ghost")

        assert not agent_profiles.target_path("claude").exists()

    def test_apply_disabled_agent(self, populated_root, temp_home_dir, write_config):
        write_config(populated_root, disable_codex=True)
        agent_profiles = AgentProfiles(Storage.open(populated_root), home=temp_home_dir)

        with pytest.raises(AgentDisabledError, match="disable_codex"):
            agent_profiles.apply("codex", "review")

        assert agent_profiles.apply("claude", "review").exists()


class TestAppend:
    def test_append_to_existing(self, agent_profiles):
        target = agent_profiles.target_path("claude")
        target.parent.mkdir(parents=True)
        target.write_text("existing")

        agent_profiles.append("claude", "design/plan")

        assert target.read_text() == "existing\n\n# Plan\nWrite a plan.\n"

    def test_append_keeps_crlf_line_endings(self, agent_profiles):
        target = agent_profiles.target_path("claude")
        target.parent.mkdir(parents=True)
        target.write_bytes(b"line one\r\nline two\r\n")

        agent_profiles.append("claude", "design/plan")

        assert target.read_bytes() == b"line one\r\nline two\r\n\n\n# Plan\nWrite a plan.\n"

    def test_append_without_existing_creates(self, agent_profiles):
        path = agent_profiles.append("codex", "design/plan")

        assert path.read_text() == "# Plan\nWrite a plan.\n"

    def test_append_disabled_agent(self, populated_root, temp_home_dir, write_config):
        write_config(populated_root, disable_claude=True)
        agent_profiles = AgentProfiles(Storage.open(populated_root), home=temp_home_dir)

        with pytest.raises(AgentDisabledError):
            agent_profiles.append("claude", "review")


class TestReset:
    def test_reset_removes_file(self, agent_profiles):
        path = agent_profiles.apply("claude", "review")

        assert agent_profiles.reset("claude") is True
        assert not path.exists()

    def test_reset_already_absent(self, agent_profiles):
        assert agent_profiles.reset("codex") is False

    def test_reset_disabled_agent(self, populated_root, temp_home_dir, write_config):
        write_config(populated_root, disable_claude=True)
        agent_profiles = AgentProfiles(Storage.open(populated_root), home=temp_home_dir)

        with pytest.raises(AgentDisabledError):
            agent_profiles.reset("claude")
