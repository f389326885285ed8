"""Unit tests for configuration loading."""

import os
from pathlib import Path
from unittest.mock import patch

from agent_catalog.config import LIBRARY_DIR, Config


class TestConfigDefaults:
    """Tests for default configuration."""

    def test_defaults(self, tmp_path):
        """Test defaults point at the bundled library."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config.load(tmp_path / "missing.yaml")
        assert config.agents_dir == LIBRARY_DIR
        assert config.pattern == "*.md"
        assert config.validation.required_fields == ["name", "description", "category", "color"]
        assert config.validation.strict is False
        assert config.logging.log_level == "WARNING"


class TestConfigFile:
    """Tests for YAML configuration."""

    def test_yaml_sections(self, tmp_path):
        """Test YAML sections override defaults and relative dirs resolve against the file."""
        config_path = tmp_path / "agent_catalog.yaml"
        config_path.write_text(
            "agents:\n"
            "  dir: my-agents\n"
            "  recursive: false\n"
            "validation:\n"
            "  strict: true\n"
            "  known_tools: [Read, Write]\n"
            "  bogus: 1\n"
            "logging:\n"
            "  log_level: DEBUG\n"
        )
        with patch.dict(os.environ, {}, clear=True):
            config = Config.load(config_path)
        assert config.agents_dir == tmp_path / "my-agents"
        assert config.recursive is False
        assert config.validation.strict is True
        assert config.validation.known_tools == ["Read", "Write"]
        assert not hasattr(config.validation, "bogus")
        assert config.logging.log_level == "DEBUG"

    def test_empty_file(self, tmp_path):
        """Test an empty config file leaves defaults."""
        config_path = tmp_path / "agent_catalog.yaml"
        config_path.write_text("")
        with patch.dict(os.environ, {}, clear=True):
            config = Config.load(config_path)
        assert config.agents_dir == LIBRARY_DIR


class TestConfigEnvironment:
    """Tests for environment variable overrides."""

    def test_env_overrides(self, tmp_path):
        """Test AC_* variables override file values."""
        env = {
            "AC_AGENTS_DIR": "/srv/agents",
            "AC_STRICT": "yes",
            "AC_KNOWN_TOOLS": "Read, Bash,",
            "AC_LOG_LEVEL": "info",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.load(tmp_path / "missing.yaml")
        assert config.agents_dir == Path("/srv/agents")
        assert config.validation.strict is True
        assert config.validation.known_tools == ["Read", "Bash"]
        assert config.logging.log_level == "INFO"

    def test_strict_false_values(self, tmp_path):
        """Test AC_STRICT accepts false values."""
        with patch.dict(os.environ, {"AC_STRICT": "0"}, clear=True):
            config = Config.load(tmp_path / "missing.yaml")
        assert config.validation.strict is False

    def test_to_dict(self, tmp_path):
        """Test dictionary form."""
        with patch.dict(os.environ, {}, clear=True):
            data = Config.load(tmp_path / "missing.yaml").to_dict()
        assert data["agents_dir"] == str(LIBRARY_DIR)
        assert data["validation"]["check_references"] is True
