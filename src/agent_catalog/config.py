"""
Configuration management for Agent Catalog.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import yaml

# Agents shipped with the package
LIBRARY_DIR = Path(__file__).parent / "library"

DEFAULT_CONFIG_FILE = "agent_catalog.yaml"


@dataclass
class ValidationConfig:
    """Lint rules for agent headers and bodies."""
    required_fields: List[str] = field(
        default_factory=lambda: ["name", "description", "category", "color"]
    )
    allowed_colors: List[str] = field(
        default_factory=lambda: ["red", "blue", "green", "yellow", "purple", "orange", "pink", "cyan"]
    )
    known_models: List[str] = field(default_factory=lambda: ["sonnet", "opus", "haiku", "inherit"])
    known_tools: List[str] = field(default_factory=list)  # empty = any tool name accepted
    name_pattern: str = r"^[a-z0-9]+(-[a-z0-9]+)*$"
    strict: bool = False  # warnings fail validation too
    check_references: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    log_level: str = "WARNING"
    log_format: str = "%(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """
    Main configuration class for Agent Catalog.

    Loads configuration from:
    1. Default values
    2. agent_catalog.yaml file (if exists)
    3. Environment variables (override)
    """

    # Agent discovery
    agents_dir: Path = field(default_factory=lambda: LIBRARY_DIR)
    pattern: str = "*.md"
    recursive: bool = True

    # Sub-configurations
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from file and environment."""
        config = cls()

        if config_path is None:
            config_path = Path(DEFAULT_CONFIG_FILE)

        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
                config._apply_yaml_config(yaml_config, base_dir=config_path.parent)

        # Apply environment variable overrides
        config._apply_env_overrides()

        return config

    def _apply_yaml_config(self, yaml_config: Optional[Dict[str, Any]], base_dir: Path) -> None:
        """Apply configuration from YAML file."""
        if not yaml_config:
            return

        if "agents" in yaml_config:
            agents = yaml_config["agents"] or {}
            if "dir" in agents:
                agents_dir = Path(agents["dir"])
                # Relative paths are resolved against the config file
                if not agents_dir.is_absolute():
                    agents_dir = base_dir / agents_dir
                self.agents_dir = agents_dir
            if "pattern" in agents:
                self.pattern = agents["pattern"]
            if "recursive" in agents:
                self.recursive = bool(agents["recursive"])

        if "validation" in yaml_config:
            for key, value in (yaml_config["validation"] or {}).items():
                if hasattr(self.validation, key):
                    setattr(self.validation, key, value)

        if "logging" in yaml_config:
            for key, value in (yaml_config["logging"] or {}).items():
                if hasattr(self.logging, key):
                    setattr(self.logging, key, value)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if os.getenv("AC_AGENTS_DIR"):
            self.agents_dir = Path(os.getenv("AC_AGENTS_DIR"))

        # Validation
        if os.getenv("AC_STRICT"):
            self.validation.strict = os.getenv("AC_STRICT").strip().lower() in ("1", "true", "yes")
        if os.getenv("AC_KNOWN_TOOLS"):
            self.validation.known_tools = [
                t.strip() for t in os.getenv("AC_KNOWN_TOOLS").split(",") if t.strip()
            ]

        # Logging
        if os.getenv("AC_LOG_LEVEL"):
            self.logging.log_level = os.getenv("AC_LOG_LEVEL").upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "agents_dir": str(self.agents_dir),
            "pattern": self.pattern,
            "recursive": self.recursive,
            "validation": {
                "required_fields": self.validation.required_fields,
                "allowed_colors": self.validation.allowed_colors,
                "known_models": self.validation.known_models,
                "known_tools": self.validation.known_tools,
                "name_pattern": self.validation.name_pattern,
                "strict": self.validation.strict,
                "check_references": self.validation.check_references,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "log_format": self.logging.log_format,
            },
        }
