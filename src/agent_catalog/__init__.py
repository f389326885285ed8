"""
Agent Catalog - Persona definitions for an AI coding assistant.

Each agent is a markdown file: a metadata header (name, description,
category, color, tools, model) followed by free-text instructions.

Tooling:
- AgentLoader: discovers and parses agent files
- AgentCatalog: lookup by name, category and tool
- AgentValidator: lints headers, name uniqueness and internal links
- create_agent_file: scaffolds new agents

The bundled agents live in `agent_catalog/library/`.
"""

__version__ = "0.1.0"

from .config import Config, LIBRARY_DIR
from .definitions import (
    AgentDefinition,
    AgentLoader,
    AgentCatalog,
    AgentValidator,
    ValidationReport,
)
from .scaffold import create_agent_file

__all__ = [
    "Config",
    "LIBRARY_DIR",
    "AgentDefinition",
    "AgentLoader",
    "AgentCatalog",
    "AgentValidator",
    "ValidationReport",
    "create_agent_file",
]
