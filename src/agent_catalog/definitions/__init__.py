"""
Agent definitions for Agent Catalog.

Agent files are markdown documents with a metadata header. This package
parses, loads, indexes and lints them.
"""

from .frontmatter import FrontMatterError, parse_front_matter
from .types import AgentDefinition
from .loader import AgentLoader, AgentNotFoundError
from .catalog import AgentCatalog, DuplicateAgentError
from .validator import AgentValidator, Severity, ValidationIssue, ValidationReport

__all__ = [
    "AgentDefinition",
    "AgentLoader",
    "AgentCatalog",
    "AgentValidator",
    "ValidationIssue",
    "ValidationReport",
    "Severity",
    "FrontMatterError",
    "AgentNotFoundError",
    "DuplicateAgentError",
    "parse_front_matter",
]
