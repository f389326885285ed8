"""
Agent Catalog - Name lookup and grouping over a set of agent definitions.
"""

from collections import Counter
from typing import Any, Dict, Iterable, Iterator, List
import logging

from .loader import AgentLoader, AgentNotFoundError
from .types import AgentDefinition

logger = logging.getLogger(__name__)

UNCATEGORIZED = "uncategorized"


class DuplicateAgentError(ValueError):
    """Raised when two agent files declare the same name."""


class AgentCatalog:
    """
    Read-only index of agent definitions keyed by name.

    Names must be unique; a corpus with repeated names is rejected.
    """

    def __init__(self, definitions: Iterable[AgentDefinition]):
        self._agents: Dict[str, AgentDefinition] = {}

        for definition in definitions:
            existing = self._agents.get(definition.name)
            if existing is not None:
                raise DuplicateAgentError(
                    f"Duplicate agent name '{definition.name}': "
                    f"{existing.source_path} and {definition.source_path}"
                )
            self._agents[definition.name] = definition

        logger.debug(f"Catalog built with {len(self._agents)} agents")

    @classmethod
    def from_loader(cls, loader: AgentLoader) -> "AgentCatalog":
        return cls(loader.load_all())

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, name: object) -> bool:
        return name in self._agents

    def __iter__(self) -> Iterator[AgentDefinition]:
        for name in self.names():
            yield self._agents[name]

    def names(self) -> List[str]:
        return sorted(self._agents)

    def get(self, name: str) -> AgentDefinition:
        """Get an agent by name."""
        try:
            return self._agents[name]
        except KeyError:
            raise AgentNotFoundError(f"Agent not found: {name}") from None

    def categories(self) -> Dict[str, List[str]]:
        """Map each category to its sorted agent names."""
        grouped: Dict[str, List[str]] = {}
        for definition in self:
            grouped.setdefault(definition.category or UNCATEGORIZED, []).append(definition.name)
        return dict(sorted(grouped.items()))

    def by_category(self, category: str) -> List[AgentDefinition]:
        return [d for d in self if (d.category or UNCATEGORIZED) == category]

    def with_tool(self, tool: str) -> List[AgentDefinition]:
        """Agents allowed to invoke a tool, including those inheriting all tools."""
        return [d for d in self if d.has_tool(tool)]

    def search(self, query: str) -> List[AgentDefinition]:
        """Case-insensitive substring search over name, description and category."""
        needle = query.lower()
        return [
            d for d in self
            if needle in d.name.lower()
            or needle in d.description.lower()
            or needle in (d.category or "").lower()
        ]

    def to_payload(self) -> List[Dict[str, Any]]:
        """Host payload for every agent, sorted by name."""
        return [d.to_context() for d in self]

    def summary(self) -> Dict[str, Any]:
        tool_usage: Counter = Counter()
        for definition in self:
            tool_usage.update(definition.tools or [])

        return {
            "total": len(self),
            "categories": {c: len(names) for c, names in self.categories().items()},
            "models": dict(Counter(d.model or "default" for d in self)),
            "inherit_all_tools": sum(1 for d in self if d.tools is None),
            "tools": dict(tool_usage.most_common()),
        }
