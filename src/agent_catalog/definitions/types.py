"""
Agent definition types.

An agent file is a metadata header plus free-text instructions. The header
is what a host runtime uses to select the agent; the instructions are
injected as behavioral guidance.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .frontmatter import dump_front_matter

# Recognized header keys, in the order they are written back to disk
HEADER_FIELDS = ("name", "description", "category", "color", "tools", "model")


def normalize_tools(value: Any) -> Optional[List[str]]:
    """
    Normalize a `tools` header value.

    Accepts a YAML list or a comma-separated string. None means the key was
    absent: the agent inherits every tool the host offers.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().lstrip("[").rstrip("]")
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise TypeError(f"tools must be a list or comma-separated string, got {type(value).__name__}")

    tools = []
    for item in items:
        if not isinstance(item, str):
            raise TypeError(f"tool names must be strings, got {type(item).__name__}")
        item = item.strip().strip("'\"")
        if item:
            tools.append(item)
    return tools


@dataclass
class AgentDefinition:
    """
    A parsed agent file.

    `tools` is None when the header has no tools key (inherits all tools)
    and an empty list when the agent is granted no tools.
    """
    name: str
    description: str = ""
    category: Optional[str] = None
    color: Optional[str] = None
    tools: Optional[List[str]] = None
    model: Optional[str] = None

    # Body text after the header
    instructions: str = ""

    # Header keys outside HEADER_FIELDS, kept verbatim
    extra: Dict[str, Any] = field(default_factory=dict)

    # Raw header as parsed, used by the validator for type checks
    raw_metadata: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    source_path: Optional[Path] = field(default=None, compare=False)
    lenient_header: bool = field(default=False, compare=False)

    @classmethod
    def from_metadata(
        cls,
        metadata: Dict[str, Any],
        body: str,
        source_path: Optional[Path] = None,
        lenient: bool = False,
    ) -> "AgentDefinition":
        """Build a definition from a parsed header and body."""
        fallback_name = source_path.stem if source_path else ""

        try:
            tools = normalize_tools(metadata.get("tools"))
        except TypeError:
            # Left for the validator to report against raw_metadata
            tools = None

        return cls(
            name=_as_text(metadata.get("name")) or fallback_name,
            description=_as_text(metadata.get("description")) or "",
            category=_as_text(metadata.get("category")),
            color=_as_text(metadata.get("color")),
            tools=tools,
            model=_as_text(metadata.get("model")),
            instructions=body.strip("\n"),
            extra={k: v for k, v in metadata.items() if k not in HEADER_FIELDS},
            raw_metadata=dict(metadata),
            source_path=source_path,
            lenient_header=lenient,
        )

    def has_tool(self, tool: str) -> bool:
        """Check whether the agent may invoke a tool."""
        if self.tools is None:
            return True
        return tool in self.tools

    def metadata(self) -> Dict[str, Any]:
        """Header fields in file order, skipping absent optional ones."""
        header: Dict[str, Any] = {"name": self.name, "description": self.description}
        if self.category is not None:
            header["category"] = self.category
        if self.color is not None:
            header["color"] = self.color
        if self.tools is not None:
            header["tools"] = ", ".join(self.tools)
        if self.model is not None:
            header["model"] = self.model
        header.update(self.extra)
        return header

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "color": self.color,
            "tools": self.tools,
            "model": self.model,
            "extra": self.extra,
            "instructions": self.instructions,
            "source_path": str(self.source_path) if self.source_path else None,
        }

    def to_context(self) -> Dict[str, Any]:
        """Convert to the payload a host runtime consumes."""
        metadata = {"category": self.category, "color": self.color}
        metadata.update(self.extra)
        payload = {
            "name": self.name,
            "description": self.description,
            "prompt": self.instructions,
            "tools": self.tools,
            "model": self.model,
            "metadata": {k: _plain(v) for k, v in metadata.items() if v is not None},
        }
        return {k: v for k, v in payload.items() if v is not None}

    def to_markdown(self) -> str:
        """Serialize back to agent file text."""
        return dump_front_matter(self.metadata(), self.instructions)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    # Non-string scalars (e.g. a YAML number) are kept as text; the
    # validator flags the type against raw_metadata.
    return str(value)


def _plain(value: Any) -> Any:
    """Convert a YAML header value to JSON-compatible data."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_plain(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
