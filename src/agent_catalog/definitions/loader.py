"""
Agent Loader - Discovers and loads agent definitions from a directory.

Directory structure:
agents/
├── documentation-writer.md
├── devops-engineer.md
└── infrastructure/          # subdirectories are scanned when recursive
    └── cloud-architect.md
"""

from pathlib import Path
from typing import Any, Dict, List
import logging

from .frontmatter import FrontMatterError, parse_front_matter
from .types import AgentDefinition

logger = logging.getLogger(__name__)

SKIP_FILES = {"readme.md"}


class AgentNotFoundError(ValueError):
    """Raised when no agent file matches a name."""


class AgentLoader:
    """
    Loads agent definitions from markdown files.

    Single lookups raise on failure. Batch loading records per-file parse
    failures in `load_errors` and keeps going so a linter can report them
    all at once.
    """

    def __init__(self, agents_dir: Path, pattern: str = "*.md", recursive: bool = True):
        self.agents_dir = Path(agents_dir)
        self.pattern = pattern
        self.recursive = recursive
        self.load_errors: Dict[Path, str] = {}
        self._loaded_agents: Dict[str, AgentDefinition] = {}

    def discover(self) -> List[Path]:
        """List agent file paths, sorted."""
        if not self.agents_dir.is_dir():
            logger.warning(f"Agents directory not found: {self.agents_dir}")
            return []

        finder = self.agents_dir.rglob if self.recursive else self.agents_dir.glob
        paths = sorted(
            p for p in finder(self.pattern)
            if p.is_file() and p.name.lower() not in SKIP_FILES
        )
        logger.debug(f"Discovered {len(paths)} agent files in {self.agents_dir}")
        return paths

    def list_available(self) -> List[str]:
        """List available agent names (file stems)."""
        return sorted(p.stem for p in self.discover())

    def load_file(self, path: Path) -> AgentDefinition:
        """Load a single agent file."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

        metadata, body, lenient = parse_front_matter(text, path)
        definition = AgentDefinition.from_metadata(metadata, body, source_path=path, lenient=lenient)
        logger.debug(f"Parsed agent file: {path} -> {definition.name}")
        return definition

    def load(self, name: str) -> AgentDefinition:
        """Load an agent by name."""
        if name in self._loaded_agents:
            return self._loaded_agents[name]

        paths = self.discover()

        # File stem match first
        for path in paths:
            if path.stem == name:
                definition = self.load_file(path)
                self._loaded_agents[name] = definition
                logger.info(f"Loaded agent: {name} ({path})")
                return definition

        # Then a header name that differs from its file name
        for path in paths:
            try:
                definition = self.load_file(path)
            except (FrontMatterError, UnicodeDecodeError):
                continue
            if definition.name == name:
                self._loaded_agents[name] = definition
                logger.info(f"Loaded agent: {name} ({path})")
                return definition

        raise AgentNotFoundError(f"Agent not found: {name}")

    def load_all(self) -> List[AgentDefinition]:
        """Load every discovered agent file."""
        self.load_errors = {}
        definitions = []

        for path in self.discover():
            try:
                definition = self.load_file(path)
            except (FrontMatterError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping unparsable agent file: {e}")
                self.load_errors[path] = str(e)
                continue
            definitions.append(definition)
            self._loaded_agents.setdefault(definition.name, definition)

        logger.info(
            f"Loaded {len(definitions)} agents from {self.agents_dir}"
            f" ({len(self.load_errors)} failed)"
        )
        return definitions

    def clear_cache(self) -> None:
        self._loaded_agents.clear()

    def get_summary(self, definition: AgentDefinition) -> Dict[str, Any]:
        """Get summary of a loaded agent."""
        return {
            "name": definition.name,
            "description": definition.description,
            "category": definition.category or "uncategorized",
            "color": definition.color,
            "model": definition.model or "default",
            "tools": "all" if definition.tools is None else len(definition.tools),
            "instruction_words": len(definition.instructions.split()),
            "source_path": str(definition.source_path) if definition.source_path else None,
        }
