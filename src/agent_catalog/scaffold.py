"""
Scaffold - Writes new agent files.
"""

from pathlib import Path
from typing import List, Optional
import logging
import re

from .config import ValidationConfig
from .definitions import AgentDefinition, AgentValidator, Severity

logger = logging.getLogger(__name__)

DEFAULT_BODY = """You are the {title} agent. {description}

## Expertise
-

## Best Practices
-

## Output Format
-
"""


def _title(name: str) -> str:
    return " ".join(part.capitalize() for part in name.split("-"))


def create_agent_file(
    directory: Path,
    name: str,
    description: str,
    category: str,
    color: str,
    tools: Optional[List[str]] = None,
    model: Optional[str] = None,
    instructions: Optional[str] = None,
    force: bool = False,
    validation: Optional[ValidationConfig] = None,
) -> Path:
    """
    Write `<directory>/<name>.md` for a new agent.

    Raises FileExistsError if the file exists and `force` is not set, and
    ValueError if the name is not a plain file name matching the name
    pattern, or the new definition has error-level lint issues.
    """
    validation = validation or ValidationConfig()
    if "/" in name or "\\" in name or ".." in name or not re.match(validation.name_pattern, name):
        raise ValueError(
            f"Invalid agent name '{name}': must match {validation.name_pattern} "
            f"and contain no path separators"
        )

    directory = Path(directory)
    path = directory / f"{name}.md"

    if path.exists() and not force:
        raise FileExistsError(f"Agent file already exists: {path}")

    if instructions is None:
        instructions = DEFAULT_BODY.format(title=_title(name), description=description)

    definition = AgentDefinition(
        name=name,
        description=description,
        category=category,
        color=color,
        tools=tools,
        model=model,
        instructions=instructions,
    )

    issues = AgentValidator(validation).validate(definition)
    errors = [i.message for i in issues if i.severity == Severity.ERROR]
    if errors:
        raise ValueError(f"Invalid agent '{name}': " + "; ".join(errors))
    for issue in issues:
        logger.warning(f"New agent {name}: {issue.message}")

    directory.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(definition.to_markdown())

    logger.info(f"Created agent file: {path}")
    return path
