"""Shared fixtures for agent catalog tests."""

from pathlib import Path

import pytest


AGENT_TEMPLATE = """---
name: {name}
description: {description}
category: {category}
color: {color}
tools: Read, Write
---

You are the {name} agent.
"""


@pytest.fixture
def agents_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "agents"
    directory.mkdir()
    return directory


@pytest.fixture
def write_agent(agents_dir: Path):
    """Write an agent file; pass `text` for raw content."""

    def _write(stem: str, text: str = None, subdir: str = None, **fields) -> Path:
        target_dir = agents_dir / subdir if subdir else agents_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        if text is None:
            values = {
                "name": stem,
                "description": f"Handles {stem} tasks",
                "category": "specialized",
                "color": "blue",
            }
            values.update(fields)
            text = AGENT_TEMPLATE.format(**values)
        path = target_dir / f"{stem}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
