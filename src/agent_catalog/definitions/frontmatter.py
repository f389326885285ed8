"""
Front Matter - Splits agent files into metadata header and body.

Agent file layout:
    ---
    name: documentation-writer
    description: Writes and maintains project documentation
    category: specialized
    color: blue
    tools: Read, Write, Edit
    ---

    You are a documentation specialist...
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import logging

import yaml

logger = logging.getLogger(__name__)

DELIMITER = "---"


class FrontMatterError(ValueError):
    """Raised when an agent file has a missing or malformed header."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


def split_front_matter(text: str, path: Optional[Path] = None) -> Tuple[str, str]:
    """Split raw file text into (header_text, body)."""
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = text.replace("\r\n", "\n").split("\n")

    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError("missing metadata header (file must start with '---')", path)

    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            header = "\n".join(lines[1:idx])
            body = "\n".join(lines[idx + 1:])
            return header, body

    raise FrontMatterError("metadata header is not closed with '---'", path)


def _unquote(value: str) -> str:
    """Drop one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_key_value_lines(header: str, path: Optional[Path] = None) -> Dict[str, Any]:
    """Read a header as plain `key: value` lines."""
    metadata: Dict[str, Any] = {}
    current_key = None

    for lineno, line in enumerate(header.split("\n"), start=2):
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        # Indented lines continue the previous value
        if line[0] in " \t" and current_key is not None:
            metadata[current_key] = f"{metadata[current_key]} {line.strip()}".strip()
            continue

        if ":" not in line:
            raise FrontMatterError(f"line {lineno}: expected 'key: value'", path)

        key, _, value = line.partition(":")
        current_key = key.strip()
        metadata[current_key] = _unquote(value.strip())

    return metadata


def parse_front_matter(
    text: str,
    path: Optional[Path] = None,
) -> Tuple[Dict[str, Any], str, bool]:
    """
    Parse an agent file into (metadata, body, lenient).

    The header is parsed as YAML first. Descriptions in agent files often
    carry unquoted colons and inline markup which YAML rejects; those
    headers are re-read line by line and `lenient` is returned as True.
    """
    header, body = split_front_matter(text, path)

    if not header.strip():
        return {}, body, False

    try:
        metadata = yaml.safe_load(header)
    except yaml.YAMLError as e:
        logger.warning(f"Header of {path or '<text>'} is not valid YAML, reading as key/value lines: {e}")
        return _parse_key_value_lines(header, path), body, True

    if metadata is None:
        return {}, body, False
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            f"metadata header must be a mapping, got {type(metadata).__name__}", path
        )

    return metadata, body, False


def dump_front_matter(metadata: Dict[str, Any], body: str) -> str:
    """Render metadata and body back to agent file text."""
    header = yaml.safe_dump(
        metadata,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=10_000,
    ).rstrip("\n")

    body = body.strip("\n")
    if body:
        return f"{DELIMITER}\n{header}\n{DELIMITER}\n\n{body}\n"
    return f"{DELIMITER}\n{header}\n{DELIMITER}\n"
