"""Unit tests for AgentDefinition."""

from datetime import date
from pathlib import Path

import pytest

from agent_catalog.definitions.frontmatter import parse_front_matter
from agent_catalog.definitions.types import AgentDefinition, normalize_tools


class TestNormalizeTools:
    """Tests for tools header normalization."""

    def test_comma_string(self):
        """Test a comma-separated string."""
        assert normalize_tools("Read, Write ,Bash") == ["Read", "Write", "Bash"]

    def test_list(self):
        """Test a YAML list."""
        assert normalize_tools(["Read", " Grep "]) == ["Read", "Grep"]

    def test_bracketed_string(self):
        """Test a flow list read as text by the lenient parser."""
        assert normalize_tools("[Read, Write]") == ["Read", "Write"]

    def test_absent_means_inherit(self):
        """Test None stays None (inherits all tools)."""
        assert normalize_tools(None) is None

    def test_empty_string_means_no_tools(self):
        """Test an empty value grants no tools."""
        assert normalize_tools("") == []

    def test_invalid_type(self):
        """Test non-string, non-list values are rejected."""
        with pytest.raises(TypeError):
            normalize_tools(42)
        with pytest.raises(TypeError):
            normalize_tools(["Read", 3])


class TestAgentDefinition:
    """Tests for building and serializing definitions."""

    def test_from_metadata(self):
        """Test recognized keys map onto fields and the rest goes to extra."""
        definition = AgentDefinition.from_metadata(
            {
                "name": "docs",
                "description": "Writes docs",
                "category": "specialized",
                "color": "blue",
                "tools": "Read, Write",
                "model": "sonnet",
                "version": 2,
            },
            "\nBody text\n",
        )
        assert definition.name == "docs"
        assert definition.tools == ["Read", "Write"]
        assert definition.model == "sonnet"
        assert definition.extra == {"version": 2}
        assert definition.instructions == "Body text"

    def test_name_falls_back_to_file_stem(self):
        """Test a header without name uses the file name."""
        definition = AgentDefinition.from_metadata({}, "", source_path=Path("agents/helper.md"))
        assert definition.name == "helper"

    def test_has_tool(self):
        """Test tool checks for listed, inherited and empty tool sets."""
        assert AgentDefinition(name="a", tools=["Read"]).has_tool("Read")
        assert not AgentDefinition(name="a", tools=["Read"]).has_tool("Bash")
        assert AgentDefinition(name="a", tools=None).has_tool("Bash")
        assert not AgentDefinition(name="a", tools=[]).has_tool("Read")

    def test_to_context(self):
        """Test the host payload drops absent values."""
        definition = AgentDefinition(
            name="docs",
            description="Writes docs",
            category="specialized",
            instructions="Do things",
        )
        assert definition.to_context() == {
            "name": "docs",
            "description": "Writes docs",
            "prompt": "Do things",
            "metadata": {"category": "specialized"},
        }

    def test_to_markdown_reparses_equal(self):
        """Test serialized files parse back to the same definition."""
        definition = AgentDefinition(
            name="reviewer",
            description="Reviews code. Examples: security, style",
            category="quality",
            color="red",
            tools=["Read", "Grep"],
            model="opus",
            instructions="## Expertise\n- Reviews",
            extra={"owner": "platform"},
        )
        metadata, body, lenient = parse_front_matter(definition.to_markdown())
        assert not lenient
        assert AgentDefinition.from_metadata(metadata, body) == definition

    def test_to_context_dates_as_iso(self):
        """Test date values in extra keys become ISO strings."""
        definition = AgentDefinition(
            name="docs",
            extra={"created": date(2024, 1, 1), "history": [date(2023, 5, 2)]},
        )
        metadata = definition.to_context()["metadata"]
        assert metadata == {"created": "2024-01-01", "history": ["2023-05-02"]}

    def test_to_markdown_writes_tools_as_string(self):
        """Test tools are written in comma form."""
        text = AgentDefinition(name="a", tools=["Read", "Write"]).to_markdown()
        assert "tools: Read, Write" in text
