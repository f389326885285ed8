"""
Agent Validator - Lints agent definitions.

Checks:
- Header completeness and field types
- Name format and uniqueness across the corpus
- Known colors, models and tools
- Broken relative links in the instruction body
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import unquote
import logging
import re

from ..config import ValidationConfig
from .types import AgentDefinition, normalize_tools

logger = logging.getLogger(__name__)

STRING_FIELDS = ("name", "description", "category", "color", "model")

LINK_RE = re.compile(r"!?\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^\"']*[\"'])?\s*\)")
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
FENCE_RE = re.compile(r"^\s*(```|~~~)")


class Severity(Enum):
    """Issue severity levels."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """Single lint finding."""
    code: str
    severity: Severity
    message: str
    agent: Optional[str] = None
    path: Optional[Path] = None
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "agent": self.agent,
            "path": str(self.path) if self.path else None,
            "field": self.field,
        }

    def __str__(self) -> str:
        location = self.path or self.agent or "<unknown>"
        return f"{location}: {self.code} [{self.severity.value}] {self.message}"


@dataclass
class ValidationReport:
    """Result of validating a corpus."""
    issues: List[ValidationIssue] = field(default_factory=list)
    checked: int = 0

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def ok(self, strict: bool = False) -> bool:
        """No errors; in strict mode, no warnings either."""
        if strict:
            return not self.issues
        return not self.errors

    def by_agent(self) -> Dict[str, List[ValidationIssue]]:
        grouped: Dict[str, List[ValidationIssue]] = {}
        for issue in self.issues:
            key = issue.agent or (str(issue.path) if issue.path else "<unknown>")
            grouped.setdefault(key, []).append(issue)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "checked": self.checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }


class AgentValidator:
    """
    Validates agent definitions against configured rules.

    `validate` runs the per-file rules. `validate_all` adds the
    corpus-level rules (duplicate names, unparsable files).
    """

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or ValidationConfig()
        self._name_re = re.compile(self.config.name_pattern)

    def validate(self, definition: AgentDefinition) -> List[ValidationIssue]:
        """Run single-file rules on one definition."""
        issues: List[ValidationIssue] = []
        if definition.source_path or definition.raw_metadata:
            header = definition.raw_metadata
        else:
            header = definition.metadata()

        def add(code: str, severity: Severity, message: str, field_name: Optional[str] = None):
            issues.append(ValidationIssue(
                code=code,
                severity=severity,
                message=message,
                agent=definition.name,
                path=definition.source_path,
                field=field_name,
            ))

        # Completeness
        for name in self.config.required_fields:
            value = header.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                add("E001", Severity.ERROR, f"missing required field '{name}'", name)

        # Types
        for name in STRING_FIELDS:
            value = header.get(name)
            if value is not None and not isinstance(value, str):
                add("E002", Severity.ERROR,
                    f"field '{name}' must be a string, got {type(value).__name__}", name)
        try:
            normalize_tools(header.get("tools"))
        except TypeError as e:
            add("E002", Severity.ERROR, str(e), "tools")

        if definition.lenient_header:
            add("W109", Severity.WARNING,
                "metadata header is not valid YAML; values with ': ' should be quoted")

        # Name
        if definition.name and not self._name_re.match(definition.name):
            add("W101", Severity.WARNING,
                f"name '{definition.name}' does not match pattern {self.config.name_pattern}", "name")
        if definition.source_path and definition.name and definition.name != definition.source_path.stem:
            add("W102", Severity.WARNING,
                f"name '{definition.name}' differs from file name '{definition.source_path.stem}'", "name")

        # Known values
        if definition.color and self.config.allowed_colors and definition.color not in self.config.allowed_colors:
            add("W103", Severity.WARNING,
                f"unknown color '{definition.color}' (allowed: {', '.join(self.config.allowed_colors)})", "color")
        if self.config.known_tools:
            for tool in definition.tools or []:
                if tool not in self.config.known_tools:
                    add("W104", Severity.WARNING, f"unknown tool '{tool}'", "tools")
        if definition.model and self.config.known_models and definition.model not in self.config.known_models:
            add("W105", Severity.WARNING, f"unknown model '{definition.model}'", "model")
        for key in definition.extra:
            add("W106", Severity.WARNING, f"unrecognized header key '{key}'", key)

        # Body
        if not definition.instructions.strip():
            add("W107", Severity.WARNING, "instruction body is empty")
        elif self.config.check_references and definition.source_path:
            for target in self.find_broken_references(definition):
                add("W108", Severity.WARNING, f"broken internal reference '{target}'")

        return issues

    def validate_all(
        self,
        definitions: Iterable[AgentDefinition],
        load_errors: Optional[Dict[Path, str]] = None,
    ) -> ValidationReport:
        """Validate a whole corpus."""
        report = ValidationReport()
        seen: Dict[str, AgentDefinition] = {}

        for path, message in (load_errors or {}).items():
            report.issues.append(ValidationIssue(
                code="E004",
                severity=Severity.ERROR,
                message=f"could not parse agent file: {message}",
                path=path,
            ))
            report.checked += 1

        for definition in definitions:
            report.checked += 1
            report.issues.extend(self.validate(definition))

            first = seen.get(definition.name)
            if first is not None:
                report.issues.append(ValidationIssue(
                    code="E003",
                    severity=Severity.ERROR,
                    message=f"duplicate name '{definition.name}' (first defined in {first.source_path})",
                    agent=definition.name,
                    path=definition.source_path,
                    field="name",
                ))
            elif definition.name:
                seen[definition.name] = definition

        logger.info(
            f"Validated {report.checked} agents: "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    def find_broken_references(self, definition: AgentDefinition) -> List[str]:
        """Relative link targets in the body that do not exist on disk."""
        if definition.source_path is None:
            return []

        base_dir = Path(definition.source_path).parent
        broken = []
        in_fence = False

        for line in definition.instructions.split("\n"):
            if FENCE_RE.match(line):
                in_fence = not in_fence
                continue
            if in_fence:
                continue

            for match in LINK_RE.finditer(line):
                target = match.group(1)
                if target.startswith("#") or target.startswith("/") or SCHEME_RE.match(target):
                    continue
                file_part = unquote(target.split("#", 1)[0])
                if not file_part:
                    continue
                if not (base_dir / file_part).exists():
                    broken.append(target)

        return broken
