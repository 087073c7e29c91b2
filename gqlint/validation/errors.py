"""Finding and result data structures for the lint engine.

A ``Finding`` is the only output unit of a lint rule: a message, the id of
the rule that produced it and the source location it refers to. Findings
are immutable values compared by their fields.
"""

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Location:
    """Position of a finding in a schema file."""

    file: str
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Finding:
    """Represents a single lint finding.

    Contains the human readable message, the identifier of the rule that
    reported it and the location of the offending declaration.
    """

    message: str
    rule: str
    location: Location

    def __str__(self) -> str:
        """Return the finding as ``file:line:column: message (rule)``."""
        return f"{self.location}: {self.message} ({self.rule})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "location": asdict(self.location),
            "rule": self.rule,
        }


@dataclass
class LintResult:
    """Lint result for one schema document.

    Contains every finding reported by the rules that ran, in rule
    registration order.
    """

    file: str
    findings: list[Finding] = field(default_factory=list)
    rules_run: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """Whether no rule reported anything."""
        return not self.findings

    @property
    def finding_count(self) -> int:
        """Number of findings."""
        return len(self.findings)

    def extend(self, findings: list[Finding]) -> None:
        """Add multiple findings to the result."""
        self.findings.extend(findings)

    def findings_by_rule(self) -> dict[str, list[Finding]]:
        """Group findings by rule id, keeping their order."""
        grouped: dict[str, list[Finding]] = defaultdict(list)
        for finding in self.findings:
            grouped[finding.rule].append(finding)
        return dict(grouped)

    def __str__(self) -> str:
        if self.is_clean:
            return f"✅ {self.file}: no findings"

        lines = [f"❌ {self.file}: {self.finding_count} finding(s)"]
        for finding in self.findings:
            lines.append(f"  - {finding}")
        return "\n".join(lines)
