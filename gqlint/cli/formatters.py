"""Output formatters for lint findings."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table
import yaml

from ..validation import Finding


def _payload(findings: list[Finding]) -> dict[str, Any]:
    return {"errors": [finding.to_dict() for finding in findings]}


def format_text(findings: list[Finding]) -> str:
    """One ``file:line:column: message (rule)`` line per finding."""
    if not findings:
        return "No linting errors found.\n"
    return "\n".join(str(finding) for finding in findings) + "\n"


def format_json(findings: list[Finding]) -> str:
    return json.dumps(_payload(findings), indent=2) + "\n"


def format_yaml(findings: list[Finding]) -> str:
    return yaml.dump(_payload(findings), default_flow_style=False, sort_keys=False)


def format_table(findings: list[Finding]) -> str:
    """Render findings as a rich table (plain text, no color codes)."""
    console = Console(width=160, force_terminal=False, color_system=None)
    with console.capture() as capture:
        if not findings:
            console.print("✅ No linting errors found.")
        else:
            table = Table(title=f"❌ {len(findings)} finding(s)")
            table.add_column("Location", style="cyan", no_wrap=True)
            table.add_column("Rule", style="yellow", no_wrap=True)
            table.add_column("Message")
            for finding in findings:
                table.add_row(str(finding.location), finding.rule, finding.message)
            console.print(table)
    return capture.get()


FORMATTERS = {
    "text": format_text,
    "json": format_json,
    "yaml": format_yaml,
    "table": format_table,
}


def format_findings(findings: list[Finding], output_format: str) -> str:
    """Format findings in the requested output format.

    Raises:
        ValueError: If the format is not supported
    """
    try:
        formatter = FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"Unsupported format: {output_format}") from None
    return formatter(findings)
