"""CLI command that lists the available lint rules."""

import json
import sys

from rich.console import Console
from rich.table import Table
import rich_click as click

from ..validation import Linter
from .plugins import RuleLoadError, load_custom_rules

console = Console()


@click.command("rules")
@click.option(
    "--custom-rule-paths",
    multiple=True,
    type=click.Path(file_okay=False),
    help="🧩 **Directory of custom rule modules** to include in the listing",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="📋 **Output format** (default: table)",
)
def rules_command(custom_rule_paths: tuple[str, ...], output_format: str) -> None:
    """📚 **List available lint rules**

    Shows every built-in rule, plus rules from custom rule directories, in
    the order they run.
    """
    linter = Linter()
    try:
        for rule_dir in custom_rule_paths:
            for rule in load_custom_rules(rule_dir):
                linter.register(rule)
    except RuleLoadError as e:
        click.echo(f"❌ Failed to load custom rules: {e}", err=True)
        sys.exit(2)

    rules = linter.available_rules
    if output_format == "json":
        payload = [
            {"name": name, "description": rule.description}
            for name, rule in rules.items()
        ]
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="📚 Lint rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Description")
    for name, rule in rules.items():
        table.add_row(name, rule.description)
    console.print(table)
