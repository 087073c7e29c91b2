"""CLI lint command implementation.

This module implements the `gqlint lint` command: it expands file patterns,
lints every matched schema file with one shared linter and writes the
findings in the requested output format.
"""

import asyncio
import glob
from pathlib import Path
import sys
import traceback

from rich.console import Console
from rich.markup import escape
import rich_click as click

from ..config import ConfigError, LinterSettings, load_settings
from ..core import (
    FileSchemaLoader,
    SchemaLoadError,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from ..validation import Finding, Linter
from .formatters import format_findings
from .plugins import RuleLoadError, load_custom_rules

logger = get_logger(__name__)

# Status messages go to stderr, findings to stdout
err_console = Console(stderr=True)


def expand_patterns(patterns: tuple[str, ...] | list[str]) -> list[str]:
    """Expand glob patterns (``**`` included) into a de-duplicated file list."""
    files: list[str] = []
    seen: set[str] = set()
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True))
        if not matches and Path(pattern).is_file():
            matches = [pattern]
        for match in matches:
            if match not in seen and Path(match).is_file():
                seen.add(match)
                files.append(match)
    return files


def split_rule_names(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma-separated ``--rules`` values."""
    return [name.strip() for value in values for name in value.split(",") if name.strip()]


def build_linter(settings: LinterSettings) -> Linter:
    """Create a linter with the built-in rules plus any custom rules.

    Raises:
        RuleLoadError: If a custom rule directory does not exist
    """
    linter = Linter(
        enabled_rules=settings.rules,
        loader=FileSchemaLoader(validate=settings.validate_sdl),
    )
    for rule_dir in settings.custom_rule_paths:
        for rule in load_custom_rules(rule_dir):
            linter.register(rule)
    return linter


def lint_files(linter: Linter, files: list[str], parallel: bool) -> list[Finding]:
    """Lint every file in order and concatenate the findings."""
    findings: list[Finding] = []
    for file in files:
        bind_context(file=file)
        try:
            if parallel:
                result = asyncio.run(linter.lint_file_async(file))
            else:
                result = linter.lint_file(file)
        finally:
            clear_context()
        findings.extend(result.findings)
    return findings


def _lint_implementation(  # noqa: PLR0912, PLR0913
    patterns: tuple[str, ...],
    rules: tuple[str, ...],
    output_format: str | None,
    output: str | None,
    config: str | None,
    custom_rule_paths: tuple[str, ...],
    parallel: bool | None,
    no_sdl_validation: bool,
    verbose: bool,
) -> None:
    try:
        try:
            settings = load_settings(
                config,
                rules=split_rule_names(rules) or None,
                output_format=output_format,
                output_file=output,
                custom_rule_paths=list(custom_rule_paths) or None,
                parallel=parallel,
                validate_sdl=False if no_sdl_validation else None,
                log_level="DEBUG" if verbose else None,
            )
        except ConfigError as e:
            err_console.print(f"❌ [bold red]{escape(str(e))}[/bold red]")
            sys.exit(2)

        configure_logging(settings.environment, settings.log_level, settings.json_logs)

        files = expand_patterns(patterns)
        if not files:
            matched = escape(", ".join(patterns))
            err_console.print(
                f"❌ [bold red]No schema files found[/bold red] matching: {matched}"
            )
            sys.exit(2)

        try:
            linter = build_linter(settings)
        except RuleLoadError as e:
            err_console.print(
                f"❌ [bold red]Failed to load custom rules:[/bold red] {escape(str(e))}"
            )
            sys.exit(2)

        logger.info(
            "Linting schema files",
            files=len(files),
            rules=[rule.name for rule in linter.rules_to_run()],
            parallel=settings.parallel,
        )

        try:
            findings = lint_files(linter, files, settings.parallel)
        except SchemaLoadError as e:
            err_console.print(f"❌ [bold red]{escape(str(e))}[/bold red]")
            sys.exit(2)

        rendered = format_findings(findings, settings.output_format)
        if settings.output_file:
            Path(settings.output_file).write_text(rendered, encoding="utf-8")
        else:
            click.echo(rendered, nl=False)

        if verbose:
            err_console.print(
                f"[dim]Linted {len(files)} file(s) with "
                f"{len(linter.rules_to_run())} rule(s): {len(findings)} finding(s)[/dim]"
            )

        sys.exit(1 if findings else 0)

    except KeyboardInterrupt:
        err_console.print("\n❌ Linting interrupted")
        sys.exit(4)
    except Exception as e:
        err_console.print(f"❌ [bold red]Internal error:[/bold red] {escape(str(e))}")
        if verbose:
            err_console.print(escape(traceback.format_exc()))
        sys.exit(4)


@click.command("lint")
@click.argument("patterns", nargs=-1, required=True, metavar="SCHEMA_FILES...")
@click.option(
    "--rules",
    "-r",
    multiple=True,
    help="📋 **Rules to run** - comma-separated or repeated (default: all rules)",
    metavar="RULES",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml", "table"]),
    default=None,
    help="📋 **Output format** for findings (default: text)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="💾 **Output file** (default: stdout)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False),
    help="⚙️ **YAML configuration file**",
)
@click.option(
    "--custom-rule-paths",
    multiple=True,
    type=click.Path(file_okay=False),
    help="🧩 **Directory of custom rule modules** - each defines new_rule()",
)
@click.option(
    "--parallel/--sequential",
    default=None,
    help="⚡ **Run rules concurrently** on worker threads",
)
@click.option(
    "--no-sdl-validation",
    is_flag=True,
    help="🚧 **Skip SDL validation** - lint documents with undeclared directives or types",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="🔍 **Show debug logs and a summary** on stderr",
)
def lint_command(
    patterns: tuple[str, ...],
    rules: tuple[str, ...],
    output_format: str | None,
    output: str | None,
    config: str | None,
    custom_rule_paths: tuple[str, ...],
    parallel: bool | None,
    no_sdl_validation: bool,
    verbose: bool,
) -> None:
    """🔍 **Lint GraphQL schema files**

    Runs the registered rules against every schema file matching the given
    patterns and reports findings with their source positions.

    **Examples:**

    ```bash
    gqlint lint schema.graphql
    gqlint lint "schema/**/*.graphql" --format json --output results.json
    gqlint lint schema.graphql --rules no-unused-types,key-directive-lint
    ```

    **Exit Codes:**
    - `0`: No findings ✅
    - `1`: Findings reported ❌
    - `2`: No files matched, unreadable file, or invalid configuration 📁⚠️
    - `4`: Internal error 💥
    """
    _lint_implementation(
        patterns,
        rules,
        output_format,
        output,
        config,
        custom_rule_paths,
        parallel,
        no_sdl_validation,
        verbose,
    )
