"""Lint engine that runs a set of rules against a schema.

This module defines the ``Rule`` contract every check implements and the
``Linter`` driver that holds an ordered set of rules, filters them to an
optional enabled subset and concatenates their findings in registration
order.
"""

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Any, ClassVar

from ..core import (
    FileSchemaLoader,
    OperationLogger,
    Schema,
    SchemaLoadError,
    SchemaSyntaxError,
    SchemaValidationError,
    SourceLocation,
    get_logger,
)
from .errors import Finding, LintResult, Location

logger = get_logger(__name__)

SYNTAX_ERROR_RULE = "syntax-error"
SCHEMA_ERROR_RULE = "schema-error"


class Rule(ABC):
    """A single lint check.

    Subclasses set ``name`` (unique, stable identifier) and ``description``
    and implement ``check``. ``check`` must be a pure read over the schema:
    rules hold no per-run state, so one instance can be shared across
    schemas and threads.
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""

    @abstractmethod
    def check(self, schema: Schema) -> list[Finding]:
        """Check the schema and return every finding, in traversal order."""
        pass

    def finding(
        self, schema: Schema, message: str, location: SourceLocation | None = None
    ) -> Finding:
        """Build a finding attributed to this rule."""
        location = location or SourceLocation()
        return Finding(
            message=message,
            rule=self.name,
            location=Location(
                file=schema.source_name, line=location.line, column=location.column
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Linter:
    """Driver that runs registered rules against schemas.

    Holds its own ordered rule registry, so separate instances never share
    state. A linter whose rules are stateless (all built-in rules are) can
    be shared read-only across files and threads.
    """

    def __init__(
        self,
        rules: Iterable[Rule] | None = None,
        enabled_rules: Iterable[str] | None = None,
        loader: FileSchemaLoader | None = None,
    ):
        """Initialize the linter.

        Args:
            rules: Rules to register, in order. Defaults to the built-in rule set
            enabled_rules: Optional rule names to restrict execution to
            loader: Schema loader used by ``lint_file`` and ``lint_string``
        """
        self._rules: dict[str, Rule] = {}
        self.enabled_rules: list[str] = []
        self.loader = loader or FileSchemaLoader()

        if rules is None:
            from .rules import builtin_rules

            rules = builtin_rules()

        for rule in rules:
            self.register(rule)

        if enabled_rules:
            self.set_rules(enabled_rules)

    def register(self, rule: Rule) -> None:
        """Register a rule.

        A rule whose name is already registered replaces the earlier rule in
        the same position.
        """
        if rule.name in self._rules:
            logger.warning(
                "Replacing registered rule",
                rule=rule.name,
                previous=type(self._rules[rule.name]).__name__,
                replacement=type(rule).__name__,
            )
        self._rules[rule.name] = rule

    def set_rules(self, rule_names: Iterable[str]) -> None:
        """Restrict execution to the given rule names (empty means all rules)."""
        self.enabled_rules = [name for name in rule_names if name]

    @property
    def available_rules(self) -> dict[str, Rule]:
        """All registered rules keyed by name, in registration order."""
        return dict(self._rules)

    def rules_to_run(self) -> list[Rule]:
        """Return the rules that should be executed, in registration order.

        Unknown names in the enabled set are ignored.
        """
        if not self.enabled_rules:
            return list(self._rules.values())

        enabled = set(self.enabled_rules)
        unknown = sorted(enabled - self._rules.keys())
        if unknown:
            logger.debug("Ignoring unknown rule names", rules=unknown)

        return [rule for name, rule in self._rules.items() if name in enabled]

    def lint(self, schema: Schema) -> LintResult:
        """Run every applicable rule against a schema.

        Args:
            schema: The parsed schema model

        Returns:
            LintResult with findings in rule registration order
        """
        result = LintResult(file=schema.source_name)
        for rule in self.rules_to_run():
            result.rules_run.append(rule.name)
            result.extend(self._run_rule(rule, schema))

        logger.info(
            "Schema linted",
            file=schema.source_name,
            rules=len(result.rules_run),
            findings=result.finding_count,
        )
        return result

    async def lint_async(self, schema: Schema) -> LintResult:
        """Run every applicable rule concurrently on worker threads.

        Results keep rule registration order regardless of completion order.
        """
        rules = self.rules_to_run()
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self._run_rule, rule, schema) for rule in rules)
        )

        result = LintResult(file=schema.source_name)
        for rule, findings in zip(rules, outcomes, strict=True):
            result.rules_run.append(rule.name)
            result.extend(findings)

        logger.info(
            "Schema linted",
            file=schema.source_name,
            rules=len(result.rules_run),
            findings=result.finding_count,
            parallel=True,
        )
        return result

    def lint_string(self, content: str, source_name: str = "<schema>") -> LintResult:
        """Load SDL text and lint it.

        Load failures are reported as findings instead of being raised.
        """
        try:
            schema = self.loader.load_string(content, source_name)
        except SchemaLoadError as e:
            return self._load_failure(source_name, e)
        return self.lint(schema)

    def lint_file(self, path: str | Path) -> LintResult:
        """Load a schema file and lint it.

        Raises:
            SchemaLoadError: If the file cannot be read
        """
        content = self._read(path)
        return self.lint_string(content, str(path))

    async def lint_file_async(self, path: str | Path) -> LintResult:
        """Load a schema file and lint it with ``lint_async``."""
        content = self._read(path)
        try:
            schema = self.loader.load_string(content, str(path))
        except SchemaLoadError as e:
            return self._load_failure(str(path), e)
        return await self.lint_async(schema)

    def get_linter_info(self) -> dict[str, Any]:
        """Get information about the linter configuration."""
        return {
            "rules": list(self._rules),
            "rule_count": len(self._rules),
            "enabled_rules": list(self.enabled_rules),
            "validate_sdl": self.loader.validate,
        }

    def _read(self, path: str | Path) -> str:
        try:
            return Path(path).read_text(encoding=self.loader.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e

    def _run_rule(self, rule: Rule, schema: Schema) -> list[Finding]:
        try:
            with OperationLogger(
                logger, "rule", rule=rule.name, file=schema.source_name
            ):
                return list(rule.check(schema))
        except Exception as e:
            return [
                rule.finding(
                    schema, f"Rule '{rule.name}' failed: {type(e).__name__}: {e}"
                )
            ]

    def _load_failure(self, source_name: str, error: SchemaLoadError) -> LintResult:
        rule = SYNTAX_ERROR_RULE if isinstance(error, SchemaSyntaxError) else SCHEMA_ERROR_RULE
        errors = (
            error.errors
            if isinstance(error, SchemaValidationError) and error.errors
            else [error]
        )
        logger.info(
            "Schema could not be loaded", file=source_name, rule=rule, errors=len(errors)
        )
        return LintResult(
            file=source_name,
            findings=[
                Finding(
                    message=item.message,
                    rule=rule,
                    location=Location(
                        file=source_name, line=item.line, column=item.column
                    ),
                )
                for item in errors
            ],
        )
