"""Unit tests for the rule contract and the lint driver."""

from pathlib import Path
import tempfile
from typing import ClassVar

import pytest

from gqlint.core import FileSchemaLoader, Schema, SchemaLoadError
from gqlint.validation import (
    SCHEMA_ERROR_RULE,
    SYNTAX_ERROR_RULE,
    Finding,
    Linter,
    Rule,
)

BUILTIN_RULE_NAMES = [
    "no-unused-types",
    "key-directive-lint",
    "common-directives-lint",
    "relay-connection-types",
    "relay-edge-types",
    "relay-pageinfo",
    "relay-naming-convention",
    "relay-arguments",
    "no-unimplemented-interface",
    "no-unused-fields",
    "list-non-null-items",
    "no-same-file-extend",
    "link-via-types-not-ids",
    "unsupported-directives",
    "require-deprecation-reason",
    "query-response-nullable",
    "mutation-response-nullable",
    "no-invalid-enum",
]


class EveryTypeRule(Rule):
    """Reports one finding per declared type."""

    name: ClassVar[str] = "every-type"
    description: ClassVar[str] = "Reports every type"

    def check(self, schema: Schema) -> list[Finding]:
        return [
            self.finding(schema, f"saw {type_def.name}", type_def.location)
            for type_def in schema.types.values()
        ]


class ConstantRule(Rule):
    """Reports a single fixed finding."""

    name: ClassVar[str] = "constant"
    description: ClassVar[str] = "Always reports once"

    def check(self, schema: Schema) -> list[Finding]:
        return [self.finding(schema, "constant finding")]


class OtherConstantRule(ConstantRule):
    """Same name as ConstantRule with a different message."""

    def check(self, schema: Schema) -> list[Finding]:
        return [self.finding(schema, "replacement finding")]


class ExplodingRule(Rule):
    """Raises while checking."""

    name: ClassVar[str] = "exploding"

    def check(self, schema: Schema) -> list[Finding]:
        raise RuntimeError("kaput")


SDL = "type Query {\n  user: User\n}\ntype User { id: ID }"


@pytest.fixture
def schema():
    return FileSchemaLoader(validate=False).load_string(SDL, "schema.graphql")


class TestRuleContract:
    """Test the Rule base class."""

    def test_rule_is_abstract(self):
        with pytest.raises(TypeError):
            Rule()

    def test_finding_uses_rule_name_and_source(self, schema):
        finding = EveryTypeRule().check(schema)[1]

        assert finding.rule == "every-type"
        assert finding.message == "saw User"
        assert str(finding.location) == "schema.graphql:4:6"

    def test_finding_without_location_defaults_to_start(self, schema):
        finding = ConstantRule().check(schema)[0]

        assert str(finding.location) == "schema.graphql:1:1"


class TestRegistry:
    """Test rule registration and selection."""

    def test_default_rules_in_registration_order(self):
        assert list(Linter().available_rules) == BUILTIN_RULE_NAMES

    def test_explicit_rules_replace_defaults(self):
        linter = Linter(rules=[ConstantRule()])

        assert list(linter.available_rules) == ["constant"]

    def test_register_appends(self):
        linter = Linter(rules=[EveryTypeRule()])
        linter.register(ConstantRule())

        assert list(linter.available_rules) == ["every-type", "constant"]

    def test_register_duplicate_name_replaces_in_place(self, schema):
        linter = Linter(rules=[ConstantRule(), EveryTypeRule()])
        linter.register(OtherConstantRule())

        assert list(linter.available_rules) == ["constant", "every-type"]
        assert linter.lint(schema).findings[0].message == "replacement finding"

    def test_empty_selection_runs_every_rule(self):
        linter = Linter(rules=[EveryTypeRule(), ConstantRule()])
        linter.set_rules([])

        assert [rule.name for rule in linter.rules_to_run()] == [
            "every-type",
            "constant",
        ]

    def test_selection_keeps_registration_order(self):
        linter = Linter(rules=[EveryTypeRule(), ConstantRule()])
        linter.set_rules(["constant", "every-type"])

        assert [rule.name for rule in linter.rules_to_run()] == [
            "every-type",
            "constant",
        ]

    def test_unknown_rule_names_are_ignored(self):
        linter = Linter(
            rules=[EveryTypeRule(), ConstantRule()],
            enabled_rules=["constant", "does-not-exist"],
        )

        assert [rule.name for rule in linter.rules_to_run()] == ["constant"]

    def test_linters_do_not_share_state(self):
        first = Linter(rules=[ConstantRule()])
        second = Linter(rules=[ConstantRule()])
        first.register(EveryTypeRule())
        first.set_rules(["every-type"])

        assert list(second.available_rules) == ["constant"]
        assert second.enabled_rules == []

    def test_get_linter_info(self):
        linter = Linter(rules=[ConstantRule()], enabled_rules=["constant"])
        info = linter.get_linter_info()

        assert info["rules"] == ["constant"]
        assert info["rule_count"] == 1
        assert info["enabled_rules"] == ["constant"]
        assert info["validate_sdl"] is True


class TestLinting:
    """Test running rules against schemas."""

    def test_findings_follow_registration_order(self, schema):
        linter = Linter(rules=[EveryTypeRule(), ConstantRule()])
        result = linter.lint(schema)

        assert [finding.message for finding in result.findings] == [
            "saw Query",
            "saw User",
            "constant finding",
        ]
        assert result.rules_run == ["every-type", "constant"]

    def test_selection_filters_findings(self, schema):
        linter = Linter(
            rules=[EveryTypeRule(), ConstantRule()], enabled_rules=["constant"]
        )

        assert [finding.rule for finding in linter.lint(schema).findings] == [
            "constant"
        ]

    def test_failing_rule_becomes_a_finding(self, schema):
        linter = Linter(rules=[ExplodingRule(), ConstantRule()])
        result = linter.lint(schema)

        assert [finding.rule for finding in result.findings] == [
            "exploding",
            "constant",
        ]
        assert result.findings[0].message == (
            "Rule 'exploding' failed: RuntimeError: kaput"
        )

    def test_lint_is_repeatable(self, schema):
        linter = Linter(rules=[EveryTypeRule()])

        assert linter.lint(schema).findings == linter.lint(schema).findings

    @pytest.mark.asyncio
    async def test_parallel_lint_preserves_order(self, schema):
        linter = Linter(rules=[EveryTypeRule(), ExplodingRule(), ConstantRule()])

        sequential = linter.lint(schema)
        parallel = await linter.lint_async(schema)

        assert parallel.findings == sequential.findings
        assert parallel.rules_run == sequential.rules_run


class TestLoadingAndLinting:
    """Test the load-then-lint entry points."""

    def test_lint_string(self):
        linter = Linter(rules=[EveryTypeRule()])
        result = linter.lint_string(SDL, "inline.graphql")

        assert result.file == "inline.graphql"
        assert result.finding_count == 2

    def test_syntax_error_becomes_a_finding(self):
        linter = Linter(rules=[ConstantRule()])
        result = linter.lint_string("type Query {\n  id: \n}", "broken.graphql")

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.rule == SYNTAX_ERROR_RULE
        assert str(finding.location) == "broken.graphql:3:1"
        assert result.rules_run == []

    def test_validation_errors_become_findings(self):
        linter = Linter(rules=[ConstantRule()])
        result = linter.lint_string("type Query { a: Missing, b: AlsoMissing }")

        assert [finding.rule for finding in result.findings] == [
            SCHEMA_ERROR_RULE,
            SCHEMA_ERROR_RULE,
        ]

    def test_lint_file(self):
        linter = Linter(rules=[EveryTypeRule()])
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "schema.graphql"
            path.write_text(SDL)

            result = linter.lint_file(path)

        assert result.file == str(path)
        assert all(finding.location.file == str(path) for finding in result.findings)

    def test_lint_missing_file_raises(self):
        linter = Linter(rules=[EveryTypeRule()])

        with pytest.raises(SchemaLoadError):
            linter.lint_file("/nonexistent/schema.graphql")

    @pytest.mark.asyncio
    async def test_lint_file_async(self):
        linter = Linter(rules=[EveryTypeRule(), ConstantRule()])
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "schema.graphql"
            path.write_text(SDL)

            result = await linter.lint_file_async(path)

        assert [finding.message for finding in result.findings] == [
            "saw Query",
            "saw User",
            "constant finding",
        ]
