"""Tests for the `gqlint lint` and `gqlint rules` commands.

Covers argument parsing, output formats, configuration sources, custom
rules and exit codes.
"""

import json
from pathlib import Path
import tempfile

from click.testing import CliRunner
import pytest

from gqlint.cli import main
from gqlint.cli.lint import expand_patterns, lint_command, split_rule_names
from gqlint.cli.rules import rules_command

FIXTURES = Path(__file__).parent.parent / "fixtures"
VALID = str(FIXTURES / "valid_schema.graphql")
INVALID = str(FIXTURES / "invalid_schema.graphql")
SYNTAX_ERROR = str(FIXTURES / "syntax_error.graphql")
UNDECLARED_DIRECTIVE = str(FIXTURES / "undeclared_directive.graphql")

CUSTOM_RULE = '''
from gqlint.validation import Rule


class NoQueryDescription(Rule):
    name = "query-description"
    description = "Query type must be documented"

    def check(self, schema):
        query = schema.get_type("Query")
        if query is None or query.description:
            return []
        return [self.finding(schema, "Query type has no description", query.location)]


def new_rule():
    return NoQueryDescription()
'''


# Global fixtures for all test classes
@pytest.fixture
def runner():
    """Create CLI runner for tests."""
    return CliRunner()


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestHelpers:
    """Test pattern and rule-name helpers."""

    def test_split_rule_names(self):
        assert split_rule_names(("a,b", " c ", "d,,")) == ["a", "b", "c", "d"]

    def test_expand_recursive_glob(self, temp_dir):
        (temp_dir / "nested" / "deeper").mkdir(parents=True)
        for name in ["a.graphql", "nested/b.graphql", "nested/deeper/c.graphql"]:
            (temp_dir / name).write_text("type Query { id: ID }")
        (temp_dir / "nested" / "notes.txt").write_text("")

        files = expand_patterns([str(temp_dir / "**" / "*.graphql")])

        assert sorted(Path(file).name for file in files) == [
            "a.graphql",
            "b.graphql",
            "c.graphql",
        ]

    def test_expand_deduplicates(self):
        assert expand_patterns([VALID, VALID]) == [VALID]

    def test_expand_without_matches(self, temp_dir):
        assert expand_patterns([str(temp_dir / "*.graphql")]) == []


class TestLintExitCodes:
    """Test exit codes of the lint command."""

    def test_clean_schema_exits_zero(self, runner):
        result = runner.invoke(lint_command, [VALID])

        assert result.exit_code == 0
        assert result.output == "No linting errors found.\n"

    def test_findings_exit_one(self, runner):
        result = runner.invoke(lint_command, [INVALID])

        assert result.exit_code == 1
        assert f"{INVALID}:38:6: Type `Orphan` is declared but never used." in result.output

    def test_no_matching_files_exits_two(self, runner, temp_dir):
        result = runner.invoke(lint_command, [str(temp_dir / "*.graphql")])

        assert result.exit_code == 2
        assert "No schema files found" in result.output

    def test_missing_patterns_is_usage_error(self, runner):
        result = runner.invoke(lint_command, [])

        assert result.exit_code == 2

    def test_syntax_error_is_a_finding(self, runner):
        result = runner.invoke(lint_command, [SYNTAX_ERROR])

        assert result.exit_code == 1
        assert f"{SYNTAX_ERROR}:3:1:" in result.output
        assert "(syntax-error)" in result.output

    def test_internal_error_exits_four(self, runner, monkeypatch):
        def explode(findings, output_format):
            raise RuntimeError("formatter broke")

        monkeypatch.setattr("gqlint.cli.lint.format_findings", explode)
        result = runner.invoke(lint_command, [VALID])

        assert result.exit_code == 4
        assert "Internal error" in result.output


class TestLintOptions:
    """Test lint command options."""

    def test_json_format(self, runner):
        result = runner.invoke(lint_command, [INVALID, "--format", "json"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["errors"][0] == {
            "message": "Type `Named` is declared but never used. Consider removing it "
            "or using it in the schema.",
            "location": {"file": INVALID, "line": 8, "column": 11},
            "rule": "no-unused-types",
        }

    def test_yaml_and_table_formats(self, runner):
        yaml_result = runner.invoke(lint_command, [INVALID, "--format", "yaml"])
        table_result = runner.invoke(lint_command, [INVALID, "--format", "table"])

        assert yaml_result.exit_code == 1
        assert yaml_result.output.startswith("errors:")
        assert table_result.exit_code == 1
        assert "relay-arguments" in table_result.output

    def test_invalid_format_is_usage_error(self, runner):
        result = runner.invoke(lint_command, [VALID, "--format", "xml"])

        assert result.exit_code == 2

    def test_rule_selection(self, runner):
        result = runner.invoke(
            lint_command,
            [INVALID, "--format", "json", "--rules", "relay-arguments,relay-edge-types"],
        )

        rules = [error["rule"] for error in json.loads(result.output)["errors"]]
        assert rules == ["relay-edge-types", "relay-arguments"]

    def test_repeated_rules_option(self, runner):
        result = runner.invoke(
            lint_command,
            [INVALID, "--format", "json", "-r", "no-unused-types", "-r", "relay-pageinfo"],
        )

        rules = {error["rule"] for error in json.loads(result.output)["errors"]}
        assert rules == {"no-unused-types"}

    def test_unknown_rule_names_run_nothing(self, runner):
        result = runner.invoke(lint_command, [INVALID, "--rules", "does-not-exist"])

        assert result.exit_code == 0

    def test_output_file(self, runner, temp_dir):
        output = temp_dir / "results.json"
        result = runner.invoke(
            lint_command, [INVALID, "--format", "json", "--output", str(output)]
        )

        assert result.exit_code == 1
        assert result.output == ""
        assert len(json.loads(output.read_text())["errors"]) == 12

    def test_parallel_matches_sequential(self, runner):
        sequential = runner.invoke(lint_command, [INVALID, "--format", "json"])
        parallel = runner.invoke(lint_command, [INVALID, "--format", "json", "--parallel"])

        assert parallel.exit_code == sequential.exit_code == 1
        assert parallel.output == sequential.output

    def test_sdl_validation_can_be_disabled(self, runner):
        validated = runner.invoke(lint_command, [UNDECLARED_DIRECTIVE])
        unvalidated = runner.invoke(
            lint_command, [UNDECLARED_DIRECTIVE, "--no-sdl-validation"]
        )

        assert validated.exit_code == 1
        assert "(schema-error)" in validated.output
        assert unvalidated.exit_code == 0

    def test_multiple_files_in_order(self, runner):
        result = runner.invoke(lint_command, [VALID, INVALID, SYNTAX_ERROR])

        assert result.exit_code == 1
        lines = result.output.splitlines()
        assert lines[0].startswith(INVALID)
        assert lines[-1].startswith(SYNTAX_ERROR)

    def test_verbose_summary(self, runner):
        result = runner.invoke(lint_command, [VALID, "--verbose"])

        assert result.exit_code == 0
        assert "Linted 1 file(s) with 18 rule(s): 0 finding(s)" in result.output


class TestLintConfiguration:
    """Test configuration files and custom rules."""

    def test_config_file(self, runner, temp_dir):
        config = temp_dir / "gqlint.yaml"
        config.write_text("output-format: json\nrules: [relay-arguments]\n")

        result = runner.invoke(lint_command, [INVALID, "--config", str(config)])

        assert [error["rule"] for error in json.loads(result.output)["errors"]] == [
            "relay-arguments"
        ]

    def test_command_line_overrides_config_file(self, runner, temp_dir):
        config = temp_dir / "gqlint.yaml"
        config.write_text("output_format: json\n")

        result = runner.invoke(
            lint_command, [VALID, "--config", str(config), "--format", "text"]
        )

        assert result.output == "No linting errors found.\n"

    def test_invalid_config_exits_two(self, runner, temp_dir):
        config = temp_dir / "gqlint.yaml"
        config.write_text("output_format: xml\n")

        result = runner.invoke(lint_command, [VALID, "--config", str(config)])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_custom_rules(self, runner, temp_dir):
        (temp_dir / "query_description.py").write_text(CUSTOM_RULE)

        result = runner.invoke(
            lint_command, [VALID, "--custom-rule-paths", str(temp_dir)]
        )

        assert result.exit_code == 1
        assert "Query type has no description (query-description)" in result.output

    def test_missing_custom_rule_directory_exits_two(self, runner, temp_dir):
        result = runner.invoke(
            lint_command, [VALID, "--custom-rule-paths", str(temp_dir / "missing")]
        )

        assert result.exit_code == 2
        assert "Failed to load custom rules" in result.output


class TestRulesCommand:
    """Test the rules listing command."""

    def test_table_lists_builtin_rules(self, runner):
        result = runner.invoke(rules_command, [])

        assert result.exit_code == 0
        assert "no-unused-types" in result.output
        assert "relay-naming-convention" in result.output

    def test_json_listing_includes_custom_rules(self, runner, temp_dir):
        (temp_dir / "query_description.py").write_text(CUSTOM_RULE)

        result = runner.invoke(
            rules_command, ["--format", "json", "--custom-rule-paths", str(temp_dir)]
        )

        names = [rule["name"] for rule in json.loads(result.output)]
        assert names[0] == "no-unused-types"
        assert names[-1] == "query-description"
        assert len(names) == 19


class TestMainGroup:
    """Test the top-level command group."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_subcommands_registered(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "lint" in result.output
        assert "rules" in result.output

    def test_lint_through_group(self, runner):
        result = runner.invoke(main, ["lint", VALID])

        assert result.exit_code == 0
