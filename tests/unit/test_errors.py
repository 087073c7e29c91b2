"""Unit tests for finding and result data structures."""

import pytest

from gqlint.validation import Finding, LintResult, Location


def make_finding(rule: str = "some-rule", line: int = 1) -> Finding:
    return Finding(
        message="Something is off",
        rule=rule,
        location=Location(file="schema.graphql", line=line, column=3),
    )


class TestFinding:
    """Test the Finding value type."""

    def test_str_representation(self):
        assert str(make_finding(line=7)) == (
            "schema.graphql:7:3: Something is off (some-rule)"
        )

    def test_findings_compare_by_value(self):
        assert make_finding() == make_finding()
        assert make_finding(line=2) != make_finding(line=3)

    def test_findings_are_immutable(self):
        finding = make_finding()
        with pytest.raises(AttributeError):
            finding.message = "changed"

    def test_to_dict(self):
        assert make_finding(line=4).to_dict() == {
            "message": "Something is off",
            "location": {"file": "schema.graphql", "line": 4, "column": 3},
            "rule": "some-rule",
        }


class TestLintResult:
    """Test LintResult properties and methods."""

    def test_clean_result(self):
        result = LintResult(file="schema.graphql")

        assert result.is_clean
        assert result.finding_count == 0
        assert "no findings" in str(result)

    def test_result_with_findings(self):
        result = LintResult(file="schema.graphql")
        result.extend([make_finding("a"), make_finding("b"), make_finding("a", 9)])

        assert not result.is_clean
        assert result.finding_count == 3
        assert "3 finding(s)" in str(result)

    def test_findings_by_rule_keeps_order(self):
        result = LintResult(
            file="schema.graphql",
            findings=[make_finding("a", 1), make_finding("b", 2), make_finding("a", 3)],
        )

        grouped = result.findings_by_rule()

        assert list(grouped) == ["a", "b"]
        assert [finding.location.line for finding in grouped["a"]] == [1, 3]
