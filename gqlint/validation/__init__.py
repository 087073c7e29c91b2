"""Lint engine components for GraphQL schemas.

This package provides the rule contract, the lint driver, the finding
values it produces and the built-in rule set.
"""

from .engine import SCHEMA_ERROR_RULE, SYNTAX_ERROR_RULE, Linter, Rule
from .errors import Finding, LintResult, Location
from .reachability import ReachabilityAnalyzer
from .rules import (
    DirectivesCommonLint,
    KeyDirectivesLint,
    LinkViaTypesNotIds,
    ListNonNullItems,
    MutationResponseNullable,
    NoInvalidEnum,
    NoSameFileExtend,
    NoUnimplementedInterface,
    NoUnusedFields,
    NoUnusedTypes,
    QueryResponseNullable,
    RelayArguments,
    RelayConnectionTypes,
    RelayEdgeTypes,
    RelayNamingConvention,
    RelayPageInfo,
    RequireDeprecationReason,
    UnsupportedDirectives,
    builtin_rules,
)
from .selection import (
    FieldSelection,
    SelectionSyntaxError,
    has_top_level_comma,
    parse_field_set,
    top_level_field_names,
)

__all__ = [
    "SCHEMA_ERROR_RULE",
    "SYNTAX_ERROR_RULE",
    "DirectivesCommonLint",
    "FieldSelection",
    "Finding",
    "KeyDirectivesLint",
    "LintResult",
    "Linter",
    "LinkViaTypesNotIds",
    "ListNonNullItems",
    "Location",
    "MutationResponseNullable",
    "NoInvalidEnum",
    "NoSameFileExtend",
    "NoUnimplementedInterface",
    "NoUnusedFields",
    "NoUnusedTypes",
    "QueryResponseNullable",
    "ReachabilityAnalyzer",
    "RelayArguments",
    "RelayConnectionTypes",
    "RelayEdgeTypes",
    "RelayNamingConvention",
    "RelayPageInfo",
    "RequireDeprecationReason",
    "Rule",
    "SelectionSyntaxError",
    "UnsupportedDirectives",
    "builtin_rules",
    "has_top_level_comma",
    "parse_field_set",
    "top_level_field_names",
]
