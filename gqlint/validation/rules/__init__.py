"""Built-in lint rules."""

from ..engine import Rule
from .directives import DirectivesCommonLint, RequireDeprecationReason, UnsupportedDirectives
from .enums import NoInvalidEnum
from .extensions import NoSameFileExtend
from .interfaces import NoUnimplementedInterface
from .key_directive import KeyDirectivesLint
from .nullability import ListNonNullItems, MutationResponseNullable, QueryResponseNullable
from .references import LinkViaTypesNotIds
from .relay import (
    RelayArguments,
    RelayConnectionTypes,
    RelayEdgeTypes,
    RelayNamingConvention,
    RelayPageInfo,
    RelayRule,
)
from .unused_fields import NoUnusedFields
from .unused_types import NoUnusedTypes


def builtin_rules() -> list[Rule]:
    """Return fresh instances of every built-in rule, in registration order."""
    return [
        NoUnusedTypes(),
        KeyDirectivesLint(),
        DirectivesCommonLint(),
        RelayConnectionTypes(),
        RelayEdgeTypes(),
        RelayPageInfo(),
        RelayNamingConvention(),
        RelayArguments(),
        NoUnimplementedInterface(),
        NoUnusedFields(),
        ListNonNullItems(),
        NoSameFileExtend(),
        LinkViaTypesNotIds(),
        UnsupportedDirectives(),
        RequireDeprecationReason(),
        QueryResponseNullable(),
        MutationResponseNullable(),
        NoInvalidEnum(),
    ]


__all__ = [
    "DirectivesCommonLint",
    "KeyDirectivesLint",
    "LinkViaTypesNotIds",
    "ListNonNullItems",
    "MutationResponseNullable",
    "NoInvalidEnum",
    "NoSameFileExtend",
    "NoUnimplementedInterface",
    "NoUnusedFields",
    "NoUnusedTypes",
    "QueryResponseNullable",
    "RelayArguments",
    "RelayConnectionTypes",
    "RelayEdgeTypes",
    "RelayNamingConvention",
    "RelayPageInfo",
    "RelayRule",
    "RequireDeprecationReason",
    "UnsupportedDirectives",
    "builtin_rules",
]
