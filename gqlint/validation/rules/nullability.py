"""Nullability conventions for list items and operation responses.

Lists should not hold nulls, while root query fields and mutation payload
fields should stay nullable so one missing value does not null out the
whole response.
"""

from typing import ClassVar

from ...core import (
    FieldDefinition,
    ListType,
    NamedType,
    NonNullType,
    Schema,
    TypeDefinition,
    TypeKind,
    TypeRef,
)
from ...core.type_refs import (
    is_non_null,
    list_element,
    named_type,
    type_to_string,
    unwrap_non_null,
)
from ..engine import Rule
from ..errors import Finding


def _has_nullable_items(ref: TypeRef) -> bool:
    """Check if any list level of a reference admits null elements."""
    element = list_element(ref)
    if element is None:
        return False
    if not is_non_null(element):
        return True
    return _has_nullable_items(element)


def _non_null_everywhere(ref: TypeRef) -> TypeRef:
    inner = unwrap_non_null(ref)
    if isinstance(inner, ListType):
        return NonNullType(ListType(_non_null_everywhere(inner.of_type)))
    return NonNullType(inner)


def with_non_null_items(ref: TypeRef) -> TypeRef:
    """Mark every list element non-null, keeping the outer nullability.

    Example:
        ``[[String]]!`` -> ``[[String!]!]!``
    """
    element = list_element(ref)
    if element is None:
        return ref
    fixed = ListType(_non_null_everywhere(element))
    return NonNullType(fixed) if is_non_null(ref) else fixed


class ListNonNullItems(Rule):
    """List fields must not contain nullable items, at any nesting level."""

    name: ClassVar[str] = "list-non-null-items"
    description: ClassVar[str] = (
        "Requires list being returned to not contain null values (checks "
        "recursively for nested lists)"
    )

    KINDS: ClassVar[tuple[TypeKind, ...]] = (
        TypeKind.OBJECT,
        TypeKind.INTERFACE,
        TypeKind.INPUT_OBJECT,
    )

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in schema.types.values():
            if (
                type_def.kind not in self.KINDS
                or type_def.name.startswith("__")
                or type_def.name.lower().endswith("connection")
            ):
                continue
            findings.extend(
                self.finding(
                    schema,
                    f"List field `{type_def.name}.{field_def.name}` contains nullable "
                    f"items. Use `{type_to_string(with_non_null_items(field_def.type))}` "
                    "instead to prevent null pointer issues.",
                    field_def.location,
                )
                for field_def in type_def.fields
                if not field_def.name.startswith("__")
                and _has_nullable_items(field_def.type)
            )
        return findings


class QueryResponseNullable(Rule):
    """Root query fields must be nullable at the top level."""

    name: ClassVar[str] = "query-response-nullable"
    description: ClassVar[str] = "Query root response fields should be nullable."

    def check(self, schema: Schema) -> list[Finding]:
        query = schema.get_type(schema.query_type) if schema.query_type else None
        if query is None:
            return []

        # Only the outermost wrapper is checked
        return [
            self.finding(
                schema,
                f"Query root field `{field_def.name}` should be nullable "
                f"(`{type_to_string(unwrap_non_null(field_def.type))}` instead of "
                f"`{type_to_string(field_def.type)}`) to prevent nulling out entire "
                "query response due to missing data.",
                field_def.location,
            )
            for field_def in query.fields
            if not field_def.name.startswith("__") and is_non_null(field_def.type)
        ]


class MutationResponseNullable(Rule):
    """Fields of mutation payload types must be nullable."""

    name: ClassVar[str] = "mutation-response-nullable"
    description: ClassVar[str] = (
        "Mutation response fields should be nullable to prevent breaking changes "
        "during schema evolution"
    )

    def check(self, schema: Schema) -> list[Finding]:
        mutation = schema.get_type(schema.mutation_type) if schema.mutation_type else None
        if mutation is None:
            return []

        findings: list[Finding] = []
        for payload in self._payload_types(schema, mutation):
            findings.extend(
                self.finding(
                    schema,
                    f"Mutation response field `{payload.name}.{field_def.name}` should "
                    f"be nullable (`{named_type(field_def.type)}` instead of "
                    f"`{type_to_string(field_def.type)}`) to prevent breaking changes "
                    "when evolving the schema.",
                    field_def.location,
                )
                for field_def in payload.fields
                if not field_def.name.startswith("__") and self._is_non_null_named(field_def)
            )
        return findings

    def _payload_types(
        self, schema: Schema, mutation: TypeDefinition
    ) -> list[TypeDefinition]:
        payloads: dict[str, TypeDefinition] = {}
        for field_def in mutation.fields:
            type_def = schema.get_type(named_type(field_def.type))
            if (
                type_def is not None
                and type_def.kind is TypeKind.OBJECT
                and not type_def.name.startswith("__")
            ):
                payloads.setdefault(type_def.name, type_def)
        return list(payloads.values())

    @staticmethod
    def _is_non_null_named(field_def: FieldDefinition) -> bool:
        # Non-null lists are left alone
        return isinstance(field_def.type, NonNullType) and isinstance(
            field_def.type.of_type, NamedType
        )
