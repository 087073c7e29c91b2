"""Conformance checks for the Relay cursor connection pattern.

Three cooperating type roles are recognised by naming convention:

- connection types (name ending in ``Connection``, case-insensitive) wrap a
  paged list through an ``edges`` list field and a ``pageInfo`` field;
- edge types (referenced by a connection's ``edges`` field, or named with an
  ``Edge`` suffix) carry a ``node`` and a ``cursor``;
- ``PageInfo`` describes the page boundaries.

Every rule reports findings in schema declaration order.
"""

import re
from typing import ClassVar

from ...core import (
    FieldDefinition,
    NamedType,
    Schema,
    TypeDefinition,
    TypeKind,
)
from ...core.type_refs import (
    contains_list,
    is_list,
    is_nested_list,
    named_type,
    parse_type_ref,
    type_to_string,
    unwrap_non_null,
)
from ..engine import Rule
from ..errors import Finding


class RelayRule(Rule):
    """Shared naming constants and lookups of the connection rules."""

    CONNECTION_SUFFIX: ClassVar[str] = "Connection"
    EDGE_SUFFIX: ClassVar[str] = "Edge"
    EDGES_FIELD: ClassVar[str] = "edges"
    PAGE_INFO_FIELD: ClassVar[str] = "pageInfo"
    PAGE_INFO_TYPE: ClassVar[str] = "PageInfo"
    NODE_FIELD: ClassVar[str] = "node"
    CURSOR_FIELD: ClassVar[str] = "cursor"
    NODE_INTERFACE: ClassVar[str] = "Node"

    def is_connection_name(self, name: str) -> bool:
        return name.lower().endswith(self.CONNECTION_SUFFIX.lower())

    def is_edge_name(self, name: str) -> bool:
        return name.lower().endswith(self.EDGE_SUFFIX.lower())

    def connection_types(self, schema: Schema) -> list[TypeDefinition]:
        return [
            type_def
            for type_def in schema.types.values()
            if not type_def.name.startswith("__")
            and self.is_connection_name(type_def.name)
        ]

    def edge_type_name(self, connection: TypeDefinition) -> str | None:
        """Name of the type a connection's ``edges`` field points to."""
        edges = connection.get_field(self.EDGES_FIELD)
        if edges is None:
            return None
        return named_type(edges.type)


class RelayConnectionTypes(RelayRule):
    """Connection types must be objects with ``edges`` and ``pageInfo`` fields."""

    name: ClassVar[str] = "relay-connection-types"
    description: ClassVar[str] = (
        "Ensure Connection types follow Relay specification - must be Object types "
        "with edges and pageInfo fields"
    )

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []
        for connection in self.connection_types(schema):
            findings.extend(self._validate_connection(schema, connection))
        return findings

    def _validate_connection(
        self, schema: Schema, connection: TypeDefinition
    ) -> list[Finding]:
        if connection.kind is not TypeKind.OBJECT:
            return [
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` must be an Object type, but "
                    f"is {connection.kind}.",
                    connection.location,
                )
            ]

        findings = []
        edges = connection.get_field(self.EDGES_FIELD)
        if edges is None:
            findings.append(
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` must contain a field "
                    f"`{self.EDGES_FIELD}` that returns a list type.",
                    connection.location,
                )
            )
        elif not is_list(edges.type):
            findings.append(
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` field `{self.EDGES_FIELD}` "
                    f"must return a list type, but returns {type_to_string(edges.type)}.",
                    edges.location,
                )
            )
        elif is_nested_list(edges.type):
            findings.append(
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` field `{self.EDGES_FIELD}` "
                    "must return a single-level list type, but returns a nested list "
                    f"{type_to_string(edges.type)}.",
                    edges.location,
                )
            )

        page_info = connection.get_field(self.PAGE_INFO_FIELD)
        if page_info is None or page_info.type != parse_type_ref(
            f"{self.PAGE_INFO_TYPE}!"
        ):
            findings.append(
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` must contain a field "
                    f"`{self.PAGE_INFO_FIELD}` that returns a non-null "
                    f"{self.PAGE_INFO_TYPE} Object type.",
                    page_info.location if page_info else connection.location,
                )
            )

        return findings


class RelayEdgeTypes(RelayRule):
    """Edge types must be objects with a ``node`` and a ``cursor`` field."""

    name: ClassVar[str] = "relay-edge-types"
    description: ClassVar[str] = (
        "Ensure Edge types follow Relay specification - must be Object types with "
        "node and cursor fields, where node implements Node interface"
    )

    VALID_NODE_KINDS: ClassVar[frozenset[TypeKind]] = frozenset(
        {
            TypeKind.SCALAR,
            TypeKind.ENUM,
            TypeKind.OBJECT,
            TypeKind.INTERFACE,
            TypeKind.UNION,
        }
    )

    def check(self, schema: Schema) -> list[Finding]:
        from_connections: set[str] = set()
        for connection in self.connection_types(schema):
            if connection.kind is not TypeKind.OBJECT:
                continue
            edge_name = self.edge_type_name(connection)
            if edge_name is not None:
                from_connections.add(edge_name)

        findings: list[Finding] = []
        for type_def in schema.types.values():
            if type_def.name.startswith("__"):
                continue
            is_from_connection = type_def.name in from_connections
            if is_from_connection or self.is_edge_name(type_def.name):
                findings.extend(
                    self._validate_edge(schema, type_def, is_from_connection)
                )
        return findings

    def _validate_edge(
        self, schema: Schema, edge: TypeDefinition, is_from_connection: bool
    ) -> list[Finding]:
        if edge.kind is not TypeKind.OBJECT:
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` must be an Object type, but is {edge.kind}.",
                    edge.location,
                )
            ]

        findings = []
        node = edge.get_field(self.NODE_FIELD)
        if node is None:
            findings.append(
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` must contain a field `{self.NODE_FIELD}` "
                    "that returns either Scalar, Enum, Object, Interface, Union, or a "
                    "non-null wrapper around one of those types.",
                    edge.location,
                )
            )
        else:
            findings.extend(self._validate_node(schema, edge, node))

        cursor = edge.get_field(self.CURSOR_FIELD)
        if cursor is None:
            findings.append(
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` must contain a field `{self.CURSOR_FIELD}` "
                    "that returns either String, or a non-null wrapper around String.",
                    edge.location,
                )
            )
        elif contains_list(cursor.type) or named_type(cursor.type) != "String":
            findings.append(
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` field `{self.CURSOR_FIELD}` must return "
                    "String, or a non-null wrapper around a String, but returns "
                    f"{type_to_string(cursor.type)}.",
                    cursor.location,
                )
            )

        if not is_from_connection and not edge.name.endswith(self.EDGE_SUFFIX):
            findings.append(
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` name must end with '{self.EDGE_SUFFIX}'.",
                    edge.location,
                )
            )

        return findings

    def _validate_node(
        self, schema: Schema, edge: TypeDefinition, node: FieldDefinition
    ) -> list[Finding]:
        if contains_list(node.type):
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` field `{self.NODE_FIELD}` cannot return a "
                    f"list type, but returns {type_to_string(node.type)}.",
                    node.location,
                )
            ]

        node_type_name = named_type(node.type)
        kind = schema.kind_of(node_type_name)
        if kind is None:
            return []
        if kind not in self.VALID_NODE_KINDS:
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` field `{self.NODE_FIELD}` must return "
                    "Scalar, Enum, Object, Interface, or Union type, but returns "
                    f"{kind}.",
                    node.location,
                )
            ]

        node_interface = schema.get_type(self.NODE_INTERFACE)
        if node_interface is None or node_interface.kind is not TypeKind.INTERFACE:
            return []

        node_type = schema.get_type(node_type_name)
        if node_type is None:
            return []

        if node_type.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            if not self._implements_node(node_type):
                return [
                    self.finding(
                        schema,
                        f"Edge type `{edge.name}` field `{self.NODE_FIELD}` type "
                        f"`{node_type.name}` must implement {self.NODE_INTERFACE} "
                        "interface.",
                        node.location,
                    )
                ]
            return []

        findings = []
        if node_type.kind is TypeKind.UNION:
            for member_name in node_type.members:
                member = schema.get_type(member_name)
                if (
                    member is not None
                    and member.kind in (TypeKind.OBJECT, TypeKind.INTERFACE)
                    and not self._implements_node(member)
                ):
                    findings.append(
                        self.finding(
                            schema,
                            f"Edge type `{edge.name}` field `{self.NODE_FIELD}` union "
                            f"type `{node_type.name}` member `{member_name}` must "
                            f"implement {self.NODE_INTERFACE} interface.",
                            node.location,
                        )
                    )
        return findings

    def _implements_node(self, type_def: TypeDefinition) -> bool:
        return self.NODE_INTERFACE in type_def.interfaces


class RelayPageInfo(RelayRule):
    """``PageInfo`` must declare the four Relay page boundary fields."""

    name: ClassVar[str] = "relay-pageinfo"
    description: ClassVar[str] = (
        "Ensure PageInfo objects comply with the Relay specification requirements"
    )

    REQUIRED_FIELDS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        (
            "hasNextPage",
            "Boolean!",
            "indicates whether more edges exist following the current page",
        ),
        (
            "hasPreviousPage",
            "Boolean!",
            "indicates whether more edges exist prior to the current page",
        ),
        (
            "startCursor",
            "String",
            "cursor corresponding to the first edge in the current page "
            "(nullable if no results)",
        ),
        (
            "endCursor",
            "String",
            "cursor corresponding to the last edge in the current page "
            "(nullable if no results)",
        ),
    )

    def check(self, schema: Schema) -> list[Finding]:
        page_info = schema.get_type(self.PAGE_INFO_TYPE)
        if page_info is None or page_info.kind is not TypeKind.OBJECT:
            return []

        findings = []
        for field_name, expected, purpose in self.REQUIRED_FIELDS:
            field_def = page_info.get_field(field_name)
            if field_def is None:
                findings.append(
                    self.finding(
                        schema,
                        f"{self.PAGE_INFO_TYPE} must contain field `{field_name}` that "
                        f"returns {expected} ({purpose}).",
                        page_info.location,
                    )
                )
                continue

            actual = type_to_string(field_def.type)
            if actual != expected:
                findings.append(
                    self.finding(
                        schema,
                        f"{self.PAGE_INFO_TYPE} field `{field_name}` must return "
                        f"{expected}, but returns {actual}.",
                        field_def.location,
                    )
                )

        return findings


class RelayNamingConvention(RelayRule):
    """Connection and edge names must pair up as ``<Entity>Connection``/``<Entity>Edge``."""

    name: ClassVar[str] = "relay-naming-convention"
    description: ClassVar[str] = (
        "Ensure Connection and Edge types follow Relay naming conventions: "
        "Connection must be named [Entity]Connection with edges field of type "
        "[Entity]Edge, Edge must be named [Entity]Edge"
    )

    PASCAL_CASE: ClassVar[re.Pattern[str]] = re.compile(r"[A-Z][a-zA-Z0-9]*")

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in schema.types.values():
            if type_def.name.startswith("__"):
                continue
            if self.is_connection_name(type_def.name):
                findings.extend(self._validate_connection_naming(schema, type_def))
            if self.is_edge_name(type_def.name):
                findings.extend(self._validate_edge_naming(schema, type_def))
        return findings

    def _validate_connection_naming(
        self, schema: Schema, connection: TypeDefinition
    ) -> list[Finding]:
        suffix = self.CONNECTION_SUFFIX
        if not connection.name.endswith(suffix):
            return [
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` must follow the naming "
                    f"convention [Entity]{suffix} with proper case.",
                    connection.location,
                )
            ]

        entity = connection.name.removesuffix(suffix)
        if not entity:
            return [
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` must have a valid entity "
                    f"name before '{suffix}'.",
                    connection.location,
                )
            ]
        if not self.PASCAL_CASE.fullmatch(entity):
            return [
                self.finding(
                    schema,
                    f"Connection type `{connection.name}` entity name `{entity}` must "
                    "be PascalCase.",
                    connection.location,
                )
            ]

        edges = connection.get_field(self.EDGES_FIELD)
        if edges is None:
            return []

        expected = entity + self.EDGE_SUFFIX
        actual = named_type(edges.type)
        if actual == expected:
            return []

        return [
            self.finding(
                schema,
                f"Connection type `{connection.name}` edges field must reference "
                f"`{expected}`, but references `{actual}`.",
                edges.location,
            )
        ]

    def _validate_edge_naming(
        self, schema: Schema, edge: TypeDefinition
    ) -> list[Finding]:
        suffix = self.EDGE_SUFFIX
        if not edge.name.endswith(suffix):
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` must follow the naming convention "
                    f"[Entity]{suffix} with proper case.",
                    edge.location,
                )
            ]
        entity = edge.name.removesuffix(suffix)
        if not entity:
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` must have a valid entity name before "
                    f"'{suffix}'.",
                    edge.location,
                )
            ]
        if not self.PASCAL_CASE.fullmatch(entity):
            return [
                self.finding(
                    schema,
                    f"Edge type `{edge.name}` entity name `{entity}` must be PascalCase.",
                    edge.location,
                )
            ]
        return []


class RelayArguments(RelayRule):
    """Fields returning a connection must accept Relay pagination arguments."""

    name: ClassVar[str] = "relay-arguments"
    description: ClassVar[str] = (
        "Ensure fields returning Connection types include proper Relay pagination "
        "arguments (first/after for forward, last/before for backward)"
    )

    COUNT_TYPES: ClassVar[frozenset[str]] = frozenset({"Int"})
    CURSOR_TYPES: ClassVar[frozenset[str]] = frozenset({"String", "Cursor"})

    # (argument, partner, direction)
    PAIRS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("first", "after", "forward"),
        ("after", "first", "forward"),
        ("last", "before", "backward"),
        ("before", "last", "backward"),
    )

    def check(self, schema: Schema) -> list[Finding]:
        connection_names = {
            type_def.name for type_def in self.connection_types(schema)
        }

        findings: list[Finding] = []
        for type_def in schema.types.values():
            if type_def.name.startswith("__") or type_def.kind not in (
                TypeKind.OBJECT,
                TypeKind.INTERFACE,
            ):
                continue
            for field_def in type_def.fields:
                if named_type(field_def.type) in connection_names:
                    findings.extend(self._validate_field(schema, type_def, field_def))
        return findings

    def _validate_field(
        self, schema: Schema, parent: TypeDefinition, field_def: FieldDefinition
    ) -> list[Finding]:
        path = f"{parent.name}.{field_def.name}"
        present = {
            name
            for name in ("first", "after", "last", "before")
            if field_def.argument(name) is not None
        }

        findings = []
        if not present:
            findings.append(
                self.finding(
                    schema,
                    f"Field `{path}` returns Connection type but lacks proper pagination "
                    "arguments. Must include forward pagination arguments (first and "
                    "after), backward pagination arguments (last and before), or both.",
                    field_def.location,
                )
            )
            return findings

        for argument, partner, direction in self.PAIRS:
            if argument in present and partner not in present:
                findings.append(
                    self.finding(
                        schema,
                        f"Field `{path}` has `{argument}` argument but is missing "
                        f"`{partner}` argument for complete {direction} pagination.",
                        field_def.location,
                    )
                )

        for argument_name in ("first", "after", "last", "before"):
            argument = field_def.argument(argument_name)
            if argument is None:
                continue
            if argument_name in ("first", "last"):
                allowed, expected = self.COUNT_TYPES, "a non-negative integer type (Int)"
            else:
                allowed, expected = self.CURSOR_TYPES, "a Cursor type (String)"
            inner = unwrap_non_null(argument.type)
            if not isinstance(inner, NamedType) or inner.name not in allowed:
                findings.append(
                    self.finding(
                        schema,
                        f"Field `{path}` argument `{argument_name}` must be {expected}, "
                        f"but is {type_to_string(argument.type)}.",
                        field_def.location,
                    )
                )

        return findings
