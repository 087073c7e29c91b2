"""Core schema data structures for GraphQL schema linting.

This module defines the in-memory schema model the lint rules operate on:
type definitions, field definitions, type references, directive usages and
their source positions. A model is built once per schema document by the
schema loader and is treated as read-only by every rule.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

BUILTIN_SCALARS: frozenset[str] = frozenset({"String", "Int", "Float", "Boolean", "ID"})


class TypeKind(str, Enum):
    """Kind of a named schema-level declaration."""

    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    SCALAR = "SCALAR"
    INPUT_OBJECT = "INPUT_OBJECT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """1-based line and column of a declaration in its source document."""

    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class NamedType:
    """Reference to a named type, e.g. ``User``."""

    name: str


@dataclass(frozen=True)
class ListType:
    """List wrapper around another type reference, e.g. ``[User]``."""

    of_type: "TypeRef"


@dataclass(frozen=True)
class NonNullType:
    """Non-null wrapper around another type reference, e.g. ``User!``."""

    of_type: "TypeRef"


TypeRef = NamedType | ListType | NonNullType


class ValueKind(str, Enum):
    """Kind tag of a directive argument value."""

    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    INT = "INT"
    FLOAT = "FLOAT"
    ENUM = "ENUM"
    LIST = "LIST"
    OBJECT = "OBJECT"
    NULL = "NULL"


@dataclass(frozen=True)
class Value:
    """Tagged directive argument value.

    ``value`` holds a ``str`` for STRING and ENUM, ``bool``, ``int`` and
    ``float`` for the matching kinds, a tuple of ``Value`` for LIST, a tuple
    of ``(name, Value)`` pairs for OBJECT and ``None`` for NULL.
    """

    kind: ValueKind
    value: Any = None

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    @property
    def is_boolean(self) -> bool:
        return self.kind is ValueKind.BOOLEAN


@dataclass(frozen=True)
class DirectiveArgument:
    """A single ``name: value`` pair of a directive usage."""

    name: str
    value: Value
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class DirectiveUsage:
    """A directive applied to a type or field, e.g. ``@key(fields: "id")``."""

    name: str
    arguments: tuple[DirectiveArgument, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)

    def argument(self, name: str) -> DirectiveArgument | None:
        """Return the argument with the given name, if present."""
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None


@dataclass(frozen=True)
class ArgumentDefinition:
    """Definition of a field or directive argument."""

    name: str
    type: TypeRef
    description: str | None = None
    directives: tuple[DirectiveUsage, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class FieldDefinition:
    """Definition of a field on an object, interface or input object type."""

    name: str
    type: TypeRef
    arguments: tuple[ArgumentDefinition, ...] = ()
    directives: tuple[DirectiveUsage, ...] = ()
    description: str | None = None
    location: SourceLocation = field(default_factory=SourceLocation)

    def argument(self, name: str) -> ArgumentDefinition | None:
        """Return the argument definition with the given name, if present."""
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None


@dataclass(frozen=True)
class EnumValue:
    """A single value of an enum type."""

    name: str
    description: str | None = None
    directives: tuple[DirectiveUsage, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class TypeDefinition:
    """Named schema-level declaration.

    ``fields`` is empty for enums, scalars and unions; ``interfaces`` is only
    populated for objects and interfaces; ``members`` only for unions and
    ``values`` only for enums.

    ``extensions`` holds the position of every ``extend`` clause merged into
    the type. ``is_extension`` is set when the document only extends the type
    and never defines it.
    """

    name: str
    kind: TypeKind
    description: str | None = None
    fields: tuple[FieldDefinition, ...] = ()
    directives: tuple[DirectiveUsage, ...] = ()
    interfaces: tuple[str, ...] = ()
    members: tuple[str, ...] = ()
    values: tuple[EnumValue, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)
    extensions: tuple[SourceLocation, ...] = ()
    is_extension: bool = False

    def get_field(self, name: str) -> FieldDefinition | None:
        """Return the field with the given name, if present."""
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None

    def directives_named(self, name: str) -> list[DirectiveUsage]:
        """Return every usage of the named directive on this type."""
        return [directive for directive in self.directives if directive.name == name]

    def has_directive(self, name: str) -> bool:
        return any(directive.name == name for directive in self.directives)

    @property
    def field_names(self) -> list[str]:
        return [field_def.name for field_def in self.fields]


@dataclass(frozen=True)
class DirectiveDefinition:
    """Definition of a directive, e.g. ``directive @key(fields: String!) on OBJECT``."""

    name: str
    arguments: tuple[ArgumentDefinition, ...] = ()
    locations: tuple[str, ...] = ()
    repeatable: bool = False
    description: str | None = None
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class Schema:
    """Complete parsed schema document.

    Types and directives keep the declaration order of the source document,
    which is the traversal order every rule reports findings in. The schema
    is read-only once built.
    """

    types: dict[str, TypeDefinition] = field(default_factory=dict)
    directives: dict[str, DirectiveDefinition] = field(default_factory=dict)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None
    source_name: str = "<schema>"

    def get_type(self, name: str) -> TypeDefinition | None:
        """Return the declared type with the given name, if any."""
        return self.types.get(name)

    def types_of_kind(self, kind: TypeKind) -> list[TypeDefinition]:
        return [type_def for type_def in self.types.values() if type_def.kind is kind]

    @property
    def root_type_names(self) -> list[str]:
        """Names of the declared root operation types."""
        return [
            name
            for name in (self.query_type, self.mutation_type, self.subscription_type)
            if name is not None
        ]

    def is_scalar(self, name: str) -> bool:
        """Check if a name resolves to a built-in or declared scalar."""
        if name in BUILTIN_SCALARS:
            return True
        type_def = self.types.get(name)
        return type_def is not None and type_def.kind is TypeKind.SCALAR

    def kind_of(self, name: str) -> TypeKind | None:
        """Return the kind a type name resolves to, including built-in scalars."""
        if name in BUILTIN_SCALARS:
            return TypeKind.SCALAR
        type_def = self.types.get(name)
        return type_def.kind if type_def else None


class SchemaLoadError(Exception):
    """Raised when a schema document cannot be loaded."""

    def __init__(self, message: str, line: int = 1, column: int = 1):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class SchemaSyntaxError(SchemaLoadError):
    """Raised when a schema document is not syntactically valid SDL."""

    pass


class SchemaValidationError(SchemaLoadError):
    """Raised when a schema document fails SDL validation."""

    def __init__(
        self,
        message: str,
        line: int = 1,
        column: int = 1,
        errors: list["SchemaLoadError"] | None = None,
    ):
        super().__init__(message, line, column)
        self.errors = errors or []
