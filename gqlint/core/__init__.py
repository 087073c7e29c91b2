"""Core functionality for the schema linter."""

from .logging import (
    OperationLogger,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from .schema import (
    BUILTIN_SCALARS,
    ArgumentDefinition,
    DirectiveArgument,
    DirectiveDefinition,
    DirectiveUsage,
    EnumValue,
    FieldDefinition,
    ListType,
    NamedType,
    NonNullType,
    Schema,
    SchemaLoadError,
    SchemaSyntaxError,
    SchemaValidationError,
    SourceLocation,
    TypeDefinition,
    TypeKind,
    TypeRef,
    Value,
    ValueKind,
)
from .schema_loader import FileSchemaLoader, SchemaLoader

__all__ = [
    "BUILTIN_SCALARS",
    # Schema model
    "ArgumentDefinition",
    "DirectiveArgument",
    "DirectiveDefinition",
    "DirectiveUsage",
    "EnumValue",
    "FieldDefinition",
    "FileSchemaLoader",
    "ListType",
    "NamedType",
    "NonNullType",
    "OperationLogger",
    "Schema",
    "SchemaLoadError",
    "SchemaLoader",
    "SchemaSyntaxError",
    "SchemaValidationError",
    "SourceLocation",
    "TypeDefinition",
    "TypeKind",
    "TypeRef",
    "Value",
    "ValueKind",
    # Logging
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
