"""Schema loader implementation for GraphQL SDL documents.

This module provides the schema loading interface and a file-based
implementation that parses SDL text with graphql-core, optionally runs
graphql-core's SDL validation and converts the parsed document into the
read-only schema model the lint rules operate on.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path

from graphql import GraphQLError, GraphQLSyntaxError, Source, parse
from graphql.language import (
    BooleanValueNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueNode,
    FieldDefinitionNode,
    FloatValueNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    IntValueNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    Node,
    NonNullTypeNode,
    NullValueNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ObjectValueNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    TypeDefinitionNode,
    TypeExtensionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    ValueNode,
    get_location,
)
from graphql.validation.validate import validate_sdl

from .logging import get_logger
from .schema import (
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

logger = get_logger(__name__)

DEFAULT_ROOT_TYPES = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}

_KIND_BY_NODE: dict[type, TypeKind] = {
    ObjectTypeDefinitionNode: TypeKind.OBJECT,
    ObjectTypeExtensionNode: TypeKind.OBJECT,
    InterfaceTypeDefinitionNode: TypeKind.INTERFACE,
    InterfaceTypeExtensionNode: TypeKind.INTERFACE,
    UnionTypeDefinitionNode: TypeKind.UNION,
    UnionTypeExtensionNode: TypeKind.UNION,
    EnumTypeDefinitionNode: TypeKind.ENUM,
    EnumTypeExtensionNode: TypeKind.ENUM,
    ScalarTypeDefinitionNode: TypeKind.SCALAR,
    ScalarTypeExtensionNode: TypeKind.SCALAR,
    InputObjectTypeDefinitionNode: TypeKind.INPUT_OBJECT,
    InputObjectTypeExtensionNode: TypeKind.INPUT_OBJECT,
}


class SchemaLoader(ABC):
    """Interface for loading schema documents into the schema model."""

    @abstractmethod
    def load(self, path: str | Path) -> Schema:
        """Load a schema document from a file."""
        pass

    @abstractmethod
    def load_string(self, content: str, source_name: str = "<schema>") -> Schema:
        """Load a schema document from SDL text."""
        pass


class FileSchemaLoader(SchemaLoader):
    """graphql-core backed SDL loader.

    Parses SDL text, validates it as a schema definition language document
    unless ``validate`` is disabled, and builds the schema model. Type
    extensions are merged into their base definitions.
    """

    def __init__(self, validate: bool = True, encoding: str = "utf-8"):
        """Initialize the loader.

        Args:
            validate: Whether to run graphql-core SDL validation before conversion
            encoding: Encoding used to read schema files
        """
        self.validate = validate
        self.encoding = encoding

    def load(self, path: str | Path) -> Schema:
        """Load a schema document from a file.

        Args:
            path: Path to the SDL file

        Returns:
            The parsed schema model

        Raises:
            SchemaLoadError: If the file cannot be read
            SchemaSyntaxError: If the document is not valid SDL syntax
            SchemaValidationError: If SDL validation fails
        """
        file_path = Path(path)
        try:
            content = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaLoadError(f"Cannot read schema file {file_path}: {e}") from e

        return self.load_string(content, str(path))

    def load_string(self, content: str, source_name: str = "<schema>") -> Schema:
        """Load a schema document from SDL text.

        Args:
            content: SDL text
            source_name: Name reported as the file of every finding

        Returns:
            The parsed schema model
        """
        try:
            document = parse(Source(content, source_name))
        except GraphQLSyntaxError as e:
            line, column = _error_position(e)
            raise SchemaSyntaxError(e.message, line, column) from e

        if self.validate:
            sdl_errors = validate_sdl(document)
            if sdl_errors:
                errors = [
                    SchemaValidationError(error.message, *_error_position(error))
                    for error in sdl_errors
                ]
                first = errors[0]
                raise SchemaValidationError(
                    f"Schema validation failed with {len(errors)} error(s): {first.message}",
                    first.line,
                    first.column,
                    errors,
                )

        schema = SchemaBuilder(source_name).build(document)
        logger.debug(
            "Schema loaded",
            source=source_name,
            type_count=len(schema.types),
            directive_count=len(schema.directives),
        )
        return schema


class SchemaBuilder:
    """Converts a parsed graphql-core document into the schema model."""

    def __init__(self, source_name: str):
        self.source_name = source_name

    def build(self, document: DocumentNode) -> Schema:
        types: dict[str, TypeDefinition] = {}
        directives: dict[str, DirectiveDefinition] = {}
        extensions: list[TypeExtensionNode] = []
        operation_types: dict[str, str] = {}

        for definition in document.definitions:
            if isinstance(definition, TypeDefinitionNode):
                type_def = self._build_type(definition)
                types[type_def.name] = type_def
            elif isinstance(definition, TypeExtensionNode):
                extensions.append(definition)
            elif isinstance(definition, DirectiveDefinitionNode):
                directive_def = self._build_directive_definition(definition)
                directives[directive_def.name] = directive_def
            elif isinstance(definition, SchemaDefinitionNode | SchemaExtensionNode):
                for operation_type in definition.operation_types or ():
                    operation_types[operation_type.operation.value] = (
                        operation_type.type.name.value
                    )

        for extension in extensions:
            self._apply_extension(types, extension)

        if not operation_types:
            operation_types = {
                operation: name
                for operation, name in DEFAULT_ROOT_TYPES.items()
                if name in types
            }

        return Schema(
            types=types,
            directives=directives,
            query_type=operation_types.get("query"),
            mutation_type=operation_types.get("mutation"),
            subscription_type=operation_types.get("subscription"),
            source_name=self.source_name,
        )

    def _build_type(self, node: TypeDefinitionNode | TypeExtensionNode) -> TypeDefinition:
        kind = _KIND_BY_NODE[type(node)]
        description = getattr(node, "description", None)
        return TypeDefinition(
            name=node.name.value,
            kind=kind,
            description=description.value if description else None,
            fields=self._build_fields(node),
            directives=self._build_directives(node.directives),
            interfaces=tuple(
                iface.name.value for iface in getattr(node, "interfaces", None) or ()
            ),
            members=tuple(
                member.name.value for member in getattr(node, "types", None) or ()
            ),
            values=tuple(
                EnumValue(
                    name=value.name.value,
                    description=value.description.value if value.description else None,
                    directives=self._build_directives(value.directives),
                    location=self._location(value.name),
                )
                for value in getattr(node, "values", None) or ()
            ),
            location=self._location(node.name),
        )

    def _apply_extension(
        self, types: dict[str, TypeDefinition], node: TypeExtensionNode
    ) -> None:
        extension = self._build_type(node)
        clause = self._location(node)
        base = types.get(extension.name)
        if base is None:
            # Only reachable with SDL validation disabled.
            logger.debug(
                "Extension of undeclared type", type=extension.name, source=self.source_name
            )
            types[extension.name] = replace(
                extension, extensions=(clause,), is_extension=True
            )
            return

        types[extension.name] = replace(
            base,
            fields=base.fields + extension.fields,
            directives=base.directives + extension.directives,
            interfaces=base.interfaces + extension.interfaces,
            members=base.members + extension.members,
            values=base.values + extension.values,
            extensions=base.extensions + (clause,),
        )

    def _build_fields(
        self, node: TypeDefinitionNode | TypeExtensionNode
    ) -> tuple[FieldDefinition, ...]:
        fields = []
        for field_node in getattr(node, "fields", None) or ():
            if isinstance(field_node, FieldDefinitionNode):
                arguments = self._build_arguments(field_node.arguments)
            else:
                arguments = ()
            fields.append(
                FieldDefinition(
                    name=field_node.name.value,
                    type=self._build_type_ref(field_node.type),
                    arguments=arguments,
                    directives=self._build_directives(field_node.directives),
                    description=(
                        field_node.description.value if field_node.description else None
                    ),
                    location=self._location(field_node.name),
                )
            )
        return tuple(fields)

    def _build_arguments(
        self, nodes: list[InputValueDefinitionNode] | tuple | None
    ) -> tuple[ArgumentDefinition, ...]:
        return tuple(
            ArgumentDefinition(
                name=arg.name.value,
                type=self._build_type_ref(arg.type),
                description=arg.description.value if arg.description else None,
                directives=self._build_directives(arg.directives),
                location=self._location(arg.name),
            )
            for arg in nodes or ()
        )

    def _build_directive_definition(
        self, node: DirectiveDefinitionNode
    ) -> DirectiveDefinition:
        return DirectiveDefinition(
            name=node.name.value,
            arguments=self._build_arguments(node.arguments),
            locations=tuple(location.value for location in node.locations or ()),
            repeatable=bool(node.repeatable),
            description=node.description.value if node.description else None,
            location=self._location(node.name),
        )

    def _build_directives(
        self, nodes: list[DirectiveNode] | tuple | None
    ) -> tuple[DirectiveUsage, ...]:
        return tuple(
            DirectiveUsage(
                name=directive.name.value,
                arguments=tuple(
                    DirectiveArgument(
                        name=arg.name.value,
                        value=self._build_value(arg.value),
                        location=self._location(arg),
                    )
                    for arg in directive.arguments or ()
                ),
                location=self._location(directive),
            )
            for directive in nodes or ()
        )

    def _build_type_ref(self, node: TypeNode) -> TypeRef:
        if isinstance(node, NonNullTypeNode):
            return NonNullType(self._build_type_ref(node.type))
        if isinstance(node, ListTypeNode):
            return ListType(self._build_type_ref(node.type))
        if isinstance(node, NamedTypeNode):
            return NamedType(node.name.value)
        raise SchemaLoadError(f"Unsupported type node {type(node).__name__}")

    def _build_value(self, node: ValueNode) -> Value:  # noqa: PLR0911
        if isinstance(node, StringValueNode):
            return Value(ValueKind.STRING, node.value)
        if isinstance(node, BooleanValueNode):
            return Value(ValueKind.BOOLEAN, node.value)
        if isinstance(node, IntValueNode):
            return Value(ValueKind.INT, int(node.value))
        if isinstance(node, FloatValueNode):
            return Value(ValueKind.FLOAT, float(node.value))
        if isinstance(node, EnumValueNode):
            return Value(ValueKind.ENUM, node.value)
        if isinstance(node, NullValueNode):
            return Value(ValueKind.NULL)
        if isinstance(node, ListValueNode):
            return Value(
                ValueKind.LIST, tuple(self._build_value(item) for item in node.values)
            )
        if isinstance(node, ObjectValueNode):
            return Value(
                ValueKind.OBJECT,
                tuple(
                    (field.name.value, self._build_value(field.value))
                    for field in node.fields
                ),
            )
        line, column = self._position(node)
        raise SchemaLoadError(
            f"Unsupported value node {type(node).__name__}", line, column
        )

    def _location(self, node: Node) -> SourceLocation:
        line, column = self._position(node)
        return SourceLocation(line=line, column=column)

    def _position(self, node: Node) -> tuple[int, int]:
        loc = node.loc
        if loc is None:
            return 1, 1
        location = get_location(loc.source, loc.start)
        return location.line, location.column


def _error_position(error: GraphQLError) -> tuple[int, int]:
    if error.locations:
        location = error.locations[0]
        return location.line, location.column
    return 1, 1
