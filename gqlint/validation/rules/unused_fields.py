"""Dead field detection."""

from typing import ClassVar

from ...core import Schema, TypeDefinition, TypeKind
from ...core.type_refs import named_type
from ..engine import Rule
from ..errors import Finding


class NoUnusedFields(Rule):
    """Flags fields of object and interface types that nothing can select.

    A type's fields count as used once the type is named by any field,
    argument or input field type, or is a union member. Fields an object
    declares because an interface requires them are always used. Root
    operation types are entry points and are never reported.
    """

    name: ClassVar[str] = "no-unused-fields"
    description: ClassVar[str] = (
        "Detect fields of object and interface types that are never referenced "
        "from the rest of the schema"
    )

    def check(self, schema: Schema) -> list[Finding]:
        referenced = self._referenced_types(schema)
        roots = set(schema.root_type_names)
        findings: list[Finding] = []

        for type_def in schema.types.values():
            if (
                type_def.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE)
                or type_def.name.startswith("__")
                or type_def.name in roots
                or type_def.name in referenced
            ):
                continue

            required = self._interface_field_names(schema, type_def)
            findings.extend(
                self.finding(
                    schema,
                    f"Field `{type_def.name}.{field_def.name}` is never used and can "
                    "be removed.",
                    field_def.location,
                )
                for field_def in type_def.fields
                if field_def.name not in required
            )

        return findings

    def _referenced_types(self, schema: Schema) -> set[str]:
        referenced: set[str] = set()
        for type_def in schema.types.values():
            if type_def.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
                for field_def in type_def.fields:
                    referenced.add(named_type(field_def.type))
                    referenced.update(named_type(arg.type) for arg in field_def.arguments)
            elif type_def.kind is TypeKind.INPUT_OBJECT:
                referenced.update(named_type(field_def.type) for field_def in type_def.fields)
            elif type_def.kind is TypeKind.UNION:
                referenced.update(type_def.members)
        return referenced

    def _interface_field_names(self, schema: Schema, type_def: TypeDefinition) -> set[str]:
        if type_def.kind is not TypeKind.OBJECT:
            return set()
        names: set[str] = set()
        for interface_name in type_def.interfaces:
            interface = schema.get_type(interface_name)
            if interface is not None:
                names.update(interface.field_names)
        return names
