"""Entity reference checks."""

from typing import ClassVar

from ...core import BUILTIN_SCALARS, FieldDefinition, Schema, TypeDefinition, TypeKind
from ...core.type_refs import is_non_null, named_type, type_to_string
from ..engine import Rule
from ..errors import Finding


class LinkViaTypesNotIds(Rule):
    """Fields should point at entity types rather than hold their IDs.

    An entity is any type carrying ``@key``. A scalar field named
    ``<entity>Id`` or ``<entity>ID`` on an object or interface is reported
    when ``<Entity>`` names one.
    """

    name: ClassVar[str] = "link-via-types-not-ids"
    description: ClassVar[str] = (
        "Fields should reference entity types directly instead of storing IDs of "
        "those entities"
    )

    KEY_DIRECTIVE: ClassVar[str] = "key"
    ID_SUFFIXES: ClassVar[tuple[str, ...]] = ("Id", "ID")

    def check(self, schema: Schema) -> list[Finding]:
        entities = {
            type_def.name
            for type_def in schema.types.values()
            if type_def.has_directive(self.KEY_DIRECTIVE)
        }
        if not entities:
            return []

        findings: list[Finding] = []
        for type_def in schema.types.values():
            if (
                type_def.kind not in (TypeKind.OBJECT, TypeKind.INTERFACE)
                or type_def.name.startswith("__")
            ):
                continue
            for field_def in type_def.fields:
                finding = self._check_field(schema, type_def, field_def, entities)
                if finding is not None:
                    findings.append(finding)
        return findings

    def _check_field(
        self,
        schema: Schema,
        type_def: TypeDefinition,
        field_def: FieldDefinition,
        entities: set[str],
    ) -> Finding | None:
        name = field_def.name
        if (
            name.startswith("__")
            or len(name) <= 2
            or not name.endswith(self.ID_SUFFIXES)
            or named_type(field_def.type) not in BUILTIN_SCALARS
        ):
            return None

        prefix = name[:-2]
        entity = prefix[0].upper() + prefix[1:]
        if entity not in entities:
            return None

        suggestion = f"{prefix[0].lower()}{prefix[1:]}: {entity}"
        if is_non_null(field_def.type):
            suggestion += "!"
        return self.finding(
            schema,
            f"Field `{type_def.name}.{name}` should reference the `{entity}` type "
            f"directly instead of storing its ID. Consider using `{suggestion}` "
            f"instead of `{name}: {type_to_string(field_def.type)}`",
            field_def.location,
        )
