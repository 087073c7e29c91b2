"""Interface usage checks."""

from typing import ClassVar

from ...core import Schema, TypeKind
from ..engine import Rule
from ..errors import Finding


class NoUnimplementedInterface(Rule):
    """Flags interfaces that no object or interface type implements."""

    name: ClassVar[str] = "no-unimplemented-interface"
    description: ClassVar[str] = (
        "Flags interfaces that are not implemented by any type in the schema"
    )

    def check(self, schema: Schema) -> list[Finding]:
        implemented = {
            interface
            for type_def in schema.types.values()
            for interface in type_def.interfaces
        }
        return [
            self.finding(
                schema,
                f"Interface '{type_def.name}' is not implemented by any type",
                type_def.location,
            )
            for type_def in schema.types_of_kind(TypeKind.INTERFACE)
            if type_def.name not in implemented
        ]
