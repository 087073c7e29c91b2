"""Enum value checks."""

from typing import ClassVar

from ...core import Schema, TypeKind
from ..engine import Rule
from ..errors import Finding


class NoInvalidEnum(Rule):
    """No enum value may be named ``INVALID`` (in any case)."""

    name: ClassVar[str] = "no-invalid-enum"
    description: ClassVar[str] = (
        "Ensures that no enum value is named 'INVALID' to avoid conflicts with "
        "proto translation zero values"
    )

    RESERVED: ClassVar[str] = "INVALID"

    def check(self, schema: Schema) -> list[Finding]:
        return [
            self.finding(
                schema,
                f"Enum value '{value.name}' is not allowed as it conflicts with proto "
                f"translation zero values. Use a different name for enum "
                f"'{type_def.name}'",
                value.location,
            )
            for type_def in schema.types_of_kind(TypeKind.ENUM)
            for value in type_def.values
            if value.name.upper() == self.RESERVED
        ]
