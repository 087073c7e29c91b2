"""Example custom rule: identifier fields end with ``ID`` rather than ``Id``.

Load it with::

    gqlint lint schema.graphql --custom-rule-paths examples/custom_rules
"""

from typing import ClassVar

from gqlint.core import Schema, TypeKind
from gqlint.validation import Finding, Rule


class FieldIdSuffix(Rule):
    name: ClassVar[str] = "field-id-suffix"
    description: ClassVar[str] = (
        "Ensures ID fields end with 'ID' not 'Id' for consistency"
    )

    KINDS: ClassVar[tuple[TypeKind, ...]] = (
        TypeKind.OBJECT,
        TypeKind.INTERFACE,
        TypeKind.INPUT_OBJECT,
    )

    def check(self, schema: Schema) -> list[Finding]:
        findings = []
        for type_def in schema.types.values():
            if type_def.kind not in self.KINDS or type_def.name.startswith("__"):
                continue
            for field_def in type_def.fields:
                if not field_def.name.endswith("Id"):
                    continue
                suggested = field_def.name.removesuffix("Id") + "ID"
                findings.append(
                    self.finding(
                        schema,
                        f"Field `{type_def.name}.{field_def.name}` should end with "
                        f"'ID' not 'Id'. Consider renaming to `{suggested}`.",
                        field_def.location,
                    )
                )
        return findings


def new_rule() -> Rule:
    return FieldIdSuffix()
