"""Validation of ``@key`` entity identity directives.

Each ``@key`` usage on an object type names the fields that together
identify an instance of the type. The ``fields`` argument is a small
GraphQL selection (see ``gqlint.validation.selection``); its top-level
fields must exist on the type and must be non-list scalars.
"""

from typing import ClassVar

from ...core import DirectiveUsage, Schema, TypeDefinition, TypeKind, TypeRef
from ...core.type_refs import contains_list, named_type, type_to_string
from ..engine import Rule
from ..errors import Finding
from ..selection import SelectionSyntaxError, has_top_level_comma, top_level_field_names


class KeyDirectivesLint(Rule):
    """Validates ``@key`` field sets against their owning object type."""

    name: ClassVar[str] = "key-directive-lint"
    description: ClassVar[str] = (
        "Validates that all fields specified in @key directive exist in the object "
        "type, are primitive/scalar types only, and are space-separated (not "
        "comma-separated)"
    )

    DIRECTIVE: ClassVar[str] = "key"
    FIELDS_ARGUMENT: ClassVar[str] = "fields"
    RESOLVABLE_ARGUMENT: ClassVar[str] = "resolvable"

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []

        for type_def in schema.types.values():
            if type_def.kind is not TypeKind.OBJECT or type_def.name.startswith("__"):
                continue

            usages = type_def.directives_named(self.DIRECTIVE)
            if not usages:
                continue

            for usage in usages:
                findings.extend(self._validate_usage(schema, type_def, usage))
            findings.extend(self._validate_resolvable(schema, type_def, usages))

        return findings

    def _validate_usage(
        self, schema: Schema, type_def: TypeDefinition, usage: DirectiveUsage
    ) -> list[Finding]:
        fields_arg = usage.argument(self.FIELDS_ARGUMENT)
        if (
            fields_arg is None
            or not fields_arg.value.is_string
            or not fields_arg.value.value.strip()
        ):
            location = fields_arg.location if fields_arg else usage.location
            return [
                self.finding(
                    schema,
                    f"Missing or invalid 'fields' argument in @{self.DIRECTIVE} "
                    f"directive for object '{type_def.name}'",
                    location,
                )
            ]

        field_set: str = fields_arg.value.value
        if has_top_level_comma(field_set):
            return [
                self.finding(
                    schema,
                    f"@{self.DIRECTIVE} directive fields must be space-separated, not "
                    f"comma-separated. Found comma in fields: '{field_set}' for object "
                    f"'{type_def.name}'",
                    fields_arg.location,
                )
            ]

        try:
            field_names = top_level_field_names(field_set, type_def.name)
        except SelectionSyntaxError as e:
            return [
                self.finding(
                    schema,
                    f"Failed to parse fields in @{self.DIRECTIVE} directive for object "
                    f"'{type_def.name}': {e}",
                    fields_arg.location,
                )
            ]

        findings = []
        for field_name in field_names:
            field_def = type_def.get_field(field_name)
            if field_def is None:
                findings.append(
                    self.finding(
                        schema,
                        f"Field '{field_name}' specified in @{self.DIRECTIVE} directive "
                        f"does not exist in object type '{type_def.name}'",
                        usage.location,
                    )
                )
            elif contains_list(field_def.type) or not schema.is_scalar(
                named_type(field_def.type)
            ):
                findings.append(
                    self.finding(
                        schema,
                        f"Field '{field_name}' specified in @{self.DIRECTIVE} directive "
                        "must be a primitive or scalar type, but is of type "
                        f"'{self._display_type(field_def.type)}'",
                        usage.location,
                    )
                )
        return findings

    def _validate_resolvable(
        self, schema: Schema, type_def: TypeDefinition, usages: list[DirectiveUsage]
    ) -> list[Finding]:
        non_resolvable = [usage for usage in usages if self._is_non_resolvable(usage)]
        if not non_resolvable:
            return []

        if len(usages) > 1:
            return [
                self.finding(
                    schema,
                    f"Object type '{type_def.name}' has a @{self.DIRECTIVE} directive with "
                    f"'resolvable: false' but also has {len(usages)} total "
                    f"@{self.DIRECTIVE} directives. A non-resolvable key must be the only "
                    f"@{self.DIRECTIVE} directive on the type.",
                    type_def.location,
                )
            ]

        usage = non_resolvable[0]
        fields_arg = usage.argument(self.FIELDS_ARGUMENT)
        if (
            fields_arg is None
            or not fields_arg.value.is_string
            or has_top_level_comma(fields_arg.value.value)
        ):
            return []
        try:
            selected = set(
                top_level_field_names(fields_arg.value.value, type_def.name)
            )
        except SelectionSyntaxError:
            # Already reported by the per-usage check.
            return []

        missing = sorted(set(type_def.field_names) - selected)
        if not missing:
            return []

        return [
            self.finding(
                schema,
                f"Object type '{type_def.name}' has a single @{self.DIRECTIVE} directive "
                "with 'resolvable: false' but the key does not include all object "
                f"fields. Missing fields in @{self.DIRECTIVE}: [{', '.join(missing)}]. "
                "All fields must be included when using 'resolvable: false'.",
                usage.location,
            )
        ]

    def _is_non_resolvable(self, usage: DirectiveUsage) -> bool:
        argument = usage.argument(self.RESOLVABLE_ARGUMENT)
        return (
            argument is not None
            and argument.value.is_boolean
            and argument.value.value is False
        )

    @staticmethod
    def _display_type(ref: TypeRef) -> str:
        if contains_list(ref):
            return type_to_string(ref)
        return named_type(ref)
