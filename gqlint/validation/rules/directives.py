"""Directive usage checks."""

from typing import ClassVar

from ...core import DirectiveUsage, Schema, SourceLocation, TypeKind
from ..engine import Rule
from ..errors import Finding


class DirectivesCommonLint(Rule):
    """Flags object types that combine ``@key`` with ``@shareable``."""

    name: ClassVar[str] = "common-directives-lint"
    description: ClassVar[str] = (
        "Common directive validation rules including conflict detection between "
        "@key and @shareable on object types"
    )

    CONFLICTING: ClassVar[tuple[str, str]] = ("key", "shareable")

    def check(self, schema: Schema) -> list[Finding]:
        first, second = self.CONFLICTING
        return [
            self.finding(
                schema,
                f"The object {type_def.name} cannot have both @{first} and @{second} "
                "directives. These directives are not supported together.",
                type_def.location,
            )
            for type_def in schema.types_of_kind(TypeKind.OBJECT)
            if type_def.has_directive(first) and type_def.has_directive(second)
        ]


class UnsupportedDirectives(Rule):
    """Flags directive definitions outside the supported set."""

    name: ClassVar[str] = "unsupported-directives"
    description: ClassVar[str] = "No unsupported directives should be used in the schemas"

    SUPPORTED: ClassVar[frozenset[str]] = frozenset(
        {
            "link",
            "key",
            "shareable",
            "external",
            "error",
            "throws",
            "responseUnion",
            "include",
            "skip",
            "deprecated",
            "specifiedBy",
            "defer",
            "oneOf",
        }
    )

    def check(self, schema: Schema) -> list[Finding]:
        return [
            self.finding(
                schema,
                f"The schema uses unsupported directive @{directive.name}. This "
                "directive is not supported in this schema.",
                directive.location,
            )
            for directive in schema.directives.values()
            if directive.name not in self.SUPPORTED
        ]


class RequireDeprecationReason(Rule):
    """``@deprecated`` fields and enum values must say what to use instead."""

    name: ClassVar[str] = "require-deprecation-reason"
    description: ClassVar[str] = (
        "Require deprecation reasons for deprecated fields and enum values"
    )

    DIRECTIVE: ClassVar[str] = "deprecated"
    MIN_REASON_LENGTH: ClassVar[int] = 10
    GENERIC_REASONS: ClassVar[tuple[str, ...]] = (
        "deprecated",
        "no longer supported",
        "legacy",
        "old",
        "unused",
        "removed",
        "obsolete",
        "outdated",
        "use something else",
        "will be removed",
    )
    GUIDANCE: ClassVar[tuple[str, ...]] = (
        "use ",
        "instead",
        "replace",
        "migrate",
        "switch to",
    )

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in schema.types.values():
            if type_def.name.startswith("__"):
                continue
            if type_def.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
                for field_def in type_def.fields:
                    findings.extend(
                        self._check_member(
                            schema,
                            f"field `{type_def.name}.{field_def.name}`",
                            field_def.directives,
                            field_def.location,
                        )
                    )
            elif type_def.kind is TypeKind.ENUM:
                for value in type_def.values:
                    findings.extend(
                        self._check_member(
                            schema,
                            f"enum value `{type_def.name}.{value.name}`",
                            value.directives,
                            value.location,
                        )
                    )
        return findings

    def _check_member(
        self,
        schema: Schema,
        subject: str,
        directives: tuple[DirectiveUsage, ...],
        location: SourceLocation,
    ) -> list[Finding]:
        usage = next((d for d in directives if d.name == self.DIRECTIVE), None)
        if usage is None:
            return []

        reason = self._reason(usage)
        if not reason:
            return [
                self.finding(
                    schema,
                    f"Deprecated {subject} must include a deprecation reason explaining "
                    "why it's deprecated and what to use instead.",
                    location,
                )
            ]
        if self.is_generic_reason(reason):
            return [
                self.finding(
                    schema,
                    f"Deprecated {subject} has a generic deprecation reason '{reason}'. "
                    "Provide specific guidance on what to use instead.",
                    location,
                )
            ]
        return []

    def _reason(self, usage: DirectiveUsage) -> str:
        argument = usage.argument("reason")
        if argument is None or not argument.value.is_string:
            return ""
        return argument.value.value.strip()

    def is_generic_reason(self, reason: str) -> bool:
        """Check if a reason is too short, too vague or gives no alternative."""
        lowered = reason.strip().lower()
        if len(lowered) < self.MIN_REASON_LENGTH:
            return True
        if any(generic in lowered for generic in self.GENERIC_REASONS):
            return True
        return not any(hint in lowered for hint in self.GUIDANCE)
