"""Type extension placement checks."""

from typing import ClassVar

from ...core import Schema, SourceLocation, TypeDefinition, TypeKind
from ..engine import Rule
from ..errors import Finding

SDL_KEYWORDS = {
    TypeKind.OBJECT: "type",
    TypeKind.INTERFACE: "interface",
    TypeKind.INPUT_OBJECT: "input",
    TypeKind.ENUM: "enum",
    TypeKind.UNION: "union",
    TypeKind.SCALAR: "scalar",
}


class NoSameFileExtend(Rule):
    """Extensions belong in a different file than the type they extend.

    Only object types and interfaces may be extended, and an extended type
    must carry ``@key`` so the extension can be resolved across services.
    """

    name: ClassVar[str] = "no-same-file-extend"
    description: ClassVar[str] = (
        "Types defined in a schema file should not be extended in the same file. "
        "Only object types and interfaces can be extended, and extended types "
        "must have the @key directive."
    )

    EXTENSIBLE: ClassVar[tuple[TypeKind, ...]] = (TypeKind.OBJECT, TypeKind.INTERFACE)
    KEY_DIRECTIVE: ClassVar[str] = "key"

    def check(self, schema: Schema) -> list[Finding]:
        findings: list[Finding] = []
        for type_def in schema.types.values():
            for clause in type_def.extensions:
                findings.extend(self._check_clause(schema, type_def, clause))
        return findings

    def _check_clause(
        self, schema: Schema, type_def: TypeDefinition, clause: SourceLocation
    ) -> list[Finding]:
        if type_def.kind not in self.EXTENSIBLE:
            return [
                self.finding(
                    schema,
                    f"Cannot extend {SDL_KEYWORDS[type_def.kind]} '{type_def.name}' at "
                    f"line {clause.line}. Only object types and interfaces can be "
                    "extended.",
                    clause,
                )
            ]

        findings = []
        if not type_def.is_extension:
            findings.append(
                self.finding(
                    schema,
                    f"Type '{type_def.name}' is defined at line {type_def.location.line} "
                    f"and extended at line {clause.line} in the same file. Types should "
                    "not be extended in the same file where they are defined.",
                    clause,
                )
            )
        if not type_def.has_directive(self.KEY_DIRECTIVE):
            kind = "object" if type_def.kind is TypeKind.OBJECT else "interface"
            findings.append(
                self.finding(
                    schema,
                    f"Extended {kind} type '{type_def.name}' at line {clause.line} must "
                    f"have the @{self.KEY_DIRECTIVE} directive.",
                    clause,
                )
            )
        return findings
