"""Dead type detection."""

from typing import ClassVar

from ...core import Schema
from ..engine import Rule
from ..errors import Finding
from ..reachability import ReachabilityAnalyzer


class NoUnusedTypes(Rule):
    """Flags declared types that are unreachable from the schema entry points."""

    name: ClassVar[str] = "no-unused-types"
    description: ClassVar[str] = (
        "All declared types must be reachable from a root operation type or a "
        "directive definition"
    )

    def check(self, schema: Schema) -> list[Finding]:
        return [
            self.finding(
                schema,
                f"Type `{type_def.name}` is declared but never used. Consider removing "
                "it or using it in the schema.",
                type_def.location,
            )
            for type_def in ReachabilityAnalyzer(schema).unused_types()
        ]
