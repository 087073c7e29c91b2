"""Reachability analysis over the schema type graph.

Computes the closure of types reachable from the schema entry points: the
root operation types, the built-in scalars and the argument types of every
directive definition. A type is reached through field types, field argument
types, implemented interfaces and union members.
"""

from collections import deque

from ..core import BUILTIN_SCALARS, Schema, TypeDefinition, TypeKind
from ..core.type_refs import named_type


class ReachabilityAnalyzer:
    """Worklist-based closure of used type names.

    Each type name is expanded at most once, so the analysis is linear in
    the size of the schema.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def entry_points(self) -> list[str]:
        """Names the closure is seeded with, in seeding order."""
        seeds = list(self.schema.root_type_names)
        seeds.extend(sorted(BUILTIN_SCALARS))
        for directive in self.schema.directives.values():
            seeds.extend(named_type(arg.type) for arg in directive.arguments)
        return seeds

    def used_types(self) -> set[str]:
        """Return every type name reachable from the entry points."""
        used: set[str] = set()
        worklist: deque[str] = deque()

        for name in self.entry_points():
            if name not in used:
                used.add(name)
                worklist.append(name)

        while worklist:
            type_def = self.schema.get_type(worklist.popleft())
            if type_def is None:
                continue
            for referenced in self._references(type_def):
                if referenced not in used:
                    used.add(referenced)
                    worklist.append(referenced)

        return used

    def unused_types(self) -> list[TypeDefinition]:
        """Return declared types outside the closure, in declaration order."""
        used = self.used_types()
        return [
            type_def
            for type_def in self.schema.types.values()
            if type_def.name not in used
            and type_def.name not in BUILTIN_SCALARS
            and not type_def.name.startswith("__")
        ]

    def _references(self, type_def: TypeDefinition) -> list[str]:
        references: list[str] = []
        for field_def in type_def.fields:
            references.append(named_type(field_def.type))
            references.extend(named_type(arg.type) for arg in field_def.arguments)
        references.extend(type_def.interfaces)
        if type_def.kind is TypeKind.UNION:
            references.extend(type_def.members)
        return references
