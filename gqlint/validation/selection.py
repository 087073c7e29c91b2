"""Parser for the field-set selection strings embedded in ``@key`` directives.

A field set is GraphQL selection text, e.g. ``"id owner { id }"``. It is
parsed by wrapping it in a fragment on the owning type and handing the
document to graphql-core, so comments, aliases and arguments follow the
GraphQL grammar. Commas are insignificant inside nested selections but are
not allowed between top-level fields.
"""

from dataclasses import dataclass

from graphql import GraphQLSyntaxError, parse
from graphql.language import FieldNode, SelectionSetNode

DEFAULT_TYPE_CONDITION = "_Entity"


class SelectionSyntaxError(ValueError):
    """Raised when a field-set string cannot be parsed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class FieldSelection:
    """A selected field and its (possibly empty) nested selection."""

    name: str
    selections: tuple["FieldSelection", ...] = ()


def has_top_level_comma(field_set: str) -> bool:
    """Check for a comma outside every ``{ }`` and ``[ ]`` pair.

    Example:
        ``"a, b"`` -> True, ``"a { b, c }"`` -> False
    """
    brace_level = 0
    bracket_level = 0
    for char in field_set.strip('"'):
        if char == "{":
            brace_level += 1
        elif char == "}":
            brace_level -= 1
        elif char == "[":
            bracket_level += 1
        elif char == "]":
            bracket_level -= 1
        elif char == "," and brace_level == 0 and bracket_level == 0:
            return True
    return False


def _field_selections(selection_set: SelectionSetNode | None) -> tuple[FieldSelection, ...]:
    if selection_set is None:
        return ()
    # Inline fragments and spreads carry no field of their own
    return tuple(
        FieldSelection(node.name.value, _field_selections(node.selection_set))
        for node in selection_set.selections
        if isinstance(node, FieldNode)
    )


def parse_field_set(
    field_set: str, type_name: str = DEFAULT_TYPE_CONDITION
) -> list[FieldSelection]:
    """Parse a field-set string into its top-level field selections.

    Args:
        field_set: The raw ``fields`` argument, e.g. ``"id organization { id }"``
        type_name: Type condition of the wrapping fragment

    Returns:
        Top-level field selections in source order

    Raises:
        SelectionSyntaxError: If graphql-core rejects the wrapped fragment
    """
    try:
        # Newlines keep a trailing comment from swallowing the closing brace
        document = parse(
            f"fragment KeyFields on {type_name} {{\n{field_set}\n}}", no_location=True
        )
    except GraphQLSyntaxError as e:
        raise SelectionSyntaxError(e.message) from e

    # The wrapper always starts with the fragment definition
    fragment = document.definitions[0]
    return list(_field_selections(fragment.selection_set))


def top_level_field_names(
    field_set: str, type_name: str = DEFAULT_TYPE_CONDITION
) -> list[str]:
    """Return the top-level field names of a field-set string."""
    return [selection.name for selection in parse_field_set(field_set, type_name)]
