"""Helpers for unwrapping and rendering type references.

Type references are a small recursive structure (``NamedType``, ``ListType``
and ``NonNullType``). Every helper here is a pure function over that
structure and terminates after at most as many steps as the nesting depth.
"""

from .schema import ListType, NamedType, NonNullType, TypeRef


def named_type(ref: TypeRef) -> str:
    """Return the name of the leaf type, removing every list and non-null wrapper.

    Example:
        ``[[User!]]!`` -> ``User``
    """
    if isinstance(ref, NamedType):
        return ref.name
    return named_type(ref.of_type)


def unwrap_non_null(ref: TypeRef) -> TypeRef:
    """Remove a non-null wrapper from the outside of a reference, if any."""
    if isinstance(ref, NonNullType):
        return ref.of_type
    return ref


def is_non_null(ref: TypeRef) -> bool:
    return isinstance(ref, NonNullType)


def is_list(ref: TypeRef) -> bool:
    """Check if a reference is a list, ignoring an outer non-null wrapper."""
    return isinstance(unwrap_non_null(ref), ListType)


def contains_list(ref: TypeRef) -> bool:
    """Check if a list wrapper appears at any level of a reference."""
    if isinstance(ref, NamedType):
        return False
    if isinstance(ref, ListType):
        return True
    return contains_list(ref.of_type)


def list_element(ref: TypeRef) -> TypeRef | None:
    """Unwrap one list level.

    Returns the element reference of the outermost list (looking through an
    outer non-null wrapper), or ``None`` if the reference is not a list.
    """
    inner = unwrap_non_null(ref)
    if isinstance(inner, ListType):
        return inner.of_type
    return None


def is_nested_list(ref: TypeRef) -> bool:
    """Check if a reference is a list whose element is itself a list."""
    element = list_element(ref)
    return element is not None and is_list(element)


def list_depth(ref: TypeRef) -> int:
    """Count the list wrappers of a reference."""
    if isinstance(ref, NamedType):
        return 0
    if isinstance(ref, ListType):
        return 1 + list_depth(ref.of_type)
    return list_depth(ref.of_type)


def type_to_string(ref: TypeRef) -> str:
    """Render a reference in SDL notation, e.g. ``[UserEdge!]!``."""
    if isinstance(ref, NamedType):
        return ref.name
    if isinstance(ref, ListType):
        return f"[{type_to_string(ref.of_type)}]"
    return f"{type_to_string(ref.of_type)}!"


def parse_type_ref(text: str) -> TypeRef:
    """Build a reference from its SDL notation.

    Used to declare expected shapes compactly, e.g. ``parse_type_ref("Boolean!")``.

    Raises:
        ValueError: If the text is not a well-formed type reference
    """
    text = text.strip()
    if not text:
        raise ValueError("Empty type reference")
    if text.endswith("!"):
        inner = parse_type_ref(text[:-1])
        if isinstance(inner, NonNullType):
            raise ValueError(f"Doubled non-null wrapper in '{text}'")
        return NonNullType(inner)
    if text.startswith("[") and text.endswith("]"):
        return ListType(parse_type_ref(text[1:-1]))
    if not text.replace("_", "a").isalnum() or text[0].isdigit():
        raise ValueError(f"Invalid type reference '{text}'")
    return NamedType(text)
