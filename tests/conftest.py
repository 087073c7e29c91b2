"""Shared fixtures for the gqlint test suite."""

from collections.abc import Callable

import pytest

from gqlint.core import FileSchemaLoader, Schema


@pytest.fixture
def load_schema() -> Callable[..., Schema]:
    """Build a schema model from SDL text without SDL validation.

    Skipping validation lets tests use directives such as ``@key`` without
    declaring them first.
    """
    loader = FileSchemaLoader(validate=False)

    def _load(sdl: str, source_name: str = "schema.graphql") -> Schema:
        return loader.load_string(sdl, source_name)

    return _load
