from __future__ import annotations

import pytest

from typeclosure.analysis.registry_contract import (
    EMPTY_TYPE_REGISTRY,
    StaticTypeRegistry,
    TypeRegistry,
)
from typeclosure.exceptions import NeverThrown


def test_static_registry_answers_from_table() -> None:
    registry = StaticTypeRegistry({"org/gradle/api/Task": ["org/gradle/api/Task"]})

    assert isinstance(registry, TypeRegistry)
    assert registry.get_ancestors("org/gradle/api/Task") == {"org/gradle/api/Task"}
    assert registry.get_ancestors("org/gradle/api/Other") == frozenset()
    assert registry.is_empty() is False
    assert len(registry) == 1


def test_empty_registry() -> None:
    assert EMPTY_TYPE_REGISTRY.is_empty() is True
    assert EMPTY_TYPE_REGISTRY.get_ancestors("anything") == frozenset()


def test_static_registry_rejects_bad_entries() -> None:
    with pytest.raises(NeverThrown):
        StaticTypeRegistry({"": []})
