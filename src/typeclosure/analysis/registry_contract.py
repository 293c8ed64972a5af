from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import AbstractSet, Protocol, runtime_checkable

from typeclosure.analysis.namespace import TypeId
from typeclosure.invariants import require_type_id

_NO_TYPES: frozenset[TypeId] = frozenset()


@runtime_checkable
class TypeRegistry(Protocol):
    """Answers ancestor queries for a universe of types.

    ``get_ancestors`` never fails and never returns ``None``; a type the
    registry knows nothing about yields an empty set.
    """

    def get_ancestors(self, type_id: TypeId) -> AbstractSet[TypeId]: ...

    def is_empty(self) -> bool: ...


class StaticTypeRegistry:
    """Registry over an already-flattened ``type -> ancestors`` table.

    Stands in for the core system's pre-built index: the table is copied once
    and only read afterwards.
    """

    def __init__(self, ancestors: Mapping[TypeId, Iterable[TypeId]]) -> None:
        table: dict[TypeId, frozenset[TypeId]] = {}
        for type_id, values in ancestors.items():
            key = require_type_id(type_id)
            table[key] = frozenset(
                require_type_id(value, field="ancestor") for value in values
            )
        self._ancestors = MappingProxyType(table)

    def get_ancestors(self, type_id: TypeId) -> frozenset[TypeId]:
        return self._ancestors.get(type_id, _NO_TYPES)

    def is_empty(self) -> bool:
        return not self._ancestors

    def __len__(self) -> int:
        return len(self._ancestors)


EMPTY_TYPE_REGISTRY = StaticTypeRegistry({})
