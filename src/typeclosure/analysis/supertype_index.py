from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from typeclosure.analysis.namespace import TypeId
from typeclosure.invariants import require_type_id


class DirectSupertypeIndex:
    """Immutable ``type -> directly declared supertypes`` mapping.

    Built once from caller data; the caller's mapping is copied, so later
    changes to it are not observed. An entry holding an empty set means the
    type is known to declare no supertypes, which is different from having no
    entry at all.
    """

    __slots__ = ("_entries",)

    def __init__(self, direct_supertypes: Mapping[TypeId, Iterable[TypeId]]) -> None:
        entries: dict[TypeId, frozenset[TypeId]] = {}
        for type_id, supertypes in direct_supertypes.items():
            key = require_type_id(type_id)
            entries[key] = frozenset(
                require_type_id(supertype, field="supertype")
                for supertype in supertypes
            )
        self._entries = MappingProxyType(entries)

    def get(self, type_id: TypeId) -> frozenset[TypeId] | None:
        return self._entries.get(type_id)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TypeId]:
        return iter(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def type_ids(self) -> frozenset[TypeId]:
        return frozenset(self._entries)
