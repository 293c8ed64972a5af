# typeclosure:decision_protocol_module
"""Ancestor closure over external types, layered on a pre-built core registry.

External types arrive with their directly declared supertypes only (as found
by a class scanner). Core types are already indexed by the core registry with
their full ancestor sets. ``TypeClosureRegistry`` joins the two: a core type
is answered by the core registry when it can, everything else is walked
upward through the direct-supertype index, handing off to the core registry
wherever the walk reaches a core type that is not declared locally. Results
are restricted to core types: they say which core behaviours a type inherits.

Walk results are memoized per type in a ``ClosureCache`` shared by all
threads. The lookup/store pair is deliberately not atomic: the walk stores
intermediate results while it runs, so it cannot run inside an atomic
"compute if absent" on the same map. Racing threads may compute the same
entry twice and store equal values.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import AbstractSet, TypeAlias

from typeclosure.analysis.closure_cache import ClosureCache, ClosureCacheStats
from typeclosure.analysis.namespace import (
    DEFAULT_CORE_NAMESPACE,
    CoreNamespace,
    TypeId,
)
from typeclosure.analysis.registry_contract import EMPTY_TYPE_REGISTRY, TypeRegistry
from typeclosure.analysis.supertype_index import DirectSupertypeIndex
from typeclosure.invariants import never

ClosureEventCallback: TypeAlias = Callable[[str, TypeId], None]
_WalkFrame: TypeAlias = tuple[TypeId, Iterator[TypeId], set[TypeId]]

CORE_HIT_EVENT = "core:hit"
CORE_UNKNOWN_EVENT = "core:unknown"
CACHE_HIT_EVENT = "cache:hit"
CACHE_MISS_EVENT = "cache:miss"
CACHE_STORE_EVENT = "cache:store"

_NO_TYPES: frozenset[TypeId] = frozenset()


class TypeClosureRegistry:
    def __init__(
        self,
        direct_supertypes: DirectSupertypeIndex | Mapping[TypeId, Iterable[TypeId]],
        core_registry: TypeRegistry = EMPTY_TYPE_REGISTRY,
        *,
        namespace: CoreNamespace = DEFAULT_CORE_NAMESPACE,
        on_event: ClosureEventCallback | None = None,
    ) -> None:
        if on_event is not None and not callable(on_event):
            never("on_event is not callable", on_event=on_event)
        if isinstance(direct_supertypes, DirectSupertypeIndex):
            self._index = direct_supertypes
        else:
            self._index = DirectSupertypeIndex(direct_supertypes)
        self._core_registry = core_registry
        self._namespace = namespace
        self._cache = ClosureCache()
        self._on_event = on_event

    @property
    def namespace(self) -> CoreNamespace:
        return self._namespace

    @property
    def supertype_index(self) -> DirectSupertypeIndex:
        return self._index

    @property
    def core_registry(self) -> TypeRegistry:
        return self._core_registry

    @property
    def cache(self) -> ClosureCache:
        return self._cache

    def cache_stats(self) -> ClosureCacheStats:
        return self._cache.stats()

    def get_ancestors(self, type_id: TypeId) -> AbstractSet[TypeId]:
        """Return the core-namespace ancestors of ``type_id``.

        A core type the core registry knows is answered verbatim from the
        core registry. Anything else goes through the memoized walk; an
        external type never appears in its own result.
        """
        if self._namespace.contains(type_id):
            core_ancestors = self._core_registry.get_ancestors(type_id)
            if core_ancestors:
                self._emit(CORE_HIT_EVENT, type_id)
                return core_ancestors
        return self._resolve_closure(type_id)

    def is_empty(self) -> bool:
        """True when neither the local index nor the core registry hold data.

        Upstream uses this to skip work; it says nothing about whether a
        particular query would come back empty.
        """
        return self._index.is_empty() and self._core_registry.is_empty()

    def _resolve_closure(self, type_id: TypeId) -> frozenset[TypeId]:
        cached = self._cache.get(type_id)
        if cached is not None:
            self._emit(CACHE_HIT_EVENT, type_id)
            return cached
        self._emit(CACHE_MISS_EVENT, type_id)
        return _ClosureWalk(self).run(type_id)

    def _direct_supertypes(self, type_id: TypeId) -> AbstractSet[TypeId]:
        declared = self._index.get(type_id)
        if declared is not None:
            return declared
        if not self._namespace.contains(type_id):
            return _NO_TYPES
        # A core type the scanner did not see: continue from the core
        # registry's flattened ancestors instead of stopping here.
        core_ancestors = self._core_registry.get_ancestors(type_id)
        if not core_ancestors:
            self._emit(CORE_UNKNOWN_EVENT, type_id)
        return core_ancestors

    def _emit(self, event: str, type_id: TypeId) -> None:
        if self._on_event is not None:
            self._on_event(event, type_id)


class _ClosureWalk:
    """One depth-first walk from an uncached type.

    The walk tracks strongly connected components so that a cycle in the
    supertype graph terminates, and so that only complete results are
    written to the cache. A type whose walk reached a type still on the
    stack holds a partial result until its component's root finishes; every
    member of a component then gets the union of the members' results.

    Frames live on an explicit stack, so hierarchy depth is not bounded by
    the interpreter's recursion limit.
    """

    __slots__ = (
        "_registry",
        "_order",
        "_low",
        "_stack",
        "_on_stack",
        "_partial",
        "_finished",
    )

    def __init__(self, registry: TypeClosureRegistry) -> None:
        self._registry = registry
        self._order: dict[TypeId, int] = {}
        self._low: dict[TypeId, int] = {}
        self._stack: list[TypeId] = []
        self._on_stack: set[TypeId] = set()
        self._partial: dict[TypeId, set[TypeId]] = {}
        self._finished: dict[TypeId, frozenset[TypeId]] = {}

    def run(self, start: TypeId) -> frozenset[TypeId]:
        registry = self._registry
        frames: list[_WalkFrame] = [self._enter(start)]
        result: AbstractSet[TypeId] = _NO_TYPES
        while frames:
            type_id, supertypes, collected = frames[-1]
            descended = False
            for supertype in supertypes:
                if supertype in self._on_stack:
                    self._low[type_id] = min(self._low[type_id], self._order[supertype])
                    continue
                finished = self._finished.get(supertype)
                if finished is not None:
                    collected |= finished
                    continue
                cached = registry.cache.get(supertype)
                if cached is not None:
                    registry._emit(CACHE_HIT_EVENT, supertype)
                    collected |= cached
                    continue
                registry._emit(CACHE_MISS_EVENT, supertype)
                frames.append(self._enter(supertype))
                descended = True
                break
            if descended:
                continue

            frames.pop()
            if self._low[type_id] != self._order[type_id]:
                self._partial[type_id] = collected
                value: AbstractSet[TypeId] = collected
            else:
                value = self._close_component(type_id, collected)
            if frames:
                parent, _, parent_collected = frames[-1]
                parent_collected |= value
                self._low[parent] = min(self._low[parent], self._low[type_id])
            else:
                result = value
        # The starting type is always the root of its own component.
        return frozenset(result)

    def _enter(self, type_id: TypeId) -> _WalkFrame:
        registry = self._registry
        position = len(self._order)
        self._order[type_id] = position
        self._low[type_id] = position
        self._stack.append(type_id)
        self._on_stack.add(type_id)
        collected: set[TypeId] = set()
        if registry.namespace.contains(type_id):
            collected.add(type_id)
        return type_id, iter(registry._direct_supertypes(type_id)), collected

    def _close_component(
        self,
        root: TypeId,
        collected: set[TypeId],
    ) -> frozenset[TypeId]:
        members: list[TypeId] = []
        while True:
            member = self._stack.pop()
            self._on_stack.discard(member)
            members.append(member)
            if member == root:
                break
            collected |= self._partial.pop(member)
        result = frozenset(collected)
        registry = self._registry
        for member in members:
            self._finished[member] = result
            registry.cache.store(member, result)
            registry._emit(CACHE_STORE_EVENT, member)
        return result
