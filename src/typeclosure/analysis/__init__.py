"""Type hierarchy closure engine."""

from .closure_cache import ClosureCache, ClosureCacheStats
from .closure_registry import TypeClosureRegistry
from .namespace import (
    DEFAULT_CORE_NAMESPACE,
    DEFAULT_CORE_PREFIX,
    CoreNamespace,
    TypeId,
    internal_type_name,
)
from .registry_contract import EMPTY_TYPE_REGISTRY, StaticTypeRegistry, TypeRegistry
from .supertype_index import DirectSupertypeIndex

__all__ = [
    "ClosureCache",
    "ClosureCacheStats",
    "CoreNamespace",
    "DEFAULT_CORE_NAMESPACE",
    "DEFAULT_CORE_PREFIX",
    "DirectSupertypeIndex",
    "EMPTY_TYPE_REGISTRY",
    "StaticTypeRegistry",
    "TypeClosureRegistry",
    "TypeId",
    "TypeRegistry",
    "internal_type_name",
]
