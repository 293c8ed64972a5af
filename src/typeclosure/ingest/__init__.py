from .hierarchy_loader import (
    load_core_registry,
    load_direct_supertypes,
    parse_core_registry,
    parse_direct_supertypes,
)

__all__ = [
    "load_core_registry",
    "load_direct_supertypes",
    "parse_core_registry",
    "parse_direct_supertypes",
]
