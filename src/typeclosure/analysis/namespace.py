from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from typeclosure.invariants import never

TypeId: TypeAlias = str

TYPE_ID_SEPARATOR = "/"
DEFAULT_CORE_PREFIX = "org/gradle/"


def internal_type_name(name: str) -> TypeId:
    # a.b.C -> a/b/C; nested classes keep their '$' marker.
    return name.replace(".", TYPE_ID_SEPARATOR)


@dataclass(frozen=True)
class CoreNamespace:
    """Decides which type identifiers belong to the pre-indexed core system.

    Membership is a plain prefix test on the internal (``/``-separated) name.
    One instance is built per registry and never reconfigured afterwards.
    """

    prefix: str = DEFAULT_CORE_PREFIX

    def __post_init__(self) -> None:
        if type(self.prefix) is not str or not self.prefix.strip():
            never("invalid core namespace prefix", prefix=self.prefix)
        object.__setattr__(self, "prefix", internal_type_name(self.prefix.strip()))

    def contains(self, type_id: TypeId) -> bool:
        return type_id.startswith(self.prefix)

    def __contains__(self, type_id: object) -> bool:
        return type(type_id) is str and self.contains(type_id)


DEFAULT_CORE_NAMESPACE = CoreNamespace()
