"""Invariant markers for typeclosure."""

from __future__ import annotations

from typing import Callable, NoReturn, TypeVar

from typeclosure.exceptions import NeverThrown

FuncT = TypeVar("FuncT", bound=Callable[..., object])


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The env payload is attached to the raised exception as metadata; it is not
    evaluated.
    """
    raise NeverThrown(reason or "never() marker reached", marker_env=env)


def require_type_id(value: object, *, field: str = "type_id") -> str:
    if type(value) is not str:
        never(f"invalid {field}", **{field: value})
    if not value:
        never(f"empty {field}")
    return value


def boundary_normalization(func: FuncT) -> FuncT:
    """Marker decorator for boundary normalization surfaces."""
    return func
