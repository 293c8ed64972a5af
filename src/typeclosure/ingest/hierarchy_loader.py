# typeclosure:boundary_normalization_module
"""Read scanner output and core-index payloads from JSON documents.

The scanner that produced the direct supertypes and the builder of the core
index live elsewhere; this module only validates and converts their output.
A missing document raises ``FileNotFoundError``. An unreadable or malformed
document validates as an empty object and therefore fails DTO validation with
``pydantic.ValidationError``.
"""

from __future__ import annotations

import errno
from pathlib import Path

from typeclosure.analysis.namespace import TypeId, internal_type_name
from typeclosure.analysis.registry_contract import EMPTY_TYPE_REGISTRY, StaticTypeRegistry
from typeclosure.invariants import boundary_normalization
from typeclosure.runtime.json_io import load_json_object_path
from typeclosure.schema import CoreIndexPayloadDTO, DirectSupertypesPayloadDTO


def _normalize_table(
    table: dict[str, list[str]],
    *,
    dotted: bool,
) -> dict[TypeId, set[TypeId]]:
    normalized: dict[TypeId, set[TypeId]] = {}
    for type_id, values in table.items():
        key = internal_type_name(type_id) if dotted else type_id
        entry = normalized.setdefault(key, set())
        entry.update(internal_type_name(value) if dotted else value for value in values)
    return normalized


@boundary_normalization
def parse_direct_supertypes(
    payload: object,
    *,
    dotted: bool = False,
) -> dict[TypeId, set[TypeId]]:
    dto = DirectSupertypesPayloadDTO.model_validate(payload)
    return _normalize_table(dto.direct_supertypes, dotted=dotted)


@boundary_normalization
def parse_core_registry(
    payload: object,
    *,
    dotted: bool = False,
) -> StaticTypeRegistry:
    dto = CoreIndexPayloadDTO.model_validate(payload)
    return StaticTypeRegistry(_normalize_table(dto.ancestors, dotted=dotted))


def _require_payload_file(path: Path) -> Path:
    if not path.is_file():
        raise FileNotFoundError(errno.ENOENT, "hierarchy payload not found", str(path))
    return path


def load_direct_supertypes(path: Path, *, dotted: bool = False) -> dict[TypeId, set[TypeId]]:
    return parse_direct_supertypes(
        load_json_object_path(_require_payload_file(path)),
        dotted=dotted,
    )


def load_core_registry(path: Path | None, *, dotted: bool = False) -> StaticTypeRegistry:
    if path is None:
        return EMPTY_TYPE_REGISTRY
    return parse_core_registry(
        load_json_object_path(_require_payload_file(path)),
        dotted=dotted,
    )
