from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class DirectSupertypesPayloadDTO(BaseModel):
    direct_supertypes: Dict[str, List[str]]


class CoreIndexPayloadDTO(BaseModel):
    ancestors: Dict[str, List[str]]


class ClosureStatsDTO(BaseModel):
    hits: int = 0
    misses: int = 0
    stores: int = 0
    size: int = 0


class AncestorsResponseDTO(BaseModel):
    core_prefix: str
    results: Dict[str, List[str]]
    stats: ClosureStatsDTO = ClosureStatsDTO()
    unknown_core_types: List[str] = []


class StatusResponseDTO(BaseModel):
    core_prefix: str
    direct_supertype_entries: int
    core_registry_empty: bool
    empty: bool
