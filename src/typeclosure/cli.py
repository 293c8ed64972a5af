from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, Sequence
import concurrent.futures
import threading

import typer
from pydantic import ValidationError

from typeclosure.analysis.closure_registry import (
    CORE_UNKNOWN_EVENT,
    ClosureEventCallback,
    TypeClosureRegistry,
)
from typeclosure.analysis.namespace import TypeId, internal_type_name
from typeclosure.config import (
    closure_defaults,
    closure_dotted_names,
    closure_jobs,
    core_namespace_from_config,
    merge_payload,
)
from typeclosure.exceptions import NeverThrown
from typeclosure.ingest.hierarchy_loader import load_core_registry, load_direct_supertypes
from typeclosure.runtime.json_io import dump_json_pretty
from typeclosure.schema import AncestorsResponseDTO, ClosureStatsDTO, StatusResponseDTO

app = typer.Typer(add_completion=False)

_INPUT_ERROR_EXIT = 2


@dataclass
class _EventCollector:
    verbose: bool = False
    echo_fn: Callable[..., None] = typer.echo
    unknown_core_types: set[TypeId] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __call__(self, event: str, type_id: TypeId) -> None:
        if event == CORE_UNKNOWN_EVENT:
            with self._lock:
                self.unknown_core_types.add(type_id)
        if self.verbose:
            self.echo_fn(f"{event} {type_id}", err=True)


def _fail_input(message: str) -> NoReturn:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=_INPUT_ERROR_EXIT)


def _build_registry(
    *,
    supertypes: Path,
    core: Optional[Path],
    settings: dict[str, object],
    on_event: ClosureEventCallback | None = None,
) -> TypeClosureRegistry:
    dotted = closure_dotted_names(settings)
    try:
        namespace = core_namespace_from_config(settings)
        direct_supertypes = load_direct_supertypes(supertypes, dotted=dotted)
        core_registry = load_core_registry(core, dotted=dotted)
        return TypeClosureRegistry(
            direct_supertypes,
            core_registry,
            namespace=namespace,
            on_event=on_event,
        )
    except FileNotFoundError as exc:
        _fail_input(f"Hierarchy payload not found: {exc.filename}")
    except ValidationError as exc:
        _fail_input(f"Invalid hierarchy payload: {exc}")
    except NeverThrown as exc:
        _fail_input(f"Invalid input: {exc}")


def _resolve_settings(
    *,
    config: Optional[Path],
    core_prefix: Optional[str],
    jobs: Optional[int],
    dotted: Optional[bool],
) -> dict[str, object]:
    defaults = closure_defaults(config_path=config)
    return merge_payload(
        {"core_prefix": core_prefix, "jobs": jobs, "dotted_names": dotted},
        defaults,
    )


def query_ancestors(
    registry: TypeClosureRegistry,
    type_ids: Sequence[TypeId],
    *,
    jobs: int,
) -> dict[TypeId, list[TypeId]]:
    """Answer every query against one shared registry from a worker pool."""
    unique = list(dict.fromkeys(type_ids))
    results: dict[TypeId, list[TypeId]] = {}
    if not unique:
        return results
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max(1, min(jobs, len(unique)))
    ) as executor:
        futures = {
            executor.submit(registry.get_ancestors, type_id): type_id
            for type_id in unique
        }
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = sorted(future.result())
    return {type_id: results[type_id] for type_id in unique}


def _emit_ancestors(response: AncestorsResponseDTO, *, json_output: bool) -> None:
    if json_output:
        typer.echo(dump_json_pretty(response.model_dump()))
        return
    for type_id, ancestors in response.results.items():
        rendered = ", ".join(ancestors) if ancestors else "(none)"
        typer.echo(f"{type_id}: {rendered}")
    for type_id in response.unknown_core_types:
        typer.secho(
            f"warning: no core data for {type_id}",
            err=True,
            fg=typer.colors.YELLOW,
        )


@app.command("ancestors")
def ancestors(
    types: List[str] = typer.Argument(..., help="Type identifiers to resolve."),
    supertypes: Path = typer.Option(
        ...,
        "--supertypes",
        help="JSON document with the scanned direct supertypes.",
    ),
    core: Optional[Path] = typer.Option(
        None,
        "--core",
        help="JSON document with the pre-built core ancestor index.",
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    core_prefix: Optional[str] = typer.Option(None, "--core-prefix"),
    jobs: Optional[int] = typer.Option(None, "--jobs", min=1),
    dotted: Optional[bool] = typer.Option(
        None,
        "--dotted/--internal",
        help="Accept a.b.C names instead of a/b/C.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON."),
    verbose: bool = typer.Option(False, "--verbose", help="Echo closure events to stderr."),
) -> None:
    """Resolve the core-namespace ancestors of each TYPE."""
    settings = _resolve_settings(
        config=config,
        core_prefix=core_prefix,
        jobs=jobs,
        dotted=dotted,
    )
    collector = _EventCollector(verbose=verbose)
    registry = _build_registry(
        supertypes=supertypes,
        core=core,
        settings=settings,
        on_event=collector,
    )
    try:
        worker_count = closure_jobs(settings)
    except NeverThrown as exc:
        _fail_input(f"Invalid input: {exc}")
    type_ids = [
        internal_type_name(type_id) if closure_dotted_names(settings) else type_id
        for type_id in types
    ]
    results = query_ancestors(registry, type_ids, jobs=worker_count)
    stats = registry.cache_stats()
    response = AncestorsResponseDTO(
        core_prefix=registry.namespace.prefix,
        results=results,
        stats=ClosureStatsDTO(
            hits=stats.hits,
            misses=stats.misses,
            stores=stats.stores,
            size=stats.size,
        ),
        unknown_core_types=sorted(collector.unknown_core_types),
    )
    _emit_ancestors(response, json_output=json_output)


@app.command("status")
def status(
    supertypes: Path = typer.Option(..., "--supertypes"),
    core: Optional[Path] = typer.Option(None, "--core"),
    config: Optional[Path] = typer.Option(None, "--config"),
    core_prefix: Optional[str] = typer.Option(None, "--core-prefix"),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON."),
) -> None:
    """Report whether the combined hierarchy data holds anything."""
    settings = _resolve_settings(
        config=config,
        core_prefix=core_prefix,
        jobs=None,
        dotted=None,
    )
    registry = _build_registry(supertypes=supertypes, core=core, settings=settings)
    response = StatusResponseDTO(
        core_prefix=registry.namespace.prefix,
        direct_supertype_entries=len(registry.supertype_index),
        core_registry_empty=registry.core_registry.is_empty(),
        empty=registry.is_empty(),
    )
    if json_output:
        typer.echo(dump_json_pretty(response.model_dump()))
        return
    typer.echo(f"core prefix: {response.core_prefix}")
    typer.echo(f"direct supertype entries: {response.direct_supertype_entries}")
    typer.echo(f"core registry empty: {str(response.core_registry_empty).lower()}")
    typer.echo(f"empty: {str(response.empty).lower()}")
