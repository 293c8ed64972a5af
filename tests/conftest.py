from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest


@pytest.fixture
def write_hierarchy_payloads(tmp_path: Path):
    def _write(
        *,
        direct_supertypes: dict[str, list[str]],
        ancestors: dict[str, list[str]] | None = None,
    ) -> tuple[Path, Path | None]:
        supertypes_path = tmp_path / "supertypes.json"
        supertypes_path.write_text(
            json.dumps({"direct_supertypes": direct_supertypes}, indent=2, sort_keys=True)
            + "\n",
            encoding="utf-8",
        )
        if ancestors is None:
            return supertypes_path, None
        core_path = tmp_path / "core.json"
        core_path.write_text(
            json.dumps({"ancestors": ancestors}, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return supertypes_path, core_path

    return _write
