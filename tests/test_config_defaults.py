from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from typeclosure import config
from typeclosure.analysis.namespace import DEFAULT_CORE_PREFIX
from typeclosure.exceptions import NeverThrown


# typeclosure:evidence E:decision_surface/direct::config.py::typeclosure.config.load_config::config_path,root
def test_closure_defaults_reads_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "typeclosure.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [closure]
            core_prefix = "com/acme/core/"
            jobs = 8
            dotted_names = "yes"
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    defaults = config.closure_defaults(root=tmp_path, config_path=config_path)

    assert config.core_namespace_from_config(defaults).prefix == "com/acme/core/"
    assert config.closure_jobs(defaults) == 8
    assert config.closure_dotted_names(defaults) is True


def test_load_config_default_path(tmp_path: Path) -> None:
    cfg = tmp_path / config.DEFAULT_CONFIG_NAME
    cfg.write_text("[closure]\njobs = 2\n", encoding="utf-8")

    data = config.load_config(root=tmp_path, config_path=None)

    assert data["closure"]["jobs"] == 2


def test_load_toml_missing_and_invalid(tmp_path: Path) -> None:
    assert config._load_toml(tmp_path / "missing.toml") == {}

    invalid = tmp_path / "invalid.toml"
    invalid.write_text("not = [toml", encoding="utf-8")
    assert config._load_toml(invalid) == {}

    assert config._load_toml(tmp_path) == {}


def test_section_helpers_fall_back_to_defaults() -> None:
    assert config.core_namespace_from_config(None).prefix == DEFAULT_CORE_PREFIX
    assert config.core_namespace_from_config({}).prefix == DEFAULT_CORE_PREFIX
    assert config.closure_jobs(None) == config.DEFAULT_JOBS
    assert config.closure_jobs({}) == config.DEFAULT_JOBS
    assert config.closure_dotted_names(None) is False
    assert config.closure_dotted_names({"dotted_names": 1}) is True
    assert config.closure_dotted_names({"dotted_names": "off"}) is False


@pytest.mark.parametrize("jobs", [0, -1, True, "4"])
def test_invalid_jobs_are_rejected(jobs: object) -> None:
    with pytest.raises(NeverThrown):
        config.closure_jobs({"jobs": jobs})  # type: ignore[dict-item]


def test_invalid_core_prefix_is_rejected() -> None:
    with pytest.raises(NeverThrown):
        config.core_namespace_from_config({"core_prefix": 7})


def test_merge_payload_prefers_explicit_values() -> None:
    defaults = {"core_prefix": "com/acme/", "jobs": 2, "dotted_names": True}
    payload = {"core_prefix": None, "jobs": 6, "dotted_names": False}

    merged = config.merge_payload(payload, defaults)

    assert merged == {"core_prefix": "com/acme/", "jobs": 6, "dotted_names": False}
