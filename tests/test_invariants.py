from __future__ import annotations

import pytest

from typeclosure import NeverRaise, NeverThrown, never
from typeclosure.invariants import require_type_id


def test_never_raises_with_marker_env() -> None:
    with pytest.raises(NeverThrown) as excinfo:
        never("bad input", field="jobs", value=0)

    assert isinstance(excinfo.value, NeverRaise)
    assert str(excinfo.value) == "bad input"
    assert excinfo.value.marker_env == {"field": "jobs", "value": 0}
    assert excinfo.value.marker_payload_dict == {
        "reason": "bad input",
        "env": {"field": "'jobs'", "value": "0"},
    }


def test_never_without_reason_has_default_message() -> None:
    with pytest.raises(NeverThrown, match="never\\(\\) marker reached"):
        never()


def test_require_type_id() -> None:
    assert require_type_id("com/acme/A") == "com/acme/A"
    with pytest.raises(NeverThrown):
        require_type_id("")
    with pytest.raises(NeverThrown):
        require_type_id(b"com/acme/A")
