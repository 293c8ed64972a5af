from __future__ import annotations

import pytest

from typeclosure.analysis.namespace import (
    DEFAULT_CORE_NAMESPACE,
    DEFAULT_CORE_PREFIX,
    CoreNamespace,
    internal_type_name,
)
from typeclosure.exceptions import NeverThrown


def test_default_namespace_matches_core_prefix() -> None:
    assert DEFAULT_CORE_NAMESPACE.prefix == DEFAULT_CORE_PREFIX
    assert DEFAULT_CORE_NAMESPACE.contains("org/gradle/api/Task")
    assert not DEFAULT_CORE_NAMESPACE.contains("org/gradlex/Thing")
    assert not DEFAULT_CORE_NAMESPACE.contains("com/acme/Plugin")


def test_dotted_prefix_is_normalized() -> None:
    namespace = CoreNamespace("com.acme.core.")

    assert namespace.prefix == "com/acme/core/"
    assert "com/acme/core/Base" in namespace
    assert 42 not in namespace


@pytest.mark.parametrize("prefix", ["", "   ", None])
def test_blank_prefix_is_rejected(prefix: object) -> None:
    with pytest.raises(NeverThrown):
        CoreNamespace(prefix)  # type: ignore[arg-type]


def test_internal_type_name_keeps_nested_marker() -> None:
    assert internal_type_name("com.acme.Outer$Inner") == "com/acme/Outer$Inner"
    assert internal_type_name("com/acme/Outer") == "com/acme/Outer"
