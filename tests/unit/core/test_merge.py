from __future__ import annotations

import pytest

from xsh.core.utils.merge import deep_merge, merge_arrays

pytestmark = pytest.mark.fast


def test_deep_merge_is_recursive_and_pure() -> None:
    base = {"libraries": {"default": "x", "dir": "lib"}, "units": {"doc_marker": "#?"}}
    override = {"libraries": {"default": "y"}}
    merged = deep_merge(base, override)
    assert merged == {"libraries": {"default": "y", "dir": "lib"}, "units": {"doc_marker": "#?"}}
    assert base["libraries"]["default"] == "x"


def test_scalar_replaces_mapping() -> None:
    assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}


@pytest.mark.parametrize(
    "base, override, expected",
    [
        ([".sh"], [".bash"], [".bash"]),
        ([".sh"], ["+", ".bash"], [".sh", ".bash"]),
        ([".sh"], ["=", ".bash"], [".bash"]),
        ([".sh"], [], []),
    ],
)
def test_merge_arrays(base, override, expected) -> None:
    assert merge_arrays(base, override) == expected
