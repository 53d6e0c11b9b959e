from __future__ import annotations

from pathlib import Path

import pytest

from helpers.library import write_sample_library, write_unit
from xsh.core.exceptions import AmbiguousUnitError, UnitNotFoundError
from xsh.core.resolver import Resolver
from xsh.core.selectors import Selector


def test_exact_lpue_resolves_to_one_path(xsh_home: Path, lib_x: Path) -> None:
    paths = Resolver(xsh_home).resolve("x/string/upper")
    assert paths == [lib_x / "functions" / "string" / "upper.py"]


def test_default_library_shorthand(xsh_home: Path, lib_x: Path) -> None:
    assert Resolver(xsh_home).resolve("/string/upper") == [lib_x / "functions" / "string" / "upper.py"]


def test_package_lpur_returns_sorted_union(xsh_home: Path, lib_x: Path) -> None:
    paths = Resolver(xsh_home).resolve("x/string/")
    base = lib_x / "functions" / "string"
    assert paths == [base / "greeting.py", base / "lower.py", base / "upper.py"]
    assert paths == sorted(paths)


def test_init_files_are_never_units(xsh_home: Path) -> None:
    names = [p.name for p in Resolver(xsh_home).resolve("x")]
    assert "__init__.py" not in names
    assert "__runtime__.py" not in names


def test_script_units_are_found_with_kind(xsh_home: Path, lib_x: Path) -> None:
    units = Resolver(xsh_home).units("x/net/")
    assert [(u.lpue, u.kind) for u in units] == [("x/net/echo", "scripts"), ("x/net/fail", "scripts")]
    assert units[0].path == lib_x / "scripts" / "net" / "echo.sh"
    assert units[0].lpuc == "x-net-echo"


def test_nested_packages_are_searched(xsh_home: Path, lib_x: Path) -> None:
    write_unit(lib_x, "functions/string/case/title.py", "def title(s):\n    return s.title()\n")
    lpues = [u.lpue for u in Resolver(xsh_home).units("x/string/")]
    assert "x/string/case/title" in lpues


def test_glob_in_library_and_package_segments(xsh_home: Path) -> None:
    write_sample_library(xsh_home / "lib" / "xy")
    lpues = [u.lpue for u in Resolver(xsh_home).units("x*/*/upper")]
    assert lpues == ["x/string/upper", "xy/string/upper"]


def test_no_match_is_empty_not_error(xsh_home: Path) -> None:
    assert Resolver(xsh_home).resolve("x/nope/nothing") == []
    assert Resolver(xsh_home).resolve("nolib/string/upper") == []


def test_unit_requires_exactly_one_match(xsh_home: Path) -> None:
    resolver = Resolver(xsh_home)
    assert resolver.unit("x/string/upper").util == "upper"
    with pytest.raises(UnitNotFoundError):
        resolver.unit("x/string/missing")
    with pytest.raises(AmbiguousUnitError):
        resolver.unit("x/string")


def test_dev_selector_prefers_dev_link(xsh_home: Path, tmp_path: Path) -> None:
    work = write_sample_library(tmp_path / "work" / "x")
    write_unit(work, "functions/string/reverse.py", "def reverse(s):\n    return s[::-1]\n")
    dev_root = xsh_home / "lib-dev"
    dev_root.mkdir()
    (dev_root / "x").symlink_to(work, target_is_directory=True)

    normal = Resolver(xsh_home)
    assert normal.resolve("x/string/reverse") == []

    dev = Resolver(xsh_home, dev=Selector("x/string"))
    upper = dev.unit("x/string/upper")
    assert upper.path == dev_root / "x" / "functions" / "string" / "upper.py"
    assert dev.unit("x/string/reverse").lpue == "x/string/reverse"
    # Outside the selector the normal checkout still wins.
    assert dev.unit("x/demo/ok").path == xsh_home / "lib" / "x" / "functions" / "demo" / "ok.py"


def test_dev_selector_without_link_falls_back(xsh_home: Path, lib_x: Path) -> None:
    resolver = Resolver(xsh_home, dev=Selector("1"))
    assert resolver.unit("x/string/upper").path == lib_x / "functions" / "string" / "upper.py"


def test_dev_home_env_overrides_location(xsh_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    work = write_sample_library(tmp_path / "work" / "x")
    dev_home = tmp_path / "devhome"
    dev_home.mkdir()
    (dev_home / "x").symlink_to(work, target_is_directory=True)
    monkeypatch.setenv("XSH_DEV_HOME", str(dev_home))

    unit = Resolver(xsh_home, dev=Selector("1")).unit("x/string/upper")
    assert unit.path == dev_home.resolve() / "x" / "functions" / "string" / "upper.py"
