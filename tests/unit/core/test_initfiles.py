from __future__ import annotations

from pathlib import Path

from helpers.library import write_unit
from xsh.core.initfiles import (
    RUNTIME,
    STATIC,
    clear_static_cache,
    get_init_files,
    run_init_chain,
    static_init_files_run,
)


def test_chain_is_nearest_first(lib_x: Path) -> None:
    functions = lib_x / "functions"
    chain = get_init_files(functions / "string" / "upper.py", functions)
    assert [(i.path, i.mode) for i in chain] == [
        (functions / "string" / "__init__.py", STATIC),
        (functions / "__runtime__.py", RUNTIME),
        (functions / "__init__.py", STATIC),
    ]


def test_chain_stops_at_functions_root(lib_x: Path) -> None:
    write_unit(lib_x, "__init__.py", "OUTSIDE = True\n")
    functions = lib_x / "functions"
    chain = get_init_files(functions / "demo" / "ok.py", functions)
    assert lib_x / "__init__.py" not in [i.path for i in chain]


def test_custom_init_names(lib_x: Path) -> None:
    functions = lib_x / "functions"
    write_unit(lib_x, "functions/demo/_setup.py", "X = 1\n")
    chain = get_init_files(functions / "demo" / "ok.py", functions, init_name="_setup.py", runtime_name="_none.py")
    assert [i.path.name for i in chain] == ["_setup.py"]


def test_run_chain_merges_farthest_first(lib_x: Path) -> None:
    functions = lib_x / "functions"
    chain = get_init_files(functions / "string" / "upper.py", functions)
    namespace = run_init_chain(chain, functions)
    assert namespace["GREETING"] == "hi"
    assert namespace["SEP"] == " "


def test_static_files_recorded_once(lib_x: Path) -> None:
    functions = lib_x / "functions"
    chain = get_init_files(functions / "string" / "upper.py", functions)
    run_init_chain(chain, functions)
    run_init_chain(chain, functions)
    assert static_init_files_run() == sorted(
        [(functions / "__init__.py").resolve(), (functions / "string" / "__init__.py").resolve()]
    )
    clear_static_cache()
    assert static_init_files_run() == []
