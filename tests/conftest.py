import os
import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'xsh' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.library import init_git_library, write_sample_library  # noqa: E402

# Variables the sample library's init files write straight into os.environ.
_TEST_COUNTERS = ("XSH_TEST_ROOT_INIT", "XSH_TEST_RUNTIME_COUNT")


def reset_xsh_state() -> None:
    """Reset every process-wide cache and table in xsh."""
    from xsh.core.callables import CALLABLES
    from xsh.core.config.cache import clear_all_caches
    from xsh.core.initfiles import clear_static_cache
    from xsh.core.log import reset_logging_for_tests
    from xsh.data import clear_caches

    clear_all_caches()
    clear_caches()
    clear_static_cache()
    CALLABLES.clear()
    reset_logging_for_tests()


@pytest.fixture(autouse=True)
def _isolate_xsh(monkeypatch: pytest.MonkeyPatch):
    """Fresh caches, empty callable table and no xsh selectors per test."""
    for key in list(os.environ):
        if key.startswith("XSH_"):
            monkeypatch.delenv(key, raising=False)
    reset_xsh_state()
    yield
    reset_xsh_state()
    for key in _TEST_COUNTERS:
        os.environ.pop(key, None)


@pytest.fixture
def xsh_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated XSH_HOME holding the sample library ``x``."""
    home = tmp_path / "home"
    write_sample_library(home / "lib" / "x")
    monkeypatch.setenv("XSH_HOME", str(home))
    return home.resolve()


@pytest.fixture
def lib_x(xsh_home: Path) -> Path:
    return xsh_home / "lib" / "x"


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A local git repository holding the sample library, tagged v1.0.0."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = write_sample_library(tmp_path / "remote" / "x")
    return init_git_library(repo)
