from __future__ import annotations

from pathlib import Path

import pytest

from xsh.core.config import ConfigManager
from xsh.core.config.domains import LibrariesConfig, LoggingConfig, TimeoutsConfig, UnitsConfig
from xsh.core.exceptions import ConfigError, EnvironmentMisconfiguredError
from xsh.core.paths import resolve_dev_home, resolve_xsh_home


def test_bundled_defaults(xsh_home: Path) -> None:
    libs = LibrariesConfig(xsh_home=xsh_home)
    assert libs.default_library == "x"
    assert libs.lib_root == xsh_home / "lib"
    assert libs.dev_root == xsh_home / "lib-dev"
    assert libs.bin_root == xsh_home / "bin"
    assert libs.default_repo_url("aws") == "https://github.com/xsh-lib/aws.git"

    units = UnitsConfig(xsh_home=xsh_home)
    assert units.function_suffix == ".py"
    assert units.script_suffixes == (".sh", ".py")
    assert units.doc_marker == "#?"
    assert units.init_file == "__init__.py"
    assert units.runtime_init_file == "__runtime__.py"

    assert TimeoutsConfig(xsh_home=xsh_home).git_operations_seconds is None
    assert LoggingConfig(xsh_home=xsh_home).log_path is None


def test_user_config_overrides_defaults(xsh_home: Path) -> None:
    (xsh_home / "config").mkdir()
    (xsh_home / "config" / "libraries.yaml").write_text(
        "libraries:\n  default: y\n  git_base_url: https://git.example.com/libs/\n",
        encoding="utf-8",
    )
    libs = LibrariesConfig(xsh_home=xsh_home)
    assert libs.default_library == "y"
    assert libs.default_repo_url("aws") == "https://git.example.com/libs/aws.git"
    assert libs.lib_root == xsh_home / "lib"


def test_user_config_appends_script_suffixes(xsh_home: Path) -> None:
    (xsh_home / "config").mkdir()
    (xsh_home / "config" / "units.yaml").write_text(
        "units:\n  script_suffixes: ['+', '.bash']\n",
        encoding="utf-8",
    )
    assert UnitsConfig(xsh_home=xsh_home).script_suffixes == (".sh", ".py", ".bash")


def test_env_override(xsh_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XSH_libraries__default", "y")
    monkeypatch.setenv("XSH_timeouts__git_operations_seconds", "30")
    assert LibrariesConfig(xsh_home=xsh_home).default_library == "y"
    assert TimeoutsConfig(xsh_home=xsh_home).git_operations_seconds == 30.0


def test_plain_xsh_variables_are_not_overrides(xsh_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XSH_DEBUG", "1")
    cfg = ConfigManager(xsh_home).load_config()
    assert "debug" not in cfg


def test_invalid_config_raises_config_error(xsh_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XSH_libraries__default", "a/b")
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(xsh_home).load_config()
    assert "libraries.default" in str(excinfo.value)


def test_non_mapping_user_config(xsh_home: Path) -> None:
    (xsh_home / "config").mkdir()
    (xsh_home / "config" / "bad.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(xsh_home).load_config()


def test_log_file_is_relative_to_home(xsh_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XSH_logging__file", "log/xsh.log")
    assert LoggingConfig(xsh_home=xsh_home).log_path == xsh_home / "log" / "xsh.log"


@pytest.mark.fast
def test_resolve_home_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(EnvironmentMisconfiguredError):
        resolve_xsh_home({})
    with pytest.raises(EnvironmentMisconfiguredError):
        resolve_xsh_home({"XSH_HOME": str(tmp_path / "missing")})
    assert resolve_xsh_home({"XSH_HOME": str(tmp_path)}) == tmp_path.resolve()


@pytest.mark.fast
def test_resolve_dev_home(tmp_path: Path) -> None:
    assert resolve_dev_home(tmp_path, "lib-dev", {}) == tmp_path / "lib-dev"
    assert resolve_dev_home(tmp_path, "lib-dev", {"XSH_DEV_HOME": str(tmp_path / "d")}) == (tmp_path / "d").resolve()


def test_malformed_user_yaml(xsh_home: Path) -> None:
    (xsh_home / "config").mkdir()
    (xsh_home / "config" / "broken.yaml").write_text("libraries: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(xsh_home).load_config()
