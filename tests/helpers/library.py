"""Sample library trees for tests.

``write_sample_library`` lays out a library with function units, script units
and init files::

    functions/__init__.py          GREETING, bumps XSH_TEST_ROOT_INIT
    functions/__runtime__.py       bumps XSH_TEST_RUNTIME_COUNT
    functions/string/__init__.py   SEP, GREETING override
    functions/string/{upper,lower,greeting}.py
    functions/demo/{ok,bad,boom,quit,greet,nested,counter}.py
    functions/broken/mismatch.py   declares the wrong name
    scripts/net/{echo,fail}.sh
"""
from __future__ import annotations

import subprocess
from pathlib import Path
from textwrap import dedent
from typing import Dict

FILES: Dict[str, str] = {
    "functions/__init__.py": """
        import os

        GREETING = "hello"
        os.environ["XSH_TEST_ROOT_INIT"] = str(int(os.environ.get("XSH_TEST_ROOT_INIT", "0")) + 1)
    """,
    "functions/__runtime__.py": """
        import os

        os.environ["XSH_TEST_RUNTIME_COUNT"] = str(int(os.environ.get("XSH_TEST_RUNTIME_COUNT", "0")) + 1)
    """,
    "functions/string/__init__.py": """
        SEP = " "
        GREETING = "hi"
    """,
    "functions/string/upper.py": """
        #? Usage:
        #?   upper STRING...
        #?
        #? Print STRING in upper case.
        def upper(*words):
            return SEP.join(words).upper()
    """,
    "functions/string/lower.py": """
        #? Print STRING in lower case.
        def lower(*words):
            print(SEP.join(words).lower())
    """,
    "functions/string/greeting.py": """
        def greeting():
            return GREETING
    """,
    "functions/demo/ok.py": """
        #? Print ok.
        def ok():
            print("ok")
    """,
    "functions/demo/bad.py": """
        def bad():
            print("bad")
            return 2
    """,
    "functions/demo/boom.py": """
        def boom():
            raise RuntimeError("kaboom")
    """,
    "functions/demo/quit.py": """
        def quit(code="3"):
            raise SystemExit(int(code))
    """,
    "functions/demo/greet.py": """
        #? Greet NAME using the library greeting.
        def greet(name="world"):
            return f"{GREETING}, {name}"
    """,
    "functions/demo/nested.py": """
        def nested(*lpues):
            from xsh import xsh

            return xsh("calls", *lpues)
    """,
    "functions/demo/counter.py": """
        import os


        def counter():
            return os.environ.get("XSH_TEST_RUNTIME_COUNT")
    """,
    "functions/broken/mismatch.py": """
        def something_else():
            return 0
    """,
    "scripts/net/echo.sh": """
        #!/bin/sh
        #? Usage: echo ARGS...
        #? Print ARGS.
        echo "$@"
    """,
    "scripts/net/fail.sh": """
        #!/bin/sh
        exit 4
    """,
}


def write_sample_library(root: Path) -> Path:
    """Write the sample library into ``root`` and return it."""
    for rel, body in FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(body).lstrip("\n"), encoding="utf-8")
        if rel.startswith("scripts/"):
            path.chmod(0o755)
    return root


def write_unit(root: Path, rel: str, body: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(body).lstrip("\n"), encoding="utf-8")
    return path


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def init_git_library(path: Path, *, tag: str = "v1.0.0") -> Path:
    """Turn ``path`` (holding a library tree) into a git repo with one tagged commit."""
    git(path, "init", "-q", "-b", "main")
    git(path, "config", "--local", "user.email", "test@example.com")
    git(path, "config", "--local", "user.name", "Test")
    git(path, "config", "--local", "commit.gpgsign", "false")
    git(path, "add", "-A")
    git(path, "commit", "-q", "-m", "initial")
    if tag:
        git(path, "tag", tag)
    return path
