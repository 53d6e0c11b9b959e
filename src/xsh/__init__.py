"""
xsh - namespaced loading and invocation of reusable utilities.

xsh resolves Lib/Package/Util Expressions (LPUE) to units inside git-hosted
libraries and loads them into the running process as callables.
"""

__version__ = "0.1.0"


def xsh(*argv: str) -> int:
    """Run one xsh command in-process.

    Safe to call from inside a unit: nested calls share the outer invocation
    and never tear it down.
    """
    from xsh.cli._dispatcher import main

    return main(list(argv))


__all__ = ["__version__", "xsh"]
