"""xsh core library package.

Name codec, library registry, resolver, loader and invocation lifecycle.
"""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
