"""
algo_sdk.cli
============

Command-line interface for the SDK, exposed as the `algo-sdk` console script.
Typer is only imported when the CLI is actually used.

    $ algo-sdk --help
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List, Optional

from ..version import __version__

__all__: List[str] = [
    "__version__",
    "main",
    "run",
    "app",
]

_SUBMODULE = "algo_sdk.cli.main"
_EXPOSE = ("app",)


def _load() -> Any:
    return import_module(_SUBMODULE)


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in _EXPOSE:
        return getattr(_load(), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return its exit code."""
    return int(_load().main(argv))


def run(argv: Optional[list[str]] = None) -> int:
    """Alias for :func:`main`."""
    return main(argv)
