"""pathnet: graph store plus exhaustive simple-path search.

Everything below is resolved on first attribute access, so ``import pathnet``
stays cheap and the optional networkx adapter is only imported when used.
"""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

_SUBMODULES = ("core", "algorithms", "adapters", "utils")

# module -> public names it contributes to the top level
_EXPORTS: dict[str, tuple[str, ...]] = {
    "pathnet.core.graph": ("Graph",),
    "pathnet.core.structure": ("EdgeType", "DEFAULT_DIRECTED"),
    "pathnet.algorithms.paths": (
        "find_all_paths",
        "iter_all_paths",
        "find_paths_with_max_steps",
        "count_paths",
    ),
    "pathnet.adapters.dataframe_adapter": (
        "edges_to_dataframe",
        "paths_to_dataframe",
        "from_edge_dataframe",
    ),
    # needs networkx installed
    "pathnet.adapters.networkx": ("to_nx", "from_nx"),
}

_lazy_symbols = {name: mod for mod, names in _EXPORTS.items() for name in names}

__all__ = sorted(set(_SUBMODULES) | set(_lazy_symbols))


def __getattr__(name: str) -> Any:  # PEP 562
    if name in _SUBMODULES:
        return import_module(f"pathnet.{name}")
    if name in _lazy_symbols:
        return getattr(import_module(_lazy_symbols[name]), name)
    raise AttributeError(f"module 'pathnet' has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))


try:
    __version__ = _pkg_version("pathnet")
except PackageNotFoundError:
    __version__ = "0.0.0"
