from collections.abc import Hashable, Iterable
from typing import Any

import numpy as np


def check_vertex(v, name: str = "vertex"):
    """Validate a vertex identifier and return it unchanged.

    Parameters
    ----------
    v : Hashable
        Candidate vertex identifier.
    name : str, optional
        Argument name used in error messages.

    Returns
    -------
    Hashable
        ``v`` itself.

    Raises
    ------
    ValueError
        If ``v`` is None.
    TypeError
        If ``v`` is not hashable.
    """
    if v is None:
        raise ValueError(f"{name} must not be None")
    # isinstance(Hashable) misses tuples holding lists, so try hash() too
    if not isinstance(v, Hashable):
        raise TypeError(f"{name} must be hashable, got {type(v).__name__}")
    try:
        hash(v)
    except TypeError as e:
        raise TypeError(f"{name} must be hashable, got {v!r}") from e
    return v


def check_edge_pair(pair) -> tuple:
    """Unpack one ``(a, b)`` item of a bulk edge insert."""
    if isinstance(pair, (str, bytes)) or not isinstance(pair, Iterable):
        raise ValueError(f"Edge must be a (source, target) pair, got {pair!r}")
    items = tuple(pair)
    if len(items) != 2:
        raise ValueError(f"Edge must have exactly 2 endpoints, got {len(items)}: {pair!r}")
    a, b = items
    return check_vertex(a, "source"), check_vertex(b, "target")


def check_max_steps(max_steps) -> int:
    # bool is an int subclass; True would silently mean 1
    if isinstance(max_steps, bool):
        raise TypeError("max_steps must be an int, not bool")
    if isinstance(max_steps, np.integer):
        max_steps = int(max_steps)
    if not isinstance(max_steps, int) or max_steps < 1:
        raise ValueError(f"max_steps must be a positive int, got {max_steps!r}")
    return max_steps


def jsonify(obj: Any):
    """Recursively convert an object into a compact JSON-safe structure.

    Sets become sorted lists, tuples become lists and dict keys become
    strings. NumPy scalars are unwrapped; anything heavier is reduced to a
    ``<<TypeName>>`` tag.
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, (set, frozenset)):
        return sorted((jsonify(v) for v in obj), key=str)
    if isinstance(obj, (list, tuple)):
        return [jsonify(v) for v in obj]
    if isinstance(obj, dict):
        return {str(k): jsonify(v) for k, v in obj.items()}
    return f"<<{type(obj).__name__}>>"
