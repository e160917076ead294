from .structure import DEFAULT_DIRECTED, EdgeType
from .graph import Graph

__all__ = ["structure", "DEFAULT_DIRECTED", "EdgeType", "Graph"]
