from enum import Enum

# Graphs are undirected unless the caller asks otherwise.
DEFAULT_DIRECTED = False


class EdgeType(str, Enum):
    """Edge type (DIRECTED, UNDIRECTED).

    Attributes:
        DIRECTED: Every edge is an ordered (source, target) pair
        UNDIRECTED: Every edge is recorded in both directions
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @classmethod
    def from_directed(cls, directed: bool) -> "EdgeType":
        return cls.DIRECTED if directed else cls.UNDIRECTED
