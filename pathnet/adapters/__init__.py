# networkx is optional; import pathnet.adapters.networkx explicitly when needed
from .dataframe_adapter import edges_to_dataframe, from_edge_dataframe, paths_to_dataframe

__all__ = ["edges_to_dataframe", "paths_to_dataframe", "from_edge_dataframe"]
