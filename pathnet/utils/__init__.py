from .validation import check_edge_pair, check_max_steps, check_vertex, jsonify

__all__ = ["check_vertex", "check_edge_pair", "check_max_steps", "jsonify"]
