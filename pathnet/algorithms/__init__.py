from .paths import count_paths, find_all_paths, find_paths_with_max_steps, iter_all_paths

__all__ = ["paths", "find_all_paths", "iter_all_paths", "find_paths_with_max_steps", "count_paths"]
