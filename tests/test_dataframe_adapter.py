import os
import sys
import unittest
import warnings

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import polars as pl

from pathnet.adapters.dataframe_adapter import (
    edges_to_dataframe,
    from_edge_dataframe,
    paths_to_dataframe,
)
from pathnet.core.graph import Graph


class TestDataFrameAdapter(unittest.TestCase):

    def setUp(self):
        G = Graph()
        G.add_edges([(1, 2), (2, 3), (2, 1), (1, 3)])
        self.G = G

    def test_edges_view(self):
        df = self.G.edges_view()
        self.assertIsInstance(df, pl.DataFrame)
        self.assertEqual(df.columns, ["source", "target", "directed"])
        self.assertEqual(df["source"].to_list(), [1, 2, 1])
        self.assertEqual(df["target"].to_list(), [2, 3, 3])
        self.assertEqual(df["directed"].to_list(), [False, False, False])
        self.assertTrue(edges_to_dataframe(self.G).equals(df))

    def test_edges_view_empty(self):
        self.assertEqual(Graph().edges_view().height, 0)

    def test_paths_to_dataframe(self):
        df = paths_to_dataframe(self.G.find_all_paths(1, 3))
        self.assertEqual(df.columns, ["path_id", "length", "vertices"])
        self.assertEqual(df["path_id"].to_list(), [0, 1])
        self.assertEqual(df["length"].to_list(), [2, 1])
        self.assertEqual(df["vertices"].to_list(), [[1, 2, 3], [1, 3]])

    def test_paths_to_dataframe_trivial_and_empty(self):
        df = paths_to_dataframe(self.G.find_all_paths(1, 1))
        self.assertEqual(df["length"].to_list(), [0])
        self.assertEqual(paths_to_dataframe([]).height, 0)

    def test_from_edge_dataframe(self):
        df = pl.DataFrame({"src": ["a", "b", "c"], "dst": ["b", "c", "a"]})
        G = from_edge_dataframe(df, directed=True, source="src", target="dst")
        self.assertTrue(G.directed)
        self.assertEqual(G.edges(), [("a", "b"), ("b", "c"), ("c", "a")])
        self.assertEqual(G.find_all_paths("a", "c"), [["a", "b", "c"]])
        self.assertEqual(G.find_all_paths("c", "b"), [["c", "a", "b"]])

    def test_from_edge_dataframe_roundtrip(self):
        G2 = from_edge_dataframe(self.G.edges_view())
        self.assertEqual(G2, self.G)

    def test_from_edge_dataframe_missing_column(self):
        df = pl.DataFrame({"source": [1]})
        with self.assertRaises(KeyError):
            from_edge_dataframe(df)

    def test_from_edge_dataframe_null_endpoint(self):
        df = pl.DataFrame({"source": [1, None], "target": [2, 3]})
        with self.assertRaises(ValueError):
            from_edge_dataframe(df)


class TestEdgeTableRoundTrip(unittest.TestCase):

    def test_tuple_vertices_read_back_as_tuples(self):
        G = Graph()
        G.add_edges([((0, 0), (0, 1)), ((0, 1), (1, 1)), ((0, 0), (1, 0)), ((1, 0), (1, 1))])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            df = G.edges_view()
        G2 = from_edge_dataframe(df)
        self.assertEqual(G2, G)
        self.assertEqual(G2.edges(), G.edges())
        self.assertEqual(
            G2.find_all_paths((0, 0), (1, 1)),
            [[(0, 0), (0, 1), (1, 1)], [(0, 0), (1, 0), (1, 1)]],
        )

    def test_mixed_vertex_types_warn(self):
        G = Graph()
        G.add_edges([(1, "a"), ("a", 2)])
        with self.assertWarns(UserWarning):
            df = edges_to_dataframe(G)
        # polars stored both columns as strings; the warning is the only signal
        G2 = from_edge_dataframe(df)
        self.assertEqual(G2.edges(), [("1", "a"), ("a", "2")])
        self.assertNotEqual(G2, G)

    def test_uniform_vertex_types_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            df = edges_to_dataframe(self._ints())
        self.assertEqual(from_edge_dataframe(df), self._ints())

    def test_bulk_import_is_logged_with_edges(self):
        df = pl.DataFrame({"source": ["a", "b"], "target": ["b", "c"]})
        G = from_edge_dataframe(df)
        h = G.history()
        self.assertEqual([e["op"] for e in h], ["add_edges"])
        self.assertEqual(h[0]["pairs"], [["a", "b"], ["b", "c"]])
        self.assertEqual(h[0]["result"], 2)

    @staticmethod
    def _ints():
        G = Graph()
        G.add_edges([(1, 2), (2, 3)])
        return G


if __name__ == "__main__":
    unittest.main()
