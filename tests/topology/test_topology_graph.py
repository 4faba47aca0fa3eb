import unittest

from tsncf.topology.base import Bridge, Edge, EndSystem
from tsncf.topology.builder import TopologyBuilder
from tsncf.topology.path import GraphPath
from tsncf.utils.exceptions import InvalidTopologyError, NodeNotFoundError


class TestTopologyGraph(unittest.TestCase):
    """拓扑构建与路径查找测试"""

    def setUp(self):
        # ES1 - SW1 - SW2 - ES2, plus a detour SW1 - SW3 - SW2
        builder = TopologyBuilder("test_topo")
        for name in ("ES1", "ES2"):
            builder.add_end_system(name)
        for name in ("SW1", "SW2", "SW3"):
            builder.add_bridge(name)
        builder.add_link("ES1", "SW1")
        builder.add_link("SW1", "SW2", capacity_mbps=1000.0)
        builder.add_link("SW2", "ES2")
        builder.add_link("SW1", "SW3")
        builder.add_link("SW3", "SW2")
        self.topology = builder.build()

    def test_topology_statistics(self):
        stats = self.topology.get_topology_statistics()
        self.assertEqual(stats["num_nodes"], 5)
        self.assertEqual(stats["num_edges"], 10)
        self.assertTrue(stats["is_connected"])

    def test_duplex_link_creates_two_directed_edges(self):
        forward = self.topology.get_edge("SW1", "SW2")
        backward = self.topology.get_edge("SW2", "SW1")
        self.assertIsNot(forward, backward)
        self.assertEqual(forward.capacity_mbps, 1000.0)
        self.assertIs(forward.source, backward.target)
        self.assertIsNone(self.topology.get_edge("ES1", "ES2"))

    def test_node_types(self):
        self.assertIsInstance(self.topology.get_node("ES1"), EndSystem)
        self.assertEqual(self.topology.get_node("SW1").node_type, "Bridge")
        with self.assertRaises(NodeNotFoundError):
            self.topology.get_node("missing")

    def test_path_from_nodes(self):
        path = self.topology.path_from_nodes(["ES1", "SW1", "SW2", "ES2"])
        self.assertEqual(len(path), 3)
        self.assertEqual([n.name for n in path.nodes], ["ES1", "SW1", "SW2", "ES2"])
        self.assertTrue(path.is_contiguous())
        self.assertEqual(repr(path), "ES1 -> SW1 -> SW2 -> ES2")
        with self.assertRaises(InvalidTopologyError):
            self.topology.path_from_nodes(["ES1", "SW2"])

    def test_k_shortest_paths_ordered_by_hops(self):
        paths = self.topology.k_shortest_paths("ES1", "ES2", 5)
        self.assertEqual(len(paths), 2)
        self.assertEqual(len(paths[0]), 3)
        self.assertEqual(len(paths[1]), 4)
        self.assertEqual(self.topology.shortest_path("ES1", "ES2"), paths[0])

    def test_k_limits_number_of_paths(self):
        self.assertEqual(len(self.topology.k_shortest_paths("ES1", "ES2", 1)), 1)

    def test_no_path_raises(self):
        builder = TopologyBuilder("islands")
        builder.add_end_system("A")
        builder.add_end_system("B")
        with self.assertRaises(InvalidTopologyError):
            builder.build().k_shortest_paths("A", "B", 3)

    def test_paths_compare_by_edges(self):
        a = self.topology.path_from_nodes(["ES1", "SW1", "SW2"])
        b = self.topology.path_from_nodes(["ES1", "SW1", "SW2"])
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))


class TestTopologyBuilder(unittest.TestCase):
    """构建器校验测试"""

    def test_duplicate_node_rejected(self):
        builder = TopologyBuilder("dup")
        builder.add_end_system("ES1")
        with self.assertRaises(InvalidTopologyError):
            builder.add_bridge("ES1")

    def test_unknown_endpoint_rejected(self):
        builder = TopologyBuilder("dangling")
        builder.add_end_system("ES1")
        with self.assertRaises(InvalidTopologyError):
            builder.add_link("ES1", "SW9")

    def test_simplex_link(self):
        builder = TopologyBuilder("simplex")
        builder.add_end_system("ES1")
        builder.add_bridge("SW1")
        (edge,) = builder.add_link("ES1", "SW1", capacity_mbps=10.0, duplex=False)
        topology = builder.build()
        self.assertIs(topology.get_edge("ES1", "SW1"), edge)
        self.assertIsNone(topology.get_edge("SW1", "ES1"))

    def test_edge_capacity_must_be_positive(self):
        with self.assertRaises(ValueError):
            Edge(EndSystem("A"), Bridge("B"), capacity_mbps=0)

    def test_empty_path_rejected(self):
        with self.assertRaises(ValueError):
            GraphPath([])


if __name__ == "__main__":
    unittest.main()
