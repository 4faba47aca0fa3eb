from typing import Dict

from tsncf.topology.base import Node, EndSystem, Bridge, Edge
from tsncf.topology.graph import TopologyGraph
from tsncf.utils.exceptions import InvalidTopologyError


class TopologyBuilder:
    """拓扑构建器"""

    def __init__(self, topology_id: str):
        self._topology_graph = TopologyGraph(topology_id)
        self._nodes: Dict[str, Node] = {}

    def add_node(self, node: Node) -> Node:
        """添加节点到构建器"""
        if node.name in self._nodes:
            raise InvalidTopologyError(f"Node with name {node.name} already exists.")
        self._nodes[node.name] = node
        self._topology_graph.add_node(node)
        return node

    def add_end_system(self, name: str) -> EndSystem:
        return self.add_node(EndSystem(name))

    def add_bridge(self, name: str) -> Bridge:
        return self.add_node(Bridge(name))

    def add_link(self, name_a: str, name_b: str, capacity_mbps: float = 100.0, duplex: bool = True):
        """添加链路到构建器"""
        # Ensure endpoints exist before adding link
        if name_a not in self._nodes or name_b not in self._nodes:
            raise InvalidTopologyError(f"Endpoints for link {name_a} - {name_b} not found in builder.")
        node_a, node_b = self._nodes[name_a], self._nodes[name_b]
        if duplex:
            return self._topology_graph.add_link(node_a, node_b, capacity_mbps)
        return (self._topology_graph.add_edge(Edge(node_a, node_b, capacity_mbps)),)

    def build(self) -> TopologyGraph:
        """构建并返回拓扑图"""
        return self._topology_graph

    def get_node(self, name: str) -> Node:
        """获取已添加的节点"""
        return self._nodes.get(name)
