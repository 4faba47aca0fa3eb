import itertools
import logging
from typing import Dict, Any, Iterable, List, Optional

import networkx as nx

from tsncf.topology.base import Node, Edge
from tsncf.topology.path import GraphPath
from tsncf.utils.exceptions import InvalidTopologyError, NodeNotFoundError

logger = logging.getLogger(__name__)


class TopologyGraph:
    """基于NetworkX的有向拓扑图表示"""

    def __init__(self, topology_id: str):
        self._topology_id = topology_id
        self._graph = nx.DiGraph()
        self._nodes: Dict[str, Node] = {}

    @property
    def topology_id(self) -> str:
        return self._topology_id

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    def add_node(self, node: Node):
        """添加节点到拓扑图"""
        if node.name in self._nodes:
            raise InvalidTopologyError(f"Node with name {node.name} already exists.")
        self._nodes[node.name] = node
        self._graph.add_node(node.name, obj=node, type=node.node_type)

    def add_edge(self, edge: Edge) -> Edge:
        """添加有向链路"""
        for endpoint in (edge.source, edge.target):
            if self._nodes.get(endpoint.name) is not endpoint:
                raise NodeNotFoundError(endpoint.name, message=f"Endpoint of edge {edge.edge_id} not in topology")
        if self._graph.has_edge(edge.source.name, edge.target.name):
            raise InvalidTopologyError(f"Edge {edge.edge_id} already exists.")
        self._graph.add_edge(edge.source.name, edge.target.name, obj=edge, capacity=edge.capacity_mbps)
        return edge

    def add_link(self, node_a: Node, node_b: Node, capacity_mbps: float = 100.0):
        """添加全双工链路 (两条方向相反的有向边)"""
        forward = self.add_edge(Edge(node_a, node_b, capacity_mbps))
        backward = self.add_edge(Edge(node_b, node_a, capacity_mbps))
        return forward, backward

    def get_node(self, name: str) -> Node:
        """根据名称获取节点"""
        node = self._nodes.get(name)
        if node is None:
            raise NodeNotFoundError(name)
        return node

    def get_edge(self, source: str, target: str) -> Optional[Edge]:
        """获取 source -> target 的有向边"""
        data = self._graph.get_edge_data(source, target)
        return data["obj"] if data is not None else None

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return [data["obj"] for _, _, data in self._graph.edges(data=True)]

    def path_from_nodes(self, names: Iterable[str]) -> GraphPath:
        """把节点名称序列转换为GraphPath，逐跳检查链路存在"""
        names = list(names)
        if len(names) < 2:
            raise InvalidTopologyError(f"A path needs at least two nodes, got {names}")
        edges = []
        for source, target in zip(names, names[1:]):
            edge = self.get_edge(source, target)
            if edge is None:
                raise InvalidTopologyError(f"No edge {source} -> {target} in topology {self._topology_id}")
            edges.append(edge)
        return GraphPath(edges)

    def shortest_path(self, source: str, target: str) -> GraphPath:
        """按跳数的最短路径"""
        paths = self.k_shortest_paths(source, target, 1)
        return paths[0]

    def k_shortest_paths(self, source: str, target: str, k: int) -> List[GraphPath]:
        """查找从source到target的k条无环最短路径 (按跳数排序)
        Args:
            source: 起始节点名称
            target: 目标节点名称
            k: 最多返回的路径数
        Returns:
            GraphPath列表。如果不存在路径则抛出InvalidTopologyError。
        """
        for name in (source, target):
            if name not in self._nodes:
                raise NodeNotFoundError(name)
        try:
            node_paths = list(itertools.islice(nx.shortest_simple_paths(self._graph, source, target), k))
        except nx.NetworkXNoPath as e:
            raise InvalidTopologyError(f"No path from {source} to {target}") from e
        return [self.path_from_nodes(node_path) for node_path in node_paths]

    def get_topology_statistics(self) -> Dict[str, Any]:
        """获取拓扑统计信息"""
        num_nodes = self._graph.number_of_nodes()
        return {
            "num_nodes": num_nodes,
            "num_edges": self._graph.number_of_edges(),
            "is_connected": nx.is_strongly_connected(self._graph) if num_nodes > 0 else False,
            "average_out_degree": sum(dict(self._graph.out_degree()).values()) / num_nodes if num_nodes > 0 else 0,
        }

    def __repr__(self):
        return f"<TopologyGraph(id='{self._topology_id}', nodes={len(self._nodes)}, edges={self._graph.number_of_edges()})>"
