from typing import Iterator, Sequence, Tuple

from tsncf.topology.base import Edge, Node


class GraphPath:
    """从起点到终点的有序Edge序列 (路由路径)"""

    __slots__ = ("_edges",)

    def __init__(self, edges: Sequence[Edge]):
        if not edges:
            raise ValueError("A path must contain at least one edge")
        self._edges: Tuple[Edge, ...] = tuple(edges)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def start(self) -> Node:
        return self._edges[0].source

    @property
    def end(self) -> Node:
        return self._edges[-1].target

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """路径经过的节点"""
        return (self.start,) + tuple(edge.target for edge in self._edges)

    def is_contiguous(self) -> bool:
        return all(a.target is b.source for a, b in zip(self._edges, self._edges[1:]))

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __eq__(self, other):
        if not isinstance(other, GraphPath):
            return NotImplemented
        return self._edges == other._edges

    def __hash__(self):
        return hash(self._edges)

    def __repr__(self):
        return " -> ".join(node.name for node in self.nodes)
