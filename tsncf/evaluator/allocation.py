"""
单个模式内的链路带宽分配累加器。

每个模式的评估都新建一个 :class:`EdgeAllocation`，评估结束即丢弃，
保证不同模式之间的分配不会互相累加。
"""

from typing import Dict, Iterator, Tuple

from tsncf.topology.base import Edge


class EdgeAllocation:
    """
    按Edge身份累加已预留带宽 (Mbps)。

    Attributes:
        max_allocation_ratio: 可分配给预留流量的链路容量比例
    """

    def __init__(self, max_allocation_ratio: float = 0.75):
        self.max_allocation_ratio = float(max_allocation_ratio)
        self._totals: Dict[Edge, float] = {}

    def add(self, edge: Edge, mbps: float) -> float:
        """
        在链路上追加带宽。

        Args:
            edge: 链路
            mbps: 追加的带宽

        Returns:
            追加后的链路总分配
        """
        total = self._totals.get(edge, 0.0) + mbps
        self._totals[edge] = total
        return total

    def total(self, edge: Edge) -> float:
        return self._totals.get(edge, 0.0)

    def limit(self, edge: Edge) -> float:
        """链路允许的最大预留带宽"""
        return edge.capacity_mbps * self.max_allocation_ratio

    def is_exceeded(self, edge: Edge) -> bool:
        return self.total(edge) > self.limit(edge)

    def other_traffic(self, edge: Edge, own_mbps: float) -> float:
        """链路上除自身外其余流量的带宽"""
        return self.total(edge) - own_mbps

    def clear(self) -> None:
        self._totals.clear()

    def items(self) -> Iterator[Tuple[Edge, float]]:
        return iter(self._totals.items())

    def __contains__(self, edge: Edge) -> bool:
        return edge in self._totals

    def __len__(self) -> int:
        return len(self._totals)

    def __repr__(self):
        return f"EdgeAllocation(edges={len(self._totals)}, ratio={self.max_allocation_ratio})"
