from abc import ABC, abstractmethod
from typing import Optional


class Node(ABC):
    """节点抽象基类"""

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def node_type(self) -> str:
        """节点类型"""
        pass

    def __repr__(self):
        return self._name


class EndSystem(Node):
    """端系统 (流量的源和目的)"""

    @property
    def node_type(self) -> str:
        return "EndSystem"


class Bridge(Node):
    """TSN交换机"""

    @property
    def node_type(self) -> str:
        return "Bridge"


class Edge:
    """
    有向链路 source -> target。

    全双工物理链路由两条方向相反的Edge表示。Edge按对象身份比较和哈希，
    因此可以直接作为带宽分配表的键。
    """

    def __init__(self, source: Node, target: Node, capacity_mbps: float = 100.0, edge_id: Optional[str] = None):
        if capacity_mbps <= 0:
            raise ValueError(f"Edge capacity must be positive, got {capacity_mbps}")
        self._source = source
        self._target = target
        self._capacity_mbps = float(capacity_mbps)
        self._edge_id = edge_id if edge_id is not None else f"{source.name}->{target.name}"

    @property
    def edge_id(self) -> str:
        return self._edge_id

    @property
    def source(self) -> Node:
        return self._source

    @property
    def target(self) -> Node:
        return self._target

    @property
    def capacity_mbps(self) -> float:
        """链路容量 (Mbps)"""
        return self._capacity_mbps

    def __repr__(self):
        return f"({self._source.name} : {self._target.name})"
