"""
TSN 拓扑模块 - 网络拓扑建模
包含节点、有向链路、路由路径、拓扑图和构建器
"""

from .base import Node, EndSystem, Bridge, Edge
from .path import GraphPath
from .graph import TopologyGraph
from .builder import TopologyBuilder

__all__ = [
    "Node",
    "EndSystem",
    "Bridge",
    "Edge",
    "GraphPath",
    "TopologyGraph",
    "TopologyBuilder",
]
