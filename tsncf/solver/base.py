from abc import ABC, abstractmethod
from typing import Any, List, Optional, Set

from tsncf.application.base import Application
from tsncf.solver.vlan import VLAN
from tsncf.topology.graph import TopologyGraph


class Solver(ABC):
    """
    求解器接口: 给定拓扑和应用，返回认为最优的VLAN分配。

    非解析型求解器通常借助 Evaluator 为候选打分。
    """

    @abstractmethod
    def configure(self, params: Any) -> None:
        """传入求解器参数"""
        pass

    @abstractmethod
    def solve(self, topology: TopologyGraph, applications: List[Application]) -> Optional[Set[VLAN]]:
        """
        Returns:
            求解器在约束内找到的最佳VLAN集合；没有可行解时返回None
        """
        pass

    @abstractmethod
    def abort(self) -> None:
        """
        让正在运行的solve尽快返回当前最优解。

        可以从其他线程调用。只作用于正在运行的solve，之前发出的abort
        不会影响下一次solve。
        """
        pass
