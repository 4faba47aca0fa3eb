from abc import ABC, abstractmethod
from typing import Iterable, TYPE_CHECKING

from tsncf.topology.graph import TopologyGraph

if TYPE_CHECKING:
    from tsncf.solver.vlan import VLAN


class Evaluator(ABC):
    """评估器抽象基类: 为一组VLAN分配计算单一代价"""

    @abstractmethod
    def evaluate(self, vlans: Iterable["VLAN"], topology: TopologyGraph) -> float:
        """
        计算VLAN分配的代价。

        Returns:
            非负有限代价，或 INFEASIBLE_COST (超出容量或截止期)
        """
        pass
