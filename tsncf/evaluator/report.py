from dataclasses import dataclass, field, asdict
from typing import List, Optional

import pandas as pd

from tsncf.utils.types import INFEASIBLE_COST, is_feasible


@dataclass
class FlowReport:
    """一个模式中单个VLAN的评估明细"""

    mode: str
    title: str
    kind: str
    hops: int
    alloc_mbps: float
    hop_cost: float
    latency: Optional[float] = None  # us, TT流为None
    deadline: Optional[float] = None
    ratio: Optional[float] = None
    penalty: float = 0.0
    feasible: bool = True


@dataclass
class CapacityViolation:
    """超出可分配容量的链路"""

    mode: str
    edge: str
    allocated_mbps: float
    limit_mbps: float


@dataclass
class EvaluationReport:
    """不短路的完整评估结果，cost与evaluate()一致"""

    flows: List[FlowReport] = field(default_factory=list)
    capacity_violations: List[CapacityViolation] = field(default_factory=list)
    cost: float = 0.0

    @property
    def feasible(self) -> bool:
        return is_feasible(self.cost)

    @property
    def deadline_violations(self) -> List[FlowReport]:
        return [flow for flow in self.flows if not flow.feasible]

    def mark_infeasible(self) -> None:
        self.cost = INFEASIBLE_COST

    def worst_latency(self, title: str) -> Optional[float]:
        """某个应用在所有模式中的最大延迟"""
        latencies = [flow.latency for flow in self.flows if flow.title == title and flow.latency is not None]
        return max(latencies) if latencies else None

    def to_dataframe(self) -> pd.DataFrame:
        """每个 (mode, VLAN) 一行"""
        columns = [f for f in FlowReport.__dataclass_fields__]
        return pd.DataFrame([asdict(flow) for flow in self.flows], columns=columns)

    def violations_dataframe(self) -> pd.DataFrame:
        columns = [f for f in CapacityViolation.__dataclass_fields__]
        return pd.DataFrame([asdict(v) for v in self.capacity_violations], columns=columns)
