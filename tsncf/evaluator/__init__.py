"""
TSN 评估模块 - VLAN分配的可行性与代价评估
"""

from .base import Evaluator
from .allocation import EdgeAllocation
from .latency import calculate_max_latency
from .avb import ModifiedAVBEvaluator, TT_ONLY_MODE
from .report import EvaluationReport, FlowReport, CapacityViolation

__all__ = [
    "Evaluator",
    "EdgeAllocation",
    "calculate_max_latency",
    "ModifiedAVBEvaluator",
    "TT_ONLY_MODE",
    "EvaluationReport",
    "FlowReport",
    "CapacityViolation",
]
