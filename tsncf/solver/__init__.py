"""
TSN 求解器模块 - VLAN绑定、求解器接口和GRASP求解器
"""

from .vlan import VLAN
from .base import Solver
from .grasp import GRASPSolver

__all__ = [
    "VLAN",
    "Solver",
    "GRASPSolver",
]
