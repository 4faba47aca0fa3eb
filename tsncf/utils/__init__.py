"""
工具模块 - 异常定义与配置类型
"""

from .exceptions import *
from .types import EvaluatorConfig, SolverConfig, INFEASIBLE_COST, is_feasible
