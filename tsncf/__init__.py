"""
TSNCF - 时间敏感网络(TSN)配置框架
包含拓扑建模、TT/AVB应用描述、VLAN路由评估和GRASP求解器
"""

from . import topology
from . import application
from . import evaluator
from . import solver

from .topology import Node, EndSystem, Bridge, Edge, GraphPath, TopologyGraph, TopologyBuilder
from .application import Application, ApplicationKind, SRApplication, SRType, TTApplication, ExplicitPath
from .evaluator import Evaluator, ModifiedAVBEvaluator, EvaluationReport
from .solver import VLAN, Solver, GRASPSolver
from .io import Network, load_network, parse_network
from .utils.exceptions import *
from .utils.types import EvaluatorConfig, SolverConfig, INFEASIBLE_COST, is_feasible

__version__ = "1.0.0"

__all__ = [
    # 子模块
    "topology",
    "application",
    "evaluator",
    "solver",
    # 拓扑类
    "Node",
    "EndSystem",
    "Bridge",
    "Edge",
    "GraphPath",
    "TopologyGraph",
    "TopologyBuilder",
    # 应用类
    "Application",
    "ApplicationKind",
    "SRApplication",
    "SRType",
    "TTApplication",
    "ExplicitPath",
    # 评估与求解
    "Evaluator",
    "ModifiedAVBEvaluator",
    "EvaluationReport",
    "VLAN",
    "Solver",
    "GRASPSolver",
    "Network",
    "load_network",
    "parse_network",
    # 配置
    "EvaluatorConfig",
    "SolverConfig",
    "INFEASIBLE_COST",
    "is_feasible",
    # 异常类
    "TSNConfigurationError",
    "InvalidTopologyError",
    "NodeNotFoundError",
    "InvalidRoutingError",
    "UnsupportedApplicationError",
    "ConfigurationError",
    "SolverError",
]


# 设置日志
import logging

logger = logging.getLogger(__name__)

# 如果没有处理器，添加控制台处理器
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
