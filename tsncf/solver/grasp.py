"""
GRASP (Greedy Randomized Adaptive Search Procedure) 路由求解器。

每次迭代:
1. 贪心随机构造: 按随机顺序为每个应用生成若干候选VLAN，按增量代价排序，
   从前 ``rcl_size`` 个候选中随机选一个。
2. 局部搜索: 逐个替换单个目的节点的路径，接受改进直到没有更优的替换。
3. 每个完整候选打分后立即与当前最优解比较，保留代价最低的可行解。

``abort()`` 通过 ``threading.Event`` 实现协作式取消，每次调用评估器之前检查，
单次评估本身不会被中断。solve开始时会清除中止标志，所以在solve开始之前发出的
abort不起作用。
"""

import logging
import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

import numpy as np

from tsncf.application.base import Application, ApplicationKind
from tsncf.evaluator.avb import ModifiedAVBEvaluator
from tsncf.evaluator.base import Evaluator
from tsncf.solver.base import Solver
from tsncf.solver.vlan import VLAN
from tsncf.topology.graph import TopologyGraph
from tsncf.topology.path import GraphPath
from tsncf.utils.exceptions import ConfigurationError, SolverError
from tsncf.utils.types import INFEASIBLE_COST, SolverConfig, is_feasible

logger = logging.getLogger(__name__)

Solution = Dict[Application, VLAN]


class _SearchStopped(Exception):
    """中止或超时，只在solve内部使用"""


class GRASPSolver(Solver):
    """GRASP路由求解器"""

    def __init__(self, evaluator: Optional[Evaluator] = None, config: Optional[SolverConfig] = None):
        self._evaluator = evaluator if evaluator is not None else ModifiedAVBEvaluator()
        self._config = config if config is not None else SolverConfig()
        self._abort_event = threading.Event()
        self._lock = threading.RLock()

        # 运行统计
        self._best: Optional[Solution] = None
        self._best_cost = INFEASIBLE_COST
        self._iterations = 0
        self._evaluations = 0
        self._deadline: Optional[float] = None
        self._num_applications = 0
        self._running = False

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def best_cost(self) -> float:
        with self._lock:
            return self._best_cost

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def evaluations(self) -> int:
        return self._evaluations

    @property
    def aborted(self) -> bool:
        return self._abort_event.is_set()

    def configure(self, params: Any) -> None:
        """接受SolverConfig或参数字典 (与当前配置合并)"""
        if isinstance(params, SolverConfig):
            valid, message = params.validate()
            if not valid:
                raise ConfigurationError(message)
            self._config = params
        elif isinstance(params, Mapping):
            self._config = SolverConfig.from_dict({**self._config.to_dict(), **params})
        else:
            raise ConfigurationError(f"Unsupported solver parameters of type {type(params).__name__}")
        logger.debug(f"Solver configured: {self._config}")

    def abort(self) -> None:
        """中止当前solve。只对已经开始的solve有效，solve开始时会清除中止标志。"""
        self._abort_event.set()
        logger.info("Solver abort requested")

    def best_solution(self) -> Optional[Set[VLAN]]:
        """当前最优解 (可在solve运行期间从其他线程读取)"""
        with self._lock:
            return set(self._best.values()) if self._best is not None else None

    def solve(self, topology: TopologyGraph, applications: List[Application]) -> Optional[Set[VLAN]]:
        with self._lock:
            if self._running:
                raise SolverError("solve() is already running on this solver")
            self._running = True
        try:
            return self._solve(topology, applications)
        finally:
            with self._lock:
                self._running = False

    def _solve(self, topology: TopologyGraph, applications: List[Application]) -> Optional[Set[VLAN]]:
        self._abort_event.clear()
        with self._lock:
            self._best, self._best_cost = None, INFEASIBLE_COST
        self._iterations = 0
        self._evaluations = 0
        self._num_applications = len(applications)
        self._deadline = time.monotonic() + self._config.duration if self._config.duration is not None else None

        rng = np.random.default_rng(self._config.seed)
        candidates = {app: self.candidate_routes(topology, app) for app in applications}
        logger.info(f"GRASP solving {len(applications)} applications on {topology}")

        try:
            while self._config.max_iterations is None or self._iterations < self._config.max_iterations:
                self._check_stop()
                solution, cost = self._construct(applications, candidates, topology, rng)
                if self._config.local_search and is_feasible(cost):
                    solution, cost = self._local_search(solution, cost, candidates, topology)
                self._iterations += 1
                self._offer(solution, cost)
        except _SearchStopped:
            reason = "aborted" if self._abort_event.is_set() else "time limit reached"
            logger.info(f"GRASP {reason} after {self._iterations} iterations ({self._evaluations} evaluations)")

        best = self.best_solution()
        if best is None:
            logger.info("GRASP found no feasible solution")
        else:
            logger.info(f"GRASP best cost {self._best_cost:.3f} after {self._iterations} iterations")
        return best

    def candidate_routes(self, topology: TopologyGraph, app: Application) -> List[List[GraphPath]]:
        """每个目的节点的候选路径。TT应用优先使用外部给定的显式路由。"""
        routes = []
        explicit = None
        if app.kind is ApplicationKind.TIME_TRIGGERED and app.explicit_path is not None:
            explicit = topology.path_from_nodes(app.explicit_path.node_names)
            if explicit.start is not app.source:
                raise ConfigurationError(f"Explicit path {explicit} of {app.title} does not start at {app.source.name}")
        for destination in app.destinations:
            if explicit is not None and explicit.end is destination:
                routes.append([explicit])
            elif app.kind is ApplicationKind.TIME_TRIGGERED:
                routes.append([topology.shortest_path(app.source.name, destination.name)])
            else:
                routes.append(topology.k_shortest_paths(app.source.name, destination.name, self._config.k))
        return routes

    def _check_stop(self) -> None:
        if self._abort_event.is_set() or (self._deadline is not None and time.monotonic() >= self._deadline):
            raise _SearchStopped()

    def _score(self, solution: Solution, topology: TopologyGraph) -> float:
        self._check_stop()
        self._evaluations += 1
        cost = self._evaluator.evaluate(list(solution.values()), topology)
        # 完整候选打分后立即参与最优解比较
        if len(solution) == self._num_applications:
            self._offer(solution, cost)
        return cost

    def _offer(self, solution: Solution, cost: float) -> None:
        if not is_feasible(cost):
            return
        with self._lock:
            if cost < self._best_cost:
                self._best, self._best_cost = dict(solution), cost
                logger.info(f"Iteration {self._iterations}: new best cost {cost:.3f}")

    def _random_options(self, app: Application, routes: Sequence[List[GraphPath]], rng: np.random.Generator) -> List[VLAN]:
        # 第一个候选总是每个目的节点的最短路径
        options = [VLAN(app, [paths[0] for paths in routes])]
        seen = {options[0].routings}
        for _ in range(self._config.k - 1):
            routings = tuple(paths[int(rng.integers(len(paths)))] for paths in routes)
            if routings not in seen:
                seen.add(routings)
                options.append(VLAN(app, routings))
        return options

    def _construct(self, applications: List[Application], candidates, topology: TopologyGraph, rng: np.random.Generator) -> Tuple[Solution, float]:
        partial: Solution = {}
        cost = 0.0
        for index in rng.permutation(len(applications)):
            app = applications[int(index)]
            scored = []
            for option in self._random_options(app, candidates[app], rng):
                partial[app] = option
                scored.append((self._score(partial, topology), len(scored), option))
            scored.sort(key=lambda item: (item[0], item[1]))
            # 有可行候选时不选择不可行候选
            feasible = [item for item in scored if is_feasible(item[0])]
            rcl = (feasible or scored)[: self._config.rcl_size]
            cost, _, chosen = rcl[int(rng.integers(len(rcl)))]
            partial[app] = chosen
        # 按输入顺序返回
        solution = {app: partial[app] for app in applications}
        return solution, cost

    def _local_search(self, solution: Solution, cost: float, candidates, topology: TopologyGraph) -> Tuple[Solution, float]:
        improved = True
        while improved:
            improved = False
            for app, vlan in list(solution.items()):
                for dest_index, paths in enumerate(candidates[app]):
                    for path in paths:
                        if path == vlan.routings[dest_index]:
                            continue
                        routings = list(vlan.routings)
                        routings[dest_index] = path
                        trial = dict(solution)
                        trial[app] = VLAN(app, routings)
                        trial_cost = self._score(trial, topology)
                        if trial_cost < cost:
                            solution, cost = trial, trial_cost
                            vlan = trial[app]
                            improved = True
        return solution, cost
