"""
GRASP求解器测试，包括跨线程abort。
"""

import threading
import time
import unittest

from tsncf.application.sr import SRApplication
from tsncf.application.tt import TTApplication, ExplicitPath
from tsncf.evaluator.avb import ModifiedAVBEvaluator
from tsncf.solver.grasp import GRASPSolver
from tsncf.topology.builder import TopologyBuilder
from tsncf.utils.exceptions import ConfigurationError, SolverError
from tsncf.utils.types import INFEASIBLE_COST, SolverConfig


def build_topology(trunk_capacity=50.0):
    """
    ES1, ES2 -> SWA -> SWB -> ES3, ES4
    SWA -> SWC -> SWB 为绕行路径
    """
    builder = TopologyBuilder("grasp_test")
    for name in ("ES1", "ES2", "ES3", "ES4"):
        builder.add_end_system(name)
    for name in ("SWA", "SWB", "SWC"):
        builder.add_bridge(name)
    builder.add_link("ES1", "SWA")
    builder.add_link("ES2", "SWA")
    builder.add_link("SWA", "SWB", trunk_capacity)
    builder.add_link("SWB", "ES3")
    builder.add_link("SWB", "ES4")
    builder.add_link("SWA", "SWC")
    builder.add_link("SWC", "SWB")
    return builder.build()


def bulk_flow(topology, title, source, destination):
    # 1500B / 500us = 24Mbps
    return SRApplication(title, 1500, 1, topology.get_node(source), [topology.get_node(destination)], modes=["normal"], interval=500, deadline=10000)


class TestGRASPSolver(unittest.TestCase):
    """求解结果测试"""

    def setUp(self):
        self.topology = build_topology()
        self.evaluator = ModifiedAVBEvaluator()

    def test_single_flow_takes_shortest_route(self):
        app = bulk_flow(self.topology, "a", "ES1", "ES3")
        solver = GRASPSolver(self.evaluator, SolverConfig(max_iterations=5, seed=1))
        solution = solver.solve(self.topology, [app])
        self.assertIsNotNone(solution)
        (vlan,) = solution
        self.assertEqual(repr(vlan.routings[0]), "ES1 -> SWA -> SWB -> ES3")
        self.assertEqual(solver.best_cost, 3.0)

    def test_trunk_capacity_forces_detour(self):
        """两条24Mbps流不能共用可分配37.5Mbps的干线"""
        apps = [bulk_flow(self.topology, "a", "ES1", "ES3"), bulk_flow(self.topology, "b", "ES2", "ES4")]
        solver = GRASPSolver(self.evaluator, SolverConfig(max_iterations=20, seed=7))
        solution = solver.solve(self.topology, apps)
        self.assertIsNotNone(solution)
        self.assertEqual(solver.best_cost, 7.0)
        self.assertEqual(self.evaluator.evaluate(solution, self.topology), solver.best_cost)
        hops = sorted(len(vlan.routings[0]) for vlan in solution)
        self.assertEqual(hops, [3, 4])

    def test_infeasible_problem_returns_none(self):
        topology = build_topology()
        heavy = SRApplication("heavy", 1500, 4, topology.get_node("ES1"), [topology.get_node("ES3")], modes=["normal"], interval=500)
        solver = GRASPSolver(config=SolverConfig(max_iterations=3, seed=1))
        self.assertIsNone(solver.solve(topology, [heavy]))
        self.assertEqual(solver.best_cost, INFEASIBLE_COST)

    def test_tt_explicit_path_is_used(self):
        tt = TTApplication(
            "ctrl", 64, 1, self.topology.get_node("ES1"), [self.topology.get_node("ES3")],
            explicit_path=ExplicitPath(["ES1", "SWA", "SWC", "SWB", "ES3"]),
        )
        solver = GRASPSolver(self.evaluator, SolverConfig(max_iterations=2, seed=1))
        routes = solver.candidate_routes(self.topology, tt)
        self.assertEqual(len(routes), 1)
        self.assertEqual(len(routes[0]), 1)
        self.assertEqual(len(routes[0][0]), 4)

        (vlan,) = solver.solve(self.topology, [tt])
        self.assertEqual(repr(vlan.routings[0]), "ES1 -> SWA -> SWC -> SWB -> ES3")

    def test_multicast_candidates_per_destination(self):
        app = SRApplication("video", 256, 1, self.topology.get_node("ES1"), [self.topology.get_node("ES3"), self.topology.get_node("ES4")], modes=["normal"])
        solver = GRASPSolver(self.evaluator, SolverConfig(k=2, max_iterations=5, seed=3))
        routes = solver.candidate_routes(self.topology, app)
        self.assertEqual([len(paths) for paths in routes], [2, 2])
        solution = solver.solve(self.topology, [app])
        # ES1->SWA, SWA->SWB shared; SWB->ES3, SWB->ES4
        self.assertEqual(solver.best_cost, 4.0)
        self.assertEqual(len(solution), 1)

    def test_empty_application_list(self):
        solver = GRASPSolver(self.evaluator, SolverConfig(max_iterations=2))
        self.assertEqual(solver.solve(self.topology, []), set())
        self.assertEqual(solver.best_cost, 0.0)

    def test_duration_bounds_search(self):
        apps = [bulk_flow(self.topology, "a", "ES1", "ES3")]
        solver = GRASPSolver(self.evaluator, SolverConfig(max_iterations=None, duration=0.2, seed=1))
        start = time.monotonic()
        solution = solver.solve(self.topology, apps)
        self.assertLess(time.monotonic() - start, 5.0)
        self.assertIsNotNone(solution)


class TestGRASPSolverConfigure(unittest.TestCase):
    """configure() 测试"""

    def test_configure_merges_mapping(self):
        solver = GRASPSolver()
        solver.configure({"k": 2, "seed": 42})
        self.assertEqual(solver.config.k, 2)
        self.assertEqual(solver.config.seed, 42)
        self.assertEqual(solver.config.max_iterations, SolverConfig().max_iterations)

    def test_configure_accepts_config_object(self):
        solver = GRASPSolver()
        config = SolverConfig(k=7)
        solver.configure(config)
        self.assertIs(solver.config, config)

    def test_configure_rejects_unknown_keys(self):
        with self.assertRaises(ConfigurationError):
            GRASPSolver().configure({"population": 10})

    def test_configure_rejects_invalid_values(self):
        with self.assertRaises(ConfigurationError):
            GRASPSolver().configure({"k": 0})
        with self.assertRaises(ConfigurationError):
            GRASPSolver().configure(["k", 2])


class AbortingEvaluator(ModifiedAVBEvaluator):
    """第abort_after次评估之后中止求解器"""

    def __init__(self, abort_after):
        super().__init__()
        self.abort_after = abort_after
        self.solver = None
        self.calls = 0

    def evaluate(self, vlans, topology):
        cost = super().evaluate(vlans, topology)
        self.calls += 1
        if self.calls == self.abort_after:
            self.solver.abort()
        return cost


class TestGRASPSolverAbort(unittest.TestCase):
    """跨线程abort测试"""

    def test_abort_keeps_already_scored_solution(self):
        topology = build_topology()
        apps = [bulk_flow(topology, "a", "ES1", "ES3")]
        for abort_after in range(1, 6):
            with self.subTest(abort_after=abort_after):
                evaluator = AbortingEvaluator(abort_after)
                solver = GRASPSolver(evaluator, SolverConfig(k=2, max_iterations=10, seed=1))
                evaluator.solver = solver
                solution = solver.solve(topology, apps)
                self.assertEqual(evaluator.calls, abort_after)
                self.assertIsNotNone(solution)
                self.assertEqual(solver.best_cost, 3.0)

    def test_abort_before_solve_is_cleared(self):
        topology = build_topology()
        solver = GRASPSolver(config=SolverConfig(max_iterations=2, seed=1))
        solver.abort()
        solution = solver.solve(topology, [bulk_flow(topology, "a", "ES1", "ES3")])
        self.assertIsNotNone(solution)
        self.assertEqual(solver.iterations, 2)
        self.assertFalse(solver.aborted)

    def test_abort_returns_best_so_far(self):
        topology = build_topology()
        apps = [bulk_flow(topology, "a", "ES1", "ES3"), bulk_flow(topology, "b", "ES2", "ES4")]
        solver = GRASPSolver(config=SolverConfig(max_iterations=10 ** 9, seed=5))
        result = {}

        def run():
            result["solution"] = solver.solve(topology, apps)

        worker = threading.Thread(target=run, daemon=True)
        worker.start()

        deadline = time.monotonic() + 10.0
        while solver.iterations < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
        self.assertGreaterEqual(solver.iterations, 3)

        # 同一个求解器不允许并发solve
        with self.assertRaises(SolverError):
            solver.solve(topology, apps)

        solver.abort()
        worker.join(timeout=5.0)
        self.assertFalse(worker.is_alive())
        self.assertTrue(solver.aborted)
        self.assertIsNotNone(result["solution"])
        self.assertEqual(result["solution"], solver.best_solution())
        self.assertEqual(solver.best_cost, 7.0)


if __name__ == "__main__":
    unittest.main()
