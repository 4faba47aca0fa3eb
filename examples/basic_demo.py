import logging
from pathlib import Path

from tsncf.application.sr import SRApplication, SRType
from tsncf.application.tt import TTApplication, ExplicitPath
from tsncf.evaluator.avb import ModifiedAVBEvaluator
from tsncf.io.loader import load_network
from tsncf.solver.grasp import GRASPSolver
from tsncf.solver.vlan import VLAN
from tsncf.topology.builder import TopologyBuilder
from tsncf.utils.types import SolverConfig


def demo_manual_evaluation():
    """演示手工构建拓扑并评估一个VLAN分配"""
    print("\n--- 手工评估VLAN分配 ---")

    # 1. ES1 - SW1 - SW2 - ES2 线形拓扑
    builder = TopologyBuilder("line_demo")
    builder.add_end_system("ES1")
    builder.add_end_system("ES2")
    builder.add_bridge("SW1")
    builder.add_bridge("SW2")
    builder.add_link("ES1", "SW1")
    builder.add_link("SW1", "SW2")
    builder.add_link("SW2", "ES2")
    topology = builder.build()
    print("拓扑统计信息:", topology.get_topology_statistics())

    es1, es2 = topology.get_node("ES1"), topology.get_node("ES2")
    path = topology.shortest_path("ES1", "ES2")
    print(f"从 ES1 到 ES2 的路径: {path}")

    # 2. 一个AVB流和一个TT流共用同一路径
    video = SRApplication("video", 512, 1, es1, [es2], modes=["normal"], sr_type=SRType.CLASS_A, deadline=500)
    control = TTApplication("control", 64, 1, es1, [es2], explicit_path=ExplicitPath(["ES1", "SW1", "SW2", "ES2"]))
    vlans = {VLAN(video, [path]), VLAN(control, [path])}

    # 3. 评估
    evaluator = ModifiedAVBEvaluator()
    print(f"代价: {evaluator.evaluate(vlans, topology):.3f}")
    print(evaluator.analyze(vlans, topology).to_dataframe().to_string(index=False))


def demo_grasp_solver():
    """演示从YAML加载网络并用GRASP求解"""
    print("\n--- GRASP求解 ring.yaml ---")
    network = load_network(Path(__file__).parent / "networks" / "ring.yaml")
    solver = GRASPSolver(config=SolverConfig(k=3, max_iterations=50, seed=811))
    solution = solver.solve(network.topology, network.applications)
    if solution is None:
        print("没有找到可行解")
        return
    print(f"最优代价: {solver.best_cost:.3f}")
    for vlan in sorted(solution, key=lambda v: v.application.title):
        print(f"  {vlan.application.title}: {[repr(p) for p in vlan.routings]}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    demo_manual_evaluation()
    demo_grasp_solver()
