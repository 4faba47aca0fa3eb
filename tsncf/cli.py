#!/usr/bin/env python3
"""
tsncf-solve: 为网络描述文件求解TSN路由并输出评估明细
"""

import argparse
import logging
import sys
import threading
from typing import List, Optional

from tsncf.config.loader import ConfigLoader, DEFAULT_CONFIG_PATH
from tsncf.evaluator.avb import ModifiedAVBEvaluator
from tsncf.io.loader import load_network
from tsncf.solver.grasp import GRASPSolver
from tsncf.utils.exceptions import TSNConfigurationError

logger = logging.getLogger("tsncf.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tsncf-solve", description="TSN路由与AVB时延评估")
    parser.add_argument("network", help="网络描述YAML文件")
    parser.add_argument("--config", help="evaluator/solver 配置YAML文件 (默认使用内置default.yaml)")
    parser.add_argument("--k", type=int, help="每个目的节点的候选路径数")
    parser.add_argument("--iterations", type=int, help="最大GRASP迭代次数")
    parser.add_argument("--duration", type=float, help="求解时间上限 (秒)，到时调用abort()")
    parser.add_argument("--seed", type=int, help="随机种子")
    parser.add_argument("--csv", help="把每个流的评估明细写入CSV")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出DEBUG日志")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    package_logger = logging.getLogger("tsncf")
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)

    try:
        evaluator_config, solver_config = ConfigLoader().load_run_config(args.config or DEFAULT_CONFIG_PATH)
        network = load_network(args.network)
    except TSNConfigurationError as e:
        logger.error(f"{e}")
        return 2

    overrides = {key: value for key, value in (("k", args.k), ("max_iterations", args.iterations), ("seed", args.seed)) if value is not None}
    evaluator = ModifiedAVBEvaluator(evaluator_config)
    solver = GRASPSolver(evaluator, solver_config)
    solver.configure(overrides)

    # 到时从定时器线程中止求解
    timer = threading.Timer(args.duration, solver.abort) if args.duration else None
    if timer is not None:
        timer.daemon = True
        timer.start()
    try:
        solution = solver.solve(network.topology, network.applications)
    finally:
        if timer is not None:
            timer.cancel()

    if solution is None:
        print("No feasible solution found")
        return 1

    print(f"Best cost: {solver.best_cost:.3f} ({solver.iterations} iterations, {solver.evaluations} evaluations)")
    for vlan in sorted(solution, key=lambda v: v.application.title):
        print(f"  {vlan.application}")
        for path in vlan.routings:
            print(f"    {path}")

    report = evaluator.analyze(solution, network.topology)
    frame = report.to_dataframe()
    print(frame.to_string(index=False))
    if args.csv:
        frame.to_csv(args.csv, index=False)
        logger.info(f"Report written to {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
