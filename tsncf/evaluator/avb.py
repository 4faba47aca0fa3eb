"""
Cost of a VLAN assignment taking SR and TT timings into account.

The cost is made of:

- ``hop_penalty`` for each distinct edge of a VLAN. This favours shorter paths and
  penalises disjoint multicast routes.
- ``threshold_exceeded_penalty`` for every percent that WCRT / deadline exceeds
  ``penalty_threshold``.

A candidate that exceeds the allocatable capacity of an edge, or whose worst-case
latency exceeds a deadline, costs ``INFEASIBLE_COST``. Modes are evaluated
independently and their costs are summed. TT VLANs take part in every mode.
"""

import logging
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from tsncf.application.base import ApplicationKind
from tsncf.evaluator.allocation import EdgeAllocation
from tsncf.evaluator.base import Evaluator
from tsncf.evaluator.latency import calculate_max_latency
from tsncf.evaluator.report import CapacityViolation, EvaluationReport, FlowReport
from tsncf.topology.graph import TopologyGraph
from tsncf.utils.exceptions import UnsupportedApplicationError
from tsncf.utils.types import EvaluatorConfig, INFEASIBLE_COST, is_feasible

if TYPE_CHECKING:
    from tsncf.solver.vlan import VLAN

logger = logging.getLogger(__name__)

# Label of the mode evaluated when only TT VLANs are present
TT_ONLY_MODE = "<tt-only>"


class ModifiedAVBEvaluator(Evaluator):
    """Scores VLAN assignments with the 802.1BA based AVB latency model."""

    def __init__(self, config: Optional[EvaluatorConfig] = None):
        self._config = config if config is not None else EvaluatorConfig()
        valid, message = self._config.validate()
        if not valid:
            raise ValueError(f"Invalid evaluator config: {message}")

    @property
    def config(self) -> EvaluatorConfig:
        return self._config

    def partition_modes(self, vlans: Iterable["VLAN"]) -> Dict[str, List["VLAN"]]:
        """
        Working set of every mode: its SR VLANs plus all TT VLANs.

        Raises:
            UnsupportedApplicationError: a VLAN carries an unknown application kind
        """
        mode_map: Dict[str, List["VLAN"]] = {}
        tt_vlans: List["VLAN"] = []
        for vl in vlans:
            app = vl.application
            if app.kind is ApplicationKind.STREAM_RESERVATION:
                for mode in sorted(app.modes):
                    mode_map.setdefault(mode, []).append(vl)
            elif app.kind is ApplicationKind.TIME_TRIGGERED:
                tt_vlans.append(vl)
            else:
                raise UnsupportedApplicationError(app.kind, app.title)

        if not mode_map:
            return {TT_ONLY_MODE: tt_vlans} if tt_vlans else {}
        return {mode: mode_vlans + tt_vlans for mode, mode_vlans in sorted(mode_map.items())}

    def evaluate(self, vlans: Iterable["VLAN"], topology: TopologyGraph) -> float:
        """The topology is read-only context; routings already reference its edges."""
        cost = 0.0
        for mode, working_set in self.partition_modes(vlans).items():
            mode_cost = self._evaluate_mode(mode, working_set)
            if not is_feasible(mode_cost):
                return INFEASIBLE_COST
            cost += mode_cost
        return cost

    def analyze(self, vlans: Iterable["VLAN"], topology: TopologyGraph) -> EvaluationReport:
        """Same pipeline as :meth:`evaluate` without short-circuiting, for diagnostics."""
        report = EvaluationReport()
        for mode, working_set in self.partition_modes(vlans).items():
            mode_cost = self._evaluate_mode(mode, working_set, report)
            if not is_feasible(mode_cost):
                report.mark_infeasible()
            elif report.feasible:
                report.cost += mode_cost
        return report

    def threshold_penalty(self, ratio: float) -> float:
        """Penalty for a WCRT / deadline ratio that is within the deadline."""
        if ratio <= self._config.penalty_threshold:
            return 0.0
        return (ratio - self._config.penalty_threshold) * 100 * self._config.threshold_exceeded_penalty

    def worst_case_latency(self, vl: "VLAN", allocation: EdgeAllocation) -> float:
        """Largest end-to-end latency over the routings of a VLAN."""
        app = vl.application
        alloc_mbps = app.alloc_mbps
        max_latency = 0.0
        for path in vl.routings:
            latency = 0.0
            for edge in path:
                latency += calculate_max_latency(
                    alloc_mbps,
                    allocation.other_traffic(edge, alloc_mbps),
                    app.max_frame_size,
                    app.sr_type,
                    self._config,
                )
            # For multicast only the worst route matters
            if latency > max_latency:
                max_latency = latency
        return max_latency

    def _evaluate_mode(self, mode: str, working_set: List["VLAN"], report: Optional[EvaluationReport] = None) -> float:
        allocation = EdgeAllocation(self._config.max_allocation_ratio)
        cost = 0.0
        feasible = True
        hops: Dict["VLAN", int] = {}

        # Accumulated bandwidth and the cost of distinct edges
        for vl in working_set:
            edges = vl.unique_edges()
            for edge in edges:
                allocation.add(edge, vl.application.alloc_mbps)
                if allocation.is_exceeded(edge):
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug(f"Mode {mode}: edge {edge}'s capacity exceeded by {vl.application.title}")
                    if report is None:
                        return INFEASIBLE_COST
                    feasible = False
            hops[vl] = len(edges)
            cost += len(edges) * self._config.hop_penalty

        if report is not None:
            for edge, total in allocation.items():
                if allocation.is_exceeded(edge):
                    report.capacity_violations.append(CapacityViolation(mode, edge.edge_id, total, allocation.limit(edge)))

        # Timings, only valid for AVB traffic
        for vl in working_set:
            app = vl.application
            flow = FlowReport(mode, app.title, app.kind.value, hops[vl], app.alloc_mbps, hops[vl] * self._config.hop_penalty)
            if app.kind is ApplicationKind.STREAM_RESERVATION and app.deadline > 0:
                max_latency = self.worst_case_latency(vl, allocation)
                ratio = max_latency / app.deadline
                flow.latency, flow.deadline, flow.ratio = max_latency, app.deadline, ratio
                if max_latency > app.deadline:
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug(f"Mode {mode} non-schedulable: {app.title}'s max latency {max_latency:.2f}us exceeds deadline {app.deadline:g}us")
                    if report is None:
                        return INFEASIBLE_COST
                    flow.feasible = False
                    feasible = False
                else:
                    flow.penalty = self.threshold_penalty(ratio)
                    cost += flow.penalty
            if report is not None:
                report.flows.append(flow)

        return cost if feasible else INFEASIBLE_COST
