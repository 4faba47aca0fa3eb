from typing import List, Optional, Sequence, Tuple

from tsncf.application.base import Application, ApplicationKind
from tsncf.topology.base import EndSystem

# TT applications are assumed periodic with this cycle
DEFAULT_TT_INTERVAL_US = 500


class ExplicitPath:
    """外部给定的TT显式路由 (节点名称序列)"""

    def __init__(self, node_names: Sequence[str]):
        if len(node_names) < 2:
            raise ValueError(f"An explicit path needs at least two nodes, got {list(node_names)}")
        self._node_names: Tuple[str, ...] = tuple(node_names)

    @property
    def node_names(self) -> List[str]:
        return list(self._node_names)

    def __repr__(self):
        return " -> ".join(self._node_names)


class TTApplication(Application):
    """时间触发应用。其调度由外部确定，这里只计入带宽和跳数。"""

    def __init__(
        self,
        title: str,
        max_frame_size: int,
        frames_per_interval: int,
        source: EndSystem,
        destinations: Sequence[EndSystem],
        explicit_path: Optional[ExplicitPath] = None,
        interval: float = DEFAULT_TT_INTERVAL_US,
    ):
        super().__init__(title, max_frame_size, frames_per_interval, source, destinations)
        if interval <= 0:
            raise ValueError(f"{title}: interval must be positive, got {interval}")
        self._explicit_path = explicit_path
        self._interval = float(interval)

    @property
    def kind(self) -> ApplicationKind:
        return ApplicationKind.TIME_TRIGGERED

    @property
    def explicit_path(self) -> Optional[ExplicitPath]:
        return self._explicit_path

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def deadline(self) -> float:
        return 0.0

    def __repr__(self):
        return f"{super().__repr__()} Route ({self._explicit_path})"
