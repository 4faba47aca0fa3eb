from enum import Enum
from typing import Iterable, FrozenSet, Optional, Sequence

from tsncf.application.base import Application, ApplicationKind
from tsncf.topology.base import EndSystem


class SRType(Enum):
    """AVB流量类别: (测量周期 us, 默认截止期 us)"""

    CLASS_A = (125, 2000)
    CLASS_B = (250, 50000)

    @property
    def interval_us(self) -> int:
        return self.value[0]

    @property
    def default_deadline_us(self) -> int:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "SRType":
        """'A' / 'CLASS_A' / 'class_a' -> SRType.CLASS_A"""
        key = name.strip().upper()
        if not key.startswith("CLASS_"):
            key = f"CLASS_{key}"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown SR class '{name}'") from None


class SRApplication(Application):
    """流预留(AVB)应用，只在其所属的模式中活跃"""

    def __init__(
        self,
        title: str,
        max_frame_size: int,
        frames_per_interval: int,
        source: EndSystem,
        destinations: Sequence[EndSystem],
        modes: Iterable[str],
        sr_type: SRType = SRType.CLASS_A,
        interval: Optional[float] = None,
        deadline: Optional[float] = None,
    ):
        super().__init__(title, max_frame_size, frames_per_interval, source, destinations)
        if isinstance(modes, str):
            raise ValueError(f"{title}: modes must be a collection of mode names, got the string '{modes}'")
        self._modes: FrozenSet[str] = frozenset(modes)
        if not self._modes:
            raise ValueError(f"{title}: an SR application must belong to at least one mode")
        self._sr_type = sr_type
        self._interval = float(interval) if interval is not None else float(sr_type.interval_us)
        self._deadline = float(deadline) if deadline is not None else float(sr_type.default_deadline_us)
        if self._interval <= 0:
            raise ValueError(f"{title}: interval must be positive, got {self._interval}")
        if self._deadline < 0:
            raise ValueError(f"{title}: deadline must be non-negative, got {self._deadline}")

    @property
    def kind(self) -> ApplicationKind:
        return ApplicationKind.STREAM_RESERVATION

    @property
    def modes(self) -> FrozenSet[str]:
        return self._modes

    @property
    def sr_type(self) -> SRType:
        return self._sr_type

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def deadline(self) -> float:
        return self._deadline

    def __repr__(self):
        return f"{super().__repr__()} {self._sr_type.name} modes={sorted(self._modes)} deadline={self._deadline:g}us"
