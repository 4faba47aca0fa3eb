"""
应用(流量)描述的抽象基类。

每个Application带有一个封闭的 ``kind`` 标签，评估器根据它决定模式归属和
截止期处理，而不是依赖具体子类的类型检查。
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence, Tuple

from tsncf.topology.base import EndSystem


class ApplicationKind(Enum):
    """Application variant enumeration."""

    TIME_TRIGGERED = "TT"
    STREAM_RESERVATION = "SR"


class Application(ABC):
    """
    流量描述基类。

    Attributes:
        title: 应用名称
        max_frame_size: 最大帧长 (字节)
        frames_per_interval: 每个周期发送的帧数
        source: 源端系统
        destinations: 目的端系统 (多播时多于一个)
    """

    def __init__(self, title: str, max_frame_size: int, frames_per_interval: int, source: EndSystem, destinations: Sequence[EndSystem]):
        if max_frame_size <= 0:
            raise ValueError(f"{title}: max_frame_size must be positive, got {max_frame_size}")
        if frames_per_interval <= 0:
            raise ValueError(f"{title}: frames_per_interval must be positive, got {frames_per_interval}")
        if not destinations:
            raise ValueError(f"{title}: at least one destination is required")
        self._title = title
        self._max_frame_size = int(max_frame_size)
        self._frames_per_interval = int(frames_per_interval)
        self._source = source
        self._destinations: Tuple[EndSystem, ...] = tuple(destinations)

    @property
    @abstractmethod
    def kind(self) -> ApplicationKind:
        """应用类型标签"""
        pass

    @property
    @abstractmethod
    def interval(self) -> float:
        """发送周期 (us)"""
        pass

    @property
    @abstractmethod
    def deadline(self) -> float:
        """截止期 (us)，0 表示不在此处约束WCRT"""
        pass

    @property
    def title(self) -> str:
        return self._title

    @property
    def max_frame_size(self) -> int:
        return self._max_frame_size

    @property
    def frames_per_interval(self) -> int:
        return self._frames_per_interval

    @property
    def source(self) -> EndSystem:
        return self._source

    @property
    def destinations(self) -> Tuple[EndSystem, ...]:
        return self._destinations

    @property
    def alloc_mbps(self) -> float:
        """平均带宽需求 (Mbps == bit/us)"""
        return self._max_frame_size * 8 * self._frames_per_interval / self.interval

    def __repr__(self):
        dests = ", ".join(d.name for d in self._destinations)
        return (f"{self.kind.value} {self._title} ({self._frames_per_interval} x {self._max_frame_size}B / {self.interval:g}us)"
                f" ({self._source.name} -> [{dests}])")
