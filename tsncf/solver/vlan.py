from typing import Sequence, Set, Tuple

from tsncf.application.base import Application
from tsncf.topology.base import Edge
from tsncf.topology.path import GraphPath
from tsncf.utils.exceptions import InvalidRoutingError


class VLAN:
    """应用与其路由的绑定: 每个目的节点恰好一条路径，顺序与目的节点一致"""

    def __init__(self, application: Application, routings: Sequence[GraphPath]):
        routings = tuple(routings)
        if len(routings) != len(application.destinations):
            raise InvalidRoutingError(
                application.title,
                message=f"Expected {len(application.destinations)} routings, got {len(routings)}",
            )
        for path, destination in zip(routings, application.destinations):
            if path.start is not application.source:
                raise InvalidRoutingError(application.title, message=f"Routing {path} does not start at {application.source.name}")
            if path.end is not destination:
                raise InvalidRoutingError(application.title, message=f"Routing {path} does not end at {destination.name}")
        self._application = application
        self._routings: Tuple[GraphPath, ...] = routings

    @property
    def application(self) -> Application:
        return self._application

    @property
    def routings(self) -> Tuple[GraphPath, ...]:
        return self._routings

    def unique_edges(self) -> Set[Edge]:
        """所有路由中不重复的链路 (多播共享的链路只计一次)"""
        return {edge for path in self._routings for edge in path}

    def __eq__(self, other):
        if not isinstance(other, VLAN):
            return NotImplemented
        return self._application is other._application and self._routings == other._routings

    def __hash__(self):
        return hash((id(self._application), self._routings))

    def __repr__(self):
        return repr(self._application)
