"""
网络描述文件(YAML)加载。

文件格式::

    topology_id: demo
    default_capacity: 100        # Mbps, 可选
    end_systems: [ES1, ES2]
    bridges: [SW1]
    links:
      - [ES1, SW1]
      - {nodes: [SW1, ES2], capacity: 1000, duplex: true}
    applications:
      - {type: SR, title: video, frame_size: 256, frames: 1, class: A,
         modes: [normal], source: ES1, destinations: [ES2]}
      - {type: TT, title: ctrl, frame_size: 64, frames: 1,
         source: ES1, destinations: [ES2], explicit_path: [ES1, SW1, ES2]}
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from tsncf.application.base import Application
from tsncf.application.sr import SRApplication, SRType
from tsncf.application.tt import TTApplication, ExplicitPath, DEFAULT_TT_INTERVAL_US
from tsncf.config.loader import ConfigLoader
from tsncf.topology.base import EndSystem
from tsncf.topology.builder import TopologyBuilder
from tsncf.topology.graph import TopologyGraph
from tsncf.utils.exceptions import ConfigurationError, TSNConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Network:
    """加载结果: 拓扑与应用列表"""

    topology: TopologyGraph
    applications: List[Application] = field(default_factory=list)


def _end_system(builder: TopologyBuilder, name: str, title: str) -> EndSystem:
    node = builder.get_node(name)
    if node is None:
        raise ConfigurationError(f"Application {title}: unknown node '{name}'")
    if not isinstance(node, EndSystem):
        raise ConfigurationError(f"Application {title}: '{name}' is not an end system")
    return node


def _as_list(config: Dict[str, Any], key: str) -> List[Any]:
    value = config.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _parse_links(builder: TopologyBuilder, links: List[Any], default_capacity: float) -> None:
    for index, entry in enumerate(links):
        if isinstance(entry, (list, tuple)):
            entry = {"nodes": entry}
        if not isinstance(entry, dict) or len(entry.get("nodes", ())) != 2:
            raise ConfigurationError(f"Link #{index} must name exactly two nodes: {entry!r}")
        node_a, node_b = entry["nodes"]
        capacity = entry.get("capacity", default_capacity)
        builder.add_link(str(node_a), str(node_b), capacity_mbps=float(capacity), duplex=bool(entry.get("duplex", True)))


def _parse_application(builder: TopologyBuilder, index: int, entry: Any) -> Application:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Application #{index} must be a mapping: {entry!r}")
    title = entry.get("title")
    if not title:
        raise ConfigurationError(f"Application without title: {entry!r}")
    try:
        kind = str(entry["type"]).upper()
        source = _end_system(builder, entry["source"], title)
        destinations = [_end_system(builder, name, title) for name in entry["destinations"]]
        frame_size = int(entry["frame_size"])
        frames = int(entry.get("frames", 1))
    except KeyError as e:
        raise ConfigurationError(f"Application {title}: missing field {e}") from e

    if kind == "SR":
        modes = entry.get("modes", ["default"])
        return SRApplication(
            title,
            frame_size,
            frames,
            source,
            destinations,
            modes=[modes] if isinstance(modes, str) else modes,
            sr_type=SRType.from_name(str(entry.get("class", "A"))),
            interval=entry.get("interval"),
            deadline=entry.get("deadline"),
        )
    if kind == "TT":
        explicit_path = entry.get("explicit_path")
        return TTApplication(
            title,
            frame_size,
            frames,
            source,
            destinations,
            explicit_path=ExplicitPath(explicit_path) if explicit_path else None,
            interval=entry.get("interval", DEFAULT_TT_INTERVAL_US),
        )
    raise ConfigurationError(f"Application {title}: unsupported type '{entry['type']}'")


def parse_network(config: Dict[str, Any]) -> Network:
    """从已解析的字典构建Network"""
    builder = TopologyBuilder(str(config.get("topology_id", "network")))
    default_capacity = float(config.get("default_capacity", 100.0))
    try:
        for name in _as_list(config, "end_systems"):
            builder.add_end_system(str(name))
        for name in _as_list(config, "bridges"):
            builder.add_bridge(str(name))
        _parse_links(builder, _as_list(config, "links"), default_capacity)
        applications = [_parse_application(builder, index, entry) for index, entry in enumerate(_as_list(config, "applications"))]
    except ConfigurationError:
        raise
    except (ValueError, TypeError, TSNConfigurationError) as e:
        raise ConfigurationError(str(e)) from e

    topology = builder.build()
    logger.info(f"Loaded {topology} with {len(applications)} applications")
    return Network(topology, applications)


def load_network(path: Union[str, Path]) -> Network:
    """从YAML文件加载网络"""
    return parse_network(ConfigLoader().load_config(str(path)))
