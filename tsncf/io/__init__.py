"""
TSN 输入模块 - 网络描述文件加载
"""

from .loader import Network, load_network, parse_network

__all__ = ["Network", "load_network", "parse_network"]
