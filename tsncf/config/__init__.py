"""
配置模块 - YAML配置文件读写
"""

from .loader import ConfigLoader, DEFAULT_CONFIG_PATH

__all__ = ["ConfigLoader", "DEFAULT_CONFIG_PATH"]
