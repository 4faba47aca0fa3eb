"""
TSN 应用模块 - 时间触发(TT)与流预留(SR/AVB)流量描述
"""

from .base import Application, ApplicationKind
from .sr import SRApplication, SRType
from .tt import TTApplication, ExplicitPath

__all__ = [
    "Application",
    "ApplicationKind",
    "SRApplication",
    "SRType",
    "TTApplication",
    "ExplicitPath",
]
