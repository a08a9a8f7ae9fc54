"""
核心抽象層

定義與具體元件無關的例外、事件與介面。
"""

from .errors import ConfigurationError
from .events import CorrectionEvent, CorrectionEventHandler
from .protocols import DistanceFunction, SuggesterProtocol

__all__ = [
    "ConfigurationError",
    "CorrectionEvent",
    "CorrectionEventHandler",
    "DistanceFunction",
    "SuggesterProtocol",
]
