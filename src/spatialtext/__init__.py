"""
spatialtext - 空間文字輸入的計算核心 (Spatial Text Input Core)

兩個彼此獨立的元件：
- CorrectionEngine：以編輯距離為基礎的拼字建議（字典精確命中 + 模糊比對 + LRU 緩存）
- MotionSmoother：視線/指標追蹤樣本的遞迴平滑、預測與離群值剔除

兩者只收發純資料（字串、三維向量、時間戳），不依賴任何繪圖或視窗迴圈。

官方入口（穩定 API）：
- `spatialtext.CorrectionEngine`
- `spatialtext.MotionSmoother`
"""

# =============================================================================
# 元件（官方入口）
# =============================================================================
from spatialtext.correction import CorrectionEngine
from spatialtext.motion import MotionSmoother

# =============================================================================
# 配置與例外
# =============================================================================
from spatialtext.config import CorrectionConfig, SmootherConfig
from spatialtext.core.errors import ConfigurationError

# =============================================================================
# 日誌工具
# =============================================================================
from spatialtext.utils.logger import enable_debug_logging, enable_timing_logging, get_logger

# =============================================================================
# 資料結構與事件（進階用途）
# =============================================================================
from spatialtext.core.events import CorrectionEvent, CorrectionEventHandler
from spatialtext.motion.types import FilterState, PositionSample

__all__ = [
    # Components
    "CorrectionEngine",
    "MotionSmoother",
    # Config
    "CorrectionConfig",
    "SmootherConfig",
    "ConfigurationError",
    # Logging
    "get_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    # Advanced
    "CorrectionEvent",
    "CorrectionEventHandler",
    "FilterState",
    "PositionSample",
]

__version__ = "0.1.0"
