"""
事件模型（Event Model）

元件預設不直接輸出到 stdout。
若需要得知「這次產生了哪些建議」「學到了什麼修正」，請使用事件回呼（event handler）。

回呼拋出的例外只會被記錄（logger.exception），不會中斷修正流程。
"""

from __future__ import annotations

from typing import Callable, List, Literal, TypedDict


class CorrectionEvent(TypedDict, total=False):
    type: Literal["suggestion", "learned", "invalidated"]
    engine: str

    # suggestion
    word: str
    suggestions: List[str]
    cached: bool

    # learned
    original: str
    correction: str
    created: bool


CorrectionEventHandler = Callable[[CorrectionEvent], None]
