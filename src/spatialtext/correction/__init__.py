"""
拼字建議模組

以編輯距離為基礎的英文拼字建議：字典精確命中 + 常用詞模糊比對 + LRU 緩存。

主要類別:
- CorrectionEngine: 拼字建議引擎
- CorrectionDictionary: 可學習的錯字 -> 修正字典
- CorrectionTables: 內建錯字表、常用詞表、接續詞表
- WordTokenizer: 游標所在單字的擷取與替換
"""

from .dictionary import CorrectionDictionary, CorrectionTables
from .distance import edit_distance, similarity
from .engine import CorrectionEngine
from .tokenizer import WordSpan, WordTokenizer

__all__ = [
    "CorrectionEngine",
    "CorrectionDictionary",
    "CorrectionTables",
    "WordTokenizer",
    "WordSpan",
    "edit_distance",
    "similarity",
]
