"""
編輯距離工具

以 Levenshtein 套件計算單字元插入、刪除、替換的最少次數。
max_distance 會轉成 score_cutoff：距離超過上限時提早結束，
此時回傳值為 max_distance + 1（只保證「大於上限」，不是真實距離）。
"""

from typing import Optional

import Levenshtein


def edit_distance(s1: str, s2: str, max_distance: Optional[int] = None) -> int:
    """
    計算兩字串的 Levenshtein 距離

    Args:
        s1: 第一個字串
        s2: 第二個字串
        max_distance: 距離上限；超過時提早結束並回傳 max_distance + 1

    範例:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("kitten", "sitting", max_distance=1)
        2
    """
    if max_distance is None:
        return Levenshtein.distance(s1, s2)

    # 長度差本身就是距離下界
    if abs(len(s1) - len(s2)) > max_distance:
        return max_distance + 1
    return Levenshtein.distance(s1, s2, score_cutoff=max_distance)


def similarity(word: str, suggestion: str) -> float:
    """
    以編輯距離換算的相似度 (0.0 ~ 1.0)

    1 - distance / max(len(word), len(suggestion))，兩者皆為空字串時為 1.0
    """
    max_len = max(len(word), len(suggestion))
    if max_len == 0:
        return 1.0
    return 1.0 - edit_distance(word, suggestion) / max_len
