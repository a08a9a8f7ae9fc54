"""
Suggester Protocol

定義拼字建議器的最小介面（word -> suggestions），以及可替換的編輯距離函數型別。
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class DistanceFunction(Protocol):
    def __call__(self, s1: str, s2: str, max_distance: Optional[int] = None) -> int:
        """回傳 s1 與 s2 的編輯距離；超過 max_distance 時可回傳任何大於上限的值"""
        ...


@runtime_checkable
class SuggesterProtocol(Protocol):
    def suggest(self, word: str) -> list[str]:
        """為輸入詞彙產生有序的建議列表"""
        ...

    def learn(self, original: str, correction: str) -> None:
        """記住一組使用者修正"""
        ...
