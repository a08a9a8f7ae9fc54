"""
有界 LRU 緩存

CorrectionEngine 的建議結果緩存。
與 functools.lru_cache 不同：
1. 以明確的 key 存取（小寫化後的輸入詞），可以單獨失效某一個 key
2. 每個實例擁有自己的容量與統計，不共享全域狀態
3. 提供命中率統計

用法：
    from spatialtext.utils.cache import LRUCache

    cache: LRUCache[str, list[str]] = LRUCache(capacity=100)
    cache.put("teh", ["the"])
    cache.get("teh")        # ["the"]
    cache.stats()["hit_rate"]
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Dict, Generic, Iterator, Optional, TypeVar

from spatialtext.core.errors import ConfigurationError

K = TypeVar("K")
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    以 OrderedDict 實作的 LRU 緩存

    - get() 命中時把 key 移到最新位置
    - put() 超過容量時淘汰最久未使用的一筆
    - 非執行緒安全：同一實例只應由單一呼叫者使用
    """

    def __init__(self, capacity: int = 100) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ConfigurationError(f"cache capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._data: "OrderedDict[K, V]" = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        # 不影響 LRU 順序與統計
        return key in self._data

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def get(self, key: K) -> Optional[V]:
        if key not in self._data:
            self._misses += 1
            return None
        self._hits += 1
        self._data.move_to_end(key)
        return self._data[key]

    def put(self, key: K, value: V) -> Optional[K]:
        """
        寫入一筆資料

        Returns:
            被淘汰的 key（沒有淘汰時為 None）
        """
        if key in self._data:
            self._data.move_to_end(key)
            self._data[key] = value
            return None

        evicted: Optional[K] = None
        if len(self._data) >= self._capacity:
            evicted, _ = self._data.popitem(last=False)
            self._evictions += 1

        self._data[key] = value
        return evicted

    def pop(self, key: K) -> Optional[V]:
        return self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def reset_stats(self) -> None:
        """只重置統計計數，不清除緩存內容"""
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "size": len(self._data),
            "capacity": self._capacity,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }
