"""
拼字建議引擎 (CorrectionEngine)

從一個可能拼錯的單字產生最多 N 個建議：
1. 字典精確命中：錯字表中的修正直接列為候選
2. 模糊比對：與常用詞表、以及錯字表的 key（錯字本身）計算編輯距離，
   保留距離在 [1, max_distance] 的詞
3. 去重後依 (距離, 字母序) 排序並截斷；精確命中的修正視為距離 0
4. 結果寫入 LRU 緩存，命中緩存時完全不重新計算

使用方式:
    from spatialtext import CorrectionEngine

    engine = CorrectionEngine()
    engine.suggest("teh")            # ['the']
    engine.learn("pyton", "python")
    engine.confidence("teh", "the")  # 0.333...
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from spatialtext.config import CorrectionConfig
from spatialtext.core.component import Component
from spatialtext.core.events import CorrectionEventHandler
from spatialtext.core.protocols import DistanceFunction
from spatialtext.utils.cache import LRUCache

from .dictionary import CorrectionDictionary, CorrectionTables
from .distance import edit_distance
from .tokenizer import WordTokenizer


class CorrectionEngine(Component):
    """
    拼字建議引擎

    功能:
    - suggest(): 有序、不重複、最多 max_suggestions 個建議，且不含輸入詞本身
    - learn(): 把使用者的修正加進字典
    - confidence(): 以編輯距離估計建議的可信度
    - contextual_suggestions(): 依前一個詞給出常見接續詞
    - apply_suggestion(): 把建議套用回游標所在的單字

    字典、常用詞表與緩存皆為實例私有，不與其他實例共享。
    非執行緒安全，同一實例只應由單一呼叫者使用。
    """

    _component_name = "engine.correction"

    def __init__(
        self,
        config: Optional[CorrectionConfig] = None,
        *,
        dictionary: Optional[Mapping[str, Sequence[str]]] = None,
        common_words: Optional[Iterable[str]] = None,
        follow_ups: Optional[Mapping[str, Sequence[str]]] = None,
        distance: Optional[DistanceFunction] = None,
        on_event: Optional[CorrectionEventHandler] = None,
    ):
        self._config = config or CorrectionConfig()
        self._init_logger(verbose=self._config.verbose, on_timing=self._config.on_timing)

        with self._log_timing("CorrectionEngine.__init__"):
            self._dictionary = CorrectionDictionary(
                dictionary, max_entries=self._config.max_dictionary_entries
            )

            words = CorrectionTables.COMMON_WORDS if common_words is None else common_words
            # 保持順序去重；輸入會先小寫化，所以詞表也只保留小寫
            self._common_words: Tuple[str, ...] = tuple(dict.fromkeys(w.lower() for w in words if w))

            source = CorrectionTables.FOLLOW_UPS if follow_ups is None else follow_ups
            self._follow_ups: Dict[str, List[str]] = {k: list(v) for k, v in source.items()}

            self._distance: DistanceFunction = distance or edit_distance
            self._cache: LRUCache[str, Tuple[str, ...]] = LRUCache(self._config.cache_capacity)
            self._tokenizer = WordTokenizer()
            self._on_event = on_event

            self._logger.info(
                f"CorrectionEngine initialized "
                f"({len(self._dictionary)} misspellings, {len(self._common_words)} common words)"
            )

    @property
    def config(self) -> CorrectionConfig:
        return self._config

    @property
    def dictionary(self) -> CorrectionDictionary:
        return self._dictionary

    @property
    def common_words(self) -> Tuple[str, ...]:
        return self._common_words

    @property
    def tokenizer(self) -> WordTokenizer:
        return self._tokenizer

    # ------------------------------------------------------------------
    # 建議
    # ------------------------------------------------------------------

    def suggest(self, word: str) -> List[str]:
        """
        為 word 產生建議

        Returns:
            最多 max_suggestions 個建議；沒有建議時為空列表
        """
        key = word.lower()
        if not key.strip():
            return []

        cached = self._cache.get(key)
        if cached is not None:
            self._logger.debug(f"[Cache] hit '{key}' -> {list(cached)}")
            self._emit_suggestion(key, cached, cached=True)
            return list(cached)

        with self._log_timing("CorrectionEngine.suggest"):
            result = tuple(self._rank_candidates(key))

        evicted = self._cache.put(key, result)
        if evicted is not None:
            self._logger.debug(f"[Cache] evicted '{evicted}'")
        self._logger.debug(f"[Cache] miss '{key}' -> {list(result)}")

        self._emit_suggestion(key, result, cached=False)
        return list(result)

    def _rank_candidates(self, key: str) -> List[str]:
        ranks: Dict[str, int] = {}

        # 1. 字典精確命中（不受「距離 > 0」限制）
        for correction in self._dictionary.corrections_for(key):
            ranks[correction] = 0

        # 2. 模糊比對：常用詞 + 字典中的錯字 key
        for candidate in self._fuzzy_pool():
            if candidate in ranks:
                continue
            dist = self._distance(key, candidate, max_distance=self._config.max_distance)
            if 0 < dist <= self._config.max_distance:
                ranks[candidate] = dist

        # 輸入詞本身永遠不是建議（例如 "exaggerate" -> ["exaggerate"]）
        ranks.pop(key, None)

        ordered = sorted(ranks.items(), key=lambda item: (item[1], item[0]))
        return [candidate for candidate, _ in ordered[: self._config.max_suggestions]]

    def _fuzzy_pool(self) -> Iterable[str]:
        seen = set()
        for candidate in self._common_words:
            seen.add(candidate)
            yield candidate
        for misspelling in self._dictionary.keys():
            if misspelling not in seen:
                yield misspelling

    def confidence(self, word: str, suggestion: str) -> float:
        """
        建議的可信度 (0.0 ~ 1.0)

        1 - distance / max(len(word), len(suggestion))，比較時不分大小寫
        """
        a = word.lower()
        b = suggestion.lower()
        max_len = max(len(a), len(b))
        if max_len == 0:
            return 1.0
        return 1.0 - self._distance(a, b) / max_len

    def contextual_suggestions(self, word: str, previous_words: Sequence[str] = ()) -> List[str]:
        """
        依前一個詞給出常見接續詞

        目前只看 previous_words 的最後一個詞（區分大小寫），word 本身不參與判斷。
        """
        _ = word
        if not previous_words:
            return []
        return list(self._follow_ups.get(previous_words[-1], ()))

    # ------------------------------------------------------------------
    # 學習與緩存
    # ------------------------------------------------------------------

    def learn(self, original: str, correction: str) -> None:
        """
        記住一組修正（兩者皆小寫化）

        已存在的修正不會重複加入。invalidate_on_learn 開啟時：
        - 追加到既有 key：只讓該 key 的緩存失效
        - 新增 key：新 key 也是其他詞的模糊比對候選，因此清空整個緩存
        """
        key = original.lower()
        existed = key in self._dictionary
        changed = self._dictionary.learn(original, correction)
        if not changed:
            self._logger.debug(f"[Learn] no-op '{key}' -> '{correction.lower()}'")
            return

        self._logger.debug(f"[Learn] '{key}' -> '{correction.lower()}'")
        if self._config.invalidate_on_learn:
            if existed:
                self.invalidate(key)
            else:
                self.clear_cache()

        self._emit(
            self._on_event,
            {
                "type": "learned",
                "engine": self._component_name,
                "original": key,
                "correction": correction.lower(),
                "created": not existed,
            },
        )

    def invalidate(self, word: str) -> bool:
        """讓單一詞的緩存失效，回傳是否真的有移除"""
        removed = self._cache.pop(word.lower()) is not None
        if removed:
            self._emit(
                self._on_event,
                {"type": "invalidated", "engine": self._component_name, "word": word.lower()},
            )
        return removed

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> Dict[str, Any]:
        return self._cache.stats()

    # ------------------------------------------------------------------
    # 文字套用
    # ------------------------------------------------------------------

    def suggest_at_cursor(self, text: str, cursor: int) -> List[str]:
        """對游標所在的單字呼叫 suggest()，沒有單字時回傳空列表"""
        span = self._tokenizer.current_word(text, cursor)
        if span is None:
            return []
        return self.suggest(span.word)

    def apply_suggestion(self, text: str, cursor: int, suggestion: str) -> Tuple[str, int]:
        """
        以 suggestion 取代游標所在的單字

        Returns:
            (新文字, 新游標位置)；游標旁沒有單字時原樣回傳
        """
        span = self._tokenizer.current_word(text, cursor)
        if span is None:
            return text, cursor
        return self._tokenizer.replace_word(text, span, suggestion)

    def _emit_suggestion(self, key: str, suggestions: Sequence[str], *, cached: bool) -> None:
        self._emit(
            self._on_event,
            {
                "type": "suggestion",
                "engine": self._component_name,
                "word": key,
                "suggestions": list(suggestions),
                "cached": cached,
            },
        )
