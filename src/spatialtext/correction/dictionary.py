"""
修正字典模組

集中管理內建的常見拼錯表、常用詞表與上下文接續詞表，
以及可透過 learn() 成長的 CorrectionDictionary。
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


class CorrectionTables:
    """內建詞表 - 集中管理英文拼字修正規則"""

    # 常見拼錯 -> [建議修正]
    # 格式: 小寫錯字 -> 依偏好排序的修正列表
    MISSPELLINGS: Dict[str, List[str]] = {
        "teh": ["the"],
        "recieve": ["receive"],
        "seperate": ["separate"],
        "occured": ["occurred"],
        "wierd": ["weird"],
        "accomodate": ["accommodate"],
        "begining": ["beginning"],
        "beleive": ["believe"],
        "buisness": ["business"],
        "calender": ["calendar"],
        "commited": ["committed"],
        "exaggerate": ["exaggerate"],
        "exhilarate": ["exhilarate"],
        "fourty": ["forty"],
        "freind": ["friend"],
        "independant": ["independent"],
        "knowlege": ["knowledge"],
        "liason": ["liaison"],
        "occassion": ["occasion"],
        "priviledge": ["privilege"],
        "pronounciation": ["pronunciation"],
        "restaraunt": ["restaurant"],
        "rythm": ["rhythm"],
        "tommorow": ["tomorrow"],
        "vaccuum": ["vacuum"],
        "wich": ["which"],
        "reccomend": ["recommend"],
        "seperated": ["separated"],
        "comparision": ["comparison"],
        "concious": ["conscious"],
        "dissapear": ["disappear"],
        "existant": ["existent"],
        "foriegn": ["foreign"],
        "goverment": ["government"],
        "hieght": ["height"],
        "immediatly": ["immediately"],
        "judgement": ["judgment"],
        "lenght": ["length"],
        "maintainance": ["maintenance"],
        "neccessary": ["necessary"],
        "noticable": ["noticeable"],
        "persue": ["pursue"],
        "posession": ["possession"],
        "prefered": ["preferred"],
        "reccommend": ["recommend"],
        "succesful": ["successful"],
        "tommorrow": ["tomorrow"],
        "tounge": ["tongue"],
        "truely": ["truly"],
        "untill": ["until"],
    }

    # 常用英文詞（模糊比對的候選來源）
    COMMON_WORDS: Tuple[str, ...] = (
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
        "how", "its", "may", "new", "now", "old", "see", "two", "way", "who",
        "boy", "did", "let", "put", "say", "she", "too", "use",
        "about", "after", "again", "air", "also", "america", "animal", "another",
        "answer", "any", "around", "ask", "away", "back", "because", "before",
        "big", "came", "change", "different", "does", "end", "even", "follow",
        "form", "found", "give", "good", "great", "hand", "help", "here", "home",
        "house", "just", "kind", "know", "land", "large", "last", "left", "life",
        "light", "little", "live", "man", "me", "means", "men", "most", "mother",
        "move", "much", "must", "name", "need", "next", "only", "other", "over",
        "part", "people", "place", "play", "right", "run", "said", "same", "saw",
        "school", "seem", "show", "small", "sound", "still", "such", "take",
        "tell", "that", "their", "them", "then", "there", "these", "they",
        "thing", "think", "this", "time", "under", "very", "want", "water",
        "well", "went", "were", "what", "when", "where", "which", "while",
        "will", "with", "word", "work", "world", "would", "write", "year", "your",
    )

    # 前一個詞 -> 常見接續詞（簡易 bigram）
    # 注意: key 區分大小寫，"I" 與 "i" 不同
    FOLLOW_UPS: Dict[str, List[str]] = {
        "the": ["quick", "big", "small", "best"],
        "I": ["am", "have", "think", "want"],
    }


class CorrectionDictionary:
    """
    錯字 -> 修正列表 的映射

    - key 一律小寫、唯一
    - 每個 key 的修正列表保持插入順序且不重複
    - 只有 learn() 會讓字典成長
    """

    def __init__(
        self,
        entries: Optional[Mapping[str, Sequence[str]]] = None,
        max_entries: Optional[int] = None,
    ):
        self._entries: Dict[str, List[str]] = {}
        self._max_entries = max_entries

        source = CorrectionTables.MISSPELLINGS if entries is None else entries
        for misspelling, corrections in source.items():
            key = misspelling.lower()
            bucket = self._entries.setdefault(key, [])
            for correction in corrections:
                value = correction.lower()
                if value not in bucket:
                    bucket.append(value)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def keys(self) -> Iterable[str]:
        return self._entries.keys()

    def corrections_for(self, word: str) -> List[str]:
        """回傳修正列表的副本（未知詞回傳空列表）"""
        return list(self._entries.get(word.lower(), ()))

    def learn(self, original: str, correction: str) -> bool:
        """
        新增一組修正

        Returns:
            是否真的改變了字典（重複學習、或新 key 超過上限時為 False）
        """
        key = original.lower()
        value = correction.lower()

        bucket = self._entries.get(key)
        if bucket is None:
            if self._max_entries is not None and len(self._entries) >= self._max_entries:
                return False
            self._entries[key] = [value]
            return True

        if value in bucket:
            return False
        bucket.append(value)
        return True

    def as_dict(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._entries.items()}
