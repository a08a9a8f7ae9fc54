"""
游標所在單字的擷取與替換

呼叫端在「單字邊界」事件時用 current_word() 取出正在輸入的詞，
交給 CorrectionEngine.suggest()，再用 replace_word() 套用使用者選的建議。
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class WordSpan:
    word: str
    start: int
    end: int


class WordTokenizer:
    """以字母、數字與撇號組成的連續片段為一個單字"""

    WORD_PATTERN = re.compile(r"[\w']+", re.UNICODE)

    def tokenize(self, text: str) -> list[WordSpan]:
        return [WordSpan(m.group(0), m.start(), m.end()) for m in self.WORD_PATTERN.finditer(text)]

    def current_word(self, text: str, cursor: int) -> Optional[WordSpan]:
        """
        取出貼著游標的單字

        游標剛好落在單字結尾（例如輸入完 "teh" 還沒按空白）也算命中。
        空字串或游標旁沒有單字時回傳 None。
        """
        if not text:
            return None

        cursor = max(0, min(cursor, len(text)))
        for span in self.tokenize(text):
            if span.start <= cursor <= span.end:
                return span
            if span.start > cursor:
                break
        return None

    @staticmethod
    def replace_word(text: str, span: WordSpan, replacement: str) -> Tuple[str, int]:
        """
        以 replacement 取代 span 範圍

        Returns:
            (新文字, 新游標位置 = 替換後單字的結尾)
        """
        new_text = text[: span.start] + replacement + text[span.end :]
        return new_text, span.start + len(replacement)
