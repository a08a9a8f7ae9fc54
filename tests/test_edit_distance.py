"""
編輯距離與相似度測試
"""
import pytest

from spatialtext.correction.distance import edit_distance, similarity


class TestEditDistance:
    """Levenshtein 距離基本性質"""

    @pytest.mark.parametrize(
        "a, b",
        [("kitten", "sitting"), ("teh", "the"), ("", "abc"), ("wierd", "weird"), ("flaw", "lawn")],
    )
    def test_symmetry(self, a, b):
        """測試距離對稱"""
        assert edit_distance(a, b) == edit_distance(b, a)

    def test_identity(self):
        """測試相同字串距離為 0"""
        for word in ["", "a", "receive", "pronunciation"]:
            assert edit_distance(word, word) == 0

    def test_empty_string(self):
        """測試空字串到任意字串的距離等於其長度"""
        assert edit_distance("", "") == 0
        assert edit_distance("", "abc") == 3
        assert edit_distance("hello", "") == 5

    def test_known_values(self):
        """測試經典範例"""
        assert edit_distance("kitten", "sitting") == 3
        assert edit_distance("teh", "the") == 2
        assert edit_distance("recieve", "receive") == 2
        assert edit_distance("cat", "cart") == 1


class TestEditDistanceCutoff:
    """距離上限（提早結束）"""

    def test_within_cutoff_returns_exact_distance(self):
        """測試未超過上限時回傳真實距離"""
        assert edit_distance("teh", "the", max_distance=2) == 2
        assert edit_distance("cat", "bat", max_distance=2) == 1

    def test_beyond_cutoff_returns_cutoff_plus_one(self):
        """測試超過上限時回傳 max_distance + 1"""
        assert edit_distance("kitten", "sitting", max_distance=1) == 2

    def test_length_difference_shortcut(self):
        """測試長度差已超過上限時不需計算"""
        assert edit_distance("a", "abcd", max_distance=1) == 2


class TestSimilarity:
    """相似度換算"""

    def test_identical(self):
        assert similarity("the", "the") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_partial(self):
        assert similarity("teh", "the") == pytest.approx(1 / 3)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0
