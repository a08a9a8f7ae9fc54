"""
拼字建議範例

模擬使用者逐字輸入：每遇到單字邊界就對剛輸入完的詞產生建議，
並示範 learn() 與 on_timing 回呼。
"""

from spatialtext import CorrectionConfig, CorrectionEngine


def demo_basic_suggestions():
    """基本建議"""
    print("=" * 60)
    print("範例 1: 基本建議")
    print("=" * 60)

    engine = CorrectionEngine()
    for word in ["teh", "wierd", "recieve", "hte", "xylophonist"]:
        suggestions = engine.suggest(word)
        ranked = ", ".join(f"{s} ({engine.confidence(word, s):.2f})" for s in suggestions)
        print(f"{word:>12} -> {ranked or '(無建議)'}")
    print()


def demo_typing_session():
    """逐字輸入，在單字邊界時套用第一個建議"""
    print("=" * 60)
    print("範例 2: 逐字輸入")
    print("=" * 60)

    engine = CorrectionEngine()
    text = ""
    for ch in "I beleive teh answer is wierd ":
        if ch == " " and text:
            suggestions = engine.suggest_at_cursor(text, len(text))
            if suggestions:
                text, _ = engine.apply_suggestion(text, len(text), suggestions[0])
        text += ch
    print(f"結果: {text.strip()}")
    print()


def demo_learning():
    """學習使用者的修正"""
    print("=" * 60)
    print("範例 3: learn()")
    print("=" * 60)

    timing = []
    engine = CorrectionEngine(CorrectionConfig(on_timing=lambda op, elapsed: timing.append((op, elapsed))))

    print(f"學習前: pyton -> {engine.suggest('pyton')}")
    engine.learn("pyton", "python")
    print(f"學習後: pyton -> {engine.suggest('pyton')}")
    print(f"緩存統計: {engine.cache_stats()}")
    for op, elapsed in timing:
        print(f"  {op}: {elapsed * 1000:.3f} ms")
    print()


if __name__ == "__main__":
    demo_basic_suggestions()
    demo_typing_session()
    demo_learning()
