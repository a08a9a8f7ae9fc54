"""
例外定義

兩個元件對任何輸入都有定義好的輸出，執行期不拋例外。
唯一的錯誤類別是建構時的設定錯誤。
"""


class ConfigurationError(ValueError):
    """建構時發現不合法的設定值（例如非正數的容量）"""
