from .suggester import DistanceFunction, SuggesterProtocol

__all__ = ["DistanceFunction", "SuggesterProtocol"]
