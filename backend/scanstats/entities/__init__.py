from .enums import AnalysisResult, StageOperator, StatisticName, TimeRange

__all__ = [
    "AnalysisResult",
    "StageOperator",
    "StatisticName",
    "TimeRange",
]
