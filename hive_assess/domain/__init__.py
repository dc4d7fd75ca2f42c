from hive_assess.domain.analysis import AnalysisResult, ConfidenceMetrics
from hive_assess.domain.snapshot import HistoryPoint, HiveContext, Snapshot

__all__ = ["AnalysisResult", "ConfidenceMetrics", "HistoryPoint", "HiveContext", "Snapshot"]
