from .aggregator import ReportAccumulator, ReportAggregator
from .models import CompareMetrics, CompareReport, ReportEntry, RuleSummary

__all__ = [
    'CompareMetrics',
    'CompareReport',
    'ReportAccumulator',
    'ReportAggregator',
    'ReportEntry',
    'RuleSummary'
]
