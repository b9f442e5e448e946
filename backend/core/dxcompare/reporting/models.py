# reporting/models.py

"""
Modelos de datos para reporting.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..models import ComparisonOutcome


@dataclass
class ReportEntry:
    """Resultado de un archivo bajo una regla."""
    rule_index: int
    rule_name: str
    relative_path: str
    outcome: ComparisonOutcome

    @property
    def passed(self) -> bool:
        return self.outcome.passed

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "rule": self.rule_name,
            "relative_path": self.relative_path,
            "passed": self.passed,
            "outcome": self.outcome.to_dict()
        }


@dataclass
class RuleSummary:
    name: str
    total_files: int = 0
    passed_files: int = 0
    failed_files: int = 0

    @property
    def passed(self) -> bool:
        return self.failed_files == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "total_files": self.total_files,
            "passed_files": self.passed_files,
            "failed_files": self.failed_files
        }


@dataclass
class CompareMetrics:
    """Métricas de una ejecución."""
    total_rules: int = 0
    total_files: int = 0
    passed_files: int = 0
    failed_files: int = 0
    errored_files: int = 0
    error_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_rules": self.total_rules,
            "total_files": self.total_files,
            "passed_files": self.passed_files,
            "failed_files": self.failed_files,
            "errored_files": self.errored_files,
            "error_counts": dict(self.error_counts)
        }


@dataclass
class CompareReport:
    """Reporte completo: entradas ordenadas y veredicto global."""
    report_id: str
    timestamp: datetime
    nominal_root: str
    actual_root: str
    entries: List[ReportEntry] = field(default_factory=list)
    rules: List[RuleSummary] = field(default_factory=list)
    metrics: CompareMetrics = field(default_factory=CompareMetrics)
    summary: str = ""

    @property
    def passed(self) -> bool:
        """AND de todos los resultados registrados."""
        return all(entry.passed for entry in self.entries)

    def failures(self) -> List[ReportEntry]:
        return [entry for entry in self.entries if not entry.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "timestamp": self.timestamp.isoformat(),
            "nominal_root": self.nominal_root,
            "actual_root": self.actual_root,
            "passed": self.passed,
            "metrics": self.metrics.to_dict(),
            "rules": [rule.to_dict() for rule in self.rules],
            "entries": [entry.to_dict() for entry in self.entries],
            "summary": self.summary
        }
