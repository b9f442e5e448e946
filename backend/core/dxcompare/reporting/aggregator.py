# reporting/aggregator.py

"""
Acumulador de resultados y construcción del reporte final.
"""

import threading
from datetime import datetime
from typing import Dict, List

from ..models import ComparisonOutcome
from .models import CompareMetrics, CompareReport, ReportEntry, RuleSummary


class ReportAccumulator:
    """
    Recoge los resultados de las unidades de trabajo.

    add() es seguro entre hilos; finalize() devuelve las entradas en orden
    (regla, ruta relativa) sin importar el orden de llegada.
    """

    def __init__(self, rule_names: List[str]):
        self.rule_names = list(rule_names)
        self._entries: List[ReportEntry] = []
        self._lock = threading.Lock()

    def add(self, rule_index: int, relative_path: str, outcome: ComparisonOutcome) -> None:
        entry = ReportEntry(
            rule_index=rule_index,
            rule_name=self.rule_names[rule_index],
            relative_path=relative_path,
            outcome=outcome
        )
        with self._lock:
            self._entries.append(entry)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def finalize(self, nominal_root: str, actual_root: str) -> CompareReport:
        with self._lock:
            entries = sorted(self._entries, key=lambda e: (e.rule_index, e.relative_path))
        return ReportAggregator.create_report(entries, self.rule_names, nominal_root, actual_root)


class ReportAggregator:
    """Agrega resultados de comparación en un reporte estructurado."""

    @staticmethod
    def create_report(
        entries: List[ReportEntry],
        rule_names: List[str],
        nominal_root: str,
        actual_root: str
    ) -> CompareReport:
        """
        Crea el reporte a partir de las entradas ya ordenadas.

        Args:
            entries: Entradas en orden (regla, ruta relativa)
            rule_names: Nombres de regla en orden de configuración
            nominal_root: Carpeta de referencia
            actual_root: Carpeta comparada

        Returns:
            Reporte estructurado
        """
        report_id = f"compare_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        report = CompareReport(
            report_id=report_id,
            timestamp=datetime.now(),
            nominal_root=nominal_root,
            actual_root=actual_root,
            entries=list(entries)
        )

        report.rules = ReportAggregator._summarize_rules(entries, rule_names)
        report.metrics = ReportAggregator._calculate_metrics(entries, len(rule_names))
        report.summary = ReportAggregator._generate_summary(report.metrics, report.passed)

        return report

    @staticmethod
    def _summarize_rules(entries: List[ReportEntry], rule_names: List[str]) -> List[RuleSummary]:
        summaries = [RuleSummary(name=name) for name in rule_names]
        for entry in entries:
            summary = summaries[entry.rule_index]
            summary.total_files += 1
            if entry.passed:
                summary.passed_files += 1
            else:
                summary.failed_files += 1
        return summaries

    @staticmethod
    def _calculate_metrics(entries: List[ReportEntry], total_rules: int) -> CompareMetrics:
        """Calcula métricas del reporte."""
        metrics = CompareMetrics(total_rules=total_rules, total_files=len(entries))
        error_counts: Dict[str, int] = {}

        for entry in entries:
            if entry.passed:
                metrics.passed_files += 1
            else:
                metrics.failed_files += 1

            error = entry.outcome.error
            if error is not None:
                metrics.errored_files += 1
                error_counts[error.code] = error_counts.get(error.code, 0) + 1

        metrics.error_counts = error_counts
        return metrics

    @staticmethod
    def _generate_summary(metrics: CompareMetrics, passed: bool) -> str:
        """Genera resumen textual."""
        if passed:
            return (
                f"✅ Comparación superada: {metrics.total_files} archivos "
                f"en {metrics.total_rules} reglas"
            )

        summary = (
            f"❌ Comparación fallida: {metrics.failed_files} de {metrics.total_files} "
            f"archivos con diferencias"
        )
        if metrics.errored_files:
            summary += f" ({metrics.errored_files} con errores)"
        return summary
