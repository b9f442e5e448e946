# comparators/csv_comparator.py
"""
Adaptador del motor CSV a la interfaz de comparador.
"""

import logging
from pathlib import Path

from ..csv_engine import CsvLoader, TableComparator, apply_steps
from ..rules import CsvCompareConfig
from .base import BaseComparator

logger = logging.getLogger(__name__)


class CsvComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=CsvCompareConfig.KIND,
            description="Tablas CSV con tolerancias numéricas y preprocesado",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: CsvCompareConfig):
        sample_rows = self.settings.CSV_SNIFF_LINES
        tables = []

        for path in (nominal, actual):
            table, error = CsvLoader.load_table(
                path,
                delimiter=config.field_delimiter,
                decimal_separator=config.decimal_separator,
                sample_rows=sample_rows
            )
            if error:
                return self.failure(nominal, actual, error)

            # Cada tabla se preprocesa de forma independiente
            error = apply_steps(table, config.preprocessing)
            if error:
                return self.failure(nominal, actual, error)
            tables.append(table)

        comparator = TableComparator(config.comparison_modes, config.exclude_field_regex)
        diff = comparator.compare(*tables)

        if not diff.passed:
            logger.info(
                f"CSV con diferencias: {nominal.name} "
                f"({len(diff.failures)} celdas, {len(diff.header_failures)} encabezados)"
            )
        return self.outcome(nominal, actual, diff.passed, diff)
