# csv_engine/comparator.py
"""
Comparación tolerante celda a celda de dos tablas preprocesadas.
"""

import math
from typing import Optional, Pattern, Sequence

from .models import (
    CellComparison, ComparisonMode, CsvDiff, DiffKind, HeaderComparison,
    ShapeMismatch, Table
)
from .value import parse_quantity


class TableComparator:
    """Compara dos tablas con modos de tolerancia y exclusión por regex."""

    def __init__(self, modes: Sequence[ComparisonMode] = (),
                 exclude_pattern: Optional[Pattern[str]] = None):
        self.modes = list(modes)
        self.exclude_pattern = exclude_pattern

    def compare(self, nominal: Table, actual: Table) -> CsvDiff:
        """
        Compara nominal contra actual.

        Las dimensiones deben coincidir (filas y columnas por fila); si no,
        el diff solo contiene la diferencia de forma.
        """
        diff = CsvDiff()

        if nominal.num_rows != actual.num_rows:
            diff.shape_mismatch = ShapeMismatch(nominal.num_rows, actual.num_rows)
            return diff

        for row_index, (nominal_row, actual_row) in enumerate(zip(nominal.rows, actual.rows)):
            if len(nominal_row) != len(actual_row):
                diff.shape_mismatch = ShapeMismatch(
                    nominal.num_rows, actual.num_rows,
                    row=row_index,
                    nominal_columns=len(nominal_row),
                    actual_columns=len(actual_row)
                )
                return diff

        if nominal.header is not None and actual.header is not None:
            for column, (nominal_name, actual_name) in enumerate(zip(nominal.header, actual.header)):
                diff.headers.append(HeaderComparison(
                    column=column,
                    nominal=nominal_name,
                    actual=actual_name,
                    passed=nominal_name == actual_name
                ))

        for row_index, (nominal_row, actual_row) in enumerate(zip(nominal.rows, actual.rows)):
            for column, (nominal_cell, actual_cell) in enumerate(zip(nominal_row, actual_row)):
                diff.cells.append(self.compare_cells(
                    row_index, column, nominal_cell, actual_cell,
                    nominal.decimal_separator, actual.decimal_separator
                ))

        return diff

    def compare_cells(self, row: int, column: int, nominal_cell: str, actual_cell: str,
                      nominal_separator: Optional[str] = None,
                      actual_separator: Optional[str] = None) -> CellComparison:
        result = CellComparison(
            row=row, column=column, nominal=nominal_cell, actual=actual_cell, passed=True
        )

        if self._is_excluded(nominal_cell) or self._is_excluded(actual_cell):
            result.excluded = True
            return result

        nominal_value = parse_quantity(nominal_cell, nominal_separator)
        actual_value = parse_quantity(actual_cell, actual_separator)

        if nominal_value is not None and actual_value is not None:
            if nominal_value.unit != actual_value.unit:
                result.passed = False
                result.kind = DiffKind.UNIT_MISMATCH
                return result

            if math.isnan(nominal_value.value) and math.isnan(actual_value.value):
                return result

            for mode in self.modes:
                in_tolerance = mode.in_tolerance(nominal_value.value, actual_value.value)
                result.modes[str(mode)] = in_tolerance
                if not in_tolerance:
                    result.passed = False
                    result.kind = DiffKind.OUT_OF_TOLERANCE
            return result

        if nominal_cell != actual_cell:
            result.passed = False
            if (nominal_value is None) != (actual_value is None):
                result.kind = DiffKind.DIFFERENT_VALUE_TYPES
            else:
                result.kind = DiffKind.UNEQUAL_STRINGS
        return result

    def _is_excluded(self, cell: str) -> bool:
        return self.exclude_pattern is not None and self.exclude_pattern.search(cell) is not None
