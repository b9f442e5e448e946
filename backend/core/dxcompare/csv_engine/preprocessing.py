# csv_engine/preprocessing.py
"""
Pasos de preprocesado aplicados a cada tabla antes de comparar.

Las eliminaciones sustituyen celdas por SENTINEL y nunca cambian las
posiciones. Las ordenaciones son estables y descendentes por valor numérico;
una ordenación posterior solo reordena filas empatadas en las anteriores.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Pattern, Type

from ..errors import CompareError
from .errors import CsvErrors
from .models import SENTINEL, Table
from .value import parse_quantity

logger = logging.getLogger(__name__)


class BaseStep(ABC):
    """Clase base de un paso de preprocesado."""

    name = "BaseStep"

    @classmethod
    def from_config(cls, value: Any) -> "BaseStep":
        """Construye el paso desde el valor asociado a su clave YAML."""
        return cls(value)

    @abstractmethod
    def apply(self, table: Table) -> Optional[CompareError]:
        """
        Aplica el paso sobre la tabla (in situ).

        Returns:
            Error fatal para la regla o None
        """
        pass

    def _column_by_name(self, table: Table, column_name: str):
        if table.header is None:
            return None, CsvErrors.missing_headers(self.name)
        column = table.column_index(column_name)
        if column is None:
            return None, CsvErrors.unknown_column(self.name, column_name)
        return column, None

    def _check_column(self, table: Table, column: int) -> Optional[CompareError]:
        if column < 0 or column >= table.num_columns:
            return CsvErrors.index_out_of_range(self.name, "columna", column, table.num_columns)
        return None

    def _check_row(self, table: Table, row: int) -> Optional[CompareError]:
        if row < 0 or row >= table.num_rows:
            return CsvErrors.index_out_of_range(self.name, "fila", row, table.num_rows)
        return None

    def __repr__(self):
        return f"<Step {self.name}>"


class ExtractHeaders(BaseStep):
    """Convierte la primera fila en encabezados si ninguna celda es numérica."""

    name = "ExtractHeaders"

    def __init__(self, value: Any = None):
        pass

    def apply(self, table: Table) -> Optional[CompareError]:
        if not table.rows:
            logger.warning("ExtractHeaders: tabla vacía, se omite")
            return None

        first_row = table.rows[0]
        for cell in first_row:
            if parse_quantity(cell, table.decimal_separator) is not None:
                logger.warning(
                    f"ExtractHeaders: la celda '{cell}' es numérica, la primera fila no es encabezado"
                )
                return None

        table.header = table.rows.pop(0)
        table.header_map = {}
        for index, name in enumerate(table.header):
            table.header_map.setdefault(name, index)
        if table.sort_groups is not None:
            table.sort_groups = table.sort_groups[1:]
        return None


class DeleteColumnByNumber(BaseStep):
    name = "DeleteColumnByNumber"

    def __init__(self, column: int):
        self.column = _as_index(column, self.name)

    def apply(self, table: Table) -> Optional[CompareError]:
        error = self._check_column(table, self.column)
        if error:
            return error
        _delete_column(table, self.column)
        return None


class DeleteColumnByName(BaseStep):
    name = "DeleteColumnByName"

    def __init__(self, column_name: str):
        self.column_name = str(column_name)

    def apply(self, table: Table) -> Optional[CompareError]:
        column, error = self._column_by_name(table, self.column_name)
        if error:
            return error
        _delete_column(table, column)
        return None


class DeleteRowByNumber(BaseStep):
    name = "DeleteRowByNumber"

    def __init__(self, row: int):
        self.row = _as_index(row, self.name)

    def apply(self, table: Table) -> Optional[CompareError]:
        error = self._check_row(table, self.row)
        if error:
            return error
        table.rows[self.row] = [SENTINEL] * len(table.rows[self.row])
        return None


class DeleteRowByRegex(BaseStep):
    """Elimina toda fila en la que alguna celda coincide con la expresión."""

    name = "DeleteRowByRegex"

    def __init__(self, pattern: Any):
        self.pattern: Pattern[str] = _as_regex(pattern, self.name)

    def apply(self, table: Table) -> Optional[CompareError]:
        for index, row in enumerate(table.rows):
            if any(self.pattern.search(cell) for cell in row):
                table.rows[index] = [SENTINEL] * len(row)
        return None


class DeleteCellByNumber(BaseStep):
    name = "DeleteCellByNumber"

    def __init__(self, column: int, row: int):
        self.column = _as_index(column, self.name)
        self.row = _as_index(row, self.name)

    @classmethod
    def from_config(cls, value: Any) -> "DeleteCellByNumber":
        if not isinstance(value, dict) or set(value) != {"column", "row"}:
            raise ValueError(f"{cls.name} requiere las claves 'column' y 'row'")
        return cls(value["column"], value["row"])

    def apply(self, table: Table) -> Optional[CompareError]:
        error = self._check_row(table, self.row) or self._check_column(table, self.column)
        if error:
            return error
        table.rows[self.row][self.column] = SENTINEL
        return None


class DeleteCellByName(BaseStep):
    name = "DeleteCellByName"

    def __init__(self, header: str, row: int):
        self.header = str(header)
        self.row = _as_index(row, self.name)

    @classmethod
    def from_config(cls, value: Any) -> "DeleteCellByName":
        if not isinstance(value, dict) or set(value) != {"header", "row"}:
            raise ValueError(f"{cls.name} requiere las claves 'header' y 'row'")
        return cls(value["header"], value["row"])

    def apply(self, table: Table) -> Optional[CompareError]:
        column, error = self._column_by_name(table, self.header)
        if error:
            return error
        error = self._check_row(table, self.row)
        if error:
            return error
        table.rows[self.row][column] = SENTINEL
        return None


class SortByColumnNumber(BaseStep):
    name = "SortByColumnNumber"

    def __init__(self, column: int):
        self.column = _as_index(column, self.name)

    def apply(self, table: Table) -> Optional[CompareError]:
        error = self._check_column(table, self.column)
        if error:
            return error
        return _sort_by_column(table, self.column, self.name)


class SortByColumnName(BaseStep):
    name = "SortByColumnName"

    def __init__(self, column_name: str):
        self.column_name = str(column_name)

    def apply(self, table: Table) -> Optional[CompareError]:
        column, error = self._column_by_name(table, self.column_name)
        if error:
            return error
        return _sort_by_column(table, column, self.name)


def _as_index(value: Any, step: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{step}: se esperaba un índice entero no negativo, recibido {value!r}")
    return value


def _as_regex(value: Any, step: str) -> Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    try:
        return re.compile(str(value))
    except re.error as e:
        raise ValueError(f"{step}: expresión regular inválida {value!r}: {e}") from e


def _delete_column(table: Table, column: int) -> None:
    for row in table.rows:
        row[column] = SENTINEL
    # header_map conserva el nombre original
    if table.header is not None:
        table.header[column] = SENTINEL


def _sort_by_column(table: Table, column: int, step: str) -> Optional[CompareError]:
    values: List[float] = []
    for index, row in enumerate(table.rows):
        quantity = parse_quantity(row[column], table.decimal_separator)
        if quantity is None:
            return CsvErrors.non_numeric_sort_key(step, index, column, row[column])
        values.append(quantity.value)

    groups = table.sort_groups or [0] * len(table.rows)

    def sort_key(index: int):
        value = values[index]
        # Descendente; NaN al final de su grupo
        if math.isnan(value):
            return groups[index], 1, 0.0
        return groups[index], 0, -value

    order = sorted(range(len(table.rows)), key=sort_key)

    table.rows = [table.rows[i] for i in order]

    new_groups = []
    previous = None
    group_id = -1
    for i in order:
        key = sort_key(i)
        if key != previous:
            group_id += 1
            previous = key
        new_groups.append(group_id)
    table.sort_groups = new_groups
    return None


ALL_STEPS: Dict[str, Type[BaseStep]] = {
    step.name: step for step in (
        ExtractHeaders,
        DeleteColumnByNumber,
        DeleteColumnByName,
        DeleteRowByNumber,
        DeleteRowByRegex,
        DeleteCellByNumber,
        DeleteCellByName,
        SortByColumnNumber,
        SortByColumnName,
    )
}


def build_step(raw: Any) -> BaseStep:
    """
    Construye un paso desde su forma YAML ("ExtractHeaders" o {Nombre: valor}).

    Raises:
        ValueError: Si el paso no existe o su valor es inválido
    """
    if isinstance(raw, BaseStep):
        return raw
    if isinstance(raw, str):
        if raw != ExtractHeaders.name:
            raise ValueError(f"Paso de preprocesado desconocido o sin valor: {raw!r}")
        return ExtractHeaders()
    if isinstance(raw, dict) and len(raw) == 1:
        (name, value), = raw.items()
        step_class = ALL_STEPS.get(name)
        if step_class is None:
            raise ValueError(f"Paso de preprocesado desconocido: {name!r}")
        return step_class.from_config(value)
    raise ValueError(f"Paso de preprocesado inválido: {raw!r}")


def apply_steps(table: Table, steps: List[BaseStep]) -> Optional[CompareError]:
    """Aplica los pasos en orden; se detiene en el primer error."""
    for step in steps:
        error = step.apply(table)
        if error:
            logger.warning(f"Preprocesado interrumpido: {error.message}")
            return error
    return None
