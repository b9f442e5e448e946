# csv_engine/models.py
"""
Modelos de datos del motor CSV.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Valor que sustituye a las celdas eliminadas por el preprocesado
SENTINEL = "DELETED"


@dataclass(frozen=True)
class Quantity:
    """Valor numérico con unidad opcional ("1.5 mm")."""
    value: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class CsvDialect:
    """Dialecto resuelto para un archivo concreto."""
    delimiter: str
    decimal_separator: Optional[str] = None
    delimiter_detected: bool = False


class ModeKind(Enum):
    ABSOLUTE = "Absolute"
    RELATIVE = "Relative"
    IGNORE = "Ignore"


@dataclass(frozen=True)
class ComparisonMode:
    """Modo de tolerancia numérica."""
    kind: ModeKind
    threshold: float = 0.0

    @classmethod
    def absolute(cls, threshold: float) -> "ComparisonMode":
        return cls(ModeKind.ABSOLUTE, threshold)

    @classmethod
    def relative(cls, threshold: float) -> "ComparisonMode":
        return cls(ModeKind.RELATIVE, threshold)

    @classmethod
    def ignore(cls) -> "ComparisonMode":
        return cls(ModeKind.IGNORE)

    @classmethod
    def from_config(cls, raw: Any) -> "ComparisonMode":
        """
        Construye el modo desde su forma YAML: "Ignore", {"Absolute": t} o {"Relative": t}.

        Raises:
            ValueError: Si la forma no es reconocida o el umbral es negativo
        """
        if isinstance(raw, cls):
            return raw
        if raw == ModeKind.IGNORE.value:
            return cls.ignore()
        if isinstance(raw, dict) and len(raw) == 1:
            (name, threshold), = raw.items()
            if name in (ModeKind.ABSOLUTE.value, ModeKind.RELATIVE.value):
                if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
                    raise ValueError(f"Umbral no numérico en modo {name}: {threshold!r}")
                if threshold < 0 or math.isnan(threshold):
                    raise ValueError(f"Umbral negativo o inválido en modo {name}: {threshold}")
                return cls(ModeKind(name), float(threshold))
        raise ValueError(f"Modo de comparación desconocido: {raw!r}")

    def in_tolerance(self, nominal: float, actual: float) -> bool:
        """Evalúa el par numérico bajo este modo (comparaciones estrictas)."""
        if math.isnan(nominal) and math.isnan(actual):
            return True

        if self.kind == ModeKind.IGNORE:
            return True

        # Valores idénticos (incluido cero/cero) son válidos con cualquier umbral
        if nominal == actual:
            return True

        diff = abs(nominal - actual)
        if self.kind == ModeKind.ABSOLUTE:
            return diff < self.threshold

        if nominal == 0.0:
            return False
        return diff / abs(nominal) < self.threshold

    def __str__(self):
        if self.kind == ModeKind.IGNORE:
            return self.kind.value
        return f"{self.kind.value}({self.threshold})"


@dataclass
class Table:
    """
    Tabla rectangular de celdas en texto crudo.

    header y header_map solo existen tras ExtractHeaders. sort_groups guarda
    el grupo de empate de cada fila para encadenar ordenaciones.
    """
    rows: List[List[str]]
    decimal_separator: Optional[str] = None
    header: Optional[List[str]] = None
    header_map: Dict[str, int] = field(default_factory=dict)
    sort_groups: Optional[List[int]] = None

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_columns(self) -> int:
        if self.header is not None:
            return len(self.header)
        return len(self.rows[0]) if self.rows else 0

    def column_index(self, name: str) -> Optional[int]:
        return self.header_map.get(name)


class DiffKind(Enum):
    UNEQUAL_STRINGS = "UNEQUAL_STRINGS"
    DIFFERENT_VALUE_TYPES = "DIFFERENT_VALUE_TYPES"
    UNIT_MISMATCH = "UNIT_MISMATCH"
    OUT_OF_TOLERANCE = "OUT_OF_TOLERANCE"
    UNEQUAL_HEADER = "UNEQUAL_HEADER"


@dataclass
class CellComparison:
    """Resultado de una posición (fila, columna) de la tabla."""
    row: int
    column: int
    nominal: str
    actual: str
    passed: bool
    kind: Optional[DiffKind] = None
    excluded: bool = False
    modes: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "column": self.column,
            "nominal": self.nominal,
            "actual": self.actual,
            "passed": self.passed,
            "kind": self.kind.value if self.kind else None,
            "excluded": self.excluded,
            "modes": dict(self.modes),
        }


@dataclass
class HeaderComparison:
    column: int
    nominal: str
    actual: str
    passed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "nominal": self.nominal,
            "actual": self.actual,
            "passed": self.passed,
            "kind": None if self.passed else DiffKind.UNEQUAL_HEADER.value,
        }


@dataclass
class ShapeMismatch:
    """Diferencia de dimensiones; impide la comparación celda a celda."""
    nominal_rows: int
    actual_rows: int
    row: Optional[int] = None
    nominal_columns: Optional[int] = None
    actual_columns: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nominal_rows": self.nominal_rows,
            "actual_rows": self.actual_rows,
            "row": self.row,
            "nominal_columns": self.nominal_columns,
            "actual_columns": self.actual_columns,
        }


@dataclass
class CsvDiff:
    """Mapa completo de posiciones comparadas de un par de tablas."""
    cells: List[CellComparison] = field(default_factory=list)
    headers: List[HeaderComparison] = field(default_factory=list)
    shape_mismatch: Optional[ShapeMismatch] = None

    @property
    def failures(self) -> List[CellComparison]:
        return [cell for cell in self.cells if not cell.passed]

    @property
    def header_failures(self) -> List[HeaderComparison]:
        return [h for h in self.headers if not h.passed]

    @property
    def passed(self) -> bool:
        if self.shape_mismatch is not None:
            return False
        return not self.failures and not self.header_failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "shape_mismatch": self.shape_mismatch.to_dict() if self.shape_mismatch else None,
            "headers": [h.to_dict() for h in self.headers],
            "cells": [cell.to_dict() for cell in self.cells],
        }
