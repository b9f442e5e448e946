# dxcompare/models.py
"""
Resultado de comparar un par de archivos.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import CompareError


@dataclass(frozen=True)
class ComparisonOutcome:
    """
    Veredicto de un comparador para un par (nominal, actual).

    diff es la carga específica del comparador (CsvDiff, TextDiff, ...) y
    error solo existe cuando el par no pudo evaluarse.
    """
    passed: bool
    comparator: str
    nominal: str
    actual: str
    diff: Optional[Any] = None
    error: Optional[CompareError] = None

    @classmethod
    def failure(cls, comparator: str, nominal: str, actual: str,
                error: CompareError) -> "ComparisonOutcome":
        return cls(passed=False, comparator=comparator, nominal=nominal,
                   actual=actual, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para serialización."""
        diff = self.diff.to_dict() if hasattr(self.diff, "to_dict") else self.diff
        return {
            "passed": self.passed,
            "comparator": self.comparator,
            "nominal": self.nominal,
            "actual": self.actual,
            "diff": diff,
            "error": self.error.to_dict() if self.error else None,
        }
