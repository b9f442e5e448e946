# text_engine/engine.py
"""
Comparación línea a línea con similitud de Damerau-Levenshtein normalizada.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple

from rapidfuzz.distance import DamerauLevenshtein

logger = logging.getLogger(__name__)


@dataclass
class LineMismatch:
    """Par de líneas por debajo del umbral (números de línea 1-based)."""
    nominal_line: int
    actual_line: int
    nominal: str
    actual: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nominal_line": self.nominal_line,
            "actual_line": self.actual_line,
            "nominal": self.nominal,
            "actual": self.actual,
            "similarity": self.similarity,
        }


@dataclass
class TextDiff:
    threshold: float
    nominal_lines: int
    actual_lines: int
    mismatches: List[LineMismatch] = field(default_factory=list)

    @property
    def line_count_mismatch(self) -> bool:
        return self.nominal_lines != self.actual_lines

    @property
    def passed(self) -> bool:
        return not self.line_count_mismatch and not self.mismatches

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "threshold": self.threshold,
            "nominal_lines": self.nominal_lines,
            "actual_lines": self.actual_lines,
            "line_count_mismatch": self.line_count_mismatch,
            "mismatches": [m.to_dict() for m in self.mismatches],
        }


def similarity(nominal: str, actual: str) -> float:
    """1 - distancia / longitud mayor; dos cadenas vacías son idénticas."""
    return DamerauLevenshtein.normalized_similarity(nominal, actual)


def filter_lines(lines: Sequence[str], ignore: Sequence[Pattern[str]]) -> List[Tuple[int, str]]:
    """Descarta las líneas que coinciden con algún patrón; conserva su número original."""
    return [
        (number, line)
        for number, line in enumerate(lines, start=1)
        if not any(pattern.search(line) for pattern in ignore)
    ]


class TextAlignmentEngine:
    """Alinea dos secuencias de líneas y aplica el umbral de similitud."""

    def __init__(self, threshold: float, ignore_lines: Optional[Sequence[Pattern[str]]] = None):
        self.threshold = threshold
        self.ignore_lines = list(ignore_lines or [])

    def compare_lines(self, nominal_lines: Sequence[str], actual_lines: Sequence[str]) -> TextDiff:
        """
        Compara las líneas restantes tras el filtrado.

        Si quedan cantidades distintas de líneas la comparación falla sin
        evaluar pares; si no, se registran todos los pares bajo el umbral.
        """
        nominal = filter_lines(nominal_lines, self.ignore_lines)
        actual = filter_lines(actual_lines, self.ignore_lines)

        diff = TextDiff(
            threshold=self.threshold,
            nominal_lines=len(nominal),
            actual_lines=len(actual)
        )

        if diff.line_count_mismatch:
            logger.info(f"Número de líneas distinto: nominal {len(nominal)}, actual {len(actual)}")
            return diff

        for (nominal_number, nominal_line), (actual_number, actual_line) in zip(nominal, actual):
            score = similarity(nominal_line, actual_line)
            if score < self.threshold:
                diff.mismatches.append(LineMismatch(
                    nominal_line=nominal_number,
                    actual_line=actual_number,
                    nominal=nominal_line,
                    actual=actual_line,
                    similarity=score
                ))

        return diff
