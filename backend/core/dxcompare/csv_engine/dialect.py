# csv_engine/dialect.py
"""
Detección de dialecto CSV (delimitador de campo y separador decimal).
"""

import logging
import re
from collections import Counter
from itertools import islice
from typing import Optional

from .models import CsvDialect
from .tokenizer import Tokenizer, UnterminatedLiteral

logger = logging.getLogger(__name__)


class DialectDetector:
    """Detecta el dialecto CSV a partir de las primeras filas."""

    # Candidatos en orden de prioridad para desempates
    DELIMITER_CANDIDATES = [';', ',', '\t', '|']
    DEFAULT_DELIMITER = ','

    DECIMAL_CANDIDATES = ['.', ',']
    DECIMAL_PATTERN = re.compile(r'\d([.,])\d')

    @classmethod
    def detect_delimiter(cls, text: str, sample_rows: int = 10) -> Optional[str]:
        """
        Elige el delimitador cuyo número modal de campos (> 1) es más consistente.

        Args:
            text: Contenido decodificado
            sample_rows: Filas analizadas por candidato

        Returns:
            Delimitador detectado o None si ningún candidato divide las filas
        """
        best = None
        best_score = 0.0

        for candidate in cls.DELIMITER_CANDIDATES:
            try:
                rows = list(islice(Tokenizer.iter_rows(text, candidate), sample_rows))
            except UnterminatedLiteral:
                logger.debug(f"Delimitador {candidate!r} descartado: literal sin cerrar")
                continue

            counts = Counter(len(row) for row in rows if row != [''])
            if not counts:
                continue

            modal_count, frequency = max(counts.items(), key=lambda item: (item[1], item[0]))
            if modal_count <= 1:
                continue

            score = frequency / sum(counts.values())
            if score > best_score:
                best, best_score = candidate, score

        return best

    @classmethod
    def detect_decimal_separator(cls, text: str, delimiter: str, sample_rows: int = 10) -> Optional[str]:
        """Separador decimal más frecuente entre dígitos; '.' gana los empates."""
        candidates = [c for c in cls.DECIMAL_CANDIDATES if c != delimiter]
        counts = {c: 0 for c in candidates}

        for line in text.split('\n')[:sample_rows]:
            for match in cls.DECIMAL_PATTERN.finditer(line):
                separator = match.group(1)
                if separator in counts:
                    counts[separator] += 1

        best = None
        for candidate in candidates:
            if counts[candidate] > 0 and (best is None or counts[candidate] > counts[best]):
                best = candidate
        return best

    @classmethod
    def resolve(cls, text: str, delimiter: Optional[str] = None,
                decimal_separator: Optional[str] = None, sample_rows: int = 10) -> CsvDialect:
        """
        Completa el dialecto: los valores explícitos tienen prioridad.

        Returns:
            CsvDialect del archivo
        """
        detected = False
        if delimiter is None:
            delimiter = cls.detect_delimiter(text, sample_rows)
            detected = True
            if delimiter is None:
                if text.strip():
                    logger.warning(
                        f"No se detectó delimitador, se usa '{cls.DEFAULT_DELIMITER}' (una sola columna)"
                    )
                delimiter = cls.DEFAULT_DELIMITER

        if decimal_separator is None:
            decimal_separator = cls.detect_decimal_separator(text, delimiter, sample_rows)

        return CsvDialect(
            delimiter=delimiter,
            decimal_separator=decimal_separator,
            delimiter_detected=detected
        )
