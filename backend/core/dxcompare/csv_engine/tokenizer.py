# csv_engine/tokenizer.py
"""
Tokenizador CSV con soporte de campos entre comillas.

Reglas:
    - Un campo cuyo primer carácter no blanco es '"' es un literal: puede
      contener delimitadores y saltos de línea. Dentro de él \\" y \\\\ son
      los únicos escapes. El texto tras la comilla de cierre hasta el
      siguiente delimitador se añade tal cual.
    - Los campos sin comillas se recortan; la barra invertida es literal.
    - Las líneas vacías finales se descartan.
"""

from typing import Iterator, List, Optional, Tuple

from ..errors import CompareError, DxCompareError
from .errors import CsvErrors

QUOTE = '"'
ESCAPE = '\\'
BLANKS = ' \t'


class UnterminatedLiteral(DxCompareError):
    """Campo entre comillas sin comilla de cierre."""

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"Comillas sin cerrar desde la línea {line}")


class Tokenizer:
    """Divide el texto decodificado en filas y campos."""

    @staticmethod
    def iter_rows(text: str, delimiter: str) -> Iterator[List[str]]:
        """
        Genera las filas del texto de forma perezosa.

        Raises:
            UnterminatedLiteral: Si un literal no se cierra antes del final
        """
        n = len(text)
        i = 0
        row: List[str] = []

        while True:
            j = i
            while j < n and text[j] in BLANKS and text[j] != delimiter:
                j += 1

            if j < n and text[j] == QUOTE:
                k = j + 1
                buffer = []
                while True:
                    if k >= n:
                        raise UnterminatedLiteral(text.count('\n', 0, j) + 1)
                    c = text[k]
                    if c == ESCAPE and k + 1 < n and text[k + 1] in (QUOTE, ESCAPE):
                        buffer.append(text[k + 1])
                        k += 2
                        continue
                    if c == QUOTE:
                        k += 1
                        break
                    buffer.append(c)
                    k += 1

                end = k
                while end < n and text[end] != delimiter and text[end] != '\n':
                    end += 1
                value = ''.join(buffer) + text[k:end]
            else:
                end = i
                while end < n and text[end] != delimiter and text[end] != '\n':
                    end += 1
                value = text[i:end].strip()

            row.append(value)

            if end < n and text[end] == delimiter:
                i = end + 1
                continue

            yield row
            row = []
            i = end + 1
            if i >= n:
                return

    @classmethod
    def tokenize(cls, text: str, delimiter: str) -> Tuple[Optional[List[List[str]]], Optional[CompareError]]:
        """
        Tokeniza el texto completo y valida que la tabla sea rectangular.

        Args:
            text: Contenido sin BOM ni retornos de carro
            delimiter: Delimitador de campo

        Returns:
            Tupla (filas, error)
        """
        try:
            rows = list(cls.iter_rows(text, delimiter))
        except UnterminatedLiteral as e:
            return None, CsvErrors.unterminated_literal(e.line)

        while rows and rows[-1] == ['']:
            rows.pop()

        if rows:
            expected = len(rows[0])
            for row_index, row in enumerate(rows):
                if len(row) != expected:
                    return None, CsvErrors.unstable_column_count(row_index, expected, len(row))

        return rows, None
