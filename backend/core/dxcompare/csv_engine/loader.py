# csv_engine/loader.py
"""
Punto de entrada del motor CSV: archivo -> Table.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..encoding import EncodingResolver
from ..errors import CompareError, CompareErrors
from .dialect import DialectDetector
from .models import Table
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class CsvLoader:
    """Carga un CSV en una tabla rectangular de celdas crudas."""

    @classmethod
    def load_table(
        cls,
        file_path: Path,
        delimiter: Optional[str] = None,
        decimal_separator: Optional[str] = None,
        sample_rows: int = 10
    ) -> Tuple[Optional[Table], Optional[CompareError]]:
        """
        Carga un CSV.

        Args:
            file_path: Ruta al archivo CSV
            delimiter: Delimitador explícito (None = autodetección)
            decimal_separator: Separador decimal explícito (None = autodetección)
            sample_rows: Filas usadas para la autodetección

        Returns:
            Tupla (Table, error)
        """
        try:
            raw_data = Path(file_path).read_bytes()
        except OSError as e:
            return None, CompareErrors.file_io_error(str(file_path), e)

        text, encoding = EncodingResolver.decode(raw_data)
        logger.debug(f"{file_path}: codificación {encoding}")
        return cls.load_text(text, delimiter, decimal_separator, sample_rows, source=str(file_path))

    @classmethod
    def load_text(
        cls,
        text: str,
        delimiter: Optional[str] = None,
        decimal_separator: Optional[str] = None,
        sample_rows: int = 10,
        source: str = "<texto>"
    ) -> Tuple[Optional[Table], Optional[CompareError]]:
        """Igual que load_table pero sobre texto ya decodificado."""
        dialect = DialectDetector.resolve(text, delimiter, decimal_separator, sample_rows)
        logger.debug(
            f"{source}: delimitador {dialect.delimiter!r}, decimal {dialect.decimal_separator!r}"
        )

        rows, error = Tokenizer.tokenize(text, dialect.delimiter)
        if error:
            logger.warning(f"{source}: {error.message}")
            return None, error

        return Table(rows=rows, decimal_separator=dialect.decimal_separator), None
