# csv_engine/value.py
"""
Interpretación numérica de celdas.
"""

import re
from typing import Optional

from .models import Quantity

# Literal de coma flotante sin separadores de miles ni guiones bajos
FLOAT_PATTERN = re.compile(
    r'[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)',
    re.IGNORECASE
)


def parse_quantity(cell: str, decimal_separator: Optional[str] = None) -> Optional[Quantity]:
    """
    Interpreta una celda como número con unidad opcional.

    Args:
        cell: Texto crudo de la celda
        decimal_separator: Separador decimal del archivo ('.' o ',')

    Returns:
        Quantity si la celda es "<número>" o "<número> <unidad>", None si es texto
    """
    text = cell
    if decimal_separator and decimal_separator != '.':
        text = text.replace(decimal_separator, '.')

    parts = text.strip().split(' ')
    if len(parts) > 2 or not FLOAT_PATTERN.fullmatch(parts[0]):
        return None

    unit = parts[1] if len(parts) == 2 else None
    return Quantity(value=float(parts[0]), unit=unit)
