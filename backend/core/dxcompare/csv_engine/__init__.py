"""
Motor de comparación tolerante de tablas CSV.
"""

from .comparator import TableComparator
from .dialect import DialectDetector
from .loader import CsvLoader
from .models import (
    SENTINEL, CellComparison, ComparisonMode, CsvDiff, DiffKind, ModeKind,
    Quantity, Table
)
from .preprocessing import ALL_STEPS, BaseStep, apply_steps, build_step
from .tokenizer import Tokenizer
from .value import parse_quantity

__all__ = [
    'SENTINEL',
    'ALL_STEPS',
    'BaseStep',
    'CellComparison',
    'ComparisonMode',
    'CsvDiff',
    'CsvLoader',
    'DialectDetector',
    'DiffKind',
    'ModeKind',
    'Quantity',
    'Table',
    'TableComparator',
    'Tokenizer',
    'apply_steps',
    'build_step',
    'parse_quantity'
]
