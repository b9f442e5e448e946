"""
Exporta todos los comparadores de archivos.
"""

from ..rules import (
    CsvCompareConfig, ExternalConfig, FilePropertiesConfig, HashConfig,
    ImageCompareConfig, JsonCompareConfig, PdfTextConfig, PlainTextConfig
)
from .base import BaseComparator
from .csv_comparator import CsvComparator
from .external_comparator import ExternalComparator
from .hash_comparator import HashComparator
from .image_comparator import ImageComparator
from .json_comparator import JsonComparator
from .properties_comparator import FilePropertiesComparator
from .registry import ComparatorRegistry
from .text_comparator import PdfTextComparator, PlainTextComparator

# Configuración -> comparador
ALL_COMPARATORS = {
    CsvCompareConfig: CsvComparator,
    ImageCompareConfig: ImageComparator,
    PlainTextConfig: PlainTextComparator,
    PdfTextConfig: PdfTextComparator,
    HashConfig: HashComparator,
    FilePropertiesConfig: FilePropertiesComparator,
    JsonCompareConfig: JsonComparator,
    ExternalConfig: ExternalComparator
}

__all__ = [
    'BaseComparator',
    'ComparatorRegistry',
    'CsvComparator',
    'ExternalComparator',
    'FilePropertiesComparator',
    'HashComparator',
    'ImageComparator',
    'JsonComparator',
    'PdfTextComparator',
    'PlainTextComparator',
    'ALL_COMPARATORS'
]
