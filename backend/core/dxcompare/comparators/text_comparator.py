# comparators/text_comparator.py
"""
Comparadores de texto plano y de texto extraído de PDF.
"""

from pathlib import Path

from ..encoding import EncodingResolver, split_lines
from ..rules import PdfTextConfig, PlainTextConfig, TextCompareConfig
from ..text_engine import TextAlignmentEngine, extract_pdf_lines
from .base import BaseComparator


def _engine(config: TextCompareConfig) -> TextAlignmentEngine:
    return TextAlignmentEngine(config.threshold, config.ignore_lines)


class PlainTextComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=PlainTextConfig.KIND,
            description="Texto línea a línea con umbral de similitud",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: PlainTextConfig):
        nominal_lines = split_lines(EncodingResolver.read_text(nominal))
        actual_lines = split_lines(EncodingResolver.read_text(actual))

        diff = _engine(config).compare_lines(nominal_lines, actual_lines)
        return self.outcome(nominal, actual, diff.passed, diff)


class PdfTextComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=PdfTextConfig.KIND,
            description="Texto extraído de PDF línea a línea",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: PdfTextConfig):
        nominal_lines, error = extract_pdf_lines(nominal)
        if error:
            return self.failure(nominal, actual, error)

        actual_lines, error = extract_pdf_lines(actual)
        if error:
            return self.failure(nominal, actual, error)

        diff = _engine(config).compare_lines(nominal_lines, actual_lines)
        return self.outcome(nominal, actual, diff.passed, diff)
