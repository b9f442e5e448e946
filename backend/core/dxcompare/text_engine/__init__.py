"""
Motor de alineación de texto y extracción de texto de PDF.
"""

from .engine import LineMismatch, TextAlignmentEngine, TextDiff, similarity
from .pdf_extractor import extract_pdf_lines

__all__ = [
    'LineMismatch',
    'TextAlignmentEngine',
    'TextDiff',
    'extract_pdf_lines',
    'similarity'
]
