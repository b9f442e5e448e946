# text_engine/pdf_extractor.py
"""
Extracción de texto de PDF con pdfplumber.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from ..encoding import split_lines
from ..errors import CompareError, CompareErrors

logger = logging.getLogger(__name__)


def extract_pdf_lines(pdf_path: Path) -> Tuple[Optional[List[str]], Optional[CompareError]]:
    """
    Extrae el texto de todas las páginas como lista de líneas.

    Args:
        pdf_path: Ruta al PDF

    Returns:
        Tupla (líneas, error)
    """
    try:
        with pdfplumber.open(pdf_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except (PdfminerException, PSException) as e:
        logger.warning(f"No se pudo extraer texto de {pdf_path}: {e}")
        return None, CompareErrors.parse_error("PDF_EXTRACTION_FAILED", str(pdf_path), e)

    logger.debug(f"{pdf_path}: {len(pages)} páginas extraídas")
    return split_lines("\n".join(pages)), None
