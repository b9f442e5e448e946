# dxcompare/encoding.py
"""
Resolución de codificación de archivos de texto (CSV y texto plano).
"""

import logging
from pathlib import Path
from typing import List, Tuple

import chardet

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


class EncodingResolver:
    """Detecta la codificación y devuelve el contenido ya decodificado."""

    # Orden de prioridad para el fallback
    ENCODING_PRIORITY = ['utf-8', 'cp1252', 'latin-1']

    # Bytes analizados por chardet
    SAMPLE_SIZE = 10000

    @classmethod
    def detect_encoding(cls, raw_data: bytes) -> str:
        """
        Detecta la codificación de un bloque de bytes.

        Args:
            raw_data: Contenido del archivo (sin BOM)

        Returns:
            Nombre de la codificación a usar
        """
        try:
            raw_data.decode('utf-8', errors='strict')
            return 'utf-8'
        except UnicodeDecodeError:
            pass

        result = chardet.detect(raw_data[:cls.SAMPLE_SIZE])
        detected_encoding = (result.get('encoding') or '').lower()
        confidence = result.get('confidence') or 0

        # Si chardet tiene alta confianza, usar esa
        if confidence > 0.7 and detected_encoding:
            encoding_map = {
                'ascii': 'utf-8',
                'windows-1252': 'cp1252',
                'iso-8859-1': 'latin-1'
            }
            normalized = encoding_map.get(detected_encoding, detected_encoding)
            try:
                raw_data.decode(normalized, errors='strict')
                return normalized
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"chardet propuso {normalized} pero no decodifica el archivo completo")

        for encoding in cls.ENCODING_PRIORITY:
            try:
                raw_data.decode(encoding, errors='strict')
                return encoding
            except UnicodeDecodeError:
                continue

        # latin-1 decodifica cualquier secuencia de bytes
        return 'latin-1'

    @classmethod
    def decode(cls, raw_data: bytes) -> Tuple[str, str]:
        """
        Decodifica bytes a texto normalizado: sin BOM y sin retornos de carro.

        Returns:
            Tupla (texto, encoding)
        """
        if raw_data.startswith(UTF8_BOM):
            raw_data = raw_data[len(UTF8_BOM):]

        encoding = cls.detect_encoding(raw_data)
        text = raw_data.decode(encoding)
        if text.startswith('\ufeff'):
            text = text[1:]

        return text.replace('\r', ''), encoding

    @classmethod
    def read_text(cls, file_path: Path) -> str:
        """Lee un archivo completo como texto normalizado. Propaga OSError."""
        text, encoding = cls.decode(Path(file_path).read_bytes())
        logger.debug(f"{file_path} leído como {encoding}")
        return text


def split_lines(text: str) -> List[str]:
    """Divide en líneas por '\\n'; un salto final no genera línea vacía."""
    if not text:
        return []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines
