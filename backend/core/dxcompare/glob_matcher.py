# dxcompare/glob_matcher.py
"""
Selección de archivos por patrones glob relativos a la carpeta raíz.

Sintaxis soportada:
    *      cualquier secuencia dentro de un segmento
    ?      un carácter dentro de un segmento
    [...]  clase de caracteres ([!...] o [^...] para negar)
    **     segmento completo: cero o más directorios
"""

import re
from pathlib import Path
from typing import List, Pattern, Sequence

from .errors import ConfigurationError


def _translate_segment(segment: str, pattern: str) -> str:
    """Traduce un segmento (sin '/') a expresión regular."""
    if '**' in segment:
        raise ConfigurationError(
            "'**' debe ocupar un segmento completo de la ruta", pattern
        )

    out = []
    i, n = 0, len(segment)
    while i < n:
        c = segment[i]
        if c == '*':
            out.append('[^/]*')
        elif c == '?':
            out.append('[^/]')
        elif c == '[':
            j = i + 1
            negate = j < n and segment[j] in '!^'
            if negate:
                j += 1
            body_start = j
            # ']' justo tras la apertura es literal
            if j < n and segment[j] == ']':
                j += 1
            while j < n and segment[j] != ']':
                j += 1
            if j >= n:
                raise ConfigurationError("Clase de caracteres sin cerrar", pattern)
            body = segment[body_start:j].replace('\\', '\\\\')
            out.append('[' + ('^' if negate else '') + body + ']')
            i = j
        else:
            out.append(re.escape(c))
        i += 1
    return ''.join(out)


def compile_glob(pattern: str) -> Pattern[str]:
    """
    Compila un patrón glob a una expresión regular de ruta completa.

    Raises:
        ConfigurationError: Si el patrón está vacío, es absoluto o es inválido
    """
    if not pattern:
        raise ConfigurationError("Patrón glob vacío")
    if pattern.startswith('/'):
        raise ConfigurationError("Los patrones deben ser relativos a la raíz", pattern)

    segments = pattern.split('/')
    parts = []
    for idx, segment in enumerate(segments):
        last = idx == len(segments) - 1
        if segment == '**':
            parts.append('.*' if last else '(?:[^/]+/)*')
        else:
            parts.append(_translate_segment(segment, pattern) + ('' if last else '/'))

    try:
        return re.compile(''.join(parts), re.DOTALL)
    except re.error as e:
        raise ConfigurationError(f"Patrón glob inválido: {e}", pattern) from e


class GlobMatcher:
    """Conjunto de patrones de inclusión y exclusión compilados una sola vez."""

    def __init__(self, include: Sequence[str], exclude: Sequence[str] = ()):
        self.include = tuple(include)
        self.exclude = tuple(exclude or ())
        self._include = [compile_glob(p) for p in self.include]
        self._exclude = [compile_glob(p) for p in self.exclude]

    def matches(self, relative_path: str) -> bool:
        """True si algún patrón de inclusión coincide y ninguno de exclusión."""
        if not any(regex.fullmatch(relative_path) for regex in self._include):
            return False
        return not any(regex.fullmatch(relative_path) for regex in self._exclude)

    def collect(self, root: Path) -> List[str]:
        """
        Enumera los archivos bajo root que cumplen los patrones.

        Returns:
            Rutas relativas en formato POSIX, ordenadas lexicográficamente
        """
        root = Path(root)
        selected = []
        for path in root.rglob('*'):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if self.matches(relative):
                selected.append(relative)
        return sorted(selected)

    def __repr__(self):
        return f"<GlobMatcher include={list(self.include)} exclude={list(self.exclude)}>"
