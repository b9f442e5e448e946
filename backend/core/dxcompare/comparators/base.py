# comparators/base.py
"""
Clase base para todos los comparadores de archivos.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from ..errors import CompareErrors, ConfigurationError
from ..models import ComparisonOutcome
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class BaseComparator(ABC):
    """Estrategia de comparación sin estado para un formato de archivo."""

    def __init__(self, kind: str, description: str, settings: Optional[Settings] = None):
        self.kind = kind
        self.description = description
        self._settings = settings

    @property
    def settings(self) -> Settings:
        """Settings inyectados por el registro o, si no hay, los globales."""
        return self._settings if self._settings is not None else get_settings()

    def run(self, nominal: Path, actual: Path, config: Any) -> ComparisonOutcome:
        """
        Ejecuta la comparación convirtiendo cualquier error del par en un resultado fallido.

        Solo ConfigurationError se propaga.

        Args:
            nominal: Archivo de referencia
            actual: Archivo a verificar
            config: Configuración del comparador

        Returns:
            ComparisonOutcome del par
        """
        try:
            outcome = self.compare(Path(nominal), Path(actual), config)
        except OSError as e:
            path = e.filename if getattr(e, "filename", None) else str(nominal)
            logger.warning(f"[{self.kind}] Error de E/S en {path}: {e}")
            return ComparisonOutcome.failure(
                self.kind, str(nominal), str(actual),
                CompareErrors.file_io_error(str(path), e)
            )
        except ConfigurationError:
            raise
        except Exception as e:
            logger.exception(f"[{self.kind}] Error inesperado comparando {nominal}: {e}")
            return ComparisonOutcome.failure(
                self.kind, str(nominal), str(actual),
                CompareErrors.unexpected_error(self.kind, str(nominal), e)
            )

        status = "OK" if outcome.passed else "FALLO"
        logger.debug(f"[{self.kind}] {nominal} vs {actual}: {status}")
        return outcome

    @abstractmethod
    def compare(self, nominal: Path, actual: Path, config: Any) -> ComparisonOutcome:
        """
        Compara el par de archivos.

        Los errores de E/S pueden propagarse; run() los normaliza.
        """
        pass

    def outcome(self, nominal: Path, actual: Path, passed: bool, diff: Any = None) -> ComparisonOutcome:
        return ComparisonOutcome(
            passed=passed, comparator=self.kind,
            nominal=str(nominal), actual=str(actual), diff=diff
        )

    def failure(self, nominal: Path, actual: Path, error) -> ComparisonOutcome:
        return ComparisonOutcome.failure(self.kind, str(nominal), str(actual), error)

    def __repr__(self):
        return f"<Comparator {self.kind}: {self.description}>"
