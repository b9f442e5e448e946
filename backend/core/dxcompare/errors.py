# dxcompare/errors.py
"""
Errores normalizados y excepciones de dxcompare.

Los problemas locales a un par de archivos se devuelven como CompareError
dentro del resultado; solo los errores de configuración se lanzan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    CONFIGURATION = "CONFIGURATION"
    IO = "IO"
    PARSE = "PARSE"
    PREPROCESSING = "PREPROCESSING"
    PROCESS = "PROCESS"


@dataclass(frozen=True)
class CompareError:
    """Error normalizado asociado a un par de archivos."""
    code: str
    category: ErrorCategory
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "details": dict(self.details),
        }


class DxCompareError(Exception):
    """Error base de dxcompare."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        self.source_context = f" ({source})" if source else ""
        super().__init__(f"{message}{self.source_context}")


class ConfigurationError(DxCompareError):
    """Configuración inválida: aborta la ejecución antes de comparar."""


class CompareErrors:
    """Factory de errores normalizados comunes a todos los comparadores."""

    @staticmethod
    def missing_counterpart(actual_path: str) -> CompareError:
        return CompareError(
            code="MISSING_COUNTERPART",
            category=ErrorCategory.IO,
            message=f"No existe el archivo equivalente en actual: {actual_path}",
            details={"path": actual_path},
        )

    @staticmethod
    def file_io_error(path: str, error: Exception) -> CompareError:
        return CompareError(
            code="FILE_IO_ERROR",
            category=ErrorCategory.IO,
            message=f"Error de E/S al leer archivo {path}: {error}",
            details={"path": path},
        )

    @staticmethod
    def parse_error(code: str, path: str, error: Any) -> CompareError:
        return CompareError(
            code=code,
            category=ErrorCategory.PARSE,
            message=f"No se pudo interpretar {path}: {error}",
            details={"path": path},
        )

    @staticmethod
    def unexpected_error(comparator: str, path: str, error: Exception) -> CompareError:
        return CompareError(
            code="UNEXPECTED_ERROR",
            category=ErrorCategory.PROCESS,
            message=f"Error inesperado en {comparator} al comparar {path}: {type(error).__name__}: {error}",
            details={"path": path, "exception": type(error).__name__},
        )

    @staticmethod
    def image_size_mismatch(nominal_size: Any, actual_size: Any) -> CompareError:
        return CompareError(
            code="IMAGE_SIZE_MISMATCH",
            category=ErrorCategory.PARSE,
            message=f"Dimensiones distintas: nominal {nominal_size}, actual {actual_size}",
            details={"nominal": list(nominal_size), "actual": list(actual_size)},
        )

    @staticmethod
    def process_launch_failed(executable: str, error: Exception) -> CompareError:
        return CompareError(
            code="PROCESS_LAUNCH_FAILED",
            category=ErrorCategory.PROCESS,
            message=f"No se pudo ejecutar '{executable}': {error}",
            details={"executable": executable},
        )

    @staticmethod
    def process_timeout(executable: str, timeout_secs: float) -> CompareError:
        return CompareError(
            code="PROCESS_TIMEOUT",
            category=ErrorCategory.PROCESS,
            message=f"'{executable}' superó el tiempo máximo de {timeout_secs} s",
            details={"executable": executable, "timeout_secs": timeout_secs},
        )
