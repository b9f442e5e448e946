# dxcompare/logging_config.py
"""
Configuración de logging para los front-ends que usan dxcompare.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configura handlers y formato del logging de la aplicación.

    Args:
        log_level: Nivel de logging (DEBUG, INFO, WARNING...)
        log_file: Archivo opcional donde duplicar la salida

    Returns:
        Logger raíz del paquete dxcompare
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Nivel de logging desconocido: {log_level}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )

    # pdfminer es muy verboso a nivel DEBUG
    logging.getLogger("pdfminer").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    return logging.getLogger("dxcompare")
