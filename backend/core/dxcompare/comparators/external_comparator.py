# comparators/external_comparator.py
"""
Delegación a un ejecutable externo: código de salida 0 = iguales.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..errors import CompareErrors
from ..rules import ExternalConfig
from .base import BaseComparator

logger = logging.getLogger(__name__)


@dataclass
class ExternalDiff:
    command: List[str]
    return_code: int
    stdout: str
    stderr: str

    @property
    def passed(self) -> bool:
        return self.return_code == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "command": list(self.command),
            "return_code": self.return_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
        }


class ExternalComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=ExternalConfig.KIND,
            description="Ejecutable externo",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: ExternalConfig):
        command = [config.executable, *config.extra_params, str(nominal), str(actual)]
        timeout = config.timeout_secs or self.settings.EXTERNAL_TIMEOUT_SECS

        logger.info(f"Ejecutando: {' '.join(command)}")
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors='replace',
                timeout=timeout
            )
        except subprocess.TimeoutExpired:
            # subprocess.run mata al proceso hijo antes de relanzar
            logger.warning(f"{config.executable} superó {timeout} s")
            return self.failure(nominal, actual, CompareErrors.process_timeout(config.executable, timeout))
        except OSError as e:
            logger.warning(f"No se pudo lanzar {config.executable}: {e}")
            return self.failure(nominal, actual, CompareErrors.process_launch_failed(config.executable, e))

        if completed.stdout:
            logger.info(f"{config.executable} stdout: {completed.stdout.strip()}")
        if completed.stderr:
            logger.info(f"{config.executable} stderr: {completed.stderr.strip()}")

        diff = ExternalDiff(
            command=command,
            return_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr
        )
        return self.outcome(nominal, actual, diff.passed, diff)
