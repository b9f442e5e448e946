# comparators/properties_comparator.py
"""
Comparación de metadatos de archivo: nombre, fecha de modificación y tamaño.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..rules import FilePropertiesConfig
from .base import BaseComparator


@dataclass
class PropertyCheck:
    name: str
    passed: bool
    nominal: Any
    actual: Any
    tolerance: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "nominal": self.nominal,
            "actual": self.actual,
            "tolerance": self.tolerance,
        }


@dataclass
class PropertiesDiff:
    checks: List[PropertyCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "checks": [check.to_dict() for check in self.checks],
        }


class FilePropertiesComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=FilePropertiesConfig.KIND,
            description="Nombre prohibido, fecha de modificación y tamaño",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: FilePropertiesConfig):
        diff = PropertiesDiff()
        nominal_stat = nominal.stat()
        actual_stat = actual.stat()

        if config.forbid_name_regex is not None:
            for side, path in (("nominal", nominal), ("actual", actual)):
                forbidden = config.forbid_name_regex.search(str(path)) is not None
                diff.checks.append(PropertyCheck(
                    name=f"forbid_name_regex ({side})",
                    passed=not forbidden,
                    nominal=str(nominal) if side == "nominal" else None,
                    actual=str(actual) if side == "actual" else None,
                    tolerance=config.forbid_name_regex.pattern
                ))

        if config.modification_date_tolerance_secs is not None:
            delta = abs(nominal_stat.st_mtime - actual_stat.st_mtime)
            diff.checks.append(PropertyCheck(
                name="modification_date",
                passed=delta <= config.modification_date_tolerance_secs,
                nominal=nominal_stat.st_mtime,
                actual=actual_stat.st_mtime,
                tolerance=config.modification_date_tolerance_secs
            ))

        if config.file_size_tolerance_bytes is not None:
            delta = abs(nominal_stat.st_size - actual_stat.st_size)
            diff.checks.append(PropertyCheck(
                name="file_size",
                passed=delta <= config.file_size_tolerance_bytes,
                nominal=nominal_stat.st_size,
                actual=actual_stat.st_size,
                tolerance=config.file_size_tolerance_bytes
            ))

        return self.outcome(nominal, actual, diff.passed, diff)
