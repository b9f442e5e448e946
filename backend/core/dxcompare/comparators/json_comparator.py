# comparators/json_comparator.py
"""
Comparación estructural de documentos JSON.

Las rutas se expresan con puntos para claves y corchetes para índices
(p. ej. "data.items[0].name").
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Pattern, Sequence

from ..errors import CompareErrors
from ..rules import JsonCompareConfig
from .base import BaseComparator

logger = logging.getLogger(__name__)


@dataclass
class JsonDifference:
    path: str
    nominal: Any
    actual: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "nominal": self.nominal, "actual": self.actual}


@dataclass
class JsonDiff:
    differences: List[JsonDifference] = field(default_factory=list)
    left_extra: List[str] = field(default_factory=list)
    right_extra: List[str] = field(default_factory=list)
    root_mismatch: bool = False

    @property
    def passed(self) -> bool:
        return not (self.differences or self.left_extra or self.right_extra or self.root_mismatch)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "root_mismatch": self.root_mismatch,
            "differences": [d.to_dict() for d in self.differences],
            "left_extra": list(self.left_extra),
            "right_extra": list(self.right_extra),
        }


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


TYPE_ORDER = {"null": 0, "bool": 1, "number": 2, "string": 3, "array": 4, "object": 5}


def canonical_sort(value: Any) -> Any:
    """Ordena recursivamente todos los arrays con un orden total canónico."""
    if isinstance(value, dict):
        return {key: canonical_sort(item) for key, item in value.items()}
    if isinstance(value, list):
        return sorted((canonical_sort(item) for item in value), key=_sort_key)
    return value


def _sort_key(value: Any):
    kind = _json_type(value)
    if kind in ("bool", "number", "string"):
        return TYPE_ORDER[kind], value
    if kind == "null":
        return TYPE_ORDER[kind], 0
    return TYPE_ORDER[kind], json.dumps(value, sort_keys=True)


def _child_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


class JsonTreeDiffer:
    """Recorre ambos árboles acumulando diferencias."""

    def __init__(self, ignore_keys: Sequence[Pattern[str]]):
        self.ignore_keys = list(ignore_keys)

    def diff(self, nominal: Any, actual: Any) -> JsonDiff:
        result = JsonDiff()
        if _json_type(nominal) != _json_type(actual):
            result.root_mismatch = True
            result.differences.append(JsonDifference("", nominal, actual))
            return result
        self._walk(nominal, actual, "", result)
        return result

    def _ignored(self, path: str) -> bool:
        return any(pattern.search(path) for pattern in self.ignore_keys)

    def _walk(self, nominal: Any, actual: Any, path: str, result: JsonDiff) -> None:
        nominal_type = _json_type(nominal)
        if nominal_type != _json_type(actual):
            result.differences.append(JsonDifference(path, nominal, actual))
            return

        if nominal_type == "object":
            for key, value in nominal.items():
                child = _child_path(path, key)
                if self._ignored(child):
                    continue
                if key not in actual:
                    result.left_extra.append(child)
                    continue
                self._walk(value, actual[key], child, result)
            for key in actual:
                child = _child_path(path, key)
                if key not in nominal and not self._ignored(child):
                    result.right_extra.append(child)
            return

        if nominal_type == "array":
            for index, (nominal_item, actual_item) in enumerate(zip(nominal, actual)):
                self._walk(nominal_item, actual_item, f"{path}[{index}]", result)
            for index in range(len(actual), len(nominal)):
                result.left_extra.append(f"{path}[{index}]")
            for index in range(len(nominal), len(actual)):
                result.right_extra.append(f"{path}[{index}]")
            return

        if nominal != actual:
            result.differences.append(JsonDifference(path, nominal, actual))


class JsonComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=JsonCompareConfig.KIND,
            description="Diferencias estructurales JSON",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: JsonCompareConfig):
        documents = []
        for path in (nominal, actual):
            with open(path, 'r', encoding='utf-8-sig') as f:
                try:
                    documents.append(json.load(f))
                except (json.JSONDecodeError, UnicodeDecodeError) as e:
                    logger.warning(f"JSON inválido en {path}: {e}")
                    return self.failure(
                        nominal, actual, CompareErrors.parse_error("JSON_PARSE_ERROR", str(path), e)
                    )

        nominal_doc, actual_doc = documents
        if config.sort_arrays:
            nominal_doc = canonical_sort(nominal_doc)
            actual_doc = canonical_sort(actual_doc)

        diff = JsonTreeDiffer(config.ignore_keys).diff(nominal_doc, actual_doc)
        return self.outcome(nominal, actual, diff.passed, diff)
