# comparators/hash_comparator.py
import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..rules import HashConfig, HashFunction
from .base import BaseComparator

CHUNK_SIZE = 1024 * 1024

HASH_FACTORIES = {
    HashFunction.SHA256: hashlib.sha256,
}


@dataclass
class HashDiff:
    function: str
    nominal_digest: str
    actual_digest: str

    @property
    def passed(self) -> bool:
        return self.nominal_digest == self.actual_digest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "function": self.function,
            "nominal_digest": self.nominal_digest,
            "actual_digest": self.actual_digest,
        }


def file_digest(path: Path, function: HashFunction = HashFunction.SHA256) -> str:
    """Digest hexadecimal del archivo leído por bloques."""
    hasher = HASH_FACTORIES[function]()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            hasher.update(chunk)
    return hasher.hexdigest()


class HashComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=HashConfig.KIND,
            description="Igualdad exacta por digest",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: HashConfig):
        diff = HashDiff(
            function=config.hash.value,
            nominal_digest=file_digest(nominal, config.hash),
            actual_digest=file_digest(actual, config.hash)
        )
        return self.outcome(nominal, actual, diff.passed, diff)
