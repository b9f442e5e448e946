"""Fixtures compartidos de los tests de dxcompare."""

from pathlib import Path
from typing import Dict, Union

import pytest

from backend.core.dxcompare.settings import Settings, get_settings


# ============================================================================
# Settings
# ============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Evita que un Settings cacheado se filtre entre tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sequential_settings() -> Settings:
    return Settings(MAX_WORKERS=1)


@pytest.fixture
def parallel_settings() -> Settings:
    return Settings(MAX_WORKERS=8)


# ============================================================================
# Árboles de archivos
# ============================================================================


def write_tree(root: Path, files: Dict[str, Union[str, bytes]]) -> Path:
    """Crea los archivos relativos a root con el contenido dado."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path):
    """Fábrica de árboles nominal/actual bajo tmp_path."""

    def _make(name: str, files: Dict[str, Union[str, bytes]]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)

    return _make


@pytest.fixture
def write_file(tmp_path):
    """Escribe un único archivo bajo tmp_path y devuelve su ruta."""

    def _write(relative: str, content: Union[str, bytes]) -> Path:
        write_tree(tmp_path, {relative: content})
        return tmp_path / relative

    return _write
