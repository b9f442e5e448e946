# dxcompare/rules.py
"""
Modelos de configuración de reglas y carga del archivo YAML.

Cada regla selecciona archivos con patrones glob y declara exactamente una
configuración de comparador (CSV, Image, PlainText, PDFText, Hash,
FileProperties, Json o External).
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, List, Optional, Pattern, Union

import yaml
from pydantic import (
    BaseModel, ConfigDict, Field, InstanceOf, ValidationError, field_validator,
    model_validator
)

from .csv_engine.models import ComparisonMode
from .csv_engine.preprocessing import BaseStep, build_step
from .errors import ConfigurationError
from .glob_matcher import GlobMatcher, compile_glob

logger = logging.getLogger(__name__)


def _none_as_list(value: Any) -> Any:
    return [] if value is None else value


class CsvCompareConfig(BaseModel):
    """Comparación tolerante de tablas CSV."""

    KIND: ClassVar[str] = "CSV"
    model_config = ConfigDict(frozen=True, extra="forbid")

    field_delimiter: Optional[str] = Field(
        None,
        min_length=1,
        max_length=1,
        description="Delimitador de campo; se autodetecta si se omite"
    )
    decimal_separator: Optional[str] = Field(
        None,
        min_length=1,
        max_length=1,
        description="Separador decimal; se autodetecta si se omite"
    )
    comparison_modes: List[InstanceOf[ComparisonMode]] = Field(
        default_factory=list,
        description="Modos de tolerancia numérica: todos deben cumplirse"
    )
    exclude_field_regex: Optional[Pattern[str]] = Field(
        None,
        description="Celdas que coinciden se consideran iguales"
    )
    preprocessing: List[InstanceOf[BaseStep]] = Field(
        default_factory=list,
        description="Pasos aplicados en orden a cada tabla"
    )

    @field_validator('comparison_modes', mode='before')
    @classmethod
    def build_modes(cls, v):
        return [ComparisonMode.from_config(raw) for raw in _none_as_list(v)]

    @field_validator('preprocessing', mode='before')
    @classmethod
    def build_preprocessing(cls, v):
        return [build_step(raw) for raw in _none_as_list(v)]

    @model_validator(mode='after')
    def check_separators(self):
        if (self.field_delimiter is not None
                and self.field_delimiter == self.decimal_separator):
            raise ValueError("field_delimiter y decimal_separator no pueden coincidir")
        return self


class TextCompareConfig(BaseModel):
    """Comparación de texto línea a línea por similitud."""

    KIND: ClassVar[str] = "Text"
    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: float = Field(
        1.0,
        ge=0.0,
        le=1.0,
        description="Similitud mínima por línea (1.0 = idénticas)"
    )
    ignore_lines: List[Pattern[str]] = Field(
        default_factory=list,
        description="Líneas que coinciden se descartan antes de alinear"
    )

    @field_validator('ignore_lines', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return _none_as_list(v)


class PlainTextConfig(TextCompareConfig):
    KIND: ClassVar[str] = "PlainText"


class PdfTextConfig(TextCompareConfig):
    KIND: ClassVar[str] = "PDFText"


class ImageMode(str, Enum):
    RGB = "RGB"
    RGBA = "RGBA"
    GRAY = "Gray"


class ImageCompareConfig(BaseModel):
    KIND: ClassVar[str] = "Image"
    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Puntuación mínima de similitud (< 0.5 muy distintas, 1.0 idénticas)"
    )
    mode: ImageMode = Field(ImageMode.RGB, description="Espacio de color de la comparación")


class HashFunction(str, Enum):
    SHA256 = "Sha256"


class HashConfig(BaseModel):
    KIND: ClassVar[str] = "Hash"
    model_config = ConfigDict(frozen=True, extra="forbid")

    hash: HashFunction = HashFunction.SHA256


class FilePropertiesConfig(BaseModel):
    """Comprobaciones de metadatos; las no configuradas se omiten."""

    KIND: ClassVar[str] = "FileProperties"
    model_config = ConfigDict(frozen=True, extra="forbid")

    forbid_name_regex: Optional[Pattern[str]] = None
    modification_date_tolerance_secs: Optional[float] = Field(None, ge=0)
    file_size_tolerance_bytes: Optional[int] = Field(None, ge=0)


class JsonCompareConfig(BaseModel):
    KIND: ClassVar[str] = "Json"
    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore_keys: List[Pattern[str]] = Field(
        default_factory=list,
        description="Claves cuya ruta completa coincide se ignoran con su subárbol"
    )
    sort_arrays: bool = Field(
        False,
        description="Ordena los arrays de forma canónica antes de comparar"
    )

    @field_validator('ignore_keys', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return _none_as_list(v)


class ExternalConfig(BaseModel):
    """Se ejecuta como: executable *extra_params nominal actual."""

    KIND: ClassVar[str] = "External"
    model_config = ConfigDict(frozen=True, extra="forbid")

    executable: str = Field(..., min_length=1)
    extra_params: List[str] = Field(default_factory=list)
    timeout_secs: Optional[float] = Field(
        None,
        gt=0,
        description="Espera máxima; por defecto EXTERNAL_TIMEOUT_SECS"
    )

    @field_validator('extra_params', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return _none_as_list(v)


ComparatorConfig = Union[
    CsvCompareConfig,
    ImageCompareConfig,
    PlainTextConfig,
    PdfTextConfig,
    HashConfig,
    FilePropertiesConfig,
    JsonCompareConfig,
    ExternalConfig,
]

COMPARISON_KEYS = ("CSV", "Image", "PlainText", "PDFText", "Hash", "FileProperties", "Json", "External")


class Rule(BaseModel):
    """Regla: selección de archivos + exactamente un comparador."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Nombre de la regla en el reporte")
    pattern_include: List[str] = Field(..., min_length=1)
    pattern_exclude: List[str] = Field(default_factory=list)

    CSV: Optional[CsvCompareConfig] = None
    Image: Optional[ImageCompareConfig] = None
    PlainText: Optional[PlainTextConfig] = None
    PDFText: Optional[PdfTextConfig] = None
    Hash: Optional[HashConfig] = None
    FileProperties: Optional[FilePropertiesConfig] = None
    Json: Optional[JsonCompareConfig] = None
    External: Optional[ExternalConfig] = None

    @field_validator('pattern_include', 'pattern_exclude', mode='before')
    @classmethod
    def as_pattern_list(cls, v):
        if isinstance(v, str):
            return [v]
        return _none_as_list(v)

    @field_validator('pattern_include', 'pattern_exclude')
    @classmethod
    def validate_globs(cls, v):
        for pattern in v:
            try:
                compile_glob(pattern)
            except ConfigurationError as e:
                raise ValueError(str(e)) from e
        return v

    @model_validator(mode='before')
    @classmethod
    def empty_comparison_as_default(cls, data):
        # "Hash:" o "FileProperties:" sin valor usan la configuración por defecto
        if isinstance(data, dict):
            data = dict(data)
            for key in ("Hash", "FileProperties", "Json", "PlainText", "PDFText"):
                if key in data and data[key] is None:
                    data[key] = {}
        return data

    @model_validator(mode='after')
    def exactly_one_comparison(self):
        configured = [key for key in COMPARISON_KEYS if getattr(self, key) is not None]
        if len(configured) != 1:
            raise ValueError(
                f"La regla '{self.name}' debe declarar exactamente un comparador "
                f"({', '.join(COMPARISON_KEYS)}); declarados: {configured or 'ninguno'}"
            )
        return self

    @property
    def comparison(self) -> ComparatorConfig:
        """Configuración del único comparador declarado."""
        for key in COMPARISON_KEYS:
            config = getattr(self, key)
            if config is not None:
                return config
        raise ConfigurationError("Regla sin comparador", self.name)

    def matcher(self) -> GlobMatcher:
        return GlobMatcher(self.pattern_include, self.pattern_exclude)


class ConfigurationFile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    rules: List[Rule] = Field(default_factory=list)

    @field_validator('rules', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return _none_as_list(v)

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "ConfigurationFile":
        """
        Valida un documento ya deserializado.

        Raises:
            ConfigurationError: Si el documento no es una configuración válida
        """
        if not isinstance(data, dict):
            raise ConfigurationError("El documento de configuración debe ser un mapa con 'rules'", source)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuración inválida:\n{e}", source) from e

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ConfigurationFile":
        """
        Carga y valida el archivo YAML de reglas.

        Raises:
            ConfigurationError: Si el archivo no se puede leer, parsear o validar
        """
        config_path = Path(config_path)
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"No se pudo leer la configuración: {e}", str(config_path)) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML inválido: {e}", str(config_path)) from e

        config = cls.from_dict(data, str(config_path))
        logger.info(f"{len(config.rules)} reglas cargadas desde {config_path}")
        return config


def load_rules(config_path: Union[str, Path]) -> List[Rule]:
    """Atajo: lista de reglas del archivo YAML."""
    return list(ConfigurationFile.from_file(config_path).rules)
