# comparators/registry.py
"""
Registro de comparadores y despacho por tipo de configuración.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Type

from ..errors import ConfigurationError
from ..models import ComparisonOutcome
from ..rules import ComparatorConfig
from ..settings import Settings
from .base import BaseComparator

logger = logging.getLogger(__name__)


class ComparatorRegistry:
    """Asocia cada clase de configuración con su comparador."""

    def __init__(self, comparators: Optional[Dict[Type, Type[BaseComparator]]] = None,
                 settings: Optional[Settings] = None):
        """
        Args:
            comparators: Configuración -> clase de comparador (por defecto ALL_COMPARATORS)
            settings: Settings que reciben los comparadores (por defecto get_settings())
        """
        self._comparators: Dict[Type, BaseComparator] = {}
        if comparators is None:
            from . import ALL_COMPARATORS
            comparators = ALL_COMPARATORS
        for config_class, comparator_class in comparators.items():
            self.register(config_class, comparator_class(settings=settings))

    def register(self, config_class: Type, comparator: BaseComparator) -> None:
        if config_class in self._comparators:
            raise ValueError(f"Comparador ya registrado: {config_class.__name__}")
        self._comparators[config_class] = comparator

    def get(self, config: ComparatorConfig) -> BaseComparator:
        comparator = self._comparators.get(type(config))
        if comparator is None:
            raise ConfigurationError(f"Sin comparador para la configuración {type(config).__name__}")
        return comparator

    def list_kinds(self) -> List[str]:
        return [comparator.kind for comparator in self._comparators.values()]

    def dispatch(self, config: ComparatorConfig, nominal: Path, actual: Path) -> ComparisonOutcome:
        """Ejecuta el comparador asociado a la configuración sobre el par."""
        return self.get(config).run(nominal, actual, config)
