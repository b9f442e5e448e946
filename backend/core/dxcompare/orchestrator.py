# dxcompare/orchestrator.py
"""
Orquestador principal: reglas -> pares de archivos -> comparadores -> reporte.

Todas las reglas y todos los archivos se evalúan siempre; un fallo nunca
detiene la ejecución. Solo la configuración inválida aborta antes de comparar.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .comparators import ComparatorRegistry
from .errors import CompareErrors, ConfigurationError
from .models import ComparisonOutcome
from .reporting import CompareReport, ReportAccumulator
from .rules import ComparatorConfig, ConfigurationFile, Rule
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

RulesInput = Union[str, Path, ConfigurationFile, Sequence[Rule]]

# (índice de regla, regla, ruta relativa)
WorkUnit = Tuple[int, Rule, str]


class CompareOrchestrator:
    """
    Coordina la resolución de archivos y el despacho a los comparadores.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 registry: Optional[ComparatorRegistry] = None):
        """
        Inicializa el orquestador.

        Args:
            settings: Configuración de ejecución (por defecto get_settings())
            registry: Registro de comparadores (por defecto todos)
        """
        self.settings = settings or get_settings()
        self.registry = registry or ComparatorRegistry(settings=self.settings)

    def compare_folders(self, nominal_root: Union[str, Path], actual_root: Union[str, Path],
                        rules: RulesInput) -> CompareReport:
        """
        Compara dos árboles de carpetas con las reglas dadas.

        Args:
            nominal_root: Carpeta de referencia
            actual_root: Carpeta a verificar
            rules: Lista de reglas, ConfigurationFile o ruta al YAML

        Returns:
            Reporte con todas las entradas; report.passed es el veredicto global

        Raises:
            ConfigurationError: Si las reglas o las carpetas raíz son inválidas
        """
        rule_list = self._resolve_rules(rules)
        nominal_root = Path(nominal_root)
        actual_root = Path(actual_root)

        for label, root in (("nominal", nominal_root), ("actual", actual_root)):
            if not root.is_dir():
                raise ConfigurationError(f"La carpeta {label} no existe o no es un directorio", str(root))

        start_time = datetime.now()
        execution_id = start_time.strftime("%Y%m%d_%H%M%S")
        logger.info(
            f"Iniciando comparación {execution_id}: {nominal_root} vs {actual_root} "
            f"({len(rule_list)} reglas)"
        )

        units = self._plan(rule_list, nominal_root)
        accumulator = ReportAccumulator([rule.name for rule in rule_list])

        def run_unit(unit: WorkUnit) -> None:
            rule_index, rule, relative_path = unit
            outcome = self._compare_unit(rule, nominal_root, actual_root, relative_path)
            accumulator.add(rule_index, relative_path, outcome)

        max_workers = max(1, self.settings.MAX_WORKERS)
        if max_workers == 1 or len(units) <= 1:
            for unit in units:
                run_unit(unit)
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                # list() propaga ConfigurationError desde los hilos
                list(executor.map(run_unit, units))

        report = accumulator.finalize(str(nominal_root), str(actual_root))
        duration = (datetime.now() - start_time).total_seconds()
        logger.info(f"{report.summary} [{duration:.2f} s]")
        return report

    def compare_files(self, nominal: Union[str, Path], actual: Union[str, Path],
                      config: ComparatorConfig) -> ComparisonOutcome:
        """
        Compara un único par de archivos con una configuración de comparador.

        Raises:
            ConfigurationError: Si no hay comparador para la configuración
        """
        nominal = Path(nominal)
        actual = Path(actual)
        if not actual.is_file():
            return ComparisonOutcome.failure(
                config.KIND, str(nominal), str(actual), CompareErrors.missing_counterpart(str(actual))
            )
        return self.registry.dispatch(config, nominal, actual)

    def _resolve_rules(self, rules: RulesInput) -> List[Rule]:
        if isinstance(rules, (str, Path)):
            return list(ConfigurationFile.from_file(rules).rules)
        if isinstance(rules, ConfigurationFile):
            return list(rules.rules)

        rule_list = list(rules)
        for rule in rule_list:
            if not isinstance(rule, Rule):
                raise ConfigurationError(f"Se esperaba Rule, recibido {type(rule).__name__}")
        return rule_list

    def _plan(self, rules: List[Rule], nominal_root: Path) -> List[WorkUnit]:
        """Unidades de trabajo en orden de regla y ruta relativa."""
        units: List[WorkUnit] = []
        for rule_index, rule in enumerate(rules):
            relative_paths = rule.matcher().collect(nominal_root)
            if not relative_paths:
                logger.warning(f"La regla '{rule.name}' no seleccionó ningún archivo")
            else:
                logger.info(f"Regla '{rule.name}': {len(relative_paths)} archivos")
            units.extend((rule_index, rule, path) for path in relative_paths)
        return units

    def _compare_unit(self, rule: Rule, nominal_root: Path, actual_root: Path,
                      relative_path: str) -> ComparisonOutcome:
        nominal = nominal_root / relative_path
        actual = actual_root / relative_path
        config = rule.comparison

        if not actual.is_file():
            logger.warning(f"[{rule.name}] Falta el archivo actual: {actual}")
            return ComparisonOutcome.failure(
                config.KIND, str(nominal), str(actual), CompareErrors.missing_counterpart(str(actual))
            )

        outcome = self.registry.dispatch(config, nominal, actual)
        if not outcome.passed:
            reason = outcome.error.message if outcome.error else "diferencias"
            logger.info(f"[{rule.name}] {relative_path}: FALLO ({reason})")
        return outcome


def compare_folders(nominal_root: Union[str, Path], actual_root: Union[str, Path],
                    rules: RulesInput) -> CompareReport:
    """Atajo con la configuración por defecto."""
    return CompareOrchestrator().compare_folders(nominal_root, actual_root, rules)


def compare_files(nominal: Union[str, Path], actual: Union[str, Path],
                  config: ComparatorConfig) -> ComparisonOutcome:
    """Atajo con la configuración por defecto."""
    return CompareOrchestrator().compare_files(nominal, actual, config)
