"""
DxCompare: comparación de árboles de archivos nominal/actual guiada por reglas.
"""

from .errors import CompareError, ConfigurationError, DxCompareError, ErrorCategory
from .models import ComparisonOutcome
from .orchestrator import CompareOrchestrator, compare_files, compare_folders
from .reporting import CompareReport
from .rules import ConfigurationFile, Rule, load_rules
from .settings import Settings, get_settings

__version__ = "1.0.0"

__all__ = [
    'CompareError',
    'CompareOrchestrator',
    'CompareReport',
    'ComparisonOutcome',
    'ConfigurationError',
    'ConfigurationFile',
    'DxCompareError',
    'ErrorCategory',
    'Rule',
    'Settings',
    'compare_files',
    'compare_folders',
    'get_settings',
    'load_rules'
]
