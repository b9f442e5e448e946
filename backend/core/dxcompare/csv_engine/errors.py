# csv_engine/errors.py
"""
Errores normalizados del motor CSV.
"""

from ..errors import CompareError, ErrorCategory


class CsvErrors:
    """Factory de errores normalizados."""

    @staticmethod
    def unterminated_literal(line: int) -> CompareError:
        return CompareError(
            code="UNTERMINATED_LITERAL",
            category=ErrorCategory.PARSE,
            message=f"Comillas sin cerrar en el campo que empieza en la línea {line}",
            details={"line": line}
        )

    @staticmethod
    def unstable_column_count(row_index: int, expected: int, found: int) -> CompareError:
        return CompareError(
            code="UNSTABLE_COLUMN_COUNT",
            category=ErrorCategory.PARSE,
            message=f"La fila {row_index} tiene {found} columnas, se esperaban {expected}",
            details={"row": row_index, "expected": expected, "found": found}
        )

    @staticmethod
    def missing_headers(step: str) -> CompareError:
        return CompareError(
            code="MISSING_HEADERS",
            category=ErrorCategory.PREPROCESSING,
            message=f"{step} requiere encabezados: aplicar ExtractHeaders antes",
            details={"step": step}
        )

    @staticmethod
    def unknown_column(step: str, column_name: str) -> CompareError:
        return CompareError(
            code="UNKNOWN_COLUMN",
            category=ErrorCategory.PREPROCESSING,
            message=f"{step}: no existe la columna '{column_name}'",
            details={"step": step, "column_name": column_name}
        )

    @staticmethod
    def index_out_of_range(step: str, axis: str, index: int, size: int) -> CompareError:
        return CompareError(
            code="INDEX_OUT_OF_RANGE",
            category=ErrorCategory.PREPROCESSING,
            message=f"{step}: {axis} {index} fuera de rango (tamaño {size})",
            details={"step": step, "axis": axis, "index": index, "size": size}
        )

    @staticmethod
    def non_numeric_sort_key(step: str, row_index: int, column: int, value: str) -> CompareError:
        return CompareError(
            code="NON_NUMERIC_SORT_KEY",
            category=ErrorCategory.PARSE,
            message=f"{step}: valor no numérico '{value}' en fila {row_index}, columna {column}",
            details={"step": step, "row": row_index, "column": column, "value": value}
        )
