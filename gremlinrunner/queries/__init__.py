"""
Módulo de ejecución de consultas Gremlin desde ficheros de texto.

Este módulo proporciona funcionalidad para:
- Leer ficheros de consultas (una consulta Gremlin por línea)
- Abrir una sesión autenticada contra el endpoint Gremlin
- Ejecutar las consultas de forma secuencial clasificando cada resultado
"""

from gremlinrunner.queries.query_parser import (
    QueryFileNotFoundError,
    QueryFileReadError,
    read_queries,
)

from gremlinrunner.queries.gremlin_executor import (
    ExecutionOutcome,
    Failure,
    GremlinConnectionError,
    GremlinSession,
    RunReport,
    RunState,
    Success,
    normalize_value,
    run_queries,
)

__all__ = [
    # Query file reading
    "QueryFileNotFoundError",
    "QueryFileReadError",
    "read_queries",
    # Gremlin execution
    "ExecutionOutcome",
    "Failure",
    "GremlinConnectionError",
    "GremlinSession",
    "RunReport",
    "RunState",
    "Success",
    "normalize_value",
    "run_queries",
]
