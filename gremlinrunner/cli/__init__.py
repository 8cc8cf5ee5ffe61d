"""
CLI module for gremlinrunner.

Modules:
    queries: CLI que ejecuta un fichero de consultas Gremlin
    reporting: Salida por consola de resultados y diagnósticos
"""

__all__ = ["queries", "reporting"]
