"""
gremlinrunner.data

Configuración de la ejecución cargada desde el entorno y ficheros .env.
"""

from gremlinrunner.data.config import (
    ConfigError,
    RunConfig,
    load_run_config,
)

__all__ = [
    "ConfigError",
    "RunConfig",
    "load_run_config",
]
