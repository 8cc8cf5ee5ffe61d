"""
config.py

Dataclass de configuración de la ejecución (endpoint Gremlin, credenciales y
política de errores) y carga desde variables de entorno / fichero .env.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"

REQUIRED_KEYS = (
    "HOSTNAME",
    "PORT",
    "AUTHKEY",
    "DATABASE",
    "COLLECTION",
    "CONTINUE_ON_ERROR",
)

CONFIG_HINT = "Please copy the .env.sample into .env and update the values."


class ConfigError(Exception):
    """Raised when required settings are missing or invalid."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(
            "One or more environment variables are not set or invalid: "
            + "; ".join(self.problems)
            + ". "
            + CONFIG_HINT
        )


@dataclass(frozen=True)
class RunConfig:
    """Configuración inmutable de una ejecución."""

    host: str
    port: int
    auth_key: str = field(repr=False)
    database: str
    collection: str
    continue_on_error: bool

    @property
    def principal(self) -> str:
        """Identidad de acceso: /dbs/<database>/colls/<collection>."""
        return f"/dbs/{self.database}/colls/{self.collection}"

    @property
    def endpoint_url(self) -> str:
        return f"wss://{self.host}:{self.port}/"


def _parse_bool(raw: str) -> Optional[bool]:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def _merge_settings(
    env_file: Optional[str | Path], environ: Optional[Mapping[str, str]]
) -> Dict[str, Optional[str]]:
    """Combina el entorno del proceso con el fichero .env (el fichero gana)."""
    settings: Dict[str, Optional[str]] = dict(os.environ if environ is None else environ)

    path = Path(env_file if env_file is not None else DEFAULT_ENV_FILE).expanduser()
    if path.is_file():
        logger.debug(f"Loading settings from {path}")
        settings.update(dotenv_values(path))
    elif env_file is not None:
        logger.warning(f"Environment file not found: {path}")

    return settings


def load_run_config(
    env_file: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RunConfig:
    """
    Load and validate the run configuration.

    Args:
        env_file: Path to a dotenv file (defaults to ``.env`` in the working
            directory; a missing default file is ignored)
        environ: Base environment mapping (defaults to ``os.environ``)

    Returns:
        Validated RunConfig

    Raises:
        ConfigError: If any required key is missing, empty or malformed

    Example:
        >>> cfg = load_run_config(environ={
        ...     "HOSTNAME": "acct.gremlin.cosmos.azure.com", "PORT": "443",
        ...     "AUTHKEY": "secret", "DATABASE": "db", "COLLECTION": "graph",
        ...     "CONTINUE_ON_ERROR": "false"}, env_file="/nonexistent/.env")
        >>> cfg.principal
        '/dbs/db/colls/graph'
    """
    settings = _merge_settings(env_file, environ)

    problems: List[str] = []
    values: Dict[str, str] = {}
    for key in REQUIRED_KEYS:
        raw = settings.get(key)
        if raw is None or raw.strip() == "":
            problems.append(f"{key} is missing")
        else:
            values[key] = raw

    port = 0
    if "PORT" in values:
        try:
            port = int(values["PORT"].strip())
        except ValueError:
            problems.append(f"PORT must be an integer (got {values['PORT']!r})")
        else:
            if port <= 0:
                problems.append("PORT must be greater than zero")

    continue_on_error: Optional[bool] = None
    if "CONTINUE_ON_ERROR" in values:
        continue_on_error = _parse_bool(values["CONTINUE_ON_ERROR"])
        if continue_on_error is None:
            problems.append(
                "CONTINUE_ON_ERROR must be 'true' or 'false' "
                f"(got {values['CONTINUE_ON_ERROR']!r})"
            )

    if problems:
        raise ConfigError(problems)

    config = RunConfig(
        host=values["HOSTNAME"].strip(),
        port=port,
        auth_key=values["AUTHKEY"],
        database=values["DATABASE"].strip(),
        collection=values["COLLECTION"].strip(),
        continue_on_error=bool(continue_on_error),
    )
    logger.info(
        f"Configuration loaded: host={config.host} port={config.port} "
        f"principal={config.principal} continue_on_error={config.continue_on_error}"
    )
    return config
