"""
Gremlin query execution module.

This module provides functionality to open a single authenticated Gremlin
session against a remote graph endpoint and to execute queries through it
one at a time, classifying each response as a Success or a Failure.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Union

from gremlin_python.driver import client as gremlin_client
from gremlin_python.driver import serializer
from gremlin_python.driver.protocol import GremlinServerError
from gremlin_python.structure.graph import Element, Path, Property

from gremlinrunner.data.config import RunConfig

logger = logging.getLogger(__name__)

JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]


class GremlinConnectionError(Exception):
    """Raised when the Gremlin session can't be established."""

    pass


# -------------------------
# Execution outcomes
# -------------------------
@dataclass
class Success:
    """Rows returned by one query, plus the response status attributes."""

    rows: List[JsonValue]
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Failure:
    """
    A failed query.

    ``status_code`` is None for unclassified errors (anything that is not a
    structured error returned by the server).
    """

    message: str
    status_code: Optional[int] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_protocol_error(self) -> bool:
        return self.status_code is not None


ExecutionOutcome = Union[Success, Failure]


def _normalize_key(key: Any) -> str:
    if isinstance(key, enum.Enum):
        return key.name
    return str(key)


def normalize_value(value: Any, _active: Optional[set] = None) -> JsonValue:
    """Convert a driver value into plain nested dicts/lists/scalars."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, enum.Enum):
        # T.id, T.label, Direction.OUT, ... from elementMap()/valueMap(true)
        return value.name

    if _active is None:
        _active = set()
    if id(value) in _active:
        return str(value)
    _active.add(id(value))
    try:
        if isinstance(value, dict):
            return {_normalize_key(k): normalize_value(v, _active) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [normalize_value(v, _active) for v in value]
        if isinstance(value, (Element, Property, Path)):
            # Vertex, Edge, VertexProperty, Path expose their data as attributes
            return {str(k): normalize_value(v, _active) for k, v in vars(value).items()}
        return str(value)
    finally:
        _active.discard(id(value))


# -------------------------
# Session
# -------------------------
ClientFactory = Callable[..., Any]


class GremlinSession:
    """
    One authenticated connection to the configured Gremlin endpoint.

    Use as a context manager so the underlying sockets are released on every
    exit path::

        with GremlinSession(config) as session:
            outcome = session.submit("g.V().count()")
    """

    def __init__(self, config: RunConfig, client_factory: Optional[ClientFactory] = None):
        self.config = config
        self._client_factory = client_factory or gremlin_client.Client
        self._client: Any = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def open(self) -> "GremlinSession":
        if self._client is not None:
            return self
        try:
            self._client = self._client_factory(
                self.config.endpoint_url,
                "g",
                pool_size=1,
                username=self.config.principal,
                password=self.config.auth_key,
                message_serializer=serializer.GraphSONSerializersV2d0(),
            )
        except Exception as e:
            raise GremlinConnectionError(
                f"Failed to connect to Gremlin endpoint at "
                f"{self.config.host}:{self.config.port}: {e}"
            ) from e
        logger.info(f"Connected to Gremlin endpoint: {self.config.endpoint_url}")
        return self

    def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        try:
            client.close()
        finally:
            logger.info("Gremlin session closed")

    def __enter__(self) -> "GremlinSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Already unwinding: a close failure must not replace the original error
        try:
            self.close()
        except Exception:
            logger.exception("Failed to close Gremlin session")

    def submit(self, query: str) -> ExecutionOutcome:
        """
        Submit one query and wait for its complete response.

        Args:
            query: Raw Gremlin query string

        Returns:
            Success with the result rows, or Failure with the server status
            code, status attributes and error message

        Raises:
            GremlinConnectionError: If the session is not open
        """
        if self._client is None:
            raise GremlinConnectionError("Gremlin session is not open")

        try:
            result_set = self._client.submit(query)
            rows = result_set.all().result()
            attributes = dict(getattr(result_set, "status_attributes", None) or {})
            return Success(rows=[normalize_value(r) for r in rows], attributes=attributes)

        except GremlinServerError as e:
            logger.debug(f"Server error for query {query!r}: {e}")
            return Failure(
                message=str(e),
                status_code=e.status_code,
                attributes=dict(e.status_attributes or {}),
            )
        except Exception as e:
            logger.debug(f"Unclassified error for query {query!r}", exc_info=True)
            return Failure(message=str(e) or type(e).__name__)


# -------------------------
# Execution loop
# -------------------------
class RunState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    COMPLETED = "completed"


@dataclass
class RunReport:
    state: RunState = RunState.IDLE
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0


class QuerySubmitter(Protocol):
    def submit(self, query: str) -> ExecutionOutcome: ...


class OutcomeReporter(Protocol):
    def query_started(self, query: str) -> None: ...

    def query_succeeded(self, query: str, outcome: Success) -> None: ...

    def query_failed(self, query: str, outcome: Failure) -> None: ...


def run_queries(
    session: QuerySubmitter,
    queries: Sequence[str],
    continue_on_error: bool,
    reporter: OutcomeReporter,
) -> RunReport:
    """
    Execute queries sequentially, reporting each outcome before the next.

    Args:
        session: Open session exposing ``submit(query) -> ExecutionOutcome``
        queries: Queries in execution order
        continue_on_error: Keep going after a failed query
        reporter: Receives every announcement and outcome

    Returns:
        RunReport with the final state (COMPLETED or STOPPED) and counts

    Example:
        >>> with GremlinSession(config) as session:
        ...     report = run_queries(session, ["g.V().count()"], False, reporter)
        >>> report.state
        <RunState.COMPLETED: 'completed'>
    """
    report = RunReport()
    if not queries:
        report.state = RunState.COMPLETED
        return report

    report.state = RunState.RUNNING
    for query in queries:
        reporter.query_started(query)
        report.attempted += 1
        outcome = session.submit(query)

        if isinstance(outcome, Success):
            report.succeeded += 1
            logger.info(f"Query {report.attempted}: {len(outcome.rows)} rows returned")
            reporter.query_succeeded(query, outcome)
            continue

        report.failed += 1
        logger.warning(
            f"Query {report.attempted} failed (status={outcome.status_code}): {outcome.message}"
        )
        reporter.query_failed(query, outcome)
        if not continue_on_error:
            report.state = RunState.STOPPED
            logger.info("Stopping: CONTINUE_ON_ERROR is false")
            return report

    report.state = RunState.COMPLETED
    return report
