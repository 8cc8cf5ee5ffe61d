"""
reporting.py

Console output for query runs: result rows as JSON and Cosmos DB diagnostic
status attributes when a request fails.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Optional, TextIO

from gremlinrunner.queries.gremlin_executor import Failure, RunReport, Success

# x-ms-status-code          : Cosmos DB specific sub-status code
# x-ms-total-request-charge : request units charged for the request
SUCCESS_ATTRIBUTES = ("x-ms-status-code", "x-ms-total-request-charge")

# x-ms-retry-after-ms : wait before retrying a throttled (429) request
# x-ms-activity-id    : unique id of the operation, for troubleshooting
ERROR_ATTRIBUTES = SUCCESS_ATTRIBUTES + ("x-ms-retry-after-ms", "x-ms-activity-id")


def value_as_string(attributes: Mapping[str, Any], key: str) -> str:
    """Serializa un atributo como JSON; 'null' si no existe."""
    return json.dumps(attributes.get(key), ensure_ascii=False, default=str)


class ConsoleReporter:
    """Prints each query announcement and outcome as it happens."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def _print(self, text: str = "") -> None:
        # sys.stdout is resolved per call so pytest's capsys sees the output
        print(text, file=self._stream or sys.stdout)

    def query_started(self, query: str) -> None:
        self._print(f"Running this query: {query}")

    def query_succeeded(self, query: str, outcome: Success) -> None:
        if outcome.rows:
            self._print("\tResult:")
            for row in outcome.rows:
                self._print(f"\t{json.dumps(row, ensure_ascii=False, default=str)}")
            self._print()
            if outcome.attributes:
                self._print_attributes(outcome.attributes, SUCCESS_ATTRIBUTES)
        self._print()

    def query_failed(self, query: str, outcome: Failure) -> None:
        if outcome.is_protocol_error:
            self._print("\tRequest Error!")
            self._print(f"\tStatusCode: {outcome.status_code}")
            self._print_attributes(outcome.attributes, ERROR_ATTRIBUTES)
        self._print(f"\tError: {outcome.message}")

    def _print_attributes(self, attributes: Mapping[str, Any], keys) -> None:
        self._print("\tStatusAttributes:")
        for key in keys:
            self._print(f'\t["{key}"] : {value_as_string(attributes, key)}')

    def print_summary(self, report: RunReport) -> None:
        """Print execution summary to stdout."""
        self._print("=" * 60)
        self._print("QUERY EXECUTION SUMMARY")
        self._print("=" * 60)
        self._print(f"  State:     {report.state.value}")
        self._print(f"  Attempted: {report.attempted}")
        self._print(f"  Succeeded: {report.succeeded}")
        self._print(f"  Failed:    {report.failed}")
        self._print("=" * 60)
