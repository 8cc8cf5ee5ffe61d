"""
Test the sequential execution loop and its continue/stop policy.
"""

from unittest.mock import MagicMock

import pytest

from gremlinrunner.queries.gremlin_executor import (
    Failure,
    RunState,
    Success,
    run_queries,
)


class FakeSession:
    """Fails every query listed in ``failing``; records every submission."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.submitted = []

    def submit(self, query):
        self.submitted.append(query)
        if query in self.failing:
            return Failure(message=f"{query} failed", status_code=500, attributes={})
        return Success(rows=[{"query": query}])


def queries(n):
    return [f"g.V('{i}')" for i in range(1, n + 1)]


class TestRunQueries:
    def test_all_succeed(self):
        session = FakeSession()
        report = run_queries(session, queries(3), False, MagicMock())
        assert report.state is RunState.COMPLETED
        assert (report.attempted, report.succeeded, report.failed) == (3, 3, 0)
        assert session.submitted == queries(3)

    def test_empty_query_list(self):
        session = FakeSession()
        reporter = MagicMock()
        report = run_queries(session, [], False, reporter)
        assert report.state is RunState.COMPLETED
        assert report.attempted == 0
        assert session.submitted == []
        assert reporter.method_calls == []

    @pytest.mark.parametrize("n, k", [(1, 1), (3, 1), (3, 2), (3, 3), (5, 4)])
    def test_stop_on_error_attempts_exactly_k(self, n, k):
        qs = queries(n)
        session = FakeSession(failing={qs[k - 1]})
        report = run_queries(session, qs, False, MagicMock())
        assert session.submitted == qs[:k]
        assert report.attempted == k
        assert report.failed == 1
        assert report.state is RunState.STOPPED

    @pytest.mark.parametrize("failing_idx", [(), (0,), (1, 2), (0, 1, 2, 3)])
    def test_continue_on_error_attempts_all(self, failing_idx):
        qs = queries(4)
        session = FakeSession(failing={qs[i] for i in failing_idx})
        report = run_queries(session, qs, True, MagicMock())
        assert session.submitted == qs
        assert report.attempted == 4
        assert report.failed == len(failing_idx)
        assert report.succeeded == 4 - len(failing_idx)
        assert report.state is RunState.COMPLETED

    def test_duplicate_queries_each_submitted(self):
        session = FakeSession()
        run_queries(session, ["g.V()", "g.V()"], False, MagicMock())
        assert session.submitted == ["g.V()", "g.V()"]

    def test_reporter_sees_outcome_before_next_query(self):
        qs = queries(3)
        session = FakeSession(failing={qs[1]})
        events = []

        class Recorder:
            def query_started(self, query):
                events.append(("start", query, len(session.submitted)))

            def query_succeeded(self, query, outcome):
                events.append(("ok", query, len(session.submitted)))

            def query_failed(self, query, outcome):
                events.append(("fail", query, len(session.submitted)))

        run_queries(session, qs, True, Recorder())
        assert events == [
            ("start", qs[0], 0),
            ("ok", qs[0], 1),
            ("start", qs[1], 1),
            ("fail", qs[1], 2),
            ("start", qs[2], 2),
            ("ok", qs[2], 3),
        ]
