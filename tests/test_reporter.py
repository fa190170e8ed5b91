"""Tests for host reporters and scope report formatting."""

import logging
import unittest

import pytest

from shouldspec import (
    BufferedReporter,
    Equal,
    HostReporter,
    Should,
    SpecFailure,
    SpecTest,
    UnittestReporter,
)
from shouldspec.errors import GrammarError, GrammarErrorKind
from shouldspec.outcome import Outcome, ScopeReport, Status


def test_report_status_precedence():
    ok = Outcome("1 Should Equal 1", passed=True)
    bad = Outcome("1 Should Equal 2", passed=False)
    broken = Outcome("1 Should Equal", passed=False, error=GrammarError(GrammarErrorKind.MISSING_ARGUMENT))

    assert ScopeReport("a", [ok]).status is Status.PASS
    assert ScopeReport("a", [ok, bad]).status is Status.FAIL
    assert ScopeReport("a", [bad, broken, ok]).status is Status.ERROR


def test_report_message_lists_non_passing_outcomes():
    report = ScopeReport(
        "A stack pops",
        [
            Outcome("1 Should Equal 1", passed=True),
            Outcome("1 Should Equal 2", passed=False),
            Outcome("1 Should Equal", passed=False, error=GrammarError(GrammarErrorKind.MISSING_ARGUMENT)),
        ],
    )
    assert report.message() == (
        "A stack pops: ERROR"
        "\n\t1 Should Equal 2"
        "\n\t1 Should Equal"
        "\n\tError: missing argument"
    )


def test_passing_report_message_is_one_line():
    report = ScopeReport("A stack", [Outcome("1 Should Equal 1", passed=True)])
    assert report.passed
    assert report.message() == "A stack: PASS"


def test_buffered_reporter_is_a_host_reporter():
    assert isinstance(BufferedReporter(), HostReporter)


def test_buffered_reporter_collects_and_checks():
    reporter = BufferedReporter()
    reporter.log("fine")
    reporter.logf("%s items", 3)
    reporter.check()

    reporter.errorf("%s: FAIL", "A stack")
    assert reporter.failed()
    assert reporter.logs == ["fine", "3 items"]
    assert reporter.errors == ["A stack: FAIL"]

    with pytest.raises(SpecFailure, match="A stack: FAIL"):
        reporter.check()


def test_buffered_reporter_fatal_stops_immediately():
    reporter = BufferedReporter()
    with pytest.raises(SpecFailure, match="setup broke"):
        reporter.fatal("setup broke")
    assert reporter.errors == ["setup broke"]


def test_fail_without_errors():
    reporter = BufferedReporter()
    reporter.fail()
    with pytest.raises(SpecFailure, match="failed"):
        reporter.check()


def test_logf_without_args_keeps_percent_signs():
    reporter = BufferedReporter()
    reporter.logf("100% done")
    assert reporter.logs == ["100% done"]


def test_messages_mirrored_to_logging(caplog):
    reporter = BufferedReporter()
    with caplog.at_level(logging.INFO, logger="shouldspec.report"):
        reporter.log("A stack: PASS")
        reporter.error("A queue: FAIL")

    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [
        ("INFO", "A stack: PASS"),
        ("ERROR", "A queue: FAIL"),
    ]


class UnittestReporterTest(unittest.TestCase):
    def test_passing_scope(self):
        reporter = UnittestReporter(self)
        s = SpecTest(reporter)
        with s.describe("A number"):
            s.spec(1, Should, Equal, 1)
        reporter.check()
        self.assertEqual(reporter.logs, ["A number: PASS"])

    def test_failing_scope_fails_testcase(self):
        reporter = UnittestReporter(self)
        s = SpecTest(reporter)
        with s.describe("A number"):
            s.spec(1, Should, Equal, 2)
        with self.assertRaises(self.failureException) as ctx:
            reporter.check()
        self.assertIn("A number: FAIL", str(ctx.exception))
