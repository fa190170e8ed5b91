"""pytest integration: a ``spec`` fixture backed by the running test."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, NoReturn

import pytest

from shouldspec.config import SpecConfig
from shouldspec.outcome import ScopeReport
from shouldspec.reporter import BufferedReporter
from shouldspec.reporting.junit import write_junit
from shouldspec.spec import SpecTest

_REPORTS_KEY = pytest.StashKey[list[ScopeReport]]()
_JUNIT_KEY = pytest.StashKey[str]()


class PytestReporter(BufferedReporter):
    """Reporter that fails the current pytest test."""

    def failure(self, message: str) -> NoReturn:
        pytest.fail(message, pytrace=False)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("shouldspec")
    group.addoption(
        "--spec-pattern",
        action="append",
        default=[],
        metavar="REGEX",
        help="Run only specs whose scope path matches REGEX (repeatable).",
    )
    group.addoption(
        "--spec-debug",
        action="store_true",
        default=False,
        help="Trace hook firing and spec parsing to stderr.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.stash[_REPORTS_KEY] = []


@pytest.fixture(scope="session")
def spec_config(pytestconfig: pytest.Config) -> SpecConfig:
    """SHOULDSPEC_* environment settings, overridden by command line options."""
    cfg = SpecConfig.from_env()
    updates = {}
    patterns = pytestconfig.getoption("--spec-pattern")
    if patterns:
        updates["patterns"] = patterns
    if pytestconfig.getoption("--spec-debug"):
        updates["debug"] = True
    if updates:
        cfg = SpecConfig(**{**cfg.model_dump(), **updates})
    if cfg.junit_file:
        pytestconfig.stash[_JUNIT_KEY] = cfg.junit_file
    return cfg


@pytest.fixture
def spec(spec_config: SpecConfig, pytestconfig: pytest.Config) -> Iterator[SpecTest]:
    """A SpecTest whose failing scopes fail the requesting test."""
    s = SpecTest(PytestReporter(), config=spec_config)
    yield s
    pytestconfig.stash[_REPORTS_KEY].extend(s.reports)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    result = yield
    # Only reached when the test body itself did not raise
    s = getattr(item, "funcargs", {}).get("spec")
    if isinstance(s, SpecTest) and isinstance(s.reporter, BufferedReporter):
        s.reporter.check()
    return result


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    reports = session.config.stash.get(_REPORTS_KEY, [])
    junit_file = session.config.stash.get(_JUNIT_KEY, None)
    if junit_file and reports:
        write_junit(Path(junit_file), reports)
