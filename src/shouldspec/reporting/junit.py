from __future__ import annotations

from pathlib import Path
from typing import Iterable

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from shouldspec.outcome import ScopeReport, Status


def build_suite(reports: Iterable[ScopeReport], suite_name: str = "shouldspec") -> TestSuite:
    """One test case per reporting scope, named by its scope path."""
    suite = TestSuite(suite_name)
    for report in reports:
        case = TestCase(report.path)
        case.classname = report.path.split(" ", 1)[0]
        if report.status is Status.FAIL:
            case.result = Failure(report.message())
        elif report.status is Status.ERROR:
            case.result = Error(report.message())
        suite.add_testcase(case)
    return suite


def write_junit(
    path: Path, reports: Iterable[ScopeReport], suite_name: str = "shouldspec"
) -> Path:
    """Write junit.xml from scope reports, return path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    xml = JUnitXml()
    # Use append (not +=) to keep the suite as built
    xml.append(build_suite(reports, suite_name))
    xml.write(str(path), pretty=True)
    return path
