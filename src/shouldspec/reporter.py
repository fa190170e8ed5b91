"""Host test reporters: where scope results end up."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NoReturn, Protocol, runtime_checkable

from shouldspec.errors import SpecFailure

if TYPE_CHECKING:
    import unittest

logger = logging.getLogger("shouldspec.report")


@runtime_checkable
class HostReporter(Protocol):
    """The reporting half of a host test (e.g. a unittest.TestCase run).

    The engine calls log/logf for passing scopes, error/errorf for failing
    ones, and fatal/fatalf only for setup problems it cannot recover from.
    """

    def log(self, *args: Any) -> None: ...

    def logf(self, fmt: str, *args: Any) -> None: ...

    def error(self, *args: Any) -> None: ...

    def errorf(self, fmt: str, *args: Any) -> None: ...

    def fatal(self, *args: Any) -> None: ...

    def fatalf(self, fmt: str, *args: Any) -> None: ...

    def fail(self) -> None: ...

    def fail_now(self) -> None: ...

    def failed(self) -> bool: ...


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class BufferedReporter:
    """Reporter that records messages and fails at the end.

    Errors do not stop the host test; they are collected and raised together
    by check(). fatal/fail_now stop it immediately through failure().
    """

    def __init__(self) -> None:
        self.logs: list[str] = []
        self.errors: list[str] = []
        self._failed = False

    def failure(self, message: str) -> NoReturn:
        """Abort the host test. Subclasses hook in the host's mechanism."""
        raise SpecFailure(message)

    def log(self, *args: Any) -> None:
        message = _join(args)
        self.logs.append(message)
        logger.info(message)

    def logf(self, fmt: str, *args: Any) -> None:
        self.log(_format(fmt, args))

    def error(self, *args: Any) -> None:
        message = _join(args)
        self.errors.append(message)
        logger.error(message)
        self.fail()

    def errorf(self, fmt: str, *args: Any) -> None:
        self.error(_format(fmt, args))

    def fatal(self, *args: Any) -> NoReturn:
        self.error(*args)
        self.fail_now()

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        self.fatal(_format(fmt, args))

    def fail(self) -> None:
        self._failed = True

    def fail_now(self) -> NoReturn:
        self.fail()
        self.failure("\n".join(self.errors) or "failed")

    def failed(self) -> bool:
        return self._failed

    def check(self) -> None:
        """Fail the host test if anything was reported as an error."""
        if self._failed:
            self.failure("\n".join(self.errors) or "failed")


class UnittestReporter(BufferedReporter):
    """Reporter for use inside a unittest.TestCase method."""

    def __init__(self, testcase: unittest.TestCase):
        super().__init__()
        self.testcase = testcase

    def failure(self, message: str) -> NoReturn:
        self.testcase.fail(message)
        raise AssertionError(message)
