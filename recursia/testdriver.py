"""Runs registered test cases and reports their progress group by group."""

from __future__ import annotations

import enum
import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from recursia.memory import MemoryDiagnostics
from recursia.simpletest import TestCase, TestFailedError, TestRegistry, TestType
from recursia.textutils import pluralize


class TestResult(enum.Enum):
    """How a test turned out."""

    __test__ = False

    WAITING = enum.auto()
    RUNNING = enum.auto()
    PASS = enum.auto()
    FAIL = enum.auto()
    LEAK = enum.auto()
    EXCEPTION = enum.auto()


@dataclass(eq=False)
class Test:
    """A single test as displayed and run by the driver."""

    __test__ = False

    name: str
    test_type: TestType
    line_number: int
    callback: Callable[[], Any] = field(repr=False)
    result: TestResult = TestResult.WAITING
    detail_message: str = ""


@dataclass(eq=False)
class TestGroup:
    """The tests defined in one file."""

    __test__ = False

    name: str
    tests: list[Test] = field(default_factory=list)
    num_tests: int = 0
    num_passed: int = 0


TestReporter = Callable[[list[TestGroup]], Any]
TestFilter = Callable[[str, Test], bool]
TestGroupComparator = Callable[[str, str], bool]


def tail_of(path: str) -> str:
    """Return the file name at the end of ``path``, splitting on / or \\."""
    index = max(path.rfind("/"), path.rfind("\\"))
    return path if index == -1 else path[index + 1:]


_ERROR_LINES = (
    "    Test failed due to the program triggering an ErrorException.",
    "",
    "    This means that the test did not fail because of a call",
    "    to EXPECT() or EXPECT_ERROR() failing, but rather because",
    "    some code explicitly called the error() function.",
    "",
)

_EXCEPTION_LINES = (
    "    Test failed due to the program triggering an exception.",
    "",
    "    This means that the test did not fail because of a call",
    "    to EXPECT() or an EXPECT_ERROR() failing, but rather because",
    "    some code - probably an internal library - triggered",
    "    an error.",
    "",
)

_UNKNOWN_LINES = (
    "    Test failed due to the program triggering an unknown type",
    "    of exception. ",
    "",
    "    This means that the test did not fail because of a call",
    "    to EXPECT() or an EXPECT_ERROR() failing, but rather because",
    "    some code triggered an error whose format we couldn't",
    "    recognize.",
    "",
)


def _lines(*lines: str) -> str:
    return "".join(line + "\n" for line in lines)


def _leak_message(errors: dict[str, int]) -> str:
    lines = ["    Test failed due to memory errors with these types:"]
    for type_name, delta in errors.items():
        if delta > 0:
            lines.append(f"            {type_name}: Leaked {pluralize(delta, 'object')}.")
        else:
            lines.append(
                f"            {type_name}: Deallocated "
                f"{pluralize(-delta, 'more object')} than allocated."
            )
    return _lines(*lines)


def run_single_test(
    test: Test, group: TestGroup, diagnostics: MemoryDiagnostics | None = None
) -> None:
    """Run ``test``, recording its result and details and updating ``group``."""
    if diagnostics is None:
        diagnostics = MemoryDiagnostics()
    try:
        diagnostics.clear()
        test.callback()
        errors = diagnostics.types_with_errors()
        if not errors:
            test.result = TestResult.PASS
            group.num_passed += 1
        else:
            test.result = TestResult.LEAK
            test.detail_message = _leak_message(errors)
    except TestFailedError as failure:
        test.result = TestResult.FAIL
        test.detail_message = _lines(f"    {failure}")
    except ValueError as error:
        test.result = TestResult.EXCEPTION
        test.detail_message = _lines(*_ERROR_LINES, f"    Error: {error}")
    except Exception as error:
        test.result = TestResult.EXCEPTION
        test.detail_message = _lines(*_EXCEPTION_LINES, f"    Error: {error}")
    except (KeyboardInterrupt, SystemExit, GeneratorExit):
        raise
    except BaseException:
        test.result = TestResult.EXCEPTION
        test.detail_message = _lines(*_UNKNOWN_LINES)


def _to_group(
    key: str, cases: list[TestCase], test_filter: TestFilter | None
) -> TestGroup:
    group = TestGroup(name=tail_of(key), num_tests=len(cases))
    for case in cases:
        test = Test(case.name, case.test_type, case.line_number, case.callback)
        if test_filter is None or test_filter(group.name, test):
            group.tests.append(test)
    return group


def _alphabetical(lhs: str, rhs: str) -> bool:
    return lhs < rhs


def run(
    reporter: TestReporter,
    test_filter: TestFilter | None = None,
    comparator: TestGroupComparator | None = None,
    registry: TestRegistry | None = None,
    diagnostics: MemoryDiagnostics | None = None,
) -> list[TestGroup]:
    """Run every registered test accepted by ``test_filter`` (all if None).

    Groups are ordered by ``comparator``, a less-than on group names
    (alphabetical by default). ``reporter`` receives the list of groups before
    any test runs, and again as each test starts and finishes. The final list
    of groups is returned.
    """
    comparator = comparator or _alphabetical
    registry = registry if registry is not None else TestRegistry()
    diagnostics = diagnostics if diagnostics is not None else MemoryDiagnostics()

    groups = [
        group
        for key, cases in registry.groups().items()
        if (group := _to_group(key, cases, test_filter)).tests
    ]

    def compare(lhs: TestGroup, rhs: TestGroup) -> int:
        if comparator(lhs.name, rhs.name):
            return -1
        if comparator(rhs.name, lhs.name):
            return 1
        return 0

    groups.sort(key=functools.cmp_to_key(compare))

    reporter(groups)
    for group in groups:
        for test in group.tests:
            test.result = TestResult.RUNNING
            reporter(groups)
            run_single_test(test, group, diagnostics)
            reporter(groups)
    return groups