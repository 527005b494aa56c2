"""Test registration and assertion primitives for recursive exercises."""

from __future__ import annotations

import enum
import inspect
import math
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from recursia.textutils import quoted_version_of
from recursia.timer import Timer

_F = TypeVar("_F", bound=Callable[[], Any])


def _caller_line() -> int:
    """Return the line number of the first frame outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        return frame.f_lineno if frame is not None else 0
    finally:
        del frame


class TestFailedError(Exception):
    """Raised when an expectation inside a test case does not hold."""

    __test__ = False

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = _caller_line() if line is None else line
        super().__init__(f"Line {self.line}: {message}")


class TestType(enum.Enum):
    """What sort of test a test case is."""

    STUDENT = "Student Test"
    PROVIDED = "Provided Test"
    AUTOGRADER = "Autograder Test"
    MANUAL = "Manual Test"


@dataclass
class TestCase:
    """A registered test: its name, kind, defining line and body."""

    __test__ = False

    name: str
    test_type: TestType
    line_number: int
    callback: Callable[[], Any] = field(repr=False, compare=False)


class TestRegistry:
    """Collection of test cases grouped by the file that defines them."""

    __test__ = False

    def __init__(self) -> None:
        self._tests: dict[str, list[TestCase]] = {}

    def add(
        self,
        key: str,
        line: int,
        name: str,
        test_type: TestType,
        callback: Callable[[], Any],
    ) -> TestCase:
        """Record a test case under ``key`` and return it."""
        case = TestCase(name, test_type, line, callback)
        self._tests.setdefault(key, []).append(case)
        return case

    def register(self, name: str, test_type: TestType = TestType.STUDENT) -> Callable[[_F], _F]:
        """Decorator that records the decorated function as a test case."""

        def decorator(func: _F) -> _F:
            code = func.__code__
            self.add(code.co_filename, code.co_firstlineno, name, test_type, func)
            return func

        return decorator

    def groups(self) -> dict[str, list[TestCase]]:
        """Return the tests grouped by key, keys sorted, tests ordered by line."""
        return {
            key: sorted(cases, key=lambda case: case.line_number)
            for key, cases in sorted(self._tests.items())
        }

    def __len__(self) -> int:
        return sum(len(cases) for cases in self._tests.values())


def debug_friendly_string(value: object) -> str:
    """Return a readable rendering of ``value`` for failure messages."""
    if value is None:
        return "nullptr"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quoted_version_of(value)
    if isinstance(value, float):
        return f"{value:.16g}d"
    return str(value)


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def are_equal(lhs: object, rhs: object) -> bool:
    """Compare two values; real numbers compare within a relative epsilon."""
    if _is_real(lhs) and _is_real(rhs) and (isinstance(lhs, float) or isinstance(rhs, float)):
        tolerance = max(abs(lhs), abs(rhs)) * sys.float_info.epsilon  # type: ignore[arg-type]
        return math.fabs(lhs - rhs) <= tolerance  # type: ignore[operator]
    return lhs == rhs


def abbreviate(text: str, max_len: int = 300) -> str:
    """Truncate ``text`` to ``max_len`` characters, marking the cut."""
    return text if len(text) < max_len else text[:max_len] + " ..."


def show_error(message: str) -> None:
    """Fail the current test with ``message``."""
    raise TestFailedError(message, _caller_line())


def expect(condition: bool, expression: str = "condition") -> None:
    """Fail unless ``condition`` is true."""
    if not condition:
        show_error(f"EXPECT failed: {expression} is not true.")


def _describe(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def expect_error(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Exception:
    """Fail unless calling ``func`` raises an error; return that error."""
    try:
        func(*args, **kwargs)
    except TestFailedError:
        raise
    except Exception as error:
        return error
    show_error(f"EXPECT_ERROR: {_describe(func)} did not call error().")
    raise AssertionError("unreachable")


def expect_no_error(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Fail if calling ``func`` raises an error; otherwise return its result."""
    try:
        return func(*args, **kwargs)
    except TestFailedError:
        raise
    except Exception as error:
        show_error(
            f"EXPECT_NO_ERROR: {_describe(func)} called error("
            f"{quoted_version_of(str(error))})."
        )


def _compound_expect(
    name: str,
    fail_symbol: str,
    holds: bool,
    student: object,
    reference: object,
) -> None:
    if not holds:
        show_error(
            f"{name} failed: "
            f"{abbreviate(debug_friendly_string(student))} {fail_symbol} "
            f"{abbreviate(debug_friendly_string(reference))}\n"
        )


def expect_equal(student: object, reference: object) -> None:
    """Fail unless the two values are equal."""
    _compound_expect("EXPECT_EQUAL", "!=", are_equal(student, reference), student, reference)


def expect_not_equal(student: object, reference: object) -> None:
    """Fail if the two values are equal."""
    _compound_expect(
        "EXPECT_NOT_EQUAL", "==", not are_equal(student, reference), student, reference
    )


def expect_less_than(student: Any, reference: Any) -> None:
    """Fail unless ``student < reference``."""
    _compound_expect("EXPECT_LESS_THAN", ">=", student < reference, student, reference)


def expect_greater_than(student: Any, reference: Any) -> None:
    """Fail unless ``student > reference``."""
    _compound_expect("EXPECT_GREATER_THAN", "<=", student > reference, student, reference)


def expect_less_than_or_equal_to(student: Any, reference: Any) -> None:
    """Fail unless ``student <= reference``."""
    _compound_expect(
        "EXPECT_LESS_THAN_OR_EQUAL_TO", ">", student <= reference, student, reference
    )


def expect_greater_than_or_equal_to(student: Any, reference: Any) -> None:
    """Fail unless ``student >= reference``."""
    _compound_expect(
        "EXPECT_GREATER_THAN_OR_EQUAL_TO", "<", student >= reference, student, reference
    )


def expect_completes_in(limit: float, func: Callable[[], Any]) -> Any:
    """Run ``func`` and fail if it takes ``limit`` seconds or longer."""
    with Timer() as timer:
        result = func()
    elapsed = timer.elapsed()
    if elapsed >= limit:
        show_error(
            f"EXPECT_COMPLETES_IN: Operation took {elapsed}s, exceeding limit of {limit}s"
        )
    return result