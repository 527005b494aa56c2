"""Console front end that lists test groups, runs them and prints a summary."""

from __future__ import annotations

import argparse
import contextlib
import io
import sys
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TextIO

from recursia.mountains import Point, make_mountain_range
from recursia.simpletest import (
    TestRegistry,
    TestType,
    expect,
    expect_equal,
    expect_error,
    expect_greater_than,
)
from recursia.speaking import all_recursian_words
from recursia.temple import Rectangle, TempleParameters, make_temple
from recursia.testdriver import (
    Test,
    TestFilter,
    TestGroup,
    TestGroupComparator,
    TestResult,
    run,
    tail_of,
)
from recursia.textutils import pluralize

TEST_ORDER = ("speaking.py", "mountains.py", "temple.py")


def display_name_of(test: Test) -> str:
    """Return the label shown for ``test``, e.g. ``Provided Test: name``."""
    return f"{test.test_type.value}: {test.name}"


def _position(file_order: Sequence[str], name: str) -> int:
    try:
        return list(file_order).index(name)
    except ValueError:
        return len(file_order)


def order_comparator(file_order: Iterable[str]) -> TestGroupComparator:
    """Return a less-than on group names following ``file_order``.

    Names missing from ``file_order`` sort after every listed name.
    """
    order = tuple(file_order)

    def less(lhs: str, rhs: str) -> bool:
        return _position(order, lhs) < _position(order, rhs)

    return less


def get_test_groups(registry: TestRegistry, file_order: Iterable[str] = ()) -> list[str]:
    """Return the names of all groups in ``registry`` in ``file_order``."""
    order = tuple(file_order)
    names = [tail_of(key) for key in registry.groups()]
    return sorted(names, key=lambda name: _position(order, name))


def filter_to_selection(groups: Sequence[str], selection: int) -> TestFilter:
    """Return a filter for the group at index ``selection``; negative means all."""
    selected = groups[selection] if selection >= 0 else None

    def accept(group_name: str, test: Test) -> bool:
        return selected is None or group_name == selected

    return accept


def _progress_reporter(out: TextIO) -> Callable[[list[TestGroup]], None]:
    running: Test | None = None

    def report(groups: list[TestGroup]) -> None:
        nonlocal running
        for group in groups:
            for test in group.tests:
                if running is test:
                    if test.result is TestResult.PASS:
                        out.write("    pass\n")
                    elif test.result in (TestResult.FAIL, TestResult.EXCEPTION):
                        out.write(f"    FAIL: {test.detail_message}\n")
                    elif test.result is TestResult.LEAK:
                        out.write(f"    LEAK: {test.detail_message}\n")
                    else:
                        raise RuntimeError("Internal error: Unknown test result?")
                    running = None
                if test.result is TestResult.RUNNING:
                    running = test
                    out.write(f"Running {display_name_of(test)} from {group.name}.\n")

    return report


def run_console_tests(
    test_filter: TestFilter | None = None,
    divert_streams: bool = False,
    registry: TestRegistry | None = None,
    file_order: Iterable[str] = (),
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> list[TestGroup]:
    """Run the selected tests, printing progress to ``out`` and failures to ``err``.

    With ``divert_streams`` set, anything the tests themselves print to
    standard output or standard error is swallowed. Returns the final groups.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    registry = registry if registry is not None else TestRegistry()

    with contextlib.ExitStack() as stack:
        if divert_streams:
            stack.enter_context(contextlib.redirect_stdout(io.StringIO()))
            stack.enter_context(contextlib.redirect_stderr(io.StringIO()))
        groups = run(
            _progress_reporter(out),
            test_filter,
            order_comparator(file_order),
            registry,
        )

    out.write("\nTest summary: \n")

    total_tests = sum(group.num_tests for group in groups)
    total_passed = sum(group.num_passed for group in groups)
    for group in groups:
        if group.num_passed != group.num_tests:
            err.write(f"Tests failed in {group.name}:\n")
            for test in group.tests:
                if test.result is not TestResult.PASS:
                    err.write(f"FAIL: {test.name} (line {test.line_number})\n")
                    err.write(f"{test.detail_message}\n")

    for group in groups:
        out.write(
            f"{group.name}: {group.num_passed} of "
            f"{pluralize(group.num_tests, 'test')} passed.\n"
        )
    if len(groups) > 1:
        out.write(
            f"Overall: {total_passed} of {pluralize(total_tests, 'test')} passed.\n"
        )
    if total_tests == total_passed:
        out.write("All tests passed!\n")
    return groups


def _provided(registry: TestRegistry, key: str, name: str) -> Callable[[Callable[[], Any]], Any]:
    def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
        registry.add(key, func.__code__.co_firstlineno, name, TestType.PROVIDED, func)
        return func

    return decorator


def provided_tests() -> TestRegistry:
    """Return a registry holding the provided tests for the three exercises."""
    registry = TestRegistry()

    @_provided(registry, "mountains.py", "Handles invalid inputs.")
    def _invalid_mountains() -> None:
        expect_error(make_mountain_range, Point(0, 0), Point(-1, 0), 10, 1)
        expect_error(make_mountain_range, Point(0, 0), Point(10, 10), -137, 1)
        expect_error(make_mountain_range, Point(0, 0), Point(10, 10), 137, -0.1)
        expect_error(make_mountain_range, Point(0, 0), Point(10, 10), 137, 1.1)

    @_provided(registry, "mountains.py", "Works on points that are very close together.")
    def _close_points() -> None:
        mountain = make_mountain_range(Point(0, 0), Point(1, 0), 100, 0.1)
        expect_equal(mountain, [Point(0, 0), Point(1, 0)])

    @_provided(registry, "mountains.py", "Works with close points and amplitude zero.")
    def _close_zero() -> None:
        mountain = make_mountain_range(Point(0, 0), Point(6, 6), 0, 1)
        expect_equal(mountain, [Point(0, 0), Point(3, 3), Point(6, 6)])

    @_provided(registry, "mountains.py", "Works with far points and zero amplitude.")
    def _far_zero() -> None:
        points = [Point(3 * i, 3 * i) for i in range(33)]
        expect_equal(make_mountain_range(points[0], points[-1], 0, 1), points)

    @_provided(registry, "speaking.py", "allRecursianWords works in simple cases.")
    def _simple_words() -> None:
        expect_equal(all_recursian_words(0), [""])
        expect_error(all_recursian_words, -1)
        expect_error(all_recursian_words, -137)

    @_provided(registry, "speaking.py", "allRecursianWords works for length 1.")
    def _length_one() -> None:
        unsorted = all_recursian_words(1)
        for word in unsorted:
            expect(len(word) in (1, 2), "word.length() == 1 || word.length() == 2")
        words = set(unsorted)
        expect_equal(len(unsorted), len(words))
        expected = {
            "'e", "'i", "'u", "be", "bi", "bu", "e", "i",
            "ke", "ki", "ku", "ne", "ni", "nu", "re", "ri",
            "ru", "se", "si", "su", "u",
        }
        expect_equal(words, expected)

    @_provided(registry, "speaking.py", "allRecursianWords has the right quantities of words.")
    def _quantities() -> None:
        expect_equal(len(all_recursian_words(0)), 1)
        expect_equal(len(all_recursian_words(1)), 21)
        expect_equal(len(all_recursian_words(2)), 378)
        expect_equal(len(all_recursian_words(3)), 6804)

    @_provided(registry, "temple.py", "Milestone One: Draws the initial temple base.")
    def _temple_base() -> None:
        bounds = Rectangle(100000, 400000, 128, 512)
        params = TempleParameters(order=1, base_height=1.0, base_width=1.0)
        temple = make_temple(bounds, params)
        expect_greater_than(len(temple), 0)
        expect_equal(temple[0], Rectangle(100000, 400000, 128, 512))

        params = TempleParameters(order=1, base_height=0.25, base_width=0.75)
        temple = make_temple(bounds, params)
        expect_greater_than(len(temple), 0)
        expect_equal(temple[0], Rectangle(100016, 400384, 96, 128))

    @_provided(registry, "temple.py", "Milestone Three: Handles zero and negative orders.")
    def _temple_orders() -> None:
        bounds = Rectangle(0, 0, 1, 1)
        expect_equal(make_temple(bounds, TempleParameters(order=0)), [])
        expect_error(make_temple, bounds, TempleParameters(order=-1))
        expect_error(make_temple, bounds, TempleParameters(order=-137))

    return registry


def _prompt_selection(groups: Sequence[str], out: TextIO) -> int:
    out.write("Select which test to run!\n")
    out.write("0 All Tests\n")
    for number, name in enumerate(groups, start=1):
        out.write(f"{number} {name}\n")
    while True:
        answer = input("Select which test to run: ")
        try:
            choice = int(answer.strip())
        except ValueError:
            out.write("Illegal integer format. Try again.\n")
            continue
        if 0 <= choice <= len(groups):
            return choice - 1
        out.write("Please choose one of the listed numbers.\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the provided tests from the command line; return 0 if all pass."""
    parser = argparse.ArgumentParser(prog="recursia", description="Run the provided tests.")
    parser.add_argument(
        "selection",
        nargs="?",
        type=int,
        help="0 for all tests, or the number of one test group",
    )
    args = parser.parse_args(argv)

    registry = provided_tests()
    groups = get_test_groups(registry, TEST_ORDER)
    if args.selection is None:
        selection = _prompt_selection(groups, sys.stdout)
    else:
        if not 0 <= args.selection <= len(groups):
            parser.error(f"selection must be between 0 and {len(groups)}")
        selection = args.selection - 1

    results = run_console_tests(
        filter_to_selection(groups, selection), False, registry, TEST_ORDER
    )
    passed = all(group.num_passed == group.num_tests for group in results)
    return 0 if passed else 1