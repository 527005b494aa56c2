import inspect

import pytest

from recursia import simpletest as st
from recursia.mountains import Point, make_mountain_range
from recursia.speaking import all_recursian_words


def _raise_value_error():
    raise ValueError("bad input")


def test_expect_passes_and_fails():
    st.expect(True, "x")
    with pytest.raises(st.TestFailedError) as info:
        st.expect(False, "x == 1")
    assert info.value.message == "EXPECT failed: x == 1 is not true."


def test_failure_reports_caller_line():
    expected_line = inspect.currentframe().f_lineno + 2
    with pytest.raises(st.TestFailedError) as info:
        st.show_error("boom")
    assert info.value.line == expected_line
    assert str(info.value) == f"Line {expected_line}: boom"


def test_explicit_line_in_error():
    error = st.TestFailedError("oops", 137)
    assert str(error) == "Line 137: oops"


def test_expect_error_returns_raised_error():
    error = st.expect_error(_raise_value_error)
    assert isinstance(error, ValueError)
    assert str(error) == "bad input"


def test_expect_error_with_package_functions():
    with pytest.raises(ValueError) as words_info:
        all_recursian_words(-1)
    words_error = st.expect_error(all_recursian_words, -1)
    assert type(words_error) is ValueError
    assert str(words_error) == str(words_info.value)

    with pytest.raises(ValueError) as range_info:
        make_mountain_range(Point(0, 0), Point(-1, 0), 10, 1)
    range_error = st.expect_error(make_mountain_range, Point(0, 0), Point(-1, 0), 10, 1)
    assert type(range_error) is ValueError
    assert str(range_error) == str(range_info.value)


def test_expect_error_fails_when_nothing_raised():
    with pytest.raises(st.TestFailedError) as info:
        st.expect_error(len, "abc")
    assert "did not call error()" in info.value.message


def test_expect_error_lets_test_failures_through():
    def inner():
        st.show_error("inner failure")

    with pytest.raises(st.TestFailedError) as info:
        st.expect_error(inner)
    assert info.value.message == "inner failure"


def test_expect_no_error_returns_result():
    assert st.expect_no_error(all_recursian_words, 0) == [""]


def test_expect_no_error_fails_on_error():
    with pytest.raises(st.TestFailedError) as info:
        st.expect_no_error(_raise_value_error)
    assert 'called error("bad input")' in info.value.message


def test_expect_equal():
    st.expect_equal(all_recursian_words(0), [""])
    with pytest.raises(st.TestFailedError) as info:
        st.expect_equal(1, 2)
    assert info.value.message.startswith("EXPECT_EQUAL failed: 1 != 2")


def test_expect_not_equal():
    st.expect_not_equal(1, 2)
    with pytest.raises(st.TestFailedError) as info:
        st.expect_not_equal("a", "a")
    assert info.value.message.startswith('EXPECT_NOT_EQUAL failed: "a" == "a"')


@pytest.mark.parametrize(
    "check, passing, failing",
    [
        (st.expect_less_than, (1, 2), (2, 2)),
        (st.expect_greater_than, (3, 2), (2, 2)),
        (st.expect_less_than_or_equal_to, (2, 2), (3, 2)),
        (st.expect_greater_than_or_equal_to, (2, 2), (1, 2)),
    ],
)
def test_ordering_expectations(check, passing, failing):
    check(*passing)
    with pytest.raises(st.TestFailedError) as info:
        check(*failing)
    assert "failed:" in info.value.message


def test_are_equal_is_fuzzy_for_floats():
    assert st.are_equal(0.1 + 0.2, 0.3)
    assert not st.are_equal(1.0, 1.0001)
    assert st.are_equal(3, 3)
    assert not st.are_equal("a", "b")


def test_debug_friendly_string():
    assert st.debug_friendly_string(True) == "true"
    assert st.debug_friendly_string(False) == "false"
    assert st.debug_friendly_string(None) == "nullptr"
    assert st.debug_friendly_string("ab") == '"ab"'
    assert st.debug_friendly_string(0.5) == "0.5d"
    assert st.debug_friendly_string(42) == "42"


def test_abbreviate():
    assert st.abbreviate("short") == "short"
    long_text = "x" * 400
    assert st.abbreviate(long_text) == "x" * 300 + " ..."
    assert st.abbreviate("abcdef", 3) == "abc ..."
    assert st.abbreviate("ab", 3) == "ab"


def test_registry_groups_sorted():
    registry = st.TestRegistry()
    registry.add("b.py", 20, "second", st.TestType.PROVIDED, lambda: None)
    registry.add("b.py", 10, "first", st.TestType.STUDENT, lambda: None)
    registry.add("a.py", 5, "alpha", st.TestType.MANUAL, lambda: None)
    groups = registry.groups()
    assert list(groups) == ["a.py", "b.py"]
    assert [case.name for case in groups["b.py"]] == ["first", "second"]
    assert [case.line_number for case in groups["b.py"]] == [10, 20]
    assert len(registry) == 3


def test_registry_register_decorator():
    registry = st.TestRegistry()

    @registry.register("decorated", st.TestType.PROVIDED)
    def body():
        return 7

    groups = registry.groups()
    assert list(groups) == [body.__code__.co_filename]
    (case,) = groups[body.__code__.co_filename]
    assert case.name == "decorated"
    assert case.test_type is st.TestType.PROVIDED
    assert case.line_number == body.__code__.co_firstlineno
    assert case.callback() == 7


def test_test_type_labels_kept_by_registry():
    registry = st.TestRegistry()
    registry.add("types.py", 1, "student", st.TestType.STUDENT, lambda: None)
    registry.add("types.py", 2, "provided", st.TestType.PROVIDED, lambda: None)
    labels = [case.test_type.value for case in registry.groups()["types.py"]]
    assert labels == ["Student Test", "Provided Test"]


def test_expect_completes_in():
    assert st.expect_completes_in(10.0, lambda: 5) == 5
    with pytest.raises(st.TestFailedError) as info:
        st.expect_completes_in(0, lambda: None)
    assert info.value.message.startswith("EXPECT_COMPLETES_IN: Operation took")
    assert info.value.message.endswith("exceeding limit of 0s")