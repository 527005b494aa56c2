# recursia

Small recursive generators, together with a lightweight test harness that
runs in a terminal. No third-party libraries are needed.

## Generators

- `recursia.mountains.make_mountain_range(left, right, amplitude, decay_rate, rng=None)`
  builds a jagged skyline between two `Point`s by midpoint displacement.
  The middle point of each span is moved up or down by a random integer
  offset between `-amplitude` and `amplitude`. The amplitude is then scaled
  by `decay_rate` for each deeper level. Recursion stops once the endpoints
  are at most three units apart. Pass a `random.Random` as `rng` for
  repeatable results; otherwise the `random` module is used.
- `recursia.speaking.all_recursian_words(num_syllables)` lists every word
  of the given number of syllables. A syllable is a consonant (`b k n r s '`)
  followed by a vowel (`e i u`); a word may also open with a lone vowel.
  There is one word of zero syllables (the empty string), 21 of one,
  378 of two and 6804 of three.
- `recursia.temple.make_temple(bounds, params)` lays out the rectangles of
  a recursive temple inside a `Rectangle`. The shape is set by a frozen
  `TempleParameters` dataclass (proportions, `order`, `num_small_temples`).
  An order-0 temple is an empty list.

```python
import random
from recursia.mountains import Point, make_mountain_range
from recursia.temple import Rectangle, TempleParameters, make_temple

skyline = make_mountain_range(Point(0, 0), Point(96, 0), 20, 0.5, random.Random(1))
parts = make_temple(Rectangle(0, 0, 640, 480), TempleParameters(order=3))
```

Invalid arguments raise `ValueError`: a left point to the right of the
right point, a negative amplitude, a decay rate outside `[0, 1]`, a
negative syllable count, or a negative temple order.

## Test harness

- `recursia.simpletest` supplies `TestRegistry` (with `add`, a `register`
  decorator and `groups`) and assertion helpers: `expect`, `expect_equal`,
  `expect_not_equal`, `expect_less_than`, `expect_greater_than`,
  `expect_less_than_or_equal_to`, `expect_greater_than_or_equal_to`,
  `expect_error`, `expect_no_error` and `expect_completes_in`. A failed
  expectation raises `TestFailedError`.
- `recursia.testdriver.run(reporter, test_filter, comparator, registry, diagnostics)`
  runs the tests of a registry group by group, calling `reporter` with the
  list of `TestGroup`s before anything runs and as each test starts and
  finishes, and returns the final groups. Each `Test` ends as `PASS`,
  `FAIL`, `EXCEPTION` or `LEAK` (see `TestResult`).
- `recursia.memory.MemoryDiagnostics` counts creations and releases of
  registered types. Counts are only changed by calling `record_new` and
  `record_delete`; a test whose counts do not balance is reported as a leak.
- `recursia.timer.Timer` is an accumulating stopwatch, also usable as a
  context manager.
- `recursia.console.run_console_tests` prints progress and a summary for
  any registry to a pair of text streams.

To run the built-in tests of the three generators, use this command:

```
recursia-tests
```

It lists the test groups and asks which one to run; enter `0` to run all
of them. The choice can also be given as an argument, e.g.
`recursia-tests 1`. Afterwards it prints a pass/fail summary for each group
and exits with status 0 if every test passed, 1 otherwise.

## Text helpers

`recursia.textutils` holds a few helpers:

- `add_commas_to(1234567)` gives `"1,234,567"`.
- `pluralize(3, "test")` gives `"3 tests"`.
- `quoted_version_of` and `read_quoted_version_of` write and read back
  double-quoted strings with escapes.
- `format_pattern("%s and %s", 1, "x")` fills `%s` placeholders in turn.
- `conjunction_join(["A", "B", "C"], "and")` gives `"A, B, and C"`.

## What it does not do

The package only computes points, rectangles and word lists; it does not
draw mountains or temples on screen, and its test harness has no
graphical window, only the console output described above.