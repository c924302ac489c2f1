"""Duration literals of every unit spelling, for both targets."""

import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from reactorgen.codegen.types import CppTypes, RustTypes  # noqa: E402
from reactorgen.ir.time import TimeUnit, TimeValue  # noqa: E402

RUST = RustTypes()
CPP = CppTypes()

# spelling -> the Rust constructor and multiplier it must normalise to
EXPECTED_RUST = {
    'nsec': ('from_nanos', 1), 'nsecs': ('from_nanos', 1),
    'usec': ('from_micros', 1), 'usecs': ('from_micros', 1),
    'msec': ('from_millis', 1), 'msecs': ('from_millis', 1),
    'sec': ('from_secs', 1), 'secs': ('from_secs', 1),
    'second': ('from_secs', 1), 'seconds': ('from_secs', 1),
    'min': ('from_secs', 60), 'mins': ('from_secs', 60),
    'minute': ('from_secs', 60), 'minutes': ('from_secs', 60),
    'hour': ('from_secs', 3600), 'hours': ('from_secs', 3600),
    'day': ('from_secs', 86400), 'days': ('from_secs', 86400),
    'week': ('from_secs', 604800), 'weeks': ('from_secs', 604800),
    '': ('from_secs', 1),
}


def test_every_unit_is_covered():
    """Every member of TimeUnit has an expectation above."""
    assert {u.value for u in TimeUnit} == set(EXPECTED_RUST)


@pytest.mark.parametrize("spelling", sorted(EXPECTED_RUST))
@pytest.mark.parametrize("magnitude", [0, 1, 7, 123456789])
def test_rust_time_literal(spelling, magnitude):
    ctor, factor = EXPECTED_RUST[spelling]
    unit = TimeUnit.parse(spelling)
    assert RUST.time_literal(magnitude, unit) == f"Duration::{ctor}({magnitude * factor})"


def test_documented_examples():
    assert RUST.time_literal(2, TimeUnit.HOURS) == "Duration::from_secs(7200)"
    assert RUST.time_literal(500, TimeUnit.MSEC) == "Duration::from_millis(500)"
    assert TimeValue(2, TimeUnit.HOURS).to_nanoseconds() == 7200 * 10**9
    assert TimeValue(500, TimeUnit.MSEC).to_nanoseconds() * 2 == 10**9


@pytest.mark.parametrize("singular,plural", [
    (TimeUnit.NSEC, TimeUnit.NSECS),
    (TimeUnit.USEC, TimeUnit.USECS),
    (TimeUnit.MSEC, TimeUnit.MSECS),
    (TimeUnit.SEC, TimeUnit.SECONDS),
    (TimeUnit.MIN, TimeUnit.MINUTES),
    (TimeUnit.HOUR, TimeUnit.HOURS),
    (TimeUnit.DAY, TimeUnit.DAYS),
    (TimeUnit.WEEK, TimeUnit.WEEKS),
])
def test_aliases_render_identically(singular, plural):
    for types in (RUST, CPP):
        assert types.time_literal(3, singular) == types.time_literal(3, plural)


def test_unspecified_unit_defaults_to_seconds():
    assert RUST.time_literal(4, TimeUnit.NONE) == RUST.time_literal(4, TimeUnit.SEC)
    assert RUST.time_literal(4, None) == "Duration::from_secs(4)"
    assert CPP.time_literal(4, TimeUnit.NONE) == "4s"


def test_spellings_parse_case_insensitively():
    assert TimeUnit.parse('MSecs') is TimeUnit.MSECS
    assert RUST.time_literal(5, 'Weeks') == "Duration::from_secs(3024000)"
    with pytest.raises(ValueError):
        TimeUnit.parse('fortnight')


def test_64_bit_magnitudes_are_exact():
    u64_max = (1 << 64) - 1
    assert RUST.time_literal(u64_max, TimeUnit.NSEC) == f"Duration::from_nanos({u64_max})"
    assert RUST.time_literal(u64_max, TimeUnit.SECS) == f"Duration::from_secs({u64_max})"
    big = u64_max // 604800
    assert RUST.time_literal(big, TimeUnit.WEEKS) == f"Duration::from_secs({big * 604800})"


def test_overflowing_duration_is_rejected():
    with pytest.raises(ValueError):
        RUST.time_literal(1 << 64, TimeUnit.NSEC)
    with pytest.raises(ValueError):
        RUST.time_literal((1 << 64) // 60 + 1, TimeUnit.MIN)


def test_overflowing_chrono_literal_is_rejected():
    assert CPP.time_literal((1 << 64) - 1, TimeUnit.NSEC) == f"{(1 << 64) - 1}ns"
    with pytest.raises(ValueError):
        CPP.time_literal(1 << 64, TimeUnit.NSEC)
    with pytest.raises(ValueError):
        CPP.time_literal(1 << 70, TimeUnit.WEEKS)


def test_negative_and_non_integer_magnitudes_are_rejected():
    with pytest.raises(ValueError):
        RUST.time_literal(-1, TimeUnit.SEC)
    with pytest.raises(TypeError):
        RUST.time_literal(1.5, TimeUnit.SEC)
    with pytest.raises(TypeError):
        RUST.time_literal(True, TimeUnit.SEC)
    with pytest.raises(ValueError):
        TimeValue(-3, TimeUnit.MSEC)
    with pytest.raises(TypeError):
        TimeValue(2.0, TimeUnit.MSEC)


def test_cpp_time_literal():
    assert CPP.time_literal(5, TimeUnit.MSEC) == "5ms"
    assert CPP.time_literal(2, TimeUnit.MINUTES) == "2min"
    assert CPP.time_literal(3, TimeUnit.HOUR) == "3h"
    assert CPP.time_literal(2, TimeUnit.DAYS) == "48h"
    assert CPP.time_literal(1, TimeUnit.WEEK) == "168h"
    assert CPP.time_literal(9, TimeUnit.USECS) == "9us"


def test_time_value_literal_and_str():
    value = TimeValue(10, 'msec')
    assert value.unit is TimeUnit.MSEC
    assert RUST.time_value_literal(value) == "Duration::from_millis(10)"
    assert str(value) == "10 msec"
    assert str(TimeValue.zero()) == "0"
