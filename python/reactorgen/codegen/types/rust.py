"""Type and literal syntax of the Rust target."""

from __future__ import annotations

import typing

from ...ir.time import TimeUnit
from ...utils import namify
from ...utils.enforce_type import enforce_type
from .base import TargetTypes

U64_MAX = (1 << 64) - 1

RESERVED = frozenset("""
    as break const continue crate else enum extern false fn for if impl in let loop match
    mod move mut pub ref return self Self static struct super trait true type unsafe use
    where while async await dyn abstract become box do final macro override priv typeof
    unsized virtual yield try
""".split())

# `std::time::Duration` constructor for each base unit
_DURATION_CTORS = {
    'nsec': 'from_nanos',
    'usec': 'from_micros',
    'msec': 'from_millis',
    'sec': 'from_secs',
}


class RustTypes(TargetTypes):
    """Rust syntax, for code running on the reactor-rt runtime."""

    name = 'rust'

    def supports_generics(self) -> bool:
        return True

    def identifier(self, name: str) -> str:
        """Escape a name that collides with a Rust keyword as a raw identifier."""
        name = namify(name)
        if name in RESERVED:
            return f"r#{name}"
        return name

    def time_type_name(self) -> str:
        return "Duration"

    def tag_type_name(self) -> str:
        return "LogicalInstant"

    def undefined_type_name(self) -> str:
        return "()"

    def fixed_size_list_type(self, base: str, size: int) -> str:
        return f"[ {base} ; {size} ]"

    def variable_size_list_type(self, base: str) -> str:
        return f"Vec<{base}>"

    @enforce_type
    def time_literal(self, magnitude: int, unit: typing.Union[TimeUnit, str, None]) -> str:
        """Render a `Duration` constructor call.

        Sub-second units use their own constructor; minutes and longer are
        multiplied out into seconds. Python integers do not overflow, so the
        only failure is a result that does not fit the `u64` argument.
        """
        if magnitude < 0:
            raise ValueError(f"Time magnitude must be non-negative, got {magnitude}")
        unit = TimeUnit.parse(unit)
        amount = magnitude * unit.factor
        if amount > U64_MAX:
            raise ValueError(f"{magnitude} {unit.value or 'sec'} does not fit in a Duration")
        return f"Duration::{_DURATION_CTORS[unit.base]}({amount})"

    def fixed_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        return "[" + ", ".join(elements) + "]"

    def variable_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        return "vec![" + ", ".join(elements) + "]"

    def missing_value_expression(self) -> str:
        return "Default::default()"
