"""Type and literal syntax of the C++ target."""

from __future__ import annotations

import typing

from ...ir.time import TimeUnit
from ...utils.enforce_type import enforce_type
from .base import TargetTypes

# std::chrono literal suffix and multiplier for each unit; days and weeks
# have no literal before C++20, so they are written in hours.
ULLONG_MAX = (1 << 64) - 1

_CHRONO_SUFFIXES = {
    'nsec': ('ns', 1),
    'usec': ('us', 1),
    'msec': ('ms', 1),
    'sec': ('s', 1),
    'min': ('min', 1),
    'hour': ('h', 1),
    'day': ('h', 24),
    'week': ('h', 168),
}


def _chrono_unit(unit: TimeUnit) -> str:
    if unit.base != 'sec' or unit.factor == 1:
        return unit.base
    return {60: 'min', 3600: 'hour', 86400: 'day', 604800: 'week'}[unit.factor]


class CppTypes(TargetTypes):
    """C++ syntax, for code running on reactor-cpp. Type system only."""

    name = 'cpp'

    def supports_generics(self) -> bool:
        return True

    def time_type_name(self) -> str:
        return "reactor::Duration"

    def tag_type_name(self) -> str:
        return "reactor::TimePoint"

    def undefined_type_name(self) -> str:
        return "void"

    def tag_interval_type_name(self) -> str:
        return "reactor::Duration"

    def fixed_size_list_type(self, base: str, size: int) -> str:
        return f"std::array<{base}, {size}>"

    def variable_size_list_type(self, base: str) -> str:
        return f"std::vector<{base}>"

    @enforce_type
    def time_literal(self, magnitude: int, unit: typing.Union[TimeUnit, str, None]) -> str:
        if magnitude < 0:
            raise ValueError(f"Time magnitude must be non-negative, got {magnitude}")
        unit = TimeUnit.parse(unit)
        suffix, factor = _CHRONO_SUFFIXES[_chrono_unit(unit)]
        amount = magnitude * factor
        if amount > ULLONG_MAX:
            raise ValueError(
                f"{magnitude} {unit.value or 'sec'} does not fit in a chrono literal")
        return f"{amount}{suffix}"

    def fixed_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        return "{" + ", ".join(elements) + "}"

    def variable_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        return "{" + ", ".join(elements) + "}"

    def missing_value_expression(self) -> str:
        return "{}"
