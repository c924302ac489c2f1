"""Unit tests for the @enforce_type decorator."""

import inspect
import os
import sys
from typing import Any, Dict, List, Optional, Sequence, Union

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from reactorgen.utils.enforce_type import (  # noqa: E402
    check_type, enforce_type, validate_arguments,
)
from reactorgen.ir.time import TimeUnit, TimeValue  # noqa: E402


@enforce_type
def render(magnitude: int, unit: Union[TimeUnit, str, None] = None, *,
           flags: Optional[List[str]] = None) -> str:
    """Stand-in for a literal renderer."""
    return f"{magnitude}{unit or ''}{''.join(flags or [])}"


class TestEnforceTypeDecorator:
    """Calls through a decorated function."""

    def test_valid_calls_pass_through(self):
        assert render(5) == "5"
        assert render(5, "ms") == "5ms"
        assert render(5, None, flags=["!"]) == "5!"

    def test_bool_is_not_an_int(self):
        with pytest.raises(TypeError, match="magnitude"):
            render(True)

    def test_wrong_union_member(self):
        with pytest.raises(TypeError, match="unit"):
            render(5, 3.0)

    def test_structural_list_check(self):
        with pytest.raises(TypeError, match="flags"):
            render(5, flags="!")

    def test_signature_is_preserved(self):
        params = list(inspect.signature(render).parameters)
        assert params == ['magnitude', 'unit', 'flags']
        assert render.__name__ == 'render'
        assert render.__doc__ == "Stand-in for a literal renderer."

    def test_method_with_self(self):
        class Renderer:
            @enforce_type
            def literal(self, value: TimeValue) -> str:
                return str(value)

        assert Renderer().literal(TimeValue(2, TimeUnit.SEC)) == "2 sec"
        with pytest.raises(TypeError):
            Renderer().literal(2)


class TestCheckType:
    """The underlying per-value check."""

    def test_any_accepts_everything(self):
        assert check_type(object(), Any)

    def test_optional(self):
        assert check_type(None, Optional[int])
        assert check_type(3, Optional[int])
        with pytest.raises(TypeError):
            check_type("3", Optional[int])

    def test_containers(self):
        assert check_type({'a': 1}, Dict[str, int])
        assert check_type(['x'], Sequence[str])
        assert check_type(('x',), Sequence[str])
        with pytest.raises(TypeError):
            check_type("x", Sequence[str])
        with pytest.raises(TypeError):
            check_type(('x',), List[str])


def test_validate_arguments_applies_defaults():
    def func(a: int, b: str = "b"):
        return a, b

    assert validate_arguments(func, (1,), {}) == {'a': 1, 'b': 'b'}
    with pytest.raises(TypeError, match="Argument 'b'"):
        validate_arguments(func, (1, 2), {})
