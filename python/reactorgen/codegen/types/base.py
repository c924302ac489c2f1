"""The capability interface every target implements to render types and literals."""

from __future__ import annotations

import abc
import typing

from ...ir.dtype import (
    DType, Scalar, TimeType, FixedSizeList, VariableSizeList, Undefined, Missing,
)
from ...ir.time import TimeUnit, TimeValue
from ...ir.value import Literal, ListLiteral, ParamRef
from ...utils import namify


class UnsupportedTargetOperation(NotImplementedError):
    """A target does not (yet) implement the requested operation.

    Distinct from every other failure so that callers can tell "not supported
    for this target" apart from a broken program or a broken toolchain.
    """

    def __init__(self, operation: str, target: str):
        super().__init__(f"'{operation}' is not supported for the {target} target")
        self.operation = operation
        self.target = target


class TargetTypes(abc.ABC):
    """Pure mapping from abstract descriptors to target syntax.

    Subclasses implement the primitive operations; `render_type` and
    `render_value` compose them and are shared by every target. No method
    may perform I/O or keep state between calls.
    """

    #: The name the target is selected by in the configuration.
    name: str = ''

    def unsupported(self, operation: str) -> UnsupportedTargetOperation:
        """Build the error a target raises for an operation it lacks."""
        return UnsupportedTargetOperation(operation, self.name)

    @abc.abstractmethod
    def supports_generics(self) -> bool:
        """Whether the target language has parameterized types."""

    def identifier(self, name: str) -> str:
        """A program name as a target identifier."""
        return namify(name)

    @abc.abstractmethod
    def time_type_name(self) -> str:
        """The type of a duration."""

    @abc.abstractmethod
    def tag_type_name(self) -> str:
        """The type of a logical timestamp."""

    @abc.abstractmethod
    def undefined_type_name(self) -> str:
        """The type of an absent value."""

    def tag_interval_type_name(self) -> str:
        """The type of the distance between two tags."""
        raise self.unsupported('tag_interval_type_name')

    @abc.abstractmethod
    def fixed_size_list_type(self, base: str, size: int) -> str:
        """A type of exactly `size` contiguous `base` elements."""

    @abc.abstractmethod
    def variable_size_list_type(self, base: str) -> str:
        """A type of a growable sequence of `base`."""

    @abc.abstractmethod
    def time_literal(self, magnitude: int, unit: TimeUnit) -> str:
        """An expression constructing the duration `magnitude` `unit`."""

    @abc.abstractmethod
    def fixed_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        """A fixed-size list built from already-rendered elements."""

    @abc.abstractmethod
    def variable_size_list_literal(self, elements: typing.Sequence[str]) -> str:
        """A growable list built from already-rendered elements."""

    @abc.abstractmethod
    def missing_value_expression(self) -> str:
        """The default/zero value used when the program supplied none."""

    def time_value_literal(self, value: TimeValue) -> str:
        """Render a `TimeValue`."""
        return self.time_literal(value.magnitude, value.unit)

    def render_type(self, dtype: DType) -> str:
        """Render a type descriptor."""
        if isinstance(dtype, Scalar):
            return dtype.name
        if isinstance(dtype, TimeType):
            return self.time_type_name()
        if isinstance(dtype, FixedSizeList):
            return self.fixed_size_list_type(self.render_type(dtype.base), dtype.size)
        if isinstance(dtype, VariableSizeList):
            return self.variable_size_list_type(self.render_type(dtype.base))
        if isinstance(dtype, (Undefined, Missing)):
            return self.undefined_type_name()
        raise ValueError(f"Unsupported type descriptor: {dtype!r}")

    def render_value(self, value, dtype: typing.Optional[DType] = None,
                     param_prefix: str = '') -> str:
        """Render an initializer or argument.

        `dtype` decides between fixed and variable list syntax; an untyped
        list literal is rendered as a growable list. References to
        constructor parameters are prefixed with `param_prefix`.
        """
        if value is None:
            return self.missing_value_expression()
        if isinstance(value, TimeValue):
            return self.time_value_literal(value)
        if isinstance(value, Literal):
            return value.code
        if isinstance(value, ParamRef):
            return f"{param_prefix}{self.identifier(value.name)}"
        if isinstance(value, ListLiteral):
            elem_ty = dtype.base if dtype is not None and dtype.is_list() else None
            elements = [self.render_value(e, elem_ty, param_prefix) for e in value.elements]
            if isinstance(dtype, FixedSizeList):
                if len(elements) != dtype.size:
                    raise ValueError(
                        f"List literal has {len(elements)} elements, "
                        f"but its type {dtype!r} holds {dtype.size}")
                return self.fixed_size_list_literal(elements)
            return self.variable_size_list_literal(elements)
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (int, float)):
            return repr(value)
        raise ValueError(f"Unsupported value: {value!r}")

    def __repr__(self):
        return f"{self.__class__.__name__}()"
