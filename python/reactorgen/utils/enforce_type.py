"""Type enforcement decorator for runtime argument validation.

`@enforce_type` validates the arguments of a call against the function's type
annotations before the call happens. The wrapper is built with the `decorator`
package so the decorated function keeps its exact signature, which matters
for the pipeline entry points that callers introspect.
"""

from __future__ import annotations

import collections.abc
import inspect
from typing import (
    Any, Callable, Dict, List, Tuple, Union,
    get_args, get_origin, get_type_hints
)

from decorator import decorator


def _type_name(expected: Any) -> str:
    origin = get_origin(expected)
    if origin is Union:
        names = [_type_name(arg) for arg in get_args(expected) if arg is not type(None)]
        return ' or '.join(names)
    if origin is not None:
        return getattr(origin, '__name__', str(origin))
    return getattr(expected, '__name__', str(expected))


def check_type(value: Any, expected_type: Any) -> bool:
    """Check if a value matches the expected type annotation.

    Generic containers are checked for their outer structure only.

    Raises:
        TypeError: If the value doesn't match the expected type
    """
    if expected_type is Any:
        return True

    if isinstance(expected_type, type):
        # Exact matching for builtins keeps bool out of int
        if expected_type in (int, str, float, bool):
            # pylint: disable=unidiomatic-typecheck
            ok = type(value) is expected_type
        else:
            ok = isinstance(value, expected_type)
        if not ok:
            raise TypeError(f"Expected {expected_type.__name__}, got {type(value).__name__}")
        return True

    origin = get_origin(expected_type)
    if origin is Union:
        for variant in get_args(expected_type):
            if variant is type(None) and value is None:
                return True
            try:
                if check_type(value, variant):
                    return True
            except TypeError:
                continue
        raise TypeError(f"Expected {_type_name(expected_type)}, got {type(value).__name__}")

    structural = {
        list: list, List: list,
        dict: dict, Dict: dict,
        tuple: tuple, Tuple: tuple,
    }
    if origin in structural and not isinstance(value, structural[origin]):
        raise TypeError(f"Expected {_type_name(expected_type)}, got {type(value).__name__}")
    if origin is collections.abc.Sequence:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise TypeError(f"Expected sequence, got {type(value).__name__}")

    return True


def validate_arguments(func: Callable[..., Any], args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Validate the arguments of a call to `func` against its annotations.

    Returns:
        The bound arguments, defaults applied

    Raises:
        TypeError: If any argument doesn't match its type annotation
    """
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()

    try:
        annotations = get_type_hints(func)
    except NameError:
        # Forward references under TYPE_CHECKING can't be resolved at runtime
        annotations = getattr(func, '__annotations__', {})

    for name, value in bound.arguments.items():
        expected = annotations.get(name)
        if expected is None or isinstance(expected, str):
            continue
        try:
            check_type(value, expected)
        except TypeError as exc:
            raise TypeError(
                f"Argument '{name}' must be of type {_type_name(expected)}, "
                f"got {type(value).__name__}"
            ) from exc

    return dict(bound.arguments)


@decorator
def enforce_type(func: Callable[..., Any], *args, **kwargs):
    """Decorator that enforces type annotations at runtime.

    Example:
        @enforce_type
        def invoke(tool: str, args: List[str], cwd: Optional[str] = None): ...
    """
    validate_arguments(func, args, kwargs)
    return func(*args, **kwargs)


__all__ = ['enforce_type', 'validate_arguments', 'check_type']
