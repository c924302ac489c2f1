"""Per-target type systems, selected by name."""

from .base import TargetTypes, UnsupportedTargetOperation
from .rust import RustTypes
from .cpp import CppTypes

_TARGET_TYPES = {
    'rust': RustTypes(),
    'cpp': CppTypes(),
}


def get_target_types(target: str) -> TargetTypes:
    """The type system of the named target."""
    try:
        return _TARGET_TYPES[target.lower()]
    except KeyError as e:
        known = ', '.join(sorted(_TARGET_TYPES))
        raise ValueError(f'Unknown target: {target} (expected one of {known})') from e


__all__ = [
    'TargetTypes', 'UnsupportedTargetOperation', 'RustTypes', 'CppTypes',
    'get_target_types',
]
