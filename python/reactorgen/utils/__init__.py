"""Utility functions and decorators for reactorgen."""

from __future__ import annotations

import re

from .enforce_type import enforce_type, validate_arguments, check_type


def namify(name: str) -> str:
    """Convert a name to a valid identifier."""
    res = ''.join(c if c.isalnum() or c == '_' else '_' for c in name)
    if res and res[0].isdigit():
        res = '_' + res
    return res


def camelize(name: str) -> str:
    """Convert a snake_case name to CamelCase, keeping existing capitals."""
    result = ""
    capitalize = True
    for c in namify(name):
        if c == '_':
            capitalize = True
        elif capitalize:
            result += c.upper()
            capitalize = False
        else:
            result += c
    return result


def snakify(name: str) -> str:
    """Convert a CamelCase name to snake_case."""
    name = namify(name)
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    return name.lower()


__all__ = [
    'enforce_type', 'validate_arguments', 'check_type',
    'namify', 'camelize', 'snakify',
]
