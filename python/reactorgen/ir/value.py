'''Value descriptors: initializers and arguments written in the program.'''

from __future__ import annotations

from dataclasses import dataclass
import typing


@dataclass(frozen=True)
class Literal:
    '''A target expression the program wrote verbatim.'''
    code: str

    def __str__(self):
        return self.code


@dataclass(frozen=True)
class ListLiteral:
    '''An ordered list of element values.'''
    elements: typing.Tuple[typing.Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'elements', tuple(self.elements))


@dataclass(frozen=True)
class ParamRef:
    '''A reference to a constructor parameter of the enclosing reactor.'''
    name: str

    def __str__(self):
        return self.name
