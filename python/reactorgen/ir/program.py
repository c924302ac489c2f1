'''The validated program handed over by the front-end.

These classes only carry what the parser and validator produced. Nothing here
checks the program again; references are plain strings resolved later by the
model builder.
'''

from __future__ import annotations

import typing
from dataclasses import dataclass, field

from .dtype import DType, missing, undefined
from .time import TimeValue

# pylint: disable=too-many-instance-attributes

@dataclass
class ParamDecl:
    '''A constructor parameter: `name: dtype = default`.'''
    name: str
    dtype: DType = field(default_factory=missing)
    default: typing.Any = None


@dataclass
class StateDecl:
    '''A state variable: `state name: dtype = init`.'''
    name: str
    dtype: DType = field(default_factory=missing)
    init: typing.Any = None


@dataclass
class PortDecl:
    '''An input or an output port.'''
    name: str
    dtype: DType = field(default_factory=undefined)


@dataclass
class TimerDecl:
    '''`timer name(offset, period)`; a zero period fires once.'''
    name: str
    offset: TimeValue = field(default_factory=TimeValue.zero)
    period: TimeValue = field(default_factory=TimeValue.zero)


@dataclass
class ActionDecl:
    '''A logical or physical action.'''
    name: str
    dtype: DType = field(default_factory=undefined)
    physical: bool = False
    min_delay: typing.Optional[TimeValue] = None


@dataclass
class DeadlineDecl:
    '''`deadline(delay) {= handler =}` attached to a reaction.'''
    delay: TimeValue
    handler: str = ''


@dataclass
class ReactionDecl:
    '''`reaction(triggers) uses -> effects {= body =}`.'''
    triggers: typing.List[str] = field(default_factory=list)
    uses: typing.List[str] = field(default_factory=list)
    effects: typing.List[str] = field(default_factory=list)
    body: str = ''
    deadline: typing.Optional[DeadlineDecl] = None


@dataclass
class InstanceDecl:
    '''`name = new Reactor(arg = value, ...)`.'''
    name: str
    reactor: str
    args: typing.Dict[str, typing.Any] = field(default_factory=dict)


@dataclass
class ConnectionDecl:
    '''`source -> target after delay`, or `~>` when physical.'''
    source: str
    target: str
    delay: typing.Optional[TimeValue] = None
    physical: bool = False


@dataclass
class ReactorDecl:
    '''A reactor class of the program.'''
    name: str
    is_main: bool = False
    params: typing.List[ParamDecl] = field(default_factory=list)
    state_vars: typing.List[StateDecl] = field(default_factory=list)
    inputs: typing.List[PortDecl] = field(default_factory=list)
    outputs: typing.List[PortDecl] = field(default_factory=list)
    timers: typing.List[TimerDecl] = field(default_factory=list)
    actions: typing.List[ActionDecl] = field(default_factory=list)
    reactions: typing.List[ReactionDecl] = field(default_factory=list)
    instances: typing.List[InstanceDecl] = field(default_factory=list)
    connections: typing.List[ConnectionDecl] = field(default_factory=list)
    preamble: str = ''


@dataclass
class Program:
    '''A whole program: its reactors and the front-end's verdict on it.'''
    name: str
    reactors: typing.List[ReactorDecl] = field(default_factory=list)
    has_errors: bool = False

    @property
    def main_reactor(self) -> typing.Optional[ReactorDecl]:
        '''The reactor declared `main`, if any.'''
        for reactor in self.reactors:
            if reactor.is_main:
                return reactor
        return None

    def find_reactor(self, name: str) -> typing.Optional[ReactorDecl]:
        '''Look up a reactor class by name.'''
        for reactor in self.reactors:
            if reactor.name == name:
                return reactor
        return None
