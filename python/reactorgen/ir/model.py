'''The generation model: a flattened, target-independent view of a program.

Every class here is immutable. One model is built per generation request and
handed to exactly one emitter.
'''

from __future__ import annotations

import typing
from dataclasses import dataclass, field

from .dtype import DType
from .time import TimeValue

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class CrateInfo:
    '''Name and metadata of the generated package.'''
    name: str
    version: str = '1.0.0'
    authors: typing.Tuple[str, ...] = ()


@dataclass(frozen=True)
class RuntimeInfo:
    '''Where the generated package takes its runtime library from.

    A local path wins over a registry version, which wins over git.
    '''
    version: typing.Optional[str] = None
    local_path: typing.Optional[str] = None
    git_repository: typing.Optional[str] = None
    git_rev: typing.Optional[str] = None


@dataclass(frozen=True)
class TargetProperties:
    '''Target configuration that survives into the generated code or build.'''
    no_compile: bool = False
    compiler_flags: typing.Tuple[str, ...] = ()
    cargo_features: typing.Tuple[str, ...] = ()
    build_type: str = 'release'
    threading: bool = True
    keepalive: bool = False
    timeout: typing.Optional[TimeValue] = None
    fast: bool = False
    toolchain: str = 'cargo'
    channel: typing.Optional[str] = 'nightly'


@dataclass(frozen=True)
class ParamInfo:
    name: str
    dtype: DType
    default: typing.Any = None


@dataclass(frozen=True)
class StateVarInfo:
    name: str
    dtype: DType
    init: typing.Any = None


@dataclass(frozen=True)
class PortInfo:
    name: str
    dtype: DType
    is_input: bool


@dataclass(frozen=True)
class TimerInfo:
    name: str
    offset: TimeValue
    period: TimeValue


@dataclass(frozen=True)
class ActionInfo:
    name: str
    dtype: DType
    is_logical: bool
    min_delay: typing.Optional[TimeValue] = None


class TriggerKind:
    '''The kinds of component a reaction can name.'''
    STARTUP = 'startup'
    SHUTDOWN = 'shutdown'
    TIMER = 'timer'
    ACTION = 'action'
    PORT = 'port'
    CHILD_PORT = 'child_port'


@dataclass(frozen=True)
class TriggerRef:
    '''A resolved reference from a reaction to a component.'''
    kind: str
    name: str
    container: typing.Optional[str] = None

    def __str__(self):
        if self.container is not None:
            return f'{self.container}.{self.name}'
        return self.name


@dataclass(frozen=True)
class DeadlineInfo:
    delay: TimeValue
    handler: str = ''


@dataclass(frozen=True)
class ReactionInfo:
    '''One reaction; `index` is its position in declaration order.'''
    index: int
    triggers: typing.Tuple[TriggerRef, ...] = ()
    uses: typing.Tuple[TriggerRef, ...] = ()
    effects: typing.Tuple[TriggerRef, ...] = ()
    body: str = ''
    deadline: typing.Optional[DeadlineInfo] = None

    @property
    def references(self):
        '''Every component named by this reaction, without repetition, in order.'''
        seen = []
        for ref in self.triggers + self.uses + self.effects:
            if ref not in seen:
                seen.append(ref)
        return tuple(seen)


@dataclass(frozen=True)
class ChildInfo:
    '''An instance of another reactor class nested in this one.'''
    name: str
    reactor: str
    args: typing.Tuple[typing.Tuple[str, typing.Any], ...] = ()


@dataclass(frozen=True)
class ConnectionInfo:
    source: TriggerRef
    target: TriggerRef
    delay: typing.Optional[TimeValue] = None
    physical: bool = False


@dataclass(frozen=True)
class ReactorInfo:
    '''One reactor class, with its components split out by kind.'''
    name: str
    type_name: str
    module_name: str
    is_main: bool = False
    params: typing.Tuple[ParamInfo, ...] = ()
    state_vars: typing.Tuple[StateVarInfo, ...] = ()
    ports: typing.Tuple[PortInfo, ...] = ()
    timers: typing.Tuple[TimerInfo, ...] = ()
    actions: typing.Tuple[ActionInfo, ...] = ()
    reactions: typing.Tuple[ReactionInfo, ...] = ()
    children: typing.Tuple[ChildInfo, ...] = ()
    connections: typing.Tuple[ConnectionInfo, ...] = ()
    preamble: str = ''

    @property
    def inputs(self):
        '''The input ports, in declaration order.'''
        return tuple(p for p in self.ports if p.is_input)

    @property
    def outputs(self):
        '''The output ports, in declaration order.'''
        return tuple(p for p in self.ports if not p.is_input)


@dataclass(frozen=True)
class GenerationModel:
    '''Everything an emitter needs. `main_reactor` may legally be absent.'''
    crate: CrateInfo
    runtime: RuntimeInfo
    reactors: typing.Tuple[ReactorInfo, ...] = ()
    main_reactor: typing.Optional[ReactorInfo] = None
    executable_name: str = ''
    properties: TargetProperties = field(default_factory=TargetProperties)

    def reactor(self, name: str) -> ReactorInfo:
        '''Look up a reactor class of the model by its source name.'''
        for info in self.reactors:
            if info.name == name:
                return info
        raise KeyError(name)
