'''Builds the generation model from a validated program.'''

from __future__ import annotations

import logging
import typing

from .ir.model import (
    ActionInfo, ChildInfo, ConnectionInfo, CrateInfo, DeadlineInfo, GenerationModel,
    ParamInfo, PortInfo, ReactionInfo, ReactorInfo, RuntimeInfo, StateVarInfo,
    TargetProperties, TimerInfo, TriggerKind, TriggerRef,
)
from .ir.program import Program, ReactorDecl
from .ir.time import TimeValue
from .utils import camelize, namify, snakify, enforce_type

log = logging.getLogger(__name__)

_BUILTIN_TRIGGERS = {
    'startup': TriggerKind.STARTUP,
    'shutdown': TriggerKind.SHUTDOWN,
}


class _Scope:
    '''The names a reaction or connection of one reactor can refer to.'''

    def __init__(self, program: Program, reactor: ReactorDecl):
        self.reactor = reactor
        self.locals = {}
        for port in reactor.inputs + reactor.outputs:
            self.locals[port.name] = TriggerKind.PORT
        for timer in reactor.timers:
            self.locals[timer.name] = TriggerKind.TIMER
        for action in reactor.actions:
            self.locals[action.name] = TriggerKind.ACTION
        self.children = {}
        for inst in reactor.instances:
            decl = program.find_reactor(inst.reactor)
            if decl is None:
                raise ValueError(
                    f'{reactor.name}.{inst.name} instantiates unknown reactor {inst.reactor}')
            self.children[inst.name] = {p.name for p in decl.inputs + decl.outputs}

    def resolve(self, ref: str) -> TriggerRef:
        '''Resolve `name` or `child.port` to the component it denotes.'''
        if '.' in ref:
            container, name = ref.split('.', 1)
            ports = self.children.get(container)
            if ports is None or name not in ports:
                raise ValueError(f'{self.reactor.name}: cannot resolve reference {ref}')
            return TriggerRef(TriggerKind.CHILD_PORT, name, container)
        if ref in _BUILTIN_TRIGGERS:
            return TriggerRef(_BUILTIN_TRIGGERS[ref], ref)
        kind = self.locals.get(ref)
        if kind is None:
            raise ValueError(f'{self.reactor.name}: cannot resolve reference {ref}')
        return TriggerRef(kind, ref)


def _build_reactor(program: Program, decl: ReactorDecl) -> ReactorInfo:
    scope = _Scope(program, decl)

    reactions = []
    for i, reaction in enumerate(decl.reactions):
        deadline = None
        if reaction.deadline is not None:
            deadline = DeadlineInfo(reaction.deadline.delay, reaction.deadline.handler)
        reactions.append(ReactionInfo(
            index=i,
            triggers=tuple(scope.resolve(r) for r in reaction.triggers),
            uses=tuple(scope.resolve(r) for r in reaction.uses),
            effects=tuple(scope.resolve(r) for r in reaction.effects),
            body=reaction.body,
            deadline=deadline,
        ))

    ports = [PortInfo(p.name, p.dtype, True) for p in decl.inputs]
    ports += [PortInfo(p.name, p.dtype, False) for p in decl.outputs]

    return ReactorInfo(
        name=decl.name,
        type_name=camelize(decl.name),
        module_name=snakify(decl.name),
        is_main=decl.is_main,
        params=tuple(ParamInfo(p.name, p.dtype, p.default) for p in decl.params),
        state_vars=tuple(StateVarInfo(s.name, s.dtype, s.init) for s in decl.state_vars),
        ports=tuple(ports),
        timers=tuple(TimerInfo(t.name, t.offset, t.period) for t in decl.timers),
        actions=tuple(
            ActionInfo(a.name, a.dtype, not a.physical, a.min_delay) for a in decl.actions),
        reactions=tuple(reactions),
        children=tuple(
            ChildInfo(i.name, i.reactor, tuple(i.args.items())) for i in decl.instances),
        connections=tuple(
            ConnectionInfo(scope.resolve(c.source), scope.resolve(c.target), c.delay, c.physical)
            for c in decl.connections),
        preamble=decl.preamble,
    )


def topo_order(program: Program) -> typing.List[ReactorDecl]:
    '''Order reactors so that each one comes after the reactors it instantiates.'''
    order = []
    state = {}  # name -> 'visiting' | 'done'

    def visit(decl: ReactorDecl, path):
        mark = state.get(decl.name)
        if mark == 'done':
            return
        if mark == 'visiting':
            cycle = ' -> '.join(path + [decl.name])
            raise ValueError(f'Reactor instantiation cycle: {cycle}')
        state[decl.name] = 'visiting'
        for inst in decl.instances:
            child = program.find_reactor(inst.reactor)
            if child is None:
                raise ValueError(
                    f'{decl.name}.{inst.name} instantiates unknown reactor {inst.reactor}')
            visit(child, path + [decl.name])
        state[decl.name] = 'done'
        order.append(decl)

    for decl in program.reactors:
        visit(decl, [])
    return order


def _target_properties(cfg: dict) -> TargetProperties:
    timeout = cfg.get('timeout')
    if timeout is not None and not isinstance(timeout, TimeValue):
        raise ValueError(f'timeout must be a TimeValue, got {timeout!r}')
    return TargetProperties(
        no_compile=bool(cfg.get('no_compile', False)),
        compiler_flags=tuple(cfg.get('compiler_flags', ())),
        cargo_features=tuple(cfg.get('cargo_features', ())),
        build_type=cfg.get('build_type', 'release'),
        threading=bool(cfg.get('threading', True)),
        keepalive=bool(cfg.get('keepalive', False)),
        timeout=timeout,
        fast=bool(cfg.get('fast', False)),
        toolchain=cfg.get('toolchain', 'cargo'),
        channel=cfg.get('channel', 'nightly'),
    )


@enforce_type
def make_generation_model(program: Program, cfg: dict) -> GenerationModel:
    '''Flatten `program` into a generation model under configuration `cfg`.

    Args:
        program: The validated program.
        cfg: The generator configuration (see `reactorgen.backend.config`).
    '''
    reactors = tuple(_build_reactor(program, decl) for decl in topo_order(program))
    main = next((r for r in reactors if r.is_main), None)
    log.debug('Built model of %d reactors, main reactor: %s',
              len(reactors), main.name if main else None)

    crate_name = snakify(program.name) or 'generated'
    runtime = RuntimeInfo(
        version=cfg.get('runtime_version'),
        local_path=cfg.get('runtime_path'),
        git_repository=cfg.get('runtime_git'),
        git_rev=cfg.get('runtime_rev'),
    )
    return GenerationModel(
        crate=CrateInfo(
            name=crate_name,
            version=cfg.get('crate_version', '1.0.0'),
            authors=tuple(cfg.get('authors', ())),
        ),
        runtime=runtime,
        reactors=reactors,
        main_reactor=main,
        executable_name=namify(crate_name),
        properties=_target_properties(cfg),
    )
