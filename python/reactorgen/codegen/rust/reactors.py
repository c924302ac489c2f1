"""Rendering of one Rust module per reactor class."""

from __future__ import annotations

import typing

from ...ir.model import (
    ActionInfo, ChildInfo, ConnectionInfo, GenerationModel, ParamInfo, PortInfo,
    ReactionInfo, ReactorInfo, StateVarInfo, TimerInfo, TriggerKind,
)
from ...ir.visitor import Visitor
from ...utils import namify
from ..types import TargetTypes
from .utils import field_name, param_name, rust_ident

if typing.TYPE_CHECKING:
    from pathlib import Path

HEADER = """//! Generated from reactor {name}. Do not edit.
#![allow(unused)]

use ::reactor_rt::prelude::*;
use super::*;
"""


def _indent(text: str, amount: int) -> str:
    pad = " " * amount
    return "\n".join(pad + line if line.strip() else "" for line in text.splitlines())


class ElaborateReactor(Visitor):  # pylint: disable=too-many-instance-attributes
    """Visitor rendering a reactor class to the source of its Rust module."""

    def __init__(self, model: GenerationModel, types: TargetTypes):
        super().__init__()
        self.model = model
        self.types = types
        self._reset()

    def _reset(self):
        self.user_fields = []
        self.user_inits = []
        self.param_fields = []
        self.param_defaults = []
        self.adapter_fields = []
        self.adapter_inits = []
        self.child_assembles = []
        self.wiring = []
        self.methods = []
        self.match_arms = []
        self.cleanups = []

    def ty(self, dtype) -> str:
        """Render a type through the target's type system."""
        return self.types.render_type(dtype)

    def visit_reactor(self, node: ReactorInfo):
        """Render the whole module of `node`."""
        self._reset()
        self.current_reactor = node
        super().visit_reactor(node)

        t = node.type_name
        result = [HEADER.format(name=node.name)]
        if node.preamble:
            result.append(node.preamble.strip() + "\n")

        result.append(f"/// State of reactor {node.name}, accessible as `self` in reactions.")
        result.append(f"pub struct {t} {{")
        result.extend(f"    {f}," for f in self.user_fields)
        result.append("}\n")

        result.append(f"/// Constructor parameters of reactor {node.name}.")
        result.append("#[derive(Clone)]")
        result.append(f"pub struct {t}Params {{")
        result.extend(f"    pub {f}," for f in self.param_fields)
        result.append("}\n")
        result.append(f"impl Default for {t}Params {{")
        result.append("    fn default() -> Self {")
        result.append("        Self {")
        result.extend(f"            {f}," for f in self.param_defaults)
        result.append("        }")
        result.append("    }")
        result.append("}\n")

        result.append(f"impl {t} {{")
        result.append("\n\n".join(_indent(m, 4) for m in self.methods))
        result.append("}\n")

        result.append(f"/// Runtime wiring of reactor {node.name}.")
        result.append(f"pub struct {t}Adapter {{")
        result.append("    __id: ReactorId,")
        result.append(f"    __impl: {t},")
        result.extend(f"    {f}," for f in self.adapter_fields)
        result.append("}\n")

        result.append(self._render_assemble(node))
        result.append(self._render_behavior(node))
        return "\n".join(result)

    def _render_assemble(self, node: ReactorInfo) -> str:
        t = node.type_name
        names = [rust_ident(p.name) for p in node.params]
        lines = [f"impl {t}Adapter {{"]
        lines.append(
            f"    pub fn assemble(__params: {t}Params, __assembler: &mut AssemblyCtx) -> Self {{")
        if names:
            lines.append(f"        let {t}Params {{ {', '.join(names)} }} = __params.clone();")
        else:
            lines.append("        let _ = __params;")
        lines.append(f"        let __impl = {t} {{")
        lines.extend(f"            {init}," for init in self.user_inits)
        lines.append("        };")
        lines.extend(f"        {a}" for a in self.child_assembles)
        lines.append("        let mut this = Self {")
        lines.append("            __id: __assembler.fix_cur_id(),")
        lines.append("            __impl,")
        lines.extend(f"            {init}," for init in self.adapter_inits)
        lines.append("        };")
        lines.extend(f"        {w}" for w in self.wiring)
        lines.append("        this")
        lines.append("    }")
        lines.append("}\n")
        return "\n".join(lines)

    def _render_behavior(self, node: ReactorInfo) -> str:
        count = len(node.reactions)
        lines = [f"impl ReactorBehavior for {node.type_name}Adapter {{"]
        lines.append("    fn id(&self) -> ReactorId {")
        lines.append("        self.__id")
        lines.append("    }\n")
        lines.append("    fn react(&mut self, ctx: &mut ReactionCtx, rid: LocalReactionId) {")
        lines.append("        match rid.raw() {")
        lines.extend(f"            {arm}" for arm in self.match_arms)
        lines.append(
            f'            _ => panic!("Invalid reaction ID: {{}} should be < {count}", rid),')
        lines.append("        }")
        lines.append("    }\n")
        lines.append("    fn cleanup_tag(&mut self, ctx: &CleanupCtx) {")
        lines.extend(f"        {c}" for c in self.cleanups)
        lines.append("    }")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def visit_param(self, node: ParamInfo):
        name = rust_ident(node.name)
        ty = self.ty(node.dtype)
        self.param_fields.append(f"{name}: {ty}")
        self.param_defaults.append(f"{name}: {self.types.render_value(node.default, node.dtype)}")
        self.user_fields.append(f"{name}: {ty}")
        self.user_inits.append(f"{name}: {name}.clone()")

    def visit_state_var(self, node: StateVarInfo):
        name = rust_ident(node.name)
        self.user_fields.append(f"{name}: {self.ty(node.dtype)}")
        self.user_inits.append(f"{name}: {self.types.render_value(node.init, node.dtype)}")

    def visit_port(self, node: PortInfo):
        kind = "InputPort" if node.is_input else "OutputPort"
        name = namify(node.name)
        self.adapter_fields.append(f"pub __{name}: {kind}<{self.ty(node.dtype)}>")
        self.adapter_inits.append(
            f'__{name}: __assembler.new_port("{node.name}", {str(node.is_input).lower()})')

    def visit_timer(self, node: TimerInfo):
        name = namify(node.name)
        offset = self.types.time_value_literal(node.offset)
        period = self.types.time_value_literal(node.period)
        self.adapter_fields.append(f"__{name}: Timer")
        self.adapter_inits.append(
            f'__{name}: __assembler.new_timer("{node.name}", {offset}, {period})')

    def visit_action(self, node: ActionInfo):
        name = namify(node.name)
        ty = self.ty(node.dtype)
        if node.min_delay is not None:
            delay = f"Some({self.types.time_value_literal(node.min_delay)})"
        else:
            delay = "None"
        if node.is_logical:
            self.adapter_fields.append(f"__{name}: LogicalAction<{ty}>")
            self.adapter_inits.append(
                f'__{name}: __assembler.new_logical_action("{node.name}", {delay})')
            self.cleanups.append(f"ctx.cleanup_logical_action(&mut self.__{name});")
        else:
            self.adapter_fields.append(f"__{name}: PhysicalActionRef<{ty}>")
            self.adapter_inits.append(
                f'__{name}: __assembler.new_physical_action("{node.name}", {delay})')
            self.cleanups.append(f"ctx.cleanup_physical_action(&mut self.__{name});")

    def _reaction_arg(self, ref, writable: bool):
        '''The parameter declaration and the argument expression for `ref`.'''
        name = param_name(ref)
        field = field_name(ref)
        if ref.kind == TriggerKind.TIMER:
            return f"{name}: &Timer", f"&self.{field}"
        if ref.kind == TriggerKind.ACTION:
            action = next(a for a in self.current_reactor.actions if a.name == ref.name)
            kind = "LogicalAction" if action.is_logical else "PhysicalActionRef"
            ty = self.ty(action.dtype)
            if writable:
                return f"{name}: &mut {kind}<{ty}>", f"&mut self.{field}"
            return f"{name}: &{kind}<{ty}>", f"&self.{field}"
        ty = self.ty(self._port_type(ref))
        if writable:
            return f"{name}: WritablePort<{ty}>", f"WritablePort::new(&mut self.{field})"
        return f"{name}: &ReadablePort<{ty}>", f"&ReadablePort::new(&self.{field})"

    def _port_type(self, ref):
        if ref.kind == TriggerKind.CHILD_PORT:
            child = next(c for c in self.current_reactor.children if c.name == ref.container)
            reactor = self.model.reactor(child.reactor)
        else:
            reactor = self.current_reactor
        return next(p.dtype for p in reactor.ports if p.name == ref.name)

    @staticmethod
    def _trigger_id(ref) -> str:
        if ref.kind == TriggerKind.STARTUP:
            return "TriggerId::STARTUP"
        if ref.kind == TriggerKind.SHUTDOWN:
            return "TriggerId::SHUTDOWN"
        return f"this.{field_name(ref)}.get_id()"

    def visit_reaction(self, node: ReactionInfo):
        i = node.index
        params = ["&mut self", "ctx: &mut ReactionCtx"]
        args = ["ctx"]
        for ref in node.references:
            if ref.kind in (TriggerKind.STARTUP, TriggerKind.SHUTDOWN):
                continue
            decl, arg = self._reaction_arg(ref, ref in node.effects)
            params.append(decl)
            args.append(arg)

        header = ", ".join(str(r) for r in node.triggers)
        method = [f"// reaction({header})"]
        if node.effects:
            method[0] += " -> " + ", ".join(str(r) for r in node.effects)
        method.append(f"fn react_{i}({', '.join(params)}) {{")
        method.append(_indent(node.body.strip("\n"), 4) if node.body.strip() else "")
        method.append("}")
        self.methods.append("\n".join(method))
        self.match_arms.append(f"{i} => self.__impl.react_{i}({', '.join(args)}),")

        if node.triggers:
            ids = ", ".join(self._trigger_id(r) for r in node.triggers)
            self.wiring.append(f"__assembler.declare_triggers({i}, &[{ids}]);")
        if node.uses:
            ids = ", ".join(self._trigger_id(r) for r in node.uses)
            self.wiring.append(f"__assembler.declare_uses({i}, &[{ids}]);")
        if node.effects:
            ids = ", ".join(self._trigger_id(r) for r in node.effects)
            self.wiring.append(f"__assembler.declare_effects({i}, &[{ids}]);")
        if node.deadline is not None:
            delay = self.types.time_value_literal(node.deadline.delay)
            self.wiring.append(f"__assembler.declare_deadline({i}, {delay});")
            handler = [f"fn react_{i}_deadline_violated(&mut self, ctx: &mut ReactionCtx) {{"]
            if node.deadline.handler.strip():
                handler.append(_indent(node.deadline.handler.strip("\n"), 4))
            handler.append("}")
            self.methods.append("\n".join(handler))

    def visit_child(self, node: ChildInfo):
        child = self.model.reactor(node.reactor)
        name = namify(node.name)
        dtypes = {p.name: p.dtype for p in child.params}
        unknown = [arg for arg, _ in node.args if arg not in dtypes]
        if unknown:
            raise ValueError(
                f"{self.current_reactor.name}.{node.name}: "
                f"{child.name} has no parameter {', '.join(unknown)}")
        args = [
            f"{rust_ident(arg)}: {self.types.render_value(value, dtypes[arg])}"
            for arg, value in node.args
        ]
        if len(args) < len(child.params):
            args.append("..Default::default()")
        params = f"{child.type_name}Params {{ {', '.join(args)} }}" if args else \
            f"{child.type_name}Params::default()"
        self.child_assembles.append(
            f"let __{name} = {child.type_name}Adapter::assemble({params}, __assembler);")
        self.adapter_fields.append(f"__{name}: {child.type_name}Adapter")
        self.adapter_inits.append(f"__{name}")

    def visit_connection(self, node: ConnectionInfo):
        if node.delay is not None:
            raise self.types.unsupported('delay_body')
        if node.physical:
            raise self.types.unsupported('forward_body')
        self.wiring.append(
            f"__assembler.bind_ports(&mut this.{field_name(node.source)}, "
            f"&mut this.{field_name(node.target)});")


def dump_reactors(model: GenerationModel, types: TargetTypes, reactors_dir: Path):
    """Write `mod.rs` and one module per reactor class into `reactors_dir`."""
    reactors_dir.mkdir(parents=True, exist_ok=True)

    er = ElaborateReactor(model, types)

    with open(reactors_dir / "mod.rs", 'w', encoding="utf-8") as mod_fd:
        mod_fd.write("//! Generated reactor modules. Do not edit.\n\n")
        for reactor in model.reactors:
            module_name = reactor.module_name
            t = reactor.type_name
            mod_fd.write(f"pub mod {module_name};\n")
            mod_fd.write(f"pub use self::{module_name}::{{{t}, {t}Adapter, {t}Params}};\n")

            # Written one by one: a failure leaves the previous modules on disk.
            code = er.visit_reactor(reactor)
            with open(reactors_dir / f"{module_name}.rs", 'w', encoding="utf-8") as fd:
                fd.write(code)

    return [reactors_dir / f"{r.module_name}.rs" for r in model.reactors]
