"""Naming helpers shared by the Rust emitter."""

from ...ir.model import TriggerKind, TriggerRef, RuntimeInfo
from ...utils import namify
from ..types.rust import RustTypes

_RUST = RustTypes()


def rust_ident(name: str) -> str:
    """Escape a name that collides with a Rust keyword."""
    return _RUST.identifier(name)


def field_name(ref: TriggerRef) -> str:
    """The adapter field holding a component, e.g. `__out` or `__child.__in`."""
    if ref.kind == TriggerKind.CHILD_PORT:
        return f"__{namify(ref.container)}.__{namify(ref.name)}"
    return f"__{namify(ref.name)}"


def param_name(ref: TriggerRef) -> str:
    """The reaction argument naming a component, e.g. `out` or `child__in`."""
    if ref.kind == TriggerKind.CHILD_PORT:
        return f"{namify(ref.container)}__{namify(ref.name)}"
    return rust_ident(ref.name)


def toml_str(value: str) -> str:
    """Quote a TOML basic string."""
    escaped = str(value).replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def runtime_dependency(runtime: RuntimeInfo) -> str:
    """The `reactor_rt = ...` line of the manifest.

    A local path wins over a registry version, which wins over git.
    """
    if runtime.local_path:
        return f"reactor_rt = {{ path = {toml_str(runtime.local_path)} }}"
    if runtime.version:
        return f"reactor_rt = {toml_str(runtime.version)}"
    if runtime.git_repository:
        parts = [f"git = {toml_str(runtime.git_repository)}"]
        if runtime.git_rev:
            parts.append(f"rev = {toml_str(runtime.git_rev)}")
        return "reactor_rt = { " + ", ".join(parts) + " }"
    return 'reactor_rt = "*"'
