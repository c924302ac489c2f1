"""Emission of a complete Cargo project for a generation model."""

from __future__ import annotations

import logging
import subprocess
import typing
from pathlib import Path

from .reactors import dump_reactors
from .utils import runtime_dependency, toml_str

if typing.TYPE_CHECKING:
    from ...ir.model import GenerationModel
    from ..types import TargetTypes

log = logging.getLogger(__name__)


def _write_manifest(src_gen_path: Path, model: GenerationModel) -> Path:
    """Write the Cargo manifest of the generated crate."""
    manifest_path = src_gen_path / "Cargo.toml"
    crate = model.crate
    with open(manifest_path, 'w', encoding="utf-8") as cargo:
        cargo.write("[package]\n")
        cargo.write(f'name = {toml_str(crate.name)}\n')
        cargo.write(f'version = {toml_str(crate.version)}\n')
        authors = ", ".join(toml_str(a) for a in crate.authors)
        cargo.write(f'authors = [{authors}]\n')
        cargo.write('edition = "2018"\n\n')
        cargo.write('[dependencies]\n')
        cargo.write(runtime_dependency(model.runtime) + "\n\n")
        cargo.write('[[bin]]\n')
        cargo.write(f'name = {toml_str(model.executable_name)}\n')
        cargo.write('path = "src/main.rs"\n')
        features = model.properties.cargo_features
        if features:
            cargo.write('\n[features]\n')
            for feature in features:
                cargo.write(f'{feature} = [{toml_str("reactor_rt/" + feature)}]\n')
    return manifest_path


def dump_main(model: GenerationModel, types: TargetTypes, fd):
    """Write `main.rs`: scheduler options and the launch of the main reactor."""
    props = model.properties
    main = model.main_reactor
    if props.timeout is not None:
        timeout = f"Some({types.time_value_literal(props.timeout)})"
    else:
        timeout = "None"

    fd.write(f"//! Generated entry point of {model.crate.name}. Do not edit.\n")
    fd.write("#![allow(unused_imports)]\n")
    fd.write("#![allow(non_snake_case)]\n\n")
    fd.write("mod reactors;\n\n")
    fd.write("use ::reactor_rt::prelude::*;\n")
    fd.write("use ::reactor_rt::{SchedulerOptions, SyncScheduler};\n")
    fd.write(f"use crate::reactors::{main.type_name}Adapter as __MainReactor;\n")
    fd.write(f"use crate::reactors::{main.type_name}Params as __MainParams;\n\n")
    fd.write("fn main() {\n")
    fd.write("    let options = SchedulerOptions {\n")
    fd.write(f"        timeout: {timeout},\n")
    fd.write(f"        keep_alive: {str(props.keepalive).lower()},\n")
    fd.write(f"        threaded: {str(props.threading).lower()},\n")
    fd.write(f"        fast: {str(props.fast).lower()},\n")
    fd.write("    };\n")
    fd.write("    SyncScheduler::run_main::<__MainReactor>(options, __MainParams::default());\n")
    fd.write("}\n")


def elaborate_impl(model: GenerationModel, types: TargetTypes, src_gen_path: Path) -> Path:
    """Write every file of the project; return the manifest path.

    Files are written in order and never rolled back: if a later file fails,
    the earlier ones stay on disk.
    """
    src_gen_path = Path(src_gen_path)
    if model.main_reactor is None:
        raise ValueError("Cannot emit a project without a main reactor")
    (src_gen_path / "src").mkdir(parents=True, exist_ok=True)

    print(f"Writing generated code to rust project: {src_gen_path}")

    manifest_path = _write_manifest(src_gen_path, model)

    with open(src_gen_path / "src" / "main.rs", 'w', encoding='utf-8') as fd:
        dump_main(model, types, fd)

    dump_reactors(model, types, src_gen_path / "src" / "reactors")

    return manifest_path


def elaborate(model: GenerationModel, types: TargetTypes, src_gen_path,
              pretty_printer=False, **_config) -> Path:
    """Generate the Cargo project for `model` under `src_gen_path`."""
    manifest_path = elaborate_impl(model, types, src_gen_path)

    if pretty_printer:
        try:
            subprocess.run(
                ["cargo", "fmt", "--manifest-path", str(manifest_path)],
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            print("[WARN] Failed to format code with cargo fmt")

    log.debug('Emitted %s', manifest_path)
    return manifest_path
