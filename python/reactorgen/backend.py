"""The programming interfaces driving a generation run end to end."""

from __future__ import annotations

import enum
import logging
import os
import typing
from dataclasses import dataclass
from pathlib import Path

from . import codegen
from .builder import make_generation_model
from .codegen.types import TargetTypes, UnsupportedTargetOperation, get_target_types
from .ir.program import Program
from .reporter import ErrorReporter
from .toolchain import BuildOutcome, OutcomeKind, cargo_build_args, invoke_toolchain
from .utils import namify, snakify

log = logging.getLogger(__name__)


def config( # pylint: disable=too-many-arguments,too-many-locals
        path='./workspace',
        src_gen_path=None,
        bin_path=None,
        target='rust',
        no_compile=False,
        compiler_flags=(),
        cargo_features=(),
        build_type='release',
        channel='nightly',
        toolchain='cargo',
        threading=True,
        keepalive=False,
        timeout=None,
        fast=False,
        crate_version='1.0.0',
        authors=(),
        runtime_version=None,
        runtime_path=None,
        runtime_git='https://github.com/lf-lang/reactor-rust.git',
        runtime_rev=None,
        pretty_printer=False,
        verbose=False):
    '''The helper function to dump the default configuration of generation.'''
    res = {
        'path': path,
        'src_gen_path': src_gen_path,
        'bin_path': bin_path,
        'target': target,
        'no_compile': no_compile,
        'compiler_flags': compiler_flags,
        'cargo_features': cargo_features,
        'build_type': build_type,
        'channel': channel,
        'toolchain': toolchain,
        'threading': threading,
        'keepalive': keepalive,
        'timeout': timeout,
        'fast': fast,
        'crate_version': crate_version,
        'authors': authors,
        'runtime_version': runtime_version,
        'runtime_path': runtime_path,
        'runtime_git': runtime_git,
        'runtime_rev': runtime_rev,
        'pretty_printer': pretty_printer,
        'verbose': verbose,
    }
    return res.copy()


class GenerationStatus(enum.Enum):
    '''Where a generation run stopped.'''
    VALIDATION_FAILED = 'validation-failed'
    NO_MAIN_REACTOR = 'no-main-reactor'
    EMISSION_FAILED = 'emission-failed'
    COMPILE_SKIPPED = 'compile-skipped'
    BUILD_SUCCEEDED = 'build-succeeded'
    BUILD_FAILED = 'build-failed'
    TOOLCHAIN_UNAVAILABLE = 'toolchain-unavailable'


_OK_STATUSES = (
    GenerationStatus.NO_MAIN_REACTOR,
    GenerationStatus.COMPILE_SKIPPED,
    GenerationStatus.BUILD_SUCCEEDED,
)


@dataclass(frozen=True)
class GenerationResult:
    '''What a generation run did, for the caller to turn into an exit status.

    A missing main reactor is a clean exit; every other early stop is not.
    '''
    status: GenerationStatus
    src_gen_path: typing.Optional[Path] = None
    bin_path: typing.Optional[Path] = None
    outcome: typing.Optional[BuildOutcome] = None

    @property
    def ok(self) -> bool:
        '''Whether the run ended without an error.'''
        return self.status in _OK_STATUSES


def resolve_paths(program_name: str, cfg: dict):
    '''The source root and binary directory of a run.'''
    root = Path(cfg['path'])
    src_gen = cfg.get('src_gen_path') or root / 'src-gen' / (snakify(program_name) or 'generated')
    bin_dir = cfg.get('bin_path') or root / 'bin'
    return Path(src_gen), Path(bin_dir)


def run_pipeline( # pylint: disable=too-many-arguments
        model, target_types: TargetTypes, cfg: dict, reporter: ErrorReporter,
        invoker=invoke_toolchain, src_gen_path=None, bin_path=None) -> GenerationResult:
    '''Emit `model` and build it.

    The type system is passed in, not looked up, so any target can be driven
    by the same sequence. Files written before a failure are left on disk.
    '''
    if src_gen_path is None or bin_path is None:
        src_gen_path, bin_path = resolve_paths(model.crate.name, cfg)

    log.debug('Emitting %s for target %s', model.crate.name, target_types.name)
    try:
        codegen.codegen(model, target_types, src_gen_path,
                        target=cfg.get('target', target_types.name),
                        pretty_printer=cfg.get('pretty_printer', False))
    except (UnsupportedTargetOperation, OSError, ValueError) as e:
        reporter.error(f'Code generation failed: {e}')

    if model.properties.no_compile or reporter.errors_occurred:
        print("Exiting before invoking target compiler.")
        status = GenerationStatus.EMISSION_FAILED if reporter.errors_occurred \
            else GenerationStatus.COMPILE_SKIPPED
        return GenerationResult(status, src_gen_path, bin_path)

    outcome = invoker(model.properties.toolchain,
                      cargo_build_args(model.properties, bin_path),
                      cwd=str(Path(src_gen_path).absolute()))
    return _report_outcome(outcome, reporter, src_gen_path, bin_path)


def _report_outcome(outcome: BuildOutcome, reporter, src_gen_path, bin_path):
    tool = os.path.basename(outcome.command[0]) if outcome.command else "toolchain"
    if outcome.kind is OutcomeKind.SUCCESS:
        reporter.info("SUCCESS (compiling generated code)")
        reporter.info(f"Generated source code is in {src_gen_path}")
        reporter.info(f"Compiled binary is in {bin_path}")
        status = GenerationStatus.BUILD_SUCCEEDED
    elif outcome.kind is OutcomeKind.TOOL_FAILURE:
        reporter.error(f"{tool} failed with error code {outcome.returncode}")
        status = GenerationStatus.BUILD_FAILED
    else:
        reporter.error(outcome.message or f"{tool} could not be started")
        status = GenerationStatus.TOOLCHAIN_UNAVAILABLE
    return GenerationResult(status, src_gen_path, bin_path, outcome)


def generate(program: Program, reporter: typing.Optional[ErrorReporter] = None,
             target_types: typing.Optional[TargetTypes] = None,
             invoker=invoke_toolchain, **kwargs) -> GenerationResult:
    '''
    Generate, and unless told otherwise compile, the code of `program`.

    Args:
        program (Program): The validated program.
        reporter (ErrorReporter): Where diagnostics go. Errors the front-end
            already reported here abort the run before anything is written.
        target_types (TargetTypes): The type system to render with; looked up
            from the `target` option when omitted.
        invoker: The callable running the toolchain, `invoke_toolchain` by default.
        **kwargs: Options of `config()`; unknown keys are rejected.
    '''
    real_config = config()

    for k, v in kwargs.items():
        if k not in real_config:
            raise ValueError(f'Invalid config key: {k}')
        real_config[k] = v

    if reporter is None:
        reporter = ErrorReporter()
    if target_types is None:
        target_types = get_target_types(real_config['target'])

    # stop if the front-end found errors in the program
    if program.has_errors or reporter.errors_occurred:
        log.debug('Validation errors reported, nothing generated')
        return GenerationResult(GenerationStatus.VALIDATION_FAILED)

    # abort if there is no main reactor
    if program.main_reactor is None:
        reporter.warning("The given program does not define a main reactor. "
                         "Therefore, no code was generated.")
        return GenerationResult(GenerationStatus.NO_MAIN_REACTOR)

    src_gen_path, bin_path = resolve_paths(program.name, real_config)
    src_gen_path.mkdir(parents=True, exist_ok=True)

    model = make_generation_model(program, real_config)
    if real_config['verbose']:
        print(f'Generating {namify(model.crate.name)}: '
              f'{len(model.reactors)} reactors, main reactor {model.main_reactor.name}')

    return run_pipeline(model, target_types, real_config, reporter, invoker,
                        src_gen_path, bin_path)
