"""The generation driver: abort rules, skip rules and build reporting."""

import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from reactorgen.backend import GenerationStatus, generate, run_pipeline, config  # noqa: E402
from reactorgen.builder import make_generation_model  # noqa: E402
from reactorgen.codegen.types import CppTypes, RustTypes  # noqa: E402
from reactorgen.reporter import ErrorReporter  # noqa: E402
from reactorgen.toolchain import BuildOutcome, OutcomeKind  # noqa: E402
from reactorgen.ir.program import ConnectionDecl  # noqa: E402
from reactorgen.ir.time import TimeValue  # noqa: E402

from sample_programs import hello_program, library_program  # noqa: E402


class RecordingInvoker:
    """Stands in for the toolchain and exits with a fixed code."""

    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, toolchain, args, cwd=None):
        self.calls.append((toolchain, list(args), cwd))
        return BuildOutcome.from_returncode(self.returncode, [toolchain] + list(args))


def _files(path):
    return [p for p in path.rglob('*') if p.is_file()]


def test_validation_errors_stop_everything(tmp_path):
    reporter = ErrorReporter(echo=False)
    reporter.error("undefined reference to x")
    invoker = RecordingInvoker()
    result = generate(hello_program(), reporter, invoker=invoker, path=str(tmp_path))
    assert result.status is GenerationStatus.VALIDATION_FAILED
    assert not result.ok
    assert not any(tmp_path.iterdir())
    assert not invoker.calls


def test_program_flagged_by_front_end_is_not_generated(tmp_path):
    invoker = RecordingInvoker()
    result = generate(hello_program(has_errors=True), ErrorReporter(echo=False),
                      invoker=invoker, path=str(tmp_path))
    assert result.status is GenerationStatus.VALIDATION_FAILED
    assert not any(tmp_path.iterdir())
    assert not invoker.calls


def test_missing_main_reactor_is_a_warning(tmp_path, capsys):
    reporter = ErrorReporter()
    invoker = RecordingInvoker()
    result = generate(library_program(), reporter, invoker=invoker, path=str(tmp_path))
    assert result.status is GenerationStatus.NO_MAIN_REACTOR
    assert result.ok
    assert not reporter.errors_occurred
    assert len(reporter.warnings) == 1
    assert "does not define a main reactor" in reporter.warnings[0].message
    assert "[WARN]" in capsys.readouterr().out
    assert not _files(tmp_path)
    assert not invoker.calls


def test_no_compile_emits_but_does_not_build(tmp_path, capsys):
    invoker = RecordingInvoker()
    result = generate(hello_program(), ErrorReporter(), invoker=invoker,
                      path=str(tmp_path), no_compile=True)
    assert result.status is GenerationStatus.COMPILE_SKIPPED
    assert result.ok
    assert (result.src_gen_path / "Cargo.toml").is_file()
    assert result.src_gen_path == tmp_path / "src-gen" / "hello_world"
    assert not invoker.calls
    assert "Exiting before invoking target compiler." in capsys.readouterr().out


def test_successful_build(tmp_path):
    reporter = ErrorReporter(echo=False)
    invoker = RecordingInvoker(0)
    result = generate(hello_program(), reporter, invoker=invoker, path=str(tmp_path),
                      compiler_flags=['--offline'])
    assert result.status is GenerationStatus.BUILD_SUCCEEDED
    assert result.ok
    assert result.outcome.kind is OutcomeKind.SUCCESS

    (toolchain, args, cwd), = invoker.calls
    assert toolchain == 'cargo'
    assert args[:3] == ['+nightly', 'build', '--release']
    assert args[-1] == '--offline'
    assert cwd == str(result.src_gen_path.absolute())

    messages = [d.message for d in reporter.diagnostics]
    assert any(str(result.src_gen_path) in m for m in messages)
    assert any(str(result.bin_path) in m for m in messages)
    assert not reporter.errors_occurred


def test_failed_build_reports_exit_code(tmp_path):
    reporter = ErrorReporter(echo=False)
    result = generate(hello_program(), reporter, invoker=RecordingInvoker(101),
                      path=str(tmp_path))
    assert result.status is GenerationStatus.BUILD_FAILED
    assert not result.ok
    assert result.outcome.returncode == 101
    error, = reporter.errors
    assert error.message == "cargo failed with error code 101"


def test_unavailable_toolchain_is_its_own_error(tmp_path):
    reporter = ErrorReporter(echo=False)
    result = generate(hello_program(), reporter, path=str(tmp_path),
                      toolchain='reactorgen-no-such-toolchain')
    assert result.status is GenerationStatus.TOOLCHAIN_UNAVAILABLE
    assert result.outcome.kind is OutcomeKind.TOOL_UNAVAILABLE
    assert result.outcome.returncode is None
    assert 'reactorgen-no-such-toolchain' in reporter.errors[0].message


def test_emission_failure_skips_compilation(tmp_path):
    program = hello_program()
    program.main_reactor.connections = [
        ConnectionDecl('src.out', 'sink.inp', delay=TimeValue(1))]
    reporter = ErrorReporter(echo=False)
    invoker = RecordingInvoker()
    result = generate(program, reporter, invoker=invoker, path=str(tmp_path))
    assert result.status is GenerationStatus.EMISSION_FAILED
    assert not result.ok
    assert "delay_body" in reporter.errors[0].message
    assert not invoker.calls
    # partial output is left in place
    assert (result.src_gen_path / "Cargo.toml").is_file()


def test_target_without_emitter_is_reported(tmp_path):
    reporter = ErrorReporter(echo=False)
    invoker = RecordingInvoker()
    result = generate(hello_program(), reporter, invoker=invoker,
                      path=str(tmp_path), target='cpp')
    assert result.status is GenerationStatus.EMISSION_FAILED
    assert "'emit' is not supported for the cpp target" in reporter.errors[0].message
    assert not invoker.calls


def test_explicit_paths(tmp_path):
    src, out = tmp_path / "deep" / "nested" / "src", tmp_path / "out"
    result = generate(hello_program(), ErrorReporter(echo=False), invoker=RecordingInvoker(),
                      src_gen_path=src, bin_path=out)
    assert result.src_gen_path == src
    assert (src / "src" / "main.rs").is_file()
    assert result.outcome.command[result.outcome.command.index('--out-dir') + 1] == \
        str(out.absolute())


def test_unknown_option_is_rejected():
    with pytest.raises(ValueError, match='Invalid config key: nocompile'):
        generate(hello_program(), ErrorReporter(echo=False), nocompile=True)


def test_run_pipeline_takes_the_type_system(tmp_path):
    cfg = config(path=str(tmp_path))
    model = make_generation_model(hello_program(), cfg)
    reporter = ErrorReporter(echo=False)
    invoker = RecordingInvoker()
    result = run_pipeline(model, RustTypes(), cfg, reporter, invoker)
    assert result.status is GenerationStatus.BUILD_SUCCEEDED
    assert (tmp_path / "src-gen" / "hello_world" / "Cargo.toml").is_file()

    cfg = config(path=str(tmp_path / "cpp"), target='cpp')
    result = run_pipeline(model, CppTypes(), cfg, ErrorReporter(echo=False), invoker)
    assert result.status is GenerationStatus.EMISSION_FAILED
    assert len(invoker.calls) == 1
