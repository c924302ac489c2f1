"""Running the build tool and classifying how it ended."""

import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from reactorgen.ir.model import TargetProperties  # noqa: E402
from reactorgen.toolchain import (  # noqa: E402
    BuildOutcome, OutcomeKind, cargo_build_args, invoke_toolchain,
)


def test_exit_code_zero_is_success(tmp_path):
    outcome = invoke_toolchain(sys.executable, ['-c', 'import sys; sys.exit(0)'], cwd=tmp_path)
    assert outcome.kind is OutcomeKind.SUCCESS
    assert outcome.succeeded
    assert outcome.returncode == 0


def test_nonzero_exit_code_is_carried_verbatim(tmp_path):
    outcome = invoke_toolchain(sys.executable, ['-c', 'import sys; sys.exit(101)'], cwd=tmp_path)
    assert outcome.kind is OutcomeKind.TOOL_FAILURE
    assert outcome.returncode == 101
    assert not outcome.succeeded


def test_tool_runs_in_the_given_directory(tmp_path):
    script = "import os, sys; sys.exit(0 if os.path.exists('marker') else 3)"
    (tmp_path / 'marker').write_text('', encoding='utf-8')
    assert invoke_toolchain(sys.executable, ['-c', script], cwd=tmp_path).succeeded
    assert invoke_toolchain(sys.executable, ['-c', script], cwd=str(tmp_path.parent)).returncode == 3


def test_missing_tool_is_unavailable_not_failure(tmp_path):
    outcome = invoke_toolchain('reactorgen-no-such-toolchain', ['build'], cwd=tmp_path)
    assert outcome.kind is OutcomeKind.TOOL_UNAVAILABLE
    assert outcome.returncode is None
    assert 'reactorgen-no-such-toolchain' in outcome.message


def test_arguments_are_type_checked():
    with pytest.raises(TypeError):
        invoke_toolchain('cargo', 'build')


def test_outcome_classification():
    assert BuildOutcome.from_returncode(0, ['cargo']).kind is OutcomeKind.SUCCESS
    assert BuildOutcome.from_returncode(-9, ['cargo']).kind is OutcomeKind.TOOL_FAILURE


def test_cargo_arguments_put_user_flags_last(tmp_path):
    props = TargetProperties(compiler_flags=('--offline', '-v'))
    args = cargo_build_args(props, tmp_path / 'bin')
    assert args == [
        '+nightly', 'build', '--release',
        '--out-dir', str((tmp_path / 'bin').absolute()), '-Z', 'unstable-options',
        '--offline', '-v',
    ]


def test_cargo_arguments_follow_properties(tmp_path):
    props = TargetProperties(channel=None, build_type='debug', cargo_features=('a', 'b'))
    args = cargo_build_args(props, tmp_path)
    assert args[0] == 'build'
    assert '--release' not in args
    assert args[args.index('--features') + 1] == 'a,b'

    props = TargetProperties(build_type='bench')
    assert '--profile' in cargo_build_args(props, tmp_path)
