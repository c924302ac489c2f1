'''Invocation of the target's native build tool.'''

from __future__ import annotations

import enum
import logging
import os
import subprocess
import typing
from dataclasses import dataclass

from .ir.model import TargetProperties
from .utils import enforce_type

log = logging.getLogger(__name__)


class OutcomeKind(enum.Enum):
    '''How a toolchain run ended.'''
    SUCCESS = 'success'
    TOOL_FAILURE = 'tool-failure'
    TOOL_UNAVAILABLE = 'tool-unavailable'


@dataclass(frozen=True)
class BuildOutcome:
    '''The result of one toolchain run.

    `returncode` is the raw exit status, or None when the tool never started.
    '''
    kind: OutcomeKind
    returncode: typing.Optional[int]
    command: typing.Tuple[str, ...]
    message: str = ''

    @staticmethod
    def from_returncode(returncode: int, command) -> 'BuildOutcome':
        '''Classify an exit status; zero is the only success.'''
        kind = OutcomeKind.SUCCESS if returncode == 0 else OutcomeKind.TOOL_FAILURE
        return BuildOutcome(kind, returncode, tuple(command))

    @property
    def succeeded(self) -> bool:
        '''Whether the tool ran and exited with 0.'''
        return self.kind is OutcomeKind.SUCCESS


@enforce_type
def invoke_toolchain(toolchain: str, args: typing.List[str],
                     cwd: typing.Union[str, os.PathLike, None] = None) -> BuildOutcome:
    '''Run `toolchain args...` in `cwd` and wait for it.

    Output is not captured: the tool writes straight to our stdout/stderr.
    There is no timeout, and a failed run is never retried.
    '''
    cmd = [toolchain] + list(args)
    print(cmd)
    try:
        proc = subprocess.run(cmd, cwd=cwd, check=False)
    except OSError as e:
        log.debug('Cannot start %s: %s', toolchain, e)
        return BuildOutcome(OutcomeKind.TOOL_UNAVAILABLE, None, tuple(cmd),
                            f'{toolchain} could not be started: {e}')
    return BuildOutcome.from_returncode(proc.returncode, cmd)


def cargo_build_args(properties: TargetProperties, bin_path) -> typing.List[str]:
    '''The arguments of a cargo build dropping its binary into `bin_path`.

    Fixed flags come first; the user's compiler flags are appended verbatim.
    '''
    args = []
    if properties.channel:
        args.append(f'+{properties.channel}')
    args.append('build')
    if properties.build_type == 'release':
        # enable optimisations
        args.append('--release')
    elif properties.build_type != 'debug':
        args += ['--profile', properties.build_type]
    if properties.cargo_features:
        args += ['--features', ','.join(properties.cargo_features)]
    # --out-dir is unstable and needs the -Z flag on nightly
    args += ['--out-dir', os.path.abspath(str(bin_path)), '-Z', 'unstable-options']
    args += list(properties.compiler_flags)
    return args
