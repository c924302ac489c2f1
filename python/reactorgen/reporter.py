'''Diagnostics collected while generating code for one program.'''

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass

log = logging.getLogger(__name__)


class Severity:
    '''The severity of a diagnostic.'''
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


_PREFIXES = {
    Severity.INFO: '',
    Severity.WARNING: '[WARN] ',
    Severity.ERROR: '[ERROR] ',
}


@dataclass(frozen=True)
class Diagnostic:
    '''One reported message.'''
    severity: str
    message: str

    def __str__(self):
        return f'{_PREFIXES[self.severity]}{self.message}'


class ErrorReporter:
    '''Records every diagnostic of a generation run and prints it.

    The front-end reports validation errors into the same reporter before the
    generator runs, so `errors_occurred` covers both.
    '''

    def __init__(self, echo: bool = True):
        self.echo = echo
        self.diagnostics: typing.List[Diagnostic] = []

    def _report(self, severity, message):
        diag = Diagnostic(severity, message)
        self.diagnostics.append(diag)
        log.debug('%s: %s', severity, message)
        if self.echo:
            print(diag)
        return diag

    def info(self, message: str) -> Diagnostic:
        '''Report progress or success.'''
        return self._report(Severity.INFO, message)

    def warning(self, message: str) -> Diagnostic:
        '''Report something the user should look at that does not fail the run.'''
        return self._report(Severity.WARNING, message)

    def error(self, message: str) -> Diagnostic:
        '''Report a failure.'''
        return self._report(Severity.ERROR, message)

    @property
    def errors(self) -> typing.List[Diagnostic]:
        '''The error diagnostics, in reporting order.'''
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> typing.List[Diagnostic]:
        '''The warning diagnostics, in reporting order.'''
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def errors_occurred(self) -> bool:
        '''Whether any error has been reported so far.'''
        return any(d.severity == Severity.ERROR for d in self.diagnostics)
