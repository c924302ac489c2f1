'''Time units and time values of the coordination language.'''

from __future__ import annotations

import enum
from dataclasses import dataclass


class TimeUnit(enum.Enum):
    '''Every unit spelling accepted by the front-end.

    Singular and plural spellings are distinct members so that a model
    round-trips exactly, but they share the same `base` and `factor`.
    '''

    NSEC = 'nsec'
    NSECS = 'nsecs'
    USEC = 'usec'
    USECS = 'usecs'
    MSEC = 'msec'
    MSECS = 'msecs'
    SEC = 'sec'
    SECS = 'secs'
    SECOND = 'second'
    SECONDS = 'seconds'
    MIN = 'min'
    MINS = 'mins'
    MINUTE = 'minute'
    MINUTES = 'minutes'
    HOUR = 'hour'
    HOURS = 'hours'
    DAY = 'day'
    DAYS = 'days'
    WEEK = 'week'
    WEEKS = 'weeks'
    # No unit was written; defaults to seconds.
    NONE = ''

    @classmethod
    def parse(cls, spelling):
        '''Look up a unit by its spelling, case-insensitively.'''
        if spelling is None:
            return cls.NONE
        if isinstance(spelling, TimeUnit):
            return spelling
        try:
            return cls(spelling.strip().lower())
        except ValueError as e:
            known = ', '.join(u.value for u in cls if u.value)
            raise ValueError(f'Unknown time unit: {spelling!r} (expected one of {known})') from e

    @property
    def base(self) -> str:
        '''The unit this one is expressed in: nsec, usec, msec or sec.'''
        return _UNIT_NORMALIZATION[self][0]

    @property
    def factor(self) -> int:
        '''The multiplier that converts a magnitude of this unit into `base`.'''
        return _UNIT_NORMALIZATION[self][1]

    @property
    def nanoseconds(self) -> int:
        '''The length of one of this unit in nanoseconds.'''
        return _BASE_NANOS[self.base] * self.factor


_BASE_NANOS = {
    'nsec': 1,
    'usec': 1_000,
    'msec': 1_000_000,
    'sec': 1_000_000_000,
}

_UNIT_NORMALIZATION = {
    TimeUnit.NSEC: ('nsec', 1),
    TimeUnit.NSECS: ('nsec', 1),
    TimeUnit.USEC: ('usec', 1),
    TimeUnit.USECS: ('usec', 1),
    TimeUnit.MSEC: ('msec', 1),
    TimeUnit.MSECS: ('msec', 1),
    TimeUnit.NONE: ('sec', 1),
    TimeUnit.SEC: ('sec', 1),
    TimeUnit.SECS: ('sec', 1),
    TimeUnit.SECOND: ('sec', 1),
    TimeUnit.SECONDS: ('sec', 1),
    TimeUnit.MIN: ('sec', 60),
    TimeUnit.MINS: ('sec', 60),
    TimeUnit.MINUTE: ('sec', 60),
    TimeUnit.MINUTES: ('sec', 60),
    TimeUnit.HOUR: ('sec', 3600),
    TimeUnit.HOURS: ('sec', 3600),
    TimeUnit.DAY: ('sec', 86400),
    TimeUnit.DAYS: ('sec', 86400),
    TimeUnit.WEEK: ('sec', 604800),
    TimeUnit.WEEKS: ('sec', 604800),
}


@dataclass(frozen=True)
class TimeValue:
    '''A non-negative integer magnitude paired with a unit.'''

    magnitude: int
    unit: TimeUnit = TimeUnit.NONE

    def __post_init__(self):
        # pylint: disable=unidiomatic-typecheck
        if type(self.magnitude) is not int:
            raise TypeError(
                f'Time magnitude must be an int, got {type(self.magnitude).__name__}')
        if self.magnitude < 0:
            raise ValueError(f'Time magnitude must be non-negative, got {self.magnitude}')
        object.__setattr__(self, 'unit', TimeUnit.parse(self.unit))

    @staticmethod
    def zero():
        '''The zero duration.'''
        return TimeValue(0, TimeUnit.NONE)

    def to_nanoseconds(self) -> int:
        '''The exact duration in nanoseconds.'''
        return self.magnitude * self.unit.nanoseconds

    def __str__(self):
        if self.unit is TimeUnit.NONE:
            return str(self.magnitude)
        return f'{self.magnitude} {self.unit.value}'
