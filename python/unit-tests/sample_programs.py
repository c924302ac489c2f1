"""Programs shared by the unit tests, as the front-end would hand them over."""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from reactorgen.ir import dtype  # noqa: E402
from reactorgen.ir.program import (  # noqa: E402
    ActionDecl, ConnectionDecl, DeadlineDecl, InstanceDecl, ParamDecl, PortDecl,
    Program, ReactionDecl, ReactorDecl, StateDecl, TimerDecl,
)
from reactorgen.ir.time import TimeUnit, TimeValue  # noqa: E402
from reactorgen.ir.value import ListLiteral, Literal  # noqa: E402

U32 = dtype.Scalar('u32')


def source_reactor():
    """Counts up on every timer tick and sends the count."""
    return ReactorDecl(
        name='Source',
        params=[ParamDecl('period', dtype.time(), TimeValue(1, TimeUnit.SEC))],
        state_vars=[StateDecl('count', U32, Literal('0'))],
        outputs=[PortDecl('out', U32)],
        timers=[TimerDecl('t', TimeValue(0), TimeValue(1, TimeUnit.SEC))],
        reactions=[ReactionDecl(
            triggers=['t'], effects=['out'],
            body='ctx.set(out, self.count);\nself.count += 1;')],
    )


def sink_reactor():
    """Remembers every value it receives."""
    return ReactorDecl(
        name='Sink',
        state_vars=[StateDecl('seen', dtype.VariableSizeList(U32), ListLiteral([]))],
        inputs=[PortDecl('inp', U32)],
        reactions=[ReactionDecl(
            triggers=['inp'],
            body='if let Some(v) = ctx.get(inp) { self.seen.push(v); }',
            deadline=DeadlineDecl(TimeValue(100, TimeUnit.MSEC), 'println!("late");'))],
    )


def main_reactor():
    """Wires a source to a sink and schedules an action at startup."""
    return ReactorDecl(
        name='HelloWorld',
        is_main=True,
        actions=[ActionDecl('a', U32, min_delay=TimeValue(10, TimeUnit.MSEC))],
        instances=[
            InstanceDecl('src', 'Source', {'period': TimeValue(500, TimeUnit.MSEC)}),
            InstanceDecl('sink', 'Sink'),
        ],
        connections=[ConnectionDecl('src.out', 'sink.inp')],
        reactions=[
            ReactionDecl(triggers=['startup'], effects=['a'],
                         body='ctx.schedule_with_v(a, Some(1), Asap);'),
            ReactionDecl(triggers=['a', 'shutdown'], body='println!("done");'),
        ],
    )


def hello_program(**kwargs):
    """The main reactor listed first, so that ordering matters."""
    return Program('HelloWorld', [main_reactor(), source_reactor(), sink_reactor()], **kwargs)


def library_program():
    """A program with reactors but no main reactor."""
    return Program('Library', [source_reactor(), sink_reactor()])
