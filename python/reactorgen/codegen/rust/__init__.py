"""Rust emitter: renders a generation model into a Cargo project."""

from .elaborate import elaborate
from .reactors import ElaborateReactor, dump_reactors
