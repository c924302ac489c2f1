"""reactorgen: code generation and build driver for reactor programs."""

from . import ir
from . import utils
from . import codegen
from . import backend
from .backend import config, generate, run_pipeline, GenerationResult, GenerationStatus
from .builder import make_generation_model
from .reporter import ErrorReporter
from .toolchain import BuildOutcome, OutcomeKind, invoke_toolchain
from .codegen.types import (
    TargetTypes, RustTypes, CppTypes, UnsupportedTargetOperation, get_target_types,
)

__all__ = [
    'ir', 'utils', 'codegen', 'backend',
    'config', 'generate', 'run_pipeline', 'GenerationResult', 'GenerationStatus',
    'make_generation_model', 'ErrorReporter',
    'BuildOutcome', 'OutcomeKind', 'invoke_toolchain',
    'TargetTypes', 'RustTypes', 'CppTypes', 'UnsupportedTargetOperation', 'get_target_types',
]
