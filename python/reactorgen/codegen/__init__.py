'''The module to emit target projects from a generation model'''

from .impl import codegen
from . import types
from .types import TargetTypes, UnsupportedTargetOperation, get_target_types
