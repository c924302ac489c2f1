'''The program and generation-model IR.'''

from . import dtype
from . import time
from . import value
from . import program
from . import model
from .time import TimeUnit, TimeValue
from .value import Literal, ListLiteral, ParamRef
from .model import GenerationModel
from .program import Program
