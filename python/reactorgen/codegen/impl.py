'''Dispatch from a target name to its emitter'''

from . import rust
from .types import TargetTypes, UnsupportedTargetOperation

# Targets that ship a full emitter; the others only have a type system.
EMITTERS = {
    'rust': rust.elaborate,
}

def codegen(model, types: TargetTypes, src_gen_path, target='rust', **kwargs):
    '''
    Emit the project of `model` for `target` under `src_gen_path`.

    Args:
        model (GenerationModel): The model to emit
        types (TargetTypes): The type system literals and types are rendered with
        src_gen_path: The source root, created if absent
        target: The target name selected by the configuration
        pretty_printer: Whether to run the target's code formatter

    Returns:
        The path of the project manifest.
    '''
    emitter = EMITTERS.get(target)
    if emitter is None:
        raise UnsupportedTargetOperation('emit', target)
    return emitter(model, types, src_gen_path, **kwargs)
