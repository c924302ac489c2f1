'''Target-independent type descriptors.'''

#pylint: disable=too-few-public-methods

class DType:
    '''Base class for type descriptors'''

    def _key(self):
        '''The fields that identify this descriptor'''
        return ()

    def __eq__(self, other):
        '''Two descriptors are equal if they have the same kind and fields'''
        return self.__class__ == other.__class__ and self._key() == other._key()

    def __hash__(self):
        return hash((self.__class__, self._key()))

    def is_list(self):
        '''Check if this is a list type of either kind'''
        return isinstance(self, (FixedSizeList, VariableSizeList))


class Scalar(DType):
    '''A target type name, carried verbatim'''

    def __init__(self, name: str):
        assert isinstance(name, str) and name, 'Expecting a non-empty type name'
        self._name = name

    @property
    def name(self):
        '''The target-syntax name of this type'''
        return self._name

    def _key(self):
        return (self._name,)

    def __repr__(self):
        return self._name

class TimeType(DType):
    '''The abstract duration type'''

    def __repr__(self):
        return 'time'

class FixedSizeList(DType):
    '''Exactly `size` contiguous elements of `base`'''

    def __init__(self, base: DType, size: int):
        assert isinstance(base, DType), f'Expecting a DType as the element type, got {base}'
        # pylint: disable=unidiomatic-typecheck
        assert type(size) is int and size >= 0, 'Expecting a non-negative integer size'
        self._base = base
        self._size = size

    @property
    def base(self):
        '''The element type'''
        return self._base

    @property
    def size(self):
        '''The number of elements'''
        return self._size

    def _key(self):
        return (self._base, self._size)

    def __repr__(self):
        return f'{self._base}[{self._size}]'

class VariableSizeList(DType):
    '''A growable sequence of `base`'''

    def __init__(self, base: DType):
        assert isinstance(base, DType), f'Expecting a DType as the element type, got {base}'
        self._base = base

    @property
    def base(self):
        '''The element type'''
        return self._base

    def _key(self):
        return (self._base,)

    def __repr__(self):
        return f'{self._base}[]'

class Undefined(DType):
    '''The absent/unit type'''

    def __repr__(self):
        return 'undefined'

class Missing(DType):
    '''Placeholder for a type the program did not write'''

    def __repr__(self):
        return '<missing>'


_UNDEFINED = Undefined()
_MISSING = Missing()
_TIME = TimeType()

def undefined():
    '''The syntax sugar for the unit type'''
    return _UNDEFINED

def missing():
    '''The syntax sugar for an unwritten type'''
    return _MISSING

def time():
    '''The syntax sugar for the duration type'''
    return _TIME
