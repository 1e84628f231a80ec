from .byte_buffer import *
from .consts import *
from .errors import *
from .interpreter import *
from .limited_stack import *

_version_str = '0.1'
_version = tuple(int(part) for part in _version_str.split('.'))

__all__ = sum((
    byte_buffer.__all__,
    consts.__all__,
    errors.__all__,
    interpreter.__all__,
    limited_stack.__all__,
), ())
