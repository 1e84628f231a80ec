# Copyright (c) 2021, Neil Booth
#
# All rights reserved.
#
# Licensed under the the Open BSV License version 3; see LICENCE for details.
#

'''Immutable, size-limited stack items.'''

__all__ = ('ByteBuffer', )


from .consts import MAX_SCRIPT_ELEMENT_SIZE
from .errors import OversizeError


class ByteBuffer(bytes):
    '''A stack item.  Being a bytes subclass it is immutable and compares equal to plain
    bytes of the same content.'''

    def __new__(cls, data=b'', *, limit=MAX_SCRIPT_ELEMENT_SIZE):
        if isinstance(data, cls) and len(data) <= limit:
            return data
        # Raises TypeError unless data is bytes-like; measured before copying
        size = memoryview(data).nbytes
        if size > limit:
            raise OversizeError(f'item length {size:,d} exceeds the limit '
                                f'of {limit:,d} bytes')
        return super().__new__(cls, data)

    @classmethod
    def create(cls, data, *, limit=MAX_SCRIPT_ELEMENT_SIZE):
        return cls(data, limit=limit)

    def concat(self, other, *, limit=MAX_SCRIPT_ELEMENT_SIZE):
        '''Return a new buffer of self followed by other.  Neither input is changed.'''
        size = len(self) + len(other)
        if size > limit:
            raise OversizeError(f'concatenated length {size:,d} exceeds the limit '
                                f'of {limit:,d} bytes')
        return ByteBuffer(bytes(self) + bytes(other), limit=limit)

    def __repr__(self):
        return f'ByteBuffer({bytes(self)!r})'
