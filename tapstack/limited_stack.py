# Copyright (c) 2021, Neil Booth
#
# All rights reserved.
#
# Licensed under the the Open BSV License version 3; see LICENCE for details.
#

'''Script stack with element count and memory limits.'''

__all__ = ('BoundedStack', )


from .byte_buffer import ByteBuffer
from .consts import MAX_STACK_ELEMENTS, MAX_STACK_MEMORY_USAGE
from .errors import StackOverflowError, StackUnderflowError


class BoundedStack:
    '''An ordered collection of ByteBuffers; the last item is the top.

    A child stack has no limits of its own: its items count towards the limits of its
    parent, so a parent and its children are limited in combination.
    '''

    def __init__(self, count_limit=MAX_STACK_ELEMENTS, size_limit=MAX_STACK_MEMORY_USAGE):
        self.count_limit = count_limit
        self.size_limit = size_limit
        self.parent = None
        # Totals across the stack family; only meaningful on the root
        self._combined_count = 0
        self._combined_size = 0
        # This stack's own byte total
        self._size = 0
        self._items = []

    def __len__(self):
        return len(self._items)

    def __getitem__(self, x):
        return self._items[x]

    def __iter__(self):
        return iter(self._items)

    def __eq__(self, other):
        if isinstance(other, BoundedStack):
            other = other._items
        return self._items == other

    def __repr__(self):
        return f'BoundedStack({self._items!r})'

    @property
    def top_index(self):
        '''Zero if and only if the stack is empty.'''
        return len(self._items)

    def _root(self):
        return self if self.parent is None else self.parent._root()

    def _reserve(self, count, size):
        '''Raise StackOverflowError unless count items totalling size bytes can be added.'''
        root = self._root()
        if root._combined_count + count > root.count_limit:
            raise StackOverflowError(f'stack element limit of {root.count_limit:,d} '
                                     f'exceeded adding {count:,d} item(s)')
        if root._combined_size + size > root.size_limit:
            raise StackOverflowError(f'stack memory limit of {root.size_limit:,d} bytes '
                                     f'exceeded adding {size:,d} bytes')

    def _account(self, count, size):
        root = self._root()
        root._combined_count += count
        root._combined_size += size
        self._size += size
        assert root._combined_count >= 0 and root._combined_size >= 0

    def make_child_stack(self):
        result = BoundedStack(0, 0)
        result.parent = self
        return result

    def size(self):
        '''Total bytes of this stack's items.'''
        return self._size

    def combined_size(self):
        return self._root()._combined_size

    def combined_count(self):
        return self._root()._combined_count

    def is_empty(self):
        return not self._items

    def push(self, item):
        if not isinstance(item, ByteBuffer):
            item = ByteBuffer(item)
        self._reserve(1, len(item))
        self._items.append(item)
        self._account(1, len(item))

    def pop(self):
        if not self._items:
            raise StackUnderflowError('cannot pop from an empty stack')
        item = self._items.pop()
        self._account(-1, -len(item))
        return item

    def peek(self, depth=0):
        '''Return the item depth positions from the top without removing it.'''
        if not 0 <= depth < len(self._items):
            raise StackUnderflowError(f'stack depth {len(self._items):,d} less than required '
                                      f'depth of {depth + 1:,d}')
        return self._items[-1 - depth]

    def extend(self, items):
        '''Push items in order, the last becoming the top.  All or none are pushed.'''
        items = [item if isinstance(item, ByteBuffer) else ByteBuffer(item) for item in items]
        size = sum(len(item) for item in items)
        self._reserve(len(items), size)
        self._items.extend(items)
        self._account(len(items), size)

    def clear(self):
        while self._items:
            self.pop()

    def check_invariants(self):
        count = len(self._items)
        assert (count == 0) == (self.top_index == 0)
        assert self._size == sum(len(item) for item in self._items)
        assert all(isinstance(item, ByteBuffer) for item in self._items)
        root = self._root()
        assert count <= root.count_limit
        assert self._size <= root.size_limit
        assert root._combined_count <= root.count_limit
        assert root._combined_size <= root.size_limit
