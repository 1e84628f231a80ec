# Copyright (c) 2018-2021, Neil Booth
#
# All rights reserved.
#
# Licensed under the the Open BSV License version 3; see LICENCE for details.
#

'''Tapscript interpreter for the stack transfer and concatenation opcodes.'''

__all__ = (
    'Opcode', 'InterpreterLimits', 'InterpreterState', 'ExecutionResult',
    'evaluate', 'verify_script', 'cast_to_bool', 'is_stack_truthy',
)


import logging
from enum import IntEnum
from functools import partial

import attr

from .byte_buffer import ByteBuffer
from .consts import MAX_SCRIPT_ELEMENT_SIZE, MAX_STACK_ELEMENTS, MAX_STACK_MEMORY_USAGE
from .errors import (
    InterpreterError, StackUnderflowError, StackOverflowError, ScriptFalse, InvalidOpcode,
    TooManyOps,
)
from .limited_stack import BoundedStack


logger = logging.getLogger('interpreter')


class Opcode(IntEnum):
    # stack ops
    OP_TOALTSTACK = 0x6b
    STACK_TO_ALT = OP_TOALTSTACK
    OP_FROMALTSTACK = 0x6c
    ALT_TO_STACK = OP_FROMALTSTACK

    # splice ops
    OP_CAT = 0x7e
    CONCAT = OP_CAT


# Make the opcodes available as module globals
globals().update(Opcode.__members__)
__all__ += tuple(Opcode.__members__.keys())


@attr.s(slots=True, frozen=True)
class InterpreterLimits:
    '''Limits to apply to an invocation of the interpreter.

    The defaults are the tapscript consensus limits.  ops_per_script is an optional step
    budget a caller can impose; None means unlimited.
    '''
    MAX_SCRIPT_ELEMENT_SIZE = MAX_SCRIPT_ELEMENT_SIZE
    MAX_STACK_ELEMENTS = MAX_STACK_ELEMENTS
    MAX_STACK_MEMORY_USAGE = MAX_STACK_MEMORY_USAGE

    # In bytes, e.g. 520
    item_size = attr.ib(default=MAX_SCRIPT_ELEMENT_SIZE)
    # The combined main and alt stack element count must stay below this, e.g. 1_000
    stack_elements = attr.ib(default=MAX_STACK_ELEMENTS)
    # Combined main and alt stack bytes, e.g. 520_000
    stack_memory_usage = attr.ib(default=MAX_STACK_MEMORY_USAGE)
    # e.g. 201, or None
    ops_per_script = attr.ib(default=None)

    def __attrs_post_init__(self):
        for name in ('item_size', 'stack_elements', 'stack_memory_usage', 'ops_per_script'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f'{name} cannot be negative: {value:,d}')
        if self.stack_elements < 1:
            raise ValueError(f'stack_elements must be positive: {self.stack_elements:,d}')

    def validate_item(self, item):
        '''Return item as a ByteBuffer, raising OversizeError if it is too large.'''
        return ByteBuffer(item, limit=self.item_size)


InterpreterLimits.TAPSCRIPT = InterpreterLimits()


def cast_to_bool(item):
    '''Cast an item to a Python boolean.  Only the empty item and a single zero byte are
    False.'''
    return item not in (b'', b'\0')


def is_stack_truthy(stack):
    '''True if any item on the stack is true.  An empty stack is False.'''
    return any(cast_to_bool(item) for item in stack)


class InterpreterState:
    '''Interpreter state that updates as a script executes.

    The main stack is seeded with the witness, its first item at the bottom.  The alt stack
    is a child of the main stack so their limits apply in combination.
    '''

    def __init__(self, limits=None, witness=(), pk_script=()):
        self.limits = limits or InterpreterLimits.TAPSCRIPT
        self.witness = tuple(self.limits.validate_item(item) for item in witness)
        self.pk_script = tuple(pk_script)
        # The combined element count is strictly below stack_elements
        self.stack = BoundedStack(self.limits.stack_elements - 1, self.limits.stack_memory_usage)
        self.alt_stack = self.stack.make_child_stack()
        self.op_count = 0
        self.stack.extend(self.witness)
        self.validate_stack_size()

    @classmethod
    def initialize(cls, witness, pk_script=(), limits=None):
        return cls(limits, witness, pk_script)

    def bump_op_count(self, bump):
        self.op_count += bump
        limit = self.limits.ops_per_script
        if limit is not None and self.op_count > limit:
            raise TooManyOps(f'op count exceeds the limit of {limit:,d}')

    def require_stack_depth(self, depth):
        if len(self.stack) < depth:
            raise StackUnderflowError(f'stack depth {len(self.stack)} less than required '
                                      f'depth of {depth}')

    def require_alt_stack(self):
        if not self.alt_stack:
            raise StackUnderflowError('alt stack is empty')

    def validate_stack_size(self):
        '''Enforces the limit on combined stack size.'''
        stack_size = len(self.stack) + len(self.alt_stack)
        limit = self.limits.stack_elements
        if stack_size >= limit:
            raise StackOverflowError(f'combined stack size of {stack_size:,d} items must be '
                                     f'less than {limit:,d}')

    def check_invariants(self):
        self.stack.check_invariants()
        self.alt_stack.check_invariants()
        assert len(self.stack) + len(self.alt_stack) < self.limits.stack_elements
        assert all(len(item) <= self.limits.item_size for item in self.stack)
        assert all(len(item) <= self.limits.item_size for item in self.alt_stack)

    def step(self, op):
        '''Execute one opcode.  On failure the stacks are unchanged.'''
        handlers = self._handlers
        self.bump_op_count(1)
        if 0 <= op < len(handlers):
            handlers[op](self)
        else:
            self.on_invalid_opcode(op)
        self.validate_stack_size()
        if __debug__:
            self.check_invariants()

    def evaluate_script(self, pk_script=None):
        '''Evaluate a script, by default the predicate program, and update state.'''
        if pk_script is None:
            pk_script = self.pk_script
        self.op_count = 0
        for op in pk_script:
            self.step(op)

    def is_true(self):
        return is_stack_truthy(self.stack)

    def verify(self):
        '''Evaluate the predicate program and raise ScriptFalse unless the stack is true.'''
        self.evaluate_script()
        if not self.is_true():
            if self.stack:
                raise ScriptFalse('no stack item is true')
            raise ScriptFalse('stack is empty')

    def on_invalid_opcode(self, op):
        try:
            name = Opcode(op).name
        except ValueError:
            name = str(op)

        raise InvalidOpcode(f'invalid opcode {name}')

    #
    # Stack operations
    #
    def on_TOALTSTACK(self):
        # (x -- ) (alt: -- x)
        self.require_stack_depth(1)
        self.alt_stack.push(self.stack.pop())

    def on_FROMALTSTACK(self):
        # ( -- x) (alt: x -- )
        self.require_alt_stack()
        self.stack.push(self.alt_stack.pop())

    #
    # Byte string operations
    #
    def on_CAT(self):
        # (x1 x2 -- x1x2 )
        self.require_stack_depth(2)
        item = self.stack.peek(1).concat(self.stack.peek(0), limit=self.limits.item_size)
        self.stack.pop()
        self.stack.pop()
        self.stack.push(item)

    @classmethod
    def bind_handlers(cls):
        handlers = [partial(cls.on_invalid_opcode, op=op) for op in range(256)]

        #
        # Stack operations
        #
        handlers[Opcode.OP_TOALTSTACK] = cls.on_TOALTSTACK
        handlers[Opcode.OP_FROMALTSTACK] = cls.on_FROMALTSTACK

        #
        # Byte string operations
        #
        handlers[Opcode.OP_CAT] = cls.on_CAT

        cls._handlers = handlers


InterpreterState.bind_handlers()


@attr.s(slots=True, frozen=True)
class ExecutionResult:
    '''The verdict of evaluate().'''

    # None on success, otherwise the InterpreterError that ended evaluation
    error = attr.ib(default=None)
    # The final state; None if initialization failed
    state = attr.ib(default=None, eq=False, repr=False)

    @classmethod
    def success(cls, state=None):
        return cls(None, state)

    @classmethod
    def failed(cls, error, state=None):
        return cls(error, state)

    @property
    def is_success(self):
        return self.error is None

    @property
    def failure(self):
        '''The class of the failure, or None.'''
        return None if self.error is None else type(self.error)

    def __bool__(self):
        return self.is_success


def evaluate(pk_script, witness, limits=None):
    '''Evaluate pk_script against witness and return an ExecutionResult.

    Execution stops at the first failure.
    '''
    state = None
    try:
        state = InterpreterState(limits, witness, pk_script)
        logger.debug(f'evaluating {len(state.pk_script):,d} ops against '
                     f'{len(state.witness):,d} witness items')
        state.verify()
    except InterpreterError as e:
        logger.debug(f'evaluation failed: {e.__class__.__name__}: {e}')
        return ExecutionResult.failed(e, state)
    logger.debug('evaluation succeeded')
    return ExecutionResult.success(state)


def verify_script(pk_script, witness, limits=None):
    '''Evaluate pk_script against witness.  Return the final state on success, otherwise
    raise the InterpreterError that ended evaluation.'''
    state = InterpreterState(limits, witness, pk_script)
    state.verify()
    return state
