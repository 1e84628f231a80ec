# Copyright (c) 2021, Neil Booth
#
# All rights reserved.
#
# Licensed under the the Open BSV License version 3; see LICENCE for details.
#

'''Exception hierarchy.'''

__all__ = (
    'ScriptError', 'InterpreterError', 'StackUnderflowError', 'StackOverflowError',
    'OversizeError', 'ScriptFalse', 'InvalidOpcode', 'TooManyOps',
)


#
# Exception Hierarchy
#


class ScriptError(Exception):
    '''Base class for script errors.'''


class InterpreterError(ScriptError):
    '''Base class for interpreter errors.  All are terminal for an evaluation.'''


class StackUnderflowError(InterpreterError):
    '''Raised when an opcode wants more items than are present on the relevant stack.'''


class StackOverflowError(InterpreterError):
    '''Raised when a push or initialization would exceed the stack element count or memory
    limits, including the combined main and alt stack element limit.'''


class OversizeError(InterpreterError):
    '''Raised when a single stack item, pushed or concatenated, exceeds the item size
    limit.'''


class ScriptFalse(InterpreterError):
    '''Execution completed without error but the stack was not true.'''


class InvalidOpcode(InterpreterError):
    '''Raised when an opcode the interpreter does not implement is encountered.'''


class TooManyOps(InterpreterError):
    '''Raised when a script executes more operations than its budget.'''
