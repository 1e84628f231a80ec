# Copyright (c) 2021, Neil Booth
#
# All rights reserved.
#
# Licensed under the the Open BSV License version 3; see LICENCE for details.
#


__all__ = (
    'MAX_SCRIPT_ELEMENT_SIZE', 'MAX_STACK_ELEMENTS', 'MAX_STACK_MEMORY_USAGE',
)


# Consensus limits for tapscript execution (BIP-342)
MAX_SCRIPT_ELEMENT_SIZE = 520
MAX_STACK_ELEMENTS = 1_000
MAX_STACK_MEMORY_USAGE = MAX_SCRIPT_ELEMENT_SIZE * MAX_STACK_ELEMENTS
