#!/usr/bin/env python3

"""
Stack Emulator

The call stack is not part of addressable RAM.  There is no specified location
for it, and there is no stack pointer (SP) register exposed to the running
program, so a plain list with a fixed capacity is all that is needed.

Only return addresses are ever stored here.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH
from .errors import StackOverflow, StackUnderflow


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow pushing 0x{:03x} (depth {})".format(item, self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def __len__(self):
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items
