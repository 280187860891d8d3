#!/usr/bin/env python3

"""
Register File

Holds all of the machine state that isn't memory or video:
    * V0-VF - 16 general purpose byte registers.  VF doubles as the flag
              register, and is overwritten by any instruction which reports a
              carry, borrow, shifted-out bit or sprite collision
    * I     - 16-bit index register, used as a pointer into memory
    * PC    - Program counter
    * DT    - Delay timer
    * ST    - Sound timer
    * The call stack

The program counter is only moved through advance(), skip() and jump(), so the
interpreter never adds to it by hand.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, FLAG_REGISTER, PROGRAM_START, STACK_DEPTH
from .errors import InvalidRegisterIndex
from .stack import Stack


class RegisterFile:
    def __init__(self, stack_depth=STACK_DEPTH):
        self.v = memoryview(bytearray(NUM_REGISTERS))
        self.stack = Stack(stack_depth)
        self.reset()

    def reset(self):
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0
        self.pc = PROGRAM_START
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer
        self.stack.clear()

    def get_register(self, index):
        self._check_index(index)
        return self.v[index]

    def set_register(self, index, value):
        self._check_index(index)
        self.v[index] = value & 0xFF

    def set_flag(self, value):
        self.v[FLAG_REGISTER] = int(bool(value))

    def _check_index(self, index):
        if not 0 <= index < NUM_REGISTERS:
            raise InvalidRegisterIndex(index)

    def push(self, address):
        self.stack.push(address)

    def pop(self):
        return self.stack.pop()

    def advance(self):
        self.pc += 2

    def skip(self):
        self.pc += 4

    def jump(self, address):
        self.pc = address
