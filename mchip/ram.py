#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.  Every
access is bounds-checked, and anything outside the 4K address space raises an
error rather than wrapping.

The hexadecimal font is held at the bottom of memory, below where programs are
loaded.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, FONT_LOC, FONT_GLYPHS
from .errors import OutOfBoundsMemoryAccess


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location, size)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        self.check_overflow(location, block_size)
        self.mem[location:location + block_size] = block

    def check_overflow(self, location, size=1):
        if location < 0 or location + size > self.mem_size:
            raise OutOfBoundsMemoryAccess(location, size)

    def zero_block(self, offset, size):
        self.check_overflow(offset, size)
        self.mem[offset:offset + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)

    def load_font(self):
        self.write_block(FONT_LOC, FONT_GLYPHS)
