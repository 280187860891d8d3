#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.constants import FONT_GLYPHS
from mchip.errors import OutOfBoundsMemoryAccess
from mchip.ram import RAM


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual(0x1000, len(ram.mem))
        self.assertEqual(0, ram.read(0xFFF))

    def test_ram_sized(self):
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())

    def test_ram_read_block(self):
        self.ram.write_block(2, b"\x01\x02\x03")
        self.assertEqual(b"\x02\x03", bytes(self.ram.read_block(3, 2)))

    def test_ram_byte_overflow(self):
        self.assertRaises(OutOfBoundsMemoryAccess, self.ram.write, 5, 255)
        self.assertRaises(OutOfBoundsMemoryAccess, self.ram.read, 5)
        self.assertRaises(OutOfBoundsMemoryAccess, self.ram.read, -1)

    def test_ram_block_overflow(self):
        self.assertRaises(OutOfBoundsMemoryAccess, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        self.assertRaises(OutOfBoundsMemoryAccess, self.ram.read_block, 4, 2)
        # Nothing should be partially written
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_overflow_reports_address(self):
        with self.assertRaises(OutOfBoundsMemoryAccess) as context:
            RAM().read(0x1000)

        self.assertEqual(0x1000, context.exception.address)

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_load_font(self):
        ram = RAM()
        ram.load_font()
        self.assertEqual(80, len(FONT_GLYPHS))
        self.assertEqual(FONT_GLYPHS, bytes(ram.read_block(0, 80)))
        self.assertEqual(0, ram.read(80))
        # Glyph for "F"
        self.assertEqual(b"\xF0\x80\xF0\x80\x80", bytes(ram.read_block(75, 5)))
