#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.debugger import Debugger
from mchip.registers import RegisterFile


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.registers = RegisterFile()

    def test_debugger_live_switch(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_line(self):
        self.registers.v[0xF] = 0x01
        self.registers.v[0x0] = 0xAB
        self.registers.i = 0x123
        line = self.debugger.debug(self.registers, 0x6012, "LD V0, 0x12")
        self.assertTrue(line.startswith("V: 0x01"))
        self.assertIn("ab I: 0x0123", line)
        self.assertIn("PC: 0x200 OP: 0x6012 IN: LD V0, 0x12", line)
        self.assertNotIn("Stack", line)

    def test_debugger_verbose(self):
        self.registers.push(0x202)
        self.registers.push(0x30A)
        line = self.debugger.debug(self.registers, 0x0000, "???", verbose=True)
        self.assertTrue(line.endswith("Stack: 0x202 0x30a"))
