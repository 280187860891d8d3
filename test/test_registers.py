#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.errors import InvalidRegisterIndex, StackOverflow, StackUnderflow
from mchip.registers import RegisterFile


class TestRegisterFile(unittest.TestCase):
    def setUp(self):
        self.registers = RegisterFile()

    def test_registers_power_on(self):
        self.assertEqual(bytes(16), bytes(self.registers.v))
        self.assertEqual(0, self.registers.i)
        self.assertEqual(0x200, self.registers.pc)
        self.assertEqual(0, self.registers.dt)
        self.assertEqual(0, self.registers.st)
        self.assertEqual(0, len(self.registers.stack))

    def test_registers_get_set(self):
        self.registers.set_register(0x3, 0x7F)
        self.assertEqual(0x7F, self.registers.get_register(0x3))
        self.registers.set_register(0xF, 0x1FF)  # Stored modulo 256
        self.assertEqual(0xFF, self.registers.get_register(0xF))

    def test_registers_invalid_index(self):
        self.assertRaises(InvalidRegisterIndex, self.registers.get_register, 16)
        self.assertRaises(InvalidRegisterIndex, self.registers.get_register, -1)
        self.assertRaises(InvalidRegisterIndex, self.registers.set_register, 16, 0)

    def test_registers_set_flag(self):
        self.registers.set_flag(5)
        self.assertEqual(1, self.registers.v[0xF])
        self.registers.set_flag(False)
        self.assertEqual(0, self.registers.v[0xF])

    def test_registers_advance_skip_jump(self):
        self.registers.advance()
        self.assertEqual(0x202, self.registers.pc)
        self.registers.skip()
        self.assertEqual(0x206, self.registers.pc)
        self.registers.jump(0x300)
        self.assertEqual(0x300, self.registers.pc)

    def test_registers_stack(self):
        self.registers.push(0x204)
        self.assertEqual(0x204, self.registers.pop())
        self.assertRaises(StackUnderflow, self.registers.pop)

        for address in range(16):
            self.registers.push(address)

        self.assertRaises(StackOverflow, self.registers.push, 0x200)

    def test_registers_reset(self):
        self.registers.set_register(0x1, 0x10)
        self.registers.i = 0x123
        self.registers.dt = 5
        self.registers.st = 6
        self.registers.push(0x202)
        self.registers.jump(0x400)
        self.registers.reset()
        self.assertEqual(0, self.registers.get_register(0x1))
        self.assertEqual((0, 0, 0, 0x200), (self.registers.i, self.registers.dt, self.registers.st, self.registers.pc))
        self.assertEqual(0, len(self.registers.stack))
