#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.registers import RegisterFile
from mchip.timers import TimerClock


class TestTimerClock(unittest.TestCase):
    def setUp(self):
        self.registers = RegisterFile()
        self.timer_clock = TimerClock(self.registers)

    def test_timers_tick(self):
        self.registers.dt = 2
        self.registers.st = 1
        self.timer_clock.tick()
        self.assertEqual((1, 0), (self.registers.dt, self.registers.st))
        self.timer_clock.tick()
        self.assertEqual((0, 0), (self.registers.dt, self.registers.st))
        self.timer_clock.tick()  # Never goes below zero
        self.assertEqual((0, 0), (self.registers.dt, self.registers.st))

    def test_timers_advance_whole_second(self):
        self.registers.dt = 100
        self.registers.st = 30
        self.assertEqual(60, self.timer_clock.advance(1.0))
        self.assertEqual(40, self.registers.dt)
        self.assertEqual(0, self.registers.st)

    def test_timers_advance_accumulates(self):
        self.registers.dt = 10

        # Less than one tick period, so nothing happens yet
        self.assertEqual(0, self.timer_clock.advance(0.01))
        self.assertEqual(10, self.registers.dt)

        # Carried over time completes the first tick
        self.assertEqual(1, self.timer_clock.advance(0.01))
        self.assertEqual(9, self.registers.dt)

    def test_timers_advance_multiple_ticks(self):
        self.registers.dt = 10
        self.assertEqual(3, self.timer_clock.advance(0.055))
        self.assertEqual(7, self.registers.dt)

    def test_timers_reset(self):
        self.timer_clock.advance(0.01)
        self.timer_clock.reset()
        self.registers.dt = 1
        self.assertEqual(0, self.timer_clock.advance(0.01))
        self.assertEqual(1, self.registers.dt)
