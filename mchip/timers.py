#!/usr/bin/env python3

"""
Timer Clock

The delay and sound timers count down at 60Hz, regardless of how fast the
CPU is running.  The host loop passes in however much wall-clock time has
passed, and the clock applies as many whole ticks as that time covers.  A slow
frame therefore causes several ticks at once, and a fast one may cause none.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import TIMER_FREQ


class TimerClock:
    def __init__(self, registers, freq=TIMER_FREQ):
        self.registers = registers
        self.freq = freq
        self.accumulator = 0.0

    def reset(self):
        self.accumulator = 0.0

    def tick(self):
        registers = self.registers

        if registers.dt > 0:
            registers.dt -= 1

        if registers.st > 0:
            registers.st -= 1

    def advance(self, elapsed):
        self.accumulator += elapsed
        ticks = int(self.accumulator * self.freq)

        for _ in range(ticks):
            self.tick()

        self.accumulator -= ticks / self.freq
        return ticks
