#!/usr/bin/env python3

"""
Host Loop

Plugs the emulated components together and drives them.  Each displayed frame
runs in a fixed order:

    1. Poll the host inputs (which update the keypad)
    2. Execute as many instructions as the clock speed allows for the time
       that has passed
    3. Apply any pending 60Hz timer ticks
    4. Render the framebuffer if it changed, and gate the buzzer on the sound
       timer

Everything happens on one thread.  Stopping the machine is simply a matter of
no longer calling step().
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from time import perf_counter, sleep
from .constants import APP_NAME, PROGRAM_START, MAX_PROGRAM_SIZE, DISPLAY_FREQ, DEFAULT_CLOCK_SPEED
from .cpu import Interpreter, WAIT
from .errors import MachineError, ProgramTooLarge
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .registers import RegisterFile
from .timers import TimerClock

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ

logger = logging.getLogger(__name__)


class Machine:
    def __init__(self, renderer, inputs, audio, keypad=None, debugger=None, clock_speed=None, seed=None):
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.debugger = debugger
        self.clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed

        if self.clock_speed <= 0:
            raise ValueError("Clock speed must be a positive number of operations per second")

        self.ram = RAM()
        self.ram.load_font()
        self.registers = RegisterFile()
        self.framebuffer = Framebuffer()
        self.keypad = Keypad() if keypad is None else keypad
        self.interpreter = Interpreter(self.ram, self.registers, self.framebuffer, self.keypad, debugger, seed)
        self.timer_clock = TimerClock(self.registers)
        self.program = b""
        self.cycle_accumulator = 0.0
        self.buzzer_enabled = False

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

        self.renderer.set_resolution(*self.framebuffer.get_vid_size())
        self.report_perf()

    def load_program(self, program):
        program_size = len(program)

        if program_size > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(PROGRAM_START, program_size)

        self.ram.write_block(PROGRAM_START, program)
        self.program = bytes(program)
        logger.info("Loaded %d byte program at 0x%03x", program_size, PROGRAM_START)

    def reset(self):
        # Return to power-on state, and reload the last program
        self.ram.clear()
        self.ram.load_font()
        self.registers.reset()
        self.interpreter.reset()
        self.framebuffer.clear()
        self.keypad.reset()
        self.timer_clock.reset()
        self.cycle_accumulator = 0.0
        self._set_buzzer(False)

        if self.program:
            self.load_program(self.program)

    def step(self):
        try:
            return self.interpreter.step()
        except MachineError:
            self._report_fault()
            raise

    def _report_fault(self):
        dump = "" if self.debugger is None else "\n" + self.debugger.debug(
            self.registers, self.interpreter.opcode, "???", verbose=True
        )
        logger.error("Emulation halted at address 0x%03x%s", self.registers.pc, dump)

    def run_frame(self, elapsed):
        # Returns False once the host has asked to quit
        if self.inputs.process_messages():
            return False

        self.cycle_accumulator += elapsed * self.clock_speed
        cycles = int(self.cycle_accumulator)
        self.cycle_accumulator -= cycles

        for _ in range(cycles):
            self.perf_counter_ops += 1

            if self.step() == WAIT:
                # Waiting for a keypress, so give the host a chance to poll the keypad again
                self.cycle_accumulator = 0.0
                break

        self.timer_clock.advance(elapsed)
        self.refresh_display()
        self._set_buzzer(self.registers.st > 0)
        return True

    def refresh_display(self):
        framebuffer = self.framebuffer

        if framebuffer.dirty:
            self.renderer.refresh_display(framebuffer)
            framebuffer.dirty = False
            self.perf_counter_fps += 1

    def _set_buzzer(self, enabled):
        if enabled != self.buzzer_enabled:
            self.audio.enable_buzzer(enabled)
            self.buzzer_enabled = enabled

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))

    def run(self):
        last_time = perf_counter()

        while True:
            this_time = perf_counter()

            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_fps = 0
                self.perf_counter_ops = 0

            if not self.run_frame(this_time - last_time):
                logger.info("Quit requested by host")
                return

            last_time = this_time

            # Sleep off whatever is left of this frame
            remaining = this_time + DISPLAY_INTERVAL - perf_counter()

            if remaining > 0:
                sleep(remaining)
