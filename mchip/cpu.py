#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

The interpreter fetches one big-endian instruction word at the program
counter, decodes it by its first nibble (and, for some families, its last
nibble or last byte), and executes it.

Instructions never move the program counter by hand.  Each one returns an
outcome, and step() applies it in one place:
    * NEXT - fall through to the following instruction (PC + 2)
    * SKIP - skip the following instruction (PC + 4)
    * JUMP - the instruction has already set PC (jump, call)
    * WAIT - leave PC alone so the same instruction runs again next step

All machine state lives in the RAM, RegisterFile, Framebuffer and Keypad
objects passed in.  The only thing owned here is the random number generator,
seeded once when the interpreter is built.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import FONT_LOC, GLYPH_SIZE
from .errors import UnknownOpcode

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

# Control flow outcomes
NEXT = 0
SKIP = 1
JUMP = 2
WAIT = 3

# Families needing a second lookup, and the bits which pick the instruction within them
FAMILY_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}


class Interpreter:
    def __init__(self, ram, registers, framebuffer, keypad, debugger=None, seed=None):
        self.ram = ram
        self.registers = registers
        self.v = registers.v  # Shared view, so register updates are visible both ways
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.debugger = debugger
        self.live_debug = debugger is not None and debugger.is_live()
        self.random = Random(seed)
        self.opcode = 0
        self.waiting_for_key = False

        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.families = {
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x6: self._6xkk,
            0x7: self._7xkk,
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn
        }

        self.instructions = {
            # Family 0x0, bitmask 0xFFFF
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Families 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Families 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

    def reset(self):
        self.opcode = 0
        self.waiting_for_key = False

    def step(self):
        registers = self.registers
        self.opcode = self.fetch()
        outcome = self.decode(self.opcode)()

        if outcome == NEXT:
            registers.advance()
        elif outcome == SKIP:
            registers.skip()

        return outcome

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.registers.pc, 2), CPU_ENDIAN, signed=False)

    def decode(self, opcode):
        family = opcode >> 12
        mask = FAMILY_MASKS.get(family)

        if mask is None:
            instruction = self.families.get(family)
        else:
            instruction = self.instructions.get(opcode & mask)

        if instruction is None:
            raise UnknownOpcode(opcode, self.registers.pc)

        return instruction

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions.  Don't
    # reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def debug(self, instruction):
        self.debugger.output(self.registers, self.opcode, instruction)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()
        return NEXT

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        # The call pushed its own address, so carry on from the instruction after it
        self.registers.jump(self.registers.pop())
        return NEXT

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.registers.jump(self.addr)
        return JUMP

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        self.registers.push(self.registers.pc)
        self.registers.jump(self.addr)
        return JUMP

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        return SKIP if self.v[self.vx] == self.byte else NEXT

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        return SKIP if self.v[self.vx] != self.byte else NEXT

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        return SKIP if self.v[self.vx] == self.v[self.vy] else NEXT

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte
        return NEXT

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        # No carry flag for this one
        self.v[vx] = (self.v[vx] + byte) & 0xFF
        return NEXT

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]
        return NEXT

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]
        return NEXT

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]
        return NEXT

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]
        return NEXT

    # For the flag-setting instructions below, Vf is always written after Vx, so if Vx is Vf, the flag wins

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.registers.set_flag(val > 0xFF)  # Vf is set when carrying
        return NEXT

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        self.registers.set_flag(val >= 0)  # Vf is set when NOT borrowing
        return NEXT

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        return self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        if self.live_debug:
            self.debug("SHR V{:01x}".format(self.vx))

        val = self.v[self.vx]
        self.v[self.vx] = val >> 1
        self.registers.set_flag(val & 1)  # The whole byte gets set just for the flag
        return NEXT

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        return self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        if self.live_debug:
            self.debug("SHL V{:01x}".format(self.vx))

        val = self.v[self.vx]
        self.v[self.vx] = (val << 1) & 0xFF
        self.registers.set_flag(val >> 7)
        return NEXT

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        return SKIP if self.v[self.vx] != self.v[self.vy] else NEXT

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.registers.i = self.addr
        return NEXT

    def _Bnnn(self):  # JP V0, addr
        if self.live_debug:
            self.debug("JP V0, 0x{:03x}".format(self.addr))

        # Not masked.  Jumping past the end of memory is caught by the next fetch.
        self.registers.jump(self.addr + self.v[0x0])
        return JUMP

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = self.random.randint(0, 0xFF) & self.byte
        return NEXT

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        sprite_rows = self.ram.read_block(self.registers.i, height)
        collided = self.framebuffer.draw_sprite(self.v[self.vx], self.v[self.vy], sprite_rows)
        self.registers.set_flag(collided)  # A flag, not a count of collided rows
        return NEXT

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        return SKIP if self.keypad.is_pressed(self.v[self.vx] & 0xF) else NEXT

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        return SKIP if not self.keypad.is_pressed(self.v[self.vx] & 0xF) else NEXT

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.registers.dt
        return NEXT

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # This waits for a keypress, but the timers still need to expire and the display still needs updating, so
        # return control to the host and run this instruction again on the next step.
        # Keys already held when the wait starts are latched, so only a fresh press ends it.
        if not self.waiting_for_key:
            self.keypad.latch()
            self.waiting_for_key = True

        key = self.keypad.first_pressed()

        if key is None:
            return WAIT

        self.waiting_for_key = False
        self.v[self.vx] = key
        return NEXT

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.registers.dt = self.v[self.vx]
        return NEXT

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        self.registers.st = self.v[self.vx]
        return NEXT

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        self.registers.i = (self.registers.i + self.v[self.vx]) & 0xFFFF
        return NEXT

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        self.registers.i = FONT_LOC + GLYPH_SIZE * self.v[self.vx]
        return NEXT

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        # All three digits go in one block write, so an out of range I leaves memory untouched
        self.ram.write_block(self.registers.i, bytes((val // 100, (val // 10) % 10, val % 10)))
        return NEXT

    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        # Ensure with +1 that the final register is copied.  I itself is left unchanged.
        self.ram.write_block(self.registers.i, self.v[:self.vx + 1])
        return NEXT

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.registers.i, vx + 1)
        return NEXT
