#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "MonoChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout.  The first 512 bytes were originally reserved for the interpreter itself, so only the font lives there
MEM_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEM_SIZE - PROGRAM_START
FONT_LOC = 0x000
GLYPH_SIZE = 5

# Register file
NUM_REGISTERS = 0x10
FLAG_REGISTER = 0xF
STACK_DEPTH = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32
SPRITE_WIDTH = 8

# Inputs
NUM_KEYS = 0x10

# Timing
TIMER_FREQ = 60.0    # 60Hz delay and sound timers
DISPLAY_FREQ = 60.0  # 60Hz host display refresh
DEFAULT_CLOCK_SPEED = 700

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code.  The layout is the usual 4x4 block on the left of the keyboard:
#
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Hexadecimal digit sprites 0-F, loaded at FONT_LOC on startup
FONT_GLYPHS = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
