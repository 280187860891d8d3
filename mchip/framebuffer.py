#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) once per displayed frame.  The renderer reads the whole
buffer when asked to refresh, so the emulated machine never draws into a
window directly.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method: every set bit in a sprite
row flips the pixel underneath it.  If a pixel that was already set is flipped
off, a collision is reported.

Each pixel is stored as a single 0 or 1 byte, row-major, at x + y * 64.
Sprites crossing the right or bottom edge wrap around to the left or top.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT, SPRITE_WIDTH


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.pixels = memoryview(bytearray(self.vid_size))
        self.dirty = True  # Force the first frame to be drawn

    def clear(self):
        self.pixels[:] = bytes(self.vid_size)
        self.dirty = True

    def get_pixel(self, x, y):
        return self.pixels[(x % self.vid_width) + (y % self.vid_height) * self.vid_width]

    def xor_pixel(self, x, y):
        # Returns True if a set pixel was switched off
        vram_loc = (x % self.vid_width) + (y % self.vid_height) * self.vid_width
        pixel = self.pixels[vram_loc]
        self.pixels[vram_loc] = pixel ^ 1
        return pixel == 1

    def draw_sprite(self, x, y, sprite_rows):
        collided = False

        for row_num, spr_data in enumerate(sprite_rows):
            scr_y = y + row_num

            for bit in range(SPRITE_WIDTH):
                if spr_data & (0x80 >> bit):
                    # Don't stop drawing on a collision.  Just remember it happened.
                    if self.xor_pixel(x + bit, scr_y):
                        collided = True

        self.dirty = True
        return collided

    def rows(self):
        # Row slices for renderers, top to bottom
        vid_width = self.vid_width

        for y in range(self.vid_height):
            yield self.pixels[y * vid_width:(y + 1) * vid_width]

    def get_vid_size(self):
        return self.vid_width, self.vid_height
