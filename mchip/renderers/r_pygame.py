#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the emulated resolution (64x32), and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Set pixels are drawn in the foreground colour, and unset pixels in the
background colour.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = (0x222222, 0xDDDDDD)  # Background, foreground


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.render_surface = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        colour_map = list(DEFAULT_PALETTE)

        # Override one or both colours with a user-defined palette, if necessary
        if pygame_palette is not None:
            pygame_palette_split = pygame_palette.split(",")

            if len(pygame_palette_split) > 2:
                raise RendererError("Too many palette colours defined.  Only background and foreground are used.")

            for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
                if len(pygame_colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[pygame_colour_num] = int(pygame_colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes([i >> 16, (i >> 8) & 0xFF, i & 0xFF]) for i in colour_map]

        super().__init__(scale)

    def set_resolution(self, width, height):
        self.rgb_buffer = memoryview(bytearray(width * height * 3))  # 24-bit
        super().set_resolution(width, height)

    def refresh_display(self, framebuffer):
        rgb_buffer = self.rgb_buffer
        rgb_map = self.rgb_map

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        for location, pixel in enumerate(framebuffer.pixels):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[pixel]

        # Blit the bytearray straight to the surface, rather than setting pixels one at a time
        render_surface = pygame.image.frombuffer(rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().refresh_display(framebuffer)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
