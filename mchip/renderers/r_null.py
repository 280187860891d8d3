#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or to run the machine headless.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    title = ""

    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.frames_drawn = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def refresh_display(self, framebuffer):  # pylint: disable=unused-argument
        self.frames_drawn += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
