#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT
from .debugger import Debugger
from .hostio import Loader
from .keypad import Keypad
from .machine import Machine

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def select_plugins(opt_renderer, mute_audio):
    # If necessary, try PyGame first, then Curses.  Returns the Renderer, Inputs and Audio classes.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError("PyGame does not appear to be installed.")
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Renderer, Inputs, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")

            raise StartupError("Curses (or Windows-Curses) does not appear to be installed.")

        from .inputs.i_curses import Inputs
        from .renderers.r_curses import Renderer

        # Terminals can handle fixed-length beeps, but they get irritating, so stay quiet unless asked
        if mute_audio or mute_audio is None:
            from .audio.a_null import Audio
        else:
            from .audio.a_curses import Audio

        return Renderer, Inputs, Audio

    # pylint: disable=import-outside-toplevel
    from .inputs.i_null import Inputs
    from .renderers.r_null import Renderer
    from .audio.a_null import Audio

    return Renderer, Inputs, Audio


def main(args):
    logging.basicConfig(
        level=getattr(logging, (args["log_level"] or "warning").upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logger.info("".join((APP_INTRO, APP_COPYRIGHT)))

    # Read ROM binary before touching the display, so a bad filename doesn't leave the terminal in a mess
    program = Loader().load_binary(args["filename"])
    Renderer, Inputs, Audio = select_plugins(args["renderer"], args["mute"])

    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"]
    )
    audio = None
    inputs = None

    try:
        # Host inputs are linked to the chosen rendering module in case it provides inputs too
        keypad = Keypad()
        inputs = Inputs(args["keymap"], renderer, keypad)
        audio = Audio()

        debugger = Debugger()
        debugger.set_live(args["debug"])

        machine = Machine(
            renderer, inputs, audio, keypad=keypad, debugger=debugger, clock_speed=args["clock_speed"],
            seed=args["seed"]
        )
        machine.load_program(program)
        machine.run()
    finally:
        # The machine has stopped, so shut down the host plugins.  __del__ cannot be relied upon when using PyPy
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()
