#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from mchip import main
from mchip.constants import DEFAULT_KEYMAP, DEFAULT_CLOCK_SPEED


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in operations/second (default {})".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--seed", type=int,
        help="seed the random number generator, for repeatable runs"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 000000,FFFFFF"
    )
    parser.add_argument(
        "--log_level", choices=["debug", "info", "warning", "error"], default="warning",
        help="set how much is logged to the Terminal (default warning)"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live trace output of every instruction executed.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli():
    main(vars(parse_args()))


if __name__ == "__main__":
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    cli()
