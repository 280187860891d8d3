#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries for later writing into RAM.  Programs have no
header, so the whole file is the program.  Size checks happen when the program
is written into the machine.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()
