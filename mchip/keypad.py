#!/usr/bin/env python3

"""
Keypad State

The hexadecimal keypad has 16 keys, 0x0 to 0xF.  Only the host input plugins
press and release keys; the interpreter just reads the current state.

Waiting for a keypress needs a fresh press, not a key that happens to still be
held.  latch() marks every key held at that moment, and a latched key only
counts again once it has been released and pressed.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS
from .errors import InvalidKey


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.key_latched = [False] * NUM_KEYS

    def reset(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False
            self.key_latched[key] = False

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise InvalidKey(key)

    def press(self, key):
        self._check_key(key)
        self.key_down[key] = True

    def release(self, key):
        self._check_key(key)
        self.key_down[key] = False
        self.key_latched[key] = False

    def is_pressed(self, key):
        self._check_key(key)
        return self.key_down[key]

    def latch(self):
        self.key_latched[:] = self.key_down

    def first_pressed(self):
        # Lowest numbered key pressed since the last latch(), or None
        for key in range(NUM_KEYS):
            if self.key_down[key] and not self.key_latched[key]:
                return key

        return None
