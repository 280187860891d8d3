#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a looping square wave tone within PyGame / SDL while the buzzer is
enabled.  The pitch of the tone was never defined by the original machine, so
any audible frequency will do.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self, frequency=TONE_FREQUENCY):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One period of an unsigned 8-bit square wave, which is looped during playback
        period = max(2, int(PLAYBACK_FREQUENCY / frequency))
        half_period = period // 2
        buffer = bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period))

        self.sound = pygame.mixer.Sound(buffer=buffer)
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # If there is already a tone being played, it won't be restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        elif self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def is_null(self):
        return False

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
