#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from monochip import parse_args
from mchip import select_plugins
from mchip.constants import DEFAULT_KEYMAP, DEFAULT_CLOCK_SPEED
from mchip.inputs.i_null import Inputs, InputsError
from mchip.keypad import Keypad
from mchip.renderers.r_null import Renderer


class TestStartup(unittest.TestCase):
    def test_startup_default_args(self):
        args = vars(parse_args(["game.ch8"]))
        self.assertEqual("game.ch8", args["filename"])
        self.assertEqual(DEFAULT_CLOCK_SPEED, args["clock_speed"])
        self.assertEqual(DEFAULT_KEYMAP, args["keymap"])
        self.assertIsNone(args["renderer"])
        self.assertIsNone(args["seed"])
        self.assertFalse(args["debug"])

    def test_startup_options(self):
        args = vars(parse_args(["-r", "null", "-c", "1000", "--seed", "7", "-d", "game.ch8"]))
        self.assertEqual("null", args["renderer"])
        self.assertEqual(1000, args["clock_speed"])
        self.assertEqual(7, args["seed"])
        self.assertTrue(args["debug"])

    def test_startup_null_plugins(self):
        renderer_class, inputs_class, audio_class = select_plugins("null", None)
        self.assertIs(Renderer, renderer_class)
        self.assertIs(Inputs, inputs_class)
        self.assertTrue(audio_class().is_null())


class TestInputs(unittest.TestCase):
    def test_inputs_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, Renderer(), Keypad())
        self.assertEqual(0x0, inputs.keymap_dict[120])  # 'x'
        self.assertEqual(0xF, inputs.keymap_dict[118])  # 'v'
        self.assertFalse(inputs.process_messages())

    def test_inputs_bad_keymaps(self):
        for keymap in "1,2,3", "a," * 15 + "b", "1," * 15 + "1":
            self.assertRaises(InputsError, Inputs, keymap, Renderer(), Keypad())

    def test_inputs_lowercase(self):
        keymap = ",".join(str(ord(char)) for char in "X123QWEASDZC4RFV")
        inputs = Inputs(keymap, Renderer(), Keypad(), force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])
