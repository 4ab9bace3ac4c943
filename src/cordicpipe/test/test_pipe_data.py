import unittest
import math

from cordicpipe.atan_table import angle, atan_angles, TABLE_DEPTH
from cordicpipe.fixedpoint import wrap, to_fixed, from_fixed
from cordicpipe.pipe_data import (CordicPipeSpec, CordicMode, CORDIC_GAIN,
                                  compensation_gain, cordic_gain)


class FixedPointTestCase(unittest.TestCase):
    def test_wrap(self):
        self.assertEqual(wrap(127, 8), 127)
        self.assertEqual(wrap(128, 8), -128)
        self.assertEqual(wrap(-129, 8), 127)
        self.assertEqual(wrap(-1, 17), -1)
        self.assertEqual(wrap(1 << 16, 17), -(1 << 16))

    def test_conversion(self):
        self.assertEqual(to_fixed(math.pi/2, 16), 0x19220)
        self.assertEqual(to_fixed(-0.5, 16), -32768)
        self.assertEqual(from_fixed(-32768, 16), -0.5)


class AtanTableTestCase(unittest.TestCase):
    # atan(2**-i) in radians, as listed in the design notes
    listed = [0.78539, 0.46364, 0.24497, 0.12435, 0.06241, 0.031239,
              0.01562, 0.0078, 0.0039, 0.00195, 0.00097, 0.00048,
              0.00024, 0.00012, 0.00006, 0.00003]

    def test_values(self):
        table = atan_angles(16)
        self.assertEqual(len(table), TABLE_DEPTH)
        self.assertEqual(table[0], 51472)
        for value, expected in zip(table, self.listed):
            self.assertAlmostEqual(from_fixed(value, 16), expected,
                                   delta=5e-5)

    def test_decreasing(self):
        table = atan_angles(16)
        for a, b in zip(table, table[1:]):
            self.assertGreater(a, b)

    def test_beyond_table(self):
        self.assertEqual(angle(16), 0)
        self.assertEqual(angle(31, fracbits=10), 0)


class PipeSpecTestCase(unittest.TestCase):
    def test_defaults(self):
        pspec = CordicPipeSpec(CordicMode.ROTATION)
        self.assertEqual(pspec.stages, 16)
        self.assertEqual(pspec.width, 16)
        self.assertEqual(pspec.ext_width, 17)
        self.assertEqual(pspec.fracbits, 16)
        self.assertEqual(pspec.z_limit, 0x1B333)
        self.assertEqual(pspec.half_pi, 0x19220)
        self.assertEqual(pspec.latency, 19)
        self.assertEqual(pspec.gain, CORDIC_GAIN)
        self.assertTrue(pspec.rotation)

    def test_mode_by_name(self):
        pspec = CordicPipeSpec("Vectoring")
        self.assertIs(pspec.mode, CordicMode.VECTORING)
        self.assertFalse(pspec.rotation)

    def test_gain(self):
        self.assertAlmostEqual(cordic_gain(16), 1.6467602, places=6)
        self.assertEqual(compensation_gain(16), CORDIC_GAIN)
        # 4096/sqrt(2) and 4096/sqrt(2.5)
        self.assertEqual(compensation_gain(1), 2896)
        self.assertEqual(compensation_gain(2), 2591)
        pspec = CordicPipeSpec("rotation", stages=4, gain=CORDIC_GAIN)
        self.assertEqual(pspec.gain, CORDIC_GAIN)

    def test_bad_config(self):
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", stages=0)
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", stages=17)
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", phase_width=20)
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", phase_width=3)
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", coordinate_width=1)
        with self.assertRaises(ValueError):
            CordicPipeSpec("rotation", gain=0)
        with self.assertRaises(ValueError):
            CordicPipeSpec("hyperbolic")
        with self.assertRaises(ValueError):
            CordicPipeSpec(1)

    def test_non_integer_config(self):
        for kw in ({"gain": 2487.0}, {"gain": 2487.5}, {"stages": 4.0},
                   {"stages": "4"}, {"coordinate_width": 16.0},
                   {"phase_width": 19.0}, {"stages": True}):
            with self.assertRaises(ValueError, msg=str(kw)):
                CordicPipeSpec("rotation", **kw)
        # an explicit integer gain is still accepted as is
        self.assertEqual(CordicPipeSpec("rotation", gain=2487).gain, 2487)


if __name__ == "__main__":
    unittest.main()
