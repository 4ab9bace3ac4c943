from amaranth import Module, Elaboratable, Signal, signed

from cordicpipe.pipe_data import CordicData, CordicOutputData, GAIN_SHIFT


class GainCorrector(Elaboratable):
    """ Scale the final coordinates by the gain-compensation constant.

    The double-width product is truncated to the output window
    [GAIN_SHIFT, GAIN_SHIFT+width) with no rounding (bits 27:12 for a
    16-bit engine).  The phase passes through untouched.
    """

    def __init__(self, pspec):
        self.pspec = pspec
        self.i = CordicData(pspec, name="gc_i")
        self.o = CordicOutputData(pspec, name="gc_o")

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb

        gain = self.pspec.gain
        pwidth = self.pspec.ext_width + gain.bit_length() + 1
        px = Signal(signed(pwidth))
        py = Signal(signed(pwidth))

        comb += px.eq(self.i.x * gain)
        comb += py.eq(self.i.y * gain)

        comb += self.o.x.eq(px >> GAIN_SHIFT)
        comb += self.o.y.eq(py >> GAIN_SHIFT)
        comb += self.o.phase.eq(self.i.z)

        return m
