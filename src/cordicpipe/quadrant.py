from amaranth import Module, Elaboratable

from cordicpipe.pipe_data import CordicInputData, CordicData


class QuadrantReducer(Elaboratable):
    """ One-shot +/-90 degree pre-rotation ahead of stage 0.

    Rotation mode: a target phase beyond +/-z_limit is folded back by
    half_pi, rotating the starting vector the opposite way to match.
    Vectoring mode: a vector in the left half-plane is rotated into the
    right one and the phase accumulator starts at +/-half_pi.
    """

    def __init__(self, pspec):
        self.pspec = pspec
        self.i = CordicInputData(pspec, name="qr_i")
        self.o = CordicData(pspec, name="qr_o")

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb

        x, y, z = self.i.x, self.i.y, self.i.phase
        half_pi = self.pspec.half_pi

        if self.pspec.rotation:
            z_limit = self.pspec.z_limit
            with m.If(z > z_limit):
                comb += self.o.x.eq(-y)
                comb += self.o.y.eq(x)
                comb += self.o.z.eq(z - half_pi)
            with m.Elif(z < -z_limit):
                comb += self.o.x.eq(y)
                comb += self.o.y.eq(-x)
                comb += self.o.z.eq(z + half_pi)
            with m.Else():
                comb += self.o.x.eq(x)
                comb += self.o.y.eq(y)
                comb += self.o.z.eq(z)
        else:
            with m.If(x[-1] & ~y[-1]):
                comb += self.o.x.eq(y)
                comb += self.o.y.eq(-x)
                comb += self.o.z.eq(half_pi)
            with m.Elif(x[-1]):
                comb += self.o.x.eq(-y)
                comb += self.o.y.eq(x)
                comb += self.o.z.eq(-half_pi)
            with m.Else():
                comb += self.o.x.eq(x)
                comb += self.o.y.eq(y)
                comb += self.o.z.eq(0)

        return m
