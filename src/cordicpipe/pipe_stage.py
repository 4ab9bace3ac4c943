from amaranth import Module, Elaboratable, Signal

from cordicpipe.atan_table import angle
from cordicpipe.pipe_data import CordicData


class CordicStage(Elaboratable):
    """ micro-rotation number ``stagenum``: shift-add update of (x, y, z)
    """

    def __init__(self, pspec, stagenum):
        self.pspec = pspec
        self.stagenum = stagenum
        self.i = CordicData(pspec, name="stage%d_i" % stagenum)
        self.o = CordicData(pspec, name="stage%d_o" % stagenum)

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb

        dx = Signal(self.i.x.shape())
        dy = Signal(self.i.y.shape())
        dz = Signal(self.i.z.shape())
        ccw = Signal()

        comb += dx.eq(self.i.y >> self.stagenum)
        comb += dy.eq(self.i.x >> self.stagenum)
        comb += dz.eq(angle(self.stagenum, self.pspec.fracbits))

        # rotation drives z to zero, vectoring drives y to zero
        if self.pspec.rotation:
            comb += ccw.eq(~self.i.z[-1])
        else:
            comb += ccw.eq(self.i.y[-1])

        with m.If(ccw):
            comb += self.o.x.eq(self.i.x - dx)
            comb += self.o.y.eq(self.i.y + dy)
            comb += self.o.z.eq(self.i.z - dz)
        with m.Else():
            comb += self.o.x.eq(self.i.x + dx)
            comb += self.o.y.eq(self.i.y - dy)
            comb += self.o.z.eq(self.i.z + dz)

        return m
