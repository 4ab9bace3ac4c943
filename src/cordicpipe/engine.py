# Fully pipelined CORDIC: one result per clock once the pipeline is full.
#
# tick 0      enable high: raw inputs registered, occupancy bit 0 set
# tick 1      quadrant reduction registered into slot 0
# tick i+2    micro-rotation i registered into slot i+1
# tick S+2    gain-corrected result registered, valid = occupancy[S+2]
#
# so a result is observable exactly S+3 ticks after its enable pulse.

from amaranth import (Module, Elaboratable, Signal, ClockDomain, Cat,
                      signed)
from amaranth.back import rtlil
import argparse

from cordicpipe.pipe_data import (CordicPipeSpec, CordicInputData,
                                  CordicData, CordicOutputData)
from cordicpipe.quadrant import QuadrantReducer
from cordicpipe.pipe_stage import CordicStage
from cordicpipe.gain import GainCorrector


class CordicEngine(Elaboratable):
    def __init__(self, pspec):
        self.pspec = pspec
        width = pspec.width
        pwidth = pspec.phase_width

        self.enable = Signal()
        self.x_in = Signal(signed(width))
        self.y_in = Signal(signed(width))
        # ignored in vectoring mode
        self.phase_in = Signal(signed(pwidth))

        self.valid = Signal()
        self.x_out = Signal(signed(width))
        self.y_out = Signal(signed(width))
        self.phase_out = Signal(signed(pwidth))

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb
        sync = m.d.sync

        pspec = self.pspec
        stages = pspec.stages
        # one bit per in-flight enable pulse, bit k set k+1 ticks after it
        occ = Signal(stages + 3)

        m.submodules.reducer = reducer = QuadrantReducer(pspec)
        cordicstages = []
        for i in range(stages):
            stage = CordicStage(pspec, i)
            setattr(m.submodules, "stage%d" % i, stage)
            cordicstages.append(stage)
        m.submodules.gain = gain = GainCorrector(pspec)

        start = CordicInputData(pspec, name="start")
        slots = [CordicData(pspec, name="slot%d" % i)
                 for i in range(stages + 1)]
        result = CordicOutputData(pspec, name="result")

        sync += occ.eq(Cat(self.enable, occ[:-1]))

        with m.If(self.enable):
            sync += start.x.eq(self.x_in)
            sync += start.y.eq(self.y_in)
            sync += start.phase.eq(self.phase_in)

        comb += reducer.i.eq(start)
        with m.If(occ[0]):
            sync += slots[0].eq(reducer.o)

        for i, stage in enumerate(cordicstages):
            comb += stage.i.eq(slots[i])
            with m.If(occ[i+1]):
                sync += slots[i+1].eq(stage.o)

        comb += gain.i.eq(slots[stages])
        with m.If(occ[stages+1]):
            sync += result.eq(gain.o)

        comb += [
            self.valid.eq(occ[stages+2]),
            self.x_out.eq(result.x),
            self.y_out.eq(result.y),
            self.phase_out.eq(result.phase),
        ]

        return m

    def ports(self):
        return [self.enable, self.x_in, self.y_in, self.phase_in,
                self.valid, self.x_out, self.y_out, self.phase_out]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="emit RTLIL for a pipelined CORDIC engine")
    parser.add_argument("--mode", default="rotation",
                        choices=["rotation", "vectoring"])
    parser.add_argument("--stages", type=int, default=16)
    parser.add_argument("--coordinate-width", type=int, default=16)
    parser.add_argument("--phase-width", type=int, default=19)
    parser.add_argument("-o", "--output", default="cordic.il")
    args = parser.parse_args(argv)

    pspec = CordicPipeSpec(args.mode, stages=args.stages,
                           coordinate_width=args.coordinate_width,
                           phase_width=args.phase_width)
    dut = CordicEngine(pspec)

    m = Module()
    m.domains.sync = cd_sync = ClockDomain("sync", async_reset=True)
    m.submodules.cordic = dut
    vl = rtlil.convert(m, ports=[cd_sync.clk, cd_sync.rst] + dut.ports())
    with open(args.output, "w") as f:
        f.write(vl)


if __name__ == '__main__':
    main()
