# Bit-exact software rendition of CordicEngine, used to verify the
# pipelined hardware.  Every register boundary of the HDL is a wrap()
# here, so overflow behaves identically.

from collections import deque, namedtuple

from cordicpipe.fixedpoint import wrap
from cordicpipe.pipe_data import GAIN_SHIFT

CordicState = namedtuple("CordicState", ["x", "y", "z"])
CordicOutput = namedtuple("CordicOutput", ["valid", "x", "y", "phase"])


def reduce_quadrant(pspec, x, y, z):
    ext = pspec.ext_width
    pw = pspec.phase_width
    half_pi = pspec.half_pi
    if pspec.rotation:
        if z > pspec.z_limit:
            return CordicState(wrap(-y, ext), x, wrap(z - half_pi, pw))
        if z < -pspec.z_limit:
            return CordicState(y, wrap(-x, ext), wrap(z + half_pi, pw))
        return CordicState(x, y, z)
    if x < 0 and y >= 0:
        return CordicState(y, wrap(-x, ext), half_pi)
    if x < 0:
        return CordicState(wrap(-y, ext), x, -half_pi)
    return CordicState(x, y, 0)


def micro_rotate(pspec, state, i):
    x, y, z = state
    ext = pspec.ext_width
    pw = pspec.phase_width
    dx = y >> i
    dy = x >> i
    dz = pspec.angles[i]
    if pspec.rotation:
        ccw = z >= 0
    else:
        ccw = y < 0
    if ccw:
        return CordicState(wrap(x - dx, ext), wrap(y + dy, ext),
                           wrap(z - dz, pw))
    return CordicState(wrap(x + dx, ext), wrap(y - dy, ext),
                       wrap(z + dz, pw))


def correct_gain(pspec, state):
    width = pspec.width
    x = wrap((state.x * pspec.gain) >> GAIN_SHIFT, width)
    y = wrap((state.y * pspec.gain) >> GAIN_SHIFT, width)
    return x, y, state.z


def run_cordic(pspec, x, y, phase=0, log=False):
    """ one computation, start to finish, without any pipelining.

    returns the (x, y, phase) the engine would emit for these inputs.
    """
    x = wrap(x, pspec.width)
    y = wrap(y, pspec.width)
    phase = wrap(phase, pspec.phase_width)
    state = reduce_quadrant(pspec, x, y, phase)
    if log:
        print("reduced x: {}, y: {}, z: {}".format(*state))
    for i in range(pspec.stages):
        if log:
            print("iteration {}".format(i))
            print("dx: {}, dy: {}, dz: {}".format(
                  state.y >> i, state.x >> i, pspec.angles[i]))
        state = micro_rotate(pspec, state, i)
        if log:
            print("x: {}, y: {}, z: {}".format(*state))
    return correct_gain(pspec, state)


class CordicModel:
    """ Software pipeline matching CordicEngine tick for tick.

    ``tick()`` applies one clock edge with the given inputs and returns
    the outputs observable after it.  All next-state values are computed
    from the old state before any of it is committed.
    """

    def __init__(self, pspec):
        self.pspec = pspec
        self.reset()

    def reset(self):
        stages = self.pspec.stages
        self.start = CordicState(0, 0, 0)
        self.slots = [CordicState(0, 0, 0)] * (stages + 1)
        self.result = (0, 0, 0)
        # index k holds the enable seen k+1 ticks ago
        self.occupancy = deque([False] * (stages + 3), maxlen=stages + 3)

    @property
    def output(self):
        x, y, phase = self.result
        return CordicOutput(self.occupancy[-1], x, y, phase)

    def tick(self, enable=False, x=0, y=0, phase=0, reset=False):
        if reset:
            self.reset()
            return self.output

        pspec = self.pspec
        stages = pspec.stages
        occ = self.occupancy

        slots = list(self.slots)
        if occ[0]:
            slots[0] = reduce_quadrant(pspec, *self.start)
        for i in range(stages):
            if occ[i+1]:
                slots[i+1] = micro_rotate(pspec, self.slots[i], i)
        if occ[stages+1]:
            self.result = correct_gain(pspec, self.slots[stages])
        if enable:
            self.start = CordicState(wrap(x, pspec.width),
                                     wrap(y, pspec.width),
                                     wrap(phase, pspec.phase_width))

        self.slots = slots
        occ.appendleft(bool(enable))
        return self.output
