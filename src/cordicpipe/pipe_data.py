from amaranth import Signal, signed
from enum import Enum, unique
import math

from cordicpipe.atan_table import TABLE_DEPTH, atan_angles
from cordicpipe.fixedpoint import phase_fracbits, to_fixed

# fractional bits of the gain-compensation multiplier
GAIN_SHIFT = 12
# the multiplier as historically hard-coded for a 16-stage engine
CORDIC_GAIN = 2487

MIN_PHASE_WIDTH = 4
MAX_PHASE_WIDTH = 19
MAX_STAGES = TABLE_DEPTH

# rotation-mode quadrant reduction threshold (radians), 0x1B333 in (3,16)
Z_LIMIT = 1.7


@unique
class CordicMode(Enum):
    ROTATION = 0
    VECTORING = 1


def cordic_gain(stages):
    """ magnitude growth of ``stages`` micro-rotations (about 1.6468)
    """
    An = 1.0
    for i in range(stages):
        An *= math.sqrt(1 + 2**(-2*i))
    return An


def compensation_gain(stages):
    return int(round((1 << GAIN_SHIFT) / cordic_gain(stages)))


class CordicPipeSpec:
    """ Construction-time parameters of a CORDIC engine.

    :attribute mode: CordicMode.ROTATION or CordicMode.VECTORING
    :attribute stages: number of micro-rotations, 1 to 16
    :attribute width: bit width of the x/y ports
    :attribute phase_width: bit width of the phase ports, format (3, pw-3)
    :attribute gain: gain-compensation multiplier, GAIN_SHIFT fractional
                     bits.  computed from ``stages`` unless given.

    None of these can change once an engine has been built.
    """

    def __init__(self, mode, stages=16, coordinate_width=16,
                 phase_width=19, gain=None):
        if isinstance(mode, str):
            try:
                mode = CordicMode[mode.upper()]
            except KeyError:
                raise ValueError("unknown CORDIC mode %r" % mode)
        if not isinstance(mode, CordicMode):
            raise ValueError("unknown CORDIC mode %r" % (mode,))
        for name, value in (('stages', stages),
                            ('coordinate_width', coordinate_width),
                            ('phase_width', phase_width),
                            ('gain', gain)):
            # bool is an int subclass but never a width
            if value is not None and (not isinstance(value, int)
                                      or isinstance(value, bool)):
                raise ValueError("%s must be an integer, not %r"
                                 % (name, value))
        if not 1 <= stages <= MAX_STAGES:
            raise ValueError("stages must be between 1 and %d, not %d"
                             % (MAX_STAGES, stages))
        if not MIN_PHASE_WIDTH <= phase_width <= MAX_PHASE_WIDTH:
            raise ValueError("phase_width must be between %d and %d, not %d"
                             % (MIN_PHASE_WIDTH, MAX_PHASE_WIDTH,
                                phase_width))
        if coordinate_width < 2:
            raise ValueError("coordinate_width too small")
        if gain is None:
            gain = compensation_gain(stages)
        if gain <= 0:
            raise ValueError("gain must be a positive integer")

        self.mode = mode
        self.stages = stages
        self.width = coordinate_width
        # internal coordinates carry one guard bit
        self.ext_width = coordinate_width + 1
        self.phase_width = phase_width
        self.fracbits = phase_fracbits(phase_width)
        self.gain = gain

        self.half_pi = to_fixed(math.pi/2, self.fracbits)
        self.z_limit = to_fixed(Z_LIMIT, self.fracbits)
        self.angles = atan_angles(self.fracbits, stages)

        # input register, STAGES+1 slots, output register
        self.latency = stages + 3

    @property
    def rotation(self):
        return self.mode is CordicMode.ROTATION


class CordicInputData:

    def __init__(self, pspec, name="i"):
        self.x = Signal(signed(pspec.width), name=name+"_x")
        self.y = Signal(signed(pspec.width), name=name+"_y")
        self.phase = Signal(signed(pspec.phase_width), name=name+"_phase")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.phase

    def eq(self, i):
        return [self.x.eq(i.x), self.y.eq(i.y), self.phase.eq(i.phase)]


class CordicData:
    """ running (x, y, z) of one in-flight computation """

    def __init__(self, pspec, name="s"):
        self.x = Signal(signed(pspec.ext_width), name=name+"_x")
        self.y = Signal(signed(pspec.ext_width), name=name+"_y")
        self.z = Signal(signed(pspec.phase_width), name=name+"_z")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def eq(self, i):
        return [self.x.eq(i.x), self.y.eq(i.y), self.z.eq(i.z)]


class CordicOutputData:

    def __init__(self, pspec, name="o"):
        self.x = Signal(signed(pspec.width), name=name+"_x")
        self.y = Signal(signed(pspec.width), name=name+"_y")
        self.phase = Signal(signed(pspec.phase_width), name=name+"_phase")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.phase

    def eq(self, i):
        return [self.x.eq(i.x), self.y.eq(i.y), self.phase.eq(i.phase)]
