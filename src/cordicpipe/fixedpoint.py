# Signed two's-complement fixed-point helpers shared by the HDL and the
# software model.  Nothing here saturates: values that do not fit simply
# wrap, exactly as a register assignment in hardware would.

# phase values are 3 integer bits (sign included) + (phase_width-3)
# fractional bits, in radians
PHASE_INT_BITS = 3


def wrap(value, width):
    """ truncate ``value`` to a signed ``width``-bit two's-complement int
    """
    half = 1 << (width - 1)
    return ((value + half) & ((1 << width) - 1)) - half


def to_fixed(real, fracbits):
    return int(round(real * (1 << fracbits)))


def from_fixed(value, fracbits):
    return value / (1 << fracbits)


def phase_fracbits(phase_width):
    return phase_width - PHASE_INT_BITS
