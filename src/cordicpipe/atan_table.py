import math

# number of explicit entries; iteration indices beyond this contribute
# nothing (atan(2**-16) is below the phase resolution)
TABLE_DEPTH = 16


def angle(i, fracbits=16):
    """ fixed-point radians of atan(2**-i), zero for i >= TABLE_DEPTH
    """
    if i >= TABLE_DEPTH:
        return 0
    M = 1 << fracbits
    return int(round(M * math.atan(2**(-i))))


def atan_angles(fracbits=16, count=TABLE_DEPTH):
    return tuple([angle(i, fracbits) for i in range(count)])
