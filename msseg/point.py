"""5-D sample points (x, y, l, a, b) used by filtering and segmentation.

x is the row and y the column; both stay real-valued while averaging.
The kernels work on plain float64 arrays of length 5 through the jitted
helpers below, SamplePoint wraps the same helpers as a value type.
"""

import numpy as np
from numba import jit

X, Y, L, A, B = range(5)


@jit(nopython=True)
def set_point(p, x, y, l, a, b):
    p[0] = x
    p[1] = y
    p[2] = l
    p[3] = a
    p[4] = b


@jit(nopython=True)
def accumulate(p, q):
    for k in range(5):
        p[k] += q[k]


@jit(nopython=True)
def scale(p, factor):
    for k in range(5):
        p[k] *= factor


@jit(nopython=True)
def color_distance(p, q):
    dl = p[2] - q[2]
    da = p[3] - q[3]
    db = p[4] - q[4]
    return np.sqrt(dl * dl + da * da + db * db)


@jit(nopython=True)
def spatial_distance(p, q):
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return np.sqrt(dx * dx + dy * dy)


class SamplePoint(object):
    """Python-side view of the 5-element arrays the kernels work on.

    Methods delegate to the same jitted helpers, so a SamplePoint behaves
    exactly like a kernel sample; values are owned, copy() never aliases.
    """

    def __init__(self, x=-1.0, y=-1.0, l=0.0, a=0.0, b=0.0):
        """ Generate a sample point, by default in the unset state (-1, -1, 0, 0, 0).

        :param x: row coordinate
        :param y: column coordinate
        :param l: first color component
        :param a: second color component
        :param b: third color component
        """
        self.values = np.array([x, y, l, a, b], dtype=np.float64)

    @classmethod
    def from_pixel(cls, working, x, y):
        l, a, b = working[x, y, :3]
        return cls(x, y, l, a, b)

    @property
    def x(self):
        return self.values[X]

    @property
    def y(self):
        return self.values[Y]

    @property
    def color(self):
        return tuple(float(v) for v in self.values[L:])

    @property
    def grid_position(self):
        """Position rounded to integer grid indices."""
        return int(round(self.values[X])), int(round(self.values[Y]))

    def set(self, x, y, l, a, b):
        set_point(self.values, x, y, l, a, b)

    def is_unset(self):
        return self.values[X] == -1.0 and self.values[Y] == -1.0

    def accumulate(self, other):
        accumulate(self.values, other.values)

    def scale(self, factor):
        scale(self.values, float(factor))

    def copy(self):
        return SamplePoint(*self.values)

    def color_distance(self, other):
        return float(color_distance(self.values, other.values))

    def spatial_distance(self, other):
        return float(spatial_distance(self.values, other.values))

    def __eq__(self, other):
        if not isinstance(other, SamplePoint):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __repr__(self):
        return 'SamplePoint({}, {}, {}, {}, {})'.format(*self.values)
