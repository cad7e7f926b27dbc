"""Affine remap between raw channel values and the working color space.

The working space is NOT device independent Lab: it is a fixed remap of
whatever three channels are given. All bandwidths and tolerances are
measured in this space.
"""

import numpy as np
from numba import jit

AB_OFFSET = 128.0


@jit(nopython=True)
def to_working(l, a, b):
    return l * 100.0 / 255.0, a - 128.0, b - 128.0


@jit(nopython=True)
def to_raw(l, a, b):
    return l * 255.0 / 100.0, a + 128.0, b + 128.0


def raw2working(image):
    """Converts an array of shape (..., 3) from raw values to the working space.

        Parameters
        ----------
        image : numpy.ndarray
            Raw channel values, last dimension of length 3

        Returns
        -------
        out: numpy.ndarray
            float64 array of the same shape

    """

    out = np.array(image, dtype=np.float64)
    out[..., 0] *= 100.0
    out[..., 0] /= 255.0
    out[..., 1:] -= AB_OFFSET
    return out


def working2raw(image):
    """Inverse of raw2working, returns float64 values (not clipped or rounded)."""

    out = np.array(image, dtype=np.float64)
    out[..., 0] *= 255.0
    out[..., 0] /= 100.0
    out[..., 1:] += AB_OFFSET
    return out
