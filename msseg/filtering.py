"""Edge preserving mean-shift filtering.

Every pixel is shifted independently towards the mean of the window members
whose color is within the color bandwidth. Only the color of the converged
sample is written back, its position is dropped.
"""

import numpy as np
from numba import jit, prange

from msseg.color import raw2working, to_raw
from msseg.errors import check_bandwidth, check_image
from msseg.point import accumulate, color_distance, scale, set_point, spatial_distance

MAX_CONVERGENCE_STEPS = 5
TOL_COLOR = 0.3
TOL_SPATIAL = 0.3


def window_radius(h_s):
    # box half-width truncated to grid units, at least 1 so a pixel always sees itself
    return max(1, int(h_s))


@jit(nopython=True)
def shift_pixel(working, i, j, radius, h_r):
    """Runs the mean-shift iteration for pixel (i, j).

        Parameters
        ----------
        working : numpy.ndarray
            Image in working color space [ROWS x COLS x 3]
        i, j : int
            Row and column of the pixel
        radius : int
            Box half-width of the search window
        h_r : float
            Color bandwidth, window members closer than h_r are averaged

        Returns
        -------
        out: (numpy.ndarray, int)
            Converged sample (x, y, l, a, b) and the number of steps taken

        Notes
        -----
        The window [i-radius, i+radius) x [j-radius, j+radius) is fixed by the
        start pixel and clipped to the grid; the position of the sample only
        takes part in the convergence test.

    """

    rows, cols, _ = working.shape
    top = max(0, i - radius)
    bottom = min(rows, i + radius)
    left = max(0, j - radius)
    right = min(cols, j + radius)

    cur = np.zeros(5, dtype=np.float64)
    prev = np.zeros(5, dtype=np.float64)
    acc = np.zeros(5, dtype=np.float64)
    pt = np.zeros(5, dtype=np.float64)
    set_point(cur, i, j, working[i, j, 0], working[i, j, 1], working[i, j, 2])

    step = 0
    while True:
        prev[:] = cur
        acc[:] = 0.0
        num_points = 0

        for hx in range(top, bottom):
            for hy in range(left, right):
                set_point(pt, hx, hy, working[hx, hy, 0], working[hx, hy, 1], working[hx, hy, 2])
                if color_distance(pt, cur) < h_r:
                    accumulate(acc, pt)
                    num_points += 1

        # num_points >= 1, the start pixel has color distance 0 to itself
        scale(acc, 1.0 / num_points)
        cur[:] = acc
        step += 1

        # converged once either shift is within its tolerance
        if step >= MAX_CONVERGENCE_STEPS or color_distance(cur, prev) <= TOL_COLOR \
                or spatial_distance(cur, prev) <= TOL_SPATIAL:
            break

    return cur, step


@jit(nopython=True, parallel=True)
def _filter_kernel(working, radius, h_r):
    rows, cols, _ = working.shape
    out = np.zeros((rows, cols, 3), dtype=np.float32)

    for i in prange(rows):
        for j in range(cols):
            mode, _ = shift_pixel(working, i, j, radius, h_r)
            l, a, b = to_raw(mode[2], mode[3], mode[4])
            out[i, j, 0] = l
            out[i, j, 1] = a
            out[i, j, 2] = b

    return out


def mean_shift_filter(image, h_s, h_r, verbose=False):
    """Smooths a color image with mean-shift filtering.

        Parameters
        ----------
        image : numpy.ndarray
            Raw color image [ROWS x COLS x 3], values conventionally in 0..255
        h_s : float
            Spatial bandwidth (box half-width of the search window), > 0
        h_r : float
            Color bandwidth in working space units, > 0
        verbose : bool
            Print progress

        Returns
        -------
        out: numpy.ndarray
            Filtered float32 image of the same shape, raw values, not quantized

    """

    h_s = check_bandwidth('h_s', h_s)
    h_r = check_bandwidth('h_r', h_r)
    image = check_image(image)

    radius = window_radius(h_s)
    if verbose:
        print('mean shift filtering {}x{} image, window radius {}, h_r {}'.format(
            image.shape[0], image.shape[1], radius, h_r))

    return _filter_kernel(raw2working(image), radius, h_r)
