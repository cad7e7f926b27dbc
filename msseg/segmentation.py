"""Mean-shift segmentation: region labeling and mode recoloring.

Labeling grows 8-connected regions from seeds found in row-major order.
Every candidate is compared to the color of the seed that started its
region (the anchor), not to the member that discovered it, so a region is
the connected area of pixels that are each close to the seed.
"""

import numpy as np
from numba import jit, prange

from msseg.color import raw2working, to_raw
from msseg.errors import check_bandwidth, check_image
from msseg.filtering import mean_shift_filter
from msseg.image import quantize

UNLABELED = -1


@jit(nopython=True)
def _label_kernel(working, h_r):
    h, w, _ = working.shape

    num_labels = 0
    mode_sums = np.zeros((h * w, 3), dtype=np.float64)
    mode_counts = np.zeros((h * w), dtype=np.int64)
    label_map = np.ones((h, w), dtype=np.int64) * UNLABELED
    candidate_list = np.zeros((h * w, 2), dtype=np.int64)  # stack of (row, col)

    for sx in range(h):
        for sy in range(w):
            if label_map[sx, sy] != UNLABELED:
                continue

            ## SEED NEW SEGMENT

            label = num_labels
            num_labels += 1
            label_map[sx, sy] = label

            anchor_l = working[sx, sy, 0]
            anchor_a = working[sx, sy, 1]
            anchor_b = working[sx, sy, 2]
            mode_sums[label, 0] = anchor_l
            mode_sums[label, 1] = anchor_a
            mode_sums[label, 2] = anchor_b

            candidate_list[0, 0] = sx
            candidate_list[0, 1] = sy
            num_candidates = 1

            ## GROW AGAINST ANCHOR COLOR

            while num_candidates > 0:
                num_candidates -= 1
                cx = candidate_list[num_candidates, 0]  # pop last candidate
                cy = candidate_list[num_candidates, 1]

                for dx in range(-1, 2):
                    for dy in range(-1, 2):
                        if dx == 0 and dy == 0:
                            continue
                        nx = cx + dx
                        ny = cy + dy
                        if nx < 0 or ny < 0 or nx >= h or ny >= w:
                            continue
                        if label_map[nx, ny] != UNLABELED:
                            continue

                        dl = working[nx, ny, 0] - anchor_l
                        da = working[nx, ny, 1] - anchor_a
                        db = working[nx, ny, 2] - anchor_b
                        if np.sqrt(dl * dl + da * da + db * db) < h_r:
                            label_map[nx, ny] = label
                            mode_sums[label, :] += working[nx, ny, :]
                            mode_counts[label] += 1

                            candidate_list[num_candidates, 0] = nx
                            candidate_list[num_candidates, 1] = ny
                            num_candidates += 1

            ## FINALIZE MODE, THE SEED WAS NOT COUNTED WHILE GROWING

            mode_counts[label] += 1
            mode_sums[label, :] /= mode_counts[label]

    return label_map, mode_sums[:num_labels].copy(), mode_counts[:num_labels].copy()


@jit(nopython=True, parallel=True)
def _recolor_kernel(label_map, modes):
    h, w = label_map.shape
    out = np.zeros((h, w, 3), dtype=np.float32)

    for x in prange(h):
        for y in range(w):
            label = label_map[x, y]
            l, a, b = to_raw(modes[label, 0], modes[label, 1], modes[label, 2])
            out[x, y, 0] = l
            out[x, y, 1] = a
            out[x, y, 2] = b

    return out


def label_regions(image, h_r):
    """Partitions an image into fixed-anchor 8-connected regions.

        Parameters
        ----------
        image : numpy.ndarray
            Raw color image [ROWS x COLS x 3], usually the output of mean_shift_filter
        h_r : float
            Color bandwidth, a pixel joins a region if its working space color
            is closer than h_r to the region's seed color

        Returns
        -------
        label_map : numpy.ndarray
            int64 [ROWS x COLS], labels 0..N-1 in row-major discovery order
        modes : numpy.ndarray
            float64 [N x 3], mean working space color per label (the mode)
        counts : numpy.ndarray
            int64 [N], number of pixels per label (sums to ROWS*COLS)

    """

    h_r = check_bandwidth('h_r', h_r)
    image = check_image(image)
    return _label_kernel(raw2working(image), h_r)


def recolor(label_map, modes):
    """Paints every pixel with the raw color of its label's mode (float32)."""

    label_map = np.ascontiguousarray(label_map, dtype=np.int64)
    modes = np.ascontiguousarray(modes, dtype=np.float64)
    return _recolor_kernel(label_map, modes)


def segment(image, h_r, verbose=False):
    """Segments an already filtered image.

        Returns
        -------
        out: (numpy.ndarray, numpy.ndarray, int)
            Recolored float32 image, label map and number of segments

    """

    label_map, modes, counts = label_regions(image, h_r)
    num_segments = modes.shape[0]
    if verbose:
        print('found {} segments, largest has {} pixels'.format(num_segments, np.max(counts)))
    return recolor(label_map, modes), label_map, num_segments


def mean_shift_segmentation(image, h_s, h_r, verbose=False):
    """Filters the image with mean_shift_filter and segments the 8 bit filtered image."""

    filtered = quantize(mean_shift_filter(image, h_s, h_r, verbose=verbose))
    return segment(filtered, h_r, verbose=verbose)
