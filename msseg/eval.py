"""
Statistics and renderings of the label maps produced by the segmentation.
"""

import numpy as np

from msseg.segmentation import recolor


def segment_sizes(label_map):
    """Number of pixels per label, labels are expected to be 0..N-1."""
    return np.bincount(np.ravel(label_map).astype(np.int64))


def count_segments(label_map):
    return int(np.unique(label_map).size)


def print_segment_stats(counts):
    """Prints a size table for the per-segment pixel counts returned by label_regions."""

    counts = np.asarray(counts)
    print('Label map contains {} segments, {} pixels'.format(counts.size, np.sum(counts)))
    print('\nSegments |   Min   |   Max   |   Mean  | Single  |')
    print('{:<9}|{:^9.0f}|{:^9.0f}|{:^9.2f}|{:^9.0f}|'.format(
        counts.size, np.min(counts), np.max(counts), np.mean(counts), np.sum(counts == 1)))


def false_color_modes(num_segments, lightness=60.0, chroma=100.0):
    """Working space colors with hues spread by the golden angle, one per segment."""

    hues = np.arange(num_segments) * 137.508 * np.pi / 180.0
    modes = np.zeros((num_segments, 3), dtype=np.float64)
    modes[:, 0] = lightness
    modes[:, 1] = chroma * np.cos(hues)
    modes[:, 2] = chroma * np.sin(hues)
    return modes


def label_map2label_image(label_map):
    """Renders every segment with its own false color (float32, raw values)."""

    num_segments = int(np.max(label_map)) + 1
    return recolor(label_map, false_color_modes(num_segments))
