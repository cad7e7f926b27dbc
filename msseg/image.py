"""Channel grid construction and image file IO."""

import numpy as np
import imageio.v2 as imageio

from msseg.errors import EmptyInput, ShapeMismatch, check_image


# ===== CHANNELS

def merge_channels(c1, c2, c3):
    """Stacks three equal-sized 2D channel grids into a float32 [ROWS x COLS x 3] image."""

    channels = [np.asarray(c) for c in (c1, c2, c3)]
    for c in channels:
        if c.ndim != 2:
            raise ShapeMismatch("channel grids must be 2D, got shape {}".format(c.shape))
    shapes = set(c.shape for c in channels)
    if len(shapes) != 1:
        raise ShapeMismatch("channel grids differ in size: {}".format(sorted(shapes)))
    rows, cols = channels[0].shape
    if rows == 0 or cols == 0:
        raise EmptyInput("channel grids have {} rows and {} columns".format(rows, cols))
    return np.stack(channels, axis=2).astype(np.float32)


def split_channels(image):
    image = check_image(image)
    return image[:, :, 0].copy(), image[:, :, 1].copy(), image[:, :, 2].copy()


def quantize(image):
    """Rounds to the nearest integer and clips to 0..255 (uint8)."""
    return np.clip(np.rint(image), 0, 255).astype(np.ubyte)


def convert_to_3channel(I):
    if I.ndim == 2:
        I = I[:, :, None]
    h, w, d = I.shape
    if d == 3:
        return I
    if d == 4:  # drop alpha
        return I[:, :, :3]
    if d != 1:
        raise ShapeMismatch("can not convert image with {} channels to 3 channels".format(d))

    result = np.zeros((h, w, 3), dtype=I.dtype)
    result[:, :, 0] = I[:, :, 0]
    result[:, :, 1] = I[:, :, 0]
    result[:, :, 2] = I[:, :, 0]
    return result


# ===== IO

def read(path):
    """Reads an image file as float32 [ROWS x COLS x 3] with raw values (0..255 for 8 bit files)."""

    I = np.asarray(imageio.imread(path))
    return convert_to_3channel(I).astype(np.float32)


def write(path, I):
    imageio.imwrite(path, quantize(check_image(I)))
