"""Error kinds raised by msseg operations.

All checks run once at the entry of a public operation, bandwidths first,
so that no grid is touched when a parameter is invalid.
"""

import numbers

import numpy as np


class MeanShiftError(Exception):
    """Base class for msseg exceptions."""


class InvalidParameter(ValueError, MeanShiftError):
    """Raised for non-positive or non-numeric bandwidths."""


class EmptyInput(ValueError, MeanShiftError):
    """Raised when an image has zero rows or zero columns."""


class ShapeMismatch(ValueError, MeanShiftError):
    """Raised when channel grids differ in size or an image is not ROWS x COLS x 3."""


def check_bandwidth(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter("{} must be a real number, got {!r}".format(name, value))
    if not np.isfinite(value) or value <= 0:
        raise InvalidParameter("{} must be > 0, got {}".format(name, value))
    return float(value)


def check_image(image):
    """Returns image as float32 (ROWS, COLS, 3) array or raises."""

    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ShapeMismatch("expected an array of shape (rows, cols, 3), got {}".format(image.shape))
    rows, cols, _ = image.shape
    if rows == 0 or cols == 0:
        raise EmptyInput("image has {} rows and {} columns".format(rows, cols))
    return np.ascontiguousarray(image, dtype=np.float32)
