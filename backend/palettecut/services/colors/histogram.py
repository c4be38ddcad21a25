"""
Color Histogram

Reduces 24-bit RGB pixels to 5 significant bits per channel and counts
how many pixels fall into each of the 32x32x32 buckets of the reduced
color space. The histogram is built once per quantization run and shared
read-only by every box derived from it.
"""

from typing import Sequence, Tuple, Union

import numpy as np

SIGBITS = 5
RSHIFT = 8 - SIGBITS
MULT = 1 << RSHIFT
HISTOSIZE = 1 << (3 * SIGBITS)
VBOX_LENGTH = 1 << SIGBITS

PixelInput = Union[np.ndarray, Sequence[Sequence[int]]]


def get_color_index(r: int, g: int, b: int) -> int:
    """Get the histogram index of a quantized (r, g, b) bucket."""
    return (r << (2 * SIGBITS)) + (g << SIGBITS) + b


def as_pixel_array(pixels: PixelInput) -> np.ndarray:
    """
    Normalize a pixel collection to an (N, 3) integer array.

    Args:
        pixels: numpy array or sequence of (r, g, b) triples

    Returns:
        (N, 3) int64 array

    Raises:
        ValueError: If the input is not a list of RGB triples or a channel
            value lies outside 0-255
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.empty((0, 3), dtype=np.int64)

    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected pixels of shape (N, 3), got {arr.shape}")

    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Pixel channels must be integers, got dtype {arr.dtype}")

    arr = arr.astype(np.int64, copy=False)
    if arr.min() < 0 or arr.max() > 255:
        raise ValueError("Pixel channel values must lie in the range 0-255")

    return arr


def quantize_pixels(pixels: np.ndarray) -> np.ndarray:
    """Shift every channel down to SIGBITS precision."""
    return pixels >> RSHIFT


def build_histogram(pixels: np.ndarray) -> np.ndarray:
    """
    Count pixels per quantized color bucket.

    Args:
        pixels: (N, 3) integer RGB array with N >= 1

    Returns:
        Read-only int64 array of length HISTOSIZE indexed by
        ``get_color_index`` of the quantized channels
    """
    quantized = quantize_pixels(pixels)
    index = (quantized[:, 0] << (2 * SIGBITS)) + (quantized[:, 1] << SIGBITS) + quantized[:, 2]
    histo = np.bincount(index, minlength=HISTOSIZE).astype(np.int64)
    histo.flags.writeable = False
    return histo


def quantized_bounds(pixels: np.ndarray) -> Tuple[int, int, int, int, int, int]:
    """
    Tightest quantized bounds containing every pixel.

    Returns:
        (r1, r2, g1, g2, b1, b2), inclusive
    """
    quantized = quantize_pixels(pixels)
    mins = quantized.min(axis=0)
    maxs = quantized.max(axis=0)
    return (
        int(mins[0]), int(maxs[0]),
        int(mins[1]), int(maxs[1]),
        int(mins[2]), int(maxs[2]),
    )


def histogram_cube(histo: np.ndarray) -> np.ndarray:
    """View a flat histogram as a (32, 32, 32) array indexed [r, g, b]."""
    return histo.reshape(VBOX_LENGTH, VBOX_LENGTH, VBOX_LENGTH)
