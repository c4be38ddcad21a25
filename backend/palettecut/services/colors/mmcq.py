"""
Modified Median Cut Quantization (MMCQ).

Clusters pixels in RGB space by repeatedly cutting the most important box
of the quantized color space. The first 75% of the boxes are chosen by
population alone; the rest by population times volume so that large,
sparse regions of color space also get a representative.
"""

import math
from functools import cmp_to_key
from typing import Callable, List, Optional

import numpy as np
from loguru import logger

from .colormap import ColorMap
from .histogram import PixelInput, as_pixel_array, build_histogram, quantized_bounds
from .median_cut import VBoxCutError, median_cut_apply
from .vbox import VBox

FRACT_BY_POPULATION = 0.75
MAX_ITERATIONS = 1000
MIN_COLORS = 2
MAX_COLORS = 256

SortKey = Callable[[VBox], object]


def compare_by_count(a: VBox, b: VBox) -> int:
    """Order boxes by pixel population."""
    return (a.count > b.count) - (a.count < b.count)


def compare_by_product(a: VBox, b: VBox) -> int:
    """Order boxes by population x volume, by volume when populations match."""
    if a.count == b.count:
        return (a.volume > b.volume) - (a.volume < b.volume)

    a_product = a.count * a.volume
    b_product = b.count * b.volume
    return (a_product > b_product) - (a_product < b_product)


BY_COUNT = cmp_to_key(compare_by_count)
BY_PRODUCT = cmp_to_key(compare_by_product)


def vbox_from_pixels(pixels: np.ndarray, histo: np.ndarray) -> VBox:
    """Root box: the tightest box around every quantized pixel."""
    r1, r2, g1, g2, b1, b2 = quantized_bounds(pixels)
    return VBox(r1, r2, g1, g2, b1, b2, histo)


def iterate(boxes: List[VBox], sort_key: SortKey, target: int) -> int:
    """
    Split the highest ranked box until ``target`` boxes exist.

    ``boxes`` is kept sorted ascending by ``sort_key`` and modified in place.
    Stops early when the highest ranked box cannot be split, and at
    MAX_ITERATIONS otherwise.

    Args:
        boxes: Working set of boxes
        sort_key: Key ranking boxes; the last box after sorting is cut next
        target: Number of boxes to stop at

    Returns:
        Number of iterations performed

    Raises:
        VBoxCutError: If a box cannot be cut
    """
    niters = 0

    while niters < MAX_ITERATIONS:
        vbox = boxes[-1]
        if vbox.count == 0:
            boxes.sort(key=sort_key)
            niters += 1
            continue
        boxes.pop()

        # do the cut
        children = median_cut_apply(vbox)
        boxes.extend(children)
        if len(children) == 1:
            # the same box would be picked again
            logger.debug(f"MMCQ: no further splits after {niters} iterations ({len(boxes)}/{target} boxes)")
            return niters
        boxes.sort(key=sort_key)

        if len(boxes) >= target:
            return niters
        niters += 1

    logger.warning(f"MMCQ stopped after {niters} iterations with {len(boxes)}/{target} boxes")
    return niters


def quantize(pixels: PixelInput, max_colors: int) -> Optional[ColorMap]:
    """
    Quantize pixels into at most ``max_colors`` color boxes.

    Args:
        pixels: (N, 3) array or sequence of RGB triples, channels 0-255
        max_colors: Palette size, 2-256 inclusive

    Returns:
        ColorMap with the boxes ordered most important first, or None when
        no pixels were supplied

    Raises:
        ValueError: If max_colors is out of range or pixels are malformed
        VBoxCutError: If the box invariants break during splitting
    """
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise ValueError(f"max_colors must be an integer, got {max_colors!r}")
    if not MIN_COLORS <= max_colors <= MAX_COLORS:
        raise ValueError(
            f"max_colors must be between {MIN_COLORS} and {MAX_COLORS}, got {max_colors}"
        )

    pixel_array = as_pixel_array(pixels)
    if len(pixel_array) == 0:
        logger.debug("No pixels to quantize")
        return None

    histo = build_histogram(pixel_array)
    boxes = [vbox_from_pixels(pixel_array, histo)]

    # first set of colors, sorted by population
    target = math.ceil(FRACT_BY_POPULATION * max_colors)
    iters = iterate(boxes, BY_COUNT, target)

    # Re-sort by the product of pixel occupancy times the size in color space.
    boxes.sort(key=BY_PRODUCT)

    # next set - generate the median cuts using the (npix * vol) sorting.
    if max_colors > len(boxes):
        iters += iterate(boxes, BY_PRODUCT, max_colors)

    boxes.reverse()

    logger.debug(
        f"MMCQ: {len(pixel_array)} pixels -> {len(boxes)} boxes "
        f"(max_colors={max_colors}, iterations={iters})"
    )
    return ColorMap(boxes)
