"""
Palette extraction service.

Entry points for pulling a palette out of an image: sample the pixels,
run MMCQ, and report the resulting colors in map order (most important
first).
"""

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from loguru import logger

from palettecut.config import config
from palettecut.services.imaging import ImageSource, get_pixels, load_image
from .colormap import ColorMap
from .mmcq import quantize

DEFAULT_COLOR_COUNT = 10
DEFAULT_QUALITY = 10
DOMINANT_PALETTE_SIZE = 5


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    """Convert an RGB triple to a hex color string."""
    r, g, b = [int(x) for x in rgb]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _validate_args(color_count: int, quality: int) -> None:
    if not config.validate_color_count(color_count):
        raise ValueError(
            f"Specified color_count must be between {config.MIN_COLOR_COUNT} "
            f"and {config.MAX_COLOR_COUNT}, got {color_count}."
        )
    if not config.validate_quality(quality):
        raise ValueError(f"Specified quality should be greater than 0, got {quality}.")


def get_color_map(image: ImageSource, color_count: int = DEFAULT_COLOR_COUNT,
                  quality: int = DEFAULT_QUALITY, ignore_white: bool = True) -> Optional[ColorMap]:
    """
    Cluster the colors of an image with median cut.

    Args:
        image: File path, encoded bytes, PIL image or (H, W, 3) RGB array
        color_count: Maximum palette size, 2-256
        quality: Pixel sampling step; 1 is the highest quality, 10 the default.
            Larger values are faster but more likely to miss colors.
        ignore_white: Skip near-white pixels

    Returns:
        ColorMap, or None when no pixels survive sampling

    Raises:
        ValueError: If color_count or quality is out of range
    """
    _validate_args(color_count, quality)

    rgb = load_image(image)
    pixels = get_pixels(rgb, quality=quality, ignore_white=ignore_white)
    logger.debug(
        f"Sampled {len(pixels)} of {rgb.shape[0] * rgb.shape[1]} pixels "
        f"(quality={quality}, ignore_white={ignore_white})"
    )

    return quantize(pixels, color_count)


def get_palette(image: ImageSource, color_count: int = DEFAULT_COLOR_COUNT,
                quality: int = DEFAULT_QUALITY,
                ignore_white: bool = True) -> Optional[List[Tuple[int, int, int]]]:
    """Palette colors of an image, most important first, or None."""
    color_map = get_color_map(image, color_count, quality, ignore_white)
    if color_map is None:
        return None
    return color_map.palette()


def get_dominant_color(image: ImageSource, quality: int = DEFAULT_QUALITY,
                       ignore_white: bool = True) -> Optional[Tuple[int, int, int]]:
    """Representative color of the largest cluster, or None."""
    palette = get_palette(image, DOMINANT_PALETTE_SIZE, quality, ignore_white)
    if not palette:
        return None
    return palette[0]


def palette_entries(color_map: ColorMap) -> List[Dict[str, Any]]:
    """
    Describe every box of a color map.

    Returns:
        One ``{"hex", "rgb", "population", "ratio"}`` dict per box, in map
        order. ``ratio`` is the box's share of the quantized pixels.
    """
    populations = np.array(color_map.populations(), dtype=np.int64)
    total = int(populations.sum())

    entries = []
    for rgb, population in zip(color_map.palette(), populations):
        entries.append({
            "hex": rgb_to_hex(rgb),
            "rgb": list(rgb),
            "population": int(population),
            "ratio": float(population / total) if total else 0.0
        })
    return entries
