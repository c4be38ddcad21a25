"""
Swatch Rendering Module

Renders a palette as a strip of solid color chips for quick visual QA.
"""

import base64
from typing import List, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from .extraction import hex_to_rgb


def render_swatch_array(hex_colors: List[str],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_color: Tuple[int, int, int] = (0, 0, 0),
                        border_width: int = 2) -> np.ndarray:
    """
    Render a horizontal strip of color chips.

    Args:
        hex_colors: Palette in display order
        chip_size: Width and height of each chip in pixels
        highlight_index: Chip to outline, usually the dominant color
        border_color: RGB color of the outline
        border_width: Outline thickness in pixels

    Returns:
        (chip_size, chip_size * len(hex_colors), 3) uint8 RGB image

    Raises:
        ValueError: If the palette is empty or chip_size is not positive
    """
    if not hex_colors:
        raise ValueError("Empty hex_colors list provided")
    if chip_size < 1:
        raise ValueError(f"chip_size must be positive, got {chip_size}")

    k = len(hex_colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)
    for i, hex_color in enumerate(hex_colors):
        img[:, i * chip_size:(i + 1) * chip_size, :] = hex_to_rgb(hex_color)

    if highlight_index is not None and 0 <= highlight_index < k:
        x_start = highlight_index * chip_size
        cv2.rectangle(
            img,
            (x_start, 0),
            (x_start + chip_size - 1, chip_size - 1),
            tuple(int(c) for c in border_color),
            border_width
        )

    return img


def render_swatch_strip(hex_colors: List[str],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None) -> str:
    """
    Render a swatch strip and encode it as base64 PNG.

    Raises:
        ValueError: For an empty palette or bad chip size
        RuntimeError: If PNG encoding fails
    """
    img_rgb = render_swatch_array(hex_colors, chip_size, highlight_index)

    # OpenCV encodes BGR
    success, buffer = cv2.imencode('.png', cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR))
    if not success:
        raise RuntimeError("Failed to encode swatch PNG")

    return base64.b64encode(buffer.tobytes()).decode('ascii')
