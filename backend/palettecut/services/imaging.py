"""
PaletteCut Imaging Utilities
Handles image I/O, upload validation and pixel sampling for quantization.
"""
import io
from pathlib import Path
from typing import Union

import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from palettecut.config import config

# Pixels brighter than this on every channel count as white
WHITE_THRESHOLD = 250

ImageSource = Union[str, Path, bytes, Image.Image, np.ndarray]


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 8:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


def load_image(source: ImageSource) -> np.ndarray:
    """
    Decode an image into an RGB pixel array.

    Args:
        source: File path, encoded bytes, PIL image or an (H, W, 3) array

    Returns:
        (H, W, 3) uint8 array in RGB order

    Raises:
        ValueError: If an array input has the wrong shape, a non-integer
            dtype or values outside 0-255
    """
    if isinstance(source, np.ndarray):
        if source.ndim != 3 or source.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {source.shape}")
        if not np.issubdtype(source.dtype, np.integer):
            raise ValueError(f"RGB array must have an integer dtype, got {source.dtype}")
        if source.size and (source.min() < 0 or source.max() > 255):
            raise ValueError("RGB array values must lie in the range 0-255")
        return source.astype(np.uint8, copy=False)

    if isinstance(source, Image.Image):
        pil_image = source
    elif isinstance(source, bytes):
        pil_image = Image.open(io.BytesIO(source))
    else:
        pil_image = Image.open(source)

    if pil_image.mode != 'RGB':
        pil_image = pil_image.convert('RGB')

    return np.array(pil_image)


def resize_long_edge(pil_image: Image.Image, max_edge: int = None) -> Image.Image:
    """
    Downscale so the longest edge is at most max_edge pixels.

    Args:
        pil_image: Decoded image
        max_edge: Maximum edge size (default from config)

    Returns:
        The same image when already small enough, else a resized copy
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    width, height = pil_image.size
    current_max = max(width, height)
    if current_max <= max_edge:
        return pil_image

    scale = max_edge / current_max
    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
    return pil_image.resize(new_size, Image.LANCZOS)


async def read_image(file: UploadFile) -> np.ndarray:
    """
    Safely read and decode an uploaded image to an RGB numpy array.

    Args:
        file: FastAPI UploadFile object

    Returns:
        (H, W, 3) uint8 array in RGB order

    Raises:
        HTTPException: 400 for unreadable, oversized or undecodable files
    """
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    mime_type = validate_magic_bytes(file_bytes)
    if mime_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {mime_type}")

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        pil_image.load()
        pil_image = resize_long_edge(pil_image)
        return load_image(pil_image)
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to decode image: {str(e)}"
        )


def get_pixels(rgb: np.ndarray, quality: int = 10, ignore_white: bool = True) -> np.ndarray:
    """
    Sample pixels for quantization.

    Every ``quality``-th pixel is taken in row-major order, so 1 uses the
    whole image and larger values trade accuracy for speed.

    Args:
        rgb: (H, W, 3) RGB image array
        quality: Sampling step, at least 1
        ignore_white: Drop pixels whose channels are all above 250

    Returns:
        (N, 3) uint8 array of sampled pixels, possibly empty

    Raises:
        ValueError: If quality is below 1
    """
    if quality < 1:
        raise ValueError("Specified quality should be greater than 0.")

    sampled = rgb.reshape(-1, 3)[::quality]

    if ignore_white:
        white = np.all(sampled > WHITE_THRESHOLD, axis=1)
        sampled = sampled[~white]

    return np.ascontiguousarray(sampled, dtype=np.uint8)
