"""
PaletteCut API Schemas
Pydantic models for palette extraction responses.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palettecut", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


class PaletteColor(BaseModel):
    """Single palette color with the population of its box."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Average color of the box as [r, g, b], 0-255"
    )
    population: int = Field(..., ge=0, description="Sampled pixels inside the box")
    ratio: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Share of the sampled pixels inside the box (0.0-1.0)"
    )


class PaletteParams(BaseModel):
    """Parameters used for the extraction."""
    color_count: int = Field(..., ge=2, le=256, description="Requested maximum palette size")
    quality: int = Field(..., ge=1, description="Pixel sampling step")
    ignore_white: bool = Field(..., description="Whether near-white pixels were skipped")


class PaletteResponse(BaseModel):
    """Palette extraction response."""
    request_id: str = Field(..., description="Request identifier for log correlation")
    width: int = Field(..., description="Decoded image width in pixels")
    height: int = Field(..., description="Decoded image height in pixels")
    sampled_pixels: int = Field(..., ge=0, description="Pixels fed to the quantizer")
    params: PaletteParams = Field(..., description="Parameters used")
    palette: List[PaletteColor] = Field(
        ...,
        description="Palette colors, most important first"
    )
    dominant_hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="First palette color"
    )
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG strip of the palette, if requested"
    )
