"""
PaletteCut API Routes
Palette extraction, health and metrics endpoints.
"""
from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from palettecut import __version__
from palettecut.config import config
from palettecut.schemas import HealthResponse, PaletteResponse
from palettecut.services.colors.extract_api import handle_extract
from palettecut.utils.metrics import get_metrics

router = APIRouter(prefix="/palette", tags=["Palette"])


@router.get("/healthz", response_model=HealthResponse)
def health_check():
    """Palette service health check."""
    return HealthResponse(ok=True, version=__version__, service="palettecut")


@router.post("/extract", response_model=PaletteResponse)
async def extract_palette(
    file: UploadFile = File(...),
    color_count: int = Query(config.DEFAULT_COLOR_COUNT, ge=2, le=256, description="Maximum palette size"),
    quality: int = Query(config.DEFAULT_QUALITY, ge=1, le=100, description="Pixel sampling step (1 = every pixel)"),
    ignore_white: bool = Query(config.IGNORE_WHITE, description="Skip pixels with all channels above 250"),
    include_swatch: bool = Query(False, description="Include palette swatch PNG in response")
):
    """
    Extract a color palette from an uploaded image.

    - **file**: JPG or PNG image file
    - **color_count**: Upper bound on the number of colors (2-256)
    - **quality**: Sample every n-th pixel; 1 is slowest and most accurate
    - **ignore_white**: Leave near-white pixels out of the palette
    - **include_swatch**: Attach a rendered swatch strip

    Returns palette colors ordered most important first.
    """
    return await handle_extract(
        file=file,
        color_count=color_count,
        quality=quality,
        ignore_white=ignore_white,
        include_swatch=include_swatch
    )


@router.get("/metrics")
def palette_metrics():
    """Get palette service metrics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()
