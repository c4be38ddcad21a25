from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from palettecut import __version__
from palettecut.api.palette import router as palette_router
from palettecut.config import config

app = FastAPI(
    title="PaletteCut",
    description="Median cut color palette extraction",
    version=__version__
)

# CORS only when origins are configured
allowed_origins = config.allowed_origins()
if allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"]
    )

app.include_router(palette_router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "PaletteCut API",
        "version": __version__,
        "docs": "/docs"
    }
