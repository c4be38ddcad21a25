"""
PaletteCut

Median cut (MMCQ) color palette extraction with an HTTP service wrapper.
"""

__version__ = "1.0.0"
