"""
PaletteCut Colors Module

Median cut color quantization (histogram, boxes, splitter, quantizer and
color map) plus palette extraction and swatch rendering built on top.
"""

from .colormap import ColorMap
from .extraction import get_color_map, get_dominant_color, get_palette
from .median_cut import VBoxCutError
from .mmcq import quantize
from .vbox import VBox
