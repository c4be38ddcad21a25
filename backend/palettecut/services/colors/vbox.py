"""
Color space boxes.

A VBox is an axis-aligned region [r1,r2] x [g1,g2] x [b1,b2] of the
quantized color space. Boxes never change once built: population,
volume and average color are computed at construction time from the
shared histogram.
"""

from dataclasses import dataclass, field, replace
from typing import Sequence, Tuple

import numpy as np

from .histogram import MULT, RSHIFT, VBOX_LENGTH, histogram_cube

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class VBox:
    """Rectangular region of quantized RGB space backed by a histogram."""

    r1: int
    r2: int
    g1: int
    g2: int
    b1: int
    b2: int
    histo: np.ndarray = field(repr=False, compare=False)
    count: int = field(init=False, repr=False, compare=False)
    volume: int = field(init=False, repr=False, compare=False)
    average: RGB = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for lo, hi, axis in ((self.r1, self.r2, "r"), (self.g1, self.g2, "g"), (self.b1, self.b2, "b")):
            if not 0 <= lo <= hi < VBOX_LENGTH:
                raise ValueError(f"Invalid {axis} bounds [{lo}, {hi}]")

        cells = self.cells()
        count = int(cells.sum())
        object.__setattr__(self, "count", count)
        object.__setattr__(
            self,
            "volume",
            (self.r2 - self.r1 + 1) * (self.g2 - self.g1 + 1) * (self.b2 - self.b1 + 1),
        )
        object.__setattr__(self, "average", self._compute_average(cells, count))

    @property
    def bounds(self) -> Tuple[int, int, int, int, int, int]:
        return self.r1, self.r2, self.g1, self.g2, self.b1, self.b2

    def cells(self) -> np.ndarray:
        """Histogram counts inside the box as a 3D array indexed [r, g, b]."""
        return histogram_cube(self.histo)[
            self.r1:self.r2 + 1, self.g1:self.g2 + 1, self.b1:self.b2 + 1
        ]

    def _compute_average(self, cells: np.ndarray, count: int) -> RGB:
        # Population weighted mean of bucket centres, scaled back to 0-255.
        # An empty box reports its geometric centre instead of black.
        if count == 0:
            return (
                MULT * (self.r1 + self.r2 + 1) // 2,
                MULT * (self.g1 + self.g2 + 1) // 2,
                MULT * (self.b1 + self.b2 + 1) // 2,
            )

        r_centres = np.arange(self.r1, self.r2 + 1, dtype=np.int64) * MULT + MULT // 2
        g_centres = np.arange(self.g1, self.g2 + 1, dtype=np.int64) * MULT + MULT // 2
        b_centres = np.arange(self.b1, self.b2 + 1, dtype=np.int64) * MULT + MULT // 2

        r_sum = int(cells.sum(axis=(1, 2)) @ r_centres)
        g_sum = int(cells.sum(axis=(0, 2)) @ g_centres)
        b_sum = int(cells.sum(axis=(0, 1)) @ b_centres)

        return r_sum // count, g_sum // count, b_sum // count

    def contains(self, pixel: Sequence[int]) -> bool:
        """Whether an 8-bit RGB pixel falls inside the box once quantized."""
        r = int(pixel[0]) >> RSHIFT
        g = int(pixel[1]) >> RSHIFT
        b = int(pixel[2]) >> RSHIFT
        return (
            self.r1 <= r <= self.r2
            and self.g1 <= g <= self.g2
            and self.b1 <= b <= self.b2
        )

    def with_bounds(self, **bounds: int) -> "VBox":
        """Copy of the box with some bounds overridden."""
        return replace(self, **bounds)

    def overlaps(self, other: "VBox") -> bool:
        return (
            self.r1 <= other.r2 and other.r1 <= self.r2
            and self.g1 <= other.g2 and other.g1 <= self.g2
            and self.b1 <= other.b2 and other.b1 <= self.b2
        )
