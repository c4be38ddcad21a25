"""
Color Map

The result of a quantization run: an ordered, read-only list of boxes.
Each box reduces to its average color, which makes up the palette, and
arbitrary pixels can be classified against the boxes.
"""

from typing import Iterable, Iterator, List, Sequence, Tuple

from .vbox import RGB, VBox


class ColorMap:
    """Ordered set of terminal boxes produced by MMCQ."""

    def __init__(self, boxes: Iterable[VBox]):
        self._boxes: Tuple[VBox, ...] = tuple(boxes)

    @property
    def boxes(self) -> Tuple[VBox, ...]:
        return self._boxes

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[VBox]:
        return iter(self._boxes)

    def size(self) -> int:
        return len(self._boxes)

    def palette(self) -> List[RGB]:
        """Average color of every box, in map order."""
        return [box.average for box in self._boxes]

    def populations(self) -> List[int]:
        """Pixel count of every box, in map order."""
        return [box.count for box in self._boxes]

    def map(self, pixel: Sequence[int]) -> RGB:
        """
        Palette color for a pixel.

        Returns the average of the first box containing the pixel, or the
        nearest palette color when no box contains it.
        """
        for box in self._boxes:
            if box.contains(pixel):
                return box.average
        return self.nearest(pixel)

    def nearest(self, pixel: Sequence[int]) -> RGB:
        """Palette color closest to ``pixel`` by Euclidean RGB distance."""
        best = None
        best_distance = None
        r, g, b = int(pixel[0]), int(pixel[1]), int(pixel[2])

        for box in self._boxes:
            color = box.average
            distance = (r - color[0]) ** 2 + (g - color[1]) ** 2 + (b - color[2]) ** 2
            # strict comparison: earlier boxes win ties
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best = color

        return best

    def __repr__(self) -> str:
        return f"ColorMap(size={len(self._boxes)}, palette={self.palette()})"
