"""
Median cut splitting of color space boxes.

A box is cut across its longest axis near the population median. The cut
plane is pushed toward the side with more room so children stay compact,
then nudged so neither child ends up without pixels where that can be
avoided.
"""

from typing import Tuple

import numpy as np

from .histogram import VBOX_LENGTH
from .vbox import VBox


class VBoxCutError(RuntimeError):
    """A box could not be cut; indicates a broken invariant upstream."""
    pass


# Cut axes in tie-break order, with the cube axes summed over for each.
_AXES = (
    ("r", (1, 2)),
    ("g", (0, 2)),
    ("b", (0, 1)),
)


def _longest_axis(vbox: VBox) -> int:
    widths = (
        vbox.r2 - vbox.r1 + 1,
        vbox.g2 - vbox.g1 + 1,
        vbox.b2 - vbox.b1 + 1,
    )
    max_width = max(widths)
    # r wins ties over g, g over b
    return widths.index(max_width)


def partial_sums(vbox: VBox, axis: int) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Cumulative population along one axis of the box.

    Both arrays are indexed by absolute coordinate 0..31; coordinates
    outside the box hold -1.

    Returns:
        (partial_sum, look_ahead_sum, total)
    """
    name, summed_axes = _AXES[axis]
    lo = getattr(vbox, f"{name}1")
    hi = getattr(vbox, f"{name}2")

    slices = vbox.cells().sum(axis=summed_axes)
    cumulative = np.cumsum(slices)
    total = int(cumulative[-1])

    partial_sum = np.full(VBOX_LENGTH, -1, dtype=np.int64)
    look_ahead_sum = np.full(VBOX_LENGTH, -1, dtype=np.int64)
    partial_sum[lo:hi + 1] = cumulative
    look_ahead_sum[lo:hi + 1] = total - cumulative

    return partial_sum, look_ahead_sum, total


def _cut(vbox: VBox, axis: int, partial_sum: np.ndarray,
         look_ahead_sum: np.ndarray, total: int) -> Tuple[VBox, ...]:
    name = _AXES[axis][0]
    lo = getattr(vbox, f"{name}1")
    hi = getattr(vbox, f"{name}2")

    for i in range(lo, hi + 1):
        if partial_sum[i] <= total // 2:
            continue

        left = i - lo
        right = hi - i
        if left <= right:
            d2 = min(hi - 1, i + right // 2)
        else:
            d2 = max(lo, int(i - 1 - left / 2.0))

        # avoid 0-count boxes
        while d2 < 0 or partial_sum[d2] <= 0:
            d2 += 1
        count2 = look_ahead_sum[d2]
        while count2 == 0 and d2 > 0 and partial_sum[d2 - 1] > 0:
            d2 -= 1
            count2 = look_ahead_sum[d2]

        if d2 >= hi:
            if lo == hi:
                # Single cell on every axis, nothing left to cut.
                return (vbox,)
            # Everything sits in the top slice; peel it off.
            d2 = hi - 1

        return (
            vbox.with_bounds(**{f"{name}2": d2}),
            vbox.with_bounds(**{f"{name}1": d2 + 1}),
        )

    raise VBoxCutError(f"VBox can't be cut: {vbox}")


def median_cut_apply(vbox: VBox) -> Tuple[VBox, ...]:
    """
    Split a box in two at the population median of its longest axis.

    Args:
        vbox: Box with at least one pixel

    Returns:
        One box (returned unchanged when it cannot be split) or two
        disjoint boxes that together cover the input box

    Raises:
        VBoxCutError: If the box is empty or no cut point exists
    """
    if vbox.count == 0:
        raise VBoxCutError(f"Cannot cut an empty box: {vbox}")

    # only one pixel, no split
    if vbox.count == 1:
        return (vbox,)

    axis = _longest_axis(vbox)
    partial_sum, look_ahead_sum, total = partial_sums(vbox, axis)
    return _cut(vbox, axis, partial_sum, look_ahead_sum, total)
