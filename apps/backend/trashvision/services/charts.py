"""
charts.py — SVG pie chart geometry for the summary cards.

The dashboard template draws each slice as an SVG <path> inside a
100 x 100 viewBox. Slices start at 12 o'clock and run clockwise in
category order. A category holding every event is drawn as a full
circle, since an arc whose endpoints coincide renders as nothing.
"""

import math
from dataclasses import dataclass
from typing import Mapping

VIEWBOX = 100
CENTER = VIEWBOX / 2
RADIUS = 45

# Tailwind 400-series, in category order.
PALETTE = ("#60a5fa", "#34d399", "#fbbf24", "#f87171", "#a78bfa", "#f472b6")


@dataclass(frozen=True)
class PieSlice:
    label: str
    count: int
    share: float    # 0-1
    color: str
    path: str       # SVG path data; empty when `full` is set
    full: bool = False


def _point(angle: float) -> tuple[float, float]:
    return (
        round(CENTER + RADIUS * math.cos(angle), 3),
        round(CENTER + RADIUS * math.sin(angle), 3),
    )


def pie_slices(counts: Mapping[str, int]) -> list[PieSlice]:
    """Turn category -> count into drawable slices; zero counts are skipped."""
    total = sum(v for v in counts.values() if v > 0)
    if total == 0:
        return []

    slices: list[PieSlice] = []
    angle = -math.pi / 2
    for index, (label, count) in enumerate(counts.items()):
        color = PALETTE[index % len(PALETTE)]
        if count <= 0:
            continue
        share = count / total
        if count == total:
            slices.append(PieSlice(label, count, 1.0, color, path="", full=True))
            continue

        end = angle + share * 2 * math.pi
        x1, y1 = _point(angle)
        x2, y2 = _point(end)
        large_arc = 1 if share > 0.5 else 0
        path = (
            f"M {CENTER} {CENTER} L {x1} {y1} "
            f"A {RADIUS} {RADIUS} 0 {large_arc} 1 {x2} {y2} Z"
        )
        slices.append(PieSlice(label, count, share, color, path))
        angle = end
    return slices
