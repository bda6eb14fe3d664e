"""Crop rectangle in display pixels."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .utils import round_half_up

EDGES = ("left", "top", "right", "bottom")


@dataclass
class CropRegion:
    """Axis-aligned crop rectangle kept inside a display of width x height.

    Edges are clamped, never rejected: every mutation leaves a rectangle of at
    least min_size on each side (or the whole display if it is smaller).
    """
    width: int
    height: int
    min_size: int = 20
    left: float = 0.0
    top: float = 0.0
    right: Optional[float] = None
    bottom: Optional[float] = None

    def __post_init__(self):
        if self.right is None:
            self.right = float(self.width)
        if self.bottom is None:
            self.bottom = float(self.height)
        self.clamp()

    def _min_w(self) -> float:
        return float(min(self.min_size, self.width))

    def _min_h(self) -> float:
        return float(min(self.min_size, self.height))

    def reset(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        """Full-frame crop, optionally for a new display size."""
        if width is not None:
            self.width = int(width)
        if height is not None:
            self.height = int(height)
        self.left, self.top = 0.0, 0.0
        self.right, self.bottom = float(self.width), float(self.height)

    def clamp(self) -> None:
        self.left = min(max(float(self.left), 0.0), self.width - self._min_w())
        self.top = min(max(float(self.top), 0.0), self.height - self._min_h())
        self.right = min(max(float(self.right), self.left + self._min_w()), float(self.width))
        self.bottom = min(max(float(self.bottom), self.top + self._min_h()), float(self.height))

    def move_edge(self, edge: str, value: float) -> None:
        """Move one edge, clamped against the display and the opposite edge."""
        if edge == "left":
            self.left = min(max(value, 0.0), self.right - self._min_w())
        elif edge == "right":
            self.right = min(max(value, self.left + self._min_w()), float(self.width))
        elif edge == "top":
            self.top = min(max(value, 0.0), self.bottom - self._min_h())
        elif edge == "bottom":
            self.bottom = min(max(value, self.top + self._min_h()), float(self.height))
        else:
            raise ValueError(f"Unknown crop edge: {edge}")

    def hit_edge(self, x: float, y: float, tolerance: float) -> Optional[str]:
        """Edge under (x, y) within tolerance, if any."""
        inside_y = self.top - tolerance <= y <= self.bottom + tolerance
        inside_x = self.left - tolerance <= x <= self.right + tolerance
        if inside_y and abs(x - self.left) <= tolerance:
            return "left"
        if inside_y and abs(x - self.right) <= tolerance:
            return "right"
        if inside_x and abs(y - self.top) <= tolerance:
            return "top"
        if inside_x and abs(y - self.bottom) <= tolerance:
            return "bottom"
        return None

    def scaled(self, scale: float, width: int, height: int) -> Tuple[int, int, int, int]:
        """Integer (left, top, right, bottom) at scale, clamped to width x height.

        Each edge is rounded independently; the result is at least 1x1.
        """
        left = min(max(round_half_up(self.left * scale), 0), max(width - 1, 0))
        top = min(max(round_half_up(self.top * scale), 0), max(height - 1, 0))
        right = min(max(round_half_up(self.right * scale), left + 1), max(width, left + 1))
        bottom = min(max(round_half_up(self.bottom * scale), top + 1), max(height, top + 1))
        return left, top, right, bottom

    @property
    def is_full_frame(self) -> bool:
        return (self.left, self.top, self.right, self.bottom) == (0.0, 0.0, float(self.width), float(self.height))

    def to_dict(self) -> Dict[str, float]:
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}
