"""Editable motion path: canonical control points plus a view rotation."""

import logging
import numpy as np
from typing import Optional, Sequence, Tuple

from .curve import sample_curve, compute_directions

logger = logging.getLogger(__name__)


def rotate_points(points: np.ndarray, angle_deg: float, center: Tuple[float, float]) -> np.ndarray:
    """Rotate [N, 2] points by angle in degrees about center."""
    angle_rad = np.deg2rad(angle_deg)
    cos_a, sin_a = np.cos(angle_rad), np.sin(angle_rad)
    rot = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
    c = np.asarray(center, dtype=np.float64)
    return (np.asarray(points, dtype=np.float64) - c) @ rot.T + c


def _segment_distance(p: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    """Distance from p to segment ab."""
    ab = b - a
    denom = float(ab @ ab)
    if denom == 0:
        return float(np.hypot(*(p - a)))
    t = min(max(float((p - a) @ ab) / denom, 0.0), 1.0)
    return float(np.hypot(*(p - (a + t * ab))))


class PathModel:
    """Control points of the motion path in a square logical frame.

    Canonical points are the authored shape. View points are always derived
    by rotating canonical points about the frame center; edits made in view
    space are rotated back before they are stored.
    """

    def __init__(
        self,
        points: Sequence[Sequence[float]],
        frame_size: float = 200.0,
        rotation: float = 0.0,
        insert_threshold: float = 10.0,
    ):
        self.frame_size = float(frame_size)
        self.insert_threshold = float(insert_threshold)
        self._rotation = float(rotation)
        self._canonical = np.zeros((0, 2), dtype=np.float64)
        self.reset(points)

    @property
    def center(self) -> Tuple[float, float]:
        half = self.frame_size / 2
        return half, half

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def canonical_points(self) -> np.ndarray:
        return self._canonical.copy()

    @property
    def view_points(self) -> np.ndarray:
        return rotate_points(self._canonical, self._rotation, self.center)

    def __len__(self) -> int:
        return len(self._canonical)

    def reset(self, points: Sequence[Sequence[float]]) -> None:
        """Replace the canonical points."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) < 2:
            raise ValueError(f"A path needs at least 2 points, got {len(pts)}")
        self._canonical = pts.copy()

    def set_rotation(self, theta: float) -> None:
        self._rotation = float(theta)

    def _to_canonical(self, view_pos: Sequence[float]) -> np.ndarray:
        return rotate_points(np.asarray(view_pos, dtype=np.float64).reshape(1, 2),
                             -self._rotation, self.center)[0]

    def insert_point(self, view_pos: Sequence[float]) -> bool:
        """Insert a point on the closest segment; False if it crowds an existing point."""
        p = np.asarray(view_pos, dtype=np.float64)
        view = self.view_points
        if (np.hypot(*(view - p).T) < self.insert_threshold).any():
            return False

        best_idx, best_dist = 0, float("inf")
        for i in range(len(view) - 1):
            d = _segment_distance(p, view[i], view[i + 1])
            if d < best_dist:
                best_idx, best_dist = i, d

        self._canonical = np.insert(self._canonical, best_idx + 1, self._to_canonical(p), axis=0)
        logger.debug("Inserted point after index %d (%d points)", best_idx, len(self))
        return True

    def remove_point(self, index: int) -> bool:
        """Remove a point; False if that would leave fewer than 2."""
        if len(self._canonical) <= 2 or not 0 <= index < len(self._canonical):
            return False
        self._canonical = np.delete(self._canonical, index, axis=0)
        logger.debug("Removed point %d (%d points)", index, len(self))
        return True

    def move_point(self, index: int, view_pos: Sequence[float]) -> bool:
        """Move a point to a view-space position, clamped into the frame; False for a bad index."""
        if not 0 <= index < len(self._canonical):
            return False
        c = np.clip(self._to_canonical(view_pos), 0.0, self.frame_size)
        self._canonical[index] = c
        return True

    def find_nearest(self, view_pos: Sequence[float], radius: float) -> Optional[int]:
        """Index of the first view point inside the box of half-size radius."""
        x, y = float(view_pos[0]), float(view_pos[1])
        for i, (px, py) in enumerate(self.view_points):
            if abs(px - x) < radius and abs(py - y) < radius:
                return i
        return None

    def sampled_curve(self, resolution: int = 100) -> np.ndarray:
        """Smoothed view-space curve for drawing."""
        return sample_curve(self.view_points, resolution)

    def directions(self, count: int) -> np.ndarray:
        """Unit tangents along the view-space curve, one per blur sample."""
        return compute_directions(self.view_points, count)
