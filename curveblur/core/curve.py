"""Curve sampling: arc-length-uniform Catmull-Rom and tangent directions."""

import numpy as np
from typing import Sequence, Union

PointsLike = Union[np.ndarray, Sequence[Sequence[float]]]


def _as_points(points: PointsLike) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        return pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Expected points of shape [N, 2], got {pts.shape}")
    return pts


def _catmull_rom(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, u: float) -> np.ndarray:
    """Uniform Catmull-Rom (tension 0.5) between p1 and p2."""
    u2 = u * u
    u3 = u2 * u
    return 0.5 * (
        2 * p1
        + (-p0 + p2) * u
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * u2
        + (-p0 + 3 * p1 - 3 * p2 + p3) * u3
    )


def _neighbours(pts: np.ndarray, seg: int):
    """Control points (p0, p1, p2, p3) for segment seg, mirroring past the ends."""
    n = len(pts)
    p1, p2 = pts[seg], pts[seg + 1]
    p0 = pts[seg - 1] if seg > 0 else 2 * p1 - p2
    p3 = pts[seg + 2] if seg + 2 < n else 2 * p2 - p1
    return p0, p1, p2, p3


def sample_curve(points: PointsLike, count: int) -> np.ndarray:
    """Sample a smooth curve through points at count arc-length-uniform targets.

    Arc length is measured along the control polygon. A 2-point path is
    returned as-is (a straight segment) and a zero-length path is returned
    unchanged.

    Args:
        points: [N, 2] control points
        count: number of samples

    Returns:
        curve: [count, 2] (or the input points for the shortcut cases)
    """
    pts = _as_points(points)
    n = len(pts)
    if n <= 2:
        return pts.copy()
    if count < 1:
        return np.zeros((0, 2), dtype=np.float64)

    seg_len = np.hypot(*np.diff(pts, axis=0).T)
    total = float(seg_len.sum())
    if total == 0:
        return pts.copy()
    if count == 1:
        return pts[:1].copy()

    out = np.empty((count, 2), dtype=np.float64)
    for s in range(count):
        target = s / (count - 1) * total
        acc = 0.0
        seg, u = n - 2, 1.0
        for i, length in enumerate(seg_len):
            if length == 0:
                continue
            if acc + length >= target:
                seg, u = i, (target - acc) / length
                break
            acc += length
        u = min(max(u, 0.0), 1.0)
        out[s] = _catmull_rom(*_neighbours(pts, seg), u)
    return out


def compute_directions(points: PointsLike, count: int) -> np.ndarray:
    """Unit tangent per blur sample along the smoothed path.

    The final tangent is repeated so the result has exactly count rows.
    Zero-length steps give (0, 0).

    Returns:
        directions: [count, 2]
    """
    pts = _as_points(points)
    if count < 1:
        return np.zeros((0, 2), dtype=np.float64)
    if len(pts) < 2:
        return np.tile([1.0, 0.0], (count, 1))

    curve = sample_curve(pts, count)
    diffs = np.diff(curve, axis=0)[: count - 1]
    norms = np.hypot(diffs[:, 0], diffs[:, 1])
    norms[norms == 0] = 1.0
    dirs = diffs / norms[:, None]

    if len(dirs) == 0:
        return np.tile([1.0, 0.0], (count, 1))
    pad = count - len(dirs)
    return np.concatenate([dirs, np.repeat(dirs[-1:], pad, axis=0)], axis=0)
