"""Edge extension and directional blur accumulation."""

import torch
import torch.nn.functional as F
import numpy as np
from typing import Union

from .utils import round_half_up


def extend_edges(image: torch.Tensor, radius: int) -> torch.Tensor:
    """Pad image by radius pixels on every side, replicating the border.

    Strips repeat the outermost row/column and corners repeat the corner
    pixel, so shifted reads near the boundary never see transparency.

    Args:
        image: [C, H, W] image
        radius: non-negative padding in pixels

    Returns:
        extended: [C, H + 2r, W + 2r]
    """
    radius = int(radius)
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    if radius == 0:
        return image
    # replicate padding needs a batch dimension
    return F.pad(image.unsqueeze(0), (radius, radius, radius, radius), mode="replicate").squeeze(0)


def sample_offsets(directions: np.ndarray, blur_radius: float) -> np.ndarray:
    """Integer (dx, dy) offset per accumulation sample.

    Sample i uses fraction f = i / (K - 1) - 0.5 along the negated tangent,
    centering the blur on the unshifted image.

    Returns:
        offsets: [K, 2] int
    """
    dirs = np.asarray(directions, dtype=np.float64).reshape(-1, 2)
    K = len(dirs)
    offsets = np.zeros((K, 2), dtype=np.int64)
    for i, (dx, dy) in enumerate(dirs):
        f = i / (K - 1) - 0.5 if K > 1 else 0.0
        offsets[i, 0] = round_half_up(-dx * blur_radius * f)
        offsets[i, 1] = round_half_up(-dy * blur_radius * f)
    return offsets


@torch.no_grad()
def composite(
    extended: torch.Tensor,
    directions: Union[np.ndarray, torch.Tensor],
    blur_radius: int,
    out_w: int,
    out_h: int,
) -> torch.Tensor:
    """Average K direction-shifted windows of an edge-extended image.

    Each window contributes with weight exactly 1/K in premultiplied alpha;
    the sum is converted back to straight alpha.

    Args:
        extended: [4, H + 2r, W + 2r] straight-alpha RGBA, r = blur_radius
        directions: [K, 2] unit tangents, one per accumulation sample
        blur_radius: radius the image was extended by
        out_w, out_h: output size

    Returns:
        blur: [4, out_h, out_w] straight-alpha RGBA
    """
    if isinstance(directions, torch.Tensor):
        directions = directions.detach().cpu().numpy()
    C, ext_h, ext_w = extended.shape
    if C != 4:
        raise ValueError(f"Expected RGBA image [4, H, W], got {tuple(extended.shape)}")

    offsets = sample_offsets(directions, blur_radius)
    K = len(offsets)
    out_dtype = extended.dtype
    if K == 0 or out_w <= 0 or out_h <= 0:
        return torch.zeros(4, max(out_h, 0), max(out_w, 0), dtype=out_dtype, device=extended.device)

    # float64 accumulation keeps the radius-0 case bit-exact
    src = extended.to(torch.float64)
    alpha = src[3:4]
    premult = torch.cat([src[:3] * alpha, alpha], dim=0)

    acc = torch.zeros(4, out_h, out_w, dtype=torch.float64, device=extended.device)
    for dx, dy in offsets:
        x0 = min(max(blur_radius + int(dx), 0), max(ext_w - out_w, 0))
        y0 = min(max(blur_radius + int(dy), 0), max(ext_h - out_h, 0))
        window = premult[:, y0:y0 + out_h, x0:x0 + out_w]
        acc[:, :window.shape[1], :window.shape[2]] += window
    acc = acc / K

    out_alpha = acc[3:4]
    rgb = torch.where(out_alpha > 0, acc[:3] / out_alpha.clamp(min=1e-12), torch.zeros_like(acc[:3]))
    return torch.cat([rgb, out_alpha], dim=0).clamp(0, 1).to(out_dtype)
