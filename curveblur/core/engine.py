"""RenderPipeline: path -> directions -> edge extension -> blur compositing."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import cv2
import numpy as np
import torch

from .config import RenderConfig, RenderParameters
from .path import PathModel
from .crop import CropRegion
from .compositor import extend_edges, composite
from .utils import round_half_up

logger = logging.getLogger(__name__)


def _to_rgba_float(image: np.ndarray) -> np.ndarray:
    """[H, W], [H, W, 3] or [H, W, 4] array -> float32 [H, W, 4] in [0, 1]."""
    arr = np.asarray(image)
    if arr.ndim == 2:
        arr = arr[..., None].repeat(3, axis=2)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected image of shape [H, W], [H, W, 3] or [H, W, 4], got {arr.shape}")
    if arr.dtype == np.uint8:
        arr = arr.astype(np.float32) / 255.0
    else:
        arr = arr.astype(np.float32)
    if arr.shape[2] == 3:
        arr = np.concatenate([arr, np.ones_like(arr[..., :1])], axis=2)
    return np.clip(arr, 0.0, 1.0)


def resample(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize an [H, W, C] float image; area filter when shrinking."""
    h, w = image.shape[:2]
    if (w, h) == (width, height):
        return image.copy()
    interp = cv2.INTER_AREA if width < w or height < h else cv2.INTER_LINEAR
    out = cv2.resize(image, (width, height), interpolation=interp)
    return np.clip(out, 0.0, 1.0).astype(np.float32)


def _to_tensor(image: np.ndarray, device: str) -> torch.Tensor:
    return torch.from_numpy(np.ascontiguousarray(image.transpose(2, 0, 1))).to(device)


@dataclass
class SourceImage:
    """Decoded source: full-resolution original plus a display-sized copy.

    Both arrays are float32 [H, W, 4] straight-alpha RGBA in [0, 1].
    """
    original: np.ndarray
    display: np.ndarray

    @classmethod
    def from_array(cls, image: np.ndarray, max_working_width: int) -> "SourceImage":
        original = _to_rgba_float(image)
        h, w = original.shape[:2]
        if w > max_working_width:
            dw = max_working_width
            dh = max(1, round_half_up(h * max_working_width / w))
        else:
            dw, dh = w, h
        return cls(original=original, display=resample(original, dw, dh))

    @property
    def display_size(self) -> Tuple[int, int]:
        h, w = self.display.shape[:2]
        return w, h

    @property
    def original_size(self) -> Tuple[int, int]:
        h, w = self.original.shape[:2]
        return w, h


class EditorState:
    """Everything a render reads: path, parameters, source image and crop.

    Edits go through the methods here or the owned PathModel / CropRegion.
    The path owns the rotation; params.rotation reads through to it.
    Only one drag may mutate the state at a time (see DragController).
    """

    def __init__(self, cfg: Optional[RenderConfig] = None, params: Optional[RenderParameters] = None):
        self.cfg = cfg or RenderConfig()
        params = params or self.cfg.default_params()
        self.path = PathModel(
            self.cfg.default_points,
            frame_size=self.cfg.frame_size,
            rotation=params.rotation,
            insert_threshold=self.cfg.insert_threshold,
        )
        self._params = params
        self.max_working_width = self.cfg.max_working_width
        self.source: Optional[SourceImage] = None
        self.crop: Optional[CropRegion] = None

    @property
    def params(self) -> RenderParameters:
        """Session parameters; rotation always reads through to the path."""
        self._params.rotation = self.path.rotation
        return self._params

    @params.setter
    def params(self, params: RenderParameters) -> None:
        self._params = params
        self.path.set_rotation(params.rotation)

    @property
    def rotation(self) -> float:
        return self.path.rotation

    @property
    def has_image(self) -> bool:
        return self.source is not None

    @property
    def display_size(self) -> Tuple[int, int]:
        return self.source.display_size if self.source is not None else (0, 0)

    def load_image(self, image: np.ndarray) -> None:
        """Install a decoded image and reset the crop to the full frame."""
        self.source = SourceImage.from_array(image, self.max_working_width)
        w, h = self.source.display_size
        self.crop = CropRegion(w, h, min_size=self.cfg.min_crop_size)
        logger.info("Loaded image %dx%d (display %dx%d)", *self.source.original_size, w, h)

    def set_working_width(self, max_working_width: int) -> None:
        """Change the display resolution bound; the crop resets if the size changes."""
        self.max_working_width = int(max_working_width)
        if self.source is None:
            return
        old = self.source.display_size
        self.source = SourceImage.from_array(self.source.original, self.max_working_width)
        if self.source.display_size != old:
            self.crop.reset(*self.source.display_size)

    def set_blur_radius(self, radius: int) -> None:
        radius = int(radius)
        if radius < 0:
            raise ValueError(f"blur_radius must be >= 0, got {radius}")
        self.params.blur_radius = radius

    def set_rotation(self, theta: float) -> None:
        self.path.set_rotation(theta)

    def directions(self) -> np.ndarray:
        return self.path.directions(self.params.num_samples)

    def sampled_curve(self) -> np.ndarray:
        """View-space curve at the configured drawing resolution."""
        return self.path.sampled_curve(self.cfg.curve_resolution)


class RenderPipeline:
    """Renders the curve-driven blur at display and export resolutions."""

    def __init__(self, cfg: Optional[RenderConfig] = None):
        self.cfg = cfg or RenderConfig()

    @staticmethod
    def export_radius(blur_radius: int, scale: float) -> int:
        return int(math.ceil(blur_radius * scale))

    def _blur(self, image: np.ndarray, directions: np.ndarray, radius: int) -> torch.Tensor:
        h, w = image.shape[:2]
        src = _to_tensor(image, self.cfg.device)
        extended = extend_edges(src, radius)
        return composite(extended, directions, radius, w, h)

    def render_preview(self, state: EditorState) -> torch.Tensor:
        """Blur at display resolution; [4, H, W] RGBA (empty without an image)."""
        if state.source is None:
            return torch.zeros(4, 0, 0, device=self.cfg.device)
        directions = state.directions()
        radius = state.params.blur_radius
        logger.debug("Preview %dx%d radius=%d samples=%d", *state.display_size, radius, len(directions))
        return self._blur(state.source.display, directions, radius)

    def render_export(self, state: EditorState, scale: float = 1.0) -> Optional[torch.Tensor]:
        """Blur the original at scale x display size and apply the crop.

        Returns None when no image is loaded.
        """
        if state.source is None:
            return None
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        dw, dh = state.source.display_size
        sw = max(1, round_half_up(dw * scale))
        sh = max(1, round_half_up(dh * scale))
        radius = self.export_radius(state.params.blur_radius, scale)

        image = resample(state.source.original, sw, sh)
        blur = self._blur(image, state.directions(), radius)

        left, top, right, bottom = state.crop.scaled(scale, sw, sh)
        logger.debug("Export x%.2f: %dx%d radius=%d crop=(%d, %d, %d, %d)",
                     scale, sw, sh, radius, left, top, right, bottom)
        return blur[:, top:bottom, left:right].contiguous()

    def export_all(self, state: EditorState, scales: Optional[Iterable[float]] = None) -> Dict[float, torch.Tensor]:
        """Export at every tier; empty dict without an image."""
        scales = self.cfg.export_scales if scales is None else tuple(scales)
        out = {}
        for s in scales:
            result = self.render_export(state, s)
            if result is not None:
                out[s] = result
        return out

    @staticmethod
    def to_uint8(image: torch.Tensor) -> np.ndarray:
        """[4, H, W] float RGBA -> [H, W, 4] uint8."""
        arr = image.detach().cpu().numpy().transpose(1, 2, 0)
        return (np.clip(arr, 0, 1) * 255 + 0.5).astype(np.uint8)
