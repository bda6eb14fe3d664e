"""Render configuration and per-session parameters."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Tuple, Dict, Any, Union
import yaml


DEFAULT_POINTS: Tuple[Tuple[float, float], ...] = ((40.0, 160.0), (100.0, 40.0), (160.0, 160.0))


@dataclass
class RenderConfig:
    """Engine-wide constants for path editing and blur rendering.

    Distances for path editing are in logical frame units; crop values are
    in display pixels.
    """
    # Path frame
    frame_size: float = 200.0
    default_points: Tuple[Tuple[float, float], ...] = DEFAULT_POINTS
    insert_threshold: float = 10.0  # inserts closer than this to a point are declined
    hit_radius: float = 8.0
    curve_resolution: int = 100

    # Blur
    num_samples: int = 20
    default_blur_radius: int = 15

    # Source / export
    max_working_width: int = 600
    min_crop_size: int = 20
    crop_hit_tolerance: float = 6.0
    export_scales: Tuple[float, ...] = (1.0, 0.5, 0.25)

    device: str = "cpu"

    def __post_init__(self):
        if self.frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {self.frame_size}")
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be >= 1, got {self.num_samples}")
        if self.default_blur_radius < 0:
            raise ValueError(f"default_blur_radius must be >= 0, got {self.default_blur_radius}")
        if len(self.default_points) < 2:
            raise ValueError("default_points needs at least 2 points")
        self.default_points = tuple((float(x), float(y)) for x, y in self.default_points)
        self.export_scales = tuple(float(s) for s in self.export_scales)

    def default_params(self) -> "RenderParameters":
        """Fresh parameters for a new editing session."""
        return RenderParameters(
            blur_radius=self.default_blur_radius,
            rotation=0.0,
            num_samples=self.num_samples,
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["default_points"] = [list(p) for p in self.default_points]
        d["export_scales"] = list(self.export_scales)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RenderConfig":
        valid_keys = set(cls.__dataclass_fields__)
        unknown = set(d) - valid_keys
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**d)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RenderConfig":
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get("render", data))


@dataclass
class RenderParameters:
    """User-controlled parameters for a single editing session."""
    blur_radius: int = 15
    rotation: float = 0.0  # degrees
    num_samples: int = 20

    def __post_init__(self):
        self.blur_radius = int(self.blur_radius)
        self.rotation = float(self.rotation)
        self.num_samples = int(self.num_samples)
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius must be >= 0, got {self.blur_radius}")
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be >= 1, got {self.num_samples}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RenderParameters":
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)
