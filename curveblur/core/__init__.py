"""CurveBlur Core: path model, curve sampling and blur compositing."""

from .config import RenderConfig, RenderParameters
from .path import PathModel, rotate_points
from .curve import sample_curve, compute_directions
from .compositor import extend_edges, composite, sample_offsets
from .crop import CropRegion
from .engine import EditorState, RenderPipeline, SourceImage
from .interaction import DragController, Idle, DraggingPoint, DraggingCropEdge

__all__ = [
    "RenderConfig",
    "RenderParameters",
    "PathModel",
    "rotate_points",
    "sample_curve",
    "compute_directions",
    "extend_edges",
    "composite",
    "sample_offsets",
    "CropRegion",
    "EditorState",
    "RenderPipeline",
    "SourceImage",
    "DragController",
    "Idle",
    "DraggingPoint",
    "DraggingCropEdge",
]
