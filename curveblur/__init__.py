"""CurveBlur: directional motion blur that follows an editable curve.

Main components:
- core: path model, curve sampling, blur compositing (EditorState, RenderPipeline)
- codecs: image and session encoding
- cli: command-line rendering
"""

from .core import (
    RenderConfig,
    RenderParameters,
    PathModel,
    CropRegion,
    EditorState,
    RenderPipeline,
    DragController,
    sample_curve,
    compute_directions,
    extend_edges,
    composite,
)
from .codecs import ImageCodec, SessionCodec

__version__ = "0.1.0"
__all__ = [
    # Core
    "RenderConfig",
    "RenderParameters",
    "PathModel",
    "CropRegion",
    "EditorState",
    "RenderPipeline",
    "DragController",
    "sample_curve",
    "compute_directions",
    "extend_edges",
    "composite",
    # Codecs
    "ImageCodec",
    "SessionCodec",
]
