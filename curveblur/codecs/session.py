"""Session encoding/decoding for storage."""

import yaml
import numpy as np
from pathlib import Path
from typing import Dict, Any, Union, Optional

from ..core.config import RenderParameters
from ..core.engine import EditorState


class SessionCodec:
    """Encode/decode an editing session to/from a YAML document.

    Format: a mapping with
        - version: format version
        - frame_size: logical path frame size
        - points: [N, 2] canonical control points
        - params: blur_radius, rotation, num_samples
        - crop: left/top/right/bottom in display pixels (optional)
    """

    VERSION = 1

    @classmethod
    def encode(cls, state: EditorState) -> Dict[str, Any]:
        data = {
            "version": cls.VERSION,
            "frame_size": float(state.path.frame_size),
            "points": state.path.canonical_points.tolist(),
            "params": state.params.to_dict(),
        }
        if state.crop is not None:
            data["crop"] = {k: float(v) for k, v in state.crop.to_dict().items()}
        return data

    @classmethod
    def decode(cls, data: Dict[str, Any], state: Optional[EditorState] = None) -> EditorState:
        """Apply a decoded session to state (a fresh EditorState if None).

        The crop is applied only when an image is already loaded; it is
        clamped to the current display.
        """
        version = data.get("version", cls.VERSION)
        if version > cls.VERSION:
            raise ValueError(f"Unsupported session version: {version}")
        if state is None:
            state = EditorState()

        if "frame_size" in data:
            state.path.frame_size = float(data["frame_size"])
        if "points" in data:
            state.path.reset(np.asarray(data["points"], dtype=np.float64))
        if "params" in data:
            params = RenderParameters.from_dict({**state.params.to_dict(), **data["params"]})
            state.params = params
        if "crop" in data and state.crop is not None:
            crop = state.crop
            edges = {**crop.to_dict(), **data["crop"]}
            crop.left, crop.top = edges["left"], edges["top"]
            crop.right, crop.bottom = edges["right"], edges["bottom"]
            crop.clamp()
        return state

    @classmethod
    def save(cls, path: Union[str, Path], state: EditorState) -> None:
        with open(path, "w") as f:
            yaml.safe_dump(cls.encode(state), f, sort_keys=False)

    @classmethod
    def load(cls, path: Union[str, Path], state: Optional[EditorState] = None) -> EditorState:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.decode(data, state)
