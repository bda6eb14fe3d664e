"""Drag state machine for point and crop-edge dragging.

States: Idle, DraggingPoint(index), DraggingCropEdge(edge). A drag starts
only from Idle, so at most one drag is active at any time.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .engine import EditorState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DraggingPoint:
    index: int


@dataclass(frozen=True)
class DraggingCropEdge:
    edge: str


DragState = Union[Idle, DraggingPoint, DraggingCropEdge]


class DragController:
    """Routes pointer input into path and crop edits.

    Point positions are in the path's logical frame; crop positions are in
    display pixels. Translating raw pointer coordinates is the caller's job.
    """

    def __init__(self, state: EditorState):
        self.state = state
        self.mode: DragState = Idle()

    @property
    def is_idle(self) -> bool:
        return isinstance(self.mode, Idle)

    def begin_point_drag(self, view_pos: Sequence[float]) -> bool:
        """Grab the control point under view_pos."""
        if not self.is_idle:
            return False
        idx = self.state.path.find_nearest(view_pos, self.state.cfg.hit_radius)
        if idx is None:
            return False
        self.mode = DraggingPoint(idx)
        logger.debug("Dragging point %d", idx)
        return True

    def begin_crop_drag(self, display_pos: Sequence[float]) -> bool:
        """Grab the crop edge under display_pos."""
        if not self.is_idle or self.state.crop is None:
            return False
        edge = self.state.crop.hit_edge(display_pos[0], display_pos[1], self.state.cfg.crop_hit_tolerance)
        if edge is None:
            return False
        self.mode = DraggingCropEdge(edge)
        logger.debug("Dragging crop edge %s", edge)
        return True

    def drag_to(self, pos: Sequence[float]) -> bool:
        """Apply a pointer move to the active drag; False when idle."""
        if isinstance(self.mode, DraggingPoint):
            return self.state.path.move_point(self.mode.index, pos)
        if isinstance(self.mode, DraggingCropEdge):
            value = pos[0] if self.mode.edge in ("left", "right") else pos[1]
            self.state.crop.move_edge(self.mode.edge, float(value))
            return True
        return False

    def release(self) -> Optional[DragState]:
        """End the active drag and return the state that ended."""
        ended = None if self.is_idle else self.mode
        self.mode = Idle()
        return ended
