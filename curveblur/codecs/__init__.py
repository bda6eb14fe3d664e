"""CurveBlur Codecs: image and session encoding."""

from .image import ImageCodec
from .session import SessionCodec

__all__ = ["ImageCodec", "SessionCodec"]
