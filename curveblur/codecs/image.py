"""Raster decode/encode between files or bytes and RGBA arrays."""

import io
import numpy as np
from PIL import Image
from pathlib import Path
from typing import Union


class ImageCodec:
    """Decode images to float32 [H, W, 4] RGBA in [0, 1] and encode them back."""

    @staticmethod
    def decode(data: Union[bytes, Image.Image]) -> np.ndarray:
        """Decode encoded bytes or a PIL image."""
        img = data if isinstance(data, Image.Image) else Image.open(io.BytesIO(data))
        img = img.convert("RGBA")
        return np.array(img, dtype=np.float32) / 255.0

    @staticmethod
    def encode(image: np.ndarray, fmt: str = "PNG") -> bytes:
        """Encode [H, W, 4] (uint8, or float in [0, 1]) to bytes.

        Formats without alpha (JPEG) drop the alpha channel.
        """
        arr = np.asarray(image)
        if arr.dtype != np.uint8:
            arr = (np.clip(arr, 0, 1) * 255 + 0.5).astype(np.uint8)
        img = Image.fromarray(arr)
        if fmt.upper() in ("JPEG", "JPG"):
            img = img.convert("RGB")
            fmt = "JPEG"
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    @classmethod
    def load(cls, path: Union[str, Path]) -> np.ndarray:
        with Image.open(path) as img:
            return cls.decode(img)

    @classmethod
    def save(cls, path: Union[str, Path], image: np.ndarray) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = "JPEG" if path.suffix.lower() in (".jpg", ".jpeg") else "PNG"
        path.write_bytes(cls.encode(image, fmt))
