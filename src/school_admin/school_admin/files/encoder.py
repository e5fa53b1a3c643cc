from __future__ import annotations

import base64
import io
import logging
from pathlib import PurePath
from typing import Any, Mapping

from PIL import Image, ImageOps

from ..core.constants import DEFAULT_IMAGE_MAX_DIMENSION, DEFAULT_JPEG_QUALITY
from .model import EncodedFile, EncodingPlan, LocalFile

logger = logging.getLogger(__name__)


def _b64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def _jpg_name(filename: str) -> str:
    stem = PurePath(filename or "").stem or "image"
    return f"{stem}.jpg"


class FileEncoder:
    """Turns LocalFiles into ``{filename, mimeType, data}`` transport objects.

    Images are shrunk and re-encoded as JPEG because every stored file costs
    the remote store a Drive upload; when that fails the original bytes are
    sent as they are.
    """

    def __init__(self, *, max_dimension: int = DEFAULT_IMAGE_MAX_DIMENSION, jpeg_quality: int = DEFAULT_JPEG_QUALITY):
        self._max_dimension = int(max_dimension)
        self._jpeg_quality = int(jpeg_quality)

    def _compress(self, content: bytes) -> bytes:
        with Image.open(io.BytesIO(content)) as img:
            img.load()
            out_img = ImageOps.exif_transpose(img)
            out_img.thumbnail((self._max_dimension, self._max_dimension))
            if out_img.mode != "RGB":
                out_img = out_img.convert("RGB")
            out = io.BytesIO()
            out_img.save(out, format="JPEG", quality=self._jpeg_quality)
            return out.getvalue()

    def encode_file(self, file: LocalFile) -> EncodedFile:
        if file.is_image:
            try:
                compressed = self._compress(file.content)
            except Exception:
                logger.warning("Image compression failed for %s, sending original bytes", file.filename, exc_info=True)
            else:
                return EncodedFile(filename=_jpg_name(file.filename), mime_type="image/jpeg", data=_b64(compressed))

        return EncodedFile(
            filename=file.filename,
            mime_type=file.mime_type or "application/octet-stream",
            data=_b64(file.content),
        )

    def encode_data_uri(self, value: Any, *, name: str) -> Any:
        """Encode a ``data:`` string; stored URLs and empty values pass through."""
        if isinstance(value, LocalFile):
            return self.encode_file(value).to_wire()
        if not isinstance(value, str) or not value.startswith("data:"):
            return value
        local = LocalFile.from_data_uri(value, name=name)
        if local is None:
            logger.warning("Field %s holds an unreadable data URI; leaving it out", name)
            return ""
        return self.encode_file(local).to_wire()

    def encode_payload(self, record: Mapping[str, Any], plan: EncodingPlan) -> dict:
        """Return a copy of ``record`` with every declared file field encoded."""
        out = dict(record)

        for name in plan.single_fields:
            value = out.get(name)
            if isinstance(value, LocalFile):
                out[name] = self.encode_file(value).to_wire()

        for name in plan.array_fields:
            value = out.get(name)
            if isinstance(value, LocalFile):
                value = [value]
            if isinstance(value, (list, tuple)):
                out[name] = [self.encode_file(v).to_wire() if isinstance(v, LocalFile) else v for v in value]

        for name in plan.data_uri_fields:
            if name in out:
                out[name] = self.encode_data_uri(out[name], name=name)

        for name, value in out.items():
            if isinstance(value, LocalFile) or (
                isinstance(value, (list, tuple)) and any(isinstance(v, LocalFile) for v in value)
            ):
                raise TypeError(f"Field {name!r} carries a file but is not declared in the encoding plan")

        return out
