from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from dataclasses import dataclass, field
from typing import Optional

from werkzeug.datastructures import FileStorage

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*?);base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class LocalFile:
    """A user-selected file that has not been uploaded yet."""

    filename: str
    mime_type: str
    content: bytes = field(repr=False)

    @property
    def is_image(self) -> bool:
        return (self.mime_type or "").startswith("image/")

    def preview_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type or 'application/octet-stream'};base64,{encoded}"

    @classmethod
    def from_storage(cls, storage: FileStorage) -> "LocalFile":
        filename = storage.filename or "upload"
        mime_type = storage.mimetype or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return cls(filename=filename, mime_type=mime_type, content=storage.read())

    @classmethod
    def from_data_uri(cls, uri: str, *, name: str = "file") -> Optional["LocalFile"]:
        m = _DATA_URI_RE.match(uri.strip()) if isinstance(uri, str) else None
        if not m:
            return None
        try:
            content = base64.b64decode(m.group("data"), validate=False)
        except (binascii.Error, ValueError):
            return None
        mime_type = m.group("mime") or "application/octet-stream"
        ext = mimetypes.guess_extension(mime_type) or ""
        return cls(filename=f"{name}{ext}", mime_type=mime_type, content=content)


@dataclass(frozen=True)
class EncodedFile:
    filename: str
    mime_type: str
    data: str = field(repr=False)

    def to_wire(self) -> dict:
        return {"filename": self.filename, "mimeType": self.mime_type, "data": self.data}


@dataclass(frozen=True)
class EncodingPlan:
    """Which fields of a record may carry files.

    single_fields: one LocalFile
    array_fields: list mixing stored URLs and new LocalFiles
    data_uri_fields: raw ``data:`` strings (signature pads, logos, camera snapshots)
    """

    single_fields: tuple[str, ...] = ()
    array_fields: tuple[str, ...] = ()
    data_uri_fields: tuple[str, ...] = ()


NO_FILES = EncodingPlan()
