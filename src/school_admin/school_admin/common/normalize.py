from __future__ import annotations

import json
import re
from typing import Any, Optional

from ..core.constants import DRIVE_THUMBNAIL_URL, MAX_UNWRAP_ATTEMPTS
from ..files.model import LocalFile

_DRIVE_ID_PATTERNS = (
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"id=([a-zA-Z0-9_-]+)"),
)
_OUTER_WRAPPING = re.compile(r"^[\"'\[]+|[\"'\]]+$")
_LEFTOVER_WRAPPING = re.compile(r"[\[\]\"']")


def normalize_array(value: Any) -> list:
    """Coerce a loosely typed stored value into a list.

    The bridge may hand back a real list, a JSON list encoded as a string
    (sometimes with single quotes), a bare URL or nothing at all. Never raises.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)

    if isinstance(value, str):
        clean = value.strip()
        if clean.startswith("[") and clean.endswith("]"):
            try:
                parsed = json.loads(clean.replace("'", '"'))
            except (ValueError, RecursionError):
                parsed = None
            if isinstance(parsed, list):
                return parsed
        return [value]

    return []


def _looks_wrapped(value: str) -> bool:
    return value.startswith(("[", "{", '"', "'"))


def _unwrap_once(value: str) -> Optional[str]:
    """One unwrap step; ``None`` when the value is not valid JSON."""
    candidate = value
    if candidate.startswith("'") or (candidate.startswith(("[", "{")) and "'" in candidate):
        candidate = candidate.replace("'", '"')

    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError):
        return None

    if isinstance(parsed, list):
        if not parsed:
            return ""
        parsed = parsed[0]
    if isinstance(parsed, str):
        return parsed
    if isinstance(parsed, (int, float)) and not isinstance(parsed, bool):
        return str(parsed)
    return ""


def normalize_image_url(value: Any) -> str:
    """Resolve any stored image reference into something an <img> can show.

    Drive share links are rewritten to the thumbnail endpoint, ``data:`` URIs
    and plain URLs pass through. A LocalFile becomes a ``data:`` preview which
    the caller owns. Never raises; unresolvable input gives ``""``.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    if isinstance(value, LocalFile):
        return value.preview_uri()
    if not isinstance(value, str) or not value:
        return ""

    clean = value.strip()
    attempts = 0
    while _looks_wrapped(clean) and attempts < MAX_UNWRAP_ATTEMPTS:
        step = _unwrap_once(clean)
        if step is None:
            clean = _OUTER_WRAPPING.sub("", clean)
            break
        clean = step.strip()
        attempts += 1

    clean = _LEFTOVER_WRAPPING.sub("", clean).strip()
    if not clean:
        return ""
    if clean.startswith("data:"):
        return clean

    for pattern in _DRIVE_ID_PATTERNS:
        match = pattern.search(clean)
        if match:
            return DRIVE_THUMBNAIL_URL.format(file_id=match.group(1))

    return clean


def first_image_source(value: Any) -> Optional[str]:
    if isinstance(value, LocalFile):
        return normalize_image_url(value)
    items = normalize_array(value)
    if not items:
        return None
    return normalize_image_url(items[0]) or None


def digits_only(value: Any) -> str:
    """Id cards are stored with or without dashes/spaces; compare digits only."""
    if value is None:
        return ""
    return re.sub(r"\D", "", str(value))
