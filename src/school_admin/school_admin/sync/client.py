from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Callable, Mapping, Optional

import requests

from ..core.constants import (
    BACKOFF_BASE_SECONDS,
    DEFAULT_SYNC_RETRIES,
    DEFAULT_SYNC_TIMEOUT_SECONDS,
    ERROR_BODY_PREVIEW_CHARS,
)
from ..core.enums import ResponseStatus
from ..core.exceptions import (
    RemoteBusinessError,
    RemoteTimeoutError,
    RemoteTransportError,
    StaleDeploymentError,
)
from .credentials import CredentialsProvider
from .envelope import ResponseEnvelope

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "การเชื่อมต่อหมดเวลา (Timeout) กรุณาตรวจสอบอินเทอร์เน็ตแล้วลองใหม่อีกครั้ง"
_STALE_MARKERS = ("Invalid action", "Unknown action")
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)


def stale_deployment_message(action: Any) -> str:
    return (
        f'Google Script ยังไม่อัปเดตฟังก์ชัน "{action}": '
        "กรุณานำโค้ดใหม่ไปวางในไฟล์ รหัส.gs แล้ว Deploy ใหม่อีกครั้ง"
    )


def _describe_non_json(text: str) -> str:
    m = _TITLE_RE.search(text)
    if m and m.group(1).strip():
        return f"Server returned HTML instead of JSON: {m.group(1).strip()}"
    return f"Invalid JSON response: {text[:ERROR_BODY_PREVIEW_CHARS]}"


class RemoteSyncClient:
    """HTTP bridge to the spreadsheet backend.

    Every call is a POST of a JSON document to one endpoint. The body is sent
    as ``text/plain`` so browsers talking to the same script never need a CORS
    preflight; the script only ever answers HTTP 200 for business outcomes and
    puts the real result in ``status``.

    Transport problems (timeouts, connection errors, non-2xx, empty or non-JSON
    bodies) are retried with linear backoff. ``status: "error"`` is final.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        credentials: Optional[CredentialsProvider] = None,
        retries: int = DEFAULT_SYNC_RETRIES,
        timeout_seconds: float = DEFAULT_SYNC_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self._endpoint = endpoint
        self._credentials = credentials
        self._retries = int(retries)
        self._timeout = float(timeout_seconds)
        self._session = session or requests.Session()
        self._sleep = sleep
        self._clock = clock

    def send(self, payload: Mapping[str, Any], *, retries: Optional[int] = None) -> ResponseEnvelope:
        attempts = max(1, int(self._retries if retries is None else retries))
        action = payload.get("action")
        attempt = 0

        while True:
            attempt += 1
            try:
                return self._attempt(payload)
            except RemoteBusinessError:
                raise
            except requests.Timeout as exc:
                logger.warning("Remote action %s timed out (attempt %d/%d)", action, attempt, attempts)
                if attempt >= attempts:
                    raise RemoteTimeoutError(TIMEOUT_MESSAGE) from exc
            except (RemoteTransportError, requests.RequestException) as exc:
                logger.warning("Remote action %s failed (attempt %d/%d): %s", action, attempt, attempts, exc)
                if attempt >= attempts:
                    raise

            self._sleep(BACKOFF_BASE_SECONDS * attempt)

    def _auth(self) -> Optional[dict]:
        if self._credentials is None:
            return None
        try:
            creds = self._credentials()
        except Exception:
            logger.warning("Could not read stored credentials; sending without auth", exc_info=True)
            return None
        return creds.to_wire() if creds else None

    def _attempt(self, payload: Mapping[str, Any]) -> ResponseEnvelope:
        body = dict(payload)
        auth = self._auth()
        if auth:
            body["auth"] = auth

        response = self._session.post(
            self._endpoint,
            params={"t": int(self._clock() * 1000)},
            data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "text/plain;charset=utf-8"},
            timeout=self._timeout,
        )
        if not response.ok:
            raise RemoteTransportError(f"Failed to post data. Status: {response.status_code}.")

        text = response.text
        if not text or not text.strip():
            raise RemoteTransportError("server returned empty response")

        try:
            result = json.loads(text)
        except ValueError:
            raise RemoteTransportError(_describe_non_json(text)) from None
        if not isinstance(result, dict):
            raise RemoteTransportError(f"Invalid JSON response: {text[:ERROR_BODY_PREVIEW_CHARS]}")

        status = result.get("status")
        if status == ResponseStatus.ERROR.value:
            raise self._business_error(payload.get("action"), result)
        if status != ResponseStatus.SUCCESS.value:
            raise RemoteBusinessError(result.get("message") or f"Unexpected response status: {status!r}")

        return ResponseEnvelope.from_json(result)

    @staticmethod
    def _business_error(action: Any, result: Mapping[str, Any]) -> RemoteBusinessError:
        message = str(result.get("message") or "Unknown error")
        logger.error("Google Script Error for %s: %s", action, message)
        if result.get("stack"):
            logger.debug("Remote stack for %s: %s", action, result["stack"])
        if any(marker in message for marker in _STALE_MARKERS):
            return StaleDeploymentError(stale_deployment_message(action))
        return RemoteBusinessError(message)
