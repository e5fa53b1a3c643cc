from __future__ import annotations

import json
from functools import wraps
from typing import Any, Optional

import requests
from flask import current_app, jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    RemoteSyncError,
    ValidationError,
)
from ..files.model import LocalFile
from ..sync.credentials import SessionUserStore


def json_ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_errors(view):
    """Translate domain and sync failures into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except RemoteSyncError as e:
            current_app.logger.warning("Remote sync failed: %s", e)
            return json_error(str(e), 502)
        except requests.RequestException:
            current_app.logger.exception("Remote bridge unreachable")
            return json_error("เกิดข้อผิดพลาดในการเชื่อมต่อ", 502)
        except Exception:
            current_app.logger.exception("Unhandled error in %s", request.path)
            return json_error("เกิดข้อผิดพลาดของระบบ", 500)

    return wrapper


def login_required(store: SessionUserStore):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if store.load() is None:
                return json_error("กรุณาเข้าสู่ระบบก่อนใช้งาน", 401)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def roles_required(store: SessionUserStore, *roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = store.load()
            if user is None:
                return json_error("กรุณาเข้าสู่ระบบก่อนใช้งาน", 401)
            if user.get("role") not in allowed:
                return json_error("คุณไม่มีสิทธิ์เข้าถึงส่วนนี้", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def request_payload() -> dict:
    """JSON body, or a multipart form whose structured part sits in ``payload``."""
    if request.is_json:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        return body

    data = {k: v for k, v in request.form.items() if k != "payload"}
    raw = request.form.get("payload")
    if raw:
        try:
            extra = json.loads(raw)
        except ValueError:
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        if isinstance(extra, dict):
            data.update(extra)
    return data


def uploaded_files(field: str) -> list[LocalFile]:
    return [LocalFile.from_storage(f) for f in request.files.getlist(field) if f and f.filename]
