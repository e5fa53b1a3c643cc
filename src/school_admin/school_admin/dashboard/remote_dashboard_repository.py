from __future__ import annotations

from typing import Any, Mapping

from ..sync.remote_base import RemoteRecordStore
from .model import SETTINGS_FILES
from .repository import SchoolDataRepository


class RemoteSchoolDataRepository(SchoolDataRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def load_all(self) -> Any:
        return self._store.fetch("getAllData")

    def save_settings(self, settings: Mapping[str, Any]) -> Any:
        return self._store.save("updateSettings", settings, SETTINGS_FILES)
