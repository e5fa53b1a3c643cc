from __future__ import annotations

from typing import Any, Mapping, Protocol


class SchoolDataRepository(Protocol):
    def load_all(self) -> Any:
        raise NotImplementedError

    def save_settings(self, settings: Mapping[str, Any]) -> Any:
        raise NotImplementedError
