from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..common.normalize import normalize_array
from ..files.encoder import FileEncoder
from ..files.model import NO_FILES, EncodingPlan
from .client import RemoteSyncClient
from .envelope import ResponseEnvelope


def as_records(data: Any) -> list[dict]:
    """Rows of a sheet as a list of dicts, whatever shape the bridge used."""
    return [row for row in normalize_array(data) if isinstance(row, dict)]


def as_record(data: Any) -> Optional[dict]:
    """A single saved row; one-element lists are unwrapped."""
    if isinstance(data, dict):
        return data
    rows = as_records(data)
    if len(rows) == 1:
        return rows[0]
    return None


class RemoteRecordStore:
    """Shared persistence helpers on top of the sync client.

    Repositories describe *which* action and *which* file fields; this class
    does the encoding and the round trip.
    """

    def __init__(self, client: RemoteSyncClient, encoder: Optional[FileEncoder] = None):
        self._client = client
        self._encoder = encoder or FileEncoder()

    def call(self, action: str, **fields: Any) -> ResponseEnvelope:
        return self._client.send({"action": action, **fields})

    def fetch(self, action: str, **fields: Any) -> Any:
        return self.call(action, **fields).data

    def save(self, action: str, record: Mapping[str, Any], plan: EncodingPlan = NO_FILES) -> Optional[dict]:
        data = self._encoder.encode_payload(record, plan)
        return as_record(self.call(action, data=data).data)

    def save_batch(self, action: str, records: Iterable[Mapping[str, Any]]) -> list[dict]:
        return as_records(self.call(action, data=[dict(r) for r in records]).data)

    def delete(self, action: str, ids: Iterable[Any]) -> None:
        self.call(action, ids=list(ids))

    def fetch_sheet(self, key: str) -> list[dict]:
        """One collection out of ``getAllData``."""
        data = self.fetch("getAllData")
        if not isinstance(data, dict):
            return []
        return as_records(data.get(key))
