from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import REPORT_FILES, DormitoryReport
from .repository import DormitoryReportRepository


class RemoteDormitoryReportRepository(DormitoryReportRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[DormitoryReport]:
        return [DormitoryReport.from_remote(r) for r in self._store.fetch_sheet("reports")]

    def save(self, report: DormitoryReport, *, is_new: bool) -> DormitoryReport:
        action = "addReport" if is_new else "updateReport"
        saved = self._store.save(action, report.to_remote(), REPORT_FILES)
        return DormitoryReport.from_remote(saved) if saved else report

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteReports", ids)
