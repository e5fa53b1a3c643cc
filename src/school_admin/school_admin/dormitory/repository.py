from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import DormitoryReport


class DormitoryReportRepository(Protocol):
    def list_all(self) -> Sequence[DormitoryReport]:
        raise NotImplementedError

    def save(self, report: DormitoryReport, *, is_new: bool) -> DormitoryReport:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
