from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from .academic.remote_academic_repository import RemoteAcademicPlanRepository
from .academic.service import AcademicPlanService
from .attendance.factory import DutyStrategyFactory
from .attendance.remote_attendance_repository import RemoteAttendanceRepository, RemoteDutyRepository
from .attendance.service import AttendanceService, DutyService
from .core.constants import (
    DEFAULT_CHECK_IN_RADIUS_M,
    DEFAULT_IMAGE_MAX_DIMENSION,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_SCHOOL_LAT,
    DEFAULT_SCHOOL_LNG,
    DEFAULT_SYNC_RETRIES,
    DEFAULT_SYNC_TIMEOUT_SECONDS,
    DEFAULT_USER_STORAGE_KEY,
)
from .dashboard.remote_dashboard_repository import RemoteSchoolDataRepository
from .dashboard.service import DashboardService, SettingsService
from .dormitory.remote_dormitory_repository import RemoteDormitoryReportRepository
from .dormitory.service import DormitoryReportService
from .files.encoder import FileEncoder
from .leave.remote_leave_repository import RemoteLeaveRepository
from .leave.service import LeaveService
from .nutrition.remote_nutrition_repository import RemoteIngredientRepository, RemoteMealPlanRepository
from .nutrition.service import NutritionService
from .service_registration.remote_service_repository import RemoteServiceRecordRepository
from .service_registration.service import ServiceRegistrationService
from .students.remote_student_repository import RemoteStudentRepository
from .students.service import StudentService
from .supply.remote_procurement_repository import RemoteProcurementRepository
from .supply.service import ProcurementService
from .sync.client import RemoteSyncClient
from .sync.credentials import SessionUserStore
from .sync.remote_base import RemoteRecordStore
from .users.remote_personnel_repository import RemotePersonnelRepository
from .users.service import AuthService, PersonnelService, RegistrationService


@dataclass(frozen=True)
class Container:
    user_store: SessionUserStore
    client: RemoteSyncClient
    store: RemoteRecordStore

    auth_service: AuthService
    registration_service: RegistrationService
    personnel_service: PersonnelService
    student_service: StudentService
    attendance_service: AttendanceService
    duty_service: DutyService
    academic_service: AcademicPlanService
    nutrition_service: NutritionService
    service_registration_service: ServiceRegistrationService
    procurement_service: ProcurementService
    dormitory_service: DormitoryReportService
    leave_service: LeaveService
    dashboard_service: DashboardService
    settings_service: SettingsService


def build_container(
    *,
    sync_config: dict,
    school_config: Optional[dict] = None,
    session: Optional[requests.Session] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> Container:
    school_config = school_config or {}

    user_store = SessionUserStore(str(sync_config.get("user_storage_key", DEFAULT_USER_STORAGE_KEY)))
    client_kwargs = {}
    if sleep is not None:
        client_kwargs["sleep"] = sleep
    client = RemoteSyncClient(
        str(sync_config["script_url"]),
        credentials=user_store.credentials,
        retries=int(sync_config.get("retries", DEFAULT_SYNC_RETRIES)),
        timeout_seconds=float(sync_config.get("timeout_seconds", DEFAULT_SYNC_TIMEOUT_SECONDS)),
        session=session,
        **client_kwargs,
    )
    encoder = FileEncoder(
        max_dimension=int(sync_config.get("image_max_dimension", DEFAULT_IMAGE_MAX_DIMENSION)),
        jpeg_quality=int(sync_config.get("jpeg_quality", DEFAULT_JPEG_QUALITY)),
    )
    store = RemoteRecordStore(client, encoder)

    personnel_repo = RemotePersonnelRepository(store)
    school_data_repo = RemoteSchoolDataRepository(store)
    student_repo = RemoteStudentRepository(store)
    settings_service = SettingsService(school_data_repo)

    auth_service = AuthService(personnel_repo, user_store, admin_id_card=str(school_config.get("admin_id_card", "")))
    duty_service = DutyService(
        RemoteDutyRepository(store),
        school_lat=float(school_config.get("school_lat", DEFAULT_SCHOOL_LAT)),
        school_lng=float(school_config.get("school_lng", DEFAULT_SCHOOL_LNG)),
        radius_m=int(school_config.get("check_in_radius_m", DEFAULT_CHECK_IN_RADIUS_M)),
        strategy_factory=DutyStrategyFactory(),
        settings=school_data_repo,
    )

    return Container(
        user_store=user_store,
        client=client,
        store=store,
        auth_service=auth_service,
        registration_service=RegistrationService(personnel_repo),
        personnel_service=PersonnelService(personnel_repo),
        student_service=StudentService(student_repo),
        attendance_service=AttendanceService(RemoteAttendanceRepository(store)),
        duty_service=duty_service,
        academic_service=AcademicPlanService(RemoteAcademicPlanRepository(store)),
        nutrition_service=NutritionService(RemoteIngredientRepository(store), RemoteMealPlanRepository(store)),
        service_registration_service=ServiceRegistrationService(RemoteServiceRecordRepository(store)),
        procurement_service=ProcurementService(RemoteProcurementRepository(store)),
        dormitory_service=DormitoryReportService(RemoteDormitoryReportRepository(store), student_repo, settings_service),
        leave_service=LeaveService(RemoteLeaveRepository(store), settings_service),
        dashboard_service=DashboardService(school_data_repo, auth_service),
        settings_service=settings_service,
    )
