from __future__ import annotations

from dataclasses import dataclass

from .appraisals.mysql_appraisal_repository import MySQLAppraisalRepository
from .appraisals.service import AppraisalService
from .badges.mysql_badge_repository import MySQLBadgeRepository
from .badges.service import BadgeService
from .common.query_cache import QueryCache
from .core.constants import DEFAULT_QUERY_STALE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.service import DocumentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .holidays.mysql_holiday_repository import MySQLHolidayRequestRepository
from .holidays.service import HolidayService
from .inventory.mysql_inventory_repository import MySQLInventoryRepository
from .inventory.service import InventoryService
from .manager_notes.mysql_manager_note_repository import MySQLManagerNoteRepository
from .manager_notes.service import ManagerNoteService
from .nominations.mysql_nomination_repository import MySQLNominationRepository
from .nominations.service import NominationService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .resources.mysql_resource_repository import MySQLResourceRepository
from .resources.service import ResourceService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService
from .sickness.mysql_sickness_repository import MySQLSicknessRepository
from .sickness.service import SicknessService
from .stock_requests.mysql_stock_request_repository import MySQLStockRequestRepository
from .stock_requests.service import StockRequestService
from .todos.mysql_todo_repository import MySQLToDoRepository
from .todos.service import TodoService
from .training.mysql_training_repository import MySQLTrainingRepository
from .training.service import TrainingService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    cache: QueryCache

    employee_service: EmployeeService
    shift_service: ShiftService
    holiday_service: HolidayService
    payroll_report_service: PayrollReportService
    appraisal_service: AppraisalService
    todo_service: TodoService
    stock_request_service: StockRequestService
    nomination_service: NominationService
    training_service: TrainingService
    sickness_service: SicknessService
    inventory_service: InventoryService
    document_service: DocumentService
    resource_service: ResourceService
    manager_note_service: ManagerNoteService
    badge_service: BadgeService


def build_container(*, db_config: dict, stale_seconds: float = DEFAULT_QUERY_STALE_SECONDS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    cache = QueryCache(stale_seconds=stale_seconds)

    employee_service = EmployeeService(MySQLEmployeeRepository(conn), cache)
    shift_service = ShiftService(MySQLShiftRepository(conn), cache)
    holiday_service = HolidayService(MySQLHolidayRequestRepository(conn), cache)
    payroll_report_service = PayrollReportService(
        employee_service,
        shift_service,
        holiday_service,
        calculator=StandardPayrollCalculator(),
    )
    appraisal_service = AppraisalService(MySQLAppraisalRepository(conn), employee_service, cache)

    return Container(
        conn=conn,
        cache=cache,
        employee_service=employee_service,
        shift_service=shift_service,
        holiday_service=holiday_service,
        payroll_report_service=payroll_report_service,
        appraisal_service=appraisal_service,
        todo_service=TodoService(MySQLToDoRepository(conn), cache),
        stock_request_service=StockRequestService(MySQLStockRequestRepository(conn), cache),
        nomination_service=NominationService(MySQLNominationRepository(conn), cache),
        training_service=TrainingService(MySQLTrainingRepository(conn), employee_service, cache),
        sickness_service=SicknessService(MySQLSicknessRepository(conn), employee_service, cache),
        inventory_service=InventoryService(MySQLInventoryRepository(conn), cache),
        document_service=DocumentService(MySQLDocumentRepository(conn), cache),
        resource_service=ResourceService(MySQLResourceRepository(conn), cache),
        manager_note_service=ManagerNoteService(MySQLManagerNoteRepository(conn), employee_service, cache),
        badge_service=BadgeService(MySQLBadgeRepository(conn), employee_service, cache),
    )
