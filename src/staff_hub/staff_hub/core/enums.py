from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account level used for role gating."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class ShiftCategory(str, Enum):
    """What a rota entry pays out as."""

    WORKED = "worked"
    PAID_LEAVE = "paid_leave"
    UNPAID_LEAVE = "unpaid_leave"
    SICKNESS = "sickness"


class HolidayRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class AppraisalType(str, Enum):
    ANNUAL = "annual"
    MID_YEAR = "midYear"
    PROBATIONARY = "probationary"


class AppraisalStatus(str, Enum):
    """Classification of an employee's next appraisal."""

    OVERDUE = "overdue"
    DUE_SOON = "dueSoon"
    UP_TO_DATE = "upToDate"
    NO_HISTORY = "noHistory"


class StockRequestStatus(str, Enum):
    """Stock request lifecycle, in order."""

    REQUESTED = "requested"
    ORDERED = "ordered"
    DELIVERED = "delivered"
    ARCHIVED = "archived"


class PayrollPeriod(str, Enum):
    CURRENT_WEEK = "current-week"
    TWO_WEEK = "two-week"
    CUSTOM = "custom"


class TrainingStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"


class ExpiryStatus(str, Enum):
    """How close a dated record (training, stock) is to its expiry."""

    EXPIRED = "expired"
    EXPIRING_SOON = "expiringSoon"
    VALID = "valid"


class InventoryOrderStatus(str, Enum):
    OK = "ok"
    ORDER_REQUIRED = "orderRequired"
    ORDERED = "ordered"


class DocumentCategory(str, Enum):
    HANDBOOK = "handbook"
    POLICY = "policy"
    FORM = "form"
    OTHER = "other"


class ResourceCategory(str, Enum):
    LOGINS = "logins"
    PRICES = "prices"
    FORMS = "forms"
    OTHER = "other"


class ManagerNoteType(str, Enum):
    GENERAL = "general"
    CONCERN = "concern"
    SICKNESS = "sickness"
    PERFORMANCE = "performance"
