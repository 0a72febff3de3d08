"""Domain types for hostel booking requests."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

import pytz


class Role(str, Enum):
    STUDENT = 'student'
    RECEPTION = 'reception'
    ADMIN = 'admin'


class RequestType(str, Enum):
    SINGLE = 'single'
    SHARED = 'shared'
    FAMILY = 'family'
    GUEST = 'guest'


class Status(str, Enum):
    PENDING = 'pending'
    RECEPTION_APPROVED = 'reception-approved'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    RECONSIDERED = 'reconsidered'


class Priority(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


# Resolved requests count towards processing time
RESOLVED_STATUSES = (Status.APPROVED, Status.REJECTED, Status.RECONSIDERED)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every operation."""

    id: str
    email: str
    name: str
    role: Role
    department: Optional[str] = None


@dataclass(frozen=True)
class Spoc:
    name: str
    email: str


@dataclass(frozen=True)
class NewBookingRequest:
    request_type: RequestType
    department: str
    number_of_rooms: int
    start_date: date
    end_date: date
    reason: str
    spoc: Spoc


@dataclass(frozen=True)
class BookingRequest:
    id: str
    requester_id: str
    requester_name: str
    department: str
    request_type: RequestType
    number_of_rooms: int
    start_date: date
    end_date: date
    reason: str
    spoc: Spoc
    status: Status
    created_at: datetime
    updated_at: datetime
    priority: Optional[Priority] = None
    reception_note: Optional[str] = None
    admin_note: Optional[str] = None
    documents: List[str] = field(default_factory=list)

    def __post_init__(self):
        # Timestamps are always UTC-aware; naive values are taken as UTC
        for name in ('created_at', 'updated_at'):
            value = getattr(self, name)
            if isinstance(value, datetime) and value.tzinfo is None:
                object.__setattr__(self, name, pytz.utc.localize(value))

    @property
    def is_resolved(self) -> bool:
        return self.status in RESOLVED_STATUSES


@dataclass(frozen=True)
class ReceptionDecision:
    """First-stage decision. Only reception may send it."""

    decision: str  # approve | reject
    note: Optional[str] = None
    priority: Optional[Priority] = None

    role = Role.RECEPTION
    note_field = 'reception_note'


@dataclass(frozen=True)
class AdminDecision:
    """Final decision. Only admin may send it."""

    decision: str  # approve | reconsider
    note: Optional[str] = None

    role = Role.ADMIN
    note_field = 'admin_note'
