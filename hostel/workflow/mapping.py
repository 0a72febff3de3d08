"""Conversion between BookingRequest objects and flat storage rows.

Rows use snake_case column names, ISO-8601 strings for dates and timestamps,
and flatten the SPOC into ``spoc_name``/``spoc_email``.
"""
from datetime import date, datetime

import pytz

from hostel.workflow.models import (
    BookingRequest,
    Priority,
    RequestType,
    Spoc,
    Status,
)


def timestamp_to_str(value: datetime) -> str:
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.isoformat()


def timestamp_from_str(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    # Naive values coming back from the database are stored in UTC
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed


def date_from_str(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def to_store_row(request: BookingRequest) -> dict:
    return {
        'id': request.id,
        'user_id': request.requester_id,
        'requester_name': request.requester_name,
        'department': request.department,
        'request_type': request.request_type.value,
        'number_of_rooms': request.number_of_rooms,
        'start_date': request.start_date.isoformat(),
        'end_date': request.end_date.isoformat(),
        'reason': request.reason,
        'spoc_name': request.spoc.name,
        'spoc_email': request.spoc.email,
        'status': request.status.value,
        'priority': request.priority.value if request.priority else None,
        'reception_note': request.reception_note,
        'admin_note': request.admin_note,
        'documents': list(request.documents),
        'created_at': timestamp_to_str(request.created_at),
        'updated_at': timestamp_to_str(request.updated_at),
    }


def from_store_row(row: dict) -> BookingRequest:
    priority = row.get('priority')
    return BookingRequest(
        id=row['id'],
        requester_id=row['user_id'],
        requester_name=row.get('requester_name') or '',
        department=row['department'],
        request_type=RequestType(row['request_type']),
        number_of_rooms=row['number_of_rooms'],
        start_date=date_from_str(row['start_date']),
        end_date=date_from_str(row['end_date']),
        reason=row['reason'],
        spoc=Spoc(name=row['spoc_name'], email=row['spoc_email']),
        status=Status(row['status']),
        priority=Priority(priority) if priority else None,
        reception_note=row.get('reception_note'),
        admin_note=row.get('admin_note'),
        documents=list(row.get('documents') or []),
        created_at=timestamp_from_str(row['created_at']),
        updated_at=timestamp_from_str(row['updated_at']),
    )


def new_request_row(principal, new_request, request_id: str, now: datetime) -> dict:
    """Insert row for a freshly submitted request. Status is always pending."""
    request = BookingRequest(
        id=request_id,
        requester_id=principal.id,
        requester_name=principal.name,
        department=new_request.department,
        request_type=new_request.request_type,
        number_of_rooms=new_request.number_of_rooms,
        start_date=new_request.start_date,
        end_date=new_request.end_date,
        reason=new_request.reason,
        spoc=new_request.spoc,
        status=Status.PENDING,
        created_at=now,
        updated_at=now,
    )
    return to_store_row(request)


def to_api_dict(request: BookingRequest) -> dict:
    """JSON shape returned by the API."""
    data = to_store_row(request)
    data.pop('spoc_name')
    data.pop('spoc_email')
    data['requester_id'] = data.pop('user_id')
    data['spoc'] = {'name': request.spoc.name, 'email': request.spoc.email}
    return data
