"""Validation and the request status state machine.

Everything here is a pure function of its arguments: the caller supplies the
principal and the current request, and gets back either a validated value,
a partial row update, or an exception.
"""
import re
from datetime import date, datetime

from hostel.exceptions import InvalidTransition, ValidationError
from hostel.workflow.models import (
    AdminDecision,
    NewBookingRequest,
    Priority,
    ReceptionDecision,
    RequestType,
    Role,
    Spoc,
    Status,
)

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

MAX_ROOMS = 50
MIN_REASON_LENGTH = 10

# (from, actor, decision) -> to
TRANSITIONS = {
    (Status.PENDING, Role.RECEPTION, 'approve'): Status.RECEPTION_APPROVED,
    (Status.PENDING, Role.RECEPTION, 'reject'): Status.REJECTED,
    (Status.RECEPTION_APPROVED, Role.ADMIN, 'approve'): Status.APPROVED,
    (Status.RECEPTION_APPROVED, Role.ADMIN, 'reconsider'): Status.RECONSIDERED,
}

RECEPTION_DECISIONS = ('approve', 'reject')
ADMIN_DECISIONS = ('approve', 'reconsider')


def is_valid_email(value) -> bool:
    return isinstance(value, str) and bool(EMAIL_RE.match(value.strip()))


def parse_date(value):
    """Accept a date, a datetime, or an ISO-8601 string. Returns None when unparsable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        if 'T' in value:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _text(value):
    return value.strip() if isinstance(value, str) else ''


def _parse_rooms(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def validate_new_request(data: dict, max_rooms: int = MAX_ROOMS,
                         min_reason_length: int = MIN_REASON_LENGTH) -> NewBookingRequest:
    """
    Check a raw creation payload and build a NewBookingRequest.
    All problems are collected and raised together as one ValidationError.
    A caller-supplied status is ignored.
    """
    if not isinstance(data, dict):
        raise ValidationError({'body': 'Request body must be a JSON object'})

    errors = {}

    try:
        request_type = RequestType(data.get('request_type'))
    except ValueError:
        request_type = None
        allowed = ', '.join(t.value for t in RequestType)
        errors['request_type'] = f"Request type must be one of: {allowed}"

    department = _text(data.get('department'))
    if len(department) < 2:
        errors['department'] = "Department is required"

    rooms = _parse_rooms(data.get('number_of_rooms'))
    if rooms is None:
        errors['number_of_rooms'] = "Number of rooms must be a whole number"
    elif rooms < 1:
        errors['number_of_rooms'] = "At least 1 room is required"
    elif rooms > max_rooms:
        errors['number_of_rooms'] = f"Maximum {max_rooms} rooms allowed"

    start = parse_date(data.get('start_date'))
    end = parse_date(data.get('end_date'))
    if start is None:
        errors['start_date'] = "Start date is required (YYYY-MM-DD)"
    if end is None:
        errors['end_date'] = "End date is required (YYYY-MM-DD)"
    if start and end and end <= start:
        errors['end_date'] = "End date must be after start date"

    reason = _text(data.get('reason'))
    if len(reason) < min_reason_length:
        errors['reason'] = "Please provide a detailed reason for booking"

    spoc_data = data.get('spoc') or {}
    if not isinstance(spoc_data, dict):
        spoc_data = {}
    spoc_name = _text(spoc_data.get('name'))
    spoc_email = _text(spoc_data.get('email'))
    if len(spoc_name) < 2:
        errors['spoc.name'] = "SPOC name is required"
    if not is_valid_email(spoc_email):
        errors['spoc.email'] = "Please enter a valid email address"

    if errors:
        raise ValidationError(errors)

    return NewBookingRequest(
        request_type=request_type,
        department=department,
        number_of_rooms=rooms,
        start_date=start,
        end_date=end,
        reason=reason,
        spoc=Spoc(name=spoc_name, email=spoc_email),
    )


def parse_decision(role: Role, data: dict):
    """Build the decision type the given role is allowed to send."""
    if not isinstance(data, dict):
        raise ValidationError({'body': 'Request body must be a JSON object'})

    decision = data.get('decision')
    note = data.get('note')
    if note is not None and not isinstance(note, str):
        raise ValidationError({'note': 'Note must be text'})

    if role == Role.RECEPTION:
        if decision not in RECEPTION_DECISIONS:
            raise ValidationError({'decision': "Decision must be 'approve' or 'reject'"})
        priority = data.get('priority')
        if priority is not None:
            try:
                priority = Priority(priority)
            except ValueError:
                raise ValidationError({'priority': "Priority must be one of: low, medium, high"})
        return ReceptionDecision(decision=decision, note=note, priority=priority)

    if role == Role.ADMIN:
        if decision not in ADMIN_DECISIONS:
            raise ValidationError({'decision': "Decision must be 'approve' or 'reconsider'"})
        return AdminDecision(decision=decision, note=note)

    raise InvalidTransition(f"Role '{role.value}' cannot decide on booking requests")


def plan_transition(principal, request, action) -> dict:
    """
    Return the partial row update for applying `action` to `request`.
    Raises InvalidTransition when the actor or the current status does not allow it.
    """
    if not isinstance(action, (ReceptionDecision, AdminDecision)):
        raise InvalidTransition("Unknown action")

    if principal.role != action.role:
        raise InvalidTransition(
            f"Role '{principal.role.value}' cannot send a {action.role.value} decision"
        )

    target = TRANSITIONS.get((request.status, principal.role, action.decision))
    if target is None:
        raise InvalidTransition(
            f"Cannot {action.decision} a request that is '{request.status.value}'"
        )

    if isinstance(action, ReceptionDecision) and action.decision == 'approve' and action.priority is None:
        raise ValidationError({'priority': "Priority is required to approve a request"})

    fields = {'status': target.value}
    if action.note:
        fields[action.note_field] = action.note
    if isinstance(action, ReceptionDecision) and action.priority is not None:
        fields['priority'] = action.priority.value
    return fields


def can_upload_documents(principal, request):
    """Documents may only be attached by the requester once the request is approved."""
    if request.requester_id != principal.id:
        raise InvalidTransition("Only the requester can upload documents")
    if request.status != Status.APPROVED:
        raise InvalidTransition("Documents can only be uploaded once the request is approved")
    return True
