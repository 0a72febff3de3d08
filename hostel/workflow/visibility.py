from hostel.exceptions import ValidationError
from hostel.workflow.models import Role, Status


def can_view(principal, request) -> bool:
    if principal.role in (Role.RECEPTION, Role.ADMIN):
        return True
    return request.requester_id == principal.id


def list_visible(all_requests, principal):
    """
    Split the collection into (mine, everything) for the given principal.
    Students only ever get their own requests; `everything` stays empty for them.
    """
    mine = [r for r in all_requests if r.requester_id == principal.id]
    if principal.role in (Role.RECEPTION, Role.ADMIN):
        return mine, list(all_requests)
    return mine, []


def filter_requests(requests, status=None, search=None):
    """Dashboard filters: exact status and a case-insensitive text search."""
    if status:
        try:
            status = Status(status)
        except ValueError:
            raise ValidationError({'status': f"Unknown status '{status}'"})
        requests = [r for r in requests if r.status == status]
    if search:
        needle = search.lower()
        requests = [
            r for r in requests
            if needle in r.requester_name.lower()
            or needle in r.department.lower()
            or needle in r.reason.lower()
        ]
    return list(requests)
