"""Aggregate views for the dashboards. Recomputed on every read."""
from collections import Counter

from hostel.workflow.models import Priority, Role, Status

# What each role has waiting in its queue
QUEUE_STATUS = {
    Role.RECEPTION: Status.PENDING,
    Role.ADMIN: Status.RECEPTION_APPROVED,
}

# High-priority card: reception also tracks what it already passed on to admin
HIGH_PRIORITY_STATUSES = {
    Role.RECEPTION: (Status.PENDING, Status.RECEPTION_APPROVED),
    Role.ADMIN: (Status.RECEPTION_APPROVED,),
}


def count_by_status(requests) -> dict:
    counts = {s.value: 0 for s in Status}
    for r in requests:
        counts[r.status.value] += 1
    return counts


def count_by_priority(requests) -> dict:
    counts = {p.value: 0 for p in Priority}
    counts['unset'] = 0
    for r in requests:
        counts[r.priority.value if r.priority else 'unset'] += 1
    return counts


def count_by_department(requests) -> dict:
    return dict(Counter(r.department for r in requests))


def approved_rooms(requests) -> int:
    return sum(r.number_of_rooms for r in requests if r.status == Status.APPROVED)


def room_utilization(requests, total_room_capacity: int) -> float:
    if not total_room_capacity:
        return 0.0
    return approved_rooms(requests) / total_room_capacity


def average_processing_time(requests):
    """Mean time between creation and last update of resolved requests, in seconds."""
    durations = [
        (r.updated_at - r.created_at).total_seconds()
        for r in requests if r.is_resolved
    ]
    if not durations:
        return None
    return sum(durations) / len(durations)


def queue_counts(requests, role) -> dict:
    status = QUEUE_STATUS.get(role)
    if status is None:
        return {'waiting': 0, 'high_priority': 0}
    high_statuses = HIGH_PRIORITY_STATUSES[role]
    return {
        'waiting': sum(1 for r in requests if r.status == status),
        'high_priority': sum(
            1 for r in requests if r.priority == Priority.HIGH and r.status in high_statuses
        ),
    }


def summarize(requests, total_room_capacity: int, role=None) -> dict:
    requests = list(requests)
    summary = {
        'total': len(requests),
        'by_status': count_by_status(requests),
        'by_priority': count_by_priority(requests),
        'by_department': count_by_department(requests),
        'approved_rooms': approved_rooms(requests),
        'total_room_capacity': total_room_capacity,
        'room_utilization': room_utilization(requests, total_room_capacity),
        'average_processing_seconds': average_processing_time(requests),
    }
    if role is not None:
        summary['queue'] = queue_counts(requests, role)
    return summary
