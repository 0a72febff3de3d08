from datetime import datetime, timedelta

import pytest
import pytz

from hostel.exceptions import ValidationError
from hostel.workflow import stats
from hostel.workflow.models import Priority, Role, Status
from hostel.workflow.visibility import can_view, filter_requests, list_visible


@pytest.fixture
def collection(make_request):
    created = datetime(2024, 5, 1, 9, 0, tzinfo=pytz.utc)
    return [
        make_request(status=Status.PENDING, department='Physics', requester_id='student-b',
                     requester_name='Ravi Kumar'),
        make_request(status=Status.RECEPTION_APPROVED, priority=Priority.HIGH),
        make_request(status=Status.APPROVED, priority=Priority.MEDIUM, number_of_rooms=3,
                     updated_at=created + timedelta(hours=2)),
        make_request(status=Status.APPROVED, priority=Priority.HIGH, number_of_rooms=2,
                     updated_at=created + timedelta(hours=4)),
        make_request(status=Status.REJECTED, priority=Priority.LOW, department='Physics',
                     updated_at=created + timedelta(hours=6)),
    ]


def test_status_counts_sum_to_total(collection):
    counts = stats.count_by_status(collection)
    assert sum(counts.values()) == len(collection)
    assert counts['approved'] == 2
    assert counts['reconsidered'] == 0


def test_status_counts_empty():
    counts = stats.count_by_status([])
    assert set(counts) == {s.value for s in Status}
    assert sum(counts.values()) == 0


def test_priority_and_department_counts(collection):
    assert stats.count_by_priority(collection) == {'low': 1, 'medium': 1, 'high': 2, 'unset': 1}
    assert stats.count_by_department(collection) == {'Physics': 2, 'Computer Science': 3}


def test_room_utilization(collection):
    assert stats.approved_rooms(collection) == 5
    assert stats.room_utilization(collection, 20) == 0.25
    assert stats.room_utilization(collection, 0) == 0.0


def test_average_processing_time_uses_resolved_only(collection):
    assert stats.average_processing_time(collection) == timedelta(hours=4).total_seconds()
    assert stats.average_processing_time(collection[:2]) is None


def test_queue_counts(collection):
    assert stats.queue_counts(collection, Role.RECEPTION) == {'waiting': 1, 'high_priority': 1}
    assert stats.queue_counts(collection, Role.ADMIN) == {'waiting': 1, 'high_priority': 1}
    assert stats.queue_counts(collection, Role.STUDENT) == {'waiting': 0, 'high_priority': 0}


def test_reception_high_priority_spans_both_stages(make_request):
    requests = [
        make_request(status=Status.PENDING, priority=Priority.HIGH),
        make_request(status=Status.RECEPTION_APPROVED, priority=Priority.HIGH),
        make_request(status=Status.APPROVED, priority=Priority.HIGH),
        make_request(status=Status.RECEPTION_APPROVED, priority=Priority.LOW),
    ]
    assert stats.queue_counts(requests, Role.RECEPTION) == {'waiting': 1, 'high_priority': 2}
    assert stats.queue_counts(requests, Role.ADMIN) == {'waiting': 2, 'high_priority': 1}


def test_summarize(collection):
    summary = stats.summarize(collection, 20, role=Role.ADMIN)
    assert summary['total'] == 5
    assert summary['room_utilization'] == 0.25
    assert summary['queue']['waiting'] == 1


def test_students_only_see_their_own(principals, make_request):
    request = make_request(requester_id='student-a')
    mine, everything = list_visible([request], principals['other_student'])
    assert mine == [] and everything == []
    assert not can_view(principals['other_student'], request)

    mine, everything = list_visible([request], principals['student'])
    assert mine == [request] and everything == []


@pytest.mark.parametrize("role", ['reception', 'admin'])
def test_staff_see_everything(principals, make_request, role):
    theirs = make_request(requester_id='student-a')
    own = make_request(requester_id=principals[role].id)
    mine, everything = list_visible([theirs, own], principals[role])
    assert everything == [theirs, own]
    assert mine == [own]
    assert can_view(principals[role], theirs)


def test_filter_by_status_and_search(collection):
    assert len(filter_requests(collection, status='approved')) == 2
    assert len(filter_requests(collection, search='physics')) == 2
    assert len(filter_requests(collection, search='RAVI')) == 1
    assert len(filter_requests(collection, status='rejected', search='physics')) == 1
    assert filter_requests(collection) == collection


def test_filter_unknown_status(collection):
    with pytest.raises(ValidationError):
        filter_requests(collection, status='in review')
