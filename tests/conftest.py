import uuid
from datetime import date, datetime

import pytest
import pytz

from hostel import create_app, db
from hostel.config import TestingConfig
from hostel.services.auth_service import AuthService
from hostel.workflow.models import (
    BookingRequest,
    Principal,
    RequestType,
    Role,
    Spoc,
    Status,
)


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """Registered accounts, one per role plus a second student."""
    return {
        'student': AuthService.sign_up('Asha Rao', 'asha@bits.ac.in', 'password', 'student', 'Computer Science'),
        'other_student': AuthService.sign_up('Ravi Kumar', 'ravi@bits.ac.in', 'password', 'student', 'Physics'),
        'reception': AuthService.sign_up('Reception Staff', 'reception@bits.ac.in', 'password', 'reception'),
        'admin': AuthService.sign_up('Admin User', 'admin@bits.ac.in', 'password', 'admin'),
    }


@pytest.fixture
def payload():
    return {
        'request_type': 'shared',
        'department': 'Computer Science',
        'number_of_rooms': 2,
        'start_date': '2024-06-01',
        'end_date': '2024-06-05',
        'reason': 'Parents visiting for the convocation ceremony',
        'spoc': {'name': 'Asha Rao', 'email': 'asha@bits.ac.in'},
    }


@pytest.fixture
def principals():
    """Principals that exist only in memory, for the pure workflow functions."""
    return {
        'student': Principal('student-a', 'asha@bits.ac.in', 'Asha Rao', Role.STUDENT, 'Computer Science'),
        'other_student': Principal('student-b', 'ravi@bits.ac.in', 'Ravi Kumar', Role.STUDENT, 'Physics'),
        'reception': Principal('reception-1', 'reception@bits.ac.in', 'Reception Staff', Role.RECEPTION),
        'admin': Principal('admin-1', 'admin@bits.ac.in', 'Admin User', Role.ADMIN),
    }


def _make_request(**overrides):
    created = datetime(2024, 5, 1, 9, 0, tzinfo=pytz.utc)
    values = dict(
        id=uuid.uuid4().hex,
        requester_id='student-a',
        requester_name='Asha Rao',
        department='Computer Science',
        request_type=RequestType.SHARED,
        number_of_rooms=2,
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 5),
        reason='Parents visiting for the convocation ceremony',
        spoc=Spoc('Asha Rao', 'asha@bits.ac.in'),
        status=Status.PENDING,
        created_at=created,
        updated_at=created,
    )
    values.update(overrides)
    return BookingRequest(**values)


@pytest.fixture
def make_request():
    return _make_request
