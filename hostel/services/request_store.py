import logging
from datetime import datetime

import pytz
from sqlalchemy.exc import SQLAlchemyError

from hostel.exceptions import NotFound, StoreError
from hostel.extensions import db
from hostel.models import BookingRequestRecord
from hostel.workflow.mapping import date_from_str, timestamp_from_str

logger = logging.getLogger(__name__)

DATE_COLUMNS = ('start_date', 'end_date')
TIMESTAMP_COLUMNS = ('created_at', 'updated_at')


def _to_columns(row: dict) -> dict:
    """Parse the ISO strings of a storage row into column values."""
    values = dict(row)
    for key in DATE_COLUMNS:
        if values.get(key) is not None:
            values[key] = date_from_str(values[key])
    for key in TIMESTAMP_COLUMNS:
        if values.get(key) is not None:
            values[key] = timestamp_from_str(values[key])
    return values


class SqlRequestStore:
    """
    Booking request rows in the `booking_requests` table.
    Rows go in and come out as flat dicts (see hostel.workflow.mapping).
    """

    def __init__(self, session=None):
        self.session = session or db.session

    def insert(self, row: dict) -> str:
        try:
            record = BookingRequestRecord(**_to_columns(row))
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to insert booking request: %s", e)
            raise StoreError("Could not save the booking request") from e
        return record.id

    def list_all(self) -> list:
        try:
            records = (
                self.session.query(BookingRequestRecord)
                .order_by(BookingRequestRecord.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Failed to list booking requests: %s", e)
            raise StoreError("Could not load booking requests") from e
        return [r.to_dict() for r in records]

    def get(self, request_id: str) -> dict:
        try:
            record = self.session.get(BookingRequestRecord, request_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load booking request %s: %s", request_id, e)
            raise StoreError("Could not load the booking request") from e
        if record is None:
            raise NotFound(f"Booking request {request_id} not found")
        return record.to_dict()

    def update_fields(self, request_id: str, fields: dict) -> None:
        try:
            record = self.session.get(BookingRequestRecord, request_id)
            if record is None:
                raise NotFound(f"Booking request {request_id} not found")

            values = _to_columns(fields)
            values.pop('id', None)
            values.pop('created_at', None)  # immutable
            for key, value in values.items():
                setattr(record, key, value)
            record.updated_at = datetime.now(pytz.utc)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to update booking request %s: %s", request_id, e)
            raise StoreError("Could not update the booking request") from e
