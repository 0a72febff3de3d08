import logging
import time
import uuid
from datetime import datetime

import pytz
from flask import current_app

from hostel.exceptions import AuthRequired, NotFound, UploadError
from hostel.services.blob_store import get_blob_store
from hostel.services.request_store import SqlRequestStore
from hostel.workflow import stats
from hostel.workflow.mapping import from_store_row, new_request_row
from hostel.workflow.rules import can_upload_documents, plan_transition, validate_new_request
from hostel.workflow.visibility import can_view, list_visible

logger = logging.getLogger(__name__)


def _require(principal):
    if principal is None:
        raise AuthRequired("You must be signed in")
    return principal


class BookingService:
    """
    Booking request operations. Every call takes the acting principal explicitly;
    authorization and transition checks happen here, before anything is written.
    """

    def __init__(self, store, blob_store, config):
        self.store = store
        self.blob_store = blob_store
        self.config = config

    @classmethod
    def from_app(cls, app=None):
        app = app or current_app
        return cls(SqlRequestStore(), get_blob_store(app.config), app.config)

    # --- reads ---

    def list_all(self):
        return [from_store_row(row) for row in self.store.list_all()]

    def list_visible(self, principal):
        """(mine, everything) as seen by the principal."""
        _require(principal)
        return list_visible(self.list_all(), principal)

    def get_request(self, principal, request_id):
        _require(principal)
        request = from_store_row(self.store.get(request_id))
        # Hide requests the caller may not see instead of leaking their existence
        if not can_view(principal, request):
            raise NotFound(f"Booking request {request_id} not found")
        return request

    def summary(self, principal, requests=None):
        _require(principal)
        if requests is None:
            mine, everything = self.list_visible(principal)
            requests = everything or mine
        return stats.summarize(requests, self.config['TOTAL_ROOM_CAPACITY'], role=principal.role)

    # --- writes ---

    def create_request(self, principal, data):
        _require(principal)
        new_request = validate_new_request(
            data,
            max_rooms=self.config['MAX_ROOMS_PER_REQUEST'],
            min_reason_length=self.config['MIN_REASON_LENGTH'],
        )
        row = new_request_row(principal, new_request, uuid.uuid4().hex, datetime.now(pytz.utc))
        request_id = self.store.insert(row)
        logger.info("Booking request %s created by %s (%d rooms, %s)",
                    request_id, principal.email, new_request.number_of_rooms, new_request.department)
        return from_store_row(self.store.get(request_id))

    def operate(self, principal, request_id, action):
        """Apply a reception or admin decision to a request."""
        request = self.get_request(principal, request_id)
        fields = plan_transition(principal, request, action)
        self.store.update_fields(request_id, fields)
        logger.info("Booking request %s: %s -> %s by %s %s",
                    request_id, request.status.value, fields['status'],
                    principal.role.value, principal.email)
        return from_store_row(self.store.get(request_id))

    def validate_document(self, filename, data):
        allowed = self.config['ALLOWED_DOCUMENT_EXTENSIONS']
        ext = filename.rsplit('.', 1)[-1].lower() if filename and '.' in filename else ''
        if ext not in allowed:
            raise UploadError(f"'{filename}' is not an accepted document type ({', '.join(allowed)})")
        if len(data) > self.config['MAX_DOCUMENT_BYTES']:
            max_mb = self.config['MAX_DOCUMENT_BYTES'] // (1024 * 1024)
            raise UploadError(f"'{filename}' is too large. Please select a file smaller than {max_mb}MB.")
        return ext

    def upload_documents(self, principal, request_id, files):
        """
        Store each (filename, bytes) pair under {user_id}/{request_id}/{timestamp}.{ext}
        and append the resulting URLs to the request. Status is left unchanged.
        """
        request = self.get_request(principal, request_id)
        can_upload_documents(principal, request)
        if not files:
            raise UploadError("No document provided")
        max_files = self.config['MAX_DOCUMENTS_PER_UPLOAD']
        if len(files) > max_files:
            raise UploadError(f"At most {max_files} documents can be uploaded at once")

        # Check every file before anything is sent to the blob store
        extensions = [self.validate_document(name, data) for name, data in files]

        stamp = int(time.time() * 1000)
        urls = []
        for offset, ((_, data), ext) in enumerate(zip(files, extensions)):
            path = f"{principal.id}/{request_id}/{stamp + offset}.{ext}"
            urls.append(self.blob_store.upload(path, data))

        self.store.update_fields(request_id, {'documents': list(request.documents) + urls})
        logger.info("Uploaded %d document(s) for booking request %s", len(urls), request_id)
        return from_store_row(self.store.get(request_id))
