import logging

from hostel.exceptions import StoreError

logger = logging.getLogger(__name__)


class RequestBoard:
    """
    The request lists a dashboard shows for one principal.

    Holds the last fetched lists; every mutation goes through the service and
    is followed by a full refresh. A store failure during refresh keeps the
    stale lists.
    """

    def __init__(self, service, principal):
        self.service = service
        self.principal = principal
        self.user_requests = []
        self.all_requests = []
        self.is_loading = False
        self.last_error = None

    def refresh(self):
        self.is_loading = True
        try:
            self.user_requests, self.all_requests = self.service.list_visible(self.principal)
            self.last_error = None
        except StoreError as e:
            logger.warning("Could not refresh booking requests for %s: %s", self.principal.email, e)
            self.last_error = e
        finally:
            self.is_loading = False
        return self

    def _mutate(self, operation, *args):
        self.is_loading = True
        try:
            result = operation(self.principal, *args)
        finally:
            self.is_loading = False
        self.refresh()
        return result

    def create(self, data):
        return self._mutate(self.service.create_request, data).id

    def decide(self, request_id, action):
        return self._mutate(self.service.operate, request_id, action)

    def upload(self, request_id, files):
        return self._mutate(self.service.upload_documents, request_id, files)

    def summary(self):
        return self.service.summary(self.principal, self.all_requests or self.user_requests)
