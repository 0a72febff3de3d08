"""Error kinds raised by the booking workflow and its collaborators.

Each error carries the HTTP status the API answers with, so routes can
translate any of them into a JSON response without a lookup table.
"""


class BookingError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_dict(self):
        return {'error': self.__class__.__name__, 'message': self.message}


class ValidationError(BookingError):
    """Invalid input."""
    status_code = 400

    def __init__(self, fields, message=None):
        # fields: {field_name: message}
        self.fields = dict(fields)
        super().__init__(message or '; '.join(f"{k}: {v}" for k, v in self.fields.items()))

    def to_dict(self):
        data = super().to_dict()
        data['fields'] = self.fields
        return data


class AuthRequired(BookingError):
    """Authentication required."""
    status_code = 401


class AuthError(BookingError):
    """Invalid credentials."""
    status_code = 401


class NotFound(BookingError):
    """Booking request not found."""
    status_code = 404


class InvalidTransition(BookingError):
    """Status change not permitted."""
    status_code = 409


class UploadError(BookingError):
    """Document upload failed."""
    status_code = 422


class StoreError(BookingError):
    """Storage backend unavailable."""
    status_code = 503
