from hostel.models.user import User, RevokedToken
from hostel.models.booking_request import BookingRequestRecord
