from hostel.workflow.models import (
    AdminDecision,
    BookingRequest,
    NewBookingRequest,
    Principal,
    Priority,
    ReceptionDecision,
    RequestType,
    Role,
    Spoc,
    Status,
)
