from hostel.extensions import db
from hostel.workflow.mapping import timestamp_to_str


class BookingRequestRecord(db.Model):
    __tablename__ = 'booking_requests'

    id = db.Column(db.String(32), primary_key=True)
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    requester_name = db.Column(db.String(128), nullable=False, default='')

    request_type = db.Column(db.String(20), nullable=False)  # single, shared, family, guest
    department = db.Column(db.String(128), nullable=False, index=True)
    number_of_rooms = db.Column(db.Integer, nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    spoc_name = db.Column(db.String(128), nullable=False)
    spoc_email = db.Column(db.String(255), nullable=False)

    status = db.Column(db.String(32), nullable=False, default='pending', index=True)
    priority = db.Column(db.String(10), nullable=True)  # low, medium, high
    reception_note = db.Column(db.Text, nullable=True)
    admin_note = db.Column(db.Text, nullable=True)
    documents = db.Column(db.JSON, default=list)  # list of document URLs

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'requester_name': self.requester_name,
            'department': self.department,
            'request_type': self.request_type,
            'number_of_rooms': self.number_of_rooms,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'reason': self.reason,
            'spoc_name': self.spoc_name,
            'spoc_email': self.spoc_email,
            'status': self.status,
            'priority': self.priority,
            'reception_note': self.reception_note,
            'admin_note': self.admin_note,
            'documents': list(self.documents or []),
            'created_at': timestamp_to_str(self.created_at),
            'updated_at': timestamp_to_str(self.updated_at),
        }
