import uuid
from datetime import datetime

import pytz

from hostel.extensions import db
from hostel.workflow.models import Principal, Role


def _new_id():
    return uuid.uuid4().hex


def _utcnow():
    return datetime.now(pytz.utc)


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='student')  # student, reception, admin
    department = db.Column(db.String(128), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_principal(self):
        return Principal(
            id=self.id,
            email=self.email,
            name=self.name,
            role=Role(self.role),
            department=self.department,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'department': self.department,
        }


class RevokedToken(db.Model):
    """Token ids invalidated by sign-out."""
    __tablename__ = 'revoked_tokens'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
    revoked_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
