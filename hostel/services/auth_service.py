import logging
import uuid
from datetime import datetime, timedelta

import jwt
import pytz
from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from hostel.exceptions import AuthError, ValidationError
from hostel.extensions import db
from hostel.models import User, RevokedToken
from hostel.workflow.models import Role
from hostel.workflow.rules import is_valid_email

logger = logging.getLogger(__name__)


class AuthService:

    @staticmethod
    def sign_up(name, email, password, role='student', department=None):
        """Create an account and return its Principal."""
        errors = {}
        name = (name or '').strip()
        email = (email or '').strip().lower()
        if len(name) < 2:
            errors['name'] = "Name is required"
        if not is_valid_email(email):
            errors['email'] = "Please enter a valid email address"
        elif User.query.filter_by(email=email).first():
            errors['email'] = "Email already exists"
        min_length = current_app.config['MIN_PASSWORD_LENGTH']
        if not password or len(password) < min_length:
            errors['password'] = f"Password must be at least {min_length} characters"
        if role not in [r.value for r in Role]:
            errors['role'] = "Role must be one of: student, reception, admin"
        if errors:
            raise ValidationError(errors)

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            department=department,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError({'email': "Email already exists"})
        logger.info("Registered %s user %s", role, email)
        return user.to_principal()

    @staticmethod
    def authenticate(email, password):
        user = User.query.filter_by(email=(email or '').strip().lower()).first()
        if not user or not password or not check_password_hash(user.password_hash, password):
            raise AuthError("Invalid credentials")
        return user.to_principal()

    @staticmethod
    def issue_token(principal):
        ttl = current_app.config['TOKEN_TTL_HOURS']
        return jwt.encode({
            'user_id': principal.id,
            'jti': uuid.uuid4().hex,
            'exp': datetime.now(pytz.utc) + timedelta(hours=ttl)
        }, current_app.config['SECRET_KEY'], algorithm="HS256")

    @staticmethod
    def _decode(token):
        return jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=["HS256"])

    @staticmethod
    def current_session(token):
        """Principal for a bearer token, or None if it is missing, invalid, expired or revoked."""
        if not token:
            return None
        try:
            data = AuthService._decode(token)
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            return None

        if not data.get('user_id') or RevokedToken.query.filter_by(jti=data.get('jti')).first():
            return None

        user = db.session.get(User, data['user_id'])
        if not user:
            return None
        return user.to_principal()

    @staticmethod
    def sign_out(token):
        try:
            data = AuthService._decode(token)
        except jwt.InvalidTokenError:
            return False
        jti = data.get('jti')
        if not jti or RevokedToken.query.filter_by(jti=jti).first():
            return False
        db.session.add(RevokedToken(jti=jti))
        db.session.commit()
        return True
