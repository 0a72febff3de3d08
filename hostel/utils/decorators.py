from functools import wraps
from flask import request, jsonify
from hostel.services.auth_service import AuthService
from hostel.workflow.models import Role


def get_bearer_token():
    auth_header = request.headers.get('Authorization', '')
    # Bearer <token>
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            return jsonify({'error': 'AuthRequired', 'message': 'Token is missing!'}), 401

        principal = AuthService.current_session(token)
        if principal is None:
            return jsonify({'error': 'AuthRequired', 'message': 'Token is invalid!'}), 401

        return f(principal, *args, **kwargs)

    return decorated


def admin_required(f):
    # Stack below token_required, which passes the principal as the first arg
    @wraps(f)
    def decorated(*args, **kwargs):
        principal = args[0]
        if principal.role != Role.ADMIN:
            return jsonify({'error': 'Forbidden', 'message': 'Admin privilege required'}), 403
        return f(*args, **kwargs)

    return decorated
