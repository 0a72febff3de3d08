from flask import Blueprint, request, jsonify, current_app
from hostel.exceptions import BookingError, ValidationError
from hostel.services.auth_service import AuthService
from hostel.utils.decorators import admin_required, token_required, get_bearer_token
from hostel.workflow.models import Role

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    try:
        # Self-registration only ever creates students; staff come from /users or `flask seed`
        role = data.get('role') or Role.STUDENT.value
        if role != Role.STUDENT.value:
            raise ValidationError({'role': "Staff accounts are created by an administrator"})
        principal = AuthService.sign_up(
            name=data.get('name'),
            email=data.get('email'),
            password=data.get('password'),
            role=Role.STUDENT.value,
            department=data.get('department'),
        )
    except BookingError as e:
        return jsonify(e.to_dict()), e.status_code

    token = AuthService.issue_token(principal)
    return jsonify({'message': 'Account created', 'token': token, 'user': _principal_dict(principal)}), 201


@auth_bp.route('/users', methods=['POST'])
@token_required
@admin_required
def create_user(current_user):
    data = request.get_json(silent=True) or {}
    try:
        principal = AuthService.sign_up(
            name=data.get('name'),
            email=data.get('email'),
            password=data.get('password'),
            role=data.get('role', Role.STUDENT.value),
            department=data.get('department'),
        )
    except BookingError as e:
        return jsonify(e.to_dict()), e.status_code

    current_app.logger.info(f"{current_user.email} created {principal.role.value} account {principal.email}")
    return jsonify({'message': 'User created successfully', 'user': _principal_dict(principal)}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    try:
        principal = AuthService.authenticate(data.get('email'), data.get('password'))
    except BookingError as e:
        current_app.logger.info(f"Failed login for {data.get('email')}")
        return jsonify(e.to_dict()), e.status_code

    token = AuthService.issue_token(principal)
    return jsonify({'token': token, 'user': _principal_dict(principal)})


@auth_bp.route('/logout', methods=['POST'])
@token_required
def logout(current_user):
    AuthService.sign_out(get_bearer_token())
    return jsonify({'message': 'Signed out'}), 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(current_user):
    return jsonify(_principal_dict(current_user))


def _principal_dict(principal):
    return {
        'id': principal.id,
        'name': principal.name,
        'email': principal.email,
        'role': principal.role.value,
        'department': principal.department,
    }
