import traceback

from flask import Blueprint, request, jsonify, current_app
from werkzeug.exceptions import RequestEntityTooLarge
from hostel.exceptions import BookingError, StoreError
from hostel.services.booking_service import BookingService
from hostel.utils.decorators import token_required
from hostel.workflow.mapping import to_api_dict
from hostel.workflow.models import Role
from hostel.workflow.rules import parse_decision
from hostel.workflow.visibility import filter_requests

requests_bp = Blueprint('booking_requests', __name__)


def _error(e):
    if isinstance(e, StoreError):
        current_app.logger.error(f"Store error: {e.message}")
    return jsonify(e.to_dict()), e.status_code


def _server_error(e):
    current_app.logger.error(f"Unexpected error: {e}\n{traceback.format_exc()}")
    return jsonify({'error': 'Server Error', 'message': str(e)}), 500


@requests_bp.errorhandler(RequestEntityTooLarge)
def too_large(e):
    return jsonify({
        'error': 'UploadError',
        'message': "Upload is too large",
        'max_bytes': current_app.config['MAX_CONTENT_LENGTH'],
    }), 413


@requests_bp.route('/', methods=['POST'])
@token_required
def create_request(current_user):
    data = request.get_json(silent=True)
    try:
        booking = BookingService.from_app().create_request(current_user, data)
        return jsonify({
            'message': 'Your booking request has been submitted successfully',
            'request': to_api_dict(booking),
        }), 201
    except BookingError as e:
        return _error(e)
    except Exception as e:
        return _server_error(e)


@requests_bp.route('/', methods=['GET'])
@token_required
def list_requests(current_user):
    status = request.args.get('status')
    search = request.args.get('q')
    try:
        mine, everything = BookingService.from_app().list_visible(current_user)
        mine = filter_requests(mine, status=status, search=search)
        everything = filter_requests(everything, status=status, search=search)
    except BookingError as e:
        return _error(e)

    return jsonify({
        'mine': [to_api_dict(r) for r in mine],
        'all': [to_api_dict(r) for r in everything],
    })


@requests_bp.route('/<request_id>', methods=['GET'])
@token_required
def get_request(current_user, request_id):
    try:
        booking = BookingService.from_app().get_request(current_user, request_id)
    except BookingError as e:
        return _error(e)
    return jsonify(to_api_dict(booking))


def _decide(current_user, request_id, role):
    try:
        action = parse_decision(role, request.get_json(silent=True))
        booking = BookingService.from_app().operate(current_user, request_id, action)
        return jsonify({
            'message': f"Booking status changed to {booking.status.value}",
            'request': to_api_dict(booking),
        }), 200
    except BookingError as e:
        return _error(e)
    except Exception as e:
        return _server_error(e)


@requests_bp.route('/<request_id>/reception', methods=['POST'])
@token_required
def reception_decision(current_user, request_id):
    return _decide(current_user, request_id, Role.RECEPTION)


@requests_bp.route('/<request_id>/admin', methods=['POST'])
@token_required
def admin_decision(current_user, request_id):
    return _decide(current_user, request_id, Role.ADMIN)


@requests_bp.route('/<request_id>/documents', methods=['POST'])
@token_required
def upload_documents(current_user, request_id):
    uploads = request.files.getlist('documents') or request.files.getlist('document')
    files = [(f.filename, f.read()) for f in uploads]
    try:
        booking = BookingService.from_app().upload_documents(current_user, request_id, files)
        return jsonify({
            'message': 'Your documents have been uploaded successfully',
            'request': to_api_dict(booking),
        }), 200
    except BookingError as e:
        return _error(e)
    except Exception as e:
        return _server_error(e)
