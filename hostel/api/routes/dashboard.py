from flask import Blueprint, jsonify
from hostel.services.board import RequestBoard
from hostel.services.booking_service import BookingService
from hostel.utils.decorators import token_required
from hostel.workflow.mapping import to_api_dict

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/', methods=['GET'])
@token_required
def dashboard(current_user):
    board = RequestBoard(BookingService.from_app(), current_user).refresh()
    return jsonify({
        'user_requests': [to_api_dict(r) for r in board.user_requests],
        'all_requests': [to_api_dict(r) for r in board.all_requests],
        'stats': board.summary(),
        'stale': board.last_error is not None,
    })
