from flask import Blueprint, current_app, send_from_directory

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    return {"status": "ok", "app": "HostelBooking"}


@main_bp.route('/uploads/<path:path>')
def uploaded_file(path):
    # Only used with the local blob store
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], path)
