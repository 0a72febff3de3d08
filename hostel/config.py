import os
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '.env'))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///hostel_booking.db'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Auth
    TOKEN_TTL_HOURS = int(os.environ.get('TOKEN_TTL_HOURS', 24))
    MIN_PASSWORD_LENGTH = 6

    # Business Rules Defaults
    TOTAL_ROOM_CAPACITY = int(os.environ.get('TOTAL_ROOM_CAPACITY', 100))
    MAX_ROOMS_PER_REQUEST = 50
    MIN_REASON_LENGTH = 10

    # Document uploads
    MAX_DOCUMENT_BYTES = 5 * 1024 * 1024  # 5MB
    ALLOWED_DOCUMENT_EXTENSIONS = ('pdf', 'doc', 'docx')
    MAX_DOCUMENTS_PER_UPLOAD = 5
    # Werkzeug answers 413 before the body is read
    MAX_CONTENT_LENGTH = MAX_DOCUMENT_BYTES * MAX_DOCUMENTS_PER_UPLOAD + 1024 * 1024
    BLOB_STORE = os.environ.get('BLOB_STORE', 'local')  # local | http
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(os.getcwd(), 'uploads')
    BLOB_PUBLIC_BASE_URL = os.environ.get('BLOB_PUBLIC_BASE_URL', '/uploads')
    BLOB_STORE_URL = os.environ.get('BLOB_STORE_URL')
    BLOB_STORE_KEY = os.environ.get('BLOB_STORE_KEY')
    BLOB_BUCKET = os.environ.get('BLOB_BUCKET', 'documents')

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    TOTAL_ROOM_CAPACITY = 20
    BLOB_STORE = 'local'

class ProductionConfig(Config):
    DEBUG = False
    # BLOB_STORE=http also needs BLOB_STORE_URL; create_app refuses to start without it
