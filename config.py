import os

DEFAULT_DATABASE_URL = 'sqlite:///mepad.db'

DEFAULT_ALLOWED_ORIGINS = [
    'http://localhost:5173',  # Vite dev server
    'http://localhost:3000',
    'https://me-pad-fronted.vercel.app',
]


def _database_url():
    # Relative SQLite paths land in the app's instance/ folder
    url = os.environ.get('DATABASE_URL', DEFAULT_DATABASE_URL)
    # Handle PostgreSQL URL format for SQLAlchemy 2.0+
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _allowed_origins():
    raw = os.environ.get('CORS_ALLOWED_ORIGINS')
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


class Config:
    """Settings read from the environment once, when the app is created."""

    def __init__(self):
        self.SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
        self.SQLALCHEMY_DATABASE_URI = _database_url()
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False

        self.CORS_ALLOWED_ORIGINS = _allowed_origins()
        self.BASE_URL = os.environ.get('BASE_URL', 'http://localhost:5173')
        self.PORT = int(os.environ.get('PORT', '5000'))
        self.LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

        # Bearer tokens and invitations both live for 30 days
        self.TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', str(60 * 60 * 24 * 30)))
        self.INVITATION_TTL_DAYS = int(os.environ.get('INVITATION_TTL_DAYS', '30'))

        # Flask-Mail; an empty MAIL_SERVER puts the mailer in simulation mode
        self.MAIL_SERVER = os.environ.get('MAIL_SERVER', '')
        self.MAIL_PORT = int(os.environ.get('MAIL_PORT', '587'))
        self.MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
        self.MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
        self.MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
        self.MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'MePad <no-reply@mepad.app>')

        # Generative text API used by the assistant proxy
        self.GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY', '')
        self.GEMINI_API_URL = os.environ.get('GEMINI_API_URL', 'https://generativelanguage.googleapis.com/v1beta')
        self.GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'models/gemini-1.5-pro')


class TestConfig(Config):
    """In-memory database, no outbound mail or AI calls."""

    def __init__(self):
        super().__init__()
        self.TESTING = True
        self.SECRET_KEY = 'test-secret-key'
        self.SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
        self.MAIL_SERVER = ''
        self.GEMINI_API_KEY = ''
        self.BASE_URL = 'http://testserver'
